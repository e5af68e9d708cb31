"""
Shift Payroll API - Test Configuration

Pytest fixtures shared by the engine and API tests.
June 2025 starts on a Sunday: 5 Mondays, 4 Wednesdays, 4 Fridays, 4 Saturdays.
"""

import datetime as dt

import pytest

from payroll.rates import RATES_2025
from schemas import Employee, ScheduleException, Store, WeeklyTemplate


LUNCH = [{"start": "12:00", "end": "13:00"}]


@pytest.fixture
def rates():
    return RATES_2025


@pytest.fixture
def store():
    return Store(id=1, owner_id="owner-1", store_name="강남점", time_slot_minutes=30)


@pytest.fixture
def template():
    """직원 1: 월/수/금 09:00-18:00 (점심 1시간), 직원 2: 토 22:00-06:00"""
    day_shift = {"start_time": "09:00", "end_time": "18:00", "break_periods": LUNCH}
    return WeeklyTemplate.model_validate({
        "id": 10,
        "store_id": 1,
        "template_name": "기본 주간 템플릿",
        "schedule_data": {
            "monday": {"is_open": True, "employees": {"1": day_shift}},
            # 휴무일에 등록된 근무는 무시되어야 함
            "tuesday": {"is_open": False, "employees": {"1": day_shift}},
            "wednesday": {"is_open": True, "employees": {"1": day_shift}},
            "friday": {"is_open": True, "employees": {"1": day_shift}},
            "saturday": {"is_open": True, "employees": {"2": {"start_time": "22:00", "end_time": "06:00"}}},
            "sunday": {"is_open": False, "employees": {}},
        },
    })


@pytest.fixture
def employees():
    return [
        Employee(id=1, name="김민수", hourly_wage=10030, store_id=1),
        Employee(id=2, name="이서연", hourly_wage=12000, store_id=1),
        Employee(id=3, name="박지훈", hourly_wage=11000, store_id=1, is_active=False),
    ]


@pytest.fixture
def exceptions():
    """직원 1의 6월 예외사항: 월요일 휴무, 수요일 시간 변경, 토요일 추가 근무"""
    return [
        ScheduleException(id=1, store_id=1, employee_id=1, date=dt.date(2025, 6, 2), exception_type="CANCEL"),
        ScheduleException(
            id=2, store_id=1, employee_id=1, date=dt.date(2025, 6, 4),
            exception_type="OVERRIDE", start_time="10:00", end_time="20:00",
        ),
        ScheduleException(
            id=3, store_id=1, employee_id=1, date=dt.date(2025, 6, 7),
            exception_type="EXTRA", start_time="10:00", end_time="14:00",
        ),
    ]


class StubRepository:
    """Supabase 조회 함수와 같은 이름을 가진 메모리 저장소"""

    def __init__(self, store=None, template=None, employees=None, exceptions=None):
        self.store = store
        self.template = template
        self.employees = employees or []
        self.exceptions = exceptions or []
        self.calls = []

    def get_store_by_id(self, store_id):
        self.calls.append(("store", store_id))
        return self.store

    def get_template_by_id(self, template_id):
        self.calls.append(("template", template_id))
        return self.template

    def get_store_employees(self, store_id):
        self.calls.append(("employees", store_id))
        return self.employees

    def get_monthly_exceptions(self, store_id, year, month):
        self.calls.append(("exceptions", store_id, year, month))
        return self.exceptions


@pytest.fixture
def repository(store, template, employees, exceptions):
    return StubRepository(store, template, employees, exceptions)
