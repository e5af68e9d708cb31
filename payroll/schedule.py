"""주간 템플릿 → 월간 스케줄 생성, 예외사항(휴무/시간변경/추가근무) 적용

기본 스케줄은 템플릿에서 한 번 만들고, 최종 스케줄은 기본 스케줄을 깊은 복사한 뒤
예외사항을 적용해서 만든다. 기본 스케줄은 절대 수정하지 않으므로
original_hours와 비교해서 예외사항별 급여 조정액을 계산할 수 있다.
"""

import calendar
import datetime as dt
import logging
from decimal import Decimal
from typing import Iterable, List, Optional

from payroll.calculator import calculate_work_hours, parse_minutes, round_hours, round_won, to_decimal
from payroll.errors import ConfigurationError, DuplicateExceptionError
from payroll.rates import PayrollRates, get_rates
from schemas import (
    BreakPeriod,
    DaySchedule,
    Employee,
    EmployeeWorkSchedule,
    ExceptionAdjustment,
    ExceptionType,
    ScheduleException,
    WeeklyTemplate,
)

logger = logging.getLogger(__name__)

DAY_KEYS = ["monday", "tuesday", "wednesday", "thursday", "friday", "saturday", "sunday"]
DAY_NAMES = ["월요일", "화요일", "수요일", "목요일", "금요일", "토요일", "일요일"]

POLICY_ORDERED = "ordered"
POLICY_REJECT = "reject"


def generate_month_dates(year: int, month: int) -> List[dt.date]:
    """해당 월의 모든 날짜"""
    days_in_month = calendar.monthrange(year, month)[1]
    return [dt.date(year, month, day) for day in range(1, days_in_month + 1)]


def calculate_break_minutes(break_periods: Iterable[BreakPeriod]) -> int:
    """휴게시간 구간들의 총 분. 종료가 시작보다 같거나 이르면 자정을 넘긴 것으로 봄"""
    total = 0
    for period in break_periods:
        start = parse_minutes(period.start)
        end = parse_minutes(period.end)
        if end <= start:
            end += 24 * 60
        total += end - start
    return total


def _summarize_hours(days: List[DaySchedule], rates: PayrollRates) -> tuple[float, float]:
    monthly = sum((to_decimal(day.work_hours) for day in days), Decimal("0"))
    weekly = monthly / rates.monthly_average_weeks
    return round_hours(weekly), round_hours(monthly)


#step1. 기본 스케줄 생성 (템플릿 기반)

"""코드 요약:
해당 월의 날짜마다 요일 키("monday" 등)로 템플릿을 찾고,
그 요일이 영업일이고 직원의 근무 시간이 등록되어 있으면 휴게시간을 빼고 근무시간 계산
주간 근무시간 = 월 근무시간 합계 / 4.345"""

def build_base_schedule(
    employee: Employee,
    template: WeeklyTemplate,
    year: int,
    month: int,
    rates: Optional[PayrollRates] = None,
) -> EmployeeWorkSchedule:
    rates = rates or get_rates()
    employee_key = str(employee.id)
    days = []

    for date in generate_month_dates(year, month):
        index = date.weekday()
        day_key = DAY_KEYS[index]
        day_data = template.schedule_data.get(day_key)

        start_time = end_time = None
        break_time = 0
        work_hours = 0.0

        shift = day_data.employees.get(employee_key) if day_data and day_data.is_open else None
        if shift and shift.start_time and shift.end_time:
            start_time = shift.start_time
            end_time = shift.end_time
            break_time = calculate_break_minutes(shift.break_periods)
            work_hours = calculate_work_hours(start_time, end_time, break_time, rates).total_hours
            if work_hours < 0:
                logger.warning(
                    "직원 %s %s: 휴게시간(%s분)이 근무시간보다 길어 0시간으로 처리",
                    employee.id, date, break_time,
                )
                work_hours = 0.0

        days.append(DaySchedule(
            day=day_key,
            day_name=DAY_NAMES[index],
            date=date,
            start_time=start_time,
            end_time=end_time,
            break_time=break_time,
            work_hours=work_hours,
            original_hours=work_hours,
        ))

    weekly_hours, monthly_hours = _summarize_hours(days, rates)
    return EmployeeWorkSchedule(
        employee_id=employee.id,
        employee_name=employee.name,
        hourly_wage=employee.hourly_wage,
        days=days,
        weekly_hours=weekly_hours,
        monthly_hours=monthly_hours,
    )


#step2. 예외사항 적용

"""코드 요약:
CANCEL   → 근무시간 0, 시작/종료 시간 비움
OVERRIDE → 시작/종료 시간을 예외사항 값으로 바꾸고 기존 휴게시간으로 근무시간 재계산
EXTRA    → 예외사항 시간(휴게 없음)만큼 근무시간에 더함. 화면에 보이는 시작/종료 시간은 그대로

같은 날 예외사항이 여러 개면 ordered 정책은 목록 순서대로 적용(EXTRA는 누적),
reject 정책은 DuplicateExceptionError"""

def _check_duplicates(exceptions: List[ScheduleException]) -> None:
    seen = set()
    for exception in exceptions:
        key = (exception.employee_id, exception.date)
        if key in seen:
            raise DuplicateExceptionError(exception.employee_id, exception.date)
        seen.add(key)


def _apply_exception(day: DaySchedule, exception: ScheduleException, rates: PayrollRates) -> None:
    day.has_exception = True
    day.exception_type = exception.exception_type

    if exception.exception_type == ExceptionType.CANCEL:
        day.work_hours = 0.0
        day.start_time = None
        day.end_time = None
        return

    if not (exception.start_time and exception.end_time):
        logger.warning(
            "%s 예외사항(%s)에 시작/종료 시간이 없어 근무시간을 유지함",
            exception.exception_type.value, exception.date,
        )
        return

    if exception.exception_type == ExceptionType.OVERRIDE:
        day.start_time = exception.start_time
        day.end_time = exception.end_time
        hours = calculate_work_hours(exception.start_time, exception.end_time, day.break_time, rates).total_hours
        day.work_hours = max(hours, 0.0)
    elif exception.exception_type == ExceptionType.EXTRA:
        extra = calculate_work_hours(exception.start_time, exception.end_time, 0, rates).total_hours
        day.work_hours = round_hours(to_decimal(day.work_hours) + to_decimal(extra))


def apply_exceptions(
    base_schedule: EmployeeWorkSchedule,
    exceptions: List[ScheduleException],
    rates: Optional[PayrollRates] = None,
    policy: str = POLICY_ORDERED,
) -> EmployeeWorkSchedule:
    rates = rates or get_rates()
    if policy == POLICY_REJECT:
        _check_duplicates(exceptions)
    elif policy != POLICY_ORDERED:
        raise ConfigurationError(f"알 수 없는 중복 예외사항 정책: {policy}")

    final_schedule = base_schedule.model_copy(deep=True)
    final_schedule.exceptions = list(exceptions)
    days_by_date = {day.date: day for day in final_schedule.days}

    for exception in exceptions:
        day = days_by_date.get(exception.date)
        if day is None:
            logger.warning(
                "직원 %s: %s 예외사항이 해당 월 범위 밖이라 무시함",
                base_schedule.employee_id, exception.date,
            )
            continue
        _apply_exception(day, exception, rates)

    # 재계산
    final_schedule.weekly_hours, final_schedule.monthly_hours = _summarize_hours(final_schedule.days, rates)
    return final_schedule


#step3. 예외사항으로 인한 급여 조정 계산

def calculate_exception_adjustments(
    final_schedule: EmployeeWorkSchedule,
    hourly_wage: int,
) -> List[ExceptionAdjustment]:
    adjustments = []
    for day in final_schedule.days:
        if not day.has_exception:
            continue

        original_hours = day.original_hours or 0.0
        hours_difference = to_decimal(day.work_hours) - to_decimal(original_hours)

        adjustments.append(ExceptionAdjustment(
            date=day.date,
            type=day.exception_type,
            original_hours=original_hours,
            adjusted_hours=day.work_hours,
            hours_difference=round_hours(hours_difference),
            pay_difference=round_won(hours_difference * hourly_wage),
        ))
    return adjustments
