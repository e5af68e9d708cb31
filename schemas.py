import datetime as dt
from enum import Enum
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# 🔹 입력 데이터 (Supabase 테이블 row 형태)

class Store(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    owner_id: Optional[str] = None
    store_name: Optional[str] = None
    time_slot_minutes: Optional[int] = None


class Employee(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    name: str
    hourly_wage: int
    store_id: Optional[int] = None
    position: Optional[str] = None
    is_active: bool = True
    dependents: int = 1  # 부양가족 수 (소득세 계산용)


class BreakPeriod(BaseModel):
    start: str
    end: str


class EmployeeShift(BaseModel):
    model_config = ConfigDict(extra="ignore")

    start_time: Optional[str] = None
    end_time: Optional[str] = None
    break_periods: List[BreakPeriod] = Field(default_factory=list)


class DayTemplate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    is_open: bool = False
    employees: Dict[str, EmployeeShift] = Field(default_factory=dict)  # 키: 직원 id 문자열


class WeeklyTemplate(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: int
    store_id: Optional[int] = None
    template_name: Optional[str] = None
    schedule_data: Dict[str, DayTemplate] = Field(default_factory=dict)  # 키: "monday" ~ "sunday"
    is_active: bool = True


class ExceptionType(str, Enum):
    CANCEL = "CANCEL"      # 휴무
    OVERRIDE = "OVERRIDE"  # 시간 변경
    EXTRA = "EXTRA"        # 추가 근무


class ScheduleException(BaseModel):
    model_config = ConfigDict(extra="ignore")

    id: Optional[int] = None
    store_id: Optional[int] = None
    employee_id: Optional[int] = None
    template_id: Optional[int] = None
    date: dt.date
    exception_type: ExceptionType
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("exception_type", mode="before")
    @classmethod
    def accept_additional_alias(cls, value):
        # 예외사항 등록 화면은 추가 근무를 "ADDITIONAL"로 저장함
        if isinstance(value, str) and value.upper() == "ADDITIONAL":
            return ExceptionType.EXTRA
        return value


# 🔹 계산 결과

class WorkHoursResult(BaseModel):
    total_hours: float
    regular_hours: float
    overtime_hours: float
    night_hours: float
    is_night_shift: bool


class MonthlySalaryResult(BaseModel):
    gross_salary: int           # 세전 월급
    total_working_hours: float  # 월 총 근무시간 (주휴시간 포함)
    holiday_hours: float        # 월 주휴시간


class EmployeeInsurance(BaseModel):
    national_pension: int
    health_insurance: int
    long_term_care: int
    employment: int
    total: int


class EmployerInsurance(BaseModel):
    national_pension: int
    health_insurance: int
    long_term_care: int
    employment: int
    employment_stability: int
    workers_compensation: int
    total: int


class InsuranceResult(BaseModel):
    employee: EmployeeInsurance
    employer: EmployerInsurance


class IncomeTaxResult(BaseModel):
    income_tax: int  # 근로소득세
    local_tax: int   # 지방소득세


class NetSalaryResult(BaseModel):
    gross_salary: int
    employee_insurance: int
    income_tax: int
    local_tax: int
    total_deductions: int
    net_salary: int  # 실수령액 (0 미만으로 내려가지 않음)


class EmployerCostResult(BaseModel):
    gross_salary: int
    employer_insurance: int
    total_cost: int


class ShiftPayResult(BaseModel):
    regular_pay: int
    overtime_pay: int
    night_pay: int
    holiday_pay: int
    total_pay: int
    is_eligible_for_holiday_pay: bool


class DaySchedule(BaseModel):
    day: str       # "monday" ~ "sunday"
    day_name: str  # "월요일" ~ "일요일"
    date: dt.date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    break_time: int = 0  # 휴게시간 (분)
    work_hours: float = 0.0
    has_exception: bool = False
    exception_type: Optional[ExceptionType] = None
    original_hours: Optional[float] = None  # 예외 적용 전 근무시간


class EmployeeWorkSchedule(BaseModel):
    employee_id: int
    employee_name: str
    hourly_wage: int
    days: List[DaySchedule]
    weekly_hours: float
    monthly_hours: float
    exceptions: List[ScheduleException] = Field(default_factory=list)


class ExceptionAdjustment(BaseModel):
    date: dt.date
    type: ExceptionType
    original_hours: float
    adjusted_hours: float
    hours_difference: float
    pay_difference: int


class PayrollCalculationResult(BaseModel):
    employee: Employee
    base_schedule: EmployeeWorkSchedule
    final_schedule: EmployeeWorkSchedule
    monthly_salary: MonthlySalaryResult
    net_salary: NetSalaryResult
    insurance: InsuranceResult
    total_pay: int  # 세전 월급 + 예외사항 조정액
    exception_adjustments: List[ExceptionAdjustment]


class MonthlyPayrollSummary(BaseModel):
    store: Optional[Store] = None
    template: WeeklyTemplate
    year: int
    month: int
    employees: List[PayrollCalculationResult]
    total_employees: int
    total_base_pay: int
    total_exception_adjustments: int
    total_final_pay: int


# 🔹 API 요청 바디

class ShiftInput(BaseModel):
    start_time: str
    end_time: str
    break_minutes: int = Field(0, ge=0)


class ShiftPayInput(BaseModel):
    hourly_wage: int = Field(..., gt=0)
    shifts: List[ShiftInput]


class PayrollPreviewInput(BaseModel):
    """Supabase를 거치지 않고 직원/템플릿/예외사항을 직접 넘겨서 계산"""
    store: Optional[Store] = None
    template: WeeklyTemplate
    employees: List[Employee]
    exceptions: List[ScheduleException] = Field(default_factory=list)
    year: int = Field(..., ge=1)
    month: int = Field(..., ge=1, le=12)
