"""급여 계산 엔진 (한국 노동법 기준)

근무시간 → 주휴시간 → 세전 월급 → 4대보험 → 소득세 → 실수령액 / 사업주 부담 비용
순서로 이어지는 순수 계산 함수 모음. 요율은 payroll.rates 요율표에서 가져온다.

금액은 Decimal로 계산한 뒤 원 단위 정수로, 시간은 소수점 둘째 자리로 반올림한다
(사사오입, 0에서 먼 쪽으로).
"""

import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from payroll.errors import InvalidTimeFormatError
from payroll.rates import PayrollRates, get_rates
from schemas import (
    EmployeeInsurance,
    EmployerCostResult,
    EmployerInsurance,
    IncomeTaxResult,
    InsuranceResult,
    MonthlySalaryResult,
    NetSalaryResult,
    WorkHoursResult,
)

logger = logging.getLogger(__name__)

Number = Union[int, float, Decimal]

MINUTES_PER_DAY = 24 * 60


def to_decimal(value: Number) -> Decimal:
    if isinstance(value, Decimal):
        return value
    # float은 repr 문자열을 거쳐야 0.1 같은 값이 그대로 들어감
    return Decimal(str(value))


def round_hours(value: Number) -> float:
    """시간 값을 소수점 둘째 자리로 반올림"""
    return float(to_decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def round_won(value: Number) -> int:
    """금액을 원 단위 정수로 반올림"""
    return int(to_decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


#step1. 근무시간 계산

"""코드 요약:
→ "HH:mm" 문자열 startTime, endTime과 휴게시간(분)을 받아 총/정규/연장/야간 근무시간 계산
종료시간이 시작시간보다 같거나 이르면 자정을 넘긴 근무로 보고 24시간을 더함
정규시간은 하루 8시간까지, 초과분은 연장시간"""

def parse_minutes(value: str) -> int:
    """"HH:mm" (또는 Supabase time 컬럼의 "HH:mm:ss") → 자정 기준 분"""
    if not isinstance(value, str):
        raise InvalidTimeFormatError(value)
    for fmt in ("%H:%M", "%H:%M:%S"):
        try:
            parsed = datetime.strptime(value.strip(), fmt)
        except ValueError:
            continue
        return parsed.hour * 60 + parsed.minute
    raise InvalidTimeFormatError(value)


def shift_span(start_time: str, end_time: str) -> tuple[int, int]:
    start_minutes = parse_minutes(start_time)
    end_minutes = parse_minutes(end_time)

    # 자정 넘긴 경우 처리
    if end_minutes <= start_minutes:
        end_minutes += MINUTES_PER_DAY

    return start_minutes, end_minutes


def calculate_night_minutes(start_minutes: int, end_minutes: int, rates: PayrollRates) -> int:
    """[start, end) 구간과 야간 구간(22:00~24:00, 다음날 00:00~06:00)이 겹치는 분"""
    windows = (
        (rates.night_start_hour * 60, MINUTES_PER_DAY),
        (MINUTES_PER_DAY, MINUTES_PER_DAY + rates.night_end_hour * 60),
    )
    night_minutes = 0
    for window_start, window_end in windows:
        overlap = min(end_minutes, window_end) - max(start_minutes, window_start)
        night_minutes += max(overlap, 0)
    return night_minutes


def calculate_work_hours(
    start_time: str,
    end_time: str,
    break_minutes: int = 0,
    rates: Optional[PayrollRates] = None,
) -> WorkHoursResult:
    """
    근무시간 계산 (야간 근무 지원)

    휴게시간이 근무시간보다 길면 total_hours가 음수가 될 수 있음.
    스케줄 쪽에서 0으로 보정해서 사용한다.
    """
    rates = rates or get_rates()
    start_minutes, end_minutes = shift_span(start_time, end_time)

    total_hours = Decimal(end_minutes - start_minutes - break_minutes) / 60
    regular_hours = min(total_hours, rates.regular_hours_limit)
    overtime_hours = max(total_hours - rates.regular_hours_limit, Decimal("0"))

    night_hours = Decimal(calculate_night_minutes(start_minutes, end_minutes, rates)) / 60

    return WorkHoursResult(
        total_hours=round_hours(total_hours),
        regular_hours=round_hours(regular_hours),
        overtime_hours=round_hours(overtime_hours),
        night_hours=round_hours(night_hours),
        is_night_shift=night_hours > 0,
    )


#step2. 주휴수당 대상 여부 / 주휴시간 계산

"""코드 요약:
주 15시간 이상 근무하면 주휴수당 대상
주휴시간 = 주 40시간 이상이면 8시간, 15~40시간이면 (주간 근무시간 / 40) × 8 로 비례"""

def is_eligible_for_holiday_pay(weekly_hours: Number, rates: Optional[PayrollRates] = None) -> bool:
    rates = rates or get_rates()
    return to_decimal(weekly_hours) >= rates.holiday_pay_eligibility_hours


def _holiday_hours(weekly_hours: Decimal, rates: PayrollRates) -> Decimal:
    if weekly_hours < rates.holiday_pay_eligibility_hours:
        return Decimal("0")
    if weekly_hours >= rates.full_time_weekly_hours:
        return rates.holiday_credit_hours
    return weekly_hours / rates.full_time_weekly_hours * rates.holiday_credit_hours


def calculate_holiday_hours(weekly_hours: Number, rates: Optional[PayrollRates] = None) -> float:
    rates = rates or get_rates()
    return float(_holiday_hours(to_decimal(weekly_hours), rates))


#step3. 월급 계산 (세전)

"""코드 요약:
월 소정근로시간 = (주 근무시간 + 주휴시간) × 4.345 (월 평균 주 수)
세전 월급 = 월 소정근로시간 × 시급, 원 단위 반올림
4.345는 달력 기준 정확한 값이 아니라 고정된 근사치. 기존 명세서와 금액을 맞추려면 바꾸면 안 됨"""

def calculate_monthly_salary(
    weekly_hours: Number,
    hourly_wage: Optional[int] = None,
    rates: Optional[PayrollRates] = None,
) -> MonthlySalaryResult:
    rates = rates or get_rates()
    if hourly_wage is None:
        hourly_wage = rates.minimum_wage

    weekly = to_decimal(weekly_hours)
    monthly_holiday_hours = _holiday_hours(weekly, rates) * rates.monthly_average_weeks
    monthly_working_hours = weekly * rates.monthly_average_weeks
    total_working_hours = monthly_working_hours + monthly_holiday_hours

    return MonthlySalaryResult(
        gross_salary=round_won(total_working_hours * hourly_wage),
        total_working_hours=round_hours(total_working_hours),
        holiday_hours=round_hours(monthly_holiday_hours),
    )


#step4. 4대보험료 계산

"""코드 요약:
근로자: 국민연금, 건강보험, 장기요양보험(건강보험료의 12.95%), 고용보험
사업주: 위 4개 + 고용안정사업, 산재보험
항목별로 각각 반올림한 뒤 합계를 냄 (합계를 다시 반올림하지 않음)"""

def calculate_insurance(gross_salary: int, rates: Optional[PayrollRates] = None) -> InsuranceResult:
    rates = rates or get_rates()
    gross = to_decimal(gross_salary)
    ee = rates.employee_insurance
    er = rates.employer_insurance

    # 근로자 부담분
    ee_pension = round_won(gross * ee.national_pension)
    ee_health = round_won(gross * ee.health_insurance)
    ee_care = round_won(ee_health * ee.long_term_care)
    ee_employment = round_won(gross * ee.employment)

    # 사업주 부담분
    er_pension = round_won(gross * er.national_pension)
    er_health = round_won(gross * er.health_insurance)
    er_care = round_won(er_health * er.long_term_care)
    er_employment = round_won(gross * er.employment)
    er_stability = round_won(gross * er.employment_stability)
    er_compensation = round_won(gross * er.workers_compensation)

    return InsuranceResult(
        employee=EmployeeInsurance(
            national_pension=ee_pension,
            health_insurance=ee_health,
            long_term_care=ee_care,
            employment=ee_employment,
            total=ee_pension + ee_health + ee_care + ee_employment,
        ),
        employer=EmployerInsurance(
            national_pension=er_pension,
            health_insurance=er_health,
            long_term_care=er_care,
            employment=er_employment,
            employment_stability=er_stability,
            workers_compensation=er_compensation,
            total=er_pension + er_health + er_care + er_employment + er_stability + er_compensation,
        ),
    )


#step5. 소득세 계산 (간이 근사치)

"""코드 요약:
국세청 간이세액표가 아니라 월급 구간별 근사식으로 계산함
구간별로 (월급 - 구간 하한) × 세율 + 누적세액 - 부양가족 공제 를 하고 0 미만이면 0
지방소득세 = 소득세의 10%"""

def calculate_income_tax(
    gross_salary: int,
    dependents: int = 1,
    rates: Optional[PayrollRates] = None,
) -> IncomeTaxResult:
    rates = rates or get_rates()
    gross = to_decimal(gross_salary)

    bracket = next(b for b in rates.tax_brackets if b.upper is None or gross <= b.upper)
    tax = (gross - bracket.threshold) * bracket.rate + bracket.base_tax - dependents * bracket.dependent_credit
    income_tax = max(Decimal("0"), tax)

    return IncomeTaxResult(
        income_tax=round_won(income_tax),
        local_tax=round_won(income_tax * rates.local_tax_rate),
    )


#step6. 실수령액 / 사업주 총 부담 비용

def calculate_net_salary(
    gross_salary: int,
    dependents: int = 1,
    rates: Optional[PayrollRates] = None,
) -> NetSalaryResult:
    """실수령액 = 세전 월급 - (근로자 4대보험 + 소득세 + 지방소득세), 0 미만이면 0"""
    rates = rates or get_rates()
    insurance = calculate_insurance(gross_salary, rates)
    tax = calculate_income_tax(gross_salary, dependents, rates)

    total_deductions = insurance.employee.total + tax.income_tax + tax.local_tax
    net_salary = gross_salary - total_deductions
    if net_salary < 0:
        logger.warning("공제액(%s)이 세전 월급(%s)보다 커서 실수령액을 0으로 처리", total_deductions, gross_salary)

    return NetSalaryResult(
        gross_salary=gross_salary,
        employee_insurance=insurance.employee.total,
        income_tax=tax.income_tax,
        local_tax=tax.local_tax,
        total_deductions=total_deductions,
        net_salary=max(0, net_salary),
    )


def calculate_employer_cost(gross_salary: int, rates: Optional[PayrollRates] = None) -> EmployerCostResult:
    """사업주 총 부담 비용 = 세전 월급 + 사업주 4대보험"""
    insurance = calculate_insurance(gross_salary, rates)
    return EmployerCostResult(
        gross_salary=gross_salary,
        employer_insurance=insurance.employer.total,
        total_cost=gross_salary + insurance.employer.total,
    )
