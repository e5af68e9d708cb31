from decimal import Decimal
from typing import List, Optional

from payroll.calculator import (
    calculate_employer_cost,
    calculate_monthly_salary,
    calculate_net_salary,
    calculate_work_hours,
    is_eligible_for_holiday_pay,
    round_won,
    to_decimal,
)
from payroll.rates import PayrollRates, get_rates
from schemas import ShiftInput, ShiftPayResult, WorkHoursResult


def calculate_weekly_hours(shifts: List[ShiftInput], rates: Optional[PayrollRates] = None) -> float:
    """여러 근무의 주간 총 근무시간"""
    total = sum(
        (to_decimal(calculate_work_hours(s.start_time, s.end_time, s.break_minutes, rates).total_hours) for s in shifts),
        Decimal("0"),
    )
    return float(total)


def calculate_shift_pay(
    work_hours: WorkHoursResult,
    hourly_wage: int,
    weekly_hours: float,
    rates: Optional[PayrollRates] = None,
) -> ShiftPayResult:
    rates = rates or get_rates()

    # 1. 기본급
    regular_pay = to_decimal(work_hours.regular_hours) * hourly_wage

    # 2. 연장수당 (시급 × 1.5)
    overtime_pay = to_decimal(work_hours.overtime_hours) * hourly_wage * rates.overtime_rate

    # 3. 야간수당 (시급 × 0.5 가산)
    night_pay = to_decimal(work_hours.night_hours) * hourly_wage * rates.night_rate

    # 4. 주휴수당 (주 15시간 이상이면 (기본급 + 연장수당) / 5)
    eligible = is_eligible_for_holiday_pay(weekly_hours, rates)
    holiday_pay = (regular_pay + overtime_pay) / 5 if eligible else Decimal("0")

    # 5. 총 급여
    total_pay = regular_pay + overtime_pay + night_pay + holiday_pay

    return ShiftPayResult(
        regular_pay=round_won(regular_pay),
        overtime_pay=round_won(overtime_pay),
        night_pay=round_won(night_pay),
        holiday_pay=round_won(holiday_pay),
        total_pay=round_won(total_pay),
        is_eligible_for_holiday_pay=eligible,
    )


def estimate_shift_week(
    shifts: List[ShiftInput],
    hourly_wage: int,
    rates: Optional[PayrollRates] = None,
) -> dict:
    """한 주 근무 목록을 받아 근무별 급여와 합계를 계산"""
    weekly_hours = calculate_weekly_hours(shifts, rates)
    items = []
    for shift in shifts:
        work_hours = calculate_work_hours(shift.start_time, shift.end_time, shift.break_minutes, rates)
        items.append({
            "shift": shift,
            "workHours": work_hours,
            "pay": calculate_shift_pay(work_hours, hourly_wage, weekly_hours, rates),
        })

    return {
        "weeklyHours": weekly_hours,
        "isEligibleForHolidayPay": is_eligible_for_holiday_pay(weekly_hours, rates),
        "shifts": items,
        "totalPay": sum(item["pay"].total_pay for item in items),
    }


# 참고용 예시 (화면의 계산 예시 카드에서 사용)

def get_work_hours_examples(rates: Optional[PayrollRates] = None) -> dict:
    return {
        "regular": calculate_work_hours("09:00", "18:00", 60, rates),        # 일반 근무 (휴게 1시간)
        "night": calculate_work_hours("22:00", "06:00", 0, rates),           # 야간 근무
        "overtime": calculate_work_hours("08:00", "21:00", 60, rates),       # 연장 근무
        "nightOvertime": calculate_work_hours("22:00", "12:00", 60, rates),  # 심야 연장
    }


def get_comprehensive_examples(rates: Optional[PayrollRates] = None) -> list:
    """최저시급 기준 주 40시간(풀타임) / 주 15시간(파트타임) 월급, 실수령액, 사업주 부담"""
    rates = rates or get_rates()
    examples = []
    for title, weekly_hours in (("주 40시간 근무 (풀타임)", 40), ("주 15시간 근무 (파트타임)", 15)):
        monthly_salary = calculate_monthly_salary(weekly_hours, rates.minimum_wage, rates)
        examples.append({
            "title": title,
            "weeklyHours": weekly_hours,
            "monthlySalary": monthly_salary,
            "netSalary": calculate_net_salary(monthly_salary.gross_salary, 1, rates),
            "employerCost": calculate_employer_cost(monthly_salary.gross_salary, rates),
        })
    return examples
