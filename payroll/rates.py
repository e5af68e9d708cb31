"""연도별 급여 요율표

최저시급, 4대보험 요율, 간이 소득세 구간, 월 평균 주 수(4.345) 등
매년 바뀔 수 있는 값들을 한 곳에 모아둔 설정 객체.
계산 함수들은 rates 인자를 받으며, 생략하면 PAYROLL_RATE_YEAR 연도의 요율표를 사용한다.
"""

from decimal import Decimal
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict

from payroll import settings
from payroll.errors import UnknownRateYearError


class EmployeeInsuranceRates(BaseModel):
    """근로자 부담분 4대보험 요율"""
    model_config = ConfigDict(frozen=True)

    national_pension: Decimal      # 국민연금
    health_insurance: Decimal      # 건강보험
    long_term_care: Decimal        # 장기요양보험 (건강보험료 대비 비율)
    employment: Decimal            # 고용보험


class EmployerInsuranceRates(EmployeeInsuranceRates):
    """사업주 부담분 4대보험 요율"""

    employment_stability: Decimal  # 고용안정사업
    workers_compensation: Decimal  # 산재보험 (업종 평균치)


class TaxBracket(BaseModel):
    """간이 소득세 구간

    세액 = max(0, (월급 - threshold) × rate + base_tax - 부양가족 수 × dependent_credit)
    upper가 None이면 최상위 구간.
    """
    model_config = ConfigDict(frozen=True)

    upper: Optional[int]
    threshold: int = 0
    rate: Decimal = Decimal("0")
    base_tax: int = 0
    dependent_credit: int = 0


class PayrollRates(BaseModel):
    model_config = ConfigDict(frozen=True)

    year: int
    minimum_wage: int                       # 최저시급
    regular_hours_limit: Decimal            # 하루 정규 근무시간
    night_start_hour: int                   # 야간 근무 시작 (22시)
    night_end_hour: int                     # 야간 근무 종료 (다음날 6시)
    overtime_rate: Decimal                  # 연장 근무 수당 배율
    night_rate: Decimal                     # 야간 근무 가산 배율
    holiday_pay_eligibility_hours: Decimal  # 주휴수당 대상 최소 주간 근무시간
    full_time_weekly_hours: Decimal         # 주휴시간 비례 계산 기준 (주 40시간)
    holiday_credit_hours: Decimal           # 주휴시간 최대치 (하루 8시간)
    monthly_average_weeks: Decimal          # 월 평균 주 수 (365 / 7 / 12 근사치)
    employee_insurance: EmployeeInsuranceRates
    employer_insurance: EmployerInsuranceRates
    tax_brackets: List[TaxBracket]
    local_tax_rate: Decimal                 # 지방소득세 (소득세의 10%)


# 2025년 기준. 소득세 구간은 국세청 간이세액표가 아닌 근사치이므로
# 법적으로 정확한 원천징수액이 필요하면 실제 간이세액표로 교체해야 함
RATES_2025 = PayrollRates(
    year=2025,
    minimum_wage=10030,
    regular_hours_limit=Decimal("8"),
    night_start_hour=22,
    night_end_hour=6,
    overtime_rate=Decimal("1.5"),
    night_rate=Decimal("0.5"),
    holiday_pay_eligibility_hours=Decimal("15"),
    full_time_weekly_hours=Decimal("40"),
    holiday_credit_hours=Decimal("8"),
    monthly_average_weeks=Decimal("4.345"),
    employee_insurance=EmployeeInsuranceRates(
        national_pension=Decimal("0.045"),
        health_insurance=Decimal("0.03545"),
        long_term_care=Decimal("0.1295"),
        employment=Decimal("0.009"),
    ),
    employer_insurance=EmployerInsuranceRates(
        national_pension=Decimal("0.045"),
        health_insurance=Decimal("0.03545"),
        long_term_care=Decimal("0.1295"),
        employment=Decimal("0.009"),
        employment_stability=Decimal("0.0025"),
        workers_compensation=Decimal("0.007"),
    ),
    tax_brackets=[
        TaxBracket(upper=1000000),
        TaxBracket(upper=2000000, threshold=1000000, rate=Decimal("0.06"), dependent_credit=10000),
        TaxBracket(upper=3000000, threshold=2000000, rate=Decimal("0.15"), base_tax=60000, dependent_credit=15000),
        TaxBracket(upper=None, threshold=3000000, rate=Decimal("0.24"), base_tax=210000, dependent_credit=20000),
    ],
    local_tax_rate=Decimal("0.1"),
)

RATE_TABLES: Dict[int, PayrollRates] = {
    2025: RATES_2025,
}


def get_rates(year: Optional[int] = None) -> PayrollRates:
    """연도별 요율표 반환. year를 생략하면 PAYROLL_RATE_YEAR 사용"""
    if year is None:
        year = settings.PAYROLL_RATE_YEAR
    try:
        return RATE_TABLES[year]
    except KeyError:
        raise UnknownRateYearError(year) from None
