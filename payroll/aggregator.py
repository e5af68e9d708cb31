"""월별 급여 집계

스토어의 활성 직원마다
기본 스케줄 → 예외사항 적용 → 세전 월급 → 4대보험 / 소득세 → 실수령액
을 계산하고 전체 합계를 낸다. 직원별 계산은 서로 독립이라 스레드 풀로 나눠 돌릴 수 있다.
"""

import logging
from collections import defaultdict
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional

from payroll import settings
from payroll.calculator import calculate_insurance, calculate_monthly_salary, calculate_net_salary
from payroll.errors import StoreNotFoundError, TemplateNotFoundError
from payroll.rates import PayrollRates, get_rates
from payroll.schedule import apply_exceptions, build_base_schedule, calculate_exception_adjustments
from schemas import (
    Employee,
    MonthlyPayrollSummary,
    PayrollCalculationResult,
    ScheduleException,
    Store,
    WeeklyTemplate,
)

logger = logging.getLogger(__name__)


def calculate_employee_payroll(
    employee: Employee,
    template: WeeklyTemplate,
    exceptions: List[ScheduleException],
    year: int,
    month: int,
    rates: Optional[PayrollRates] = None,
    policy: Optional[str] = None,
) -> PayrollCalculationResult:
    """개별 직원의 월별 급여 계산 (exceptions는 이 직원 것만)"""
    rates = rates or get_rates()
    policy = policy or settings.PAYROLL_DUPLICATE_EXCEPTION_POLICY

    base_schedule = build_base_schedule(employee, template, year, month, rates)
    final_schedule = apply_exceptions(base_schedule, exceptions, rates, policy)

    monthly_salary = calculate_monthly_salary(final_schedule.weekly_hours, employee.hourly_wage, rates)
    net_salary = calculate_net_salary(monthly_salary.gross_salary, employee.dependents, rates)
    insurance = calculate_insurance(monthly_salary.gross_salary, rates)

    adjustments = calculate_exception_adjustments(final_schedule, employee.hourly_wage)
    total_pay = monthly_salary.gross_salary + sum(adj.pay_difference for adj in adjustments)

    logger.debug(
        "직원 %s(%s): 주 %.2f시간, 세전 %s원, 예외 %s건, 총 %s원",
        employee.id, employee.name, final_schedule.weekly_hours,
        monthly_salary.gross_salary, len(adjustments), total_pay,
    )

    return PayrollCalculationResult(
        employee=employee,
        base_schedule=base_schedule,
        final_schedule=final_schedule,
        monthly_salary=monthly_salary,
        net_salary=net_salary,
        insurance=insurance,
        total_pay=total_pay,
        exception_adjustments=adjustments,
    )


def build_monthly_summary(
    employees: List[Employee],
    template: WeeklyTemplate,
    exceptions: List[ScheduleException],
    year: int,
    month: int,
    store: Optional[Store] = None,
    rates: Optional[PayrollRates] = None,
    max_workers: Optional[int] = None,
    policy: Optional[str] = None,
) -> MonthlyPayrollSummary:
    """이미 불러온 직원/템플릿/예외사항으로 월별 급여 요약 생성 (DB 접근 없음)"""
    rates = rates or get_rates()
    max_workers = max_workers or settings.PAYROLL_MAX_WORKERS

    active = [employee for employee in employees if employee.is_active]

    # 직원별 예외사항 (목록 순서 유지)
    by_employee = defaultdict(list)
    for exception in exceptions:
        by_employee[exception.employee_id].append(exception)

    def compute(employee: Employee) -> PayrollCalculationResult:
        return calculate_employee_payroll(
            employee, template, by_employee.get(employee.id, []), year, month, rates, policy,
        )

    if max_workers > 1 and len(active) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as executor:
            results = list(executor.map(compute, active))
    else:
        results = [compute(employee) for employee in active]

    total_base_pay = sum(result.monthly_salary.gross_salary for result in results)
    total_exception_adjustments = sum(
        adj.pay_difference for result in results for adj in result.exception_adjustments
    )
    total_final_pay = sum(result.total_pay for result in results)

    logger.info(
        "%s년 %s월 급여 계산 완료: 직원 %s명, 기본급 %s원, 예외 조정 %s원, 최종 %s원",
        year, month, len(results), total_base_pay, total_exception_adjustments, total_final_pay,
    )

    return MonthlyPayrollSummary(
        store=store,
        template=template,
        year=year,
        month=month,
        employees=results,
        total_employees=len(results),
        total_base_pay=total_base_pay,
        total_exception_adjustments=total_exception_adjustments,
        total_final_pay=total_final_pay,
    )


def calculate_monthly_payroll(
    store_id: int,
    template_id: int,
    year: int,
    month: int,
    repository=None,
    rates: Optional[PayrollRates] = None,
    max_workers: Optional[int] = None,
    policy: Optional[str] = None,
) -> MonthlyPayrollSummary:
    """
    특정 달의 주 템플릿 기반 급여 계산

    repository는 get_store_by_id / get_template_by_id / get_store_employees /
    get_monthly_exceptions 를 가진 객체. 생략하면 Supabase 모듈을 사용한다.
    스토어나 템플릿이 없으면 부분 결과 없이 바로 실패한다.
    """
    if repository is None:
        from payroll import supabase_client as repository

    try:
        store = repository.get_store_by_id(store_id)
        if store is None:
            raise StoreNotFoundError(store_id)
        template = repository.get_template_by_id(template_id)
        if template is None:
            raise TemplateNotFoundError(template_id)

        employees = repository.get_store_employees(store_id)
        exceptions = repository.get_monthly_exceptions(store_id, year, month)

        return build_monthly_summary(
            employees, template, exceptions, year, month,
            store=store, rates=rates, max_workers=max_workers, policy=policy,
        )
    except Exception:
        logger.exception("월별 급여 계산 오류 (store=%s, template=%s, %s-%02d)", store_id, template_id, year, month)
        raise
