"""
Shift Payroll API - Monthly Payroll Aggregation Tests

Per-employee pipeline and store-wide monthly summary,
using an in-memory repository in place of Supabase.
"""

import pytest

from payroll.aggregator import build_monthly_summary, calculate_employee_payroll, calculate_monthly_payroll
from payroll.errors import DuplicateExceptionError, StoreNotFoundError, TemplateNotFoundError
from schemas import ScheduleException


class TestEmployeePayroll:

    def test_pipeline_with_exceptions(self, employees, template, exceptions):
        result = calculate_employee_payroll(employees[0], template, exceptions, 2025, 6)

        assert result.base_schedule.weekly_hours == 23.94
        assert result.final_schedule.weekly_hours == 23.25
        # (23.25 + 4.65) × 4.345 = 121.2255 시간
        assert result.monthly_salary.total_working_hours == 121.23
        assert result.monthly_salary.gross_salary == 1215892
        assert sum(a.pay_difference for a in result.exception_adjustments) == -30090
        assert result.total_pay == 1215892 - 30090

    def test_net_and_insurance_use_monthly_gross(self, employees, template, exceptions):
        result = calculate_employee_payroll(employees[0], template, exceptions, 2025, 6)

        assert result.net_salary.gross_salary == result.monthly_salary.gross_salary
        assert result.net_salary.employee_insurance == result.insurance.employee.total

    def test_without_exceptions(self, employees, template):
        result = calculate_employee_payroll(employees[1], template, [], 2025, 6)

        # 주 7.36시간은 주휴수당 대상 아님
        assert result.monthly_salary.holiday_hours == 0.0
        assert result.monthly_salary.gross_salary == 383750
        assert result.exception_adjustments == []
        assert result.total_pay == 383750

    def test_reject_policy(self, employees, template, exceptions):
        duplicated = exceptions + [exceptions[0]]

        with pytest.raises(DuplicateExceptionError):
            calculate_employee_payroll(employees[0], template, duplicated, 2025, 6, policy="reject")


class TestMonthlySummary:

    def test_totals(self, store, employees, template, exceptions):
        summary = build_monthly_summary(employees, template, exceptions, 2025, 6, store=store)

        # 비활성 직원 제외
        assert summary.total_employees == 2
        assert [r.employee.id for r in summary.employees] == [1, 2]
        assert summary.total_base_pay == 1215892 + 383750
        assert summary.total_exception_adjustments == -30090
        assert summary.total_final_pay == 1569552
        assert summary.store == store
        assert summary.year == 2025 and summary.month == 6

    def test_final_pay_equals_sum_of_employee_totals(self, employees, template, exceptions):
        summary = build_monthly_summary(employees, template, exceptions, 2025, 6)

        assert summary.total_final_pay == sum(r.total_pay for r in summary.employees)
        assert summary.total_final_pay == summary.total_base_pay + summary.total_exception_adjustments

    def test_exceptions_routed_to_their_employee(self, employees, template, exceptions):
        summary = build_monthly_summary(employees, template, exceptions, 2025, 6)

        first, second = summary.employees
        assert len(first.exception_adjustments) == 3
        assert second.exception_adjustments == []

    def test_exception_without_employee_is_not_applied(self, employees, template):
        orphan = ScheduleException(date="2025-06-02", exception_type="CANCEL")

        summary = build_monthly_summary(employees, template, [orphan], 2025, 6)

        assert summary.total_exception_adjustments == 0

    def test_thread_pool_matches_sequential(self, employees, template, exceptions):
        sequential = build_monthly_summary(employees, template, exceptions, 2025, 6, max_workers=1)
        pooled = build_monthly_summary(employees, template, exceptions, 2025, 6, max_workers=4)

        assert pooled == sequential

    def test_no_employees(self, template):
        summary = build_monthly_summary([], template, [], 2025, 6)

        assert summary.total_employees == 0
        assert summary.total_final_pay == 0


class TestCalculateMonthlyPayroll:

    def test_loads_through_repository(self, repository):
        summary = calculate_monthly_payroll(1, 10, 2025, 6, repository=repository)

        assert summary.total_final_pay == 1569552
        assert ("exceptions", 1, 2025, 6) in repository.calls

    def test_missing_store_fails_fast(self, repository):
        repository.store = None

        with pytest.raises(StoreNotFoundError):
            calculate_monthly_payroll(1, 10, 2025, 6, repository=repository)

        assert repository.calls == [("store", 1)]

    def test_missing_template_fails_fast(self, repository):
        repository.template = None

        with pytest.raises(TemplateNotFoundError):
            calculate_monthly_payroll(1, 10, 2025, 6, repository=repository)

        assert ("employees", 1) not in repository.calls
