"""
Shift Payroll API - Shift Pay Tests

Per-shift pay breakdown (regular, overtime, night, weekly holiday)
and the reference examples.
"""

from payroll.calculator import calculate_work_hours
from payroll.shift_calculator import (
    calculate_shift_pay,
    calculate_weekly_hours,
    estimate_shift_week,
    get_comprehensive_examples,
    get_work_hours_examples,
)
from schemas import ShiftInput


class TestShiftPay:

    def test_night_shift_with_holiday_pay(self):
        pay = calculate_shift_pay(calculate_work_hours("22:00", "06:00"), 10000, weekly_hours=40)

        assert pay.regular_pay == 80000
        assert pay.overtime_pay == 0
        assert pay.night_pay == 40000
        assert pay.holiday_pay == 16000
        assert pay.total_pay == 136000
        assert pay.is_eligible_for_holiday_pay is True

    def test_overtime_without_holiday_pay(self):
        pay = calculate_shift_pay(calculate_work_hours("08:00", "21:00", 60), 10000, weekly_hours=10)

        assert pay.regular_pay == 80000
        assert pay.overtime_pay == 60000
        assert pay.holiday_pay == 0
        assert pay.total_pay == 140000
        assert pay.is_eligible_for_holiday_pay is False


class TestWeek:

    def test_weekly_hours(self):
        shifts = [ShiftInput(start_time="09:00", end_time="18:00", break_minutes=60)] * 2
        shifts.append(ShiftInput(start_time="22:00", end_time="02:00"))

        assert calculate_weekly_hours(shifts) == 20.0

    def test_estimate_week(self):
        shifts = [ShiftInput(start_time="09:00", end_time="18:00", break_minutes=60)] * 3

        week = estimate_shift_week(shifts, 10000)

        assert week["weeklyHours"] == 24.0
        assert week["isEligibleForHolidayPay"] is True
        assert len(week["shifts"]) == 3
        assert week["shifts"][0]["pay"].total_pay == 96000
        assert week["totalPay"] == 288000


class TestExamples:

    def test_work_hours_examples(self):
        examples = get_work_hours_examples()

        assert examples["regular"].total_hours == 8.0
        assert examples["night"].night_hours == 8.0
        assert examples["overtime"].overtime_hours == 4.0
        assert examples["nightOvertime"].total_hours == 13.0

    def test_comprehensive_examples(self):
        full_time, part_time = get_comprehensive_examples()

        assert full_time["monthlySalary"].gross_salary == 2091857
        assert full_time["netSalary"].net_salary == 1830480
        assert full_time["employerCost"].total_cost == 2091857 + 216593
        assert part_time["weeklyHours"] == 15
        assert part_time["monthlySalary"].holiday_hours == 13.04
