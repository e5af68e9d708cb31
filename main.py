import logging
from typing import Optional

from fastapi import FastAPI, Query, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from payroll import settings, supabase_client
from payroll.aggregator import build_monthly_summary, calculate_monthly_payroll
from payroll.calculator import (
    calculate_employer_cost,
    calculate_insurance,
    calculate_monthly_salary,
    calculate_net_salary,
    calculate_work_hours,
)
from payroll.errors import PayrollError, StoreNotFoundError, TemplateNotFoundError
from payroll.shift_calculator import estimate_shift_week, get_comprehensive_examples, get_work_hours_examples
from schemas import PayrollPreviewInput, ShiftPayInput

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Shift Payroll API")

# 🔸 CORS 설정 (CORS_ALLOW_ORIGINS, 기본값은 모든 origin 허용)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(PayrollError)
async def payroll_error_handler(request: Request, exc: PayrollError) -> JSONResponse:
    status_code = 404 if isinstance(exc, (StoreNotFoundError, TemplateNotFoundError)) else 422
    logger.warning("%s %s → %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc), "error": type(exc).__name__})


# 기본 루트 라우터
@app.get("/")
def root():
    return {"message": "Hello, FastAPI!"}


# 근무시간 계산 (야간/연장 구분)
@app.get("/work-hours")
def work_hours(
    start_time: str = Query(..., description="시작 시간 (예: 22:00)"),
    end_time: str = Query(..., description="종료 시간 (예: 06:00)"),
    break_minutes: int = Query(0, ge=0, description="휴게시간 (분)"),
):
    return calculate_work_hours(start_time, end_time, break_minutes)


# 주간 근무시간 → 세전 월급
@app.get("/monthly-salary")
def monthly_salary(
    weekly_hours: float = Query(..., ge=0, description="주간 소정근로시간"),
    hourly_wage: Optional[int] = Query(None, gt=0, description="시급 (생략 시 최저시급)"),
):
    return calculate_monthly_salary(weekly_hours, hourly_wage)


@app.get("/net-salary")
def net_salary(
    gross_salary: int = Query(..., ge=0, description="세전 월급"),
    dependents: int = Query(1, ge=0, description="부양가족 수"),
):
    return calculate_net_salary(gross_salary, dependents)


@app.get("/insurance")
def insurance(gross_salary: int = Query(..., ge=0, description="세전 월급")):
    return calculate_insurance(gross_salary)


@app.get("/employer-cost")
def employer_cost(gross_salary: int = Query(..., ge=0, description="세전 월급")):
    return calculate_employer_cost(gross_salary)


# 근무별 급여 (기본급 + 연장 + 야간 + 주휴)
@app.post("/shift-pay")
def shift_pay(input: ShiftPayInput):
    return estimate_shift_week(input.shifts, input.hourly_wage)


# 월별 급여 미리보기 (직원/템플릿/예외사항을 바디로 직접 전달)
@app.post("/payroll/preview")
def payroll_preview(input: PayrollPreviewInput):
    return build_monthly_summary(
        input.employees,
        input.template,
        input.exceptions,
        input.year,
        input.month,
        store=input.store,
    )


# 월별 급여 계산 (Supabase에서 스토어/템플릿/직원/예외사항 조회)
@app.get("/payroll/{store_id}/{template_id}")
def monthly_payroll(
    store_id: int,
    template_id: int,
    year: int = Query(..., ge=1, description="연도 (예: 2025)"),
    month: int = Query(..., ge=1, le=12, description="월 (1~12)"),
):
    return calculate_monthly_payroll(store_id, template_id, year, month)


@app.get("/stores")
def stores(owner_id: str = Query(..., description="스토어 소유자 id")):
    return supabase_client.get_user_stores(owner_id)


@app.get("/stores/{store_id}/templates")
def store_templates(store_id: int):
    return supabase_client.get_active_templates(store_id)


# 계산 예시 (근무 유형별 근무시간, 풀타임/파트타임 월급)
@app.get("/examples")
def examples():
    return {
        "workHours": get_work_hours_examples(),
        "payroll": get_comprehensive_examples(),
    }
