"""Supabase 조회 함수 (읽기 전용)

급여 집계에 필요한 스토어, 템플릿, 직원, 예외사항 row를 불러와 schemas 모델로 변환.
클라이언트는 처음 조회할 때 만든다.
"""

import calendar
import logging
from typing import List, Optional

from supabase import Client, create_client

from payroll import settings
from payroll.errors import ConfigurationError
from schemas import Employee, ScheduleException, Store, WeeklyTemplate

logger = logging.getLogger(__name__)

_client: Optional[Client] = None


def get_client() -> Client:
    global _client
    if _client is None:
        if not settings.SUPABASE_URL or not settings.SUPABASE_KEY:
            raise ConfigurationError("SUPABASE_URL, SUPABASE_KEY 환경변수가 필요합니다")
        # Supabase 클라이언트 생성
        _client = create_client(settings.SUPABASE_URL, settings.SUPABASE_KEY)
    return _client


def get_store_by_id(store_id: int) -> Optional[Store]:
    response = (
        get_client().table("store_settings")
        .select("*")
        .eq("id", store_id)
        .limit(1)
        .execute()
    )
    return Store.model_validate(response.data[0]) if response.data else None


def get_template_by_id(template_id: int) -> Optional[WeeklyTemplate]:
    response = (
        get_client().table("weekly_schedule_templates")
        .select("*")
        .eq("id", template_id)
        .limit(1)
        .execute()
    )
    return WeeklyTemplate.model_validate(response.data[0]) if response.data else None


def get_store_employees(store_id: int) -> List[Employee]:
    """스토어의 활성 직원 목록"""
    response = (
        get_client().table("employees")
        .select("*")
        .eq("store_id", store_id)
        .eq("is_active", True)
        .order("created_at", desc=True)
        .execute()
    )
    return [Employee.model_validate(row) for row in response.data or []]


def get_monthly_exceptions(store_id: int, year: int, month: int) -> List[ScheduleException]:
    """해당 월의 예외사항 (날짜 오름차순. 같은 날 중복이면 이 순서대로 적용됨)"""
    start_date = f"{year}-{month:02d}-01"
    end_date = f"{year}-{month:02d}-{calendar.monthrange(year, month)[1]:02d}"

    response = (
        get_client().table("schedule_exceptions")
        .select("*")
        .eq("store_id", store_id)
        .gte("date", start_date)
        .lte("date", end_date)
        .order("date")
        .execute()
    )
    rows = response.data or []
    logger.debug("스토어 %s %s~%s 예외사항 %s건", store_id, start_date, end_date, len(rows))
    return [ScheduleException.model_validate(row) for row in rows]


def get_user_stores(owner_id: str) -> List[Store]:
    """사용자의 모든 스토어"""
    response = (
        get_client().table("store_settings")
        .select("*")
        .eq("owner_id", owner_id)
        .order("created_at", desc=True)
        .execute()
    )
    return [Store.model_validate(row) for row in response.data or []]


def get_active_templates(store_id: int) -> List[WeeklyTemplate]:
    """스토어의 활성 템플릿 목록"""
    response = (
        get_client().table("weekly_schedule_templates")
        .select("*")
        .eq("store_id", store_id)
        .eq("is_active", True)
        .order("created_at", desc=True)
        .execute()
    )
    return [WeeklyTemplate.model_validate(row) for row in response.data or []]
