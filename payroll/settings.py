import os
from dotenv import load_dotenv

# .env 파일을 불러와서 환경변수 등록
load_dotenv()

SUPABASE_URL = os.getenv("SUPABASE_URL")
SUPABASE_KEY = os.getenv("SUPABASE_KEY")

# 적용할 요율표 연도 (payroll.rates 참고)
PAYROLL_RATE_YEAR = int(os.getenv("PAYROLL_RATE_YEAR", "2025"))

# 1이면 직원별 계산을 순차로, 2 이상이면 스레드 풀로 병렬 처리
PAYROLL_MAX_WORKERS = int(os.getenv("PAYROLL_MAX_WORKERS", "1"))

# 같은 날짜 예외사항 중복 처리: "ordered"(목록 순서대로 적용) 또는 "reject"(오류)
PAYROLL_DUPLICATE_EXCEPTION_POLICY = os.getenv("PAYROLL_DUPLICATE_EXCEPTION_POLICY", "ordered")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

CORS_ALLOW_ORIGINS = [
    origin.strip()
    for origin in os.getenv("CORS_ALLOW_ORIGINS", "*").split(",")
    if origin.strip()
]
