# 급여 엔진 예외 정의
#
# 입력 데이터 문제(시간 형식 오류, 스토어/템플릿 없음 등)는 여기 정의된 예외로 즉시 실패시키고,
# 금액 계산 중 생기는 경계값(음수 실수령액, 음수 근무시간)은 예외 없이 0으로 보정한다.


class PayrollError(Exception):
    """급여 계산 관련 예외의 최상위 클래스"""


class ConfigurationError(PayrollError):
    """필수 환경변수(SUPABASE_URL 등)가 비어 있거나 설정값(중복 예외사항 정책 등)이 잘못된 경우"""


class InvalidTimeFormatError(PayrollError):
    def __init__(self, value):
        self.value = value
        super().__init__(f"시간 형식이 올바르지 않습니다 (HH:mm 필요): {value!r}")


class StoreNotFoundError(PayrollError):
    def __init__(self, store_id):
        self.store_id = store_id
        super().__init__(f"스토어를 찾을 수 없습니다: {store_id}")


class TemplateNotFoundError(PayrollError):
    def __init__(self, template_id):
        self.template_id = template_id
        super().__init__(f"템플릿을 찾을 수 없습니다: {template_id}")


class DuplicateExceptionError(PayrollError):
    """같은 직원, 같은 날짜에 예외사항이 두 개 이상 등록된 경우 (reject 정책)"""

    def __init__(self, employee_id, date):
        self.employee_id = employee_id
        self.date = date
        super().__init__(f"직원 {employee_id}의 {date} 예외사항이 중복되었습니다")


class UnknownRateYearError(PayrollError):
    def __init__(self, year):
        self.year = year
        super().__init__(f"{year}년 요율표가 없습니다")
