"""
core/exceptions.py - 통합 예외 계층 구조

플러그인 전체에서 사용되는 예외 클래스들을 정의합니다.

예외 계층 구조:
    PluginError (베이스)
    ├── ClientInitError (클라이언트 생성 실패 - 치명적)
    └── MetricFetchError (지표 단위 조회 실패 - 복구 가능)
        └── NoDataPointsError

Usage:
    from core.exceptions import MetricFetchError

    try:
        response = cloudwatch.get_metric_statistics(...)
    except ClientError as e:
        raise MetricFetchError.from_client_error("NumberOfMessagesSent", e) from e
"""

from typing import Any, Dict, Optional

# =============================================================================
# 베이스 예외
# =============================================================================


class PluginError(Exception):
    """플러그인 기본 예외 클래스

    Attributes:
        message: 에러 메시지
        cause: 원인 예외 (체이닝용)
        details: 추가 상세 정보
    """

    def __init__(
        self,
        message: str,
        cause: Optional[Exception] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message)
        self.message = message
        self.cause = cause
        self.details = details or {}

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


# =============================================================================
# 클라이언트 생성 관련 예외
# =============================================================================


class ClientInitError(PluginError):
    """CloudWatch 클라이언트 생성 실패

    지표 조회 전에 발생하며 프로세스를 중단시킵니다.
    """

    def __init__(
        self,
        region: str,
        message: str,
        cause: Optional[Exception] = None,
    ):
        full_message = f"클라이언트 생성 실패 [{region}]: {message}"
        super().__init__(full_message, cause)
        self.region = region
        self.details["region"] = region


# =============================================================================
# 지표 조회 관련 예외
# =============================================================================


class MetricFetchError(PluginError):
    """단일 지표 조회 실패

    API 호출 실패 또는 데이터 포인트 없음. 수집 루프에서 로깅 후 건너뜁니다.
    """

    def __init__(
        self,
        metric_name: str,
        message: str,
        error_code: Optional[str] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message, cause)
        self.metric_name = metric_name
        self.error_code = error_code
        self.details["metric_name"] = metric_name
        if error_code:
            self.details["error_code"] = error_code

    @classmethod
    def from_client_error(
        cls,
        metric_name: str,
        client_error: Exception,
    ) -> "MetricFetchError":
        """botocore.exceptions.ClientError로부터 생성

        Args:
            metric_name: 지표 출력 이름
            client_error: ClientError 예외

        Returns:
            MetricFetchError 인스턴스
        """
        error_code = None
        error_message = None

        if hasattr(client_error, "response"):
            error_info = client_error.response.get("Error", {})
            error_code = error_info.get("Code")
            error_message = error_info.get("Message")

        message = "cloudwatch.get_metric_statistics"
        if error_code:
            message = f"{message} 실패 ({error_code})"
        if error_message:
            message = f"{message}: {error_message}"

        return cls(metric_name, message, error_code=error_code, cause=client_error)


class NoDataPointsError(MetricFetchError):
    """조회 구간에 데이터 포인트가 없음"""

    def __init__(self, metric_name: str):
        super().__init__(metric_name, "fetched no datapoints", error_code="NoDataPoints")


# =============================================================================
# 예외 유틸리티 함수
# =============================================================================


def format_error_for_user(error: Exception) -> str:
    """사용자에게 표시할 에러 메시지 포맷팅

    Args:
        error: 예외

    Returns:
        사용자 친화적인 에러 메시지
    """
    if isinstance(error, PluginError):
        # 커스텀 예외는 이미 포맷팅됨
        return str(error)

    # boto3 ClientError
    if hasattr(error, "response"):
        error_info = error.response.get("Error", {})
        code = error_info.get("Code", "UnknownError")
        message = error_info.get("Message", str(error))

        friendly_messages = {
            "AccessDenied": "권한이 없습니다. IAM 정책을 확인하세요.",
            "ExpiredToken": "인증 토큰이 만료되었습니다.",
            "InvalidClientTokenId": "잘못된 자격 증명입니다.",
            "Throttling": "요청이 너무 많습니다. 잠시 후 다시 시도하세요.",
        }

        return friendly_messages.get(code, f"{code}: {message}")

    return str(error)
