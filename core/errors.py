"""
core/errors.py - 지표 조회 에러 수집

수집 루프에서 발생한 지표 단위 실패를 기록하는 유틸리티입니다.
실패는 로깅 후 건너뛰지만, 진단용으로 (지표, 에러) 목록을 별도로 보관합니다.

주요 구성 요소:
- ErrorCategory: 에러 코드 분류
- CollectedError: 수집된 에러 상세 정보
- ErrorCollector: 스레드 세이프 에러 수집기

Example:
    collector = ErrorCollector("orders")

    try:
        value = plugin.fetch_one(descriptor)
    except MetricFetchError as e:
        collector.collect(descriptor.output_name, e)

    if collector.has_errors:
        print(collector.get_summary())
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from datetime import datetime
from enum import Enum

from .exceptions import MetricFetchError, format_error_for_user

logger = logging.getLogger(__name__)


class ErrorCategory(Enum):
    """에러 카테고리"""

    NO_DATA = "no_data"
    ACCESS_DENIED = "access_denied"
    NOT_FOUND = "not_found"
    THROTTLING = "throttling"
    TIMEOUT = "timeout"
    INVALID_REQUEST = "invalid_request"
    SERVICE_ERROR = "service_error"
    UNKNOWN = "unknown"


@dataclass
class CollectedError:
    """수집된 에러 상세 정보

    Attributes:
        timestamp: 에러 발생 시각
        queue_name: SQS 큐 이름
        metric_name: 지표 출력 이름
        error_code: 에러 코드 (예: "AccessDenied", "NoDataPoints")
        error_message: 에러 메시지
        category: 에러 카테고리
    """

    timestamp: datetime
    queue_name: str
    metric_name: str
    error_code: str
    error_message: str
    category: ErrorCategory

    def __str__(self) -> str:
        return f"{self.queue_name} - {self.metric_name}: {self.error_code}"


def categorize_error_code(error_code: str) -> ErrorCategory:
    """에러 코드 문자열을 기반으로 ErrorCategory 분류

    Args:
        error_code: 에러 코드 문자열 (예: "AccessDenied", "ThrottlingException")

    Returns:
        분류된 에러 카테고리. 매칭되는 키워드가 없으면 UNKNOWN 반환.
    """
    code = error_code.lower()

    if code == "nodatapoints":
        return ErrorCategory.NO_DATA
    if any(x in code for x in ["accessdenied", "unauthorized", "forbidden"]):
        return ErrorCategory.ACCESS_DENIED
    if any(x in code for x in ["notfound", "nosuch", "doesnotexist"]):
        return ErrorCategory.NOT_FOUND
    if any(x in code for x in ["throttl", "ratelimit", "toomanyrequests"]):
        return ErrorCategory.THROTTLING
    if any(x in code for x in ["timeout", "timedout"]):
        return ErrorCategory.TIMEOUT
    if any(x in code for x in ["invalid", "validation", "malformed"]):
        return ErrorCategory.INVALID_REQUEST
    if any(x in code for x in ["internal", "serviceunavailable", "serviceerror"]):
        return ErrorCategory.SERVICE_ERROR

    return ErrorCategory.UNKNOWN


class ErrorCollector:
    """스레드 세이프 에러 수집기

    동시 조회 모드에서도 여러 스레드의 실패를 안전하게 기록합니다.
    """

    def __init__(self, queue_name: str):
        self.queue_name = queue_name
        self._errors: list[CollectedError] = []
        self._lock = threading.Lock()

    def collect(self, metric_name: str, error: MetricFetchError) -> CollectedError:
        """지표 조회 실패를 수집하고 한 줄로 로깅

        Args:
            metric_name: 지표 출력 이름
            error: MetricFetchError 예외

        Returns:
            수집된 CollectedError
        """
        error_code = error.error_code or "Unknown"
        collected = CollectedError(
            timestamp=datetime.now(),
            queue_name=self.queue_name,
            metric_name=metric_name,
            error_code=error_code,
            error_message=format_error_for_user(error),
            category=categorize_error_code(error_code),
        )

        with self._lock:
            self._errors.append(collected)

        logger.warning("%s: %s", metric_name, error)
        return collected

    @property
    def errors(self) -> list[CollectedError]:
        """수집된 모든 에러의 복사본 반환"""
        with self._lock:
            return list(self._errors)

    @property
    def has_errors(self) -> bool:
        """에러 존재 여부"""
        with self._lock:
            return len(self._errors) > 0

    def get_summary(self) -> str:
        """카테고리별 에러 건수를 포함한 요약 문자열 반환

        Returns:
            포맷팅된 요약 문자열 (예: "에러 3건 (access_denied: 1건, no_data: 2건)")
        """
        with self._lock:
            if not self._errors:
                return "에러 없음"

            by_category: dict[str, int] = {}
            for e in self._errors:
                by_category[e.category.value] = by_category.get(e.category.value, 0) + 1

            parts = [f"{k}: {v}건" for k, v in sorted(by_category.items())]
            return f"에러 {len(self._errors)}건 ({', '.join(parts)})"
