"""
plugins/sqs/metrics.py - SQS 지표 카탈로그

CloudWatch AWS/SQS 네임스페이스에서 조회할 고정 지표 목록과
조회 결과(Datapoints)에서 값을 고르는 규칙을 정의합니다.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from core.config import SelectionPolicy


class AggregationKind(Enum):
    """CloudWatch 통계 타입 (값은 Datapoint 필드명과 동일)"""

    SUM = "Sum"
    AVERAGE = "Average"
    MAXIMUM = "Maximum"
    MINIMUM = "Minimum"


@dataclass(frozen=True)
class MetricDescriptor:
    """조회할 CloudWatch 지표

    Attributes:
        name: CloudWatch 지표 이름
        statistic: 통계 타입
        unit: CloudWatch 단위 (Count, Bytes, Seconds)
        mackerel_name: 출력 이름 (빈 값이면 name 사용)
    """

    name: str
    statistic: AggregationKind
    unit: str
    mackerel_name: str = ""

    @property
    def output_name(self) -> str:
        return self.mackerel_name or self.name


# 지표 카탈로그
METRICS: tuple[MetricDescriptor, ...] = (
    # 메시지 수
    MetricDescriptor("NumberOfMessagesSent", AggregationKind.SUM, "Count"),
    MetricDescriptor("NumberOfMessagesReceived", AggregationKind.SUM, "Count"),
    MetricDescriptor("NumberOfEmptyReceives", AggregationKind.SUM, "Count"),
    MetricDescriptor("NumberOfMessagesDeleted", AggregationKind.SUM, "Count"),
    # 메시지 크기
    MetricDescriptor("SentMessageSize", AggregationKind.AVERAGE, "Bytes", "SentMessageSizeAverage"),
    MetricDescriptor("SentMessageSize", AggregationKind.MAXIMUM, "Bytes", "SentMessageSizeMax"),
    MetricDescriptor("SentMessageSize", AggregationKind.MINIMUM, "Bytes", "SentMessageSizeMin"),
    # 큐 깊이/경과 시간
    MetricDescriptor("ApproximateNumberOfMessagesDelayed", AggregationKind.AVERAGE, "Count"),
    MetricDescriptor("ApproximateNumberOfMessagesVisible", AggregationKind.AVERAGE, "Count"),
    MetricDescriptor("ApproximateNumberOfMessagesNotVisible", AggregationKind.AVERAGE, "Count"),
    MetricDescriptor("ApproximateAgeOfOldestMessage", AggregationKind.MAXIMUM, "Seconds"),
)


def _as_utc(ts: datetime) -> datetime:
    # botocore는 tz-aware datetime을 반환하지만 naive 값은 UTC로 간주
    if ts.tzinfo is None:
        return ts.replace(tzinfo=timezone.utc)
    return ts


def select_datapoint(
    datapoints: Iterable[Mapping[str, Any]],
    policy: SelectionPolicy = SelectionPolicy.EARLIEST,
    now: datetime | None = None,
) -> Mapping[str, Any] | None:
    """Datapoints 중 값을 읽을 하나를 선택

    EARLIEST: 기준 시각을 now로 시작해, 기준보다 이른 타임스탬프를 만날 때마다
    기준을 갱신합니다. 결과적으로 now 이전의 가장 이른 데이터 포인트가 선택되며,
    타임스탬프가 같으면 먼저 나온 것이 유지됩니다.
    LATEST: 가장 늦은 타임스탬프.

    Returns:
        선택된 데이터 포인트. 후보가 없으면 None.
    """
    selected = None

    if policy is SelectionPolicy.LATEST:
        latest = None
        for dp in datapoints:
            ts = _as_utc(dp["Timestamp"])
            if latest is None or ts > latest:
                latest = ts
                selected = dp
        return selected

    least = now or datetime.now(timezone.utc)
    for dp in datapoints:
        ts = _as_utc(dp["Timestamp"])
        if ts < least:
            least = ts
            selected = dp
    return selected


def datapoint_value(
    datapoint: Mapping[str, Any],
    statistic: AggregationKind,
    read_minimum: bool = False,
) -> float:
    """통계 타입에 해당하는 필드 값 (필드가 없으면 0.0)

    기본적으로 Sum/Average/Maximum만 읽고 Minimum은 0.0을 반환합니다.
    read_minimum=True이면 Minimum 필드도 읽습니다.
    """
    if statistic is AggregationKind.MINIMUM and not read_minimum:
        return 0.0
    return float(datapoint.get(statistic.value, 0.0))
