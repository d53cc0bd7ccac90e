"""
plugins/sqs/plugin.py - SQS CloudWatch 지표 수집기

단일 SQS 큐에 대해 고정 지표 카탈로그를 CloudWatch에서 조회하고
지표 출력 이름 → 값 매핑을 만듭니다.

플러그인 규약 (core.mackerel.MackerelPlugin):
    - fetch_metrics(): 지표 이름 → 값
    - graph_definition(): 그래프 그룹 정의
    - metric_key_prefix(): 출력 키 접두사

Usage:
    plugin = SQSPlugin(CollectorConfig(queue_name="orders"))
    plugin.prepare()
    values = plugin.fetch_all()
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from typing import Any

from botocore.exceptions import BotoCoreError, ClientError

from core.client import create_session, get_client
from core.config import (
    DEFAULT_PREFIX_ROOT,
    NAMESPACE,
    PERIOD_SECONDS,
    QUEUE_DIMENSION,
    WINDOW_SECONDS,
    CollectorConfig,
)
from core.errors import CollectedError, ErrorCollector
from core.exceptions import ClientInitError, MetricFetchError, NoDataPointsError
from core.mackerel import Graph

from .graphs import build_graph_definition
from .metrics import METRICS, MetricDescriptor, datapoint_value, select_datapoint

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """수집 결과

    Attributes:
        values: 지표 출력 이름 → 값 (실패한 지표는 없음)
        errors: 실패한 지표의 에러 목록 (카탈로그 순서)
    """

    values: dict[str, float] = field(default_factory=dict)
    errors: list[CollectedError] = field(default_factory=list)


class SQSPlugin:
    """SQS 큐 지표 수집기

    Args:
        config: 수집 설정
        cloudwatch: 미리 만든 CloudWatch client (없으면 prepare()에서 생성)
        metrics: 조회할 지표 카탈로그
    """

    def __init__(
        self,
        config: CollectorConfig,
        cloudwatch: Any = None,
        metrics: tuple[MetricDescriptor, ...] = METRICS,
    ):
        self.config = config
        self.cloudwatch = cloudwatch
        self.metrics = metrics

    @property
    def queue_name(self) -> str:
        return self.config.queue_name

    def prepare(self) -> None:
        """설정으로부터 CloudWatch client 생성

        Raises:
            ClientInitError: Session/client를 만들 수 없는 경우
        """
        try:
            session = create_session(self.config.access_key_id, self.config.secret_access_key)
            self.cloudwatch = get_client(session, "cloudwatch", region_name=self.config.region)
        except (BotoCoreError, ValueError) as e:
            raise ClientInitError(self.config.region, "CloudWatch 클라이언트 생성 불가", cause=e) from e

        logger.debug("CloudWatch 클라이언트 준비 완료 (region=%s)", self.config.region)

    def metric_key_prefix(self) -> str:
        if self.config.metric_key_prefix:
            return self.config.metric_key_prefix
        return f"{DEFAULT_PREFIX_ROOT}.{self.queue_name}"

    def graph_definition(self) -> dict[str, Graph]:
        return build_graph_definition(self.queue_name)

    def fetch_one(self, descriptor: MetricDescriptor, now: datetime | None = None) -> float:
        """지표 하나의 값 조회

        직전 5분 구간을 60초 주기로 조회한 뒤 선택 정책에 따라 데이터 포인트 하나를 고릅니다.

        Raises:
            NoDataPointsError: 데이터 포인트가 없는 경우
            MetricFetchError: API 호출 실패
        """
        name = descriptor.output_name
        if self.cloudwatch is None:
            raise MetricFetchError(name, "CloudWatch 클라이언트가 준비되지 않았습니다", error_code="ClientNotReady")

        now = now or datetime.now(timezone.utc)

        try:
            response = self.cloudwatch.get_metric_statistics(
                Namespace=NAMESPACE,
                MetricName=descriptor.name,
                Dimensions=[{"Name": QUEUE_DIMENSION, "Value": self.queue_name}],
                StartTime=now - timedelta(seconds=WINDOW_SECONDS),
                EndTime=now,
                Period=PERIOD_SECONDS,
                Statistics=[descriptor.statistic.value],
                Unit=descriptor.unit,
            )
        except ClientError as e:
            raise MetricFetchError.from_client_error(name, e) from e
        except BotoCoreError as e:
            raise MetricFetchError(name, str(e), error_code=type(e).__name__, cause=e) from e

        datapoints = response.get("Datapoints", [])
        if not datapoints:
            raise NoDataPointsError(name)

        selected = select_datapoint(datapoints, self.config.selection, now=now)
        if selected is None:
            # 모든 데이터 포인트가 기준 시각 이후
            logger.debug("%s: 선택된 데이터 포인트 없음", name)
            return 0.0

        return datapoint_value(selected, descriptor.statistic, read_minimum=self.config.read_minimum)

    def _fetch_or_error(self, descriptor: MetricDescriptor) -> float | MetricFetchError:
        try:
            return self.fetch_one(descriptor)
        except MetricFetchError as e:
            return e

    def collect(self) -> FetchResult:
        """카탈로그 전체 조회

        지표 단위 실패는 로깅 후 errors에 기록하고 계속 진행합니다.
        max_workers > 1이면 동시 조회하되, 결과는 카탈로그 순서로 조립합니다.
        """
        collector = ErrorCollector(self.queue_name)
        result = FetchResult()

        if self.config.max_workers > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                outcomes = list(executor.map(self._fetch_or_error, self.metrics))
        else:
            outcomes = [self._fetch_or_error(descriptor) for descriptor in self.metrics]

        for descriptor, outcome in zip(self.metrics, outcomes):
            if isinstance(outcome, MetricFetchError):
                collector.collect(descriptor.output_name, outcome)
                continue
            result.values[descriptor.output_name] = outcome

        result.errors = collector.errors
        if collector.has_errors:
            logger.debug("[%s] %s", self.queue_name, collector.get_summary())

        return result

    def fetch_all(self) -> dict[str, float]:
        """지표 출력 이름 → 값 매핑 (예외를 발생시키지 않음)"""
        return self.collect().values

    def fetch_metrics(self) -> dict[str, float]:
        return self.fetch_all()
