"""
core/mackerel/helper.py - mackerel-agent 플러그인 출력 헬퍼

fetch_metrics()/graph_definition()/metric_key_prefix()를 제공하는 플러그인을
mackerel-agent 플러그인 규약에 맞게 출력합니다.

출력 모드:
    - 메타 모드 (MACKEREL_AGENT_PLUGIN_META 설정 시):
        # mackerel-agent-plugin
        {"graphs": {"<prefix>.<group>": {...}}}
    - 값 모드 (기본):
        <prefix>.<group>.<name>\\t<value>\\t<unix time>

diff 지표는 tempfile에 저장된 직전 값과 비교해 분당 변화량으로 출력합니다.

Usage:
    helper = MackerelPlugin(plugin, tempfile="/tmp/mackerel-plugin-sqs")
    helper.run()
"""

from __future__ import annotations

import hashlib
import json
import logging
import os
import sys
import tempfile as _tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol

import click

from .graph import Graph, GraphMetric

logger = logging.getLogger(__name__)

META_ENV = "MACKEREL_AGENT_PLUGIN_META"
WORKDIR_ENV = "MACKEREL_PLUGIN_WORKDIR"
META_HEADER = "# mackerel-agent-plugin"
LAST_TIME_KEY = "_lastTime"

# diff 계산 허용 최대 간격 (초)
MAX_DIFF_INTERVAL = 600


class MetricsPlugin(Protocol):
    """헬퍼가 구동하는 플러그인 인터페이스"""

    def fetch_metrics(self) -> dict[str, float]: ...

    def graph_definition(self) -> dict[str, Graph]: ...

    def metric_key_prefix(self) -> str: ...


class MackerelPlugin:
    """mackerel-agent 플러그인 출력기

    Args:
        plugin: MetricsPlugin 구현체
        tempfile: 직전 값 저장 경로 (빈 값이면 자동 생성)
    """

    def __init__(self, plugin: MetricsPlugin, tempfile: str = ""):
        self.plugin = plugin
        self.tempfile = tempfile

    def run(self) -> None:
        """환경변수에 따라 메타 또는 값 출력"""
        if os.environ.get(META_ENV, "") != "":
            self.output_definitions()
        else:
            self.output_values()

    # =========================================================================
    # 메타 출력
    # =========================================================================

    def graph_key(self, key: str) -> str:
        prefix = self.plugin.metric_key_prefix()
        if not key:
            return prefix
        return f"{prefix}.{key}"

    def definitions(self) -> dict[str, dict]:
        """접두사가 붙은 그래프 정의 딕셔너리"""
        graphs = {}
        for key, graph in self.plugin.graph_definition().items():
            full_key = self.graph_key(key)
            graphs[full_key] = graph.to_dict(full_key)
        return {"graphs": graphs}

    def output_definitions(self) -> None:
        click.echo(META_HEADER)
        click.echo(json.dumps(self.definitions(), ensure_ascii=False))

    # =========================================================================
    # 값 출력
    # =========================================================================

    def format_values(
        self,
        values: dict[str, float],
        now: datetime,
        last_values: dict[str, float] | None = None,
        last_time: datetime | None = None,
    ) -> list[str]:
        """출력할 값 라인 목록 생성

        fetch 결과에 없는 지표는 건너뜁니다.
        """
        lines = []
        timestamp = int(now.timestamp())

        for key, graph in self.plugin.graph_definition().items():
            for metric in graph.metrics:
                if metric.name not in values or values[metric.name] is None:
                    continue

                value = float(values[metric.name])
                if metric.diff:
                    diff = self._calc_diff(metric, value, now, last_values, last_time)
                    if diff is None:
                        continue
                    value = diff

                if metric.scale:
                    value *= metric.scale

                lines.append(f"{self.graph_key(key)}.{metric.name}\t{value:f}\t{timestamp}")

        return lines

    def output_values(self, now: datetime | None = None) -> None:
        now = now or datetime.now(timezone.utc)
        values = self.plugin.fetch_metrics()
        last_values, last_time = self.load_last_values()

        for line in self.format_values(values, now, last_values, last_time):
            click.echo(line)

        self.save_values(values, now)

    def _calc_diff(
        self,
        metric: GraphMetric,
        value: float,
        now: datetime,
        last_values: dict[str, float] | None,
        last_time: datetime | None,
    ) -> float | None:
        if not last_values or last_time is None or metric.name not in last_values:
            logger.debug("%s: 직전 값 없음", metric.name)
            return None

        interval = int(now.timestamp()) - int(last_time.timestamp())
        if interval <= 0 or interval > MAX_DIFF_INTERVAL:
            logger.debug("%s: diff 간격 범위 초과 (%ds)", metric.name, interval)
            return None

        last_value = float(last_values[metric.name])
        if value < last_value:
            logger.debug("%s: 카운터 리셋 감지", metric.name)
            return None

        return (value - last_value) * 60 / interval

    # =========================================================================
    # tempfile
    # =========================================================================

    def tempfile_path(self, argv: list[str] | None = None) -> Path:
        """직전 값 저장 경로

        -tempfile이 지정되면 그대로 사용하고, 아니면
        작업 디렉터리 아래 mackerel-plugin-<prefix>-<sha1(argv)> 경로를 만듭니다.
        """
        if self.tempfile:
            return Path(self.tempfile)

        argv = sys.argv if argv is None else argv
        digest = hashlib.sha1(" ".join(argv).encode("utf-8")).hexdigest()
        workdir = os.environ.get(WORKDIR_ENV) or _tempfile.gettempdir()
        return Path(workdir) / f"mackerel-plugin-{self.plugin.metric_key_prefix()}-{digest}"

    def load_last_values(self) -> tuple[dict[str, float], datetime | None]:
        """tempfile에서 직전 값과 저장 시각 로드

        파일이 없거나 내용이 올바르지 않으면 경고 후 ({}, None)을 반환합니다.
        """
        path = self.tempfile_path()
        if not path.exists():
            return {}, None

        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"JSON 객체가 아님 ({type(data).__name__})")

            last_time = None
            raw_time = data.pop(LAST_TIME_KEY, None)
            if raw_time is not None:
                last_time = datetime.fromtimestamp(int(raw_time), tz=timezone.utc)
        except (OSError, ValueError, TypeError, OverflowError) as e:
            logger.warning("직전 값 로드 실패, 무시 (%s): %s", path, e)
            return {}, None

        return data, last_time

    def save_values(self, values: dict[str, float], now: datetime) -> None:
        path = self.tempfile_path()
        data: dict[str, float | int] = dict(values)
        data[LAST_TIME_KEY] = int(now.timestamp())

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f)
        except OSError as e:
            logger.warning("직전 값 저장 실패 (%s): %s", path, e)
