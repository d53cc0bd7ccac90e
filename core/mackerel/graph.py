"""
core/mackerel/graph.py - 그래프 정의 데이터 타입

mackerel-agent가 대시보드를 그릴 때 사용하는 그래프 메타데이터입니다.

GraphMetric의 diff/scale은 mackerel 플러그인 헬퍼 규약의 필드로 그대로 지원합니다.
SQS 그래프는 두 필드를 사용하지 않으며 출력 헬퍼 테스트에서만 쓰입니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


def title(name: str) -> str:
    """레이블이 없을 때 쓰는 기본 표시 이름 ("message_size" → "Message Size")"""
    for old, new in ((".", " "), ("_", " "), ("*", ""), ("#", "")):
        name = name.replace(old, new)
    return " ".join(word[:1].upper() + word[1:] for word in name.split())


@dataclass(frozen=True)
class GraphMetric:
    """그래프에 속한 지표 하나

    Attributes:
        name: 지표 이름 (fetch 결과 매핑의 키)
        label: 표시 이름 (빈 값이면 name에서 생성)
        diff: 이전 값과의 분당 차이로 출력할지 여부
        stacked: 누적 그래프 여부
        scale: 출력 시 곱할 배율 (0이면 적용 안 함)
    """

    name: str
    label: str = ""
    diff: bool = False
    stacked: bool = False
    scale: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "label": self.label or title(self.name),
            "stacked": self.stacked,
        }


@dataclass(frozen=True)
class Graph:
    """그래프 그룹

    Attributes:
        label: 그래프 제목
        unit: 단위 ("integer", "float", "bytes", "percentage" 등)
        metrics: 그래프에 속한 지표 목록
    """

    label: str
    unit: str
    metrics: tuple[GraphMetric, ...] = field(default_factory=tuple)

    def to_dict(self, key: str = "") -> dict[str, Any]:
        return {
            "label": self.label or title(key),
            "unit": self.unit,
            "metrics": [m.to_dict() for m in self.metrics],
        }
