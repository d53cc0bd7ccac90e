"""
plugins/sqs/graphs.py - SQS 그래프 정의

세 개의 그래프 그룹(메시지 수, 메시지 크기, 큐 상태)을 데이터 테이블로 선언합니다.
"""

from __future__ import annotations

from core.mackerel import Graph, GraphMetric

# (그룹 키, 레이블 접미사, 단위, [(지표 이름, 표시 레이블)])
GRAPH_GROUPS: tuple[tuple[str, str, str, tuple[tuple[str, str], ...]], ...] = (
    (
        "messages",
        "Message",
        "integer",
        (
            ("NumberOfMessagesSent", "NumberOfMessagesSent"),
            ("NumberOfMessagesReceived", "NumberOfMessagesReceived"),
            ("NumberOfMessagesDeleted", "NumberOfMessagesDeleted"),
            ("NumberOfEmptyReceives", "NumberOfEmptyReceives"),
        ),
    ),
    (
        "message_size",
        "Sent Message Size",
        "bytes",
        (
            ("SentMessageSizeAverage", "SentMessageSizeAvg"),
            ("SentMessageSizeMax", "SentMessageSizeMax"),
            ("SentMessageSizeMin", "SentMessageSizeMin"),
        ),
    ),
    (
        "queue",
        "Approximate Message",
        "integer",
        (
            ("ApproximateNumberOfMessagesDelayed", "ApproximateNumberOfMessagesDelayed"),
            ("ApproximateNumberOfMessagesVisible", "ApproximateNumberOfMessagesVisible"),
            ("ApproximateNumberOfMessagesNotVisible", "ApproximateNumberOfMessagesNotVisible"),
            ("ApproximateAgeOfOldestMessage", "ApproximateAgeOfOldestMessage"),
        ),
    ),
)


def build_graph_definition(queue_name: str) -> dict[str, Graph]:
    """큐 이름이 레이블에 들어간 그래프 정의 생성"""
    return {
        key: Graph(
            label=f"{queue_name} {label}",
            unit=unit,
            metrics=tuple(GraphMetric(name=name, label=metric_label) for name, metric_label in metrics),
        )
        for key, label, unit, metrics in GRAPH_GROUPS
    }
