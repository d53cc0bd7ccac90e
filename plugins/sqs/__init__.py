"""
plugins/sqs - SQS 큐 CloudWatch 지표 플러그인
"""

from .metrics import METRICS, AggregationKind, MetricDescriptor
from .plugin import FetchResult, SQSPlugin

__all__: list[str] = [
    "AggregationKind",
    "FetchResult",
    "METRICS",
    "MetricDescriptor",
    "SQSPlugin",
]
