# core/__init__.py
"""
core - 플러그인 공통 인프라

아키텍처:
    core/
    ├── mackerel/       # mackerel-agent 출력 규약 (그래프 정의, 값 출력, tempfile)
    ├── client.py       # boto3 session/client 생성
    ├── config.py       # 수집 설정 및 상수
    ├── errors.py       # 지표 조회 에러 수집기
    └── exceptions.py   # 통합 예외 계층

Usage:
    from core.config import CollectorConfig
    from core.exceptions import MetricFetchError, format_error_for_user

    config = CollectorConfig(queue_name="orders")
"""

from core import client, config, errors, exceptions, mackerel

__all__: list[str] = [
    # 서브패키지
    "mackerel",
    # 모듈
    "client",
    "config",
    "errors",
    "exceptions",
]
