"""
core/config.py - 수집기 설정

CLI 옵션으로부터 한 번 구성되고 이후 변경되지 않는 수집기 설정과
SQS/CloudWatch 조회에 쓰이는 상수를 정의합니다.

Usage:
    from core.config import CollectorConfig, SelectionPolicy

    config = CollectorConfig(queue_name="orders", region="ap-northeast-2")
    config.has_static_credentials  # False → 기본 자격 증명 체인 사용
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

logger = logging.getLogger(__name__)

# AWS 기본 리전
DEFAULT_REGION = "us-east-1"

# CloudWatch 조회 상수
NAMESPACE = "AWS/SQS"
QUEUE_DIMENSION = "QueueName"
PERIOD_SECONDS = 60
WINDOW_SECONDS = 300  # 5분 (수집 지연이 있어도 데이터 포인트 1개 이상 확보)

# 기본 지표 키 접두사
DEFAULT_PREFIX_ROOT = "sqs"

_PROJECT_ROOT = Path(__file__).resolve().parent.parent


class SelectionPolicy(Enum):
    """데이터 포인트 선택 정책

    EARLIEST: 현재 시각부터 시작하는 최소 타임스탬프 추적 (기존 동작)
    LATEST: 가장 최근 타임스탬프
    """

    EARLIEST = "earliest"
    LATEST = "latest"


@dataclass(frozen=True)
class CollectorConfig:
    """SQS 지표 수집 설정

    Attributes:
        queue_name: SQS 큐 이름 (빈 값도 검증하지 않음)
        region: AWS 리전
        access_key_id: 정적 Access Key (선택)
        secret_access_key: 정적 Secret Key (선택)
        metric_key_prefix: 출력 키 접두사 (빈 값이면 "sqs.<queue_name>")
        tempfile: 이전 값 저장 파일 경로 (출력 헬퍼에 그대로 전달)
        selection: 데이터 포인트 선택 정책
        max_workers: 동시 조회 수 (1이면 순차 실행)
        read_minimum: Minimum 통계 값을 읽을지 여부 (기본값 False이면 0 출력)
    """

    queue_name: str = ""
    region: str = DEFAULT_REGION
    access_key_id: str = ""
    secret_access_key: str = ""
    metric_key_prefix: str = ""
    tempfile: str = ""
    selection: SelectionPolicy = SelectionPolicy.EARLIEST
    max_workers: int = 1
    read_minimum: bool = False

    @property
    def has_static_credentials(self) -> bool:
        """Access Key/Secret Key가 모두 지정되었는지 여부"""
        return bool(self.access_key_id and self.secret_access_key)


def get_version() -> str:
    """버전 문자열 반환

    프로젝트 루트의 version.txt에서 읽어옴
    """
    version_file = _PROJECT_ROOT / "version.txt"
    try:
        with open(version_file, encoding="utf-8") as f:
            return f.read().strip()
    except OSError as e:
        logger.debug("Failed to read version file: %s", e)
    return "0.0.1"
