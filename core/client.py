"""
core/client.py - boto3 session/client 생성 헬퍼

타임아웃이 설정된 boto3 client를 생성합니다.
플러그인은 재시도하지 않으므로 기본 시도 횟수는 1회입니다.

주요 구성 요소:
- create_session: 정적 자격 증명 또는 기본 자격 증명 체인으로 Session 생성
- get_client: botocore Config가 적용된 boto3 client 생성

Example:
    from core.client import create_session, get_client

    session = create_session(access_key_id="", secret_access_key="")
    cloudwatch = get_client(session, "cloudwatch", region_name="us-east-1")
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Literal, cast

if TYPE_CHECKING:
    import boto3

logger = logging.getLogger(__name__)

# Retry mode 타입 (botocore TypedDict와 호환)
RetryMode = Literal["legacy", "standard", "adaptive"]

DEFAULT_MAX_ATTEMPTS = 1  # 재시도 없음
DEFAULT_RETRY_MODE: RetryMode = "standard"
DEFAULT_CONNECT_TIMEOUT = 10  # 초
DEFAULT_READ_TIMEOUT = 30  # 초
DEFAULT_MAX_POOL_CONNECTIONS = 11  # 카탈로그 지표 수 이상


def create_session(access_key_id: str = "", secret_access_key: str = "") -> boto3.Session:
    """boto3 Session 생성

    두 키가 모두 지정된 경우에만 정적 자격 증명을 사용하고,
    하나라도 비어 있으면 기본 자격 증명 체인(환경변수, 프로파일, IAM Role)을 사용합니다.

    Args:
        access_key_id: AWS Access Key ID
        secret_access_key: AWS Secret Access Key

    Returns:
        boto3 Session
    """
    import boto3

    if access_key_id and secret_access_key:
        logger.debug("정적 자격 증명으로 Session 생성")
        return boto3.Session(
            aws_access_key_id=access_key_id,
            aws_secret_access_key=secret_access_key,
        )

    logger.debug("기본 자격 증명 체인으로 Session 생성")
    return boto3.Session()


def get_client(
    session: boto3.Session,
    service_name: str,
    region_name: str | None = None,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
    retry_mode: RetryMode = DEFAULT_RETRY_MODE,
    connect_timeout: int = DEFAULT_CONNECT_TIMEOUT,
    read_timeout: int = DEFAULT_READ_TIMEOUT,
    max_pool_connections: int = DEFAULT_MAX_POOL_CONNECTIONS,
    **kwargs: Any,
) -> Any:
    """botocore Config가 적용된 boto3 client 생성

    Args:
        session: boto3 Session
        service_name: AWS 서비스 이름 (cloudwatch 등)
        region_name: 리전 (None이면 세션 기본값)
        max_attempts: 최대 시도 횟수 (기본: 1, 재시도 없음)
        retry_mode: 재시도 모드
        connect_timeout: 연결 타임아웃 (초)
        read_timeout: 읽기 타임아웃 (초)
        max_pool_connections: HTTP 연결 풀 크기
        **kwargs: session.client()에 전달할 추가 인자

    Returns:
        boto3 client
    """
    from botocore.config import Config

    config = Config(
        retries={"max_attempts": max_attempts, "mode": retry_mode},  # pyright: ignore[reportArgumentType]
        connect_timeout=connect_timeout,
        read_timeout=read_timeout,
        max_pool_connections=max_pool_connections,
    )

    # 기존 config가 있으면 병합
    if "config" in kwargs:
        existing = kwargs.pop("config")
        config = config.merge(existing)

    # cast to Any to bypass boto3-stubs Literal type requirements
    return session.client(  # pyright: ignore[reportCallIssue]
        cast(Any, service_name),
        region_name=region_name,
        config=config,
        **kwargs,
    )
