"""
tests/conftest.py - pytest 공통 픽스처

CloudWatch 모킹과 테스트 헬퍼를 제공합니다.

Usage:
    def test_something(mock_cloudwatch, make_plugin):
        plugin = make_plugin(queue_name="orders", cloudwatch=mock_cloudwatch)
"""

import os
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict
from unittest.mock import MagicMock, patch

import pytest

# 프로젝트 루트를 sys.path에 추가
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))


# =============================================================================
# 환경 설정
# =============================================================================


@pytest.fixture(autouse=True)
def setup_test_environment(monkeypatch, tmp_path):
    """테스트 환경 설정"""
    monkeypatch.setenv("AWS_DEFAULT_REGION", "us-east-1")
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("MACKEREL_PLUGIN_WORKDIR", str(tmp_path))
    monkeypatch.delenv("MACKEREL_AGENT_PLUGIN_META", raising=False)

    yield


# =============================================================================
# AWS 모킹 픽스처
# =============================================================================


@pytest.fixture
def mock_boto3_session():
    """boto3.Session 모킹"""
    with patch("boto3.Session") as mock_session_class:
        mock_session = MagicMock()
        mock_session_class.return_value = mock_session

        mock_session.client.return_value = MagicMock()
        mock_session.region_name = "us-east-1"

        yield mock_session


@pytest.fixture
def now():
    """테스트 기준 시각"""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def make_datapoint(now):
    """CloudWatch Datapoint 생성 헬퍼

    Usage:
        make_datapoint(minutes_ago=2, Sum=10.0)
    """

    def _make(minutes_ago: int = 1, unit: str = "Count", **values: float) -> Dict[str, Any]:
        dp: Dict[str, Any] = {"Timestamp": now - timedelta(minutes=minutes_ago), "Unit": unit}
        dp.update(values)
        return dp

    return _make


@pytest.fixture
def mock_cloudwatch():
    """CloudWatch 클라이언트 모킹 (기본: 데이터 포인트 없음)"""
    mock_client = MagicMock()
    mock_client.get_metric_statistics.return_value = {"Label": "test", "Datapoints": []}
    yield mock_client


@pytest.fixture
def make_client_error():
    """ClientError 생성 헬퍼"""
    from botocore.exceptions import ClientError

    def _make(error_code: str, error_message: str = "Test error") -> ClientError:
        return ClientError(
            {
                "Error": {
                    "Code": error_code,
                    "Message": error_message,
                }
            },
            "GetMetricStatistics",
        )

    return _make


@pytest.fixture
def make_plugin():
    """SQSPlugin 생성 헬퍼"""
    from core.config import CollectorConfig
    from plugins.sqs import SQSPlugin

    def _make(cloudwatch=None, **config_kwargs) -> SQSPlugin:
        config_kwargs.setdefault("queue_name", "orders")
        return SQSPlugin(CollectorConfig(**config_kwargs), cloudwatch=cloudwatch)

    return _make


# =============================================================================
# moto 통합
# =============================================================================


@pytest.fixture
def aws_credentials(monkeypatch):
    """moto 사용 시 AWS 자격 증명 설정"""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")


@pytest.fixture
def moto_cloudwatch(aws_credentials):
    """moto를 사용한 CloudWatch 모킹"""
    import boto3
    from moto import mock_aws

    with mock_aws():
        yield boto3.client("cloudwatch", region_name="us-east-1")
