"""
cli/app.py - 메인 CLI 엔트리포인트

Click 기반의 mackerel-agent 플러그인 진입점입니다.
한 번 실행될 때마다 SQS 큐 지표를 조회해 출력하고 종료합니다.

명령어 구조:
    mackerel-plugin-sqs -queue-name orders
    mackerel-plugin-sqs -queue-name orders -region ap-northeast-2 -metric-key-prefix custom
    MACKEREL_AGENT_PLUGIN_META=1 mackerel-plugin-sqs -queue-name orders   # 그래프 정의 출력

옵션 이름은 -queue-name, --queue-name 두 형식을 모두 받습니다.

종료 코드:
    0: 실행 완료 (일부 지표 실패 포함)
    1: CloudWatch 클라이언트 생성 실패

Usage:
    $ mackerel-plugin-sqs --version
    $ python -m cli.app -queue-name orders
"""

import logging
import sys
from pathlib import Path

# 프로젝트 루트를 sys.path에 추가 (plugins 모듈 임포트를 위함)
_project_root = Path(__file__).resolve().parent.parent
if str(_project_root) not in sys.path:
    sys.path.insert(0, str(_project_root))

import click  # noqa: E402

from cli.ui import print_error, setup_logging  # noqa: E402
from core.config import DEFAULT_REGION, CollectorConfig, SelectionPolicy, get_version  # noqa: E402
from core.exceptions import ClientInitError, format_error_for_user  # noqa: E402
from core.mackerel import MackerelPlugin  # noqa: E402
from plugins.sqs import SQSPlugin  # noqa: E402

logger = logging.getLogger(__name__)

VERSION = get_version()


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(VERSION, prog_name="mackerel-plugin-sqs")
@click.option("-queue-name", "--queue-name", "queue_name", default="", help="SQS Queue Name")
@click.option("-region", "--region", "region", default=DEFAULT_REGION, show_default=True, help="AWS Region")
@click.option("-access-key-id", "--access-key-id", "access_key_id", default="", help="AWS Access Key ID")
@click.option(
    "-secret-access-key", "--secret-access-key", "secret_access_key", default="", help="AWS Secret Access key"
)
@click.option("-metric-key-prefix", "--metric-key-prefix", "metric_key_prefix", default="", help="metric key prefix")
@click.option("-tempfile", "--tempfile", "tempfile", default="", help="tmpfile")
@click.option(
    "--datapoint",
    type=click.Choice([p.value for p in SelectionPolicy]),
    default=SelectionPolicy.EARLIEST.value,
    show_default=True,
    help="데이터 포인트 선택 정책",
)
@click.option("--workers", type=click.IntRange(min=1), default=1, show_default=True, help="동시 조회 수")
@click.option("--read-minimum", is_flag=True, help="SentMessageSizeMin에 Minimum 통계 값 출력 (기본: 0)")
@click.option("--debug", is_flag=True, help="디버그 로그 출력")
def cli(
    queue_name: str,
    region: str,
    access_key_id: str,
    secret_access_key: str,
    metric_key_prefix: str,
    tempfile: str,
    datapoint: str,
    workers: int,
    read_minimum: bool,
    debug: bool,
) -> None:
    """SQS CloudWatch 지표를 mackerel-agent 플러그인 형식으로 출력"""
    setup_logging(debug)

    config = CollectorConfig(
        queue_name=queue_name,
        region=region,
        access_key_id=access_key_id,
        secret_access_key=secret_access_key,
        metric_key_prefix=metric_key_prefix,
        tempfile=tempfile,
        selection=SelectionPolicy(datapoint),
        max_workers=workers,
        read_minimum=read_minimum,
    )

    plugin = SQSPlugin(config)
    try:
        plugin.prepare()
    except ClientInitError as e:
        logger.debug("클라이언트 생성 실패 상세", exc_info=e)
        print_error(format_error_for_user(e))
        raise SystemExit(1) from e

    helper = MackerelPlugin(plugin, tempfile=config.tempfile)
    helper.run()


if __name__ == "__main__":
    cli()
