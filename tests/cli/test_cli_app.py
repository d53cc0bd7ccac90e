# tests/cli/test_cli_app.py
"""
cli/app.py 단위 테스트

CLI 메인 엔트리포인트 테스트.
"""

import json
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from core.exceptions import ClientInitError


@pytest.fixture
def runner():
    """Click CliRunner"""
    return CliRunner()


@pytest.fixture
def prepared(mock_cloudwatch):
    """prepare()가 mock CloudWatch 클라이언트를 주입하도록 패치"""
    from plugins.sqs import SQSPlugin

    def _prepare(self):
        self.cloudwatch = mock_cloudwatch

    with patch.object(SQSPlugin, "prepare", _prepare):
        yield mock_cloudwatch


def metric_lines(output: str, prefix: str = "sqs.") -> list[str]:
    return [line for line in output.splitlines() if line.startswith(prefix)]


# =============================================================================
# 기본 옵션
# =============================================================================


class TestCLIOptions:
    """CLI 옵션 테스트"""

    def test_version_option(self, runner):
        """--version 옵션 테스트"""
        from cli.app import cli

        result = runner.invoke(cli, ["--version"])

        assert result.exit_code == 0
        assert "mackerel-plugin-sqs" in result.output

    def test_help_option(self, runner):
        """--help 옵션 테스트"""
        from cli.app import cli

        result = runner.invoke(cli, ["--help"])

        assert result.exit_code == 0
        assert "-queue-name" in result.output
        assert "-metric-key-prefix" in result.output


# =============================================================================
# 실행
# =============================================================================


class TestCLIRun:
    """플러그인 실행 테스트"""

    def test_prints_values(self, runner, prepared, make_datapoint):
        """지표 값 출력"""
        from cli.app import cli

        prepared.get_metric_statistics.return_value = {
            "Datapoints": [make_datapoint(Sum=4.0, Average=2.0, Maximum=8.0, Minimum=1.0)]
        }

        result = runner.invoke(cli, ["-queue-name", "orders"])

        assert result.exit_code == 0
        lines = metric_lines(result.output)
        assert len(lines) == 11
        key, value, timestamp = lines[0].split("\t")
        assert key == "sqs.orders.messages.NumberOfMessagesSent"
        assert value == "4.000000"
        assert timestamp.isdigit()

    def test_double_dash_and_prefix(self, runner, prepared, make_datapoint):
        """--queue-name 형식과 접두사 지정"""
        from cli.app import cli

        prepared.get_metric_statistics.return_value = {"Datapoints": [make_datapoint(Sum=1.0)]}

        result = runner.invoke(cli, ["--queue-name", "orders", "-metric-key-prefix", "custom"])

        assert result.exit_code == 0
        assert metric_lines(result.output, "custom.")
        assert not metric_lines(result.output, "sqs.")

    def test_failed_metrics_do_not_change_exit_code(self, runner, prepared):
        """지표 조회가 모두 실패해도 종료 코드 0"""
        from cli.app import cli

        result = runner.invoke(cli, ["-queue-name", "orders"])

        assert result.exit_code == 0
        assert metric_lines(result.output) == []

    def test_client_init_failure(self, runner):
        """클라이언트 생성 실패 시 종료 코드 1"""
        from cli.app import cli
        from plugins.sqs import SQSPlugin

        with patch.object(SQSPlugin, "prepare", side_effect=ClientInitError("us-east-1", "broken")):
            result = runner.invoke(cli, ["-queue-name", "orders"])

        assert result.exit_code == 1
        assert metric_lines(result.output) == []

    def test_region_passed_to_client(self, runner, mock_cloudwatch):
        """-region 값으로 클라이언트 생성"""
        from cli.app import cli

        with patch("plugins.sqs.plugin.get_client", return_value=mock_cloudwatch) as mock_get_client:
            result = runner.invoke(cli, ["-queue-name", "orders", "-region", "ap-northeast-2"])

        assert result.exit_code == 0
        assert mock_get_client.call_args.kwargs["region_name"] == "ap-northeast-2"

    def test_latest_datapoint_option(self, runner, prepared, make_datapoint):
        """--datapoint latest"""
        from cli.app import cli

        prepared.get_metric_statistics.return_value = {
            "Datapoints": [make_datapoint(minutes_ago=1, Sum=2.0), make_datapoint(minutes_ago=4, Sum=1.0)]
        }

        earliest = runner.invoke(cli, ["-queue-name", "orders"])
        latest = runner.invoke(cli, ["-queue-name", "orders", "--datapoint", "latest", "--workers", "4"])

        assert metric_lines(earliest.output)[0].split("\t")[1] == "1.000000"
        assert metric_lines(latest.output)[0].split("\t")[1] == "2.000000"

    def test_read_minimum_option(self, runner, prepared, make_datapoint):
        """--read-minimum 지정 시에만 SentMessageSizeMin 값 출력"""
        from cli.app import cli

        prepared.get_metric_statistics.return_value = {"Datapoints": [make_datapoint(Minimum=64.0)]}

        def size_min(output):
            line = next(x for x in metric_lines(output) if x.startswith("sqs.orders.message_size.SentMessageSizeMin\t"))
            return line.split("\t")[1]

        default = runner.invoke(cli, ["-queue-name", "orders"])
        opted_in = runner.invoke(cli, ["-queue-name", "orders", "--read-minimum"])

        assert size_min(default.output) == "0.000000"
        assert size_min(opted_in.output) == "64.000000"

    def test_tempfile_written(self, runner, prepared, make_datapoint, tmp_path):
        """-tempfile 경로에 직전 값 저장"""
        from cli.app import cli

        prepared.get_metric_statistics.return_value = {"Datapoints": [make_datapoint(Sum=7.0)]}
        path = tmp_path / "sqs.json"

        result = runner.invoke(cli, ["-queue-name", "orders", "-tempfile", str(path)])

        assert result.exit_code == 0
        saved = json.loads(path.read_text())
        assert saved["NumberOfMessagesSent"] == 7.0
        assert "_lastTime" in saved

    def test_meta_mode(self, runner, prepared):
        """MACKEREL_AGENT_PLUGIN_META 설정 시 그래프 정의 출력"""
        from cli.app import cli

        result = runner.invoke(cli, ["-queue-name", "orders"], env={"MACKEREL_AGENT_PLUGIN_META": "1"})

        assert result.exit_code == 0
        lines = result.output.splitlines()
        header = lines.index("# mackerel-agent-plugin")
        graphs = json.loads(lines[header + 1])["graphs"]
        assert set(graphs) == {"sqs.orders.messages", "sqs.orders.message_size", "sqs.orders.queue"}
        prepared.get_metric_statistics.assert_not_called()
