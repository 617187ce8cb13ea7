import click.testing
import pytest
import simplejson as json

import qprotocol.cli.base
from qprotocol.cli import cli
from qprotocol.restful import RestfulClient

URL = "http://qserver.test/"


@pytest.fixture
def cli_runner():
    return click.testing.CliRunner()


@pytest.fixture(autouse=True)
def mock_client(monkeypatch, http_client):
    """Route every client the CLI builds through the scripted server."""

    def factory(url):
        return RestfulClient(url, http_client=http_client)

    monkeypatch.setattr(qprotocol.cli.base, "RestfulClient", factory)


class TestRequestCommands:
    def test_get_prints_json(self, cli_runner, qserver):
        qserver.reply('{"SerialNumber":"QS-1","Channels":[1,2]}')
        result = cli_runner.invoke(cli, ["get", URL, "system/info"])
        assert result.exit_code == 0
        assert json.loads(result.output) == {"SerialNumber": "QS-1", "Channels": [1, 2]}
        assert str(qserver.last_request.url) == URL + "system/info"

    def test_get_plain_text(self, cli_runner, qserver):
        qserver.reply("ready")
        result = cli_runner.invoke(cli, ["get", URL, "system/state"])
        assert result.exit_code == 0
        assert result.output.strip() == "ready"

    def test_put_with_body_and_params(self, cli_runner, qserver):
        result = cli_runner.invoke(
            cli,
            ["put", URL, "hardware/channel", "-p", "id=3", "-b", '{"Enabled": true}'],
        )
        assert result.exit_code == 0
        assert result.output.strip() == "OK"
        request = qserver.last_request
        assert request.method == "PUT"
        assert str(request.url) == URL + "hardware/channel?id=3"
        assert json.loads(request.content) == {"Enabled": True}

    def test_put_default_body_is_null(self, cli_runner, qserver):
        result = cli_runner.invoke(cli, ["put", URL, "acquisition/start"])
        assert result.exit_code == 0
        assert qserver.last_request.content == b"null"

    def test_put_invalid_body(self, cli_runner, qserver):
        result = cli_runner.invoke(cli, ["put", URL, "x", "-b", "{not json"])
        assert result.exit_code == 2
        assert qserver.requests == []

    def test_bad_param_format(self, cli_runner, qserver):
        result = cli_runner.invoke(cli, ["delete", URL, "x", "-p", "noequals"])
        assert result.exit_code == 2
        assert "name=value" in result.output

    def test_delete_failure_exits_1(self, cli_runner, qserver):
        body = '{"TypeCode": "x", "StatusCode": "ChannelDisabled", "Message": "off"}'
        qserver.reply(body)
        result = cli_runner.invoke(cli, ["delete", URL, "buffers", "-p", "id=2"])
        assert result.exit_code == 1
        assert "ChannelDisabled" in result.output
        assert "Last response" in result.output

    def test_unsupported_http_status_exits_1(self, cli_runner, qserver):
        qserver.reply("nope", 503)
        result = cli_runner.invoke(cli, ["get", URL, "x"])
        assert result.exit_code == 1
        assert "GET command failed: x" in result.output


class TestLogOptions:
    def test_log_file_and_traffic_log(self, cli_runner, qserver, tmp_path):
        log_file = tmp_path / "client.log"
        traffic_log = tmp_path / "traffic.log"
        qserver.reply("ready")
        result = cli_runner.invoke(
            cli,
            [
                "get",
                URL,
                "system/state",
                "--log-file",
                str(log_file),
                "--traffic-log",
                str(traffic_log),
                "-ll",
                "DEBUG",
            ],
        )
        assert result.exit_code == 0
        assert "Client log started" in log_file.read_text()
        traffic = traffic_log.read_text()
        assert "-> GET " + URL + "system/state" in traffic
        assert "<- 200 ready" in traffic


class TestStatusCommands:
    def test_status_reports_failure_without_failing(self, cli_runner, qserver):
        qserver.reply('{"TypeCode": "Ch", "StatusCode": "InvalidId", "Message": "bad"}')
        result = cli_runner.invoke(cli, ["status", URL, "hardware/channel"])
        assert result.exit_code == 0
        assert "InvalidId" in result.output
        assert "bad" in result.output

    def test_status_unknown_code(self, cli_runner, qserver):
        qserver.reply('{"TypeCode": "Ch", "StatusCode": "Melted", "Message": ""}')
        result = cli_runner.invoke(cli, ["status", URL, "x"])
        assert result.exit_code == 0
        assert "unknown (Melted)" in result.output

    def test_codes_lists_all(self, cli_runner):
        result = cli_runner.invoke(cli, ["codes"])
        assert result.exit_code == 0
        assert "RequiresRestart" in result.output
        assert "CanFdChannelOnly" in result.output


def test_tree(cli_runner):
    result = cli_runner.invoke(cli, ["--tree"])
    assert result.exit_code == 0
    for name in ("codes", "delete", "get", "put", "status"):
        assert f"└── {name}" in result.output
