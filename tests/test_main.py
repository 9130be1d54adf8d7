import json
import respx
from typer.testing import CliRunner

from shipper.main import app

ENDPOINT = "https://api.airbox.test/v1/ingest"

runner = CliRunner()

def _config(tmp_path, inbox) -> str:
    p = tmp_path / "shipper.yml"
    p.write_text(
        "\n".join(
            [
                f'path_pattern: "{inbox}/*.json"',
                "max_files: 5",
                f'api_endpoint: "{ENDPOINT}"',
                'api_token: "test_token"',
                'server_key: "test_server_key"',
                "check_interval: 10s",
            ]
        ),
        encoding="utf-8",
    )
    return str(p)

def test_missing_config_exits_non_zero(tmp_path):
    result = runner.invoke(app, ["--config", str(tmp_path / "missing.yml"), "--once"])
    assert result.exit_code == 1

def test_malformed_config_exits_non_zero(tmp_path):
    p = tmp_path / "bad.yml"
    p.write_text("max_files: [", encoding="utf-8")
    result = runner.invoke(app, ["--config", str(p), "--once"])
    assert result.exit_code == 1

@respx.mock
def test_once_with_nothing_to_do(tmp_path, inbox):
    route = respx.post(ENDPOINT).respond(200)
    result = runner.invoke(app, ["--config", _config(tmp_path, inbox), "--once"])
    assert result.exit_code == 0
    assert not route.called

@respx.mock
def test_once_ships_and_deletes(tmp_path, inbox, write_json):
    route = respx.post(ENDPOINT).respond(200)
    write_json("a.json", {"sensor": "a", "value": 1})

    result = runner.invoke(app, ["--config", _config(tmp_path, inbox), "--once"])

    assert result.exit_code == 0
    assert json.loads(route.calls.last.request.content) == {"data": [{"sensor": "a", "value": 1}]}
    assert list(inbox.iterdir()) == []

@respx.mock
def test_once_reports_delivery_failure(tmp_path, inbox, write_json):
    respx.post(ENDPOINT).respond(503)
    write_json("a.json", {"sensor": "a"})

    result = runner.invoke(app, ["--config", _config(tmp_path, inbox), "--once"])

    assert result.exit_code == 1
    assert [p.name for p in inbox.iterdir()] == ["a.json"]
