import json
import logging

import httpx
from typer.testing import CliRunner

import psnauth.cli.commands as commands
from psnauth.auth import account, flow
from psnauth.auth.constants import DUID_PREFIX

runner = CliRunner()

REDIRECT = "https://remoteplay.dl.playstation.net/remoteplay/redirect?code=ABC123"


def _write_config(tmp_path, **overrides) -> str:
    data = {
        "credentialsPath": str(tmp_path / "creds" / "token.txt"),
        "tokenPath": str(tmp_path / "bare.txt"),
    }
    data.update(overrides)
    path = tmp_path / "config.json"
    path.write_text(json.dumps(data), encoding="utf-8")
    return str(path)


def _mock_token_endpoint(monkeypatch, payload: dict, seen: list) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=payload)

    transport = httpx.MockTransport(handler)
    monkeypatch.setattr(
        commands, "exchange_code", lambda code, config: flow.exchange_code(code, config, transport=transport)
    )
    monkeypatch.setattr(
        commands, "refresh_token", lambda refresh, config: flow.refresh_token(refresh, config, transport=transport)
    )


def test_login_headless_prints_url_and_persists_tokens(monkeypatch, tmp_path) -> None:
    seen: list[httpx.Request] = []
    _mock_token_endpoint(monkeypatch, {"access_token": "A", "refresh_token": "B", "expires_in": 3600}, seen)
    opened: list[str] = []
    monkeypatch.setattr(commands.webbrowser, "open", opened.append)
    config = _write_config(tmp_path)

    result = runner.invoke(commands.app, ["login", "--headless", "--config", config], input=REDIRECT + "\n")

    assert result.exit_code == 0, result.output
    assert "[Headless]" in result.output
    assert f"duid={DUID_PREFIX}" in result.output
    assert opened == []
    assert (tmp_path / "creds" / "token.txt").read_text(encoding="utf-8").splitlines() == [
        "Access Token: A",
        "Refresh Token: B",
        "Expiry Date: 3600",
    ]
    assert (tmp_path / "bare.txt").read_text(encoding="utf-8") == "A"
    assert "code=ABC123" in seen[0].content.decode("utf-8")


def test_login_opens_browser_after_enter(monkeypatch, tmp_path) -> None:
    _mock_token_endpoint(monkeypatch, {"access_token": "A", "refresh_token": "B", "expires_in": 1}, [])
    opened: list[str] = []
    monkeypatch.setattr(commands.webbrowser, "open", opened.append)
    config = _write_config(tmp_path)

    result = runner.invoke(commands.app, ["login", "--config", config], input="\n" + REDIRECT + "\n")

    assert result.exit_code == 0, result.output
    assert len(opened) == 1
    assert "duid=" + DUID_PREFIX in opened[0]


def test_login_without_code_fails_before_network(monkeypatch, tmp_path) -> None:
    seen: list[httpx.Request] = []
    _mock_token_endpoint(monkeypatch, {}, seen)
    config = _write_config(tmp_path)

    result = runner.invoke(
        commands.app,
        ["login", "--headless", "--config", config],
        input="https://remoteplay.dl.playstation.net/remoteplay/redirect?error=x\n",
    )

    assert result.exit_code == 4
    assert "Invalid URL has been submitted" in result.output
    assert seen == []
    assert not (tmp_path / "bare.txt").exists()


def test_refresh_reads_refresh_token_from_credentials_file(monkeypatch, tmp_path) -> None:
    seen: list[httpx.Request] = []
    _mock_token_endpoint(monkeypatch, {"access_token": "A2", "refresh_token": "B2", "expires_in": 60}, seen)
    creds = tmp_path / "creds" / "token.txt"
    creds.parent.mkdir()
    creds.write_text("Access Token: A\nRefresh Token: OLD\nExpiry Date: 3600\n", encoding="utf-8")
    config = _write_config(tmp_path)

    result = runner.invoke(commands.app, ["refresh", "--config", config])

    assert result.exit_code == 0, result.output
    assert "refresh_token=OLD" in seen[0].content.decode("utf-8")
    assert creds.read_text(encoding="utf-8") == "Access Token: A2\nRefresh Token: B2\nExpiry Date: 60\n"
    assert (tmp_path / "bare.txt").read_text(encoding="utf-8") == "A2"


def test_refresh_option_wins_over_config(monkeypatch, tmp_path) -> None:
    seen: list[httpx.Request] = []
    _mock_token_endpoint(monkeypatch, {"access_token": "A", "refresh_token": "B", "expires_in": 60}, seen)
    config = _write_config(tmp_path, refreshToken="FROM_CONFIG")

    result = runner.invoke(commands.app, ["refresh", "--refresh-token", "FROM_FLAG", "--config", config])

    assert result.exit_code == 0, result.output
    assert "refresh_token=FROM_FLAG" in seen[0].content.decode("utf-8")


def test_refresh_without_any_token_fails(monkeypatch, tmp_path) -> None:
    seen: list[httpx.Request] = []
    _mock_token_endpoint(monkeypatch, {}, seen)
    config = _write_config(tmp_path)

    result = runner.invoke(commands.app, ["refresh", "--config", config])

    assert result.exit_code == 2
    assert seen == []


def test_bad_config_exits_with_config_error(tmp_path) -> None:
    path = tmp_path / "config.json"
    path.write_text("{", encoding="utf-8")

    result = runner.invoke(commands.app, ["refresh", "--config", str(path)])

    assert result.exit_code == 2
    assert "Error:" in result.output


def test_account_id_uses_bare_token_file(monkeypatch, tmp_path) -> None:
    captured: dict[str, str] = {}

    def fake_fetch(access: str, config) -> str:
        captured["access"] = access
        return "AQAAAAAAAAA="

    monkeypatch.setattr(commands, "fetch_account_id", fake_fetch)
    (tmp_path / "bare.txt").write_text("A", encoding="utf-8")
    config = _write_config(tmp_path)

    result = runner.invoke(commands.app, ["account-id", "--config", config])

    assert result.exit_code == 0, result.output
    assert captured["access"] == "A"
    assert "AQAAAAAAAAA=" in result.output


def test_duid_command_prints_identifier() -> None:
    result = runner.invoke(commands.app, ["duid"])

    assert result.exit_code == 0
    assert result.output.strip().startswith(DUID_PREFIX)
    assert len(result.output.strip()) == 48


def test_onboard_writes_default_config(tmp_path) -> None:
    path = tmp_path / "config.json"

    result = runner.invoke(commands.app, ["onboard", "--config", str(path)])

    assert result.exit_code == 0, result.output
    data = json.loads(path.read_text(encoding="utf-8"))
    assert data["clientId"] == "ba495a24-818c-472b-b12d-ff231c1b5745"
    assert "tokenPath" in data


def test_config_value_of_wrong_type_exits_with_config_error(tmp_path) -> None:
    config = _write_config(tmp_path, clientId=123)

    result = runner.invoke(commands.app, ["refresh", "-r", "R", "--config", config])

    assert result.exit_code == 2
    assert "clientId" in result.output


def test_unwritable_credentials_path_exits_with_storage_error(monkeypatch, tmp_path) -> None:
    _mock_token_endpoint(monkeypatch, {"access_token": "A", "refresh_token": "B", "expires_in": 60}, [])
    blocker = tmp_path / "blocker"
    blocker.write_text("", encoding="utf-8")
    config = _write_config(tmp_path, credentialsPath=str(blocker / "creds.txt"))

    result = runner.invoke(commands.app, ["refresh", "-r", "R", "--config", config])

    assert result.exit_code == 1
    assert "Error: File does not exist or cannot be created" in result.output
    assert not (tmp_path / "bare.txt").exists()


def test_verbose_account_id_never_logs_access_token(monkeypatch, tmp_path, caplog) -> None:
    transport = httpx.MockTransport(lambda request: httpx.Response(200, json={"user_id": "1"}))
    monkeypatch.setattr(
        commands, "fetch_account_id", lambda access, config: account.fetch_account_id(access, config, transport=transport)
    )
    caplog.set_level(logging.DEBUG)
    config = _write_config(tmp_path)

    result = runner.invoke(commands.app, ["account-id", "-a", "SECRETACCESS", "--config", config, "-v"])

    assert result.exit_code == 0, result.output
    assert "SECRETACCESS" not in caplog.text
    assert "SECRETACCESS" not in result.output


def test_duid_command_uses_configured_prefix(tmp_path) -> None:
    config = _write_config(tmp_path, duidPrefix="abcdefabcdefabcd")

    result = runner.invoke(commands.app, ["duid", "--config", config])

    assert result.exit_code == 0, result.output
    assert result.output.strip().startswith("abcdefabcdefabcd")
    assert len(result.output.strip()) == 48
