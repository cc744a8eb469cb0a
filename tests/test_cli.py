from __future__ import annotations

import json

from pathlib import Path
from typing import List

import pytest
import yaml

from bizflows.cli import main


class _JsonProvider:
    def __init__(self, *replies: dict) -> None:
        self.replies = [json.dumps(reply) for reply in replies]
        self.prompts: List[str] = []

    def generate(self, prompt: str, **kwargs):
        self.prompts.append(prompt)
        return self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]


@pytest.fixture()
def config_path(tmp_path: Path) -> Path:
    path = tmp_path / "config.yaml"
    path.write_text(
        yaml.safe_dump(
            {
                "bizflows": {
                    "llm": {"provider": "echo"},
                    "logging": {"level": "WARNING"},
                }
            }
        )
    )
    return path


def _install(monkeypatch, *replies: dict) -> dict:
    captured: dict = {}
    provider = _JsonProvider(*replies)

    def _fake_load_provider(config):
        captured["config"] = config
        captured["provider"] = provider
        return provider

    monkeypatch.setattr("bizflows.api.load_provider", _fake_load_provider)
    return captured


def test_cli_employee_ok(config_path: Path, monkeypatch, capsys) -> None:
    _install(
        monkeypatch,
        {"success": True, "name": "John Smith", "email": "john@test.com"},
    )
    exit_code = main(
        ["--config", str(config_path), "employee", "John Smith, john@test.com"]
    )
    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload == {
        "status": "ok",
        "value": {
            "success": True,
            "message": "Employee details extracted.",
            "name": "John Smith",
            "email": "john@test.com",
        },
    }


def test_cli_failed_result_exits_one(config_path: Path, monkeypatch, capsys) -> None:
    _install(monkeypatch, {"success": False})
    exit_code = main(["--config", str(config_path), "employee", "Need to add someone."])
    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 1
    assert payload["status"] == "failed"
    assert payload["reason"].startswith("Employee name is required")


def test_cli_overrides_reach_provider_config(
    config_path: Path, monkeypatch, capsys
) -> None:
    captured = _install(
        monkeypatch, {"intent": "get_details", "invoice_number": "INV-3"}
    )
    exit_code = main(
        [
            "--config",
            str(config_path),
            "--llm-provider",
            "openai",
            "--model",
            "gpt-4o-mini",
            "--api-base",
            "http://gateway.local/v1",
            "--api-key-env",
            "GATEWAY_KEY",
            "invoice",
            "Show invoice INV-3",
        ]
    )
    assert exit_code == 0
    assert captured["config"] == {
        "provider": "openai",
        "model": "gpt-4o-mini",
        "base_url": "http://gateway.local/v1",
        "api_key_env": "GATEWAY_KEY",
    }
    assert json.loads(capsys.readouterr().out)["value"]["invoice_number"] == "INV-3"


def test_cli_today_reaches_prompt(config_path: Path, monkeypatch, capsys) -> None:
    captured = _install(
        monkeypatch,
        {"success": True, "name": "Jane Doe", "start_date": "2024-07-16"},
    )
    exit_code = main(
        [
            "--config",
            str(config_path),
            "--today",
            "2024-07-15",
            "employee",
            "Jane Doe starts tomorrow",
        ]
    )
    assert exit_code == 0
    assert "which is 2024-07-15" in captured["provider"].prompts[0]
    capsys.readouterr()


def test_cli_assist_dispatches(config_path: Path, monkeypatch, capsys) -> None:
    _install(
        monkeypatch,
        {"task_type": "invoice_processing", "message": "Query classified."},
        {"intent": "update_status", "invoice_number": "INV-111", "new_status": "shipped"},
    )
    exit_code = main(["--config", str(config_path), "assist", "Mark INV-111 as shipped"])
    payload = json.loads(capsys.readouterr().out)
    assert exit_code == 0
    assert payload["classification"]["task_type"] == "invoice_processing"
    assert payload["result"]["value"]["intent"] == "unknown"
    assert "Draft, Sent, Paid, Overdue" in payload["message"]


def test_cli_schedule_and_email(config_path: Path, monkeypatch, capsys) -> None:
    _install(
        monkeypatch,
        {"suggested_times": "Tue 10am", "reasoning": "Quiet mornings."},
        {},
    )
    schedule_code = main(
        [
            "--config",
            str(config_path),
            "schedule",
            "--historical-data",
            "Tuesdays 10am earn $200",
            "--revenue-projections",
            "Up 5% next month",
            "--duration",
            "30",
            "--days",
            "Tue, Wed",
            "--slots",
            "10am-2pm",
        ]
    )
    schedule = json.loads(capsys.readouterr().out)
    email_code = main(
        [
            "--config",
            str(config_path),
            "email",
            "--invoice-id",
            "inv_1",
            "--recipient",
            "ap@acme.test",
            "--customer",
            "Acme",
            "--invoice-number",
            "INV-1",
        ]
    )
    email = json.loads(capsys.readouterr().out)
    assert schedule_code == 0
    assert schedule["value"]["suggested_times"] == "Tue 10am"
    assert email_code == 0
    assert email["value"]["message"] == (
        "Successfully simulated sending invoice INV-1 to ap@acme.test."
    )


def test_cli_usage_errors_exit_two(config_path: Path, tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_path)])
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit) as excinfo:
        main(["--today", "tomorrow", "classify", "hi"])
    assert excinfo.value.code == 2
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(tmp_path / "missing.yaml"), "classify", "hi"])
    assert excinfo.value.code == 2


def test_cli_configuration_errors_exit_two(
    config_path: Path, tmp_path: Path, monkeypatch, capsys
) -> None:
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(config_path), "--llm-provider", "nope", "classify", "x"])
    assert excinfo.value.code == 2
    assert "Unknown provider 'nope'" in capsys.readouterr().err

    monkeypatch.delenv("BIZFLOWS_UNSET_KEY", raising=False)
    with pytest.raises(SystemExit) as excinfo:
        main(
            [
                "--config",
                str(config_path),
                "--llm-provider",
                "openai",
                "--api-key-env",
                "BIZFLOWS_UNSET_KEY",
                "classify",
                "x",
            ]
        )
    assert excinfo.value.code == 2
    assert "not available" in capsys.readouterr().err

    bad_level = tmp_path / "bad_level.yaml"
    bad_level.write_text(
        yaml.safe_dump(
            {"bizflows": {"llm": {"provider": "echo"}, "logging": {"level": "chatty"}}}
        )
    )
    with pytest.raises(SystemExit) as excinfo:
        main(["--config", str(bad_level), "classify", "x"])
    assert excinfo.value.code == 2
    assert "Unknown log level" in capsys.readouterr().err
