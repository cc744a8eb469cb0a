"""CLI entrypoints for bizflows."""

from __future__ import annotations

import argparse
import json
import logging

from datetime import date
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from bizflows.api import FlowSuite
from bizflows.configuration import (
    DEFAULT_CONFIG_PATH,
    build_flow_settings,
    load_config,
)
from bizflows.exceptions import ProviderUnavailableError
from bizflows.types import Failed

_LOGGER = logging.getLogger(__name__)


def _iso_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(
            f"'{value}' is not an ISO date (YYYY-MM-DD)"
        ) from exc


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Interpret small-business requests with a language model."
    )
    parser.add_argument(
        "--config",
        type=str,
        required=False,
        help=(
            "Path to a YAML config. If omitted, uses "
            "configs/default_config.yaml when it exists."
        ),
    )
    parser.add_argument(
        "--llm-provider",
        type=str,
        help="Override the LLM provider (e.g., openai, anthropic, echo).",
    )
    parser.add_argument(
        "--model",
        type=str,
        help="Override the LLM model name.",
    )
    parser.add_argument(
        "--api-base",
        type=str,
        help="Override base URL for OpenAI compatible providers.",
    )
    parser.add_argument(
        "--api-key-env",
        type=str,
        help="Override API key environment variable name for provider.",
    )
    parser.add_argument(
        "--today",
        type=_iso_date,
        help="Reference date for relative phrases (default: today).",
    )

    sub = parser.add_subparsers(dest="command", required=True)
    for name, help_text in (
        ("classify", "Classify a request as employee, invoice or unknown."),
        ("employee", "Extract new-employee details from text."),
        ("invoice", "Interpret an invoice lookup or status update."),
        ("assist", "Classify a request and run the matching flow."),
    ):
        cmd = sub.add_parser(name, help=help_text)
        cmd.add_argument("text", type=str, help="Free-text request.")

    schedule = sub.add_parser(
        "schedule", help="Suggest appointment times from business data."
    )
    schedule.add_argument("--historical-data", required=True)
    schedule.add_argument("--revenue-projections", required=True)
    schedule.add_argument(
        "--duration",
        type=float,
        required=True,
        help="Appointment duration in minutes.",
    )
    schedule.add_argument("--days", required=True, help="Available days.")
    schedule.add_argument(
        "--slots", required=True, help="Available time slots."
    )

    email = sub.add_parser("email", help="Simulate sending an invoice email.")
    email.add_argument("--invoice-id", required=True)
    email.add_argument("--recipient", required=True)
    email.add_argument("--customer", required=True)
    email.add_argument("--invoice-number", required=True)
    return parser


def _apply_cli_overrides(
    args: argparse.Namespace, config: Dict[str, Any]
) -> Dict[str, Any]:
    llm_cfg = config.setdefault("bizflows", {}).setdefault("llm", {})
    if args.llm_provider:
        llm_cfg["provider"] = args.llm_provider
    if args.model:
        llm_cfg["model"] = args.model
    if args.api_base:
        llm_cfg["base_url"] = args.api_base
    if args.api_key_env:
        llm_cfg["api_key_env"] = args.api_key_env
    return config


def _load_cli_config(args: argparse.Namespace) -> tuple[Dict[str, Any], Path]:
    if args.config:
        config_path = Path(args.config).expanduser()
        return load_config(config_path), config_path.resolve().parent
    if DEFAULT_CONFIG_PATH.exists():
        return (
            load_config(DEFAULT_CONFIG_PATH),
            DEFAULT_CONFIG_PATH.resolve().parent,
        )
    return {}, Path.cwd()


def _run_command(
    suite: FlowSuite, args: argparse.Namespace
) -> Dict[str, Any]:
    today = args.today
    if args.command == "assist":
        outcome = suite.assist(args.text, today=today)
        payload: Dict[str, Any] = {
            "classification": outcome.classification.to_dict(),
            "message": outcome.message,
        }
        if outcome.result is not None:
            payload["result"] = _result_payload(outcome.result)
        return payload

    if args.command == "classify":
        result = suite.classify_task(args.text, today=today)
    elif args.command == "employee":
        result = suite.add_employee_by_text(args.text, today=today)
    elif args.command == "invoice":
        result = suite.process_invoice_query(args.text, today=today)
    elif args.command == "schedule":
        result = suite.suggest_appointment_times(
            historical_data=args.historical_data,
            revenue_projections=args.revenue_projections,
            appointment_duration=args.duration,
            available_days=args.days,
            available_time_slots=args.slots,
            today=today,
        )
    else:
        result = suite.send_invoice_email(
            invoice_id=args.invoice_id,
            recipient_email=args.recipient,
            customer_name=args.customer,
            invoice_number=args.invoice_number,
            today=today,
        )
    return _result_payload(result)


def _result_payload(result: Any) -> Dict[str, Any]:
    if isinstance(result, Failed):
        return {"status": "failed", "reason": result.reason}
    return {"status": "ok", "value": result.value.to_dict()}


def main(argv: Optional[list[str]] = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    load_dotenv()

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=logging.INFO, format="%(levelname)s %(name)s: %(message)s"
        )

    try:
        config_data, config_root = _load_cli_config(args)
    except (FileNotFoundError, ValueError) as exc:
        parser.error(str(exc))
    config_data = _apply_cli_overrides(args, config_data)
    try:
        settings = build_flow_settings(config_data, config_root=config_root)
        logging.getLogger().setLevel(settings.logging.level_value)
        suite = FlowSuite.from_settings(settings)
    except (FileNotFoundError, ValueError, ProviderUnavailableError) as exc:
        parser.error(str(exc))

    payload = _run_command(suite, args)
    print(json.dumps(payload, indent=2))

    status = payload.get("status")
    if args.command == "assist":
        result = payload.get("result")
        status = result["status"] if result else "ok"
    return 0 if status == "ok" else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
