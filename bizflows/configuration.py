"""Typed helpers for parsing bizflows configuration dictionaries."""

from __future__ import annotations

import logging

from copy import deepcopy
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

DEFAULT_CONFIG_PATH = Path("configs/default_config.yaml")


def _ensure_path(value: str | Path, *, config_root: Path) -> Path:
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (config_root / path).resolve()
    return path


def _optional_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _optional_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


@dataclass(frozen=True)
class LLMSettings:
    provider: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    base_url: Optional[str] = None
    api_key_env: Optional[str] = None
    timeout_s: Optional[float] = None

    def as_provider_config(self) -> Dict[str, Any]:
        """Return the dict form ``load_provider`` expects."""

        return {
            key: value
            for key, value in {
                "provider": self.provider,
                "model": self.model,
                "temperature": self.temperature,
                "max_tokens": self.max_tokens,
                "base_url": self.base_url,
                "api_key_env": self.api_key_env,
                "timeout_s": self.timeout_s,
            }.items()
            if value is not None
        }


@dataclass(frozen=True)
class PromptSettings:
    templates_dir: Optional[Path] = None
    override_dirs: Tuple[Path, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class LoggingSettings:
    level: str = "INFO"
    log_file: Optional[Path] = None

    @property
    def level_value(self) -> int:
        value = logging.getLevelName(self.level.upper())
        if not isinstance(value, int):
            raise ValueError(f"Unknown log level '{self.level}'")
        return value


@dataclass(frozen=True)
class FlowSettings:
    llm: LLMSettings = field(default_factory=LLMSettings)
    prompts: PromptSettings = field(default_factory=PromptSettings)
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    raw: Dict[str, Any] = field(default_factory=dict)


def load_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file '{config_path}' not found.")
    data = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file '{config_path}' must hold a mapping.")
    return data


def build_flow_settings(
    config: Dict[str, Any], *, config_root: Path
) -> FlowSettings:
    root_cfg = config.get("bizflows") or {}

    llm_cfg = dict(root_cfg.get("llm") or {})
    llm_settings = LLMSettings(
        provider=llm_cfg.get("provider"),
        model=llm_cfg.get("model"),
        temperature=_optional_float(llm_cfg.get("temperature")),
        max_tokens=_optional_int(llm_cfg.get("max_tokens")),
        base_url=llm_cfg.get("base_url"),
        api_key_env=llm_cfg.get("api_key_env"),
        timeout_s=_optional_float(llm_cfg.get("timeout_s")),
    )

    prompts_cfg = root_cfg.get("prompts") or {}
    override_value = prompts_cfg.get("override_dirs") or ()
    if isinstance(override_value, (str, Path)):
        override_value = [override_value]
    templates_dir = prompts_cfg.get("templates_dir")
    prompt_settings = PromptSettings(
        templates_dir=_ensure_path(templates_dir, config_root=config_root)
        if templates_dir
        else None,
        override_dirs=tuple(
            _ensure_path(item, config_root=config_root)
            for item in override_value
        ),
    )

    logging_cfg = root_cfg.get("logging") or {}
    log_file = logging_cfg.get("log_file")
    logging_settings = LoggingSettings(
        level=str(logging_cfg.get("level", "INFO")),
        log_file=_ensure_path(log_file, config_root=config_root)
        if log_file
        else None,
    )

    return FlowSettings(
        llm=llm_settings,
        prompts=prompt_settings,
        logging=logging_settings,
        raw=deepcopy(root_cfg),
    )
