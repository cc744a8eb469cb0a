# Copyright (c) Meta Platforms, Inc. and affiliates.
# Modifications copyright (c) 2025 Logan Martel.
# Adapted from https://github.com/meta-pytorch/KernelAgent (Apache-2.0).

"""Utility helpers for LLM providers."""

from __future__ import annotations

import os

from typing import Dict, Optional

PROXY_OVERRIDE_ENV = "BIZFLOWS_PROXY_OVERRIDE"
_PROXY_KEYS = ("HTTP_PROXY", "HTTPS_PROXY", "http_proxy", "https_proxy")


def configure_proxy_environment() -> Dict[str, Optional[str]]:
    """Apply BIZFLOWS_PROXY_OVERRIDE (if set) to the common proxy env vars.

    Returns the previous values so callers can restore them.
    """
    original: Dict[str, Optional[str]] = {}
    proxy = os.environ.get(PROXY_OVERRIDE_ENV)
    for key in _PROXY_KEYS:
        original[key] = os.environ.get(key)
        if proxy:
            os.environ[key] = proxy
    return original
