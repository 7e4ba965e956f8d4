#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""alfredkit runtime configuration read from the environment."""

from __future__ import annotations

from attrs import define
from provide.foundation.config.base import field
from provide.foundation.config.env import RuntimeConfig

from alfredkit.config.defaults import DEFAULT_HTTP_TIMEOUT, GITHUB_API_URL

VALID_LOG_LEVELS = {"TRACE", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}


def parse_log_level(value: str) -> str:
    """Validate and normalize log levels."""
    normalized = value.strip().upper()
    if normalized not in VALID_LOG_LEVELS:
        raise ValueError(f"Invalid log level: {value}")
    return normalized


def parse_api_url(value: str) -> str:
    """Strip trailing slashes so endpoints can be appended."""
    normalized = value.strip().rstrip("/")
    if not normalized.startswith(("http://", "https://")):
        raise ValueError(f"Invalid API URL: {value}")
    return normalized


def parse_timeout(value: str) -> str:
    """Validate an HTTP timeout given in seconds."""
    normalized = value.strip()
    if float(normalized) <= 0:
        raise ValueError(f"Invalid HTTP timeout: {value}")
    return normalized


@define
class AlfredKitRuntimeConfig(RuntimeConfig):
    """alfredkit runtime configuration for the CLI and the updater."""

    log_level: str = field(
        default="WARNING",
        env_var="ALFREDKIT_LOG_LEVEL",
        converter=parse_log_level,
        metadata={"help": "Log level for alfredkit operations (TRACE, DEBUG, INFO, WARNING, ERROR, CRITICAL)"},
    )

    setup_log_level: str = field(
        default="WARNING",
        env_var="ALFREDKIT_SETUP_LOG_LEVEL",
        converter=parse_log_level,
        metadata={"help": "Log level for Foundation setup messages during initialization"},
    )

    github_api_url: str = field(
        default=GITHUB_API_URL,
        env_var="ALFREDKIT_GITHUB_API_URL",
        converter=parse_api_url,
        metadata={"help": "Base URL of the GitHub REST API used to look up releases"},
    )

    http_timeout: str = field(
        default=DEFAULT_HTTP_TIMEOUT,
        env_var="ALFREDKIT_HTTP_TIMEOUT",
        converter=parse_timeout,
        metadata={"help": "Timeout in seconds for release lookups and downloads"},
    )

    @property
    def timeout_seconds(self) -> float:
        return float(self.http_timeout)


# 🎩📋🔚
