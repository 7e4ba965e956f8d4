#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Tests for alfredkit runtime configuration."""

from __future__ import annotations

import os
from unittest.mock import patch

import pytest

from alfredkit.config import AlfredKitRuntimeConfig
from alfredkit.config.runtime import parse_api_url, parse_log_level, parse_timeout


class TestAlfredKitRuntimeConfig:
    """Test runtime configuration."""

    def test_defaults(self) -> None:
        """Test default values."""
        config = AlfredKitRuntimeConfig()
        assert config.log_level == "WARNING"
        assert config.setup_log_level == "WARNING"
        assert config.github_api_url == "https://api.github.com"
        assert config.timeout_seconds == 30.0

    @patch.dict(
        os.environ,
        {
            "ALFREDKIT_LOG_LEVEL": "debug",
            "ALFREDKIT_GITHUB_API_URL": "https://github.example.com/api/v3/",
            "ALFREDKIT_HTTP_TIMEOUT": "2.5",
        },
    )
    def test_from_env(self) -> None:
        """Test values read from the environment."""
        config = AlfredKitRuntimeConfig.from_env()
        assert config.log_level == "DEBUG"
        assert config.github_api_url == "https://github.example.com/api/v3"
        assert config.timeout_seconds == 2.5


class TestConverters:
    """Test the field converters."""

    @pytest.mark.parametrize("value", ["info", " Info ", "INFO"])
    def test_parse_log_level(self, value: str) -> None:
        assert parse_log_level(value) == "INFO"

    def test_parse_api_url_strips_slashes(self) -> None:
        assert parse_api_url("https://api.github.com//") == "https://api.github.com"

    def test_parse_api_url_requires_scheme(self) -> None:
        with pytest.raises(ValueError, match="Invalid API URL"):
            parse_api_url("api.github.com")

    @pytest.mark.parametrize("value", ["0", "-1"])
    def test_parse_timeout_must_be_positive(self, value: str) -> None:
        with pytest.raises(ValueError):
            parse_timeout(value)

    def test_parse_timeout_not_a_number(self) -> None:
        with pytest.raises(ValueError):
            parse_timeout("soon")


# 🎩📋🔚
