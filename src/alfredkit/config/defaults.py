#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Centralized default values for alfredkit."""

from __future__ import annotations

# =================================
# Script filter output
# =================================
XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n<items>\n'
XML_FOOTER = "</items>\n"
XML_INDENT = "    "
RERUN_MIN_SECONDS = 0.1
RERUN_MAX_SECONDS = 5.0

# =================================
# Updater defaults
# =================================
DEFAULT_UPDATE_INTERVAL = 24 * 60 * 60  # Seconds between release checks
DEFAULT_WORKFLOW_VERSION = "0.0.0"
# Used for the state file name when the workflow was never given a name
DEFAULT_WORKFLOW_NAME = "YouForgotTo/フ:NameYourOwnWork}flowッ"
LAST_CHECK_STATUS_FILE = "last_check_status.json"
UPDATER_STATE_SUFFIX = "-updater.json"
DOWNLOAD_PREFIX = "latest_release_"
DOWNLOAD_SUFFIX = ".alfredworkflow"
DOWNLOAD_PARTIAL_SUFFIX = ".part"
DOWNLOAD_CHUNK_SIZE = 0x10_0000

# =================================
# Release hosting
# =================================
GITHUB_API_URL = "https://api.github.com"
GITHUB_LATEST_RELEASE_ENDPOINT = "/releases/latest"
DEFAULT_HTTP_TIMEOUT = "30"
# Asset suffixes in order of preference
WORKFLOW_ASSET_SUFFIXES = ("alfred3workflow", "alfredworkflow")
UPLOADED_ASSET_STATE = "uploaded"

# 🎩📋🔚
