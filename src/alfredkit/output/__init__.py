#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Script filter serializers: JSON (current) and XML (legacy)."""

from __future__ import annotations

from enum import Enum

from alfredkit.output import json_output, xml_output
from alfredkit.output.json_output import OutputBuilder
from alfredkit.output.xml_output import XMLWriter


class OutputFormat(Enum):
    """Available script filter output formats."""

    JSON = "json"
    XML = "xml"


__all__ = [
    "OutputBuilder",
    "OutputFormat",
    "XMLWriter",
    "json_output",
    "xml_output",
]

# 🎩📋🔚
