#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Custom exceptions for alfredkit."""

from __future__ import annotations

from provide.foundation.errors import FoundationError


class AlfredKitError(FoundationError):
    """Base exception for all alfredkit errors."""

    pass


class InvalidItemError(AlfredKitError):
    """Raised when an item is built with empty required fields."""

    pass


class InvalidOutputError(AlfredKitError):
    """Raised when document-level script filter settings are out of range."""

    pass


class UpdaterError(AlfredKitError):
    """Raised when the updater cannot read, write or resolve its state."""

    pass


class ReleaseError(UpdaterError):
    """Raised when release information cannot be fetched or interpreted."""

    pass


# 🎩📋🔚
