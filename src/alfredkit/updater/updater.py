#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Periodic self-update checks for Alfred workflows.

The updater keeps its state in the workflow data directory so that a check
against the release host happens at most once per interval (24 hours by
default), no matter how often the workflow runs:

    updater = Updater.gh("owner/my-workflow")
    if updater.update_ready():
        path = updater.download_latest()

The very first call to `Updater.update_ready` only records the time and
returns False, on the assumption that the workflow was just installed.
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any

from attrs import define, evolve
from provide.foundation import logger
from provide.foundation.errors import FoundationError
from provide.foundation.file.directory import ensure_dir
from provide.foundation.file.formats import read_json, write_json
import requests
import semver

from alfredkit import env
from alfredkit.config import AlfredKitRuntimeConfig
from alfredkit.config.defaults import (
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_UPDATE_INTERVAL,
    DEFAULT_WORKFLOW_NAME,
    DEFAULT_WORKFLOW_VERSION,
    DOWNLOAD_CHUNK_SIZE,
    DOWNLOAD_PARTIAL_SUFFIX,
    DOWNLOAD_PREFIX,
    DOWNLOAD_SUFFIX,
    LAST_CHECK_STATUS_FILE,
    UPDATER_STATE_SUFFIX,
)
from alfredkit.exceptions import ReleaseError, UpdaterError
from alfredkit.updater.releaser import GithubReleaser, Releaser, parse_version


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@define(frozen=True)
class UpdaterState:
    """What the updater remembers between workflow runs."""

    current_version: str
    last_check: datetime | None = None
    update_interval: int = DEFAULT_UPDATE_INTERVAL

    def to_dict(self) -> dict[str, Any]:
        return {
            "current_version": self.current_version,
            "last_check": self.last_check.isoformat() if self.last_check else None,
            "update_interval": self.update_interval,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> UpdaterState:
        last_check = data.get("last_check")
        return cls(
            current_version=str(parse_version(data["current_version"])),
            last_check=datetime.fromisoformat(last_check) if last_check else None,
            update_interval=int(data.get("update_interval", DEFAULT_UPDATE_INTERVAL)),
        )


def sanitize_workflow_name(name: str) -> str:
    """Replace everything but ASCII letters and digits with underscores."""
    return "".join(c if c.isascii() and c.isalnum() else "_" for c in name)


def _read_mapping(path: Path) -> Mapping[str, Any]:
    # read_json returns None instead of raising on invalid JSON
    data = read_json(path)
    if not isinstance(data, Mapping):
        raise UpdaterError(f"Expected a JSON object in {path}")
    return data


def _workflow_data_dir() -> Path:
    data_dir = env.workflow_data()
    if data_dir is None:
        raise UpdaterError("Missing environment variable for the workflow data directory (alfred_workflow_data)")
    return data_dir


def _workflow_uid() -> str:
    uid = env.workflow_uid()
    if uid is None:
        raise UpdaterError("Missing environment variable for the workflow uid (alfred_workflow_uid)")
    return uid


class Updater:
    """Checks a `Releaser` for newer versions of the running workflow."""

    def __init__(
        self,
        releaser: Releaser,
        session: requests.Session | None = None,
        timeout: float = float(DEFAULT_HTTP_TIMEOUT),
    ) -> None:
        """Load the saved state, or create and save a fresh one.

        Raises:
            UpdaterError: If the workflow data directory or uid is unknown, or
                the workflow version is not a semantic version.
        """
        self.releaser = releaser
        self.timeout = timeout
        self._session = session or requests.Session()
        self._state = self._load() or self._new_state()

    @classmethod
    def gh(cls, repo: str, config: AlfredKitRuntimeConfig | None = None) -> Updater:
        """Create an updater for a workflow released on github.com as ``owner/repository``.

        No network call is made until `update_ready` or `download_latest`.
        """
        config = config or AlfredKitRuntimeConfig.from_env()
        session = requests.Session()
        releaser = GithubReleaser(
            repo,
            api_url=config.github_api_url,
            timeout=config.timeout_seconds,
            session=session,
        )
        return cls(releaser, session=session, timeout=config.timeout_seconds)

    # State

    @staticmethod
    def state_file() -> Path:
        name = sanitize_workflow_name(env.workflow_name() or DEFAULT_WORKFLOW_NAME)
        return _workflow_data_dir() / f"{_workflow_uid()}-{name}{UPDATER_STATE_SUFFIX}"

    @staticmethod
    def status_file() -> Path:
        return _workflow_data_dir() / LAST_CHECK_STATUS_FILE

    def _load(self) -> UpdaterState | None:
        path = self.state_file()
        if not path.exists():
            return None
        try:
            return UpdaterState.from_dict(_read_mapping(path))
        except (OSError, ValueError, KeyError, TypeError, FoundationError) as e:
            logger.warning("Discarding unreadable updater state", path=str(path), error=str(e))
            return None

    def _new_state(self) -> UpdaterState:
        raw_version = env.workflow_version() or DEFAULT_WORKFLOW_VERSION
        try:
            version = parse_version(raw_version)
        except ReleaseError as e:
            raise UpdaterError(f"Workflow version {raw_version!r} is not a semantic version") from e
        state = UpdaterState(current_version=str(version))
        self._save(state)
        return state

    def _save(self, state: UpdaterState) -> None:
        path = self.state_file()
        ensure_dir(path.parent)
        write_json(path, state.to_dict(), indent=2)
        self._state = state

    @property
    def current_version(self) -> semver.Version:
        return semver.Version.parse(self._state.current_version)

    @property
    def last_check(self) -> datetime | None:
        return self._state.last_check

    @property
    def update_interval(self) -> int:
        return self._state.update_interval

    def set_version(self, version: str) -> None:
        """Override the workflow version recorded in Alfred's preferences.

        Raises:
            UpdaterError: If ``version`` is not a semantic version.
        """
        try:
            parsed = parse_version(version)
        except ReleaseError as e:
            raise UpdaterError(f"Workflow version {version!r} is not a semantic version") from e
        self._save(evolve(self._state, current_version=str(parsed)))

    def set_interval(self, seconds: int) -> None:
        """Set the number of seconds between release checks and persist it."""
        self._save(evolve(self._state, update_interval=int(seconds)))

    def _record_check(self) -> None:
        self._save(evolve(self._state, last_check=_utcnow()))

    # Checking

    def due_to_check(self) -> bool:
        if self.last_check is None:
            return True
        return _utcnow() - self.last_check > timedelta(seconds=self.update_interval)

    def _write_status(self, latest: semver.Version | None) -> None:
        write_json(self.status_file(), {"latest_version": str(latest) if latest else None})

    def _read_status(self) -> semver.Version | None:
        data = _read_mapping(self.status_file())
        latest = data["latest_version"]
        return parse_version(latest) if latest is not None else None

    def _ask_releaser(self) -> bool:
        latest = self.releaser.latest_version()
        ready = self.current_version < latest
        self._write_status(latest if ready else None)
        self._record_check()
        logger.info(
            "Checked for workflow update",
            current=str(self.current_version),
            latest=str(latest),
            update_ready=ready,
        )
        return ready

    def update_ready(self) -> bool:
        """Return True if a release newer than the running workflow exists.

        Raises:
            ReleaseError: If the releaser had to be asked and failed.
        """
        if self.last_check is None:
            self._record_check()
            return False
        if self.due_to_check():
            return self._ask_releaser()

        # Not due yet: answer from the last result. The status file may be
        # missing if a previous check was interrupted.
        try:
            latest = self._read_status()
        except (OSError, ValueError, KeyError, TypeError, FoundationError) as e:
            logger.debug("Last check status unreadable, asking releaser", error=str(e))
            return self._ask_releaser()
        return latest is not None and self.current_version < latest

    # Downloading

    def download_path(self) -> Path:
        cache_dir = env.workflow_cache()
        if cache_dir is None:
            raise UpdaterError("Missing environment variable for the workflow cache directory (alfred_workflow_cache)")
        return cache_dir / f"{DOWNLOAD_PREFIX}{_workflow_uid()}{DOWNLOAD_SUFFIX}"

    def download_latest(self) -> Path:
        """Download the latest release into the workflow cache directory.

        Returns:
            Path of the downloaded workflow file.
        """
        url = self.releaser.downloadable_url()
        target = self.download_path()
        ensure_dir(target.parent)
        partial = target.with_name(target.name + DOWNLOAD_PARTIAL_SUFFIX)
        logger.info("Downloading workflow release", url=url, target=str(target))

        # The target only ever holds a complete download
        try:
            with self._session.get(url, stream=True, timeout=self.timeout) as response:
                response.raise_for_status()
                with partial.open("wb") as fp:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        fp.write(chunk)
            partial.replace(target)
        except requests.RequestException as e:
            partial.unlink(missing_ok=True)
            raise ReleaseError(f"Downloading {url} failed: {e}") from e
        except BaseException:
            partial.unlink(missing_ok=True)
            raise

        logger.debug("Downloaded workflow release", target=str(target), size=target.stat().st_size)
        return target


# 🎩📋🔚
