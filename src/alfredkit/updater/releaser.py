#
# SPDX-FileCopyrightText: Copyright (c) 2025 provide.io llc. All rights reserved.
# SPDX-License-Identifier: Apache-2.0
#

"""Release sources the updater can ask for newer workflow versions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import Any

from attrs import define
from provide.foundation import logger, retry
from provide.foundation.resilience.types import BackoffStrategy
import requests
import semver

from alfredkit.config.defaults import (
    DEFAULT_HTTP_TIMEOUT,
    GITHUB_API_URL,
    GITHUB_LATEST_RELEASE_ENDPOINT,
    UPLOADED_ASSET_STATE,
    WORKFLOW_ASSET_SUFFIXES,
)
from alfredkit.exceptions import ReleaseError


def parse_version(value: str) -> semver.Version:
    """Parse a version tag, accepting a leading ``v`` and missing minor/patch parts."""
    tag = value.strip()
    if tag[:1] in ("v", "V"):
        tag = tag[1:]
    try:
        return semver.Version.parse(tag, optional_minor_and_patch=True)
    except (TypeError, ValueError) as e:
        raise ReleaseError(f"Not a semantic version: {value!r}") from e


class Releaser(ABC):
    """A remote service publishing workflow releases."""

    @abstractmethod
    def latest_version(self) -> semver.Version:
        """Return the version of the newest published release."""

    @abstractmethod
    def downloadable_url(self) -> str:
        """Return the URL of the workflow file of the newest release."""

    def newer_than(self, version: semver.Version) -> bool:
        return version < self.latest_version()


@define(frozen=True)
class ReleaseAsset:
    """A single downloadable file attached to a release."""

    name: str
    state: str
    browser_download_url: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> ReleaseAsset:
        return cls(
            name=data.get("name", ""),
            state=data.get("state", ""),
            browser_download_url=data["browser_download_url"],
        )

    @property
    def is_workflow(self) -> bool:
        return self.state == UPLOADED_ASSET_STATE and self.browser_download_url.endswith(
            WORKFLOW_ASSET_SUFFIXES
        )


@define(frozen=True)
class Release:
    """A release point; it may carry several assets."""

    tag_name: str
    assets: tuple[ReleaseAsset, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> Release:
        try:
            return cls(
                tag_name=data["tag_name"],
                assets=tuple(ReleaseAsset.from_dict(asset) for asset in data.get("assets", [])),
            )
        except (KeyError, TypeError, AttributeError) as e:
            raise ReleaseError(f"Unexpected release payload: {e}") from e

    @property
    def version(self) -> semver.Version:
        return parse_version(self.tag_name)

    def workflow_url(self) -> str:
        """Pick the workflow asset, preferring suffixes listed first."""
        candidates = [asset.browser_download_url for asset in self.assets if asset.is_workflow]
        if not candidates:
            raise ReleaseError(f"Release {self.tag_name} has no uploaded workflow asset")
        for suffix in WORKFLOW_ASSET_SUFFIXES:
            for url in candidates:
                if url.endswith(suffix):
                    return url
        return candidates[0]


class GithubReleaser(Releaser):
    """Looks up the latest release of a ``owner/repository`` hosted on GitHub.

    The release is fetched once and reused for the lifetime of the object.
    """

    def __init__(
        self,
        repo: str,
        api_url: str = GITHUB_API_URL,
        timeout: float = float(DEFAULT_HTTP_TIMEOUT),
        session: requests.Session | None = None,
    ) -> None:
        self.repo = repo
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout
        self._session = session or requests.Session()
        self._latest: Release | None = None

    @property
    def latest_release_url(self) -> str:
        return f"{self.api_url}/repos/{self.repo}{GITHUB_LATEST_RELEASE_ENDPOINT}"

    @retry(
        requests.ConnectionError,
        requests.Timeout,
        max_attempts=3,
        base_delay=0.5,
        backoff=BackoffStrategy.EXPONENTIAL,
        jitter=True,
    )
    def _get_latest_release(self) -> requests.Response:
        """GET the latest release.

        Retries:
            Up to 3 attempts with exponential backoff for connection errors and timeouts
        """
        return self._session.get(
            self.latest_release_url,
            headers={"Accept": "application/vnd.github+json"},
            timeout=self.timeout,
        )

    def latest_release(self) -> Release:
        if self._latest is None:
            logger.debug("Fetching latest release", repo=self.repo, url=self.latest_release_url)
            response = self._get_latest_release()
            try:
                response.raise_for_status()
            except requests.HTTPError as e:
                raise ReleaseError(f"Release lookup for {self.repo} failed: {e}") from e
            try:
                payload = response.json()
            except ValueError as e:
                raise ReleaseError(f"Release lookup for {self.repo} returned invalid JSON") from e
            self._latest = Release.from_dict(payload)
            logger.info("Found latest release", repo=self.repo, tag=self._latest.tag_name)
        return self._latest

    def latest_version(self) -> semver.Version:
        return self.latest_release().version

    def downloadable_url(self) -> str:
        return self.latest_release().workflow_url()


# 🎩📋🔚
