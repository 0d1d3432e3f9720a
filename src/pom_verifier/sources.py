"""Access to the files of a candidate repository."""

from __future__ import annotations

import json
import logging
import urllib.error
import urllib.parse
import urllib.request
from pathlib import Path
from typing import Protocol

from pom_verifier import __version__
from pom_verifier.config import GitHubConfig
from pom_verifier.exceptions import PomNotFoundError, SourceRetrievalError
from pom_verifier.models import ForkReference


logger = logging.getLogger(__name__)


class SourceRepository(Protocol):
    """Read access to files at the root of a candidate repository."""

    def file_exists(self, path: str) -> bool:
        ...

    def read_file(self, path: str) -> bytes:
        """Return the file content.

        Raises:
            PomNotFoundError: If the file does not exist.
            SourceRetrievalError: For any other retrieval failure.
        """
        ...


class LocalSourceRepository:
    """A checkout on the local filesystem."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def _resolve(self, path: str) -> Path:
        return self.root / path

    def file_exists(self, path: str) -> bool:
        return self._resolve(path).is_file()

    def read_file(self, path: str) -> bytes:
        target = self._resolve(path)
        if not target.is_file():
            raise PomNotFoundError(f"{path} not found in {self.root}")
        try:
            return target.read_bytes()
        except OSError as exc:
            raise SourceRetrievalError(f"Failed to read {target}") from exc


class GitHubSourceRepository:
    """A repository read through the GitHub contents API."""

    def __init__(self, fork: ForkReference, config: GitHubConfig | None = None) -> None:
        self.fork = fork
        self.config = config or GitHubConfig.from_env()
        self.config.validate()

    def _contents_url(self, path: str) -> str:
        owner = urllib.parse.quote(self.fork.owner, safe="")
        repo = urllib.parse.quote(self.fork.repo, safe="")
        return f"{self.config.api_url}/repos/{owner}/{repo}/contents/{urllib.parse.quote(path)}"

    def _request(self, path: str, accept: str) -> urllib.request.Request:
        req = urllib.request.Request(self._contents_url(path))
        req.add_header("Accept", accept)
        req.add_header("User-Agent", f"pom-verifier/{__version__}")
        if self.config.token:
            req.add_header("Authorization", f"Bearer {self.config.token}")
        return req

    def _fetch(self, path: str, accept: str) -> bytes:
        req = self._request(path, accept)
        try:
            with urllib.request.urlopen(req, timeout=self.config.timeout) as response:
                return response.read()
        except urllib.error.HTTPError as exc:
            if exc.code == 404:
                raise PomNotFoundError(f"{path} not found in {self.fork.compact()}") from exc
            logger.error("GitHub returned HTTP %s for %s", exc.code, req.full_url)
            raise SourceRetrievalError(
                f"GitHub returned HTTP {exc.code} for {self.fork.compact()}/{path}"
            ) from exc
        except (urllib.error.URLError, OSError) as exc:
            logger.error("Failed to reach GitHub for %s: %s", req.full_url, exc)
            raise SourceRetrievalError(f"Failed to reach GitHub: {exc}") from exc

    def file_exists(self, path: str) -> bool:
        try:
            body = self._fetch(path, "application/vnd.github+json")
        except PomNotFoundError:
            return False
        try:
            meta = json.loads(body)
        except ValueError as exc:
            raise SourceRetrievalError(f"Unexpected response for {path}") from exc
        # directories come back as a JSON list
        return isinstance(meta, dict) and meta.get("type") == "file"

    def read_file(self, path: str) -> bytes:
        return self._fetch(path, "application/vnd.github.raw")


def github_repository(fork: ForkReference) -> GitHubSourceRepository:
    """Default factory used by the verifier to reach a submission's fork."""
    return GitHubSourceRepository(fork)
