"""Pydantic models for the manifest under review and the submission it belongs to."""

from __future__ import annotations

import re
from typing import Mapping

from pydantic import BaseModel, Field

from pom_verifier.exceptions import InvalidForkError


FORK_TO_FIELD = "New Repository Name"
FORK_FROM_FIELD = "Repository URL"

_FORK_RE = re.compile(r"(?:https://github\.com/)?(\S+)/(\S+)", re.IGNORECASE)


def is_present(value: str | None) -> bool:
    """True when ``value`` is set and not blank after trimming."""
    return value is not None and bool(value.strip())


class Parent(BaseModel):
    """The ``<parent>`` block of a pom.xml."""

    group_id: str | None = None
    artifact_id: str | None = None
    version: str | None = None


class License(BaseModel):
    """A ``<license>`` entry."""

    name: str | None = None
    url: str | None = None


class Repository(BaseModel):
    """A ``<repository>`` or ``<pluginRepository>`` entry."""

    id: str | None = None
    url: str | None = None


class ManifestModel(BaseModel):
    """The subset of a Maven project model the hosting policies read."""

    artifact_id: str | None = None
    group_id: str | None = None
    name: str | None = None
    parent: Parent | None = None
    properties: dict[str, str] = Field(default_factory=dict)
    licenses: list[License] = Field(default_factory=list)
    repositories: list[Repository] = Field(default_factory=list)
    plugin_repositories: list[Repository] = Field(default_factory=list)
    modules: list[str] = Field(default_factory=list)

    @property
    def is_multi_module(self) -> bool:
        return bool(self.modules)


class ForkReference(BaseModel):
    """An ``owner/repo`` pair on the source-hosting service."""

    owner: str = Field(..., min_length=1)
    repo: str = Field(..., min_length=1)

    @classmethod
    def parse(cls, value: str) -> "ForkReference":
        """Parse ``owner/repo``, optionally prefixed with ``https://github.com/``.

        Raises:
            InvalidForkError: If the value does not match.
        """
        m = _FORK_RE.fullmatch(value.strip())
        if m is None:
            raise InvalidForkError(f"Invalid fork reference: {value!r}")
        return cls(owner=m.group(1), repo=m.group(2))

    def compact(self) -> str:
        return f"{self.owner}/{self.repo}"


class SubmissionContext(BaseModel):
    """Submission metadata from the hosting request.

    Attributes:
        desired_repository_name: Requested name of the hosted repository.
        source_fork: Where the code lives today, ``owner/repo`` or a GitHub URL.
    """

    desired_repository_name: str | None = None
    source_fork: str | None = None

    @classmethod
    def from_fields(cls, fields: Mapping[str, str | None]) -> "SubmissionContext":
        """Build a context from issue fields keyed by their display names."""
        return cls(
            desired_repository_name=fields.get(FORK_TO_FIELD) or None,
            source_fork=fields.get(FORK_FROM_FIELD) or None,
        )

    def fork(self) -> ForkReference:
        if not is_present(self.source_fork):
            raise InvalidForkError("No source fork given")
        return ForkReference.parse(self.source_fork)
