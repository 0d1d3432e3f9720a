"""Dotted numeric versions used by the minimum-version policies."""

from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pom_verifier.exceptions import VersionParseError


_VERSION_RE = re.compile(r"^[0-9]+(?:\.[0-9]+)*$")


class Version(BaseModel):
    """An immutable dotted numeric version such as ``2.164.3``.

    Ordering is lexicographic over the components, with missing trailing
    components treated as zero, so ``2`` == ``2.0.0``.
    """

    model_config = ConfigDict(frozen=True)

    components: tuple[int, ...] = Field(..., min_length=1)

    @field_validator("components")
    @classmethod
    def _non_negative(cls, value: tuple[int, ...]) -> tuple[int, ...]:
        if any(c < 0 for c in value):
            raise ValueError("version components must be non-negative")
        return value

    @classmethod
    def parse(cls, text: str | None) -> "Version":
        """Parse a dotted numeric string.

        Qualifiers are rejected rather than truncated: ``"2.10-beta"`` and
        property placeholders such as ``"${jenkins.version}"`` both fail.

        Args:
            text: A string like ``"2.10.3"`` or ``"2"``.

        Raises:
            VersionParseError: If the text is blank or not purely digits and dots.

        Returns:
            The parsed version.
        """
        if text is None:
            raise VersionParseError("Version string is missing")
        stripped = text.strip()
        if not _VERSION_RE.match(stripped):
            raise VersionParseError(f"Not a dotted numeric version: {text!r}")
        return cls(components=tuple(int(part) for part in stripped.split(".")))

    @classmethod
    def of(cls, *components: int) -> "Version":
        return cls(components=tuple(components))

    def _normalized(self) -> tuple[int, ...]:
        parts = list(self.components)
        while len(parts) > 1 and parts[-1] == 0:
            parts.pop()
        return tuple(parts)

    def compare(self, other: "Version") -> int:
        """Return -1, 0 or 1 as this version is lower, equal or higher than ``other``."""
        width = max(len(self.components), len(other.components))
        mine = self.components + (0,) * (width - len(self.components))
        theirs = other.components + (0,) * (width - len(other.components))
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) == 0

    def __hash__(self) -> int:
        return hash(self._normalized())

    def __lt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: "Version") -> bool:
        if not isinstance(other, Version):
            return NotImplemented
        return self.compare(other) >= 0

    def __str__(self) -> str:
        return ".".join(str(c) for c in self.components)


def compare(a: Version, b: Version) -> int:
    """Total order over versions: -1 if ``a < b``, 0 if equal, 1 if ``a > b``."""
    return a.compare(b)
