"""Severity-tagged verification messages."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class Severity(str, Enum):
    """REQUIRED blocks acceptance, WARNING is advisory."""

    REQUIRED = "REQUIRED"
    WARNING = "WARNING"


INVALID_POM = "The pom.xml file in the root of the origin repository is not valid"
SPECIFY_LICENSE = (
    "Please specify a license in your pom.xml file using the <licenses> tag. "
    "See https://maven.apache.org/pom.html#Licenses for more information."
)
MISSING_POM_XML = (
    "No pom.xml found in root of project, if you are using a different build system, "
    "or this is not a plugin, you can disregard this message"
)
INVALID_FORK_FROM = (
    "The origin repository '%s' doesn't use the expected format "
    "'https://github.com/<owner>/<repository>' or '<owner>/<repository>'"
)
MISSING_REPOSITORY_NAME = "Missing value in Jira for 'New Repository Name' field"


class VerificationMessage(BaseModel):
    """A rendered policy message.

    Text is formatted once at construction; equality and hashing are by
    severity plus text, so a set collapses duplicates.
    """

    model_config = ConfigDict(frozen=True)

    severity: Severity
    text: str

    @classmethod
    def create(cls, severity: Severity, template: str, *args: Any) -> "VerificationMessage":
        """Build a message, substituting ``%s`` placeholders with ``args``."""
        text = template % tuple(str(a) for a in args) if args else template
        return cls(severity=severity, text=text)

    @classmethod
    def required(cls, template: str, *args: Any) -> "VerificationMessage":
        return cls.create(Severity.REQUIRED, template, *args)

    @classmethod
    def warning(cls, template: str, *args: Any) -> "VerificationMessage":
        return cls.create(Severity.WARNING, template, *args)

    def __str__(self) -> str:
        return f"{self.severity.value}: {self.text}"


MessageSet = set[VerificationMessage]


def has_required(messages: MessageSet) -> bool:
    """Return True when any message blocks acceptance."""
    return any(m.severity is Severity.REQUIRED for m in messages)


def sorted_messages(messages: MessageSet) -> list[VerificationMessage]:
    """Stable presentation order: REQUIRED first, then by text."""
    return sorted(messages, key=lambda m: (m.severity is not Severity.REQUIRED, m.text))
