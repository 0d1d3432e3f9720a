from __future__ import annotations

import pytest

from pom_verifier.exceptions import InvalidForkError
from pom_verifier.models import (
    FORK_FROM_FIELD,
    FORK_TO_FIELD,
    ForkReference,
    SubmissionContext,
    is_present,
)


@pytest.mark.parametrize("value, expected", [(None, False), ("", False), ("  \t", False), ("x", True)])
def test_is_present(value, expected: bool) -> None:
    assert is_present(value) is expected


@pytest.mark.parametrize(
    "value",
    ["octo/sample-plugin", "https://github.com/octo/sample-plugin", "HTTPS://GITHUB.COM/octo/sample-plugin"],
)
def test_fork_reference_parse(value: str) -> None:
    fork = ForkReference.parse(value)
    assert (fork.owner, fork.repo) == ("octo", "sample-plugin")


@pytest.mark.parametrize("value", ["", "sample-plugin", "octo/", "/sample-plugin", "octo/sample plugin"])
def test_fork_reference_rejects(value: str) -> None:
    with pytest.raises(InvalidForkError):
        ForkReference.parse(value)


def test_submission_context_from_fields() -> None:
    context = SubmissionContext.from_fields({FORK_TO_FIELD: "sample-plugin", FORK_FROM_FIELD: ""})
    assert context.desired_repository_name == "sample-plugin"
    assert context.source_fork is None


def test_submission_context_fork() -> None:
    context = SubmissionContext(source_fork="octo/sample-plugin")
    assert context.fork().compact() == "octo/sample-plugin"
    with pytest.raises(InvalidForkError):
        SubmissionContext().fork()
