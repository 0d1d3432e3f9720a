from __future__ import annotations

from pom_verifier.messages import (
    Severity,
    VerificationMessage,
    has_required,
    sorted_messages,
)


def test_create_formats_once() -> None:
    msg = VerificationMessage.required("The <artifactId> from the pom.xml (%s) should be all lower case", "Foo")
    assert msg.severity is Severity.REQUIRED
    assert msg.text == "The <artifactId> from the pom.xml (Foo) should be all lower case"


def test_template_without_args_is_kept_verbatim() -> None:
    msg = VerificationMessage.warning("100% advisory")
    assert msg.text == "100% advisory"


def test_set_collapses_duplicates() -> None:
    messages = {
        VerificationMessage.required("same"),
        VerificationMessage.required("same"),
        VerificationMessage.warning("same"),
    }
    assert len(messages) == 2


def test_has_required() -> None:
    assert not has_required(set())
    assert not has_required({VerificationMessage.warning("w")})
    assert has_required({VerificationMessage.warning("w"), VerificationMessage.required("r")})


def test_sorted_messages_puts_required_first() -> None:
    messages = {
        VerificationMessage.warning("a"),
        VerificationMessage.required("z"),
        VerificationMessage.required("b"),
    }
    assert [(m.severity, m.text) for m in sorted_messages(messages)] == [
        (Severity.REQUIRED, "b"),
        (Severity.REQUIRED, "z"),
        (Severity.WARNING, "a"),
    ]


def test_str() -> None:
    assert str(VerificationMessage.warning("heads up")) == "WARNING: heads up"
