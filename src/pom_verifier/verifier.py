"""Run the hosting policy rules against a submission's pom.xml."""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from pom_verifier.config import VerifierPolicy
from pom_verifier.exceptions import InvalidForkError, PomNotFoundError, PomParseError
from pom_verifier.messages import (
    INVALID_FORK_FROM,
    INVALID_POM,
    MISSING_POM_XML,
    MessageSet,
    VerificationMessage,
)
from pom_verifier.models import ForkReference, ManifestModel, SubmissionContext, is_present
from pom_verifier.parser import parse_manifest_bytes
from pom_verifier.rules import DEFAULT_RULES, Rule
from pom_verifier.sources import SourceRepository, github_repository


logger = logging.getLogger(__name__)

SourceFactory = Callable[[ForkReference], SourceRepository]


class MavenVerifier:
    """Verifies a Maven pom.xml against the hosting policy.

    Args:
        policy: Thresholds and identifiers the rules compare against.
        source_factory: Opens the candidate repository for a fork reference.
        rules: Rules to run, in order.
    """

    def __init__(
        self,
        policy: VerifierPolicy | None = None,
        source_factory: SourceFactory = github_repository,
        rules: Iterable[Rule] = DEFAULT_RULES,
    ) -> None:
        self.policy = policy or VerifierPolicy()
        self.source_factory = source_factory
        self.rules = tuple(rules)

    def verify(
        self,
        manifest: ManifestModel,
        context: SubmissionContext,
        messages: MessageSet | None = None,
    ) -> MessageSet:
        """Run every rule against an already-parsed manifest.

        Policy violations are reported as messages, never raised. A rule that
        fails unexpectedly contributes the generic invalid-pom message and the
        remaining rules still run.

        Args:
            manifest: The parsed pom.xml.
            context: Submission metadata.
            messages: Shared output set; a new one is created when omitted.

        Returns:
            The output set, with this pass's messages added.
        """
        if messages is None:
            messages = set()

        if manifest.is_multi_module:
            logger.info(
                "Multi-module project (%d modules); only the root pom.xml is checked",
                len(manifest.modules),
            )

        for rule in self.rules:
            try:
                rule(manifest, context, self.policy, messages)
            except Exception:
                logger.exception("Rule %s failed while reading pom.xml", rule.__name__)
                messages.add(VerificationMessage.required(INVALID_POM))
        return messages

    def verify_submission(
        self,
        context: SubmissionContext,
        messages: MessageSet | None = None,
    ) -> MessageSet:
        """Fetch the submission's pom.xml and verify it.

        Raises:
            SourceRetrievalError: If the repository cannot be reached.

        Returns:
            The output set, with this pass's messages added.
        """
        if messages is None:
            messages = set()

        if not is_present(context.source_fork):
            return messages

        try:
            fork = context.fork()
        except InvalidForkError:
            messages.add(VerificationMessage.required(INVALID_FORK_FROM, context.source_fork))
            return messages

        source = self.source_factory(fork)
        try:
            data = source.read_file(self.policy.manifest_path)
            manifest = parse_manifest_bytes(data)
        except PomNotFoundError:
            logger.info("No %s in %s", self.policy.manifest_path, fork.compact())
            messages.add(VerificationMessage.warning(MISSING_POM_XML))
            return messages
        except PomParseError as exc:
            logger.info("Invalid %s in %s: %s", self.policy.manifest_path, fork.compact(), exc)
            messages.add(VerificationMessage.required(INVALID_POM))
            return messages

        return self.verify(manifest, context, messages)

    def has_build_file(self, context: SubmissionContext) -> bool:
        """Whether the fork has a pom.xml at its root.

        Raises:
            InvalidForkError: If the submission has no usable fork reference.
            SourceRetrievalError: If the repository cannot be reached.
        """
        source = self.source_factory(context.fork())
        return source.file_exists(self.policy.manifest_path)
