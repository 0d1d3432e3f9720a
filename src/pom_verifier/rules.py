"""Hosting policy rules for a Maven pom.xml.

Each rule reads the manifest (the artifactId rule also reads the submission)
and adds zero or more messages to the shared set. Rules do not depend on each
other; the engine runs them in ``DEFAULT_RULES`` order.
"""

from __future__ import annotations

import logging
import re
from typing import Callable
from urllib.parse import urlsplit

from pom_verifier.config import VerifierPolicy
from pom_verifier.exceptions import VersionParseError
from pom_verifier.messages import (
    MISSING_REPOSITORY_NAME,
    SPECIFY_LICENSE,
    MessageSet,
    VerificationMessage,
)
from pom_verifier.models import ManifestModel, Repository, SubmissionContext, is_present
from pom_verifier.version import Version


logger = logging.getLogger(__name__)

Rule = Callable[[ManifestModel, SubmissionContext, VerifierPolicy, MessageSet], None]

# RFC 3986 unreserved, reserved and percent-encoding characters
_URI_CHARS_RE = re.compile(r"^[A-Za-z0-9\-._~:/?#\[\]@!$&'()*+,;=%]+$")
_BAD_PERCENT_RE = re.compile(r"%(?![0-9A-Fa-f]{2})")
_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*$")


def strip_suffix(value: str, suffix: str) -> str:
    if suffix and value.endswith(suffix):
        return value[: -len(suffix)]
    return value


def check_artifact_id(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    """artifactId must match the requested repository name, avoid the forbidden word and be lower case."""
    fork_to = context.desired_repository_name
    if not is_present(fork_to):
        messages.add(VerificationMessage.required(MISSING_REPOSITORY_NAME))

    artifact_id = manifest.artifact_id
    if not is_present(artifact_id):
        messages.add(
            VerificationMessage.required(
                "The pom.xml file does not contain a valid <artifactId> for the project"
            )
        )
        return

    if is_present(fork_to):
        expected = strip_suffix(fork_to.strip(), policy.plugin_suffix)
        # casing is reported by the lower-case check below
        if artifact_id.lower() != expected.lower():
            messages.add(
                VerificationMessage.required(
                    "The <artifactId> from the pom.xml (%s) is incorrect, it should be '%s' "
                    "('New Repository Name' field with \"%s\" removed)",
                    artifact_id,
                    expected,
                    policy.plugin_suffix,
                )
            )

    if policy.forbidden_word in artifact_id.lower():
        messages.add(
            VerificationMessage.required(
                "The <artifactId> from the pom.xml (%s) should not contain \"%s\"",
                artifact_id,
                policy.forbidden_word.capitalize(),
            )
        )

    if artifact_id.lower() != artifact_id:
        messages.add(
            VerificationMessage.required(
                "The <artifactId> from the pom.xml (%s) should be all lower case", artifact_id
            )
        )


def check_group_id(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    """The legacy groupId may be neither declared nor inherited from the parent."""
    group_id = manifest.group_id
    if is_present(group_id):
        if group_id.strip() == policy.legacy_group_id:
            messages.add(
                VerificationMessage.required(
                    "The <groupId> from the pom.xml should be `%s` instead of `%s`",
                    policy.new_group_id,
                    policy.legacy_group_id,
                )
            )
        return

    parent = manifest.parent
    if parent is not None and is_present(parent.group_id):
        if parent.group_id.strip() == policy.legacy_group_id:
            messages.add(
                VerificationMessage.required(
                    "You must add a <groupId> in your pom.xml with the value `%s`.",
                    policy.new_group_id,
                )
            )


def check_name(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    name = manifest.name
    if not is_present(name):
        messages.add(
            VerificationMessage.required(
                "The pom.xml file does not contain a valid <name> for the project"
            )
        )
        return
    if policy.forbidden_word in name.lower():
        messages.add(
            VerificationMessage.required(
                "The <name> field in the pom.xml should not contain \"%s\"",
                policy.forbidden_word.capitalize(),
            )
        )


def check_parent_and_platform_version(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    """Check the parent pom coordinates and the declared platform version.

    Unlike the other rules, a malformed ``<parent>`` block (or platform
    version property) degrades silently: the failure is logged and nothing
    further is reported for this rule.
    """
    try:
        parent = manifest.parent
        if parent is None:
            return

        if is_present(parent.group_id) and parent.group_id.strip() != policy.plugin_parent_group_id:
            messages.add(
                VerificationMessage.required(
                    "The groupId for your parent pom is not \"%s,\" if this is not a plugin "
                    "hosting request, you can disregard this notice.",
                    policy.plugin_parent_group_id,
                )
            )

        if not is_present(parent.version):
            return

        parent_version = Version.parse(parent.version)
        if parent_version < policy.lowest_parent_version:
            messages.add(
                VerificationMessage.required(
                    "The parent pom version '%s' should be at least %s or higher",
                    parent_version,
                    policy.lowest_parent_version,
                )
            )

        if parent_version >= policy.platform_version_threshold:
            declared = manifest.properties.get(policy.platform_version_property)
            # an absent property means the parent's default applies
            if declared is None:
                return
            platform_version = Version.parse(declared)
            if platform_version < policy.lowest_platform_version:
                messages.add(
                    VerificationMessage.required(
                        "Your pom.xml's <%s>(%s)</%s> does not meet the minimum Jenkins version "
                        "required, please update your <%s> to at least %s",
                        policy.platform_version_property,
                        platform_version,
                        policy.platform_version_property,
                        policy.platform_version_property,
                        policy.lowest_platform_version,
                    )
                )
    except VersionParseError as exc:
        logger.warning("Ignoring unparseable version in <parent> check: %s", exc)
    except Exception as exc:
        logger.error("Error trying to access the <parent> information: %s", exc)


def check_licenses(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    if not manifest.licenses:
        messages.add(VerificationMessage.required(SPECIFY_LICENSE))


def is_valid_uri(url: str) -> bool:
    """Strict URI syntax check.

    ``urlsplit`` accepts almost anything, so the character set, percent
    escapes, scheme syntax and port are validated separately.
    """
    if not url or not _URI_CHARS_RE.match(url) or _BAD_PERCENT_RE.search(url):
        return False
    if url.startswith(":"):
        return False
    try:
        parts = urlsplit(url)
        parts.port  # raises ValueError for a malformed port
    except ValueError:
        return False
    return not parts.scheme or bool(_SCHEME_RE.match(parts.scheme))


def raw_scheme(url: str) -> str:
    """The scheme as written; ``urlsplit`` lowercases it."""
    if not urlsplit(url).scheme:
        return ""
    return url.split(":", 1)[0]


def _check_repository_urls(
    repositories: list[Repository],
    tag: str,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    host = policy.repository_host
    for repo in repositories:
        url = repo.url or ""
        repo_id = repo.id or ""
        if host not in url and host not in repo_id:
            continue
        if not is_valid_uri(url.strip()):
            messages.add(
                VerificationMessage.required(
                    "The <%s><url></url></%s> in your pom.xml for '%s' has an invalid URL",
                    tag,
                    tag,
                    host,
                )
            )
            continue
        if raw_scheme(url.strip()) != "https":
            messages.add(
                VerificationMessage.required(
                    "You MUST use an https:// scheme in your pom.xml for the "
                    "<%s><url></url></%s> tag for %s",
                    tag,
                    tag,
                    host,
                )
            )


def check_repositories(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    _check_repository_urls(manifest.repositories, "repository", policy, messages)


def check_plugin_repositories(
    manifest: ManifestModel,
    context: SubmissionContext,
    policy: VerifierPolicy,
    messages: MessageSet,
) -> None:
    _check_repository_urls(manifest.plugin_repositories, "pluginRepository", policy, messages)


DEFAULT_RULES: tuple[Rule, ...] = (
    check_artifact_id,
    check_group_id,
    check_name,
    check_parent_and_platform_version,
    check_licenses,
    check_repositories,
    check_plugin_repositories,
)
