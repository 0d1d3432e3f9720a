"""Policy and service configuration.

Policy thresholds and GitHub access settings are read from environment
variables so deployments (and tests) can substitute alternate values
without touching rule logic.
"""
from __future__ import annotations

import os
from dataclasses import asdict, dataclass, field

from pom_verifier.exceptions import ConfigurationError
from pom_verifier.version import Version


@dataclass(frozen=True)
class VerifierPolicy:
    """Immutable hosting policy constants.

    Attributes:
        legacy_group_id: Deprecated groupId new plugins must migrate away from
        new_group_id: groupId new plugins should use instead
        plugin_parent_group_id: Expected groupId of the plugin parent pom
        lowest_parent_version: Minimum acceptable parent pom version
        platform_version_threshold: Parent version from which the platform property is checked
        platform_version_property: Property holding the declared platform version
        lowest_platform_version: Minimum platform version a plugin may declare
        repository_host: Host substring identifying the project's artifact repository
        forbidden_word: Word that must not appear in artifactId or name
        plugin_suffix: Suffix stripped from the desired repository name
        manifest_path: Location of the manifest at the repository root
    """

    legacy_group_id: str = "org.jenkins-ci.plugins"
    new_group_id: str = "io.jenkins.plugins"
    plugin_parent_group_id: str = "org.jenkins-ci.plugins"
    lowest_parent_version: Version = field(default_factory=lambda: Version.of(4, 0, 0))
    platform_version_threshold: Version = field(default_factory=lambda: Version.of(2))
    platform_version_property: str = "jenkins.version"
    lowest_platform_version: Version = field(default_factory=lambda: Version.of(2, 164, 3))
    repository_host: str = "repo.jenkins-ci.org"
    forbidden_word: str = "jenkins"
    plugin_suffix: str = "-plugin"
    manifest_path: str = "pom.xml"

    @classmethod
    def from_env(cls) -> "VerifierPolicy":
        """Create a policy from environment variables.

        Environment variables:
            POMV_LEGACY_GROUP_ID: Legacy groupId (default: "org.jenkins-ci.plugins")
            POMV_LOWEST_PARENT_VERSION: Minimum parent pom version (default: "4.0.0")
            POMV_PLATFORM_VERSION_THRESHOLD: Parent version enabling the platform check (default: "2")
            POMV_LOWEST_PLATFORM_VERSION: Minimum platform version (default: "2.164.3")
            POMV_REPOSITORY_HOST: Artifact repository host (default: "repo.jenkins-ci.org")

        Raises:
            VersionParseError: If a version variable is not a dotted numeric version.
        """
        defaults = cls()
        return cls(
            legacy_group_id=os.getenv("POMV_LEGACY_GROUP_ID", defaults.legacy_group_id),
            lowest_parent_version=_version_env(
                "POMV_LOWEST_PARENT_VERSION", defaults.lowest_parent_version
            ),
            platform_version_threshold=_version_env(
                "POMV_PLATFORM_VERSION_THRESHOLD", defaults.platform_version_threshold
            ),
            lowest_platform_version=_version_env(
                "POMV_LOWEST_PLATFORM_VERSION", defaults.lowest_platform_version
            ),
            repository_host=os.getenv("POMV_REPOSITORY_HOST", defaults.repository_host),
        )

    def to_dict(self) -> dict[str, str]:
        return {k: str(v) for k, v in asdict(self).items()}


def _version_env(name: str, default: Version) -> Version:
    raw = os.getenv(name)
    return Version.parse(raw) if raw else default


@dataclass
class GitHubConfig:
    """GitHub API access settings.

    Attributes:
        api_url: Base URL of the GitHub REST API
        token: Optional access token (anonymous access when unset)
        timeout: Per-request timeout in seconds
    """

    api_url: str = "https://api.github.com"
    token: str | None = None
    timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "GitHubConfig":
        """Create configuration from environment variables.

        Environment variables:
            POMV_GITHUB_API_URL: API base URL (default: "https://api.github.com")
            POMV_GITHUB_TOKEN: Access token, falls back to GITHUB_TOKEN
            POMV_GITHUB_TIMEOUT: Request timeout in seconds (default: 10)

        Raises:
            ConfigurationError: If POMV_GITHUB_TIMEOUT is not a number.
        """
        raw_timeout = os.getenv("POMV_GITHUB_TIMEOUT", "10")
        try:
            timeout = float(raw_timeout)
        except ValueError as exc:
            raise ConfigurationError(f"POMV_GITHUB_TIMEOUT must be a number: {raw_timeout!r}") from exc
        return cls(
            api_url=os.getenv("POMV_GITHUB_API_URL", "https://api.github.com").rstrip("/"),
            token=os.getenv("POMV_GITHUB_TOKEN") or os.getenv("GITHUB_TOKEN") or None,
            timeout=timeout,
        )

    def validate(self) -> None:
        """Validate the configuration.

        Raises:
            ConfigurationError: If the configuration is unusable.
        """
        if not self.api_url.startswith(("https://", "http://")):
            raise ConfigurationError(f"POMV_GITHUB_API_URL must be an http(s) URL: {self.api_url}")
        if not self.timeout > 0:
            raise ConfigurationError("POMV_GITHUB_TIMEOUT must be positive")
