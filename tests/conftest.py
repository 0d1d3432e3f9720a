"""Pytest configuration and fixtures for pom-verifier tests."""
from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from pom_verifier.config import VerifierPolicy
from pom_verifier.exceptions import PomNotFoundError
from pom_verifier.models import ManifestModel, SubmissionContext


POLICY_ENV = (
    "POMV_LEGACY_GROUP_ID",
    "POMV_LOWEST_PARENT_VERSION",
    "POMV_PLATFORM_VERSION_THRESHOLD",
    "POMV_LOWEST_PLATFORM_VERSION",
    "POMV_REPOSITORY_HOST",
    "POMV_GITHUB_API_URL",
    "POMV_GITHUB_TOKEN",
    "POMV_GITHUB_TIMEOUT",
    "GITHUB_TOKEN",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch):
    """Run every test against the default policy and a fresh app policy cache."""
    import main

    for name in POLICY_ENV:
        monkeypatch.delenv(name, raising=False)
    main._cached_policy = None

    yield

    main._cached_policy = None


@pytest.fixture
def policy() -> VerifierPolicy:
    return VerifierPolicy()


@pytest.fixture
def context() -> SubmissionContext:
    return SubmissionContext(desired_repository_name="sample-plugin", source_fork="octo/sample-plugin")


@pytest.fixture
def good_manifest() -> ManifestModel:
    """A manifest that satisfies every rule for the `context` fixture."""
    return ManifestModel.model_validate(
        {
            "artifact_id": "sample",
            "group_id": "io.jenkins.plugins",
            "name": "Sample",
            "parent": {
                "group_id": "org.jenkins-ci.plugins",
                "artifact_id": "plugin",
                "version": "4.40",
            },
            "properties": {"jenkins.version": "2.332.1"},
            "licenses": [{"name": "MIT License", "url": "https://opensource.org/licenses/MIT"}],
            "repositories": [{"id": "repo.jenkins-ci.org", "url": "https://repo.jenkins-ci.org/public/"}],
            "plugin_repositories": [
                {"id": "repo.jenkins-ci.org", "url": "https://repo.jenkins-ci.org/public/"}
            ],
        }
    )


GOOD_POM = """<?xml version="1.0" encoding="UTF-8"?>
<project xmlns="http://maven.apache.org/POM/4.0.0">
  <modelVersion>4.0.0</modelVersion>
  <parent>
    <groupId>org.jenkins-ci.plugins</groupId>
    <artifactId>plugin</artifactId>
    <version>4.40</version>
    <relativePath />
  </parent>
  <groupId>io.jenkins.plugins</groupId>
  <artifactId>sample</artifactId>
  <version>1.0-SNAPSHOT</version>
  <packaging>hpi</packaging>
  <name>Sample</name>
  <properties>
    <jenkins.version>2.332.1</jenkins.version>
  </properties>
  <licenses>
    <license>
      <name>MIT License</name>
      <url>https://opensource.org/licenses/MIT</url>
    </license>
  </licenses>
  <repositories>
    <repository>
      <id>repo.jenkins-ci.org</id>
      <url>https://repo.jenkins-ci.org/public/</url>
    </repository>
  </repositories>
  <pluginRepositories>
    <pluginRepository>
      <id>repo.jenkins-ci.org</id>
      <url>https://repo.jenkins-ci.org/public/</url>
    </pluginRepository>
  </pluginRepositories>
</project>
"""


@pytest.fixture
def good_pom() -> str:
    return GOOD_POM


@pytest.fixture
def write_pom(tmp_path: Path) -> Callable[[str], Path]:
    def _write(content: str, name: str = "pom.xml") -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


class FakeSource:
    """In-memory SourceRepository."""

    def __init__(self, files: dict[str, bytes] | None = None, error: Exception | None = None) -> None:
        self.files = files or {}
        self.error = error
        self.reads: list[str] = []

    def file_exists(self, path: str) -> bool:
        if self.error is not None:
            raise self.error
        return path in self.files

    def read_file(self, path: str) -> bytes:
        self.reads.append(path)
        if self.error is not None:
            raise self.error
        if path not in self.files:
            raise PomNotFoundError(path)
        return self.files[path]
