"""Custom exceptions for the pom verifier."""


class PomVerifierError(Exception):
    """Base exception for the pom verifier."""


class PomNotFoundError(PomVerifierError):
    """Raised when a pom.xml file cannot be found."""


class PomParseError(PomVerifierError):
    """Raised when a pom.xml file cannot be parsed."""


class VersionParseError(PomVerifierError, ValueError):
    """Raised when a version string is not a dotted numeric version."""


class InvalidForkError(PomVerifierError, ValueError):
    """Raised when a fork reference is not of the form owner/repo."""


class SourceRetrievalError(PomVerifierError):
    """Raised when repository contents cannot be fetched for a reason other than absence."""


class ConfigurationError(PomVerifierError, ValueError):
    """Raised when environment configuration is missing or invalid."""
