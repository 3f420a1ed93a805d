"""Error types raised while resolving funding links."""

from __future__ import annotations


class FundError(RuntimeError):
    """Base class for failures that abort a cargo-fund run."""


class ConfigError(FundError):
    """Raised when configuration is missing or cannot be parsed."""


class MetadataError(FundError):
    """Raised when `cargo metadata` fails or returns unusable output."""


class SourceError(FundError):
    """Raised when a GitHub repository URL does not name an owner and repository."""


class AuthenticationError(FundError):
    """Raised when GitHub rejects the API token."""


class ProtocolError(FundError):
    """Raised when the GitHub API answers with something we cannot use."""


class LinkParseError(ValueError):
    """A single funding link could not be parsed; the link is skipped."""


class UriConstructionError(ValueError):
    """An owner sponsorship URL could not be built; the link is skipped."""


__all__ = [
    "AuthenticationError",
    "ConfigError",
    "FundError",
    "LinkParseError",
    "MetadataError",
    "ProtocolError",
    "SourceError",
    "UriConstructionError",
]
