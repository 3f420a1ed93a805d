"""Core data models shared across cargo-fund components."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, Set, Tuple, Union


class PlatformKind(enum.IntEnum):
    """Funding platforms GitHub reports in `fundingLinks`, in display order."""

    COMMUNITY_BRIDGE = 0
    CUSTOM = 1
    GITHUB = 2
    ISSUEHUNT = 3
    KO_FI = 4
    LIBERAPAY = 5
    OPEN_COLLECTIVE = 6
    OTECHIE = 7
    PATREON = 8
    TIDELIFT = 9
    OTHER = 10


@dataclass(frozen=True, order=True)
class Platform:
    """A funding platform; unknown platform names are kept verbatim as OTHER."""

    kind: PlatformKind
    label: str = ""

    @classmethod
    def parse(cls, name: str) -> "Platform":
        try:
            kind = PlatformKind[name.upper()]
        except KeyError:
            return cls(PlatformKind.OTHER, name)
        if kind is PlatformKind.OTHER:
            return cls(PlatformKind.OTHER, name)
        return cls(kind)

    def __str__(self) -> str:
        if self.kind is PlatformKind.OTHER:
            return self.label
        return self.kind.name


GITHUB_PLATFORM = Platform(PlatformKind.GITHUB)


@dataclass(frozen=True, order=True)
class Link:
    """A funding destination tagged with its platform."""

    platform: Platform
    uri: str

    def __str__(self) -> str:
        return self.uri


@dataclass(frozen=True, order=True)
class PackageRef:
    """A resolved dependency as reported by `cargo metadata`."""

    name: str
    version: str
    id: str = field(default="")

    @property
    def display(self) -> str:
        return f"{self.name} {self.version}"


@dataclass(frozen=True, order=True)
class RepoSource:
    """A GitHub repository that may publish funding links."""

    owner: str
    name: str


@dataclass(frozen=True, order=True)
class OwnerSource:
    """A GitHub user or organization that may run a sponsorship listing."""

    owner: str


SourceIdentifier = Union[RepoSource, OwnerSource]

SourceMap = Dict[SourceIdentifier, Set[PackageRef]]
SourceLinks = Dict[SourceIdentifier, Set[Link]]
ResolvedMap = Dict[PackageRef, Set[Link]]
GroupedMap = Dict[Tuple[Link, ...], Tuple[PackageRef, ...]]


def source_sort_key(source: SourceIdentifier) -> Tuple[int, str, str]:
    """Stable ordering for sources: repositories first, then owners."""
    if isinstance(source, RepoSource):
        return (0, source.owner, source.name)
    return (1, source.owner, "")


__all__ = [
    "GITHUB_PLATFORM",
    "GroupedMap",
    "Link",
    "OwnerSource",
    "PackageRef",
    "Platform",
    "PlatformKind",
    "RepoSource",
    "ResolvedMap",
    "SourceIdentifier",
    "SourceLinks",
    "SourceMap",
    "source_sort_key",
]
