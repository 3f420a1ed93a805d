"""Invocation and decoding of `cargo metadata`."""

from __future__ import annotations

import os
import subprocess
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from .errors import MetadataError
from .logging import get_logger
from .models import PackageRef

logger = get_logger("metadata")


@dataclass
class MetadataOptions:
    """Flags forwarded to `cargo metadata`."""

    manifest_path: Optional[str] = None
    quiet: bool = False
    verbose: int = 0
    color: Optional[str] = None
    unstable_flags: List[str] = field(default_factory=list)


class CargoPackage(BaseModel):
    id: str
    name: str
    version: str
    repository: Optional[str] = None

    def ref(self) -> PackageRef:
        return PackageRef(name=self.name, version=self.version, id=self.id)


class Metadata(BaseModel):
    """The subset of `cargo metadata --format-version 1` output we use."""

    workspace_root: str
    packages: List[CargoPackage]
    workspace_members: List[str]

    def is_workspace_member(self, package: CargoPackage) -> bool:
        return package.id in self.workspace_members

    def dependencies(self) -> List[CargoPackage]:
        return [package for package in self.packages if not self.is_workspace_member(package)]

    @property
    def dependency_count(self) -> int:
        return len(self.dependencies())


Runner = Callable[[Sequence[str]], str]


def build_command(options: MetadataOptions) -> List[str]:
    cargo = os.environ.get("CARGO", "cargo")
    command = [cargo, "metadata", "--format-version", "1"]
    if options.quiet:
        command.append("-q")
    if options.manifest_path:
        command.extend(["--manifest-path", options.manifest_path])
    command.extend(["-v"] * options.verbose)
    if options.color:
        command.extend(["--color", options.color])
    for flag in options.unstable_flags:
        command.extend(["-Z", flag])
    return command


def _default_runner(command: Sequence[str]) -> str:
    job = "cargo metadata"
    try:
        completed = subprocess.run(
            list(command),
            stdout=subprocess.PIPE,
            stderr=None,
            check=False,
        )
    except OSError as exc:
        raise MetadataError(f"error running {job}: {exc}") from exc
    if completed.returncode != 0:
        raise MetadataError(f"{job} returned exit status {completed.returncode}")
    try:
        return completed.stdout.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise MetadataError(f"error parsing {job} output") from exc


def parse_metadata(raw: str) -> Metadata:
    try:
        return Metadata.model_validate_json(raw)
    except ValidationError as exc:
        raise MetadataError("error parsing cargo metadata output") from exc


def load_metadata(options: MetadataOptions, runner: Runner | None = None) -> Metadata:
    """Run `cargo metadata` and decode its output."""
    command = build_command(options)
    logger.debug("Running %s", " ".join(command))
    output = (runner or _default_runner)(command)
    metadata = parse_metadata(output)
    logger.debug(
        "cargo metadata reported %d packages (%d workspace members)",
        len(metadata.packages),
        len(metadata.workspace_members),
    )
    return metadata


__all__ = [
    "CargoPackage",
    "Metadata",
    "MetadataOptions",
    "build_command",
    "load_metadata",
    "parse_metadata",
]
