"""Build a reverse-dependency map of source RPMs."""

from .errors import (
    MalformedFilenameError,
    MissingPackageError,
    MissingPrerequisiteError,
    PackageError,
    QueryError,
    RpmGraphError,
    UnknownArchitectureError,
)
from .graph import ReverseDependencyGraph, build_reverse_dependencies
from .models import BuildResult, Package, SkippedFile
from .nvra import parse_arch, parse_nvra
from .package import build_package, load_package
from .query import RequiresQuery, RpmRequiresQuery, parse_requires

__all__ = [
    "BuildResult",
    "MalformedFilenameError",
    "MissingPackageError",
    "MissingPrerequisiteError",
    "Package",
    "PackageError",
    "QueryError",
    "RequiresQuery",
    "ReverseDependencyGraph",
    "RpmGraphError",
    "RpmRequiresQuery",
    "SkippedFile",
    "UnknownArchitectureError",
    "build_package",
    "build_reverse_dependencies",
    "load_package",
    "parse_arch",
    "parse_nvra",
    "parse_requires",
]
