import logging
from pathlib import Path

from rpmgraph.errors import MalformedFilenameError, MissingPackageError
from rpmgraph.models import Package
from rpmgraph.nvra import parse_arch, parse_nvra
from rpmgraph.query import RequiresQuery, get_dependencies

logger = logging.getLogger(__name__)


def load_package(path: Path, query: RequiresQuery) -> Package:
    """
    Build a package descriptor for a single file.

    Args:
        path: Path to the package file
        query: Capability used to list the file's requirements

    Returns:
        The package descriptor; its dependency list may be empty

    Raises:
        MissingPackageError: If the file does not exist
        MalformedFilenameError: If the file name does not parse
        QueryError: If listing the requirements fails
        UnknownArchitectureError: If the architecture is not a known one
    """
    if not path.exists():
        raise MissingPackageError(path)

    nvra = parse_nvra(path.name)
    if nvra is None:
        raise MalformedFilenameError(path)
    name, version, release, arch = nvra

    package = Package(
        name=name,
        version=version,
        release=release,
        arch=parse_arch(arch, path.name),
        dependencies=tuple(get_dependencies(path, query)),
        path=path,
    )
    logger.debug("📦 %s requires %d packages", package.nvra, len(package.dependencies))
    return package


def build_package(path: Path, query: RequiresQuery) -> Package | None:
    """
    Like `load_package`, but returns None for a missing file or an unparseable
    file name instead of raising.
    """
    try:
        return load_package(path, query)
    except (MissingPackageError, MalformedFilenameError) as error:
        logger.debug("Skipping %s: %s", path, error)
        return None
