from rpmgraph.constants import RPM_SUFFIX, Arch
from rpmgraph.errors import UnknownArchitectureError


def parse_nvra(filename: str) -> tuple[str, str, str, str] | None:
    """
    Split an RPM file name into its name, version, release and architecture.

    The name is segmented from the right, because names, versions and
    releases may themselves contain dashes and dots:
    ``<name>-<version>-<release>.<arch>.rpm``.

    Args:
        filename: File name (not a path) of the package, e.g.
            ``acl-2.2.51-12.el7.x86_64.rpm``

    Returns:
        Tuple of ``(name, version, release, arch)`` or None if the file name
        does not have that shape or the name, version or release would be empty
    """
    if not filename.endswith(RPM_SUFFIX):
        return None
    stem = filename[: -len(RPM_SUFFIX)]

    nvr, dot, arch = stem.rpartition(".")
    if not dot:
        return None

    nv, dash, release = nvr.rpartition("-")
    if not dash:
        return None

    name, dash, version = nv.rpartition("-")
    if not dash:
        return None

    if not all((name, version, release)):
        return None
    return name, version, release, arch


def parse_arch(arch: str, filename: str = "") -> Arch:
    """
    Map an architecture token to `Arch`.

    Raises:
        UnknownArchitectureError: If the token is not one of the known architectures
    """
    try:
        return Arch(arch)
    except ValueError:
        raise UnknownArchitectureError(arch, filename) from None
