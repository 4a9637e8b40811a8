from pathlib import Path

from rpmgraph.constants import (
    EXIT_MISSING_PREREQUISITE,
    EXIT_PACKAGE_ERROR,
    EXIT_UNKNOWN_ARCHITECTURE,
    SkipReason,
)


class RpmGraphError(Exception):
    """Base class for errors raised while building the reverse-dependency map."""

    def __init__(self, message: str, exit_code: int = EXIT_PACKAGE_ERROR):
        super().__init__(message)
        self.exit_code = exit_code


class PackageError(RpmGraphError):
    """
    Raised when a single file cannot be turned into a package descriptor.

    These are isolated per file: the build records the file as skipped and
    carries on with the rest.
    """

    reason = SkipReason.QUERY_FAILED

    def __init__(self, path: Path, message: str):
        super().__init__(message)
        self.path = path


class MissingPackageError(PackageError):
    """Raised when a candidate file no longer exists."""

    reason = SkipReason.MISSING

    def __init__(self, path: Path):
        super().__init__(path, f"Package file does not exist: {path}")


class MalformedFilenameError(PackageError):
    """Raised when a file name does not decompose into name-version-release.arch.rpm."""

    reason = SkipReason.MALFORMED_FILENAME

    def __init__(self, path: Path):
        super().__init__(path, f"Cannot parse package file name: {path.name}")


class QueryError(PackageError):
    """Raised when the requirements query fails to run or exits unsuccessfully."""

    reason = SkipReason.QUERY_FAILED

    def __init__(self, path: Path, message: str, stderr: str | None = None):
        super().__init__(path, message)
        self.stderr = stderr


class UnknownArchitectureError(RpmGraphError):
    """
    Raised for an architecture token outside the known set.

    The file discovery only admits source RPM names, so this means the
    discovery filter and the parser disagree; it aborts the whole run.
    """

    def __init__(self, arch: str, filename: str):
        super().__init__(
            f"Unknown architecture {arch!r} in package file name: {filename}",
            EXIT_UNKNOWN_ARCHITECTURE,
        )
        self.arch = arch
        self.filename = filename


class MissingPrerequisiteError(RpmGraphError):
    """Raised when the query executable is not available."""

    def __init__(self, command: str):
        super().__init__(f"{command} not found", EXIT_MISSING_PREREQUISITE)
        self.command = command
