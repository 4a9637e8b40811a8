import logging
import os
import shutil
from pathlib import Path

from rpmgraph.constants import SOURCE_RPM_SUFFIX
from rpmgraph.errors import MissingPrerequisiteError

logger = logging.getLogger(__name__)


def check_prerequisites(command: str = "rpm") -> None:
    """
    Make sure the query executable is available.

    Raises:
        MissingPrerequisiteError: If the command cannot be found on PATH
    """
    if shutil.which(command) is None:
        raise MissingPrerequisiteError(command)


def find_source_rpms(
        directory: Path,
        suffix: str = SOURCE_RPM_SUFFIX,
        follow_links: bool = False,
    ) -> list[Path]:
    """
    Walk a directory tree and collect the files whose name ends with the suffix.

    Unreadable directories are logged and skipped.

    Args:
        directory: Root of the tree to search
        suffix: File name suffix to match
        follow_links: Whether to descend into symlinked directories

    Returns:
        Sorted list of matching paths
    """
    def on_error(error: OSError) -> None:
        logger.debug("Cannot read %s: %s", error.filename, error.strerror)

    files = []
    for root, _, filenames in os.walk(directory, onerror=on_error, followlinks=follow_links):
        for filename in filenames:
            if filename.endswith(suffix):
                files.append(Path(root) / filename)
    return sorted(files)
