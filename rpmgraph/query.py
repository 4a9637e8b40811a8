import logging
import shlex
import signal
import subprocess
from pathlib import Path
from typing import Protocol

from rpmgraph.constants import RPMLIB_PREFIX
from rpmgraph.errors import QueryError

logger = logging.getLogger(__name__)


class RequiresQuery(Protocol):
    """Anything that can return the raw requirements listing of a package file."""

    def requires(self, path: Path) -> str:
        ...


def get_signal_name(signal_num: int) -> str:
    """
    Get the name of a signal number.

    Args:
        signal_num: The signal number

    Returns:
        The signal name as a string
    """
    try:
        return signal.Signals(signal_num).name
    except ValueError:
        return f"SIG{signal_num}"


def quote_command(args: list[str]) -> str:
    """
    Join a list of arguments into a command string for display, only quoting
    arguments that a shell would otherwise split or expand.
    """
    quoted_args = []

    for arg in args:
        if not arg:
            quoted_args.append(shlex.quote(arg))
            continue

        try:
            if shlex.split(arg) == [arg]:
                quoted_args.append(arg)
            else:
                quoted_args.append(shlex.quote(arg))
        except ValueError:
            quoted_args.append(shlex.quote(arg))

    return " ".join(quoted_args)


class RpmRequiresQuery:
    """
    Lists the requirements of a package file with ``rpm -qRp``.

    Args:
        command: The rpm executable to run
    """

    def __init__(self, command: str = "rpm"):
        self.command = command

    def requires(self, path: Path) -> str:
        """
        Run the query against a package file and return its standard output.

        Raises:
            QueryError: If the command cannot be started or exits with a non-zero code
        """
        command = [self.command, "-qRp", str(path)]
        logger.debug("❯ %s", quote_command(command))

        try:
            result = subprocess.run(command, capture_output=True, text=True, errors="replace")
        except OSError as error:
            raise QueryError(path, f"Failed to run {self.command}: {error}") from error

        for line in result.stderr.splitlines():
            if line.strip():
                logger.debug("    %s", line.strip())

        if result.returncode < 0:
            signal_name = get_signal_name(abs(result.returncode))
            raise QueryError(
                path,
                f"{self.command} killed by signal {abs(result.returncode)} ({signal_name}) while querying {path.name}",
                result.stderr,
            )
        if result.returncode != 0:
            stderr = result.stderr.strip() or "Unknown error"
            raise QueryError(
                path,
                f"{self.command} exited with code {result.returncode} while querying {path.name}: {stderr}",
                result.stderr,
            )

        return result.stdout


def parse_requires(output: str) -> list[str]:
    """
    Extract dependency names from ``rpm -qR`` output.

    Each line is either a bare name or ``name <op> version``; only the name
    is kept. ``rpmlib(...)`` capabilities and blank lines are dropped.
    Duplicates and the output order are preserved.
    """
    dependencies = []
    for line in output.splitlines():
        parts = line.split()
        if not parts:
            continue
        name = parts[0]
        if name.startswith(RPMLIB_PREFIX):
            continue
        dependencies.append(name)
    return dependencies


def get_dependencies(path: Path, query: RequiresQuery) -> list[str]:
    """Query a package file and return the names of its requirements."""
    return parse_requires(query.requires(path))
