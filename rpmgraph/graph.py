import logging
import os
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, Iterable, List

from rpmgraph.errors import PackageError
from rpmgraph.models import BuildResult, Package, SkippedFile
from rpmgraph.package import load_package
from rpmgraph.query import RequiresQuery

logger = logging.getLogger(__name__)


class ReverseDependencyGraph:
    """
    Maps each dependency name to the packages that require it.

    Safe for concurrent writers: one lock guards the whole map, and all the
    dependencies of one package are recorded while holding it. The order of
    package names under a dependency is the order in which writers took the
    lock and is not stable between runs.
    """

    def __init__(self):
        self._dependents: Dict[str, List[str]] = {}
        self._lock = threading.Lock()

    def record(self, package: Package) -> None:
        """
        Add a package under every dependency it declares.

        Args:
            package: The package descriptor to record
        """
        with self._lock:
            for dependency in package.dependencies:
                self._dependents.setdefault(dependency, []).append(package.name)

    def get(self, dependency: str) -> List[str]:
        """
        Get the packages requiring a dependency.

        Returns:
            A copy of the package names, empty if nothing requires the dependency
        """
        with self._lock:
            return list(self._dependents.get(dependency, []))

    def __contains__(self, dependency: str) -> bool:
        with self._lock:
            return dependency in self._dependents

    def __len__(self) -> int:
        with self._lock:
            return len(self._dependents)

    def pair_count(self) -> int:
        """Total number of (dependency, package) pairs recorded."""
        with self._lock:
            return sum(len(names) for names in self._dependents.values())

    def nodes(self) -> set[str]:
        """All names appearing in the map, as dependencies or as dependents."""
        with self._lock:
            nodes = set(self._dependents)
            for names in self._dependents.values():
                nodes.update(names)
            return nodes

    def snapshot(self) -> Dict[str, List[str]]:
        """Return a plain copy of the map."""
        with self._lock:
            return {dependency: list(names) for dependency, names in self._dependents.items()}

    def get_stats(self) -> Dict[str, Any]:
        """
        Get graph statistics.

        Returns:
            Dictionary containing graph statistics
        """
        snapshot = self.snapshot()
        most_required = sorted(snapshot.items(), key=lambda item: (-len(item[1]), item[0]))[:10]
        return {
            "dependency_count": len(snapshot),
            "pair_count": sum(len(names) for names in snapshot.values()),
            "node_count": len(self.nodes()),
            "most_required": [(dependency, len(names)) for dependency, names in most_required],
        }


def default_workers() -> int:
    return os.cpu_count() or 1


def build_reverse_dependencies(
        paths: Iterable[Path],
        query: RequiresQuery,
        workers: int | None = None,
        fail_fast: bool = False,
        graph: ReverseDependencyGraph | None = None,
    ) -> BuildResult:
    """
    Load every package file in parallel and record it into one reverse-dependency map.

    Args:
        paths: Candidate package files
        query: Capability used to list each file's requirements
        workers: Size of the thread pool, defaults to the number of CPUs
        fail_fast: Abort on the first file that cannot be loaded instead of skipping it
        graph: Graph to record into, a new one is created if not given

    Returns:
        BuildResult with the final map, the recorded package names and the skipped files

    Raises:
        PackageError: On the first failing file, only if fail_fast is set
        UnknownArchitectureError: If any file has an unknown architecture
    """
    paths = list(paths)
    if graph is None:
        graph = ReverseDependencyGraph()
    workers = workers or default_workers()

    def process(path: Path) -> Package:
        package = load_package(path, query)
        graph.record(package)
        return package

    packages: List[str] = []
    skipped: List[SkippedFile] = []

    logger.debug("🔄 Loading %d package files with %d workers", len(paths), workers)

    executor = ThreadPoolExecutor(max_workers=workers)
    try:
        futures = {executor.submit(process, path): path for path in paths}
        for future in as_completed(futures):
            path = futures[future]
            try:
                package = future.result()
            except PackageError as error:
                if fail_fast:
                    raise
                logger.warning("⚠️  Skipping %s: %s", path, error)
                skipped.append(SkippedFile(path=path, reason=error.reason, details=str(error)))
                continue
            packages.append(package.name)
    except BaseException:
        executor.shutdown(wait=True, cancel_futures=True)
        raise
    else:
        executor.shutdown(wait=True)

    logger.debug(
        "✅ Recorded %d packages, %d dependencies, %d skipped",
        len(packages), len(graph), len(skipped),
    )
    return BuildResult(dependents=graph.snapshot(), packages=packages, skipped=skipped)
