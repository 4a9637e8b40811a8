import pytest
from pathlib import Path
from textwrap import dedent


class FakeRequiresQuery:
    """Returns canned requirement listings keyed by file name."""

    def __init__(self, outputs: dict[str, str] | None = None, default: str = ""):
        self.outputs = outputs or {}
        self.default = default
        self.queried: list[Path] = []

    def requires(self, path: Path) -> str:
        self.queried.append(path)
        return self.outputs.get(path.name, self.default)


@pytest.fixture
def rpm_requires_output() -> str:
    return dedent(
        """\
        lua-devel >= 5.1
        libcap-devel
        libacl-devel
        xz-devel >= 4.999.8
        dbus-devel
        lua-devel
        nspr-devel
        rpmlib(FileDigests) <= 4.6.0-1
        rpmlib(CompressedFileNames) <= 3.0.4-1
        """
    )


@pytest.fixture
def make_rpm(tmp_path):
    def make(filename: str, directory: Path | None = None) -> Path:
        path = (directory or tmp_path) / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        path.touch()
        return path
    return make


@pytest.fixture
def fake_query():
    return FakeRequiresQuery
