import json
import logging

import pytest
from flexmock import flexmock

from rpmgraph import cli
from rpmgraph.constants import (
    EXIT_INVALID_ARGUMENTS,
    EXIT_MISSING_PREREQUISITE,
    EXIT_NO_PACKAGES_FOUND,
    EXIT_PACKAGE_ERROR,
    EXIT_SUCCESS,
    EXIT_UNKNOWN_ARCHITECTURE,
)
from rpmgraph.errors import MissingPrerequisiteError

set_up_logging = cli.set_up_logging


@pytest.fixture(autouse=True)
def no_logging_setup():
    flexmock(cli).should_receive("set_up_logging")


@pytest.fixture
def rpm_available():
    flexmock(cli).should_receive("check_prerequisites")


@pytest.fixture
def srpm_tree(tmp_path, make_rpm, fake_query, monkeypatch):
    make_rpm("Packages/acl-2.2.51-12.el7.src.rpm")
    make_rpm("Packages/attr-2.4.46-13.el7.src.rpm")
    make_rpm("Packages/acl-2.2.51-12.el7.x86_64.rpm")
    query = fake_query({
        "acl-2.2.51-12.el7.src.rpm": "gettext\nlibattr-devel >= 2.4\n",
        "attr-2.4.46-13.el7.src.rpm": "gettext\nlibtool\n",
    })
    monkeypatch.setattr(cli, "RpmRequiresQuery", lambda command: query)
    return tmp_path


def test_parse_arguments():
    arguments = cli.parse_command_line_arguments(["-d", "/srpms", "--workers", "4", "--stats"])
    assert str(arguments.directory) == "/srpms"
    assert arguments.workers == 4
    assert arguments.stats
    assert arguments.fail_fast is None
    assert not arguments.strict


@pytest.mark.parametrize("argv", [[], ["-d", "/srpms", "--workers", "0"], ["-d", "/srpms", "--workers", "x"]])
def test_parse_arguments_invalid(argv):
    with pytest.raises(SystemExit):
        cli.parse_command_line_arguments(argv)


def test_main(srpm_tree, rpm_available, capsys):
    assert cli.main(["-d", str(srpm_tree), "--workers", "2", "--stats"]) == EXIT_SUCCESS
    out, err = capsys.readouterr()
    assert "Packages recorded: 2" in out
    assert "Dependencies: 3" in out
    assert "Dependency edges: 4" in out
    assert "Unique nodes: 5" in out
    assert "Skipped files: 0" in out
    assert "gettext: 2 packages" in err


def test_main_skipped_file(srpm_tree, rpm_available, make_rpm, capsys):
    broken = make_rpm("Packages/brokensrc.rpm")
    assert cli.main(["-d", str(srpm_tree), "--stats"]) == EXIT_SUCCESS
    out, err = capsys.readouterr()
    assert "Skipped files: 1" in out
    assert "   Skipped files:" in err
    assert f"     {broken}: malformed-filename" in err

    assert cli.main(["-d", str(srpm_tree), "--strict"]) == EXIT_PACKAGE_ERROR
    assert cli.main(["-d", str(srpm_tree), "--fail-fast"]) == EXIT_PACKAGE_ERROR


def test_main_unknown_arch(srpm_tree, rpm_available, make_rpm):
    make_rpm("Packages/acl-2.2.51-12.el7.aarch64.rpm")
    assert cli.main(["-d", str(srpm_tree), "--config", str(write_config(srpm_tree, {"suffix": ".rpm"}))]) == EXIT_UNKNOWN_ARCHITECTURE


def test_main_no_packages(tmp_path, rpm_available):
    assert cli.main(["-d", str(tmp_path)]) == EXIT_NO_PACKAGES_FOUND


def test_main_missing_rpm(tmp_path):
    flexmock(cli).should_receive("check_prerequisites").and_raise(MissingPrerequisiteError("rpm"))
    assert cli.main(["-d", str(tmp_path)]) == EXIT_MISSING_PREREQUISITE


def test_main_not_a_directory(tmp_path):
    assert cli.main(["-d", str(tmp_path / "missing")]) == EXIT_INVALID_ARGUMENTS


def test_main_invalid_config(tmp_path):
    assert cli.main(["-d", str(tmp_path), "--config", str(tmp_path / "missing.json")]) == EXIT_INVALID_ARGUMENTS
    config = write_config(tmp_path, {"workers": -1})
    assert cli.main(["-d", str(tmp_path), "--config", str(config)]) == EXIT_INVALID_ARGUMENTS


def test_set_up_logging_to_file(tmp_path):
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    log_file = tmp_path / "rpmgraph.log"
    try:
        set_up_logging(verbose=True, log_file=log_file)
        logging.getLogger("rpmgraph.test").debug("hello")
        for handler in root.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
    finally:
        for handler in root.handlers[:]:
            if handler not in handlers:
                root.removeHandler(handler)
                handler.close()
        root.setLevel(level)


def write_config(directory, content):
    config = directory / "rpmgraph.json"
    config.write_text(json.dumps(content))
    return config
