import os
import sys
import time
from pathlib import Path

import pytest

from vouch.context import TestContext, test_context_scope
from vouch.scoped import (
    envvars,
    reproducible_environment,
    sys_path,
    temporary_directory,
    test_path,
    working_directory,
)


def test_envvars_sets_and_restores(monkeypatch):
    monkeypatch.setenv("VOUCH_SAMPLE_KEEP", "original")
    monkeypatch.delenv("VOUCH_SAMPLE_NEW", raising=False)

    with envvars(VOUCH_SAMPLE_KEEP=None, VOUCH_SAMPLE_NEW="set"):
        assert "VOUCH_SAMPLE_KEEP" not in os.environ
        assert os.environ["VOUCH_SAMPLE_NEW"] == "set"

    assert os.environ["VOUCH_SAMPLE_KEEP"] == "original"
    assert "VOUCH_SAMPLE_NEW" not in os.environ


def test_envvars_restores_after_exception(monkeypatch):
    monkeypatch.delenv("VOUCH_SAMPLE_NEW", raising=False)

    try:
        with envvars(VOUCH_SAMPLE_NEW="set"):
            raise RuntimeError("inside")
    except RuntimeError:
        pass

    assert "VOUCH_SAMPLE_NEW" not in os.environ


def test_working_directory_changes_and_restores(tmp_path):
    before = Path.cwd()

    with working_directory(tmp_path):
        assert Path.cwd() == tmp_path.resolve()

    assert Path.cwd() == before


def test_temporary_directory_is_removed():
    with temporary_directory() as path:
        (path / "file.txt").write_text("x")
        assert path.name.startswith("vouch-")

    assert not path.exists()


def test_sys_path_prepends_and_restores(tmp_path):
    before = list(sys.path)

    with sys_path(tmp_path):
        assert sys.path[0] == str(tmp_path)

    assert sys.path == before


def test_test_path_is_relative_to_running_test_file(tmp_path):
    module = tmp_path / "vouch_data.py"
    with test_context_scope(TestContext(module_path=module)):
        assert test_path("fixtures", "a.csv") == tmp_path / "fixtures" / "a.csv"


def test_test_path_falls_back_to_cwd():
    assert test_path("x") == Path.cwd() / "x"


@pytest.mark.skipif(not hasattr(time, "tzset"), reason="time.tzset is POSIX only")
def test_reproducible_environment_restores_timezone_when_the_block_raises(monkeypatch):
    monkeypatch.setenv("TZ", "VCH-3")
    time.tzset()
    before = time.tzname

    with pytest.raises(RuntimeError):
        with reproducible_environment():
            assert os.environ["TZ"] == "UTC"
            raise RuntimeError("test body failed")

    assert os.environ["TZ"] == "VCH-3"
    assert time.tzname == before
    monkeypatch.undo()
    time.tzset()
