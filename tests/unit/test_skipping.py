import sys

import pytest

from vouch.skipping import (
    SkipTest,
    skip,
    skip_if,
    skip_if_not,
    skip_if_not_installed,
    skip_on_ci,
    skip_on_os,
    skip_on_release,
)


def test_skip_carries_reason():
    with pytest.raises(SkipTest) as info:
        skip("no network")

    assert info.value.reason == "no network"


def test_skip_is_not_swallowed_by_except_exception():
    def code_under_test():
        try:
            skip("escapes")
        except Exception:
            return "swallowed"
        return "not reached"

    with pytest.raises(SkipTest):
        code_under_test()


def test_conditional_skips():
    skip_if(False)
    skip_if_not(True)
    with pytest.raises(SkipTest, match="flag"):
        skip_if(1, "flag")
    with pytest.raises(SkipTest):
        skip_if_not([])


def test_skip_on_os_matches_current_platform():
    current = {"win32": "windows", "darwin": "mac"}.get(sys.platform, "linux")
    with pytest.raises(SkipTest, match=f"On {current}"):
        skip_on_os(current)


def test_skip_on_os_rejects_unknown_names():
    with pytest.raises(ValueError, match="Unknown OS name 'beos'"):
        skip_on_os("beos")


def test_skip_on_ci(monkeypatch):
    monkeypatch.setenv("CI", "true")
    with pytest.raises(SkipTest, match="On CI"):
        skip_on_ci()

    monkeypatch.setenv("CI", "false")
    skip_on_ci()


def test_skip_on_release(monkeypatch):
    monkeypatch.delenv("VOUCH_NOT_RELEASE", raising=False)
    with pytest.raises(SkipTest, match="release"):
        skip_on_release()

    monkeypatch.setenv("VOUCH_NOT_RELEASE", "1")
    skip_on_release()


def test_skip_if_not_installed():
    skip_if_not_installed("json")
    with pytest.raises(SkipTest, match="cannot be imported"):
        skip_if_not_installed("definitely_not_a_module_xyz")
    with pytest.raises(SkipTest):
        skip_if_not_installed("definitely_not_a_module_xyz.sub")
