import logging
import sys
from pathlib import Path

import pytest

from vouch.errors import CollectionError
from vouch.testing import collect, collect_file
from vouch.testing.definitions import label_from_path


def test_label_from_path_strips_prefix():
    assert label_from_path(Path("vouch_string_utils.py"), "vouch_") == "string utils"
    assert label_from_path(Path("checks.py"), "vouch_") == "checks"


def test_collects_prefixed_functions_in_definition_order(write_test_file):
    path = write_test_file(
        "vouch_order.py",
        """
        def vouch_zeta():
            pass

        def helper():
            pass

        def vouch_alpha():
            pass
        """,
    )

    [ctx] = collect(path)

    assert ctx.label == "order"
    assert [t.description for t in ctx.tests] == ["vouch_zeta", "vouch_alpha"]
    assert all(t.module_path == path.resolve() for t in ctx.tests)


def test_test_that_keeps_registration_order_for_shared_names(write_test_file):
    path = write_test_file(
        "vouch_described.py",
        """
        from vouch import context, test_that

        context("Described behaviour")

        @test_that("first thing")
        def _():
            pass

        @test_that("second thing")
        def _():
            pass
        """,
    )

    [ctx] = collect(path)

    assert ctx.label == "Described behaviour"
    assert [t.description for t in ctx.tests] == ["first thing", "second thing"]
    assert ctx.tests[0].full_name == "Described behaviour::first thing"


def test_collects_class_methods_with_class_tags(write_test_file):
    path = write_test_file(
        "vouch_classes.py",
        """
        from vouch import tag

        @tag("slow")
        class VouchParser:
            def vouch_parses(self):
                pass

            def helper(self):
                pass
        """,
    )

    [ctx] = collect(path)

    [test] = ctx.tests
    assert test.description == "VouchParser.vouch_parses"
    assert test.cls is not None
    assert test.tags == {"slow"}


def test_test_that_methods_are_collected_with_their_class(write_test_file, caplog):
    path = write_test_file(
        "vouch_described.py",
        """
        from vouch import test_that

        class VouchFormatter:
            @test_that("pads numbers to width")
            def pads(self):
                pass
        """,
    )

    with caplog.at_level(logging.WARNING, logger="vouch.testing.discovery"):
        [ctx] = collect(path)

    [test] = ctx.tests
    assert test.description == "pads numbers to width"
    assert test.cls is not None
    assert not [r for r in caplog.records if r.name == "vouch.testing.discovery"]


def test_test_that_on_a_nested_function_is_ignored_with_a_warning(write_test_file, caplog):
    path = write_test_file(
        "vouch_nested.py",
        """
        from vouch import test_that

        def vouch_outer():
            @test_that("never collected")
            def inner():
                pass

        def make():
            @test_that("never collected either")
            def inner():
                pass

        make()
        """,
    )

    with caplog.at_level(logging.WARNING, logger="vouch.testing.discovery"):
        [ctx] = collect(path)

    assert [t.description for t in ctx.tests] == ["vouch_outer"]
    assert "make.<locals>.inner" in caplog.text


def test_directory_collection_uses_file_prefix_and_sorted_paths(tmp_path, write_test_file):
    write_test_file("vouch_b.py", "def vouch_one():\n    pass\n")
    write_test_file("sub/vouch_a.py", "def vouch_two():\n    pass\n")
    write_test_file("helpers.py", "def vouch_ignored():\n    pass\n")
    write_test_file("vouch_empty.py", "X = 1\n")

    contexts = collect(tmp_path)

    assert [c.label for c in contexts] == ["a", "b"]


def test_async_tests_are_flagged(write_test_file):
    path = write_test_file("vouch_async.py", "async def vouch_waits():\n    pass\n")

    [ctx] = collect(path)

    assert ctx.tests[0].is_async is True


def test_import_error_raises_collection_error(write_test_file):
    path = write_test_file("vouch_broken.py", "import does_not_exist_anywhere\n")

    with pytest.raises(CollectionError, match="vouch_broken.py"):
        collect(path)


def test_module_level_skip_yields_skipped_context(write_test_file):
    path = write_test_file(
        "vouch_skipped.py",
        """
        from vouch import skip
        skip("needs a database")

        def vouch_never():
            pass
        """,
    )

    ctx = collect_file(path)

    assert ctx is not None
    assert ctx.skip_reason == "needs a database"
    assert ctx.tests == []
    assert not [name for name in sys.modules if name.startswith("_vouch_vouch_skipped_")]


def test_collection_leaves_sys_path_untouched(write_test_file):
    write_test_file("vouch_helpers_user.py", "import sibling_helper_for_collection\n\ndef vouch_uses_helper():\n    pass\n")
    helper = write_test_file("sibling_helper_for_collection.py", "VALUE = 1\n")
    before = list(sys.path)

    contexts = collect(helper.parent)

    assert sys.path == before
    assert [c.label for c in contexts] == ["helpers user"]


def test_missing_path_raises(tmp_path):
    with pytest.raises(CollectionError):
        collect(tmp_path / "nope")
