# SPDX-License-Identifier: MIT
"""Tests for nativecfg.core.visitor."""

import logging

import pytest

from nativecfg.core.deps import (
    CcDependency,
    CompilationContext,
    LibraryToLink,
    LinkerInput,
    LinkingContext,
    NativeDependency,
    ObjcDependency,
    Runfiles,
)
from nativecfg.core.errors import UnknownDependencyShape
from nativecfg.core.flags import OptionSet
from nativecfg.core.visitor import Accumulator, DependencyVisitor

SEPARATED = frozenset(["-iquote", "-isystem", "-L", "-l"])


@pytest.fixture
def acc():
    return Accumulator(
        cppopts=OptionSet(separated_arg_flags=SEPARATED),
        clinkopts=OptionSet(separated_arg_flags=SEPARATED),
    )


def cc_dep(label="//foo", libraries=(), user_link_flags=(), **ctx):
    return CcDependency(
        label=label,
        compilation_context=CompilationContext(**ctx),
        linking_context=LinkingContext(
            (LinkerInput(tuple(libraries), tuple(user_link_flags)),)
        ),
    )


class TestCcDependency:
    def test_defines_and_includes(self, acc):
        dep = cc_dep(
            defines=("FOO", "BAR=1"),
            includes=("inc",),
            quote_includes=("q",),
            system_includes=("sys",),
        )
        DependencyVisitor().visit(dep, acc)
        assert acc.cppopts.tokens() == [
            "-DFOO",
            "-DBAR=1",
            "-Iinc",
            "-iquote",
            "q",
            "-isystem",
            "sys",
        ]

    def test_include_kinds_deduplicated_independently(self, acc):
        dep = cc_dep(
            includes=("a", "a"),
            quote_includes=("a",),
            system_includes=("a", "a"),
        )
        DependencyVisitor().visit(dep, acc)
        assert acc.cppopts.tokens() == ["-Ia", "-iquote", "a", "-isystem", "a"]

    def test_headers_become_inputs(self, acc):
        DependencyVisitor().visit(cc_dep(headers=("foo.h", "bar.h")), acc)
        assert list(acc.inputs) == ["foo.h", "bar.h"]
        assert list(acc.deps) == []

    def test_static_archives_queued_for_bracketing(self, acc):
        dep = cc_dep(
            libraries=[
                LibraryToLink(static_library="libx.a"),
                LibraryToLink(static_library="liby.a", alwayslink=True),
            ]
        )
        DependencyVisitor().visit(dep, acc)
        assert acc.archives == [("libx.a", False), ("liby.a", True)]
        assert acc.clinkopts.tokens() == []
        assert list(acc.deps) == ["libx.a", "liby.a"]

    def test_shared_libraries_use_search_path(self, acc):
        dep = cc_dep(
            libraries=[
                LibraryToLink(dynamic_library="d/libfoo.so"),
                LibraryToLink(dynamic_library="d/libbar.so.3"),
            ]
        )
        DependencyVisitor().visit(dep, acc)
        assert acc.clinkopts.tokens() == [
            "-L",
            "d",
            "-l",
            "foo",
            "-L",
            "d",
            "-l",
            ":libbar.so.3",
        ]
        assert acc.archives == []

    def test_versioned_dylib_only_staged(self, acc):
        dep = cc_dep(libraries=[LibraryToLink(dynamic_library="d/libfoo.2.dylib")])
        DependencyVisitor().visit(dep, acc)
        assert acc.clinkopts.tokens() == []
        assert acc.archives == []
        assert list(acc.inputs) == ["d/libfoo.2.dylib"]

    def test_user_link_flags_follow_libraries(self, acc):
        dep = cc_dep(
            libraries=[LibraryToLink(dynamic_library="d/libfoo.so")],
            user_link_flags=["-lm", "-ldl"],
        )
        DependencyVisitor().visit(dep, acc)
        assert acc.clinkopts.tokens() == ["-L", "d", "-l", "foo", "-lm", "-ldl"]

    def test_missing_artifact_skipped(self, acc, caplog):
        dep = cc_dep(label="//empty", libraries=[LibraryToLink()])
        with caplog.at_level(logging.WARNING, logger="nativecfg.core.visitor"):
            DependencyVisitor().visit(dep, acc)
        assert acc.archives == []
        assert list(acc.inputs) == []
        assert "//empty" in caplog.text


class TestObjcDependency:
    def test_defines_and_includes(self, acc):
        dep = ObjcDependency(
            label="//objc",
            defines=("OBJC",),
            includes=("i",),
            iquotes=("q",),
            system_includes=("s",),
        )
        DependencyVisitor().visit(dep, acc)
        assert acc.cppopts.tokens() == [
            "-DOBJC",
            "-Ii",
            "-iquote",
            "q",
            "-isystem",
            "s",
        ]

    def test_no_link_effect(self, acc):
        DependencyVisitor().visit(ObjcDependency(label="//objc"), acc)
        assert acc.clinkopts.tokens() == []
        assert acc.archives == []


class TestDispatch:
    def test_bare_dependency_is_rejected(self, acc):
        with pytest.raises(UnknownDependencyShape) as exc_info:
            DependencyVisitor().visit(NativeDependency(label="//mystery"), acc)
        assert exc_info.value.label == "//mystery"

    def test_foreign_object_is_rejected(self, acc):
        with pytest.raises(UnknownDependencyShape):
            DependencyVisitor().visit(object(), acc)

    def test_runfiles_merged_in_order(self, acc):
        visitor = DependencyVisitor()
        visitor.visit(
            ObjcDependency(label="//a", runfiles=Runfiles(("a.dat", "shared.dat"))),
            acc,
        )
        visitor.visit(
            CcDependency(label="//b", runfiles=Runfiles(("shared.dat", "b.dat"))),
            acc,
        )
        assert acc.runfiles.files == ("a.dat", "shared.dat", "b.dat")
