# SPDX-License-Identifier: MIT
"""Tests for nativecfg.core.errors."""

from nativecfg.core.errors import (
    ConfigError,
    NativeCfgError,
    ToolchainUnsupported,
    UnknownDependencyShape,
)


class TestErrors:
    def test_hierarchy(self):
        assert issubclass(ToolchainUnsupported, NativeCfgError)
        assert issubclass(UnknownDependencyShape, NativeCfgError)
        assert issubclass(ConfigError, NativeCfgError)

    def test_message_with_context(self):
        err = ConfigError("bad value", "toolchain.json")
        assert str(err) == "toolchain.json: bad value"
        assert err.message == "bad value"

    def test_message_without_context(self):
        assert str(NativeCfgError("boom")) == "boom"

    def test_unknown_dependency_shape_label(self):
        err = UnknownDependencyShape("//third_party:foo")
        assert err.label == "//third_party:foo"
        assert "//third_party:foo" in str(err)

    def test_toolchain_unsupported(self):
        err = ToolchainUnsupported("nocgo")
        assert str(err) == "nocgo: toolchain does not support native compilation"
