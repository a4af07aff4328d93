# SPDX-License-Identifier: MIT
"""Tests for the toolchain descriptors and presets."""

import pytest

from nativecfg.core.errors import ConfigError
from nativecfg.toolchains.gcc import SEPARATED_ARG_FLAGS as GCC_FLAGS
from nativecfg.toolchains.gcc import gcc_toolchain
from nativecfg.toolchains.llvm import apple_clang_toolchain
from nativecfg.tools.toolchain import CORE_SEPARATED_ARG_FLAGS, ToolchainDescriptor


class TestGccToolchain:
    def test_defaults(self):
        toolchain = gcc_toolchain()
        assert toolchain.name == "gcc"
        assert toolchain.platform == "linux"
        assert toolchain.supports_native
        assert toolchain.link_options == ("-pthread",)

    def test_platform_override(self):
        assert gcc_toolchain("freebsd").platform == "freebsd"

    def test_separated_flags(self):
        flags = gcc_toolchain().get_separated_arg_flags()
        for flag in ("-isystem", "-iquote", "-L", "-l", "-Xlinker"):
            assert flag in flags


class TestAppleClangToolchain:
    def test_defaults(self):
        toolchain = apple_clang_toolchain()
        assert toolchain.platform == "darwin"
        assert "-stdlib=libc++" in toolchain.cxx_compile_options

    def test_framework_flags_are_separated(self):
        flags = apple_clang_toolchain().get_separated_arg_flags()
        assert "-framework" in flags
        assert "-Wl,-force_load" in flags
        assert GCC_FLAGS <= flags


class TestToolchainDescriptor:
    def test_emitted_flags_always_separated(self):
        toolchain = ToolchainDescriptor(name="bare", platform="linux")
        assert toolchain.get_separated_arg_flags() == CORE_SEPARATED_ARG_FLAGS

    def test_immutable(self):
        toolchain = ToolchainDescriptor(name="bare", platform="linux")
        with pytest.raises(AttributeError):
            toolchain.platform = "darwin"

    def test_from_dict(self):
        toolchain = ToolchainDescriptor.from_dict(
            {
                "name": "cross",
                "platform": "linux",
                "c_compile_options": ["--sysroot=/sys"],
                "link_options": ["-static-libstdc++"],
                "separated_arg_flags": ["-target"],
                "supports_native": True,
            }
        )
        assert toolchain.c_compile_options == ("--sysroot=/sys",)
        assert toolchain.link_options == ("-static-libstdc++",)
        assert "-target" in toolchain.get_separated_arg_flags()

    def test_from_dict_unsupported(self):
        toolchain = ToolchainDescriptor.from_dict(
            {"name": "pure", "platform": "js", "supports_native": False}
        )
        assert not toolchain.supports_native

    def test_from_dict_missing_platform(self):
        with pytest.raises(ConfigError, match="platform"):
            ToolchainDescriptor.from_dict({"name": "x"})

    def test_from_dict_bad_options(self):
        with pytest.raises(ConfigError, match="link_options"):
            ToolchainDescriptor.from_dict(
                {"name": "x", "platform": "linux", "link_options": "-lm"}
            )

    def test_from_dict_supports_native_must_be_boolean(self):
        with pytest.raises(ConfigError, match="supports_native"):
            ToolchainDescriptor.from_dict(
                {"name": "x", "platform": "linux", "supports_native": "false"}
            )

    def test_preprocessor_flags_always_separated(self):
        toolchain = ToolchainDescriptor(name="bare", platform="linux")
        flags = toolchain.get_separated_arg_flags()
        for flag in ("-I", "-D", "-U", "-include"):
            assert flag in flags
