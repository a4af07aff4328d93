# SPDX-License-Identifier: MIT
"""Toolchain descriptors.

A ToolchainDescriptor captures what the resolver needs to know about a
native toolchain: the target platform, the baseline options for each
language variant, the extra linker flags the toolchain requires, and which
flags take their argument as a separate token. Descriptors are immutable
and supplied once per build configuration.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from nativecfg.core.errors import ConfigError

# Flags always treated as separated-arg flags, whatever the toolchain
# declares: the ones nativecfg emits with a separate argument, and the
# preprocessor flags that accept one ("-I dir", "-D NAME").
CORE_SEPARATED_ARG_FLAGS: frozenset[str] = frozenset(
    [
        "-iquote",
        "-isystem",
        "-L",
        "-l",
        "-Wl,-force_load",
        "-I",
        "-D",
        "-U",
        "-include",
    ]
)

_OPTION_FIELDS = (
    "c_compile_options",
    "cxx_compile_options",
    "objc_compile_options",
    "objcxx_compile_options",
    "link_options",
)


@dataclass(frozen=True)
class ToolchainDescriptor:
    """Immutable description of a native toolchain.

    Attributes:
        name: Toolchain name (e.g., 'gcc', 'apple-clang').
        platform: OS tag of the target (e.g., 'linux', 'darwin').
        c_compile_options: Baseline C compiler options.
        cxx_compile_options: Baseline C++ compiler options.
        objc_compile_options: Baseline Objective-C compiler options.
        objcxx_compile_options: Baseline Objective-C++ compiler options.
        link_options: Extra linker flags required by the toolchain.
        separated_arg_flags: Flags whose argument is the next token.
        supports_native: False when native compilation is unavailable.
    """

    name: str
    platform: str
    c_compile_options: tuple[str, ...] = ()
    cxx_compile_options: tuple[str, ...] = ()
    objc_compile_options: tuple[str, ...] = ()
    objcxx_compile_options: tuple[str, ...] = ()
    link_options: tuple[str, ...] = ()
    separated_arg_flags: frozenset[str] = field(default_factory=frozenset)
    supports_native: bool = True

    def get_separated_arg_flags(self) -> frozenset[str]:
        """Return the declared separated-arg flags plus the ones nativecfg emits."""
        return self.separated_arg_flags | CORE_SEPARATED_ARG_FLAGS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ToolchainDescriptor:
        """Create a descriptor from a dictionary (e.g. parsed JSON).

        Raises:
            ConfigError: If required keys are missing or values have the
                wrong type.
        """
        if not isinstance(data, dict):
            raise ConfigError("toolchain must be a mapping")
        name = data.get("name")
        platform = data.get("platform")
        if not isinstance(name, str) or not name:
            raise ConfigError("toolchain is missing a 'name'")
        if not isinstance(platform, str) or not platform:
            raise ConfigError("toolchain is missing a 'platform'", name)

        options: dict[str, tuple[str, ...]] = {}
        for key in (*_OPTION_FIELDS, "separated_arg_flags"):
            value = data.get(key, [])
            if not isinstance(value, list) or not all(
                isinstance(v, str) for v in value
            ):
                raise ConfigError(f"'{key}' must be a list of strings", name)
            options[key] = tuple(value)

        supports_native = data.get("supports_native", True)
        if not isinstance(supports_native, bool):
            raise ConfigError("'supports_native' must be true or false", name)

        return cls(
            name=name,
            platform=platform,
            c_compile_options=options["c_compile_options"],
            cxx_compile_options=options["cxx_compile_options"],
            objc_compile_options=options["objc_compile_options"],
            objcxx_compile_options=options["objcxx_compile_options"],
            link_options=options["link_options"],
            separated_arg_flags=frozenset(options["separated_arg_flags"]),
            supports_native=supports_native,
        )

    def __repr__(self) -> str:
        return f"ToolchainDescriptor({self.name!r}, platform={self.platform!r})"
