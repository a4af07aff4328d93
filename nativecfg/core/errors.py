# SPDX-License-Identifier: MIT
"""Custom exceptions for nativecfg.

All nativecfg exceptions inherit from NativeCfgError. Every error here
signals a misconfiguration: resolution is deterministic, so retrying with
the same inputs reproduces the same failure.
"""

from __future__ import annotations


class NativeCfgError(Exception):
    """Base class for all nativecfg exceptions.

    Attributes:
        message: The error message.
        context: Optional description of where the error occurred
                 (a config file, a dependency label, ...).
    """

    def __init__(self, message: str, context: str | None = None) -> None:
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        if self.context:
            return f"{self.context}: {self.message}"
        return self.message


class ToolchainUnsupported(NativeCfgError):
    """The toolchain has no native (C/C++/Objective-C) compilation support.

    Attributes:
        toolchain: Name of the toolchain, if known.
    """

    def __init__(self, toolchain: str | None = None) -> None:
        self.toolchain = toolchain
        super().__init__("toolchain does not support native compilation", toolchain)


class UnknownDependencyShape(NativeCfgError):
    """A dependency has neither C/C++ nor Objective-C capabilities.

    Attributes:
        label: The label of the offending dependency.
    """

    def __init__(self, label: str) -> None:
        self.label = label
        super().__init__(
            f"unknown library has neither cc nor objc capabilities: {label}"
        )


class ConfigError(NativeCfgError):
    """A configuration file or dictionary is malformed."""
