# SPDX-License-Identifier: MIT
"""Loading toolchain and request descriptions from JSON files.

The JSON layout mirrors the dataclasses:

    toolchain.json
        {"name": "gcc", "platform": "linux",
         "link_options": ["-pthread"], "separated_arg_flags": ["-L", "-l"]}

    request.json
        {"srcs": ["foo.go", "foo.h"], "link_mode": "c-shared",
         "copts": ["-O2"],
         "cdeps": [{"kind": "cc", "label": "//zlib", "includes": ["zlib"],
                    "linker_inputs": [{"libraries": [
                        {"static_library": "zlib/libz.a"}]}]}]}
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from nativecfg.core.errors import ConfigError
from nativecfg.core.resolver import CompilationRequest
from nativecfg.tools.toolchain import ToolchainDescriptor

logger = logging.getLogger(__name__)


def _load_json(path: Path | str) -> Any:
    path = Path(path)
    try:
        with open(path) as f:
            return json.load(f)
    except OSError as e:
        raise ConfigError(f"cannot read file: {e.strerror}", str(path)) from e
    except json.JSONDecodeError as e:
        raise ConfigError(
            f"invalid JSON: {e.msg} (line {e.lineno})", str(path)
        ) from e


def _where(path: Path | str, context: str | None) -> str:
    return f"{path}: {context}" if context else str(path)


def load_toolchain(path: Path | str) -> ToolchainDescriptor:
    """Load a ToolchainDescriptor from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or is malformed.
    """
    data = _load_json(path)
    try:
        toolchain = ToolchainDescriptor.from_dict(data)
    except ConfigError as e:
        raise ConfigError(e.message, _where(path, e.context)) from e
    logger.debug("Loaded toolchain %s from %s", toolchain.name, path)
    return toolchain


def load_request(path: Path | str) -> CompilationRequest:
    """Load a CompilationRequest from a JSON file.

    Raises:
        ConfigError: If the file cannot be read or is malformed.
    """
    data = _load_json(path)
    try:
        request = CompilationRequest.from_dict(data)
    except ConfigError as e:
        raise ConfigError(e.message, _where(path, e.context)) from e
    logger.debug(
        "Loaded request with %d sources and %d dependencies from %s",
        len(request.srcs),
        len(request.cdeps),
        path,
    )
    return request
