# SPDX-License-Identifier: MIT
"""Native dependency descriptors.

A NativeDependency describes a C/C++ or Objective-C library that a
compilation unit depends on. Descriptors arrive fully resolved: the
compilation and linking contexts already contain the transitive data of
the dependency, so nativecfg never walks a dependency graph itself.

Two capability variants exist:

- CcDependency: compilation context (headers, defines, three include
  kinds) plus a linking context (ordered linker inputs).
- ObjcDependency: defines and the same three include kinds, no linking.

Anything else handed to the resolver is a configuration error.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from nativecfg.core.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Iterable


@dataclass(frozen=True)
class LibraryToLink:
    """A library with up to four candidate artifacts.

    Attributes:
        static_library: Plain static archive (``libfoo.a``).
        pic_static_library: Position-independent static archive (``libfoo.pic.a``).
        interface_library: Interface stub for a dynamic library.
        dynamic_library: Shared library (``libfoo.so``, ``libfoo.dylib``).
        alwayslink: Link every object of the archive, even unreferenced ones.
    """

    static_library: str | None = None
    pic_static_library: str | None = None
    interface_library: str | None = None
    dynamic_library: str | None = None
    alwayslink: bool = False


@dataclass(frozen=True)
class LinkerInput:
    """Libraries contributed by one owner, plus its user-visible link flags."""

    libraries: tuple[LibraryToLink, ...] = ()
    user_link_flags: tuple[str, ...] = ()


@dataclass(frozen=True)
class CompilationContext:
    """Transitive compilation information of a C/C++ dependency.

    Include directories come in three disjoint kinds:
    ``includes`` (searched for both ``<>`` and ``""``, emitted as ``-I``),
    ``quote_includes`` (``-iquote``) and ``system_includes`` (``-isystem``).
    """

    headers: tuple[str, ...] = ()
    defines: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    quote_includes: tuple[str, ...] = ()
    system_includes: tuple[str, ...] = ()


@dataclass(frozen=True)
class LinkingContext:
    linker_inputs: tuple[LinkerInput, ...] = ()


@dataclass(frozen=True)
class Runfiles:
    """Runtime data files that must be staged next to the built artifact."""

    files: tuple[str, ...] = ()

    def merge(self, other: Runfiles) -> Runfiles:
        """Return a new collection with ``other``'s files appended.

        Files already present keep their original position.
        """
        return Runfiles(tuple(dict.fromkeys(self.files + tuple(other.files))))

    def __len__(self) -> int:
        return len(self.files)


@dataclass(frozen=True)
class NativeDependency:
    """Common base of the dependency variants.

    A bare NativeDependency has no capabilities and is rejected by the
    resolver; use CcDependency or ObjcDependency.
    """

    label: str
    runfiles: Runfiles = field(default_factory=Runfiles)


@dataclass(frozen=True)
class CcDependency(NativeDependency):
    compilation_context: CompilationContext = field(
        default_factory=CompilationContext
    )
    linking_context: LinkingContext = field(default_factory=LinkingContext)


@dataclass(frozen=True)
class ObjcDependency(NativeDependency):
    defines: tuple[str, ...] = ()
    includes: tuple[str, ...] = ()
    iquotes: tuple[str, ...] = ()
    system_includes: tuple[str, ...] = ()


# =============================================================================
# Construction from plain data (JSON configuration)
# =============================================================================


def _strings(data: dict[str, Any], key: str, label: str) -> tuple[str, ...]:
    value = data.get(key, [])
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"'{key}' must be a list of strings", label)
    return tuple(value)


def _library_from_dict(data: dict[str, Any], label: str) -> LibraryToLink:
    if not isinstance(data, dict):
        raise ConfigError("libraries must be mappings", label)
    known = {
        "static_library",
        "pic_static_library",
        "interface_library",
        "dynamic_library",
        "alwayslink",
    }
    unknown = set(data) - known
    if unknown:
        raise ConfigError(
            f"unknown library fields: {', '.join(sorted(unknown))}", label
        )
    alwayslink = data.get("alwayslink", False)
    if not isinstance(alwayslink, bool):
        raise ConfigError("'alwayslink' must be true or false", label)
    return LibraryToLink(
        static_library=data.get("static_library"),
        pic_static_library=data.get("pic_static_library"),
        interface_library=data.get("interface_library"),
        dynamic_library=data.get("dynamic_library"),
        alwayslink=alwayslink,
    )


def dependency_from_dict(data: dict[str, Any]) -> NativeDependency:
    """Build a dependency descriptor from a dictionary.

    The ``kind`` key selects the variant (``"cc"`` or ``"objc"``); the
    remaining keys mirror the dataclass fields. Linker inputs are given as
    ``{"libraries": [...], "user_link_flags": [...]}`` mappings.

    Raises:
        ConfigError: If the dictionary is malformed or the kind is unknown.
    """
    if not isinstance(data, dict):
        raise ConfigError("dependency must be a mapping")
    label = data.get("label")
    if not isinstance(label, str) or not label:
        raise ConfigError("dependency is missing a 'label'")

    runfiles = Runfiles(_strings(data, "runfiles", label))
    kind = data.get("kind")

    if kind == "cc":
        compilation = CompilationContext(
            headers=_strings(data, "headers", label),
            defines=_strings(data, "defines", label),
            includes=_strings(data, "includes", label),
            quote_includes=_strings(data, "quote_includes", label),
            system_includes=_strings(data, "system_includes", label),
        )
        linker_inputs = []
        for li in data.get("linker_inputs", []):
            if not isinstance(li, dict):
                raise ConfigError("linker inputs must be mappings", label)
            linker_inputs.append(
                LinkerInput(
                    libraries=tuple(
                        _library_from_dict(lib, label)
                        for lib in li.get("libraries", [])
                    ),
                    user_link_flags=_strings(li, "user_link_flags", label),
                )
            )
        return CcDependency(
            label=label,
            runfiles=runfiles,
            compilation_context=compilation,
            linking_context=LinkingContext(tuple(linker_inputs)),
        )

    if kind == "objc":
        return ObjcDependency(
            label=label,
            runfiles=runfiles,
            defines=_strings(data, "defines", label),
            includes=_strings(data, "includes", label),
            iquotes=_strings(data, "iquotes", label),
            system_includes=_strings(data, "system_includes", label),
        )

    raise ConfigError(f"unknown dependency kind: {kind!r}", label)


def dependencies_from_list(items: Iterable[dict[str, Any]]) -> list[NativeDependency]:
    return [dependency_from_dict(item) for item in items]
