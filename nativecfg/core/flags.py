# SPDX-License-Identifier: MIT
"""Option list handling for nativecfg.

Compiler and linker options are accumulated as *entries*: a single token
(``-O2``, ``-DFOO``, ``-I/inc``), a flag together with its separate argument
(``-iquote inc``, ``-L dir``, ``-l foo``), or a multi-token group that must
stay together (a whole-archive region). De-duplication works on entries, so
``-iquote a -iquote b`` never collapses to ``-iquote a b``.

Which flags take a separate argument is toolchain-specific (see
``ToolchainDescriptor.separated_arg_flags``); the functions here accept the
flag set as a parameter.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

Entry = tuple[str, ...]

DEFAULT_SEPARATED_ARG_FLAGS: frozenset[str] = frozenset()


def is_separated_arg_flag(
    flag: str, separated_arg_flags: frozenset[str] | None = None
) -> bool:
    """Check if a flag takes its argument as a separate token.

    Examples:
        >>> is_separated_arg_flag("-iquote", frozenset(["-iquote"]))
        True
        >>> is_separated_arg_flag("-O2", frozenset(["-iquote"]))
        False
    """
    if separated_arg_flags is None:
        separated_arg_flags = DEFAULT_SEPARATED_ARG_FLAGS
    return flag in separated_arg_flags


def split_flags(
    flags: Iterable[str], separated_arg_flags: frozenset[str] | None = None
) -> list[Entry]:
    """Group a flat token list into entries.

    A separated-arg flag followed by another token becomes a pair; every
    other token is an entry on its own. A trailing separated-arg flag with
    no argument is kept as a single-token entry.

    Examples:
        >>> split_flags(["-O2", "-L", "/lib", "-lfoo"], frozenset(["-L"]))
        [('-O2',), ('-L', '/lib'), ('-lfoo',)]
    """
    tokens = list(flags)
    entries: list[Entry] = []
    i = 0
    while i < len(tokens):
        flag = tokens[i]
        if is_separated_arg_flag(flag, separated_arg_flags) and i + 1 < len(tokens):
            entries.append((flag, tokens[i + 1]))
            i += 2
        else:
            entries.append((flag,))
            i += 1
    return entries


def flatten(entries: Iterable[Entry]) -> list[str]:
    """Flatten entries back into a token list."""
    return [token for entry in entries for token in entry]


def deduplicate_entries(entries: Iterable[Entry]) -> list[Entry]:
    """Drop repeated entries, keeping the first occurrence of each."""
    # dict preserves insertion order, so it doubles as an ordered set
    return list(dict.fromkeys(entries))


class OptionSet:
    """An ordered, append-only collection of option entries.

    Besides plain appends, an OptionSet supports per-category
    append-if-new (used for include paths, which are de-duplicated by path
    separately for each include kind) and a stable de-duplication pass.

    Example:
        opts = OptionSet(["-O2"], frozenset(["-iquote"]))
        opts.add_unique("iquote", ".", "-iquote", ".")
        opts.add_unique("iquote", ".", "-iquote", ".")  # no-op
        opts.tokens()  # ['-O2', '-iquote', '.']
    """

    __slots__ = ("_entries", "_seen", "separated_arg_flags")

    def __init__(
        self,
        options: Iterable[str] = (),
        separated_arg_flags: frozenset[str] | None = None,
    ) -> None:
        self.separated_arg_flags = separated_arg_flags or DEFAULT_SEPARATED_ARG_FLAGS
        self._entries: list[Entry] = split_flags(options, self.separated_arg_flags)
        self._seen: dict[str, set[str]] = {}

    def append(self, *tokens: str) -> None:
        """Append one entry made of the given tokens."""
        if tokens:
            self._entries.append(tuple(tokens))

    def extend(self, options: Iterable[str]) -> None:
        """Append a flat token list, grouping separated-arg flags."""
        self._entries.extend(split_flags(options, self.separated_arg_flags))

    def extend_entries(self, entries: Iterable[Entry]) -> None:
        """Append pre-grouped entries as-is."""
        self._entries.extend(tuple(e) for e in entries if e)

    def add_unique(self, category: str, key: str, *tokens: str) -> bool:
        """Append an entry unless ``key`` was already added under ``category``.

        Returns:
            True if the entry was appended.
        """
        seen = self._seen.setdefault(category, set())
        if key in seen:
            return False
        seen.add(key)
        self.append(*tokens)
        return True

    def ensure(self, token: str) -> None:
        """Append a single-token entry if the token is not present yet."""
        if token not in self:
            self.append(token)

    def remove(self, tokens: Iterable[str]) -> None:
        """Remove every single-token entry whose token is in ``tokens``."""
        unwanted = frozenset(tokens)
        self._entries = [
            e for e in self._entries if not (len(e) == 1 and e[0] in unwanted)
        ]

    def entries(self) -> list[Entry]:
        return list(self._entries)

    def tokens(self) -> list[str]:
        """Return the accumulated options as a flat token list."""
        return flatten(self._entries)

    def deduplicated(self) -> list[str]:
        """Return a flat token list with repeated entries removed.

        The first occurrence of each entry keeps its position.
        """
        return flatten(deduplicate_entries(self._entries))

    def __contains__(self, token: object) -> bool:
        return any(token in entry for entry in self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.tokens())

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"OptionSet({self.tokens()!r})"
