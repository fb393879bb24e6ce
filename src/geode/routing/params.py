"""Captured route parameters and placeholder converters.

``Params`` holds what a successful match captured: every group in
left-to-right order, plus named groups by name. Named groups show up in
both views, the same way the regex engine reports them.
"""

from __future__ import annotations

import re
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import overload

# (regex_pattern, python_type) for each supported placeholder converter
CONVERTERS: dict[str, tuple[str, type]] = {
    "str": (r"[^/]+", str),
    "int": (r"\d+", int),
    "float": (r"\d+(?:\.\d+)?", float),
    "path": (r".+", str),
}


def convert_param(value: str, param_type: str) -> str | int | float:
    """Convert a captured string to the converter's target type.

    Raises ``ValueError`` if the string cannot be converted.
    Raises ``KeyError`` if *param_type* is not a registered converter.
    """
    _, target_type = CONVERTERS[param_type]
    return target_type(value)


@dataclass(frozen=True, slots=True)
class Params(Sequence[str]):
    """Positional and named captures from one route match.

    Indexing with an ``int`` reads positional captures, with a ``str``
    reads named captures::

        params = route.match("/page/42")
        params[0]        # "42"
        params["foo"]    # "42" when the group was (?<foo>\\d+)
    """

    positional: tuple[str, ...] = ()
    named: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_match(cls, match: re.Match[str]) -> Params:
        """Build the capture set for a successful ``re.Match``.

        Optional groups that did not take part in the match are dropped
        when they trail the last group that did, and read as ``""`` when
        they sit between participating groups.
        """
        groups = list(match.groups())
        while groups and groups[-1] is None:
            groups.pop()
        positional = tuple("" if g is None else g for g in groups)
        named = {
            name: positional[index - 1]
            for name, index in match.re.groupindex.items()
            if index <= len(positional)
        }
        return cls(positional=positional, named=MappingProxyType(named))

    @overload
    def __getitem__(self, key: int) -> str: ...

    @overload
    def __getitem__(self, key: slice) -> tuple[str, ...]: ...

    @overload
    def __getitem__(self, key: str) -> str: ...

    def __getitem__(self, key: int | slice | str) -> str | tuple[str, ...]:
        if isinstance(key, str):
            return self.named[key]
        return self.positional[key]

    def __len__(self) -> int:
        return len(self.positional)

    def __iter__(self) -> Iterator[str]:
        return iter(self.positional)

    def __contains__(self, value: object) -> bool:
        return value in self.positional or value in self.named

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Params):
            return self.positional == other.positional and dict(self.named) == dict(
                other.named
            )
        if isinstance(other, (list, tuple)):
            return list(self.positional) == list(other)
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.positional, tuple(sorted(self.named.items()))))

    def get(self, name: str, default: str | None = None) -> str | None:
        """Return the named capture *name*, or *default* if absent."""
        return self.named.get(name, default)

    def as_dict(self) -> dict[str, str]:
        """Named captures as a plain dict."""
        return dict(self.named)
