"""Release identifiers and version ranges of the host framework.

Release grammar
---------------
One or more dot-separated non-negative integers, optionally followed by
a ``-qualifier``::

    2.0        3.0.1       3.0.0-beta-2

Missing trailing components compare as zero, so ``2.0 == 2.0.0``.  A
qualified release sorts before the same unqualified release
(``3.0.0-beta-2 < 3.0.0``); qualifiers compare lexically.

Range grammar
-------------
Maven-style intervals::

    [1.0,2.0)    closed lower bound, open upper bound
    (,3.0]       no lower bound
    [2.0,)       no upper bound
    [2.1]        exactly 2.1
    2.1          2.1 and every later release, same as [2.1,)
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from functools import total_ordering
from typing import Final

from pluginreg.core.errors import MalformedVersion, MalformedVersionRange

_RELEASE_PATTERN: Final[re.Pattern[str]] = re.compile(
    r"^(?P<numbers>\d+(?:\.\d+)*)(?:-(?P<qualifier>[0-9A-Za-z][0-9A-Za-z.\-]*))?$"
)


@total_ordering
@dataclass(frozen=True)
class Release:
    """A parsed, comparable release identifier.

    Parameters
    ----------
    numbers:
        Numeric components with trailing zeros removed.
    qualifier:
        Optional pre-release qualifier such as ``"beta-2"``.
    text:
        The text this release was parsed from; used by ``str()``.
    """

    numbers: tuple[int, ...]
    qualifier: str | None = None
    text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str) -> "Release":
        """Parse ``text`` into a :class:`Release`.

        Raises
        ------
        MalformedVersion
            If ``text`` does not match the release grammar.
        """
        stripped = text.strip()
        match = _RELEASE_PATTERN.match(stripped)
        if match is None:
            raise MalformedVersion(text)
        numbers = [int(part) for part in match.group("numbers").split(".")]
        while len(numbers) > 1 and numbers[-1] == 0:
            numbers.pop()
        return cls(tuple(numbers), match.group("qualifier"), stripped)

    def _sort_key(self) -> tuple[tuple[int, ...], int, str]:
        # unqualified releases sort after their pre-releases
        if self.qualifier is None:
            return (self.numbers, 1, "")
        return (self.numbers, 0, self.qualifier)

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, Release):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __str__(self) -> str:
        if self.text:
            return self.text
        base = ".".join(str(n) for n in self.numbers)
        return f"{base}-{self.qualifier}" if self.qualifier else base


def parse_release(text: str) -> Release:
    """Convenience function: parse a release identifier."""
    return Release.parse(text)


@dataclass(frozen=True)
class VersionRange:
    """An interval of releases.

    ``None`` bounds are unbounded.  Equality and hashing use the bounds
    only, so two spellings of the same interval are equal.

    Parameters
    ----------
    lower:
        Lower bound, or ``None``.
    upper:
        Upper bound, or ``None``.
    lower_inclusive:
        Whether ``lower`` itself is contained.
    upper_inclusive:
        Whether ``upper`` itself is contained.
    text:
        The expression this range was parsed from.
    """

    lower: Release | None
    upper: Release | None
    lower_inclusive: bool = True
    upper_inclusive: bool = False
    text: str = field(default="", compare=False)

    @classmethod
    def parse(cls, text: str) -> "VersionRange":
        """Parse a range expression.

        Raises
        ------
        MalformedVersionRange
            If the expression is not a valid range.
        """
        expr = re.sub(r"\s+", "", text)
        if not expr:
            raise MalformedVersionRange(text, "empty range expression")

        if expr[0] not in "[(":
            lower = _bound(text, expr)
            return cls(lower, None, True, False, expr)

        if expr[-1] not in "])":
            raise MalformedVersionRange(text, "missing closing ']' or ')'")
        lower_inclusive = expr[0] == "["
        upper_inclusive = expr[-1] == "]"
        body = expr[1:-1]

        if "," not in body:
            if not (lower_inclusive and upper_inclusive):
                raise MalformedVersionRange(text, "an exact version must use square brackets")
            exact = _bound(text, body)
            return cls(exact, exact, True, True, expr)

        lower_text, _, upper_text = body.partition(",")
        if "," in upper_text:
            raise MalformedVersionRange(text, "too many bounds")
        lower = _bound(text, lower_text) if lower_text else None
        upper = _bound(text, upper_text) if upper_text else None
        if lower is None and upper is None:
            raise MalformedVersionRange(text, "at least one bound is required")
        if lower is not None and upper is not None:
            if upper < lower or (upper == lower and not (lower_inclusive and upper_inclusive)):
                raise MalformedVersionRange(text, "upper bound is below lower bound")
        return cls(lower, upper, lower_inclusive, upper_inclusive, expr)

    def contains(self, release: Release) -> bool:
        """Return ``True`` if ``release`` falls within this range."""
        if self.lower is not None:
            if release < self.lower or (release == self.lower and not self.lower_inclusive):
                return False
        if self.upper is not None:
            if release > self.upper or (release == self.upper and not self.upper_inclusive):
                return False
        return True

    def __contains__(self, release: object) -> bool:
        return isinstance(release, Release) and self.contains(release)

    @property
    def safe_name(self) -> str:
        """Stable display name, used as the version directory name."""
        return self.text or str(self)

    def __str__(self) -> str:
        if self.text:
            return self.text
        if self.lower is not None and self.lower == self.upper:
            return f"[{self.lower}]"
        left = "[" if self.lower_inclusive else "("
        right = "]" if self.upper_inclusive else ")"
        lower = "" if self.lower is None else str(self.lower)
        upper = "" if self.upper is None else str(self.upper)
        return f"{left}{lower},{upper}{right}"


def _bound(range_text: str, text: str) -> Release:
    try:
        return Release.parse(text)
    except MalformedVersion:
        raise MalformedVersionRange(range_text, f"{text!r} is not a valid version") from None
