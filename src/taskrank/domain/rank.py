"""Rank keys — a dense, lexicographically ordered key space.

A rank is a non-empty string over an ordered alphabet, read as a base-N
fraction ``0.d1d2d3...``.  Between any two distinct keys another key can
always be built, so moving one task never rewrites another task's rank.

The price is length: a key grows by one character whenever its bounds
are adjacent at the current precision.  Nothing here compacts keys.

INVARIANT: a valid key never ends with the alphabet's smallest digit.
Otherwise nothing could sort below ``"a"``.
"""

from __future__ import annotations

DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyz"
BASE36_ALPHABET = "0123456789abcdefghijklmnopqrstuvwxyz"


class RankError(ValueError):
    """Base class for rank key failures."""


class DegenerateRangeError(RankError):
    """Lower bound is not strictly below the upper bound."""

    def __init__(self, prev: str, next_: str) -> None:
        super().__init__(f"Rank bounds are not ordered: {prev!r} >= {next_!r}")
        self.prev = prev
        self.next = next_


class InvalidRankError(RankError):
    """A key is empty, uses foreign characters, or ends with the smallest digit."""

    def __init__(self, key: str, reason: str) -> None:
        super().__init__(f"Invalid rank {key!r}: {reason}")
        self.key = key
        self.reason = reason


class RankKeyGenerator:
    """Builds keys strictly between (or outside) two optional bounds.

    Pure and deterministic: the same bounds always produce the same key,
    so a retried move against the same neighbor snapshot is idempotent.

    Args:
        alphabet: Digits in ascending code-point order.  Python string
            comparison and SQLite BINARY collation must agree with it.
    """

    def __init__(self, alphabet: str = DEFAULT_ALPHABET) -> None:
        if len(alphabet) < 2:
            msg = "Rank alphabet needs at least two characters"
            raise ValueError(msg)
        if any(a >= b for a, b in zip(alphabet, alphabet[1:], strict=False)):
            msg = f"Rank alphabet must be strictly ascending: {alphabet!r}"
            raise ValueError(msg)
        self._alphabet = alphabet
        self._digits = {ch: i for i, ch in enumerate(alphabet)}
        self._base = len(alphabet)

    @property
    def alphabet(self) -> str:
        return self._alphabet

    @property
    def default_key(self) -> str:
        """Canonical key for the first task of an empty story."""
        return self._alphabet[self._base // 2]

    def validate(self, key: str) -> None:
        """Raise :class:`InvalidRankError` unless *key* is a usable rank."""
        if not key:
            raise InvalidRankError(key, "empty")
        foreign = sorted({ch for ch in key if ch not in self._digits})
        if foreign:
            raise InvalidRankError(key, f"characters outside alphabet: {''.join(foreign)}")
        if key[-1] == self._alphabet[0]:
            raise InvalidRankError(key, f"ends with {self._alphabet[0]!r}")

    def generate(self, prev: str | None = None, next_: str | None = None) -> str:
        """Return a key above *prev* and below *next_*.

        Either bound may be None: ``generate(None, b) < b``,
        ``generate(a, None) > a``, ``generate(None, None) == default_key``.

        Raises:
            InvalidRankError: A bound is not a valid key.
            DegenerateRangeError: Both bounds given and ``prev >= next_``.
        """
        if prev is not None:
            self.validate(prev)
        if next_ is not None:
            self.validate(next_)
        if prev is not None and next_ is not None and prev >= next_:
            raise DegenerateRangeError(prev, next_)
        return self._between(prev or "", next_)

    def _between(self, lo: str, hi: str | None) -> str:
        # lo == "" stands for 0, hi None for 1.
        prefix: list[str] = []
        pos = 0
        while True:
            lo_digit = self._digits[lo[pos]] if pos < len(lo) else 0
            hi_digit = self._digits[hi[pos]] if hi is not None and pos < len(hi) else self._base
            if lo_digit != hi_digit:
                break
            prefix.append(self._alphabet[lo_digit])
            pos += 1

        if hi_digit - lo_digit > 1:
            prefix.append(self._alphabet[(lo_digit + hi_digit) // 2])
            return "".join(prefix)

        # Adjacent digits: no room at this precision.  Keep lo's digit and
        # go one level deeper with the upper bound released.
        prefix.append(self._alphabet[lo_digit])
        return "".join(prefix) + self._between(lo[pos + 1 :], None)


_default_generator = RankKeyGenerator()


def generate(prev: str | None = None, next_: str | None = None) -> str:
    """Module-level :meth:`RankKeyGenerator.generate` over ``a-z``."""
    return _default_generator.generate(prev, next_)


def default_generator() -> RankKeyGenerator:
    """The shared ``a-z`` generator."""
    return _default_generator
