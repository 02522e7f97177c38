"""
Braid word topology for knotapel.

A braid word is a sequence of signed generator indices. Generator k
(1-based) crosses the strands in columns k-1 and k; its sign is the
handedness of the crossing. Closing the braid (joining the bottom of
each column to the top of the same column) gives a knot or link.

This module computes everything about the closure that does not
depend on geometry:

- the permutation of columns induced by the word
- the link components (cycles of that permutation)
- the column trajectory of a single strand through the word

Handedness is ignored here; it only affects geometry (knotapel.curve).
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Sequence

from .errors import InvalidTopologyError

logger = logging.getLogger(__name__)

_LEADING_INT = re.compile(r"[+-]?\d+")


class GeneratorSign(Enum):
    POSITIVE = 1
    NEGATIVE = -1


@dataclass(frozen=True)
class BraidGenerator:
    """
    A single braid generator σ_i or σ_i^(-1).

    Attributes:
        index: 1-based generator index, crossing columns index-1 and index
        sign: Handedness of the crossing
    """
    index: int
    sign: GeneratorSign

    def inverse(self) -> 'BraidGenerator':
        """Return the inverse generator."""
        new_sign = GeneratorSign.NEGATIVE if self.sign == GeneratorSign.POSITIVE else GeneratorSign.POSITIVE
        return BraidGenerator(self.index, new_sign)

    def to_int(self) -> int:
        """Convert to signed integer representation."""
        return self.index * self.sign.value

    @classmethod
    def from_int(cls, val: int) -> 'BraidGenerator':
        """Create from a nonzero signed integer."""
        if val == 0:
            raise InvalidTopologyError("Braid generator index must be nonzero")
        if val > 0:
            return cls(val, GeneratorSign.POSITIVE)
        return cls(-val, GeneratorSign.NEGATIVE)

    def __repr__(self) -> str:
        subscript = "".join("₀₁₂₃₄₅₆₇₈₉"[int(d)] for d in str(self.index))
        if self.sign == GeneratorSign.POSITIVE:
            return f"σ{subscript}"
        return f"σ{subscript}⁻¹"


def parse_braid_word(text: Optional[str]) -> List[int]:
    """
    Parse comma-separated braid word text.

    Each token is read by its leading integer, so "3abc" is 3 and "2.5"
    is 2. Tokens with no leading integer, or that parse to zero, are
    dropped without error:

        "1, -2, abc, 0, 3"  ->  [1, -2, 3]
    """
    if not text or not text.strip():
        return []

    word = []
    dropped = []
    for token in text.split(','):
        token = token.strip()
        match = _LEADING_INT.match(token)
        value = int(match.group()) if match else 0
        if value == 0:
            dropped.append(token)
            continue
        word.append(value)

    if dropped:
        logger.warning("Dropped braid tokens %r from %r", dropped, text)
    return word


def auto_detect_strands(word: Sequence[int]) -> int:
    """Smallest strand count that fits the word (1 for the empty word)."""
    if not word:
        return 1
    return max(abs(g) for g in word) + 1


def validate_word(num_strands: int, word: Sequence[int]) -> None:
    """Raise InvalidTopologyError unless every generator fits num_strands."""
    if num_strands < 1:
        raise InvalidTopologyError(f"Strand count must be positive, got {num_strands}")
    for position, g in enumerate(word):
        if g == 0:
            raise InvalidTopologyError(f"Zero generator at position {position}")
        if abs(g) >= num_strands:
            raise InvalidTopologyError(
                f"Generator {g} at position {position} out of range for {num_strands} strands"
            )


def permutation(num_strands: int, word: Sequence[int]) -> List[int]:
    """
    Apply every crossing of the word to the identity arrangement.

    Each crossing swaps the values held at columns |g|-1 and |g|,
    regardless of sign.
    """
    validate_word(num_strands, word)
    perm = list(range(num_strands))
    for g in word:
        i = abs(g) - 1
        perm[i], perm[i + 1] = perm[i + 1], perm[i]
    return perm


def components(num_strands: int, perm: Sequence[int]) -> List[List[int]]:
    """
    Decompose a permutation into cycles.

    Cycles are returned in order of their smallest element; each cycle
    starts at that element and follows perm. One cycle means the braid
    closure is a knot; several mean a link.
    """
    if len(perm) != num_strands:
        raise InvalidTopologyError(
            f"Permutation of length {len(perm)} does not match {num_strands} strands"
        )
    visited = [False] * num_strands
    cycles = []
    for start in range(num_strands):
        if visited[start]:
            continue
        cycle = []
        j = start
        while not visited[j]:
            visited[j] = True
            cycle.append(j)
            j = perm[j]
        cycles.append(cycle)
    return cycles


def strand_positions(num_strands: int, word: Sequence[int], start: int) -> List[int]:
    """
    Column occupied by the strand starting at column `start`, at every
    level 0..len(word).
    """
    validate_word(num_strands, word)
    if not 0 <= start < num_strands:
        raise InvalidTopologyError(f"Start strand {start} out of range for {num_strands} strands")

    positions = [start]
    pos = start
    for g in word:
        i = abs(g) - 1
        if pos == i:
            pos = i + 1
        elif pos == i + 1:
            pos = i
        positions.append(pos)
    return positions


class BraidWord:
    """
    A braid word on a fixed number of strands.

    Wraps the functional topology helpers for callers that prefer to
    carry the strand count alongside the generators.
    """

    def __init__(self, num_strands: int, generators: Optional[List[BraidGenerator]] = None):
        self.num_strands = num_strands
        self.generators: List[BraidGenerator] = list(generators) if generators else []
        validate_word(num_strands, self.to_int_list())

    @classmethod
    def from_int_list(cls, num_strands: Optional[int], word: Sequence[int]) -> 'BraidWord':
        """Create from signed integers; num_strands=None auto-detects it."""
        if num_strands is None:
            num_strands = auto_detect_strands(word)
        return cls(num_strands, [BraidGenerator.from_int(g) for g in word])

    @classmethod
    def from_text(cls, text: str, num_strands: Optional[int] = None) -> 'BraidWord':
        """Create from comma-separated text (see parse_braid_word)."""
        return cls.from_int_list(num_strands, parse_braid_word(text))

    def to_int_list(self) -> List[int]:
        """Convert to list of signed integers."""
        return [g.to_int() for g in self.generators]

    def inverse(self) -> 'BraidWord':
        """Return the inverse braid word."""
        return BraidWord(self.num_strands, [g.inverse() for g in reversed(self.generators)])

    def mirror(self) -> 'BraidWord':
        """Flip the handedness of every crossing."""
        return BraidWord(self.num_strands, [g.inverse() for g in self.generators])

    def writhe(self) -> int:
        """Sum of generator signs."""
        return sum(g.sign.value for g in self.generators)

    def length(self) -> int:
        return len(self.generators)

    def permutation(self) -> List[int]:
        return permutation(self.num_strands, self.to_int_list())

    def components(self) -> List[List[int]]:
        return components(self.num_strands, self.permutation())

    def strand_positions(self, start: int) -> List[int]:
        return strand_positions(self.num_strands, self.to_int_list(), start)

    def is_knot(self) -> bool:
        """True if the closure has a single component."""
        return len(self.components()) == 1

    def __len__(self) -> int:
        return len(self.generators)

    def __iter__(self) -> Iterator[BraidGenerator]:
        return iter(self.generators)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BraidWord):
            return NotImplemented
        return self.num_strands == other.num_strands and self.generators == other.generators

    def __repr__(self) -> str:
        if not self.generators:
            return f"BraidWord(n={self.num_strands}, ε)"
        return f"BraidWord(n={self.num_strands}, {''.join(repr(g) for g in self.generators)})"
