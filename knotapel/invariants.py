"""
Knot invariants of braid closures for knotapel.

This module is the state-sum accumulator built on
knotapel.polynomial:

- Writhe: Sum of crossing signs (O(n))
- Linking number: Between two components of a closure (O(n))
- Kauffman bracket: State sum over all smoothings (O(2^n · n))
- Normalized bracket: (-A^3)^(-w) <K>, invariant under all
  Reidemeister moves and equal to 1 for every unknot diagram

The bracket is exponential in the number of crossings, so it refuses
words longer than a configurable cap.
"""

from itertools import product
from typing import List, Sequence

from .braid import components, permutation, validate_word
from .errors import InvalidTopologyError, StateSumTooLargeError
from .polynomial import LOOP_VALUE, LaurentPolynomial, add, monomial, multiply, zero

MAX_STATE_SUM_CROSSINGS = 16


def compute_writhe(word: Sequence[int]) -> int:
    """
    Sum of crossing signs.

    Not a knot invariant on its own, but it is the correction term
    that turns the bracket into an invariant.
    """
    return sum(1 if g > 0 else -1 for g in word)


def compute_linking_number(num_strands: int, word: Sequence[int],
                           component1: int, component2: int) -> int:
    """
    Linking number between two components of the braid closure.

    Half the sum of signs of crossings where one strand belongs to
    each component. Component indices refer to the order returned by
    knotapel.braid.components.
    """
    cycles = components(num_strands, permutation(num_strands, word))
    for index in (component1, component2):
        if not 0 <= index < len(cycles):
            raise InvalidTopologyError(f"Component {index} out of range for {len(cycles)} components")

    owner = {}
    for ci, cycle in enumerate(cycles):
        for strand in cycle:
            owner[strand] = ci

    occupant = list(range(num_strands))
    total = 0
    for g in word:
        i = abs(g) - 1
        a, b = occupant[i], occupant[i + 1]
        if {owner[a], owner[b]} == {component1, component2} and component1 != component2:
            total += 1 if g > 0 else -1
        occupant[i], occupant[i + 1] = b, a

    return total // 2


class _DisjointSet:
    def __init__(self, size: int):
        self.parent = list(range(size))

    def find(self, x: int) -> int:
        while self.parent[x] != x:
            self.parent[x] = self.parent[self.parent[x]]
            x = self.parent[x]
        return x

    def union(self, a: int, b: int) -> None:
        ra, rb = self.find(a), self.find(b)
        if ra != rb:
            self.parent[ra] = rb

    def count(self) -> int:
        return len({self.find(x) for x in range(len(self.parent))})


def _count_loops(num_strands: int, word: Sequence[int], vertical: Sequence[bool]) -> int:
    """
    Count closed loops after smoothing every crossing.

    Points are (column, level boundary) pairs with boundary L identified
    with boundary 0 by the closure. A vertical smoothing keeps both
    strands in their columns; a horizontal one joins the two columns
    above the crossing and the two below it.
    """
    levels = len(word)

    def point(column: int, boundary: int) -> int:
        return column * levels + (boundary % levels)

    loops = _DisjointSet(num_strands * levels)
    for level, g in enumerate(word):
        i = abs(g) - 1
        for column in range(num_strands):
            if column in (i, i + 1):
                continue
            loops.union(point(column, level), point(column, level + 1))
        if vertical[level]:
            loops.union(point(i, level), point(i, level + 1))
            loops.union(point(i + 1, level), point(i + 1, level + 1))
        else:
            loops.union(point(i, level), point(i + 1, level))
            loops.union(point(i, level + 1), point(i + 1, level + 1))
    return loops.count()


def _loop_power(exponent: int) -> LaurentPolynomial:
    result = monomial(1, 0)
    for _ in range(exponent):
        result = multiply(result, LOOP_VALUE)
    return result


def compute_bracket(num_strands: int, word: Sequence[int],
                    max_crossings: int = MAX_STATE_SUM_CROSSINGS) -> LaurentPolynomial:
    """
    Kauffman bracket of the braid closure.

    <K> = Σ_s A^(a(s) - b(s)) δ^(|s| - 1)

    where s ranges over the 2^L smoothings, a(s) and b(s) count A- and
    B-smoothings and |s| is the number of loops left. For a positive
    generator the A-smoothing is the vertical one; for a negative
    generator it is the horizontal one.

    Raises:
        InvalidTopologyError: if the word does not fit num_strands
        StateSumTooLargeError: if the word has more than max_crossings crossings
    """
    validate_word(num_strands, word)
    if len(word) > max_crossings:
        raise StateSumTooLargeError(
            f"Bracket state sum over {len(word)} crossings exceeds the cap of {max_crossings}"
        )

    if not word:
        return _loop_power(num_strands - 1)

    loop_powers: List[LaurentPolynomial] = []
    result = zero()
    for choice in product((True, False), repeat=len(word)):
        a_count = sum(1 for g, is_a in zip(word, choice) if is_a)
        b_count = len(word) - a_count
        vertical = [is_a == (g > 0) for g, is_a in zip(word, choice)]
        loops = _count_loops(num_strands, word, vertical)
        while len(loop_powers) < loops:
            loop_powers.append(_loop_power(len(loop_powers)))
        term = multiply(monomial(1, a_count - b_count), loop_powers[loops - 1])
        result = add(result, term)
    return result


def compute_normalized_bracket(num_strands: int, word: Sequence[int],
                               max_crossings: int = MAX_STATE_SUM_CROSSINGS) -> LaurentPolynomial:
    """
    Kauffman's normalized bracket f(K) = (-A^3)^(-w) <K>.

    Invariant under Reidemeister moves; 1 for the unknot.
    """
    w = compute_writhe(word)
    sign = -1 if w % 2 else 1
    return multiply(monomial(sign, -3 * w), compute_bracket(num_strands, word, max_crossings))
