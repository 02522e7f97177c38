"""
Laurent polynomial arithmetic for knotapel.

Polynomials live in Z[A, A^-1] and are stored as a dense coefficient
tuple plus the exponent of the first coefficient:

    p = Σ coeffs[i] · A^(lo + i)

Every instance is kept in canonical (trimmed) form, so structural
equality is polynomial equality. The zero polynomial has no
coefficients and lo = 0.

This is the arithmetic used by the bracket state sum in
knotapel.invariants; it never raises for any pair of inputs. Construction
rejects non-integral coefficients or exponents with ValueError.
"""

from dataclasses import dataclass
from typing import Dict, Iterable, Tuple


def _integral(value, what: str) -> int:
    result = int(value)
    if result != value:
        raise ValueError(f"Laurent polynomial {what} must be integral, got {value!r}")
    return result


@dataclass(frozen=True)
class LaurentPolynomial:
    """
    An immutable Laurent polynomial with integer coefficients.

    Attributes:
        coeffs: Coefficients ordered by increasing exponent
        lo: Exponent of coeffs[0]
    """
    coeffs: Tuple[int, ...] = ()
    lo: int = 0

    def __post_init__(self):
        coeffs = tuple(_integral(c, 'coefficients') for c in self.coeffs)
        a, b = 0, len(coeffs) - 1
        while a <= b and coeffs[a] == 0:
            a += 1
        if a > b:
            object.__setattr__(self, 'coeffs', ())
            object.__setattr__(self, 'lo', 0)
            return
        while b > a and coeffs[b] == 0:
            b -= 1
        object.__setattr__(self, 'coeffs', coeffs[a:b + 1])
        object.__setattr__(self, 'lo', _integral(self.lo, 'exponents') + a)

    @property
    def hi(self) -> int:
        """Exponent of the last coefficient (lo - 1 for zero)."""
        return self.lo + len(self.coeffs) - 1

    def is_zero(self) -> bool:
        return not self.coeffs

    def degree_span(self) -> Tuple[int, int]:
        """Return (lowest, highest) exponent; (0, 0) for zero."""
        if not self.coeffs:
            return (0, 0)
        return (self.lo, self.hi)

    def coefficient(self, exp: int) -> int:
        """Coefficient of A^exp."""
        i = exp - self.lo
        if 0 <= i < len(self.coeffs):
            return self.coeffs[i]
        return 0

    def terms(self) -> Iterable[Tuple[int, int]]:
        """Yield (exponent, coefficient) for every nonzero term."""
        for i, c in enumerate(self.coeffs):
            if c != 0:
                yield self.lo + i, c

    def to_dict(self) -> Dict[int, int]:
        """Convert to an exponent -> coefficient dict (zero terms omitted)."""
        return dict(self.terms())

    @classmethod
    def from_dict(cls, terms: Dict[int, int]) -> 'LaurentPolynomial':
        """Create from an exponent -> coefficient dict."""
        result = zero()
        for exp, coeff in terms.items():
            result = add(result, monomial(coeff, exp))
        return result

    def __add__(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        return add(self, other)

    def __sub__(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        return add(self, -other)

    def __neg__(self) -> 'LaurentPolynomial':
        return LaurentPolynomial(tuple(-c for c in self.coeffs), self.lo)

    def __mul__(self, other: 'LaurentPolynomial') -> 'LaurentPolynomial':
        return multiply(self, other)

    def __str__(self) -> str:
        return to_display_text(self)


def zero() -> LaurentPolynomial:
    """The canonical zero polynomial."""
    return LaurentPolynomial((), 0)


def monomial(coeff: int, exp: int) -> LaurentPolynomial:
    """Return coeff · A^exp (zero when coeff is 0)."""
    if coeff == 0:
        return zero()
    return LaurentPolynomial((coeff,), exp)


def add(a: LaurentPolynomial, b: LaurentPolynomial) -> LaurentPolynomial:
    """
    Add two polynomials.

    Both coefficient lists are aligned on the union of their exponent
    ranges, summed, and trimmed back to canonical form.
    """
    if not a.coeffs:
        return LaurentPolynomial(b.coeffs, b.lo)
    if not b.coeffs:
        return LaurentPolynomial(a.coeffs, a.lo)

    lo = min(a.lo, b.lo)
    hi = max(a.hi, b.hi)
    result = [0] * (hi - lo + 1)
    for i, c in enumerate(a.coeffs):
        result[a.lo + i - lo] += c
    for i, c in enumerate(b.coeffs):
        result[b.lo + i - lo] += c
    return LaurentPolynomial(tuple(result), lo)


def multiply(a: LaurentPolynomial, b: LaurentPolynomial) -> LaurentPolynomial:
    """Multiply two polynomials (discrete convolution of coefficients)."""
    if not a.coeffs or not b.coeffs:
        return zero()

    result = [0] * (len(a.coeffs) + len(b.coeffs) - 1)
    for i, ca in enumerate(a.coeffs):
        for j, cb in enumerate(b.coeffs):
            result[i + j] += ca * cb
    return LaurentPolynomial(tuple(result), a.lo + b.lo)


def equals(a: LaurentPolynomial, b: LaurentPolynomial) -> bool:
    """Compare canonical forms term by term."""
    if len(a.coeffs) != len(b.coeffs):
        return False
    if not a.coeffs:
        return True
    if a.lo != b.lo:
        return False
    return all(x == y for x, y in zip(a.coeffs, b.coeffs))


def mirror(p: LaurentPolynomial) -> LaurentPolynomial:
    """Substitute A -> A^-1 (reverse coefficients, negate the exponent span)."""
    if not p.coeffs:
        return zero()
    return LaurentPolynomial(tuple(reversed(p.coeffs)), -(p.lo + len(p.coeffs) - 1))


def is_palindromic(p: LaurentPolynomial) -> bool:
    """
    True if the coefficients read the same both ways and the exponent
    range is centred on zero. The zero polynomial is palindromic.
    """
    if not p.coeffs:
        return True
    n = len(p.coeffs)
    for i in range(n // 2):
        if p.coeffs[i] != p.coeffs[n - 1 - i]:
            return False
    return p.lo + p.lo + n - 1 == 0


def to_display_text(p: LaurentPolynomial) -> str:
    """
    Render as plain text by increasing exponent.

    Examples:
        -A^2 - A^-2      ->  "-A^(-2) - A^2"
        A^-1 + 2 + 3A    ->  "A⁻¹ + 2 + 3A"
    """
    if not p.coeffs:
        return '0'

    parts = []
    for e, c in p.terms():
        s = ''
        if parts:
            s += ' + ' if c > 0 else ' - '
        elif c < 0:
            s += '-'
        ac = abs(c)
        if ac != 1 or e == 0:
            s += str(ac)
        if e == 1:
            s += 'A'
        elif e == -1:
            s += 'A⁻¹'
        elif e > 0:
            s += f'A^{e}'
        elif e < 0:
            s += f'A^({e})'
        parts.append(s)
    return ''.join(parts)


def to_html(p: LaurentPolynomial) -> str:
    """Render as HTML spans with coeff-pos/coeff-neg, var-a and sup classes."""
    if not p.coeffs:
        return '<span class="coeff-pos">0</span>'

    parts = []
    for e, c in p.terms():
        s = ''
        if parts:
            s += ' + ' if c > 0 else ' − '
        elif c < 0:
            s += '−'
        ac = abs(c)
        if ac != 1 or e == 0:
            s += str(ac)
        if e == 1:
            s += '<span class="var-a">A</span>'
        elif e == -1:
            s += '<span class="var-a">A</span><span class="sup">−1</span>'
        elif e != 0:
            s += f'<span class="var-a">A</span><span class="sup">{e}</span>'
        css = 'coeff-pos' if c > 0 else 'coeff-neg'
        parts.append(f'<span class="{css}">{s}</span>')
    return ''.join(parts)


# Value of a single closed loop in the bracket: δ = -A^2 - A^-2
LOOP_VALUE = add(monomial(-1, 2), monomial(-1, -2))
