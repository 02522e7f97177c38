"""
Tests for knotapel Laurent polynomial arithmetic.

These tests verify:
1. Canonical form after construction and arithmetic
2. Ring laws for add and multiply
3. Mirror and palindromicity
4. Text and HTML rendering
"""

import unittest
from knotapel.polynomial import (
    LaurentPolynomial,
    LOOP_VALUE,
    zero,
    monomial,
    add,
    multiply,
    equals,
    mirror,
    is_palindromic,
    to_display_text,
    to_html,
)


SAMPLES = [
    zero(),
    monomial(1, 0),
    monomial(-3, 4),
    LaurentPolynomial((1, -2, 0, 5), -3),
    LaurentPolynomial((2, 1), 1),
    LOOP_VALUE,
]


class TestCanonicalForm(unittest.TestCase):
    """Tests for trimming and construction."""

    def test_zero_is_empty(self):
        """Test the zero polynomial has no coefficients and lo 0."""
        self.assertEqual(zero().coeffs, ())
        self.assertEqual(zero().lo, 0)
        self.assertTrue(zero().is_zero())

    def test_trims_leading_and_trailing_zeros(self):
        """Test construction trims zeros and shifts lo."""
        p = LaurentPolynomial((0, 0, 1, 0, 2, 0), 5)
        self.assertEqual(p.coeffs, (1, 0, 2))
        self.assertEqual(p.lo, 7)

    def test_all_zero_coefficients(self):
        """Test an all-zero list collapses to canonical zero."""
        p = LaurentPolynomial((0, 0, 0), -4)
        self.assertEqual(p, zero())
        self.assertEqual(p.lo, 0)

    def test_monomial_zero_coefficient(self):
        """Test monomial with coefficient 0 is zero."""
        self.assertEqual(monomial(0, 7), zero())

    def test_arithmetic_stays_canonical(self):
        """Test no sequence of operations leaves edge zeros."""
        p = monomial(1, 2)
        for q in SAMPLES:
            p = add(multiply(p, q), q)
            p = add(p, monomial(-1, p.lo) if p.coeffs else zero())
            if p.coeffs:
                self.assertNotEqual(p.coeffs[0], 0)
                self.assertNotEqual(p.coeffs[-1], 0)
            else:
                self.assertEqual(p.lo, 0)

    def test_rejects_fractional_values(self):
        """Test non-integral coefficients or exponents raise instead of truncating."""
        with self.assertRaises(ValueError):
            LaurentPolynomial((1.5,), 0)
        with self.assertRaises(ValueError):
            monomial(2, 0.5)
        self.assertEqual(LaurentPolynomial((2.0, 0), 3.0), monomial(2, 3))

    def test_cancellation_to_zero(self):
        """Test adding a polynomial to its negation yields zero."""
        p = LaurentPolynomial((1, -2, 0, 5), -3)
        self.assertEqual(add(p, -p), zero())
        self.assertEqual(p - p, zero())


class TestRingLaws(unittest.TestCase):
    """Tests for add and multiply."""

    def test_add_commutative(self):
        for a in SAMPLES:
            for b in SAMPLES:
                self.assertTrue(equals(add(a, b), add(b, a)))

    def test_add_associative(self):
        for a in SAMPLES:
            for b in SAMPLES:
                for c in SAMPLES:
                    self.assertEqual(add(add(a, b), c), add(a, add(b, c)))

    def test_add_identity(self):
        for a in SAMPLES:
            self.assertEqual(add(a, zero()), a)
            self.assertEqual(add(zero(), a), a)

    def test_multiply_by_zero(self):
        for a in SAMPLES:
            self.assertEqual(multiply(a, zero()), zero())
            self.assertEqual(multiply(zero(), a), zero())

    def test_distributive(self):
        for a in SAMPLES:
            for b in SAMPLES:
                for c in SAMPLES:
                    self.assertEqual(multiply(a, add(b, c)),
                                     add(multiply(a, b), multiply(a, c)))

    def test_loop_value(self):
        """Test δ = -A^2 - A^-2 has the expected dense form."""
        delta = add(monomial(-1, 2), monomial(-1, -2))
        self.assertEqual(delta.coeffs, (-1, 0, 0, 0, -1))
        self.assertEqual(delta.lo, -2)
        self.assertEqual(delta, LOOP_VALUE)
        self.assertTrue(is_palindromic(delta))

    def test_square_of_negative_monomial(self):
        self.assertEqual(multiply(monomial(-1, 1), monomial(-1, 1)), monomial(1, 2))

    def test_loop_value_squared(self):
        self.assertEqual(LOOP_VALUE * LOOP_VALUE,
                         LaurentPolynomial.from_dict({4: 1, 0: 2, -4: 1}))

    def test_equals_compares_canonical_forms(self):
        self.assertTrue(equals(LaurentPolynomial((0, 3, 0), 1), monomial(3, 2)))
        self.assertFalse(equals(monomial(3, 2), monomial(3, 1)))
        self.assertFalse(equals(monomial(3, 2), zero()))

    def test_dict_round_trip(self):
        p = LaurentPolynomial((1, -2, 0, 5), -3)
        self.assertEqual(p.to_dict(), {-3: 1, -2: -2, 0: 5})
        self.assertEqual(LaurentPolynomial.from_dict(p.to_dict()), p)


class TestMirror(unittest.TestCase):
    """Tests for mirror and palindromicity."""

    def test_mirror_monomial(self):
        self.assertEqual(mirror(monomial(1, 3)), monomial(1, -3))

    def test_mirror_involution(self):
        for p in SAMPLES:
            self.assertEqual(mirror(mirror(p)), p)

    def test_mirror_homomorphism(self):
        for a in SAMPLES:
            for b in SAMPLES:
                self.assertEqual(mirror(multiply(a, b)), multiply(mirror(a), mirror(b)))

    def test_mirror_span(self):
        p = LaurentPolynomial((1, 2, 3), -1)
        m = mirror(p)
        self.assertEqual(m.coeffs, (3, 2, 1))
        self.assertEqual(m.lo, -1)

    def test_monomial_palindromic_only_at_zero(self):
        for e in range(-4, 5):
            self.assertEqual(is_palindromic(monomial(2, e)), e == 0)

    def test_zero_palindromic(self):
        self.assertTrue(is_palindromic(zero()))

    def test_symmetric_coefficients_off_centre(self):
        """Test symmetric coefficients not centred on zero are not palindromic."""
        self.assertFalse(is_palindromic(LaurentPolynomial((1, 0, 1), 0)))
        self.assertTrue(is_palindromic(LaurentPolynomial((1, 0, 1), -1)))


class TestRendering(unittest.TestCase):
    """Tests for text and HTML output."""

    def test_zero(self):
        self.assertEqual(to_display_text(zero()), '0')

    def test_loop_value_text(self):
        self.assertEqual(to_display_text(LOOP_VALUE), '-A^(-2) - A^2')

    def test_inverse_variable(self):
        self.assertEqual(to_display_text(monomial(1, -1)), 'A⁻¹')
        self.assertEqual(to_display_text(monomial(-1, -1)), '-A⁻¹')

    def test_constant_terms_show_magnitude(self):
        self.assertEqual(to_display_text(monomial(1, 0)), '1')
        self.assertEqual(to_display_text(monomial(-1, 0)), '-1')

    def test_mixed_terms(self):
        p = LaurentPolynomial.from_dict({-1: 1, 0: 2, 1: 3, 4: -1})
        self.assertEqual(to_display_text(p), 'A⁻¹ + 2 + 3A - A^4')
        self.assertEqual(str(p), 'A⁻¹ + 2 + 3A - A^4')

    def test_html(self):
        html = to_html(monomial(-1, 2))
        self.assertEqual(
            html,
            '<span class="coeff-neg">−<span class="var-a">A</span><span class="sup">2</span></span>'
        )
        self.assertEqual(to_html(zero()), '<span class="coeff-pos">0</span>')

    def test_html_separators(self):
        html = to_html(add(monomial(1, 0), monomial(-2, 1)))
        self.assertIn('<span class="coeff-pos">1</span>', html)
        self.assertIn(' − 2<span class="var-a">A</span>', html)


if __name__ == '__main__':
    unittest.main()
