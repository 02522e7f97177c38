"""
Smoke tests for the knotapel examples.
"""

import unittest
from knotapel import examples
from knotapel.polynomial import LaurentPolynomial, monomial
from knotapel.presets import initialize_presets


class TestExamples(unittest.TestCase):
    """Run the examples and check what they report."""

    def setUp(self):
        initialize_presets()

    def test_polynomials(self):
        self.assertEqual(examples.example_polynomials(),
                         LaurentPolynomial.from_dict({-4: 1, 0: 2, 4: 1}))

    def test_braid_topology(self):
        results = examples.example_braid_topology()
        self.assertEqual(results['hopf'], 2)
        self.assertEqual(results['trefoil'], 1)
        self.assertEqual(results['unknot'], 1)

    def test_invariants(self):
        results = examples.example_invariants()
        self.assertEqual(results['unknot'], monomial(1, 0))
        self.assertNotEqual(results['trefoil'], results['trefoil-left'])

    def test_curves(self):
        curves = examples.example_curves()
        self.assertEqual(len(curves), 1)

    def test_relaxation(self):
        scene = examples.example_relaxation(max_frames=3)
        self.assertLessEqual(scene.step_count, 30)


if __name__ == '__main__':
    unittest.main()
