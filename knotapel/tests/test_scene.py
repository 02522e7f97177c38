"""
Tests for knotapel scene assembly.
"""

import math
import unittest

import numpy as np

from knotapel.errors import InvalidTopologyError
from knotapel.presets import initialize_presets, register_preset
from knotapel.relaxation import RelaxationConfig
from knotapel.scene import DEFAULT_COLORS, RenderMode, SceneConfig, recompute_scene, resolve_braid
from knotapel.spline import bounding_box, bounding_diagonal

FAST = RelaxationConfig(target_points=30, max_steps=200)


class TestResolveBraid(unittest.TestCase):
    """Tests for choosing the braid a config describes."""

    def setUp(self):
        initialize_presets()

    def tearDown(self):
        initialize_presets()

    def test_preset_wins(self):
        config = SceneConfig(preset='figure-eight', braid='1,1', strands=5)
        self.assertEqual(resolve_braid(config), (3, [1, -2, 1, -2]))

    def test_unknown_preset_falls_back(self):
        config = SceneConfig(preset='nope', braid='1, -2, abc, 0, 3')
        self.assertEqual(resolve_braid(config), (4, [1, -2, 3]))

    def test_default_braid(self):
        self.assertEqual(resolve_braid(SceneConfig()), (2, [1, 1, 1]))

    def test_explicit_strands(self):
        self.assertEqual(resolve_braid(SceneConfig(braid='1', strands=4)), (4, [1]))

    def test_empty_braid(self):
        self.assertEqual(resolve_braid(SceneConfig(braid='')), (1, []))

    def test_invalid_strands(self):
        with self.assertRaises(InvalidTopologyError):
            resolve_braid(SceneConfig(braid='3', strands=2))

    def test_registered_preset(self):
        register_preset('twist', 3, [1, 2])
        self.assertEqual(resolve_braid(SceneConfig(preset='twist')), (3, [1, 2]))


class TestBraidMode(unittest.TestCase):
    """Tests for scenes that show the synthesized closure directly."""

    def test_geometry_output(self):
        scene = recompute_scene(SceneConfig(preset='hopf', tube_radius=0.2))
        parts = scene.geometry()
        self.assertEqual(len(parts), 2)
        self.assertFalse(scene.is_knot)
        self.assertEqual([p.color_index for p in parts], [0, 1])
        self.assertEqual([p.color for p in parts], list(DEFAULT_COLORS[:2]))
        for part in parts:
            self.assertEqual(part.tube_radius, 0.2)
            self.assertEqual(part.points.shape[1], 3)

    def test_geometry_centred(self):
        scene = recompute_scene(SceneConfig(preset='figure-eight'))
        lo, hi = bounding_box([p.points for p in scene.geometry()])
        np.testing.assert_allclose(0.5 * (lo + hi), 0.0, atol=1e-12)

    def test_colors_cycle(self):
        config = SceneConfig(braid='', strands=3, colors=('red', 'blue'))
        parts = recompute_scene(config).geometry()
        self.assertEqual([p.color for p in parts], ['red', 'blue', 'red'])
        self.assertEqual([p.color_index for p in parts], [0, 1, 2])

    def test_no_relaxation(self):
        scene = recompute_scene(SceneConfig(preset='trefoil'))
        self.assertIsNone(scene.relaxation)
        self.assertTrue(scene.converged)
        self.assertTrue(scene.advance())
        self.assertEqual(scene.step_count, 0)
        self.assertEqual(scene.permutation, [1, 0])

    def test_components(self):
        self.assertEqual(recompute_scene(SceneConfig(preset='trefoil')).components, [[0, 1]])
        hopf = recompute_scene(SceneConfig(preset='hopf'))
        self.assertEqual(hopf.components, [[0], [1]])
        self.assertEqual(len(hopf.components), len(hopf.geometry()))
        self.assertEqual(recompute_scene(SceneConfig(braid='', strands=3)).components,
                         [[0], [1], [2]])


class TestSmoothMode(unittest.TestCase):
    """Tests for scenes driven by relaxation."""

    def test_runs_to_convergence(self):
        config = SceneConfig(preset='trefoil', mode=RenderMode.SMOOTH, relaxation=FAST)
        scene = recompute_scene(config)
        self.assertFalse(scene.converged)

        frames = 0
        while not scene.advance():
            frames += 1
            self.assertLess(frames, 100)
        self.assertTrue(scene.converged)

        parts = scene.geometry()
        self.assertEqual(len(parts), 1)
        self.assertEqual(parts[0].points.shape, (30, 3))
        self.assertAlmostEqual(bounding_diagonal([p.points for p in parts]),
                               scene.relaxation.initial_size, places=9)

    def test_explicit_step_count(self):
        config = SceneConfig(preset='hopf', mode=RenderMode.SMOOTH,
                             relaxation=RelaxationConfig(target_points=20, convergence_threshold=0.0))
        scene = recompute_scene(config)
        scene.advance(4)
        self.assertEqual(scene.step_count, 4)

    def test_recompute_builds_new_state(self):
        config = SceneConfig(preset='trefoil', mode=RenderMode.SMOOTH, relaxation=FAST)
        first = recompute_scene(config)
        first.advance()
        second = recompute_scene(config)
        self.assertIsNot(first.relaxation, second.relaxation)
        self.assertEqual(second.step_count, 0)

    def test_unknot_needs_no_relaxation(self):
        scene = recompute_scene(SceneConfig(preset='unknot', mode=RenderMode.SMOOTH))
        self.assertTrue(scene.converged)
        points = scene.geometry()[0].points
        np.testing.assert_allclose(np.hypot(points[:, 0], points[:, 2]), 0.8)


class TestParametricCurve(unittest.TestCase):
    """Tests for custom parametric curves."""

    def test_parametric_scene(self):
        def torus_knot(t):
            a = 2 * math.pi * t
            r = 2 + math.cos(3 * a)
            return (r * math.cos(2 * a), r * math.sin(2 * a), math.sin(3 * a))

        scene = recompute_scene(SceneConfig(parametric_curve=torus_knot, mode=RenderMode.SMOOTH))
        parts = scene.geometry()
        self.assertEqual(len(parts), 1)
        self.assertEqual(parts[0].points.shape, (200, 3))
        self.assertTrue(scene.converged)


if __name__ == '__main__':
    unittest.main()
