"""
Braid closure curve synthesis for knotapel.

Turns a braid word into one closed 3D polyline per link component.
The braid is laid out along the depth axis (z): level l of the word
sits between z = l * level_spacing and z = (l + 1) * level_spacing,
strand columns are spread along x, and crossings are drawn as
sinusoidal bumps in y so the over-strand passes above the
under-strand. After the last level each strand returns to the top
of the next strand in its cycle through a Bezier closure arc that
bows out to the side of the braid.

The output is a visualization heuristic, not a certified diagram.
"""

import logging
import math
from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple

import numpy as np

from .braid import components, permutation, strand_positions, validate_word

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CurveConfig:
    """
    Layout parameters for curve synthesis.

    Attributes:
        strand_spacing: Distance between adjacent strand columns (x)
        level_spacing: Depth of one braid level (z)
        bump_height: Peak height of a crossing bump (y)
        closure_radius: How far closure arcs bow out past the last column
        bump_subdivisions: Points emitted per crossing bump
        arc_subdivisions: Segments per closure arc
        circle_points: Points on each circle of a crossing-free closure
        circle_radius: Radius of those circles
        circle_offset: x offset per strand index between those circles
        arc_offset: Extra bow per closure arc so parallel arcs separate
    """
    strand_spacing: float = 1.0
    level_spacing: float = 1.5
    bump_height: float = 0.35
    closure_radius: float = 2.0
    bump_subdivisions: int = 8
    arc_subdivisions: int = 16
    circle_points: int = 48
    circle_radius: float = 0.8
    circle_offset: float = 0.6
    arc_offset: float = 0.3


class CurveSynthesizer:
    """
    Builds closure curves from a braid word.

    The synthesizer holds only its configuration; identical inputs
    always produce identical point sequences.
    """

    def __init__(self, config: CurveConfig = None):
        self.config = config or CurveConfig()

    def _column_x(self, num_strands: int, column: float) -> float:
        return (column - (num_strands - 1) / 2) * self.config.strand_spacing

    def _circle(self, component: Sequence[int]) -> np.ndarray:
        cfg = self.config
        angles = np.arange(cfg.circle_points) / cfg.circle_points * 2 * math.pi
        ox = component[0] * cfg.circle_offset
        return np.column_stack([
            cfg.circle_radius * np.cos(angles) + ox,
            np.zeros_like(angles),
            cfg.circle_radius * np.sin(angles),
        ])

    def build_component(self, num_strands: int, word: Sequence[int],
                        component: Sequence[int]) -> np.ndarray:
        """
        Build the closed polyline of one link component.

        Args:
            num_strands: Strand count of the braid
            word: Signed generator list
            component: Cycle of strand indices (as returned by components())

        Returns:
            (k, 3) array of points; the last point connects back to the first
        """
        validate_word(num_strands, word)
        if not word:
            return self._circle(component)

        cfg = self.config
        ls = cfg.level_spacing
        levels = len(word)
        points: List[Tuple[float, float, float]] = []

        for ci, strand in enumerate(component):
            next_strand = component[(ci + 1) % len(component)]
            pos = strand_positions(num_strands, word, strand)

            points.append((self._column_x(num_strands, pos[0]), 0.0, 0.0))

            for level, g in enumerate(word):
                gi = abs(g) - 1
                before = pos[level]
                after = pos[level + 1]

                if before == gi or before == gi + 1:
                    # over/under depends on crossing sign and the column we enter from
                    is_over = (before == gi) if g > 0 else (before == gi + 1)
                    peak = cfg.bump_height if is_over else -cfg.bump_height
                    px = self._column_x(num_strands, before)
                    cx = self._column_x(num_strands, after)
                    z0 = level * ls
                    for t in range(1, cfg.bump_subdivisions + 1):
                        f = t / cfg.bump_subdivisions
                        points.append((px + (cx - px) * f, peak * math.sin(math.pi * f), z0 + ls * f))
                else:
                    points.append((self._column_x(num_strands, after), 0.0, (level + 1) * ls))

            bx = self._column_x(num_strands, pos[levels])
            tx = self._column_x(num_strands, next_strand)
            bz = levels * ls
            arc_x = self._column_x(num_strands, num_strands - 1) + cfg.closure_radius + ci * cfg.arc_offset

            for t in range(1, cfg.arc_subdivisions):
                f = t / cfg.arc_subdivisions
                u = 1 - f
                x = u * u * u * bx + 3 * u * u * f * arc_x + 3 * u * f * f * arc_x + f * f * f * tx
                z = u * u * u * bz + 3 * u * u * f * bz
                points.append((x, 0.0, z))

        return np.array(points, dtype=float)

    def synthesize(self, num_strands: int, word: Sequence[int]) -> List[np.ndarray]:
        """Build one curve per link component, in component order."""
        cycles = components(num_strands, permutation(num_strands, word))
        curves = [self.build_component(num_strands, word, cycle) for cycle in cycles]
        logger.debug("Synthesized %d component curve(s) for %d strands, %d crossings",
                     len(curves), num_strands, len(word))
        return curves


def crossing_count(num_strands: int, word: Sequence[int], component: Sequence[int]) -> int:
    """Number of crossings in which any strand of the component takes part."""
    if not word:
        return 0
    trajectories = [strand_positions(num_strands, word, s) for s in component]
    count = 0
    for level, g in enumerate(word):
        gi = abs(g) - 1
        if any(pos[level] in (gi, gi + 1) for pos in trajectories):
            count += 1
    return count


def sample_parametric_curve(fn: Callable[[float], Sequence[float]],
                            samples: int = 200) -> np.ndarray:
    """
    Sample a closed parametric curve fn(t), t in [0, 1), at `samples` points.
    """
    return np.array([tuple(fn(i / samples))[:3] for i in range(samples)], dtype=float)
