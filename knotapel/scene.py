"""
Scene assembly for knot viewers.

A host (a web component, a notebook widget, a desktop view) describes
what it wants to show with an explicit SceneConfig and calls
recompute_scene() whenever that configuration changes. The returned
KnotScene hands per-component point lists to the renderer and, in
smooth mode, owns the relaxation state that the host's frame loop
advances with advance().

A scene is never patched: a new configuration means a new scene and,
in smooth mode, a new relaxation state.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, List, Optional, Sequence, Tuple

import numpy as np

from .braid import auto_detect_strands, components, parse_braid_word, permutation, validate_word
from .curve import CurveConfig, CurveSynthesizer, crossing_count, sample_parametric_curve
from .presets import get_preset
from .relaxation import RelaxationConfig, RelaxationEngine, RelaxationState
from .spline import bounding_box

logger = logging.getLogger(__name__)

DEFAULT_COLORS = ('#e8c86a', '#c4a0e8', '#7bc77b', '#5b9bd5', '#d4845a')


class RenderMode(Enum):
    BRAID = 'braid'
    SMOOTH = 'smooth'


@dataclass(frozen=True)
class SceneConfig:
    """
    Everything a viewer needs to build its geometry.

    Attributes:
        braid: Comma-separated braid word, used when no preset applies
        strands: Explicit strand count (None or 0 auto-detects)
        preset: Preset name; unknown names fall back to braid/strands
        tube_radius: Tube radius for the renderer and the relaxation barrier
        mode: BRAID shows the synthesized closure, SMOOTH relaxes it
        colors: Ordered colours, indexed by component number
        curve: Curve synthesis layout
        relaxation: Relaxation constants
        parametric_curve: Optional fn(t) -> (x, y, z); overrides the braid
    """
    braid: str = '1,1,1'
    strands: Optional[int] = None
    preset: Optional[str] = None
    tube_radius: float = 0.12
    mode: RenderMode = RenderMode.BRAID
    colors: Tuple[str, ...] = DEFAULT_COLORS
    curve: CurveConfig = field(default_factory=CurveConfig)
    relaxation: RelaxationConfig = field(default_factory=RelaxationConfig)
    parametric_curve: Optional[Callable[[float], Sequence[float]]] = None


@dataclass
class ComponentGeometry:
    """What the renderer receives for one component."""
    points: np.ndarray
    tube_radius: float
    color_index: int
    color: str


def resolve_braid(config: SceneConfig) -> Tuple[int, List[int]]:
    """
    Pick the (strand count, word) a config describes.

    A registered preset wins; otherwise the braid text is parsed and the
    strand count is taken from config.strands or auto-detected.

    Raises:
        InvalidTopologyError: if the word does not fit the strand count
    """
    preset = get_preset(config.preset)
    if preset is not None:
        return preset.strand_count, list(preset.word)

    if config.preset:
        logger.debug("Unknown preset %r, using explicit braid", config.preset)
    word = parse_braid_word(config.braid)
    num_strands = config.strands or auto_detect_strands(word)
    validate_word(num_strands, word)
    return num_strands, word


def _centered(curves: List[np.ndarray]) -> List[np.ndarray]:
    if not curves:
        return curves
    lo, hi = bounding_box(curves)
    center = 0.5 * (lo + hi)
    return [c - center for c in curves]


class KnotScene:
    """
    Geometry for one viewer configuration.

    Built by recompute_scene(); discard it when the configuration changes.
    """

    def __init__(self, config: SceneConfig, num_strands: int, word: List[int],
                 curves: List[np.ndarray], cycles: List[List[int]]):
        self.config = config
        self.num_strands = num_strands
        self.word = word
        self.curves = curves
        self.cycles = cycles
        self.engine: Optional[RelaxationEngine] = None
        self.relaxation: Optional[RelaxationState] = None

        if config.mode == RenderMode.SMOOTH and config.parametric_curve is None:
            self.engine = RelaxationEngine(config.relaxation)
            frozen = [crossing_count(num_strands, word, cycle) == 0 for cycle in cycles]
            self.relaxation = self.engine.initialize(curves, config.tube_radius, frozen)

    @property
    def permutation(self) -> List[int]:
        return permutation(self.num_strands, self.word)

    @property
    def components(self) -> List[List[int]]:
        """Link components as lists of starting columns."""
        return self.cycles

    @property
    def is_knot(self) -> bool:
        return len(self.cycles) == 1

    @property
    def converged(self) -> bool:
        """True unless a relaxation is still running."""
        return self.relaxation is None or self.relaxation.converged

    @property
    def step_count(self) -> int:
        return self.relaxation.step_count if self.relaxation else 0

    def advance(self, steps: Optional[int] = None) -> bool:
        """
        Run one frame tick of relaxation.

        Args:
            steps: Steps to take; defaults to the configured steps_per_frame

        Returns:
            True if the scene is converged afterwards
        """
        if self.relaxation is None:
            return True
        if steps is None:
            self.engine.advance_frame(self.relaxation)
        else:
            self.engine.step(self.relaxation, steps)
        return self.relaxation.converged

    def geometry(self) -> List[ComponentGeometry]:
        """Per-component points, tube radius and colour for the renderer."""
        if self.relaxation is not None:
            curves = self.engine.rebuild_geometry(self.relaxation)
        else:
            curves = _centered(self.curves)

        colors = self.config.colors or DEFAULT_COLORS
        return [
            ComponentGeometry(
                points=curve,
                tube_radius=self.config.tube_radius,
                color_index=i,
                color=colors[i % len(colors)],
            )
            for i, curve in enumerate(curves)
        ]


def recompute_scene(config: SceneConfig) -> KnotScene:
    """
    Build a scene from scratch for the given configuration.

    Call this whenever any configuration value changes; the previous
    scene (and its relaxation state) should simply be dropped.
    """
    if config.parametric_curve is not None:
        curve = sample_parametric_curve(config.parametric_curve)
        logger.info("Scene from parametric curve (%d samples)", curve.shape[0])
        return KnotScene(config, 1, [], [curve], [[0]])

    num_strands, word = resolve_braid(config)
    cycles = components(num_strands, permutation(num_strands, word))
    curves = CurveSynthesizer(config.curve).synthesize(num_strands, word)
    logger.info("Scene: %d strands, %d crossings, %d component(s), mode %s",
                num_strands, len(word), len(cycles), config.mode.value)
    return KnotScene(config, num_strands, word, curves, cycles)
