"""
knotapel: computational core for knot polynomial and braid closure demos

Two independent engines:

POLYNOMIALS:
- Exact Laurent polynomial arithmetic over Z[A, A^-1]
- Canonical form, mirror image, palindromicity, text/HTML rendering
- Kauffman bracket state sums of braid closures

GEOMETRY:
- Braid permutation, link components and strand trajectories
- 3D closure curves with over/under crossing bumps
- Particle relaxation of those curves into smooth, self-avoiding loops

QUICK START:
    from knotapel import SceneConfig, RenderMode, recompute_scene

    scene = recompute_scene(SceneConfig(preset='trefoil', mode=RenderMode.SMOOTH))
    while not scene.converged:
        scene.advance()
    for part in scene.geometry():
        render_tube(part.points, part.tube_radius, part.color)
"""

from .errors import KnotapelError, InvalidTopologyError, StateSumTooLargeError
from .polynomial import (
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
from .braid import (
    BraidWord,
    BraidGenerator,
    GeneratorSign,
    parse_braid_word,
    auto_detect_strands,
    validate_word,
    permutation,
    components,
    strand_positions,
)
from .curve import CurveConfig, CurveSynthesizer, crossing_count, sample_parametric_curve
from .relaxation import RelaxationConfig, RelaxationEngine, RelaxationState
from .presets import BraidPreset, initialize_presets, register_preset, get_preset, preset_names
from .invariants import (
    compute_writhe,
    compute_linking_number,
    compute_bracket,
    compute_normalized_bracket,
)
from .scene import (
    SceneConfig,
    RenderMode,
    KnotScene,
    ComponentGeometry,
    resolve_braid,
    recompute_scene,
)
from .logging_config import setup_logging

__version__ = "1.0.0"
__all__ = [
    # Errors
    "KnotapelError",
    "InvalidTopologyError",
    "StateSumTooLargeError",
    # Polynomials
    "LaurentPolynomial",
    "LOOP_VALUE",
    "zero",
    "monomial",
    "add",
    "multiply",
    "equals",
    "mirror",
    "is_palindromic",
    "to_display_text",
    "to_html",
    # Braid topology
    "BraidWord",
    "BraidGenerator",
    "GeneratorSign",
    "parse_braid_word",
    "auto_detect_strands",
    "validate_word",
    "permutation",
    "components",
    "strand_positions",
    # Curves
    "CurveConfig",
    "CurveSynthesizer",
    "crossing_count",
    "sample_parametric_curve",
    # Relaxation
    "RelaxationConfig",
    "RelaxationEngine",
    "RelaxationState",
    # Presets
    "BraidPreset",
    "initialize_presets",
    "register_preset",
    "get_preset",
    "preset_names",
    # Invariants
    "compute_writhe",
    "compute_linking_number",
    "compute_bracket",
    "compute_normalized_bracket",
    # Scenes
    "SceneConfig",
    "RenderMode",
    "KnotScene",
    "ComponentGeometry",
    "resolve_braid",
    "recompute_scene",
    # Logging
    "setup_logging",
]
