"""
Examples demonstrating knotapel usage.

Run with: python -m knotapel.examples
"""

from knotapel.braid import BraidWord, parse_braid_word
from knotapel.curve import CurveSynthesizer
from knotapel.invariants import compute_bracket, compute_normalized_bracket, compute_writhe
from knotapel.logging_config import setup_logging
from knotapel.polynomial import LOOP_VALUE, is_palindromic, mirror, monomial, to_display_text
from knotapel.presets import get_preset, preset_names
from knotapel.relaxation import RelaxationConfig
from knotapel.scene import RenderMode, SceneConfig, recompute_scene


def example_polynomials():
    """Basic Laurent polynomial arithmetic."""
    print("=" * 60)
    print("Example 1: Laurent Polynomials")
    print("=" * 60)

    delta = LOOP_VALUE
    print(f"Loop value δ = {to_display_text(delta)}")
    print(f"δ² = {to_display_text(delta * delta)}")
    print(f"δ palindromic: {is_palindromic(delta)}")

    p = monomial(1, 3) + monomial(-2, 1)
    print(f"p = {p}, mirror(p) = {mirror(p)}")
    print()
    return delta * delta


def example_braid_topology():
    """Permutations and link components of braid closures."""
    print("=" * 60)
    print("Example 2: Braid Topology")
    print("=" * 60)

    results = {}
    for name in preset_names():
        preset = get_preset(name)
        braid = BraidWord.from_int_list(preset.strand_count, preset.word)
        cycles = braid.components()
        kind = "knot" if len(cycles) == 1 else f"{len(cycles)}-component link"
        print(f"{name:>14}: {braid!r}  perm={braid.permutation()}  -> {kind}")
        results[name] = len(cycles)

    word = parse_braid_word("1, -2, abc, 0, 3")
    print(f"\nParsed '1, -2, abc, 0, 3' -> {word}")
    print()
    return results


def example_invariants():
    """Kauffman bracket of preset closures."""
    print("=" * 60)
    print("Example 3: Kauffman Bracket")
    print("=" * 60)

    results = {}
    for name in ('unknot', 'hopf', 'trefoil', 'trefoil-left', 'figure-eight'):
        preset = get_preset(name)
        bracket = compute_bracket(preset.strand_count, preset.word)
        normalized = compute_normalized_bracket(preset.strand_count, preset.word)
        print(f"{name}:")
        print(f"  writhe      = {compute_writhe(preset.word)}")
        print(f"  <K>         = {to_display_text(bracket)}")
        print(f"  f(K)        = {to_display_text(normalized)}")
        print(f"  amphichiral = {is_palindromic(normalized)}")
        results[name] = normalized
    print()
    return results


def example_curves():
    """Synthesizing closure curves."""
    print("=" * 60)
    print("Example 4: Closure Curves")
    print("=" * 60)

    synthesizer = CurveSynthesizer()
    curves = synthesizer.synthesize(3, [1, -2, 1, -2])
    for i, curve in enumerate(curves):
        print(f"Component {i}: {curve.shape[0]} points, "
              f"z range [{curve[:, 2].min():.2f}, {curve[:, 2].max():.2f}]")
    print()
    return curves


def example_relaxation(max_frames: int = 200):
    """Relaxing a trefoil the way a viewer's frame loop would."""
    print("=" * 60)
    print("Example 5: Smooth Relaxation")
    print("=" * 60)

    config = SceneConfig(
        preset='trefoil',
        mode=RenderMode.SMOOTH,
        relaxation=RelaxationConfig(target_points=60, max_steps=400),
    )
    scene = recompute_scene(config)

    frames = 0
    while not scene.converged and frames < max_frames:
        scene.advance()
        frames += 1

    print(f"Frames: {frames}, steps: {scene.step_count}, converged: {scene.converged}")
    for part in scene.geometry():
        print(f"  component {part.color_index} ({part.color}): {part.points.shape[0]} points")
    print()
    return scene


def run_all_examples():
    """Run all examples."""
    example_polynomials()
    example_braid_topology()
    example_invariants()
    example_curves()
    example_relaxation()


if __name__ == '__main__':
    setup_logging()
    run_all_examples()
