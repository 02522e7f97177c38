"""
Particle relaxation of closure curves for knotapel.

The synthesized braid closure is faceted: straight runs, sharp bumps
and wide closure arcs. Relaxation treats every curve as an elastic rod
made of particles and lets it settle into a smooth, self-avoiding
shape. Each step applies four forces:

- Spring: keeps consecutive particles near the rest length
- Laplacian smoothing: pulls each particle toward its neighbours' midpoint
- Repulsion: inverse-cube push between all particle pairs, except
  nearby particles on the same curve
- Barrier: steep push between any two particles closer than a few
  tube radii, so strands cannot pass through each other

Steps are Jacobi-style: all forces come from one snapshot of positions,
and displacements are applied afterwards. Each displacement is clamped
to a maximum length. Every few steps the curves are resampled to
uniform arc length so particles do not bunch up.

The engine owns no timers. A host calls step() (or advance_frame())
from whatever scheduler it has and reads rebuild_geometry() afterwards.
"""

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

import numpy as np

from .spline import bounding_box, bounding_diagonal, mean_edge_length, resample_closed

logger = logging.getLogger(__name__)

# Below this a bounding size is treated as degenerate and not rescaled
_MIN_SIZE = 1e-3


@dataclass(frozen=True)
class RelaxationConfig:
    """
    Physical constants and schedule for relaxation.

    Attributes:
        k_repulsion: Inverse-cube repulsion strength
        k_barrier: Barrier strength inside the barrier distance
        k_spring: Edge spring strength
        k_smooth: Laplacian smoothing strength
        dt: Euler timestep
        max_displacement: Per-particle, per-step displacement clamp
        steps_per_frame: Steps taken by advance_frame()
        resample_interval: Steps between arc-length resamples
        max_steps: Step cap after which the state counts as converged
        convergence_threshold: Converged once the max displacement is below this
        target_points: Particles per curve after resampling
        exclusion_arc: Same-curve pairs this close in index skip repulsion
        barrier_factor: Barrier distance as a multiple of the tube radius
        min_distance_sq: Floor for squared pair distances
        min_edge_length: Floor for edge lengths
    """
    k_repulsion: float = 0.02
    k_barrier: float = 0.5
    k_spring: float = 0.3
    k_smooth: float = 0.05
    dt: float = 0.5
    max_displacement: float = 0.04
    steps_per_frame: int = 10
    resample_interval: int = 50
    max_steps: int = 5000
    convergence_threshold: float = 0.001
    target_points: int = 150
    exclusion_arc: int = 5
    barrier_factor: float = 4.0
    min_distance_sq: float = 0.01
    min_edge_length: float = 1e-4


@dataclass
class RelaxationState:
    """
    Mutable state of one relaxation run.

    Owned by a single scene; rebuilt from scratch whenever the braid,
    strand count, mode or tube radius changes.
    """
    components: List[np.ndarray]
    rest_lengths: List[float]
    frozen: List[bool]
    tube_radius: float
    config: RelaxationConfig
    initial_size: float
    step_count: int = 0
    max_displacement: float = float('inf')
    converged: bool = False
    displacement_history: List[float] = field(default_factory=list)

    @property
    def num_points(self) -> int:
        return sum(c.shape[0] for c in self.components)


class RelaxationEngine:
    """
    Drives RelaxationState instances with a fixed configuration.

    The engine is stateless apart from its configuration; the same
    engine can drive any number of independent states.
    """

    def __init__(self, config: RelaxationConfig = None):
        self.config = config or RelaxationConfig()

    def initialize(self, curves: Sequence[np.ndarray], tube_radius: float,
                   frozen: Optional[Sequence[bool]] = None) -> RelaxationState:
        """
        Create a fresh state from synthesized curves.

        Args:
            curves: One (k, 3) point array per component
            tube_radius: Tube radius used by the renderer; sets the barrier distance
            frozen: Per-component flag for curves that should not move
                    (components without crossings)

        Returns:
            New RelaxationState
        """
        if frozen is None:
            frozen = [False] * len(curves)
        frozen = list(frozen)

        comps = []
        for curve, is_frozen in zip(curves, frozen):
            pts = np.asarray(curve, dtype=float)
            if is_frozen:
                comps.append(pts.copy())
            else:
                comps.append(resample_closed(pts, self.config.target_points))

        state = RelaxationState(
            components=comps,
            rest_lengths=[mean_edge_length(c) for c in comps],
            frozen=frozen,
            tube_radius=float(tube_radius),
            config=self.config,
            initial_size=bounding_diagonal(comps) if comps else 0.0,
        )
        if all(frozen):
            state.converged = True
            state.max_displacement = 0.0

        logger.debug("Relaxation state: %d component(s), %d points, initial size %.3f",
                     len(comps), state.num_points, state.initial_size)
        return state

    def compute_forces(self, state: RelaxationState) -> np.ndarray:
        """
        Total force on every particle, from the current positions only.

        Returns:
            (N, 3) array, components concatenated in order
        """
        cfg = state.config
        positions = np.vstack(state.components)
        forces = np.zeros_like(positions)

        comp_ids = np.concatenate([np.full(c.shape[0], i) for i, c in enumerate(state.components)])
        local_ids = np.concatenate([np.arange(c.shape[0]) for c in state.components])
        lengths = np.concatenate([np.full(c.shape[0], c.shape[0]) for c in state.components])

        offset = 0
        for comp, rest in zip(state.components, state.rest_lengths):
            k = comp.shape[0]
            edge = np.roll(comp, -1, axis=0) - comp
            dist = np.maximum(np.linalg.norm(edge, axis=1), cfg.min_edge_length)
            spring = (cfg.k_spring * (dist - rest) / dist)[:, None] * edge
            midpoint = 0.5 * (np.roll(comp, 1, axis=0) + np.roll(comp, -1, axis=0))

            block = forces[offset:offset + k]
            block += spring
            block -= np.roll(spring, 1, axis=0)
            block += cfg.k_smooth * (midpoint - comp)
            offset += k

        diff = positions[:, None, :] - positions[None, :, :]
        raw_sq = np.sum(diff * diff, axis=2)
        dist_sq = np.maximum(raw_sq, cfg.min_distance_sq)
        dist = np.sqrt(dist_sq)

        same = comp_ids[:, None] == comp_ids[None, :]
        arc = np.abs(local_ids[:, None] - local_ids[None, :])
        arc = np.minimum(arc, lengths[:, None] - arc)
        exempt = same & (arc <= cfg.exclusion_arc)
        distinct = ~np.eye(positions.shape[0], dtype=bool)

        magnitude = np.where(exempt | ~distinct, 0.0, cfg.k_repulsion / (dist_sq * dist))

        barrier_dist = cfg.barrier_factor * state.tube_radius
        raw = np.sqrt(np.where(raw_sq > 0, raw_sq, 1e-4))
        penetration = np.where(distinct & (raw < barrier_dist), barrier_dist - raw, 0.0)
        magnitude = magnitude + cfg.k_barrier * penetration ** 2 / dist_sq

        forces += np.einsum('ij,ijk->ik', magnitude, diff)
        return forces

    def step(self, state: RelaxationState, count: int = 1) -> RelaxationState:
        """
        Advance the state by up to `count` steps.

        Stops early once converged; calling on a converged state does
        nothing. Returns the same state for chaining.
        """
        cfg = state.config
        for _ in range(count):
            if state.converged:
                break

            forces = self.compute_forces(state)

            max_disp = 0.0
            offset = 0
            for ci, comp in enumerate(state.components):
                k = comp.shape[0]
                if state.frozen[ci]:
                    offset += k
                    continue
                disp = forces[offset:offset + k] * cfg.dt
                mag = np.linalg.norm(disp, axis=1)
                scale = np.where(mag > cfg.max_displacement,
                                 cfg.max_displacement / np.maximum(mag, 1e-12), 1.0)
                disp = disp * scale[:, None]
                mag = np.minimum(mag, cfg.max_displacement)
                state.components[ci] = comp + disp
                if k:
                    max_disp = max(max_disp, float(mag.max()))
                offset += k

            state.step_count += 1
            state.max_displacement = max_disp
            state.displacement_history.append(max_disp)

            if state.step_count % cfg.resample_interval == 0:
                self.resample(state)

            if max_disp < cfg.convergence_threshold or state.step_count >= cfg.max_steps:
                state.converged = True
                logger.info("Relaxation converged after %d steps (max displacement %.5f)",
                            state.step_count, max_disp)
        return state

    def advance_frame(self, state: RelaxationState) -> RelaxationState:
        """Take one frame's worth of steps."""
        return self.step(state, state.config.steps_per_frame)

    def resample(self, state: RelaxationState) -> None:
        """Respace every moving curve uniformly by arc length and reset rest lengths."""
        for ci, comp in enumerate(state.components):
            if state.frozen[ci]:
                continue
            resampled = resample_closed(comp, comp.shape[0])
            state.components[ci] = resampled
            state.rest_lengths[ci] = mean_edge_length(resampled)
        logger.debug("Resampled relaxation curves at step %d", state.step_count)

    def rebuild_geometry(self, state: RelaxationState) -> List[np.ndarray]:
        """
        Copies of the current curves, centred on the origin and scaled
        so the bounding-box diagonal matches the initial one.
        """
        curves = [c.copy() for c in state.components]
        if not curves:
            return curves

        lo, hi = bounding_box(curves)
        center = 0.5 * (lo + hi)
        curves = [c - center for c in curves]

        size = float(np.linalg.norm(hi - lo))
        if size > _MIN_SIZE and state.initial_size > _MIN_SIZE:
            scale = state.initial_size / size
            curves = [c * scale for c in curves]
        return curves
