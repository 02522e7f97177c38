"""
Named braid presets.

A single process-wide table maps preset names to (strand count, word).
initialize_presets() installs the built-in entries; register_preset()
extends or overrides the table at runtime. Rendering code only reads it.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from .braid import validate_word

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BraidPreset:
    name: str
    strand_count: int
    word: Tuple[int, ...]


BUILTIN_PRESETS = {
    'unknot': (1, ()),
    'trefoil': (2, (1, 1, 1)),
    'trefoil-left': (2, (-1, -1, -1)),
    'figure-eight': (3, (1, -2, 1, -2)),
    'hopf': (2, (1, 1)),
    'cinquefoil': (2, (1, 1, 1, 1, 1)),
}

_PRESETS: Dict[str, BraidPreset] = {}


def initialize_presets() -> None:
    """Reset the table to the built-in presets."""
    _PRESETS.clear()
    for name, (strands, word) in BUILTIN_PRESETS.items():
        _PRESETS[name] = BraidPreset(name, strands, word)


def register_preset(name: str, strand_count: int, word: Sequence[int]) -> BraidPreset:
    """
    Add or replace a preset.

    Raises:
        InvalidTopologyError: if the word does not fit strand_count
    """
    validate_word(strand_count, word)
    preset = BraidPreset(name, strand_count, tuple(word))
    if name in _PRESETS:
        logger.info("Replacing preset %r", name)
    _PRESETS[name] = preset
    return preset


def get_preset(name: Optional[str]) -> Optional[BraidPreset]:
    """Look up a preset; None for unknown or missing names."""
    if not name:
        return None
    return _PRESETS.get(name)


def preset_names() -> List[str]:
    return list(_PRESETS)


initialize_presets()
