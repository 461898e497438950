"""Declarative per-mode key tables.

The built-in tables live in :mod:`modal_editor.keymaps.defaults`, which
depends on the action modules and is imported explicitly by callers.
"""

from .models import ActionRef, Binding, KeyStroke, make_token
from .registry import KeymapConflictError, KeymapRegistry, RegistryStats
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult

__all__ = [
    "ActionRef",
    "Binding",
    "KeyStroke",
    "make_token",
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
