"""Type aliases used across Totem."""

from __future__ import annotations

from typing import Any

JsonDict = dict[str, Any]
TimePunchKey = str  # canonical "last, first"
NameKey = str  # strict "last|first"
