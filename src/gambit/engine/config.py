"""Engine configuration: search depth and evaluation weights."""

from __future__ import annotations

import tomllib
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

from gambit.core.enums import PieceType

DEFAULT_PIECE_VALUES: dict[PieceType, int] = {
    PieceType.PAWN: 100,
    PieceType.KNIGHT: 320,
    PieceType.BISHOP: 330,
    PieceType.ROOK: 500,
    PieceType.QUEEN: 900,
    PieceType.KING: 0,
}

_WEIGHT_KEYS = {
    "material": "material_weight",
    "position": "position_weight",
    "mobility": "mobility_weight",
}


@dataclass(frozen=True, slots=True)
class EngineConfig:
    """Immutable engine settings.

    Args:
        depth: Plies searched below the root move.
        piece_values: Material value per piece type, in centipawns.
        material_weight: Multiplier for the material balance.
        position_weight: Multiplier for piece-square bonuses.
        mobility_weight: Centipawns per pseudo-legal move of advantage.
    """

    depth: int = 3
    piece_values: Mapping[PieceType, int] = field(
        default_factory=lambda: dict(DEFAULT_PIECE_VALUES)
    )
    material_weight: float = 1.0
    position_weight: float = 1.0
    mobility_weight: float = 0.0

    def __post_init__(self) -> None:
        if self.depth < 1:
            raise ValueError(f"Search depth must be >= 1, got {self.depth}")
        missing = set(PieceType) - set(self.piece_values)
        if missing:
            names = ", ".join(sorted(pt.name.lower() for pt in missing))
            raise ValueError(f"Missing piece values for: {names}")
        for name in ("material_weight", "position_weight", "mobility_weight"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0")

    # Presets
    @classmethod
    def default(cls) -> EngineConfig:
        return cls()

    @classmethod
    def light(cls) -> EngineConfig:
        """Shallow and quick; suitable for weak machines or tests."""
        return cls(depth=2, position_weight=0.5)

    @classmethod
    def strong(cls) -> EngineConfig:
        return cls(depth=4, mobility_weight=4.0)

    @classmethod
    def preset(cls, name: str) -> EngineConfig:
        """Look up a named preset (``default``, ``light``, ``strong``)."""
        presets = {
            "default": cls.default,
            "light": cls.light,
            "strong": cls.strong,
        }
        try:
            return presets[name.lower()]()
        except KeyError:
            raise ValueError(f"Unknown engine preset: {name!r}") from None

    # Loading
    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> EngineConfig:
        """Build a config from plain data, e.g. a parsed TOML table.

        Recognised keys: ``preset``, ``depth``, ``weights`` (``material``,
        ``position``, ``mobility``) and ``piece_values`` keyed by lowercase
        piece name.  Values not given keep the preset's.
        """
        unknown = set(data) - {"preset", "depth", "weights", "piece_values"}
        if unknown:
            raise ValueError(f"Unknown engine settings: {sorted(unknown)}")

        config = cls.preset(data.get("preset", "default"))
        changes: dict[str, Any] = {}
        if "depth" in data:
            changes["depth"] = int(data["depth"])

        for key, value in data.get("weights", {}).items():
            attr = _WEIGHT_KEYS.get(key)
            if attr is None:
                raise ValueError(f"Unknown evaluation weight: {key!r}")
            changes[attr] = float(value)

        if "piece_values" in data:
            values = dict(config.piece_values)
            for key, value in data["piece_values"].items():
                try:
                    values[PieceType[key.upper()]] = int(value)
                except KeyError:
                    raise ValueError(f"Unknown piece type: {key!r}") from None
            changes["piece_values"] = values

        return replace(config, **changes)

    @classmethod
    def from_toml(cls, path: str | Path) -> EngineConfig:
        """Load settings from the ``[engine]`` table of a TOML file."""
        with open(path, "rb") as fh:
            data = tomllib.load(fh)
        return cls.from_mapping(data.get("engine", {}))
