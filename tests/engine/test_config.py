"""Tests for EngineConfig presets and loading."""

from pathlib import Path

import pytest

from gambit.engine.config import DEFAULT_PIECE_VALUES, EngineConfig
from gambit.core.enums import PieceType


class TestPresets:
    def test_default(self) -> None:
        config = EngineConfig.default()
        assert config.depth == 3
        assert dict(config.piece_values) == DEFAULT_PIECE_VALUES
        assert config.mobility_weight == 0.0

    def test_light_is_shallower(self) -> None:
        assert EngineConfig.light().depth < EngineConfig.default().depth

    def test_strong_is_deeper(self) -> None:
        strong = EngineConfig.strong()
        assert strong.depth > EngineConfig.default().depth
        assert strong.mobility_weight > 0

    @pytest.mark.parametrize("name", ["default", "light", "strong", "LIGHT"])
    def test_preset_lookup(self, name: str) -> None:
        assert EngineConfig.preset(name) == getattr(EngineConfig, name.lower())()

    def test_unknown_preset_raises(self) -> None:
        with pytest.raises(ValueError, match="preset"):
            EngineConfig.preset("blitz")


class TestValidation:
    def test_depth_must_be_positive(self) -> None:
        with pytest.raises(ValueError, match="depth"):
            EngineConfig(depth=0)

    def test_missing_piece_value(self) -> None:
        values = dict(DEFAULT_PIECE_VALUES)
        del values[PieceType.QUEEN]
        with pytest.raises(ValueError, match="queen"):
            EngineConfig(piece_values=values)

    def test_negative_weight(self) -> None:
        with pytest.raises(ValueError, match="position_weight"):
            EngineConfig(position_weight=-1.0)

    def test_frozen(self) -> None:
        config = EngineConfig()
        with pytest.raises(AttributeError):
            config.depth = 5  # type: ignore[misc]


class TestLoading:
    def test_from_mapping_overrides(self) -> None:
        config = EngineConfig.from_mapping(
            {
                "preset": "light",
                "depth": 5,
                "weights": {"mobility": 2.5},
                "piece_values": {"queen": 950},
            }
        )
        assert config.depth == 5
        assert config.mobility_weight == 2.5
        assert config.position_weight == EngineConfig.light().position_weight
        assert config.piece_values[PieceType.QUEEN] == 950
        assert config.piece_values[PieceType.ROOK] == 500

    def test_from_mapping_empty_is_default(self) -> None:
        assert EngineConfig.from_mapping({}) == EngineConfig.default()

    def test_unknown_key_raises(self) -> None:
        with pytest.raises(ValueError, match="Unknown engine settings"):
            EngineConfig.from_mapping({"threads": 4})

    def test_unknown_weight_raises(self) -> None:
        with pytest.raises(ValueError, match="weight"):
            EngineConfig.from_mapping({"weights": {"king_safety": 1.0}})

    def test_unknown_piece_raises(self) -> None:
        with pytest.raises(ValueError, match="piece type"):
            EngineConfig.from_mapping({"piece_values": {"archbishop": 800}})

    def test_from_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "gambit.toml"
        path.write_text(
            "[engine]\n"
            'preset = "strong"\n'
            "depth = 2\n"
            "\n"
            "[engine.weights]\n"
            "material = 1.5\n",
            encoding="utf-8",
        )
        config = EngineConfig.from_toml(path)
        assert config.depth == 2
        assert config.material_weight == 1.5
        assert config.mobility_weight == EngineConfig.strong().mobility_weight

    def test_from_toml_without_engine_table(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.toml"
        path.write_text("[other]\nkey = 1\n", encoding="utf-8")
        assert EngineConfig.from_toml(path) == EngineConfig.default()

    def test_from_toml_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(OSError):
            EngineConfig.from_toml(tmp_path / "missing.toml")
