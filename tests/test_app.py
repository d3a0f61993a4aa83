"""Tests for the command-line entry point."""

from pathlib import Path

import pytest

from gambit.app import build_parser, main

MATE_IN_ONE = "6k1/5ppp/8/8/8/8/8/R5K1 w - - 0 1"


class TestParser:
    def test_defaults(self) -> None:
        args = build_parser().parse_args([])
        assert args.preset == "light"
        assert args.max_plies == 80
        assert args.fen is None


class TestMain:
    def test_plays_to_checkmate(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--fen", MATE_IN_ONE, "--depth", "1"]) == 0
        out = capsys.readouterr().out
        assert "White's turn." in out
        assert "White wins!" in out

    def test_move_limit(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert main(["--depth", "1", "--max-plies", "2"]) == 0
        out = capsys.readouterr().out
        assert "Move limit reached." in out

    def test_unknown_preset(self) -> None:
        assert main(["--preset", "blitz"]) == 2

    def test_bad_fen(self) -> None:
        assert main(["--fen", "not a fen"]) == 2

    def test_config_file(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        path = tmp_path / "engine.toml"
        path.write_text("[engine]\ndepth = 1\n", encoding="utf-8")
        assert main(["--config", str(path), "--fen", MATE_IN_ONE]) == 0
        assert "White wins!" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path: Path) -> None:
        assert main(["--config", str(tmp_path / "nope.toml")]) == 2
