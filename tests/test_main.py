"""Tests for the command line entry point."""

import json

import pytest

from termatlas.main import build_config, main, parse_args
from termatlas.projection import Projection


class TestBuildConfig:
    """Test turning arguments into a configuration."""

    def test_cli_overrides_config_file(self, tmp_path):
        path = tmp_path / "map.json"
        path.write_text(json.dumps({"columns": 120, "rows": 40, "colors": 8}), encoding="utf8")
        config = build_config(parse_args(["--config", str(path), "-w", "60", "-p", "hammer"]))
        assert config.size == (60, 40)
        assert config.colors == 8
        assert config.projection is Projection.HAMMER

    def test_terminal_size_fallback(self):
        config = build_config(parse_args([]))
        assert config.size == (80, 24)

    def test_flags(self):
        args = parse_args(["-s", "-S", "--outline", "-b", "-T", "-d", "astronomical", "--charset", "blocks"])
        config = build_config(args)
        assert config.sun is True
        assert config.sun_markers is False
        assert config.solid_land is False
        assert config.world_border is True
        assert config.trailing_newline is False
        assert config.dusk_degrees == 18.0
        assert config.charset == "blocks"

    def test_outline_has_no_short_option(self):
        """`-o` is not accepted, so it cannot be mistaken for solid land."""
        with pytest.raises(SystemExit):
            parse_args(["-o"])

    def test_unset_flags_keep_defaults(self):
        config = build_config(parse_args(["-w", "40", "-H", "12"]))
        assert config.sun is False
        assert config.sun_markers is True
        assert config.solid_land is True


class TestMain:
    """Test running the program."""

    def test_prints_map(self, capsys):
        main(["--width", "40", "--height", "12", "--colors", "0"])
        out = capsys.readouterr().out
        lines = out.splitlines()
        assert len(lines) == 12
        assert all(len(line) == 40 for line in lines)

    def test_sun_at_equinox(self, capsys):
        main(["-w", "80", "-H", "24", "-c", "0", "-s", "--when", "2024-03-20T12:00"])
        out = capsys.readouterr().out
        assert "S" in out
        assert ":" in out

    def test_title(self, capsys):
        main(["-w", "60", "-H", "20", "-c", "0", "-t", "World"])
        assert "World" in capsys.readouterr().out

    def test_write_image(self, tmp_path, capsys):
        path = tmp_path / "map.png"
        main(["-w", "40", "-H", "12", "-W", str(path)])
        assert path.exists()
        assert capsys.readouterr().out == ""

    def test_missing_map_exits_with_error(self, tmp_path, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["-w", "20", "-H", "6", "-m", str(tmp_path / "missing.shp")])
        assert excinfo.value.code == 1
        captured = capsys.readouterr()
        assert captured.out == ""
        assert "missing.shp" in captured.err

    def test_unknown_projection_exits_with_error(self):
        with pytest.raises(SystemExit) as excinfo:
            main(["-w", "20", "-H", "6", "-p", "mercator"])
        assert excinfo.value.code == 1

    def test_missing_locations_file(self, tmp_path):
        with pytest.raises(SystemExit) as excinfo:
            main(["-w", "20", "-H", "6", "-l", str(tmp_path / "none.txt")])
        assert excinfo.value.code == 1

    def test_locations_file(self, tmp_path, capsys):
        path = tmp_path / "places.txt"
        path.write_text("points\n0 0\n.\n", encoding="utf8")
        main(["-w", "80", "-H", "24", "-c", "0", "-l", str(path)])
        assert "X" in capsys.readouterr().out
