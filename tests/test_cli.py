"""Tests for the command-line entry point."""

import json

from smooth_snake.cli import _build_parser, main


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        parser = _build_parser()
        args = parser.parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.config is None
        assert args.dimension is None
        assert args.max_frames == 100_000
        assert args.manual is False

    def test_simulate_with_flags(self):
        parser = _build_parser()
        args = parser.parse_args([
            "simulate",
            "--dimension", "12",
            "--seed", "5",
            "--speed", "8.5",
            "--max-frames", "300",
            "--manual",
        ])
        assert args.dimension == 12
        assert args.seed == 5
        assert args.speed == 8.5
        assert args.max_frames == 300
        assert args.manual is True

    def test_config_requires_output(self):
        parser = _build_parser()
        args = parser.parse_args(["config", "out.json"])
        assert args.command == "config"
        assert args.output == "out.json"


class TestCLICommands:
    def test_simulate_runs(self, capsys):
        code = main([
            "simulate", "--dimension", "8", "--seed", "1",
            "--max-frames", "200", "--manual",
        ])
        assert code == 0
        assert "Simulation:" in capsys.readouterr().out

    def test_config_writes_file(self, tmp_path):
        out = tmp_path / "game.json"
        code = main(["config", str(out), "--dimension", "14", "--seed", "9"])
        assert code == 0
        data = json.loads(out.read_text())
        assert data["dimension"] == 14
        assert data["seed"] == 9

    def test_simulate_uses_config_file(self, tmp_path, capsys):
        out = tmp_path / "game.json"
        main(["config", str(out), "--dimension", "6"])
        capsys.readouterr()
        code = main([
            "simulate", "--config", str(out), "--max-frames", "50",
        ])
        assert code == 0
        assert "Simulation:" in capsys.readouterr().out

    def test_invalid_config_returns_2(self):
        assert main(["simulate", "--dimension", "2"]) == 2

    def test_missing_config_file_returns_2(self, tmp_path):
        missing = tmp_path / "nope.json"
        assert main(["simulate", "--config", str(missing)]) == 2

    def test_unknown_config_key_returns_2(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text(json.dumps({"dimension": 8, "walls": True}))
        assert main(["simulate", "--config", str(path)]) == 2
