"""Tests for the command-line interface."""

import json
from pathlib import Path
from unittest.mock import patch

from typer.testing import CliRunner

from penroute import __version__
from penroute.cli.app import app
from penroute.core.processor import CellRouteResult
from penroute.domain import Point, Polygon
from penroute.utils import ProcessingStats

runner = CliRunner()


def fake_result() -> CellRouteResult:
    cell = Polygon(points=[Point(0, 0), Point(0.1, 0), Point(0.1, 0.1)])
    routes = [(Point(1, 1), Point(2, 2), Point(3, 3)), ()]
    stats = ProcessingStats(processed_count=2, cells_kept=2, start_time=1.0, end_time=2.0)
    return CellRouteResult(polygons=[cell, cell], routes=routes, stats=stats)


class TestCli:
    """Tests for the penroute command."""

    def test_version(self) -> None:
        result = runner.invoke(app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output

    def test_invalid_mode(self) -> None:
        result = runner.invoke(app, ["--mode", "zigzag"])
        assert result.exit_code == 1
        assert "Invalid mode" in result.output

    def test_invalid_density(self) -> None:
        result = runner.invoke(app, ["--density", "noise"])
        assert result.exit_code == 1

    def test_verbose_and_quiet(self) -> None:
        result = runner.invoke(app, ["-v", "-q"])
        assert result.exit_code == 1

    def test_writes_strokes(self, tmp_path: Path) -> None:
        """Strokes are exported as JSON point lists."""
        output = tmp_path / "routes.json"
        with patch("penroute.cli.app.CellRouteProcessor.process", return_value=fake_result()):
            result = runner.invoke(app, ["--seed", "4", "-o", str(output), "-q"])

        assert result.exit_code == 0
        payload = json.loads(output.read_text(encoding="utf-8"))
        assert payload["version"] == __version__
        assert payload["strokes"] == [
            [{"x": 1, "y": 1}, {"x": 2, "y": 2}, {"x": 3, "y": 3}],
        ]

    def test_summary(self) -> None:
        with patch("penroute.cli.app.CellRouteProcessor.process", return_value=fake_result()):
            result = runner.invoke(app, ["--mode", "spiral", "-j", "1"])

        assert result.exit_code == 0
        assert "Complete" in result.output
        assert "1 routes" in result.output
