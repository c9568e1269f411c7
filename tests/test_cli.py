"""Tests for the command-line front end."""

from __future__ import annotations

import pytest

from metro_router import cli
from metro_router.adapters.rendering import TextPathRenderer
from metro_router.cli import main, run_menu
from metro_router.container import Container
from metro_router.domain import ConfigurationError
from metro_router.services import MetroQueryService


def scripted(*answers):
    """input() replacement that raises EOFError once the answers run out."""
    remaining = iter(answers)

    def read(prompt: str) -> str:
        try:
            return next(remaining)
        except StopIteration:
            raise EOFError from None

    return read


class TestMain:
    def test_route(self, example_csv, capsys):
        code = main(["--data", str(example_csv), "route", "A", "D"])

        out = capsys.readouterr().out
        assert code == 0
        assert "Take Line1 from A to B (1 stop, 3.00 km)" in out
        assert "Transfer to Line2 at B, ride to D (1 stop, 2.00 km)" in out
        assert "Total distance: 5.00 km" in out

    def test_transfers(self, example_csv, capsys):
        assert main(["--data", str(example_csv), "transfers"]) == 0

        out = capsys.readouterr().out
        assert "1 transfer stations:" in out
        assert "B: Line1, Line2" in out

    def test_fare(self, example_csv, capsys):
        assert main(["--data", str(example_csv), "fare", "A", "D"]) == 0

        out = capsys.readouterr().out
        assert "Distance:      5.00 km" in out
        assert "Single ticket: 3" in out
        assert "Card:          2.7" in out
        assert "1-day pass:" in out
        assert "Recommended:   card" in out

    def test_nearby_and_reachable(self, example_csv, capsys):
        assert main(["--data", str(example_csv), "nearby", "B", "--hops", "1"]) == 0
        assert main(["--data", str(example_csv), "reachable", "A", "--km", "5"]) == 0

        out = capsys.readouterr().out
        assert "D, Line2, 1 stop(s)" in out
        assert "D, via Line2, 5.00 km" in out

    def test_paths_limit(self, tmp_path, capsys):
        data = tmp_path / "square.csv"
        data.write_text(
            "from_station,to_station,line,distance_km\n"
            "A,B,L1,1\nB,D,L1,1\nA,C,L2,2\nC,D,L2,2\n",
            encoding="utf-8",
        )

        assert main(["--data", str(data), "paths", "A", "D", "--limit", "1"]) == 0
        assert "1 path(s) from A to D (first 1):" in capsys.readouterr().out

        assert main(["--data", str(data), "paths", "A", "D", "--limit", "0"]) == 0
        assert "2 path(s) from A to D:" in capsys.readouterr().out

    def test_line(self, example_csv, capsys):
        assert main(["--data", str(example_csv), "line", "Line1"]) == 0

        assert "Line1 (3 stations):" in capsys.readouterr().out

    def test_timetable_format(self, example_timetable, capsys):
        code = main(["--data", str(example_timetable), "--format", "timetable", "route", "A", "C"])

        assert code == 0
        assert "Total distance: 8.00 km" in capsys.readouterr().out

    def test_unknown_station_exits_with_error(self, example_csv, capsys):
        code = main(["--data", str(example_csv), "route", "A", "Z"])

        captured = capsys.readouterr()
        assert code == 1
        assert captured.err.startswith("Error:")
        assert "Z" in captured.err

    def test_negative_hops_exits_with_error(self, example_csv, capsys):
        assert main(["--data", str(example_csv), "nearby", "A", "--hops", "-1"]) == 1

    def test_missing_data_file(self, tmp_path, capsys):
        code = main(["--data", str(tmp_path / "missing.txt"), "transfers"])

        assert code == 1
        assert "Error:" in capsys.readouterr().err

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 1
        assert "usage: metro-router" in capsys.readouterr().out

    def test_bundled_network(self, capsys):
        assert main(["transfers"]) == 0

        assert "5 transfer stations:" in capsys.readouterr().out


class TestMenu:
    @pytest.fixture
    def service(self, example_csv):
        from metro_router.config import AppConfig, GraphConfig

        config = AppConfig(
            graph=GraphConfig(
                data_dir=example_csv.parent, data_file=example_csv.name, source="csv"
            )
        )
        return Container.create_default(config).resolve(MetroQueryService)

    def test_runs_queries_until_exit(self, service, capsys):
        answers = scripted("1", "5", "A", "D", "7", "Line2", "0")

        assert run_menu(service, TextPathRenderer(), 10, input_fn=answers) == 0

        out = capsys.readouterr().out
        assert "B: Line1, Line2" in out
        assert "Total distance: 5.00 km" in out
        assert "Line2 (2 stations):" in out
        assert out.rstrip().endswith("Goodbye.")

    def test_errors_do_not_end_the_loop(self, service, capsys):
        answers = scripted("9", "2", "A", "many", "5", "A", "Z", "6", "A", "C", "0")

        run_menu(service, TextPathRenderer(), 10, input_fn=answers)

        out = capsys.readouterr().out
        assert "Unknown choice, try again." in out
        assert "Invalid input:" in out
        assert "Error:" in out
        assert "Recommended:   card" in out

    def test_end_of_input_exits(self, service, capsys):
        assert run_menu(service, TextPathRenderer(), 10, input_fn=scripted("1")) == 0

        assert "Goodbye." in capsys.readouterr().out


class TestConfigurationErrors:
    def test_invalid_fare_settings_exit_cleanly(self, monkeypatch, capsys):
        monkeypatch.setenv("METRO_FARE_MAX_FARE", "1")

        code = main(["transfers"])

        assert code == 1
        assert "max_fare 1.0 is below the last tier price 8.0" in capsys.readouterr().err

    def test_error_while_wiring_services_exits_cleanly(self, monkeypatch, capsys):
        def broken_service():
            raise ConfigurationError("Bad fare schedule", setting_name="tiers")

        container = Container()
        container.register(MetroQueryService, broken_service)
        monkeypatch.setattr(cli, "build_container", lambda args: container)

        code = main(["transfers"])

        assert code == 1
        assert capsys.readouterr().err.strip() == "Error: Bad fare schedule"
