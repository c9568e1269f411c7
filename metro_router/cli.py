#!/usr/bin/env python3
"""Command-line front end for metro network queries.

Usage:
    # Transfer stations of the configured network
    python -m metro_router transfers

    # Stations within two hops of a station, on each of its lines
    python -m metro_router nearby 华中科技大学 --hops 2

    # Shortest route with a riding guide
    python -m metro_router route 光谷广场 中南路

    # Fares and ticket advice for a trip
    python -m metro_router fare 光谷广场 中南路

    # Interactive menu
    python -m metro_router menu

Every command accepts ``--data FILE`` and ``--format {timetable,csv}`` to
query a network other than the configured one.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional, Sequence

from pydantic import ValidationError

from .config import AppConfig, GraphConfig, configure_logging, get_config
from .container import Container, get_container
from .domain.errors import MetroError
from .ports.rendering import PathRendererPort
from .services import MetroQueryService

InputFn = Callable[[str], str]


def cmd_transfers(args: argparse.Namespace, service: MetroQueryService) -> int:
    """List every transfer station with the lines serving it."""
    stations = service.list_transfer_stations()
    print(f"{len(stations)} transfer stations:")
    for station in stations:
        print(f"  {station.name}: {', '.join(sorted(station.lines))}")
    return 0


def cmd_nearby(args: argparse.Namespace, service: MetroQueryService) -> int:
    found = service.within_hops(args.station, args.hops)
    print(f"Stations within {args.hops} stops of {args.station}:")
    for station in found:
        print(f"  {station.name}, {station.line}, {station.hops} stop(s)")
    return 0


def cmd_reachable(args: argparse.Namespace, service: MetroQueryService) -> int:
    found = service.within_distance(args.station, args.km)
    print(f"Stations within {args.km:g} km of {args.station}:")
    for station in found:
        print(f"  {station.name}, via {station.line}, {station.distance_km:.2f} km")
    return 0


def cmd_paths(
    args: argparse.Namespace,
    service: MetroQueryService,
    renderer: PathRendererPort,
) -> int:
    """Enumerate simple paths; ``--limit 0`` removes the bound."""
    limit = args.limit if args.limit > 0 else None
    paths = service.all_paths(args.start, args.end, limit=limit)
    bound = f" (first {limit})" if limit is not None else ""
    print(f"{len(paths)} path(s) from {args.start} to {args.end}{bound}:")
    for number, path in enumerate(paths, start=1):
        print(f"  {number}. {renderer.render_summary(path)}")
    return 0


def cmd_route(
    args: argparse.Namespace,
    service: MetroQueryService,
    renderer: PathRendererPort,
) -> int:
    path = service.shortest_path(args.start, args.end)
    print(f"Shortest route from {args.start} to {args.end}:")
    print(renderer.render(path))
    return 0


def cmd_fare(args: argparse.Namespace, service: MetroQueryService) -> int:
    plan = service.plan_journey(args.start, args.end)
    print(f"Fares from {args.start} to {args.end}:")
    print(f"  Distance:      {plan.fare.distance_km:.2f} km")
    print(f"  Transfers:     {plan.path.transfer_count}")
    print(f"  Single ticket: {plan.fare.regular:g}")
    print(f"  Card:          {plan.fare.card:g}")
    for code, price in plan.day_passes:
        print(f"  {code} pass:{' ' * max(1, 9 - len(code))}{price:g}")
    print(f"  Recommended:   {plan.recommendation}")
    return 0


def cmd_line(args: argparse.Namespace, service: MetroQueryService) -> int:
    stations = service.line_stations(args.line)
    print(f"{args.line} ({len(stations)} stations):")
    for station in stations:
        print(f"  {station}")
    return 0


MENU = """
===== Metro query menu =====
1. Transfer stations
2. Stations within N stops
3. Stations within a distance
4. All paths between two stations
5. Shortest route
6. Fares for a trip
7. Stations of a line
0. Exit"""


def run_menu(
    service: MetroQueryService,
    renderer: PathRendererPort,
    path_limit: int,
    input_fn: InputFn = input,
) -> int:
    """Interactive loop over the query commands.

    Query errors are printed and the loop continues; end of input exits.
    """
    while True:
        print(MENU)
        try:
            choice = input_fn("Choose (0-7): ").strip()
            if choice == "0":
                break

            args = argparse.Namespace()
            if choice == "1":
                cmd_transfers(args, service)
            elif choice == "2":
                args.station = input_fn("Station: ").strip()
                args.hops = int(input_fn("Stops: ").strip())
                cmd_nearby(args, service)
            elif choice == "3":
                args.station = input_fn("Station: ").strip()
                args.km = float(input_fn("Kilometers: ").strip())
                cmd_reachable(args, service)
            elif choice in {"4", "5", "6"}:
                args.start = input_fn("From: ").strip()
                args.end = input_fn("To: ").strip()
                if choice == "4":
                    args.limit = path_limit
                    cmd_paths(args, service, renderer)
                elif choice == "5":
                    cmd_route(args, service, renderer)
                else:
                    cmd_fare(args, service)
            elif choice == "7":
                args.line = input_fn("Line: ").strip()
                cmd_line(args, service)
            else:
                print("Unknown choice, try again.")
        except EOFError:
            break
        except ValueError as e:
            print(f"Invalid input: {e}")
        except MetroError as e:
            print(f"Error: {e}")

    print("Goodbye.")
    return 0


def build_container(args: argparse.Namespace) -> Container:
    """Container for the configured network, or for ``--data`` if given."""
    if args.data is None and args.format is None:
        return get_container()

    base = get_config()
    graph = base.graph
    if args.data is not None:
        data = Path(args.data)
        source = "csv" if data.suffix.lower() == ".csv" else graph.source
        graph = GraphConfig(data_dir=data.parent, data_file=data.name, source=source)
    if args.format is not None:
        graph = GraphConfig(
            data_dir=graph.data_dir, data_file=graph.data_file, source=args.format
        )
    config = AppConfig(
        graph=graph,
        fares=base.fares,
        search=base.search,
        observability=base.observability,
    )
    return Container.create_default(config)


def build_parser(config: AppConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="metro-router",
        description="Transfer, neighbor, route and fare queries over a metro network",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--data", help="Network data file (defaults to configuration)")
    parser.add_argument(
        "--format",
        choices=("timetable", "csv"),
        help="Format of the data file (defaults to configuration)",
    )

    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    subparsers.add_parser("transfers", help="List transfer stations")

    nearby = subparsers.add_parser("nearby", help="Stations within N stops on the same line")
    nearby.add_argument("station")
    nearby.add_argument("--hops", type=int, default=config.search.default_hops)

    reachable = subparsers.add_parser("reachable", help="Stations within a distance")
    reachable.add_argument("station")
    reachable.add_argument("--km", type=float, default=config.search.default_radius_km)

    paths = subparsers.add_parser(
        "paths",
        help="Enumerate simple paths between two stations",
        description="Enumerate simple paths. The number of paths grows "
        "exponentially with network size; --limit 0 removes the bound.",
    )
    paths.add_argument("start")
    paths.add_argument("end")
    paths.add_argument("--limit", type=int, default=config.search.path_limit)

    route = subparsers.add_parser("route", help="Shortest route with a riding guide")
    route.add_argument("start")
    route.add_argument("end")

    fare = subparsers.add_parser("fare", help="Fares and ticket advice for a trip")
    fare.add_argument("start")
    fare.add_argument("end")

    line = subparsers.add_parser("line", help="Stations of a line")
    line.add_argument("line")

    subparsers.add_parser("menu", help="Interactive menu")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for the CLI tool.

    Returns:
        Exit code (0 for success, 1 for a query or data error)
    """
    try:
        config = get_config()
    except ValidationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1
    configure_logging(config.observability)

    parser = build_parser(config)
    args = parser.parse_args(argv)
    if not args.command:
        parser.print_help()
        return 1

    try:
        container = build_container(args)
        service: MetroQueryService = container.resolve(MetroQueryService)
        renderer: PathRendererPort = container.resolve(PathRendererPort)

        commands: dict[str, Callable[[], int]] = {
            "transfers": lambda: cmd_transfers(args, service),
            "nearby": lambda: cmd_nearby(args, service),
            "reachable": lambda: cmd_reachable(args, service),
            "paths": lambda: cmd_paths(args, service, renderer),
            "route": lambda: cmd_route(args, service, renderer),
            "fare": lambda: cmd_fare(args, service),
            "line": lambda: cmd_line(args, service),
            "menu": lambda: run_menu(service, renderer, config.search.path_limit),
        }
        return commands[args.command]()
    except (MetroError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
