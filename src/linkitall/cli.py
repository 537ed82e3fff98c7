"""CLI for linkitall."""

import argparse
import sys
from pathlib import Path

import yaml

from .assets import copy_assets
from .errors import InputError
from .graph import load_graph
from .layout import Layout, render_network
from .serve import DEFAULT_LISTEN, parse_listen_address, read_update_loop, start_file_server
from .visualize import (
    format_level_map,
    generate_html,
    generate_json,
    generate_summary,
    layout_graph,
)

DEFAULT_GRAPH_FILE = "graph.yaml"
DEFAULT_OUT_FILE = "index.html"


def load_config(config_path: Path) -> dict:
    """Load CLI defaults from a YAML file.

    Args:
        config_path: Path to the YAML config file.

    Returns:
        Dictionary of configuration values.
    """
    with open(config_path) as f:
        return yaml.safe_load(f) or {}


def add_common_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments shared between subcommands."""
    parser.add_argument(
        "-i",
        "--indir",
        type=str,
        help="Input directory holding the graph file; outputs are written here too "
        "('?' to type it in)",
    )
    parser.add_argument(
        "-g",
        "--graph",
        type=str,
        help=f"Graph definition base filename (default: {DEFAULT_GRAPH_FILE})",
    )
    parser.add_argument("--config", type=Path, help="Path to YAML config file")


def add_output_args(parser: argparse.ArgumentParser) -> None:
    """Add arguments for subcommands that write the page."""
    parser.add_argument(
        "-o",
        "--out",
        type=str,
        help=f"Output HTML base filename (default: {DEFAULT_OUT_FILE})",
    )
    parser.add_argument("--overwrite", action="store_true", help="Overwrite asset files")
    parser.add_argument(
        "--network",
        action="store_true",
        help="Also write an interactive network view (network.html)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Also write layout.json and summary.txt",
    )


def resolve_common_args(args: argparse.Namespace, parser: argparse.ArgumentParser) -> None:
    """Resolve common arguments: load config, validate, and resolve paths."""
    if args.config:
        config = load_config(args.config)
        if not args.indir and "indir" in config:
            args.indir = str(config["indir"])
        if not args.graph and "graph" in config:
            args.graph = str(config["graph"])
        if hasattr(args, "out") and not args.out and "out" in config:
            args.out = str(config["out"])
        if hasattr(args, "listen") and not args.listen and "listen" in config:
            args.listen = str(config["listen"])

    if not args.indir:
        parser.error("--indir is required")
    if args.indir == "?":
        args.indir = input("Enter input directory => ").strip()

    indir = Path(args.indir)
    if not indir.is_dir():
        parser.error(f"input dir not accessible: {args.indir}")
    args.indir = indir.resolve()

    args.graph = args.indir / (args.graph or DEFAULT_GRAPH_FILE)
    if not args.graph.is_file():
        parser.error(f"unable to find graph file: {args.graph}")
    if hasattr(args, "out"):
        args.out = args.indir / (args.out or DEFAULT_OUT_FILE)
    if hasattr(args, "listen"):
        args.listen = args.listen or DEFAULT_LISTEN
        try:
            parse_listen_address(args.listen)
        except ValueError as err:
            parser.error(str(err))


def process_graph(args: argparse.Namespace) -> Layout:
    """Load the graph, lay it out and write every requested output."""
    print(f"Reading graph: {args.graph}")
    definition = load_graph(args.graph)

    print("Preparing nodes")
    layout = layout_graph(definition)
    print(f"Number of nodes: {len(layout.nodes)}")
    print(f"Number of levels: {len(layout.level_map)}")

    generate_html(definition, layout, args.out)
    print(f"Wrote {args.out.name}")

    if args.network:
        network_file = args.indir / "network.html"
        render_network(layout.nodes, network_file, definition.display.node_box_width_px)
        print(f"Wrote {network_file.name}")

    if args.json:
        generate_json(layout, args.indir / "layout.json")
        generate_summary(definition, layout, args.indir / "summary.txt")
        print("Wrote layout.json and summary.txt")

    return layout


def process_and_report(args: argparse.Namespace) -> int:
    """Run process_graph, printing input errors instead of raising them.

    Layout faults are not caught: they point at a bug, not at the input.
    """
    try:
        process_graph(args)
    except InputError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1
    print("Done")
    return 0


def cmd_build(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Generate the page once."""
    resolve_common_args(args, parser)
    copy_assets(args.indir, args.overwrite)
    return process_and_report(args)


def cmd_serve(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Generate the page, serve the directory and rebuild on request."""
    resolve_common_args(args, parser)
    copy_assets(args.indir, args.overwrite)
    process_and_report(args)

    server = start_file_server(args.indir, args.listen)
    try:
        read_update_loop(lambda: process_and_report(args))
    finally:
        server.shutdown()
        server.server_close()
    return 0


def cmd_levels(args: argparse.Namespace, parser: argparse.ArgumentParser) -> int:
    """Print the level map of the graph without writing anything."""
    resolve_common_args(args, parser)
    try:
        layout = layout_graph(load_graph(args.graph))
    except InputError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1

    print(f"{len(layout.nodes)} nodes in {len(layout.level_map)} levels ({layout.strategy.value}):")
    for line in format_level_map(layout):
        print(line)
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for linkitall CLI."""
    parser = argparse.ArgumentParser(
        description="Turn a YAML dependency graph into a box-and-line HTML diagram"
    )
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser("build", help="Generate the HTML page")
    add_common_args(build_parser)
    add_output_args(build_parser)

    serve_parser = subparsers.add_parser(
        "serve",
        help="Generate the page, serve it and regenerate on request",
    )
    add_common_args(serve_parser)
    add_output_args(serve_parser)
    serve_parser.add_argument(
        "-l",
        "--listen",
        type=str,
        help=f"Listen address in serve mode (default: {DEFAULT_LISTEN})",
    )

    levels_parser = subparsers.add_parser("levels", help="Print the level map of the graph")
    add_common_args(levels_parser)

    args = parser.parse_args(argv)

    commands = {
        "build": (cmd_build, build_parser),
        "serve": (cmd_serve, serve_parser),
        "levels": (cmd_levels, levels_parser),
    }
    if args.command not in commands:
        # No subcommand provided - show help
        parser.print_help()
        return 1

    func, sub_parser = commands[args.command]
    try:
        return func(args, sub_parser)
    except OSError as err:
        print(f"Error: {err}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
