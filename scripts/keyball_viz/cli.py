"""Command-line interface for drawing keymaps."""

import argparse
import logging
import sys
from pathlib import Path

import yaml

from .config import Config, dump_config, load_config
from .errors import KeymapError, StructureError
from .keymap import Keymap, parse_keymap
from .layout import LAYOUTS, PhysicalLayout, get_layout, load_layout
from .stats import compute_stats, format_stats, stats_to_dict
from .svg.renderer import render_svg

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be 0 or more, got {number}")
    return number


def _add_keymap_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "keymap_file",
        type=Path,
        help="Path to the keymap.c file",
    )
    layout_group = parser.add_mutually_exclusive_group()
    layout_group.add_argument(
        "--layout",
        choices=sorted(LAYOUTS),
        help="Built-in physical layout (default: from config, else keyball44)",
    )
    layout_group.add_argument(
        "--layout-file",
        type=Path,
        help="YAML file with a custom physical layout table",
    )
    parser.add_argument(
        "-l", "--layer-names",
        nargs="+",
        help="Display names for the layers, in index order",
    )


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser with subcommands."""
    parser = argparse.ArgumentParser(
        prog="keyball_viz",
        description="Draw QMK keymap.c layers as an SVG diagram",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        help="YAML config with draw settings, colors and label overrides",
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    # --- draw subcommand ---
    draw_parser = subparsers.add_parser(
        "draw",
        help="Render all layers to an SVG file",
    )
    _add_keymap_args(draw_parser)
    draw_parser.add_argument(
        "-o", "--output-file",
        type=Path,
        help="Output SVG file (default: <keymap name>.svg in the current directory)",
    )
    draw_parser.add_argument(
        "-s", "--show-stats",
        action="store_true",
        help="Also print statistics about the keymap",
    )

    # --- stats subcommand ---
    stats_parser = subparsers.add_parser(
        "stats",
        help="Print keycode usage and per-layer statistics",
    )
    _add_keymap_args(stats_parser)
    stats_parser.add_argument(
        "--format",
        choices=("text", "yaml"),
        default="text",
        help="Output format (default: text)",
    )
    stats_parser.add_argument(
        "--top",
        type=_non_negative_int,
        default=None,
        help="Only list the N most used keycodes",
    )

    # --- dump-config subcommand ---
    subparsers.add_parser(
        "dump-config",
        help="Print the active configuration as YAML",
    )

    return parser


def resolve_layout(args: argparse.Namespace, config: Config) -> PhysicalLayout:
    """Pick the physical layout: CLI options first, then the config file."""
    if args.layout_file:
        return load_layout(args.layout_file)
    if args.layout:
        return get_layout(args.layout)
    if config.layout_file:
        return load_layout(config.layout_file)
    return get_layout(config.layout)


def load_keymap(args: argparse.Namespace, config: Config) -> Keymap:
    """Read and parse the keymap named on the command line."""
    layout = resolve_layout(args, config)
    logger.debug("using layout %s with %d slots", layout.name, layout.slot_count())
    try:
        text = args.keymap_file.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise StructureError(f"{args.keymap_file} is not valid UTF-8 (byte {e.start})") from e
    return parse_keymap(text, layout, layer_names=args.layer_names or config.layer_names)


def default_output_path(keymap_file: Path) -> Path:
    """Return ``<stem>.svg`` in the current directory."""
    return Path(f"{keymap_file.stem}.svg")


def cmd_draw(args: argparse.Namespace, config: Config) -> int:
    """Execute draw subcommand."""
    keymap = load_keymap(args, config)

    if args.show_stats:
        print(format_stats(compute_stats(keymap)))

    # Render fully before touching the output file
    svg = render_svg(keymap, config)
    output = args.output_file or default_output_path(args.keymap_file)
    output.write_text(svg, encoding="utf-8")

    print(f"Keymap with {len(keymap)} layers written to {output}")
    return 0


def cmd_stats(args: argparse.Namespace, config: Config) -> int:
    """Execute stats subcommand."""
    stats = compute_stats(load_keymap(args, config))

    if args.format == "yaml":
        yaml.safe_dump(
            stats_to_dict(stats, args.top), sys.stdout, sort_keys=False, allow_unicode=True
        )
    else:
        print(format_stats(stats, args.top))
    return 0


def cmd_dump_config(args: argparse.Namespace, config: Config) -> int:
    """Execute dump-config subcommand."""
    sys.stdout.write(dump_config(config))
    return 0


COMMANDS = {
    "draw": cmd_draw,
    "stats": cmd_stats,
    "dump-config": cmd_dump_config,
}


def run(argv: list[str] | None = None) -> int:
    """Parse arguments, run the selected subcommand and return its exit code."""
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING, format="%(levelname)s: %(message)s")

    try:
        config = load_config(args.config)
        return COMMANDS[args.command](args, config)
    except KeymapError as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
    except OSError as e:
        print(f"Error: {e.strerror or e}: {e.filename}", file=sys.stderr)
    except (ValueError, yaml.YAMLError) as e:
        print(f"Error: invalid configuration: {e}", file=sys.stderr)
    return 1


def main() -> None:
    """Main CLI entry point."""
    sys.exit(run())


if __name__ == "__main__":
    main()
