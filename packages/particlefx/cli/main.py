"""Command-line interface for particlefx curve files.

A curve file is a JSON or YAML object:

    {"points": [{"x": 0, "y": 0, "t_x": 1, "t_y": 0}, ...], "spread": 0.0}
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys

from rich.console import Console
from rich.table import Table

from particlefx.core.config.loader import load_config, load_editor_config
from particlefx.core.curves.codec import decode_document
from particlefx.core.curves.sampling import sample_value_spread
from particlefx.core.curves.value_spread import ValueSpread
from particlefx.core.utils.json import write_json
from particlefx.core.utils.logging import configure_logging

console = Console()
logger = logging.getLogger(__name__)


def load_curve_file(path: Path) -> ValueSpread:
    """Read and decode a curve file.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the file cannot be parsed
        MalformedCurveData: If the points or the spread are invalid
    """
    return decode_document(load_config(path))


def sample_curve(args: argparse.Namespace) -> int:
    """Print evaluated values of a curve file."""
    path = Path(args.file).resolve()
    try:
        value_spread = load_curve_file(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]ERROR: {e}[/red]")
        return 1

    xs, ys = sample_value_spread(value_spread, args.samples)
    table = Table(title=f"{path.name} ({'animated' if value_spread.animated else 'constant'})")
    table.add_column("x", justify="right")
    table.add_column("value", justify="right")
    if value_spread.spread:
        table.add_column("range", justify="right")
    for x, y in zip(xs.tolist(), ys.tolist(), strict=True):
        row = [f"{x:.4f}", f"{y:.6g}"]
        if value_spread.spread:
            row.append(f"{y - value_spread.spread:.6g} .. {y + value_spread.spread:.6g}")
        table.add_row(*row)
    console.print(table)

    if args.output:
        write_json(
            args.output,
            {
                "file": path,
                "animated": value_spread.animated,
                "spread": value_spread.spread,
                "x": xs,
                "y": ys,
            },
        )
        logger.info("Wrote %d samples to %s", len(xs), args.output)
    return 0


def validate_curve(args: argparse.Namespace) -> int:
    """Check that a curve file decodes."""
    path = Path(args.file).resolve()
    try:
        value_spread = load_curve_file(path)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]✗ {path.name}: {e}[/red]")
        return 1

    kind = "animated" if value_spread.animated else "constant"
    console.print(
        f"[green]✓ {path.name}: {kind}, {value_spread.curve.count()} points, "
        f"spread {value_spread.spread:g}[/green]"
    )
    return 0


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="particlefx",
        description="particlefx - inspect animated particle property curves",
    )
    p.add_argument("--config", default=None, help="Path to editor config (JSON/YAML)")
    p.add_argument("--log-json", action="store_true", help="Write logs as structured JSON lines")
    sub = p.add_subparsers(dest="cmd", required=True)

    sample = sub.add_parser("sample", help="Print curve values on a uniform grid")
    sample.add_argument("file", help="Path to curve file (JSON/YAML)")
    sample.add_argument("--samples", type=int, default=11, help="Number of samples (default: 11)")
    sample.add_argument("--output", default=None, help="Also write the samples to a JSON file")

    validate = sub.add_parser("validate", help="Check that a curve file decodes")
    validate.add_argument("file", help="Path to curve file (JSON/YAML)")

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)

    config = load_editor_config(args.config)
    configure_logging(level=config.log_level, structured=args.log_json)

    if args.cmd == "sample":
        if args.samples < 2:
            p.error("--samples must be >= 2")
        return sample_curve(args)
    if args.cmd == "validate":
        return validate_curve(args)
    return 1


if __name__ == "__main__":
    sys.exit(main())
