"""Command line harness: compose generation operations and print the map.

Operations run in the order they appear on the command line, e.g.

    python -m procmap --width 40 --height 10 --seed 0 \\
        --perlin 0.33,0.66 --scatter 3:6

    python -m procmap --preset dungeon --width 60 --height 30
"""

from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from typing import Any

from . import config, render
from .generation import NoiseOptions, SizeRange, banded, create_pipeline
from .generator import Generator

logger = logging.getLogger(__name__)

PRESETS = ("biomes", "dungeon", "islands")


class _StepAction(argparse.Action):
    """Append (operation, parsed value) to namespace.steps, keeping CLI order."""

    def __call__(
        self,
        parser: argparse.ArgumentParser,
        namespace: argparse.Namespace,
        values: Any,
        option_string: str | None = None,
    ) -> None:
        steps = list(getattr(namespace, "steps", None) or [])
        steps.append((self.dest, values))
        namespace.steps = steps


def _ints(text: str, sep: str, count: int, what: str) -> list[int]:
    parts = text.split(sep)
    if len(parts) != count:
        raise argparse.ArgumentTypeError(f"expected {what}, got {text!r}")
    try:
        return [int(part) for part in parts]
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected {what}, got {text!r}") from None


def parse_terrain(text: str) -> tuple[int, int]:
    label, iterations = _ints(text, ":", 2, "LABEL:ITERATIONS")
    return label, iterations


def parse_scatter(text: str) -> tuple[int, int]:
    label, count = _ints(text, ":", 2, "LABEL:COUNT")
    return label, count


def parse_rooms(text: str) -> tuple[int, int, SizeRange, int]:
    """Parse MIN:MAX:WMIN-WMAX:HMIN-HMAX[:LABEL]."""
    fmt = "MIN:MAX:WMIN-WMAX:HMIN-HMAX[:LABEL]"
    parts = text.split(":")
    if len(parts) not in (4, 5):
        raise argparse.ArgumentTypeError(f"expected {fmt}, got {text!r}")
    min_count, max_count = _ints(":".join(parts[:2]), ":", 2, fmt)
    width_range = _ints(parts[2], "-", 2, fmt)
    height_range = _ints(parts[3], "-", 2, fmt)
    label = (
        _ints(parts[4], ":", 1, fmt)[0]
        if len(parts) == 5
        else config.DEFAULT_ROOM_LABEL
    )
    try:
        size = SizeRange(
            width_range=(width_range[0], width_range[1]),
            height_range=(height_range[0], height_range[1]),
        )
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from None
    return min_count, max_count, size, label


def parse_thresholds(text: str) -> list[float]:
    try:
        thresholds = [float(part) for part in text.split(",")]
        banded(thresholds)
    except ValueError as e:
        raise argparse.ArgumentTypeError(
            f"expected ascending comma-separated thresholds, got {text!r} ({e})"
        ) from None
    return thresholds


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procmap",
        description="Generate a procedural label map and print it.",
    )
    parser.add_argument("--width", type=int, default=config.CLI_DEFAULT_WIDTH)
    parser.add_argument("--height", type=int, default=config.CLI_DEFAULT_HEIGHT)
    parser.add_argument(
        "--seed",
        default=config.RANDOM_SEED,
        help="Master seed (any string); random when omitted",
    )
    parser.add_argument("--background", type=int, default=config.BACKGROUND_LABEL)
    parser.add_argument(
        "--preset",
        choices=PRESETS,
        help="Run a named pipeline instead of individual operations",
    )

    ops = parser.add_argument_group("operations (applied in command line order)")
    ops.add_argument(
        "--terrain",
        type=parse_terrain,
        action=_StepAction,
        metavar="LABEL:ITERATIONS",
    )
    ops.add_argument(
        "--rooms",
        type=parse_rooms,
        action=_StepAction,
        metavar="MIN:MAX:WMIN-WMAX:HMIN-HMAX[:LABEL]",
    )
    ops.add_argument(
        "--perlin",
        type=parse_thresholds,
        action=_StepAction,
        metavar="T1,T2,...",
        help="Quantize noise: label = number of thresholds the value exceeds",
    )
    ops.add_argument(
        "--scatter",
        type=parse_scatter,
        action=_StepAction,
        metavar="LABEL:COUNT",
    )

    noise = parser.add_argument_group("noise options")
    noise.add_argument("--frequency", type=float, default=config.NOISE_FREQUENCY)
    noise.add_argument("--octaves", type=int, default=config.NOISE_OCTAVES)
    noise.add_argument(
        "--redistribution", type=float, default=config.NOISE_REDISTRIBUTION
    )

    parser.add_argument(
        "--color",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Colour output (default: only when stdout is a terminal)",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    parser.set_defaults(steps=None)
    return parser


def run(args: argparse.Namespace) -> Generator:
    """Build a Generator from parsed arguments and apply every step."""
    options = NoiseOptions(
        frequency=args.frequency,
        redistribution=args.redistribution,
        octaves=args.octaves,
    )
    generator = Generator(
        args.width, args.height, background=args.background, seed=args.seed
    ).with_options(options)

    for name, value in args.steps or []:
        logger.debug(f"Applying {name} {value}")
        match name:
            case "terrain":
                generator.spawn_terrain(*value)
            case "rooms":
                min_count, max_count, size, label = value
                generator.spawn_rooms(min_count, max_count, size, label=label)
            case "perlin":
                generator.spawn_perlin(banded(value))
            case "scatter":
                generator.spawn_repeated(*value)
            case _:
                raise ValueError(f"Unknown operation: {name}")
    return generator


def main(argv: Sequence[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.preset and args.steps:
        parser.error("--preset cannot be combined with individual operations")

    color = sys.stdout.isatty() if args.color is None else args.color

    try:
        if args.preset:
            grid = create_pipeline(
                args.preset, args.width, args.height, seed=args.seed
            ).generate()
        else:
            grid = run(args).grid
    except ValueError as e:
        parser.error(str(e))

    print(render.render_ansi(grid) if color else render.render_plain(grid))
    return 0


if __name__ == "__main__":
    sys.exit(main())
