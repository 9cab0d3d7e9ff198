#!/usr/bin/env python3
"""fern_generator.py

A procedural fractal fern generator that renders to SVG.

A fern is grown from one root tendril: a chain of shrinking, gently turning
line segments. Every segment sprouts two child tendrils, and every tendril
ends in a small triangle once its segments get too short.

Key features:
- Depth-first generation driven by an explicit work stack (no recursion limit).
- Seeded randomness for reproducible ferns.
- Draw budget checked before anything is drawn.
- Pluggable canvas; ships an SVG canvas with a sky/ground backdrop.
- JSON-based input configuration and a random config generator.

Run:
  python fern_generator.py draw fern.svg --size 40 --reduction 0.8 --seed 7
  python fern_generator.py render config.json output.svg
  python fern_generator.py random out.json --seed 123
  python fern_generator.py --help
"""

from __future__ import annotations

import argparse
import json
import math
import os
import random
import sys
from collections.abc import Generator, Iterator, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, Union, cast

Point = tuple[int, int]
RGB = tuple[int, int, int]

# Segments at or below this size end the tendril with a triangle.
TENDRIL_MIN = 3
# Child tendrils start at size / BRANCH_DECAY.
BRANCH_DECAY = 2.5
BRANCH_ANGLE = 1.3
DIRECTION_JITTER = 1 / 16
LENGTH_JITTER = (0.8, 1.2)
STEM_FACTOR = 0.5
TRIANGLE_FILL: RGB = (100, 220, 0)

DEFAULT_MAX_DRAW_CALLS = 100_000


# -------------------------
# Errors / Validation
# -------------------------


class ConfigError(ValueError):
    pass


class InvalidParameter(ConfigError):
    """A generation parameter is outside the range the algorithm accepts."""


def _require(cond: bool, msg: str) -> None:
    if not cond:
        raise ConfigError(msg)


def _require_param(cond: bool, msg: str) -> None:
    if not cond:
        raise InvalidParameter(msg)


def _as_float(x: Any, path: str) -> float:
    _require(
        isinstance(x, (int, float)) and not isinstance(x, bool),
        f"{path} must be a number",
    )
    return float(x)


def _as_int(x: Any, path: str) -> int:
    _require(
        isinstance(x, int) and not isinstance(x, bool), f"{path} must be an integer"
    )
    return int(x)


def _as_str(x: Any, path: str) -> str:
    _require(isinstance(x, str), f"{path} must be a string")
    return cast(str, x)


def _as_bool(x: Any, path: str) -> bool:
    _require(isinstance(x, bool), f"{path} must be a boolean")
    return cast(bool, x)


def _as_dict(x: Any, path: str) -> dict[str, Any]:
    _require(isinstance(x, dict), f"{path} must be an object")
    return cast(dict[str, Any], x)


def _as_color(x: Any, path: str) -> RGB:
    s = _as_str(x, path)
    _require(
        len(s) == 7
        and s[0] == "#"
        and all(c in "0123456789abcdefABCDEF" for c in s[1:]),
        f"{path} must be a color of the form '#rrggbb'",
    )
    return (int(s[1:3], 16), int(s[3:5], 16), int(s[5:7], 16))


# -------------------------
# Fern model
# -------------------------


@dataclass(frozen=True)
class FernParams:
    primary_size: float
    reduction: float
    turn_bias: float
    # Half-width (radians) of the random tilt added to child tendrils.
    branch_jitter: float = 0.0


@dataclass(frozen=True)
class TendrilTask:
    origin: Point
    size: float
    turn_bias: float
    direction: float


@dataclass(frozen=True)
class Segment:
    p1: Point
    p2: Point
    color: RGB
    thickness: float


@dataclass(frozen=True)
class Triangle:
    v1: Point
    v2: Point
    v3: Point
    fill: RGB = TRIANGLE_FILL

    @property
    def points(self) -> tuple[Point, Point, Point]:
        return (self.v1, self.v2, self.v3)


DrawOp = Union[Segment, Triangle]


class Canvas(Protocol):
    """Anything that accepts fern draw primitives."""

    width: float
    height: float

    def clear(self) -> None: ...

    def draw_line(self, p1: Point, p2: Point, color: RGB, thickness: float) -> None: ...

    def draw_filled_polygon(self, points: Sequence[Point], fill: RGB) -> None: ...


def validate_params(params: FernParams) -> None:
    _require_param(
        math.isfinite(params.primary_size) and params.primary_size > 0,
        f"primary size must be > 0, got {params.primary_size!r}",
    )
    # Written so that NaN fails too.
    _require_param(
        0 < params.reduction < 1,
        f"reduction must be strictly between 0 and 1, got {params.reduction!r}",
    )
    _require_param(
        math.isfinite(params.turn_bias),
        f"turn bias must be finite, got {params.turn_bias!r}",
    )
    _require_param(
        math.isfinite(params.branch_jitter) and params.branch_jitter >= 0,
        f"branch jitter must be >= 0, got {params.branch_jitter!r}",
    )


def _validate_canvas_size(width: float, height: float) -> None:
    for label, value in (("width", width), ("height", height)):
        _require_param(
            math.isfinite(value) and value >= 0,
            f"canvas {label} must be >= 0, got {value!r}",
        )


# -------------------------
# Tendril generation
# -------------------------


def _sign(x: float) -> int:
    return (x > 0) - (x < 0)


def _clamp_byte(value: float) -> int:
    return max(0, min(255, int(value)))


def segment_color(size: float) -> RGB:
    """Longer segments are redder and darker; colors saturate at byte range."""
    return (_clamp_byte(100 + size / 2), _clamp_byte(220 - size / 3), 0)


def segment_thickness(size: float) -> float:
    return 1 + size / 40


def terminal_triangle(apex: Point, size: float, direction: float) -> Triangle:
    """Triangle capping a tendril: a base of width 2*size across the apex and a
    tip 2*size further along ``direction``."""
    x, y = apex
    right = direction - math.pi / 2
    left = direction + math.pi / 2
    v1 = (x + int(size * math.sin(right)), y + int(size * math.cos(right)))
    v2 = (x + int(size * math.sin(left)), y + int(size * math.cos(left)))
    v3 = (
        x + int(2 * size * math.sin(direction)),
        y + int(2 * size * math.cos(direction)),
    )
    return Triangle(v1, v2, v3, TRIANGLE_FILL)


def emit_segment(
    segment: Segment, *, size: float, turn_bias: float, direction: float
) -> Generator[DrawOp | TendrilTask, None, None]:
    """Yield the segment, then the two child tendrils sprouting from its end.

    Children fan out to either side of ``direction``; the second child turns
    against the first by carrying the opposite bias.
    """
    yield segment
    child_size = size / BRANCH_DECAY
    turn = _sign(turn_bias) * BRANCH_ANGLE
    yield TendrilTask(segment.p2, child_size, turn_bias, direction + turn)
    yield TendrilTask(segment.p2, child_size, -turn_bias, direction - turn)


def tendril(
    task: TendrilTask,
    *,
    reduction: float,
    rng: random.Random,
    branch_jitter: float = 0.0,
) -> Generator[DrawOp | TendrilTask, None, None]:
    """Grow one tendril.

    Yields segments (each followed by its two child tasks) while the segment
    size is above TENDRIL_MIN, then exactly one terminal triangle. Child tasks
    are yielded, not run; the caller decides how to schedule them.
    """
    x, y = task.origin
    size = task.size
    direction = task.direction
    stem_factor = STEM_FACTOR

    while size > TENDRIL_MIN:
        direction -= task.turn_bias / size + rng.uniform(
            -DIRECTION_JITTER, DIRECTION_JITTER
        )
        length = size * stem_factor * rng.uniform(*LENGTH_JITTER)
        nx = x + int(length * math.sin(direction))
        ny = y + int(length * math.cos(direction))

        branch_direction = direction
        if branch_jitter > 0:
            branch_direction += rng.uniform(-branch_jitter, branch_jitter)

        segment = Segment(
            (x, y), (nx, ny), segment_color(size), segment_thickness(size)
        )
        yield from emit_segment(
            segment, size=size, turn_bias=task.turn_bias, direction=branch_direction
        )

        x, y = nx, ny
        stem_factor = 1.0
        size *= reduction

    yield terminal_triangle((x, y), size, direction)


def walk_tendrils(
    root: TendrilTask,
    *,
    reduction: float,
    rng: random.Random,
    branch_jitter: float = 0.0,
) -> Generator[DrawOp, None, None]:
    """Yield every draw op of the tree rooted at ``root`` in depth-first order.

    Uses an explicit stack of suspended tendrils. A child task is expanded as
    soon as it is yielded, so its whole subtree is drawn before its parent
    resumes.
    """
    stack: list[Iterator[DrawOp | TendrilTask]] = [
        tendril(root, reduction=reduction, rng=rng, branch_jitter=branch_jitter)
    ]

    while stack:
        item = next(stack[-1], None)
        if item is None:
            stack.pop()
        elif isinstance(item, TendrilTask):
            stack.append(
                tendril(item, reduction=reduction, rng=rng, branch_jitter=branch_jitter)
            )
        else:
            yield item


def count_draw_calls(primary_size: float, reduction: float, limit: int) -> int:
    """Count the draw calls a fern of these parameters issues.

    Segment sizes never depend on the random draws, so the count is exact.
    Counting stops as soon as it exceeds ``limit``, so an over-limit fern
    returns exactly ``limit + 1``.
    """
    count = 0
    stack: list[float] = [primary_size]

    while stack:
        size = stack.pop()
        count += 1  # terminal triangle
        if count > limit:
            return count
        while size > TENDRIL_MIN:
            count += 1
            if count > limit:
                return count
            child_size = size / BRANCH_DECAY
            stack.append(child_size)
            stack.append(child_size)
            size *= reduction
    return count


def start_task(params: FernParams, width: float, height: float) -> TendrilTask:
    """Root tendril: bottom center of the canvas, pointing up (toward -y)."""
    return TendrilTask(
        (int(width / 2), int(height * 0.9)),
        params.primary_size,
        params.turn_bias,
        math.pi,
    )


def fern_draw_ops(
    params: FernParams, width: float, height: float, rng: random.Random
) -> Generator[DrawOp, None, None]:
    return walk_tendrils(
        start_task(params, width, height),
        reduction=params.reduction,
        rng=rng,
        branch_jitter=params.branch_jitter,
    )


def generate(
    params: FernParams,
    canvas: Canvas,
    *,
    rng: random.Random | None = None,
    max_draw_calls: int = DEFAULT_MAX_DRAW_CALLS,
) -> int:
    """Clear ``canvas`` and draw a fern on it. Returns the number of draw calls.

    All validation happens before the canvas is touched, so on error nothing
    is cleared or drawn.
    """
    validate_params(params)
    width, height = canvas.width, canvas.height
    _validate_canvas_size(width, height)
    _require_param(max_draw_calls > 0, "max_draw_calls must be > 0")

    expected = count_draw_calls(params.primary_size, params.reduction, max_draw_calls)
    _require_param(
        expected <= max_draw_calls,
        f"fern would need more than {max_draw_calls} draw calls; "
        "lower the size or the reduction factor",
    )

    if rng is None:
        rng = random.Random()

    canvas.clear()
    calls = 0
    for op in fern_draw_ops(params, width, height, rng):
        if isinstance(op, Segment):
            canvas.draw_line(op.p1, op.p2, op.color, op.thickness)
        else:
            canvas.draw_filled_polygon(op.points, op.fill)
        calls += 1
    return calls


# -------------------------
# SVG canvas
# -------------------------


@dataclass(frozen=True)
class Scenery:
    """Ground fills the canvas; sky covers it from the top down to ``horizon``."""

    sky: RGB = (185, 210, 255)
    ground: RGB = (10, 100, 35)
    horizon: float = 0.85


DEFAULT_SCENERY = Scenery()


def _ensure_parent_dir(path: str) -> None:
    os.makedirs(os.path.dirname(os.path.abspath(path)) or ".", exist_ok=True)


def _fmt(x: float, precision: int) -> str:
    # Normalise -0.0 so it never produces "-0" in SVG output.
    if not x:
        x = 0.0
    # Strip trailing zeros for nicer SVG.
    s = f"{x:.{precision}f}"
    if "." in s:
        s = s.rstrip("0").rstrip(".")
    return s or "0"


def _hex(color: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*color)


def _escape(text: str) -> str:
    return text.replace("&", "&amp;").replace("<", "&lt;").replace(">", "&gt;")


class SvgCanvas:
    """Canvas that records primitives as SVG elements."""

    def __init__(
        self,
        width: float,
        height: float,
        *,
        scenery: Scenery | None = DEFAULT_SCENERY,
        precision: int = 3,
    ) -> None:
        _require(width > 0 and height > 0, "SVG canvas width and height must be > 0")
        _require(0 <= precision <= 10, "svg.precision must be between 0 and 10")
        self.width = width
        self.height = height
        self.scenery = scenery
        self.precision = precision
        self.elements: list[str] = []

    def clear(self) -> None:
        # Scenery is part of the canvas, not of what is drawn on it.
        self.elements.clear()

    def draw_line(self, p1: Point, p2: Point, color: RGB, thickness: float) -> None:
        self.elements.append(
            f'<line x1="{p1[0]}" y1="{p1[1]}" x2="{p2[0]}" y2="{p2[1]}" '
            f'stroke="{_hex(color)}" '
            f'stroke-width="{_fmt(thickness, self.precision)}" '
            'stroke-linecap="round" />'
        )

    def draw_filled_polygon(self, points: Sequence[Point], fill: RGB) -> None:
        _require(len(points) >= 3, "a polygon needs at least 3 points")
        pts = " ".join(f"{x},{y}" for x, y in points)
        self.elements.append(f'<polygon points="{pts}" fill="{_hex(fill)}" />')

    def to_svg(self, title: str | None = None) -> str:
        w = _fmt(self.width, self.precision)
        h = _fmt(self.height, self.precision)

        lines: list[str] = []
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
        lines.append(
            "<svg xmlns=\"http://www.w3.org/2000/svg\" version=\"1.1\" "
            f"viewBox=\"0 0 {w} {h}\" width=\"{w}\" height=\"{h}\">"
        )

        if title:
            lines.append(f"  <title>{_escape(title)}</title>")

        if self.scenery is not None:
            sky_h = _fmt(self.height * self.scenery.horizon, self.precision)
            lines.append(
                f'  <rect x="0" y="0" width="{w}" height="{h}" '
                f'fill="{_hex(self.scenery.ground)}" />'
            )
            lines.append(
                f'  <rect x="0" y="0" width="{w}" height="{sky_h}" '
                f'fill="{_hex(self.scenery.sky)}" />'
            )

        for element in self.elements:
            lines.append(f"  {element}")

        lines.append("</svg>")
        return "\n".join(lines) + "\n"

    def write(self, out_path: str, *, title: str | None = None) -> None:
        _ensure_parent_dir(out_path)
        with open(out_path, "w", encoding="utf-8") as f:
            f.write(self.to_svg(title))


# -------------------------
# Config parsing
# -------------------------


@dataclass(frozen=True)
class RenderConfig:
    name: str
    seed: int | None
    max_draw_calls: int

    params: FernParams

    # canvas / svg
    width: float
    height: float
    precision: int
    scenery: Scenery | None


def parse_config(obj: dict[str, Any]) -> RenderConfig:
    obj = _as_dict(obj, "root")

    name = _as_str(obj.get("name", "Fern"), "name")

    seed = obj.get("seed")
    if seed is not None:
        seed = _as_int(seed, "seed")

    max_draw_calls = _as_int(
        obj.get("max_draw_calls", DEFAULT_MAX_DRAW_CALLS), "max_draw_calls"
    )
    _require(max_draw_calls > 0, "max_draw_calls must be > 0")

    fern = _as_dict(obj.get("fern", {}), "fern")
    params = FernParams(
        primary_size=_as_float(fern.get("size", 40), "fern.size"),
        reduction=_as_float(fern.get("reduction", 0.8), "fern.reduction"),
        turn_bias=_as_float(fern.get("turn_bias", 0.3), "fern.turn_bias"),
        branch_jitter=_as_float(fern.get("branch_jitter", 0.0), "fern.branch_jitter"),
    )
    validate_params(params)

    canvas = _as_dict(obj.get("canvas", {}), "canvas")
    width = _as_float(canvas.get("width", 800), "canvas.width")
    height = _as_float(canvas.get("height", 600), "canvas.height")
    _require(width > 0, "canvas.width must be > 0")
    _require(height > 0, "canvas.height must be > 0")

    svg = _as_dict(obj.get("svg", {}), "svg")
    precision = _as_int(svg.get("precision", 3), "svg.precision")
    _require(0 <= precision <= 10, "svg.precision must be between 0 and 10")

    scenery: Scenery | None = None
    if _as_bool(svg.get("background", True), "svg.background"):
        horizon = _as_float(svg.get("horizon", DEFAULT_SCENERY.horizon), "svg.horizon")
        _require(0 <= horizon <= 1, "svg.horizon must be between 0 and 1")
        scenery = Scenery(
            sky=_as_color(svg.get("sky", _hex(DEFAULT_SCENERY.sky)), "svg.sky"),
            ground=_as_color(
                svg.get("ground", _hex(DEFAULT_SCENERY.ground)), "svg.ground"
            ),
            horizon=horizon,
        )

    return RenderConfig(
        name=name,
        seed=seed,
        max_draw_calls=max_draw_calls,
        params=params,
        width=width,
        height=height,
        precision=precision,
        scenery=scenery,
    )


def load_json(path: str) -> dict[str, Any]:
    with open(path, encoding="utf-8") as f:
        try:
            return cast(dict[str, Any], json.load(f))
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in {path}: {e}") from e


def dump_json(obj: dict[str, Any], path: str) -> None:
    _ensure_parent_dir(path)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, ensure_ascii=False)
        f.write("\n")


# -------------------------
# Random config generator
# -------------------------


def generate_random_config(seed: int | None = None) -> dict[str, Any]:
    rng = random.Random(seed)

    size = float(rng.choice([25, 30, 35, 40, 45, 50, 60]))
    reduction = round(rng.uniform(0.7, 0.88), 3)
    turn_bias = round(rng.choice([-1, 1]) * rng.uniform(0.05, 0.8), 3)
    branch_jitter = rng.choice([0.0, 0.0, round(1 / 6, 4)])

    # Keep the fern inside the default draw budget.
    limit = DEFAULT_MAX_DRAW_CALLS
    while count_draw_calls(size, reduction, limit) > limit:
        size = round(size * 0.8, 3)

    cfg = {
        "name": "Random Fern",
        "seed": rng.randrange(2**31),
        "fern": {
            "size": size,
            "reduction": reduction,
            "turn_bias": turn_bias,
            "branch_jitter": branch_jitter,
        },
        "canvas": {"width": 800, "height": 600},
        "svg": {
            "precision": 3,
            "background": True,
            "sky": _hex(DEFAULT_SCENERY.sky),
            "ground": _hex(DEFAULT_SCENERY.ground),
            "horizon": DEFAULT_SCENERY.horizon,
        },
    }

    # Internal sanity check: generated config must always parse cleanly.
    parse_config(cfg)
    return cfg


# -------------------------
# CLI / Help
# -------------------------

HELP_EPILOG = r"""
INPUT JSON SYNTAX (render)

The renderer consumes a single JSON file describing:
  - the fern (size, reduction factor, turn bias)
  - the canvas it is drawn on
  - SVG output options (background scenery, precision)

Top-level keys

  name: string (optional)
      A human-readable title; written into the SVG <title>.

  seed: integer (optional)
      Seed for the random source. The same seed and parameters always draw
      the same fern. Omit (or null) for a different fern every run.

  max_draw_calls: integer > 0 (default 100000)
      Refuse to draw ferns that would need more line/triangle draws than this.

  fern: object (optional)

    fern.size: number > 0 (default 40)
        Length in pixels of the primary segment.

    fern.reduction: number in (0, 1) (default 0.8)
        How much shorter each segment of a tendril is than the previous one.

    fern.turn_bias: number (default 0.3)
        Tendency of a tendril to curl right (positive) or left (negative).
        Its sign also decides which side the first child branch grows on.

    fern.branch_jitter: number >= 0 (default 0)
        Random tilt, in radians, added to the direction of child branches.
        0.1667 gives the classic scraggly look.

  canvas: object (optional)
    canvas.width / canvas.height: number > 0 (default 800 x 600)
        The fern grows up from the bottom center, 90% of the way down.

SVG options

  svg: object (optional)

    svg.precision: integer 0..10 (default 3)
        Formatting precision for stroke widths and canvas dimensions.

    svg.background: boolean (default true)
        Paint a ground color across the canvas and a sky above the horizon.

    svg.sky / svg.ground: "#rrggbb" (default "#b9d2ff" / "#0a6423")

    svg.horizon: number 0..1 (default 0.85)
        Fraction of the height, from the top, covered by the sky.

Example

    {
      "name": "Fern",
      "seed": 7,
      "fern": {"size": 40, "reduction": 0.8, "turn_bias": 0.3},
      "canvas": {"width": 800, "height": 600}
    }

RANDOM INPUT GENERATION (random)

  python fern_generator.py random out.json --seed 123

Produces a JSON config with a random (but always drawable) fern.
"""


def build_argparser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fern_generator.py",
        description="Fractal fern generator that outputs SVG.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=HELP_EPILOG,
    )

    sub = p.add_subparsers(dest="cmd", required=True)

    pd = sub.add_parser(
        "draw",
        help="Draw a fern from command-line parameters to an SVG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pd.add_argument("output", help="Path to write the SVG output.")
    pd.add_argument(
        "--size", type=float, default=40.0, help="Primary segment length (default 40)."
    )
    pd.add_argument(
        "--reduction",
        type=float,
        default=0.8,
        help="Per-segment reduction factor in (0, 1) (default 0.8).",
    )
    pd.add_argument(
        "--turn-bias", type=float, default=0.3, help="Turn bias (default 0.3)."
    )
    pd.add_argument(
        "--branch-jitter",
        type=float,
        default=0.0,
        help="Random tilt of child branches in radians (default 0).",
    )
    pd.add_argument("--width", type=float, default=800.0, help="Canvas width.")
    pd.add_argument("--height", type=float, default=600.0, help="Canvas height.")
    pd.add_argument(
        "--no-background",
        action="store_true",
        help="Omit the sky/ground backdrop.",
    )
    pd.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    pr = sub.add_parser(
        "render",
        help="Render a fern JSON config to an SVG file.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pr.add_argument("config", help="Path to the input JSON config.")
    pr.add_argument("output", help="Path to write the SVG output.")
    pr.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Override the seed given in the config.",
    )

    pv = sub.add_parser(
        "validate",
        help="Validate a JSON config and print a brief summary.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pv.add_argument("config", help="Path to the input JSON config.")

    pg = sub.add_parser(
        "random",
        help="Generate a random JSON config for experimentation.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    pg.add_argument("output", help="Where to write the generated JSON file.")
    pg.add_argument(
        "--seed", type=int, default=None, help="Seed for repeatable randomness."
    )

    return p


# -------------------------
# Commands
# -------------------------


def cmd_draw(args: argparse.Namespace) -> None:
    params = FernParams(
        primary_size=args.size,
        reduction=args.reduction,
        turn_bias=args.turn_bias,
        branch_jitter=args.branch_jitter,
    )
    # Checked here so that bad sizes report as parameter errors, not SVG ones.
    _validate_canvas_size(args.width, args.height)
    canvas = SvgCanvas(
        args.width,
        args.height,
        scenery=None if args.no_background else DEFAULT_SCENERY,
    )
    generate(params, canvas, rng=random.Random(args.seed))
    canvas.write(args.output, title="Fern")


def cmd_render(config_path: str, output_path: str, seed: int | None) -> None:
    cfg = parse_config(load_json(config_path))
    if seed is None:
        seed = cfg.seed

    canvas = SvgCanvas(
        cfg.width, cfg.height, scenery=cfg.scenery, precision=cfg.precision
    )
    generate(
        cfg.params,
        canvas,
        rng=random.Random(seed),
        max_draw_calls=cfg.max_draw_calls,
    )
    canvas.write(output_path, title=cfg.name)


def cmd_validate(config_path: str) -> None:
    cfg = parse_config(load_json(config_path))
    params = cfg.params

    print(f"name: {cfg.name}")
    print(f"seed: {cfg.seed if cfg.seed is not None else 'random'}")
    print(
        "fern: "
        f"size={params.primary_size} reduction={params.reduction} "
        f"turn_bias={params.turn_bias} branch_jitter={params.branch_jitter}"
    )
    print(f"canvas: {_fmt(cfg.width, 3)}x{_fmt(cfg.height, 3)}")
    print(
        f"svg: precision={cfg.precision} "
        f"background={'on' if cfg.scenery is not None else 'off'}"
    )

    calls = count_draw_calls(params.primary_size, params.reduction, cfg.max_draw_calls)
    if calls > cfg.max_draw_calls:
        raise ConfigError(
            f"Config needs more than {cfg.max_draw_calls} draw calls (max_draw_calls)"
        )
    print(f"draw calls: {calls}")


def cmd_random(output_path: str, seed: int | None) -> None:
    cfg = generate_random_config(seed)
    dump_json(cfg, output_path)


def main(argv: list[str] | None = None) -> int:
    ap = build_argparser()
    args = ap.parse_args(argv)

    try:
        if args.cmd == "draw":
            cmd_draw(args)
        elif args.cmd == "render":
            cmd_render(args.config, args.output, args.seed)
        elif args.cmd == "validate":
            cmd_validate(args.config)
        elif args.cmd == "random":
            cmd_random(args.output, args.seed)
        else:
            raise AssertionError("unreachable")
    except InvalidParameter as e:
        print(f"Invalid parameter: {e}", file=sys.stderr)
        return 2
    except ConfigError as e:
        print(f"Config error: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"File error: {e}", file=sys.stderr)
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
