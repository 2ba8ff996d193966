"""Example: a blind robot bouncing between the walls of an arrowhead room."""

import argparse
import logging
import math
from typing import List, Optional, Sequence

from burst_geometry import (
    Enclosure,
    LinearMovementModel,
    Point,
    construct_boundary,
    make_rotation_model,
)

logger = logging.getLogger(__name__)

ARROWHEAD = [(0, 20), (-20, -20), (0, 0), (20, -20)]
HEADINGS = [math.pi / 2, -3 * math.pi / 4, math.pi / 3, -math.pi / 6, math.pi]


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--radius", type=float, default=1.0, help="robot radius")
    parser.add_argument("--max-error", type=float, default=0.05, help="rotation error bound (radians)")
    parser.add_argument("--seed", type=int, default=123)
    parser.add_argument("--steps", type=int, default=len(HEADINGS))
    parser.add_argument("--verbose", action="store_true")
    return parser.parse_args(argv)


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    enclosure = Enclosure.create(ARROWHEAD)
    boundary = construct_boundary(enclosure, args.radius)
    if boundary is None:
        logger.error("Robot of radius %s does not fit in the enclosure", args.radius)
        raise SystemExit(1)

    print(f"Boundary: {len(boundary.segments)} segment(s), {len(boundary.arcs)} arc(s)")
    for piece in boundary:
        print(f"  {type(piece).__name__}: {piece.source.to_float()} -> {piece.target.to_float()}")

    rotation = make_rotation_model("uniform", args.max_error, seed=args.seed)
    movement = LinearMovementModel()
    # start at the top of the arc around the reflex vertex
    position = Point(0, args.radius)
    trail: List[Point] = [position]

    for step in range(args.steps):
        requested = HEADINGS[step % len(HEADINGS)]
        actual = rotation(requested)
        low, high = rotation.bounds(requested)
        endpoint = movement(position, actual, boundary)
        if endpoint is None:
            print(f"step {step}: heading {actual:.4f} in [{low:.4f}, {high:.4f}] is blocked")
            continue
        x, y = endpoint.to_float()
        print(f"step {step}: heading {actual:.4f} -> ({x:.6f}, {y:.6f})")
        position = endpoint
        trail.append(position)

    print(f"Visited {len(trail)} contact point(s)")


if __name__ == "__main__":
    main()
