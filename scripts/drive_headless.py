"""Headless driving session: paint a road, optionally replay it, export it.

The vehicle is driven by a scripted throttle/steer schedule instead of a
keyboard.  Every ``--paint-every`` ticks an append-segment edit is fired, so
the road follows the driven path.

Usage:
    uv run python scripts/drive_headless.py --ticks 600 --out road.json
    uv run python scripts/drive_headless.py --load road.json --tow --ticks 300
    uv run python scripts/drive_headless.py --replay --out looped.json
"""

from __future__ import annotations

import argparse
import logging
import math
import sys

from dotenv import load_dotenv

load_dotenv()

from road_rails.config import SimulationConfig  # noqa: E402
from road_rails.editor.editor import EditAction  # noqa: E402
from road_rails.geometry.vector import Vec3  # noqa: E402
from road_rails.network.loader import RoadNetworkLoader  # noqa: E402
from road_rails.network.serialization import RoadNetworkParseError  # noqa: E402
from road_rails.sim.engine import SimulationEngine, build_default_simulation  # noqa: E402

_THRUST = 100.0  # forward force while "W" is held
_TORQUE = 3.0    # yaw torque while steering


def _drive(engine: SimulationEngine, tick: int, steer_period: int) -> None:
    """Push the vehicle forward and weave it left/right."""
    body = engine.world.get(engine.state.vehicle)
    if body is None:
        return
    body.external.add_force(body.forward() * _THRUST)
    if steer_period > 0:
        body.external.add_torque(Vec3.Y * (_TORQUE * math.sin(2 * math.pi * tick / steer_period)))


def main() -> None:
    ap = argparse.ArgumentParser(description="Road Rails: headless driving session")
    ap.add_argument("--ticks", type=int, default=600, help="Number of simulation ticks")
    ap.add_argument("--paint-every", type=int, default=30, help="Ticks between appended segments")
    ap.add_argument(
        "--steer-period", type=int, default=240, help="Ticks per steering cycle (0 = straight)"
    )
    ap.add_argument("--load", default="", help="Road network JSON to start from")
    ap.add_argument("--out", default="", help="Write the final road network JSON here")
    ap.add_argument(
        "--replay", action="store_true", help="Record a macro at the end and replay it once"
    )
    ap.add_argument("--tow", action="store_true", help="Hitch the trailer before driving")
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = ap.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    engine = build_default_simulation(SimulationConfig.from_env())

    if args.load:
        try:
            engine.load_network(RoadNetworkLoader(args.load).load())
        except (FileNotFoundError, RoadNetworkParseError) as exc:
            print(f"ERROR: cannot load {args.load}: {exc}", file=sys.stderr)
            sys.exit(1)

    if args.tow:
        engine.submit(EditAction.TOGGLE_TRAILER)

    def on_tick(i: int) -> None:
        _drive(engine, i, args.steer_period)
        if args.paint_every > 0 and i % args.paint_every == 0:
            engine.submit(EditAction.APPEND_SEGMENT)

    corrections = engine.run(args.ticks, on_tick=on_tick)

    if args.replay:
        engine.submit(EditAction.RECORD_MACRO)
        engine.submit(EditAction.REPLAY_MACRO)
        engine.tick()

    network = engine.state.network
    mesh = engine.current_mesh()
    print(f"Ticks run:        {args.ticks}")
    print(f"Corrections:      {corrections}")
    print(f"Road segments:    {len(network.road_segments)}")
    print(f"Macros recorded:  {len(network.macros)}")
    print(f"Mesh triangles:   {mesh.triangle_count}")
    print(f"Trailer attached: {engine.state.coupling.attached}")

    if args.out:
        RoadNetworkLoader(args.out).save(network)
        print(f"Road network written to {args.out}")


if __name__ == "__main__":
    main()
