# /// script
# requires-python = ">=3.10"
# dependencies = ["typer>=0.9.0", "astropass"]
#
# [tool.uv.sources]
# astropass = { path = ".." }
# ///
"""Predict satellite passes over a ground station from an element-set file.

Reads two- or three-line element sets, propagates each body with its
configured model (SGP4/SDP4 by default) and lists the passes above the
station's horizon, with rise, culmination, set and illumination changes.

Requires astropass to be installed (``uv pip install -e .`` from the repo root).

Usage:
    uv run examples/passes.py TLE_FILE [OPTIONS]

Examples:
    # Visible passes over Washington DC for the next two days
    uv run examples/passes.py stations.txt --lat 38.898748 --lon -77.037684 --days 2

    # Every pass above 10 degrees, lit or not, starting at the element epoch
    uv run examples/passes.py iss.txt --horizon 10 --all --from-epoch
"""

import time
from datetime import datetime, timezone
from math import degrees, radians
from pathlib import Path
from typing import Annotated

import jax.numpy as jnp
import typer

from astropass import set_dtype
from astropass.coordinates import Station
from astropass.ephemerides import Sun
from astropass.models import parse_tle
from astropass.passes import PassEvent

set_dtype(jnp.float64)


def _utc(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp, tz=timezone.utc).strftime("%Y-%m-%d %H:%M:%S")


def main(
    tle_file: Annotated[Path, typer.Argument(help="File of two- or three-line element sets")],
    lat: Annotated[float, typer.Option(help="Station latitude in degrees")] = 38.898748,
    lon: Annotated[float, typer.Option(help="Station longitude in degrees, east positive")] = -77.037684,
    alt: Annotated[float, typer.Option(help="Station altitude in km")] = 0.0167,
    days: Annotated[float, typer.Option(help="Length of the prediction window in days")] = 1.0,
    horizon: Annotated[float, typer.Option(help="Minimum culmination elevation in degrees")] = 20.0,
    all_passes: Annotated[
        bool, typer.Option("--all", help="Report passes whether or not the body is lit")
    ] = False,
    from_epoch: Annotated[
        bool, typer.Option(help="Start the window at each body's epoch instead of now")
    ] = False,
    appulse: Annotated[
        float, typer.Option(help="Report approaches to the Sun closer than this, in degrees (0 = off)")
    ] = 0.0,
) -> None:
    """List passes of every body in TLE_FILE over a station."""
    station = Station(lat, lon, alt, name="station", use_degrees=True)
    print(f"Station: {station}")

    # ── Stage 1: Parse element sets ──────────────────────────────────────
    t0 = time.perf_counter()
    bodies = parse_tle(tle_file.read_text(), aggregate=True)
    print(f"  Parsed {len(bodies)} bodies in {time.perf_counter() - t0:.2f}s")
    if not bodies:
        print("ERROR: No element sets found. Exiting.")
        raise typer.Exit(1)

    sky = [Sun()] if appulse > 0.0 else []

    # ── Stage 2: Predict passes ──────────────────────────────────────────
    for body in bodies:
        body.set(
            horizon=radians(horizon),
            visible=not all_passes,
            appulse=radians(appulse),
        )
        start = body.get("epoch") if from_epoch else time.time()
        label = body.get("name") or body.get("id")

        t0 = time.perf_counter()
        passes = body.passes(station, start, start + days * 86400.0, sky=sky)
        kind = "deep-space" if body.is_deep() else "near-earth"
        print(
            f"\n── {label} ({kind}, model {body.get('model')}): "
            f"{len(passes)} passes in {time.perf_counter() - t0:.1f}s ──"
        )

        for p in passes:
            print(f"  Culmination {_utc(p.time)}")
            for event in p.events:
                line = (
                    f"    {_utc(event.time)}  {str(event.event):5s} {str(event.illumination):5s}"
                    f" az {degrees(event.azimuth):6.1f}  el {degrees(event.elevation):5.1f}"
                    f"  range {event.range:8.1f} km"
                )
                if event.event is PassEvent.APPULSE and event.appulse is not None:
                    line += f"  {degrees(event.appulse.angle):.1f} deg from {event.appulse.body.name}"
                print(line)

    print("\nDone.")


if __name__ == "__main__":
    typer.run(main)
