#!/usr/bin/env python3
"""Watch live traffic around a point and print the rendered markers.

Runs a :class:`~pyskytrack.LiveTracker` against the real feed and photo
site, printing one block per poll with each marker's key, position,
heading and popup state.

Usage
-----
::

    python scripts/watch_viewport.py --center 51.47,-0.45 --zoom 8
    python scripts/watch_viewport.py --rounds 3 --json

Options::

    --center LAT,LON    Start centered here (skips IP geolocation)
    --zoom N            Zoom level to pan to after start (default: config)
    --rounds N          Stop after N polls (default: run until Ctrl-C)
    --json              Output machine-readable JSON lines
    --verbose, -v       Enable debug logging

Every ``PYSKYTRACK_*`` environment variable honoured by
``TrackerConfig.from_env`` applies.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

# Allow running from the repo root without installing the package.
_repo = Path(__file__).resolve().parent.parent
_src = _repo / "src"
if _src.is_dir():
    sys.path.insert(0, str(_src))

from pyskytrack import LiveTracker, MarkerDescriptor, SkyTrackError, TrackerConfig  # noqa: E402
from pyskytrack.config import parse_location  # noqa: E402


def _marker_line(marker: MarkerDescriptor) -> str:
    lat, lon = marker.position.as_tuple()
    popup = marker.popup
    extra = f" photo={popup.image_url} by {popup.author}" if popup.image_url else ""
    return f"  {marker.key:<10} {lat:9.4f} {lon:10.4f} hdg={marker.heading:5.1f} [{popup.kind}] {popup.title}{extra}"


def _marker_dict(marker: MarkerDescriptor) -> dict[str, Any]:
    return marker.model_dump(mode="json", exclude={"heading_icon"})


async def main() -> None:
    parser = argparse.ArgumentParser(description="Print live aircraft markers for a map viewport.")
    parser.add_argument("--center", help="LAT,LON to center on (default: geolocate)")
    parser.add_argument("--zoom", type=int, help="Zoom level to pan to after start")
    parser.add_argument("--rounds", type=int, default=0, help="Stop after N polls (0 = forever)")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output JSON lines")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    overrides: dict[str, Any] = {}
    if args.center:
        location = parse_location(args.center)
        if location is None:
            parser.error(f"--center must be LAT,LON, got {args.center!r}")
        overrides["user_location"] = location
    try:
        config = TrackerConfig.from_env(**overrides)
    except SkyTrackError as exc:
        parser.error(str(exc))

    updated = asyncio.Event()

    async with LiveTracker(config, on_snapshot=lambda _snapshot: updated.set()) as tracker:
        if args.zoom is not None:
            center = tracker.viewport.center
            tracker.on_map_moved(center.lat, center.lon, args.zoom)

        rounds = 0
        while not args.rounds or rounds < args.rounds:
            await updated.wait()
            updated.clear()
            rounds += 1
            # Give this round's photo lookups a chance to land before printing.
            await asyncio.sleep(min(config.poll_interval / 2, 1.0))

            markers = tracker.render()
            viewport = tracker.viewport
            if args.json_mode:
                print(
                    json.dumps(
                        {
                            "timestamp": datetime.now(UTC).isoformat(),
                            "center": viewport.center.as_tuple(),
                            "zoom": viewport.zoom,
                            "markers": [_marker_dict(m) for m in markers],
                        },
                        default=str,
                    )
                )
            else:
                print(
                    f"[{datetime.now(UTC):%H:%M:%S}] {len(markers)} aircraft around "
                    f"{viewport.center.as_tuple()} zoom={viewport.zoom} (radius {viewport.radius_nm:g} nm)"
                )
                for marker in markers:
                    print(_marker_line(marker))

        if args.verbose:
            print(json.dumps(tracker.stats, indent=2), file=sys.stderr)


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
