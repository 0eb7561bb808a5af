"""Command line entry point.

Usage:
  kml-to-fgfp route.kml route.fgfp [DEPARTURE [DESTINATION]]

Airports are ICAO codes, optionally with a runway: SAEZ or SAEZ/11.
Exit status: 0 ok, 1 configuration error, 2 conversion (I/O) error.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .config import load_config
from .convert import convert_file
from .errors import ConfigError
from .logging_setup import setup_logging
from .summary import summarize_route
from .waypoint import parse_airport

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_APP_ERROR = 2


class _ArgumentParser(argparse.ArgumentParser):
    """Report bad arguments as ConfigError instead of exiting with status 2."""

    def error(self, message: str):
        raise ConfigError(message)


def build_parser() -> argparse.ArgumentParser:
    ap = _ArgumentParser(
        prog="kml-to-fgfp",
        description="Convert a SimBrief Google Earth (.kml) route into a FlightGear flight plan (.fgfp).",
    )
    ap.add_argument("input", type=str, help="input .kml file")
    ap.add_argument("output", type=str, help="output .fgfp file")
    ap.add_argument("departure", nargs="?", default=None, help="departure airport, ICAO or ICAO/RUNWAY")
    ap.add_argument("destination", nargs="?", default=None, help="destination airport, ICAO or ICAO/RUNWAY")
    ap.add_argument("--config", type=str, default=None, help="YAML config overriding the defaults")
    ap.add_argument("--report", type=str, default=None, help="also write the JSON route report here")
    ap.add_argument("--plot", type=str, default=None, help="write a route preview image (png, svg, ...)")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING or ERROR")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    ap = build_parser()
    try:
        args = ap.parse_args(argv)
        cfg = load_config(args.config)
        departure = parse_airport(args.departure) if args.departure else None
        destination = parse_airport(args.destination) if args.destination else None
    except ConfigError as e:
        print(f"Configuration error: {e.message}", file=sys.stderr)
        ap.print_usage(sys.stderr)
        return EXIT_CONFIG_ERROR

    setup_logging(args.log_level)

    try:
        result = convert_file(args.input, args.output, departure, destination, cfg)
        report = summarize_route(result)
        report["output"] = str(args.output)
        if args.report:
            with open(args.report, "w", encoding="utf-8") as f:
                json.dump(report, f, ensure_ascii=False, indent=2)
        if args.plot:
            from .visualization import plot_route, save_figure

            vis_cfg = cfg.get("visualization", {})
            fig, _ = plot_route(result.waypoints, title=Path(args.input).stem)
            save_figure(fig, args.plot, dpi=int(vis_cfg.get("output_dpi", 150)))
    except OSError as e:
        print(f"Application error: {e}", file=sys.stderr)
        return EXIT_APP_ERROR

    print(f"[kml-to-fgfp] Output: {args.output}")
    print(json.dumps(report, ensure_ascii=False, indent=2))
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
