#!/usr/bin/env python
"""Convert a SimBrief .kml route into a FlightGear .fgfp flight plan.

Usage:
  python run_convert.py data/SAEZSBGL.kml outputs/SAEZSBGL.fgfp SAEZ/11 SBGL/10
  python run_convert.py route.kml route.fgfp --config configs/default_config.yaml --plot route.png

Warnings about dropped placemarks go to stderr; the JSON report to stdout.
"""

from kml_to_fgfp.cli import main


if __name__ == '__main__':
    raise SystemExit(main())
