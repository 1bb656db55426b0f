#!/usr/bin/env python3
"""
Live aircraft tracker for the terminal.
Draws an SBS-1 feed (dump1090 port 30003) over Natural Earth map data.

Interactive controls:
  Arrow keys / j k l ;: Pan
  + = K: Zoom in
  - L: Zoom out
  r: Reset view
  q: Quit
"""

import argparse
import logging
import sys
from pathlib import Path

from .config_manager import ConfigManager
from .data_loader import load_geometry
from .errors import GeometryLoadError
from .feed.sbs_client import SbsFeedClient

LOG_FILE = Path("termtrack.log")


def _setup_logging(log_file, debug: bool):
    """Log to a file; the terminal belongs to the UI."""
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(
        "%(asctime)s %(name)s %(levelname)s %(message)s", datefmt="%H:%M:%S"))
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG if debug else logging.INFO)


def main(argv=None):
    parser = argparse.ArgumentParser(description='Live aircraft tracker for the terminal')
    parser.add_argument('shapefile', nargs='?', default=None,
                        help='Polygon shapefile for the map outline')
    parser.add_argument('--airports', default=None,
                        help='Airport point shapefile ("" disables the layer)')
    parser.add_argument('--host', default=None, help='SBS feed host')
    parser.add_argument('--port', type=int, default=None, help='SBS feed port')
    parser.add_argument('--config', default=None, help='Path to a TOML config file')
    parser.add_argument('--log-file', default=str(LOG_FILE), help='Log file path')
    parser.add_argument('--debug', action='store_true', help='Verbose logging')
    parser.add_argument('--no-feed', action='store_true',
                        help='Show the map without connecting to a feed')

    args = parser.parse_args(argv)

    _setup_logging(args.log_file, args.debug)
    log = logging.getLogger("termtrack.main")

    config = ConfigManager(args.config)
    config.override("map", "shapefile", args.shapefile)
    config.override("map", "airports", args.airports)
    config.override("feed", "host", args.host)
    config.override("feed", "port", args.port)

    def status(msg):
        sys.stdout.write(f'\r{msg}')
        sys.stdout.flush()

    status('Loading map...')
    try:
        geometry = load_geometry(config.map["shapefile"], config.map["airports"])
    except GeometryLoadError as e:
        log.error("%s", e)
        sys.stderr.write(f'\nError: {e}\n')
        return 1

    status('Starting UI...        \n')

    feed_client = None
    if not args.no_feed:
        feed_client = SbsFeedClient(host=config.feed["host"], port=config.feed["port"])

    from .tracker_app import TrackerApp

    app = TrackerApp(geometry, config, feed_client=feed_client)
    app.run()

    if feed_client:
        feed_client.stop()
    log.info("Shutdown")
    return 0


if __name__ == '__main__':
    sys.exit(main())
