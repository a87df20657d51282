import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional
from . import clip_by_rect
from .config import LOG_LEVELS, load_config
from .core.geo import UnsupportedGeometryError, from_dict


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def _read_geometry(source: Optional[str]):
    if source is None or source == "-":
        data = json.load(sys.stdin)
    else:
        with open(source, "r") as f:
            data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError("Input must be a GeoJSON object")
    if data.get("type") == "Feature":
        data = data.get("geometry")
    return from_dict(data)


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Clip a GeoJSON geometry by an axis-aligned rectangle."
    )
    parser.add_argument(
        "filename",
        help="Path to the input GeoJSON file (default: stdin).",
        nargs="?",
    )
    parser.add_argument(
        "--rect",
        metavar=("XMIN", "YMIN", "XMAX", "YMAX"),
        type=float,
        nargs=4,
        required=True,
        help="The clipping rectangle.",
    )
    parser.add_argument(
        "--boundary",
        action="store_true",
        default=None,
        help="Only keep the outlines of polygons, as line strings.",
    )
    parser.add_argument(
        "-o",
        "--output",
        metavar="FILENAME",
        help="Write the result to a file instead of stdout.",
    )
    parser.add_argument(
        "--config",
        metavar="FILENAME",
        type=Path,
        help="Path to a YAML config file.",
    )
    parser.add_argument(
        "--loglevel",
        choices=LOG_LEVELS,
        help="Set the logging level (default: INFO)",
    )

    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load config: {e}")
        return 1

    # Command line options win over the config file
    loglevel = args.loglevel or config.loglevel
    logging.getLogger().setLevel(getattr(logging, loglevel, logging.INFO))
    boundary = config.boundary if args.boundary is None else args.boundary
    logger.debug(f"Clipping with log level {loglevel}, boundary={boundary}")

    try:
        geometry = _read_geometry(args.filename)
        result = clip_by_rect(geometry, *args.rect, boundary=boundary)
    except (OSError, ValueError) as e:
        logger.error(f"Could not clip geometry: {e}")
        return 1
    except UnsupportedGeometryError as e:
        logger.error(str(e))
        return 1

    text = json.dumps(result.to_dict(), indent=config.indent)
    if args.output:
        with open(args.output, "w") as f:
            f.write(text + "\n")
    else:
        print(text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
