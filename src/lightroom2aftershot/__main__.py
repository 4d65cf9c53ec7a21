import argparse
import logging
import sys
import xml.etree.ElementTree as ET

from lightroom2aftershot import AftershotDocument, LightroomPreset

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Convert a Lightroom preset to an AfterShot preset",
        epilog="Usage: lightroom2aftershot lightroompreset.xmp > aftershotpreset.xmp",
    )
    parser.add_argument(
        "input", metavar="INPUT", type=str, help="Input Lightroom preset path"
    )
    parser.add_argument(
        "--output",
        metavar="PATH",
        type=str,
        default=None,
        help="Output file. Default writes to standard output.",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    """Main function to convert a Lightroom preset to an AfterShot preset."""
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.loglevel.upper(), logging.WARNING)
    )

    try:
        lightroom = LightroomPreset.parse(args.input)
    except OSError as e:
        logger.error(f"Error while reading file {args.input}: {e}")
        sys.exit(1)
    except ET.ParseError as e:
        logger.error(f"Error while parsing {args.input}: {e}")
        sys.exit(1)

    document = AftershotDocument.from_lightroom(lightroom)
    if args.output is None:
        document.write(sys.stdout)
    else:
        document.save(args.output)


if __name__ == "__main__":
    main()
