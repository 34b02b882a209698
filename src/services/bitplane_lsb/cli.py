"""
Command-line interface for hiding and recovering messages

Usage:
    easy-lsb -e|--encode <message> <image filename> <output filename>
    easy-lsb -d|--decode <image filename>
    easy-lsb -h|--help

Everything after the mode flag is taken verbatim, so a message may start
with a dash. Other options go before the mode flag.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .core.exceptions import CapacityError, FrameLengthError
from .core.service import LsbStegoService
from .utils.validation import validate_output_format
from src.utility.constants_manager import ConstantsManager

logger = logging.getLogger(__name__)

ENCODE_FLAGS = ("-e", "--encode")
DECODE_FLAGS = ("-d", "--decode")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="easy-lsb",
        usage="%(prog)s [-v] (-e MESSAGE IMAGE OUTPUT | -d IMAGE)",
        description="Hide a message in the least significant bits of a bitmap image, or recover one.",
    )
    mode = parser.add_mutually_exclusive_group(required=True)
    mode.add_argument(
        *ENCODE_FLAGS,
        dest="encode",
        action="store_true",
        help="Hide MESSAGE in IMAGE and write the result to OUTPUT (BMP or PNG)",
    )
    mode.add_argument(
        *DECODE_FLAGS,
        dest="decode",
        action="store_true",
        help="Print the message hidden in IMAGE",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Log codec details")
    parser.add_argument("operands", nargs="*", metavar="ARG", help=argparse.SUPPRESS)
    return parser


def _protect_operands(argv: List[str]) -> List[str]:
    # Operands after the mode flag must never be read as options
    for i, arg in enumerate(argv):
        if arg in ENCODE_FLAGS + DECODE_FLAGS:
            return argv[:i + 1] + ["--"] + argv[i + 1:]
    return argv


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(_protect_operands(argv))
    if args.encode and len(args.operands) != 3:
        parser.error("encoding takes exactly MESSAGE IMAGE OUTPUT")
    if args.decode and len(args.operands) != 1:
        parser.error("decoding takes exactly IMAGE")
    return args


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(sys.argv[1:] if argv is None else list(argv))
    constants = ConstantsManager()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else constants.get_log_level(),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        service = LsbStegoService(output_format=validate_output_format(constants.get_output_format()))
        if args.encode:
            message, image_path, output_path = args.operands
            result = service.encode(message.encode("utf-8"), image_path, output_path)
            print(
                f"Hid {result.message_length} bytes in {result.output_path} "
                f"using {result.wraparounds_used} bit plane(s)"
            )
        else:
            result = service.decode(args.operands[0])
            print(result.text)
    except FrameLengthError as exc:
        logger.error("Image carries no valid message: %s", exc)
        return 1
    except CapacityError as exc:
        logger.error("Capacity check failed: %s", exc)
        return 1
    except (ValueError, OSError) as exc:
        logger.error("%s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
