import argparse
import sys

from .consensus import DEFAULT_MAX_CONSIDERED_CODES
from .device import ImageDevice
from .recognizer import DEFAULT_SCANLINES, recognize

def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ean13scan",
        description="Read an EAN13 barcode from a photo of it.",
    )
    p.add_argument("image", help="Image file with a roughly horizontal barcode.")
    p.add_argument("--scanlines", type=int, default=DEFAULT_SCANLINES,
                   help=f"Number of horizontal scanlines to read (default: {DEFAULT_SCANLINES}).")
    p.add_argument("--max-codes", type=int, default=DEFAULT_MAX_CONSIDERED_CODES,
                   help="Most digit combinations to try when the best guess fails the checksum.")
    p.add_argument("--no-search", action="store_true",
                   help="Only report the most likely digits, don't search for a valid combination.")
    p.add_argument("--verbose", action="store_true", help="Print what's going on along the way.")
    return p

def main(argv=None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    if args.scanlines < 1:
        parser.error("--scanlines must be at least 1")
    if args.max_codes < 1:
        parser.error("--max-codes must be at least 1")

    try:
        device = ImageDevice.from_file(args.image)
    except OSError as e:
        print(f"Must give a path to a readable image file: {e}")
        return 1

    if args.verbose:
        print(f"Image rows: {device.image_height()}  columns: {device.image_width()}")

    barcode = recognize(device,
                        scanline_count=args.scanlines,
                        max_considered_codes=args.max_codes,
                        search=not args.no_search,
                        trace=print if args.verbose else None)

    print(f"The recognized barcode is: {barcode}")
    return 0 if barcode.is_valid() else 2

if __name__ == "__main__":
    sys.exit(main())
