from .barcode import Barcode
from .consensus import DEFAULT_MAX_CONSIDERED_CODES, CandidateTable, resolve
from .decoder import decode
from .signal import path_to_fields

DEFAULT_SCANLINES = 30

def scanline_rows(height : int, scanline_count : int) -> list:
    step = height // scanline_count
    return [step * i for i in range(scanline_count)]

def read_scanline(path, trace=None):
    """Binarize, split in to fields and decode one path.  None if there's no
    symbol on it."""
    fields = path_to_fields(path)
    return decode(fields, trace=trace)

def recognize(device, scanline_count : int = DEFAULT_SCANLINES,
              max_considered_codes : int = DEFAULT_MAX_CONSIDERED_CODES,
              search : bool = True, trace=None) -> Barcode:
    """Read an EAN13 code off the device's image along horizontal scanlines.

    Always returns a Barcode, check is_valid() on it.
    """
    if scanline_count < 1:
        raise ValueError("scanline_count must be at least 1.")

    width = device.image_width()
    height = device.image_height()

    table = CandidateTable()
    good_lines = 0
    for num, y in enumerate(scanline_rows(height, scanline_count)):
        path = device.get_path(0, y, width - 1, y, width)
        numbers = read_scanline(path)
        if numbers is None:
            continue
        scanline_code = Barcode(numbers)
        valid = scanline_code.is_valid()
        if valid:
            good_lines += 1
        table.record(numbers, valid)
        if trace is not None:
            trace(f"Scanline {num} result: {scanline_code}")

    if trace is not None:
        trace(f"Scanlines with a valid code: {good_lines}/{scanline_count}")

    return resolve(table, max_considered_codes, search, trace)
