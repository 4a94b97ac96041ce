"""
Decoding of a single scanline's fields in to EAN13 digits.

A symbol is 59 fields long: a 3 field start guard, 6 digits of 4 fields each,
a 5 field middle guard, 6 more digits and a 3 field end guard, 95 modules in
total.  Digits on the left half come from either the odd or the even table,
and which table each of them used spells out the leading system digit.
"""

from collections import namedtuple

from .barcode import DIGITS
from .signal import BLACK

BOTH_TABLES = 0
EVEN_TABLE = 1
ODD_TABLE = 2

# digit patterns as 4 bar/space widths, normalized so each sums to 70
CODE_ODD = (
    (30, 20, 10, 10),
    (20, 20, 20, 10),
    (20, 10, 20, 20),
    (10, 40, 10, 10),
    (10, 10, 30, 20),
    (10, 20, 30, 10),
    (10, 10, 10, 40),
    (10, 30, 10, 20),
    (10, 20, 10, 30),
    (30, 10, 10, 20),
)

CODE_EVEN = (
    (10, 10, 20, 30),
    (10, 20, 20, 20),
    (20, 20, 10, 20),
    (10, 10, 40, 10),
    (20, 30, 10, 10),
    (10, 30, 20, 10),
    (40, 10, 10, 10),
    (20, 10, 30, 10),
    (30, 10, 20, 10),
    (20, 10, 10, 30),
)

NORMED_GROUP_LENGTH = 70
MAX_DIFFERENCE_FOR_ACCEPTANCE = 60

# True = even, indexed by system digit
PARITY_PATTERNS = (
    (False, False, False, False, False, False),
    (False, False, True,  False, True,  True ),
    (False, False, True,  True,  False, True ),
    (False, False, True,  True,  True,  False),
    (False, True,  False, False, True,  True ),
    (False, True,  True,  False, False, True ),
    (False, True,  True,  True,  False, False),
    (False, True,  False, True,  False, True ),
    (False, True,  False, True,  True,  False),
    (False, True,  True,  False, True,  False),
)

START_GUARD_FIELDS = 3
GROUP_FIELDS = 4
GROUP_DIGITS = 6
MIDDLE_GUARD_FIELDS = 5
END_GUARD_FIELDS = 3
SYMBOL_MODULES = 95
# fewer fields than this can't be worth looking at
MIN_FIELDS = 30

SHORT_PATH_LENGTH = 800

Match = namedtuple("Match", ("even", "digit"))

NO_MATCH = Match(False, -1)

def path_limits(length : int) -> tuple:
    """(max start guard bar difference, min unit length, max unit length)"""
    if length <= SHORT_PATH_LENGTH:
        return 6, 1, 10
    return 30, 1, 50

def round_half_up(value : float) -> int:
    whole = int(value)
    if value - whole >= 0.5:
        whole += 1
    return whole

def table_distance(normed, table):
    # returns (smallest difference, row index of it)
    min_difference = 100000
    min_index = 0
    for num, pattern in enumerate(table):
        difference = 0
        for length, expected in zip(normed, pattern):
            difference += abs(length - expected) << 1
        if difference < min_difference:
            min_difference = difference
            min_index = num
    return min_difference, min_index

def recognize_number(lengths, table=BOTH_TABLES, trace=None) -> Match:
    """Match 4 field lengths against the digit tables.

    Returns the digit along with whether it came from the even table, or
    NO_MATCH if nothing is close enough.
    """
    pixel_sum = sum(lengths)
    if pixel_sum <= 0:
        return NO_MATCH
    normed = [round_half_up(length / pixel_sum * NORMED_GROUP_LENGTH) for length in lengths]

    if trace is not None:
        trace(f"Recognize number (table {table}): lengths {' '.join(str(l) for l in lengths)}  "
              f"normed {' '.join(str(n) for n in normed)}")

    even_difference, even_index = 100000, 0
    odd_difference, odd_index = 100000, 0
    if table in (BOTH_TABLES, EVEN_TABLE):
        even_difference, even_index = table_distance(normed, CODE_EVEN)
    if table in (BOTH_TABLES, ODD_TABLE):
        odd_difference, odd_index = table_distance(normed, CODE_ODD)

    if even_difference <= odd_difference:
        if even_difference < MAX_DIFFERENCE_FOR_ACCEPTANCE:
            return Match(True, even_index)
    elif odd_difference < MAX_DIFFERENCE_FOR_ACCEPTANCE:
        return Match(False, odd_index)

    return NO_MATCH

def recognize_system_code(parity_pattern) -> Match:
    parity_pattern = tuple(bool(p) for p in parity_pattern)
    for num, pattern in enumerate(PARITY_PATTERNS):
        if pattern == parity_pattern:
            return Match(False, num)
    return NO_MATCH

def find_start_sentinel(fields, start, end, length):
    max_bar_difference, min_unit_length, max_unit_length = path_limits(length)
    symbol_fields = START_GUARD_FIELDS + 2 * GROUP_DIGITS * GROUP_FIELDS + MIDDLE_GUARD_FIELDS

    for i in range(start, end - symbol_fields):
        color, bar = fields[i]
        if color != BLACK:
            continue
        if bar < min_unit_length or bar > max_unit_length:
            continue
        if abs(bar - fields[i + 1][1]) <= max_bar_difference and \
           abs(bar - fields[i + 2][1]) <= max_bar_difference and \
           fields[i + 3][1] < bar << 3:
            return i

    return -1

def group_lengths(fields, index):
    return [fields[index + j][1] for j in range(GROUP_FIELDS)]

def decode(fields, start=0, end=None, trace=None):
    """Find an EAN13 symbol in fields[start:end] and read its digits.

    Returns a tuple of 13 digits with -1 for any that couldn't be read, or
    None if no symbol structure could be found at all.
    """
    if end is None:
        end = len(fields)
    end = min(end, len(fields))

    if len(fields) == 0:
        return None
    if start > end - 3:
        return None
    if end - start < MIN_FIELDS:
        return None

    length = sum(field[1] for field in fields)

    start_sentinel = find_start_sentinel(fields, start, end, length)
    if trace is not None:
        trace(f"Start sentinel index: {start_sentinel}")
    if start_sentinel < 0:
        return None

    left_numbers = start_sentinel + START_GUARD_FIELDS
    middle_guard = left_numbers + GROUP_DIGITS * GROUP_FIELDS
    right_numbers = middle_guard + MIDDLE_GUARD_FIELDS
    end_sentinel = right_numbers + GROUP_DIGITS * GROUP_FIELDS
    if end_sentinel + END_GUARD_FIELDS > end:
        return None

    if trace is not None:
        symbol_length = sum(field[1] for field in fields[start_sentinel:end_sentinel + END_GUARD_FIELDS])
        trace(f"Unit length: {symbol_length / SYMBOL_MODULES}")

    numbers = [-1] * DIGITS
    parity_pattern = [False] * GROUP_DIGITS

    # the first group tells which way round the symbol is being read,
    # only the right half of a code backwards ends up in the even table
    match = recognize_number(group_lengths(fields, left_numbers), BOTH_TABLES, trace)

    if match.even:
        numbers[12] = match.digit

        counter = 11
        for i in range(left_numbers + GROUP_FIELDS, middle_guard, GROUP_FIELDS):
            numbers[counter] = recognize_number(group_lengths(fields, i), EVEN_TABLE, trace).digit
            counter -= 1

        # counter is 6 now, work back through the left half
        for i in range(right_numbers, end_sentinel, GROUP_FIELDS):
            match = recognize_number(group_lengths(fields, i), BOTH_TABLES, trace)
            numbers[counter] = match.digit
            parity_pattern[counter - 1] = not match.even
            counter -= 1

        numbers[0] = recognize_system_code(parity_pattern).digit
    else:
        numbers[1] = match.digit
        parity_pattern[0] = match.even

        counter = 2
        for i in range(left_numbers + GROUP_FIELDS, middle_guard, GROUP_FIELDS):
            match = recognize_number(group_lengths(fields, i), BOTH_TABLES, trace)
            numbers[counter] = match.digit
            parity_pattern[counter - 1] = match.even
            counter += 1

        numbers[0] = recognize_system_code(parity_pattern).digit

        counter = 7
        for i in range(right_numbers, end_sentinel, GROUP_FIELDS):
            numbers[counter] = recognize_number(group_lengths(fields, i), ODD_TABLE, trace).digit
            counter += 1

    return tuple(numbers)
