"""
Combining the digits read along many scanlines in to one code.

Every scanline votes for the digit it saw at each position.  Votes from a
scanline whose own result already passed the checksum count for a lot more
than the rest.  Once all scanlines are in, the best digit at each position
is taken, and if that doesn't check out, less likely digits are tried until
some combination passes the checksum.
"""

import itertools
from collections import namedtuple

from .barcode import DIGITS, Barcode, checksum_digit

# most different digits remembered per position
MAX_CANDIDATES = 10

VALID_SUPPORT = 100
INVALID_SUPPORT = 1

DEFAULT_MAX_CONSIDERED_CODES = 1000

# the outer digits are the most reliable, so the search leaves the system
# digit, the first left digit and the check digit at their best guess
SEARCH_POSITIONS = range(2, 12)

DigitCandidate = namedtuple("DigitCandidate", ("digit", "support"))

class CandidateTable:
    def __init__(self):
        self.positions = [[] for _ in range(DIGITS)]

    def record(self, result, was_valid : bool):
        """Add one scanline's digits to the table."""
        support = VALID_SUPPORT if was_valid else INVALID_SUPPORT
        for position, digit in enumerate(result[:DIGITS]):
            if digit < 0:
                continue
            candidates = self.positions[position]
            for num, candidate in enumerate(candidates):
                if candidate.digit == digit:
                    candidates[num] = candidate._replace(support=candidate.support + support)
                    break
            else:
                if len(candidates) < MAX_CANDIDATES:
                    candidates.append(DigitCandidate(digit, support))

    def sort(self):
        # stable, equal support keeps the order digits were first seen in
        for candidates in self.positions:
            candidates.sort(key=lambda candidate: candidate.support, reverse=True)

    def candidates(self, position : int) -> list:
        return list(self.positions[position])

    def digit(self, position : int, rank : int) -> int:
        candidates = self.positions[position]
        if rank < 0 or rank >= len(candidates):
            return -1
        return candidates[rank].digit

    def primary_guess(self) -> tuple:
        return tuple(self.digit(position, 0) for position in range(DIGITS))

    def is_empty(self) -> bool:
        return not any(self.positions)

    def format(self, level : int = 0) -> str:
        """Rank by position grid of digits (level 0) or their support (level 1)."""
        lines = []
        for rank in range(MAX_CANDIDATES):
            row = []
            for candidates in self.positions:
                if rank < len(candidates):
                    row.append(str(candidates[rank][level]))
                elif level == 0:
                    row.append("x")
                else:
                    row.append("0")
            lines.append(f"{rank} :   " + "  ".join(row))
        return "\n".join(lines)

def candidate_codes(table : CandidateTable):
    """Yield codes built from the candidate table, most likely first.

    Works like an odometer over the rank of each searched position, with
    position 11 turning fastest.  The first code yielded is the primary guess.
    """
    primary = table.primary_guess()
    ranks = [range(max(min(len(table.positions[position]), MAX_CANDIDATES), 1))
             for position in SEARCH_POSITIONS]

    for combination in itertools.product(*ranks):
        code = list(primary)
        for position, rank in zip(SEARCH_POSITIONS, combination):
            code[position] = table.digit(position, rank)
        yield tuple(code)

def detect_valid_barcode(table : CandidateTable, max_considered_codes : int = DEFAULT_MAX_CONSIDERED_CODES,
                         trace=None) -> Barcode:
    """Try up to max_considered_codes digit combinations for one that passes
    the checksum.  Falls back to the primary guess if none does.

    The table has to be sorted already.
    """
    if max_considered_codes < 1:
        raise ValueError("max_considered_codes must be at least 1.")

    primary = table.primary_guess()
    if -1 in primary:
        return Barcode(primary)

    for code in itertools.islice(candidate_codes(table), max_considered_codes):
        if trace is not None:
            trace(f"CHECK: {' '.join(str(d) for d in code[:12])}  checksum digit: {checksum_digit(code)}")
        barcode = Barcode(code)
        if barcode.is_valid():
            return barcode

    return Barcode(primary)

def resolve(table : CandidateTable, max_considered_codes : int = DEFAULT_MAX_CONSIDERED_CODES,
            search : bool = True, trace=None) -> Barcode:
    table.sort()

    if trace is not None:
        trace("Detected digits:")
        trace(table.format(0))
        trace("Support:")
        trace(table.format(1))

    primary = table.primary_guess()
    if not search or -1 in primary:
        # not enough to go on for a search
        return Barcode(primary)

    return detect_valid_barcode(table, max_considered_codes, trace)
