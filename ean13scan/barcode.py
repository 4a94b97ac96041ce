DIGITS = 13

def checksum_digit(numbers) -> int:
    # weights alternate 1, 3 over the first 12 digits
    sum1 = sum(numbers[0:12:2])
    sum2 = 3 * sum(numbers[1:12:2])
    return (10 - ((sum1 + sum2) % 10)) % 10

class Barcode:
    """An EAN13 code, 13 digits each 0..9 or -1 if it couldn't be recognized.

    Building one never raises, anything that isn't a sequence of 13 digits
    ends up as an all -1 code.  Check is_valid() before trusting it.
    """

    __slots__ = ("_numbers",)

    def __init__(self, numbers=None):
        digits = (-1,) * DIGITS
        try:
            if numbers is not None and len(numbers) == DIGITS:
                digits = tuple(int(n) for n in numbers)
        except (TypeError, ValueError):
            pass
        self._numbers = digits

    @classmethod
    def from_string(cls, code : str) -> "Barcode":
        if code is None or len(code) != DIGITS:
            return cls()
        return cls([int(c) if c in "0123456789" else -1 for c in code])

    @property
    def numbers(self) -> tuple:
        return self._numbers

    @property
    def system_code(self) -> int:
        return self._numbers[0]

    def number(self, index : int) -> int:
        if index < 0 or index >= DIGITS:
            return -1
        return self._numbers[index]

    def is_complete(self) -> bool:
        return all(0 <= n <= 9 for n in self._numbers)

    def is_valid(self) -> bool:
        if not self.is_complete():
            return False
        return self._numbers[12] == checksum_digit(self._numbers)

    def __str__(self):
        return "".join(str(n) if n >= 0 else "?" for n in self._numbers)

    def __repr__(self):
        return f"Barcode('{self}')"

    def __eq__(self, other):
        if not isinstance(other, Barcode):
            return NotImplemented
        return self._numbers == other._numbers

    def __hash__(self):
        return hash(self._numbers)

    def __iter__(self):
        return iter(self._numbers)

    def __len__(self):
        return DIGITS
