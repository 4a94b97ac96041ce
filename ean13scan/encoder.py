"""
Drawing EAN13 symbols, mostly useful to make clean images to test against.
"""

from PIL import Image, ImageDraw

from .barcode import Barcode
from .decoder import CODE_EVEN, CODE_ODD, PARITY_PATTERNS

START_GUARD = (1, 1, 1)
MIDDLE_GUARD = (1, 1, 1, 1, 1)
END_GUARD = (1, 1, 1)

def digit_widths(digit, table):
    return tuple(width // 10 for width in table[digit])

def encode_widths(code) -> list:
    """Widths in modules of every bar and space, starting with the start guard's
    first bar.  The code has to be a valid EAN13 code."""
    if not isinstance(code, Barcode):
        code = Barcode.from_string(code) if isinstance(code, str) else Barcode(code)
    if not code.is_valid():
        raise ValueError(f"Not a valid EAN13 code: {code}")
    numbers = code.numbers
    parity = PARITY_PATTERNS[numbers[0]]

    widths = list(START_GUARD)
    for num, digit in enumerate(numbers[1:7]):
        widths.extend(digit_widths(digit, CODE_EVEN if parity[num] else CODE_ODD))
    widths.extend(MIDDLE_GUARD)
    # right half has the same widths as the odd table, starting on a bar
    for digit in numbers[7:13]:
        widths.extend(digit_widths(digit, CODE_ODD))
    widths.extend(END_GUARD)

    return widths

def encode_modules(code) -> list:
    """95 modules, 1 for bar and 0 for space."""
    modules = []
    bar = True
    for width in encode_widths(code):
        modules.extend([1 if bar else 0] * width)
        bar = not bar
    return modules

def draw_barcode(code, module_width : int = 4, height : int = 120, margin : int = 40) -> Image.Image:
    modules = encode_modules(code)
    img = Image.new('RGB', (len(modules) * module_width + margin * 2, height), 'white')
    draw = ImageDraw.Draw(img)
    for i, module in enumerate(modules):
        if module:
            x0 = margin + i * module_width
            draw.rectangle([x0, 0, x0 + module_width - 1, height - 1], fill=(0, 0, 0))
    return img
