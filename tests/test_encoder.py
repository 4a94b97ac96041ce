from __future__ import annotations

import unittest

from ean13scan.barcode import Barcode
from ean13scan.encoder import draw_barcode, encode_modules, encode_widths


class TestEncoder(unittest.TestCase):
    def test_structure(self) -> None:
        widths = encode_widths("4006381333931")
        self.assertEqual(len(widths), 59)
        self.assertEqual(sum(widths), 95)

        modules = encode_modules("4006381333931")
        self.assertEqual(len(modules), 95)
        self.assertEqual(modules[:3], [1, 0, 1])
        self.assertEqual(modules[45:50], [0, 1, 0, 1, 0])
        self.assertEqual(modules[-3:], [1, 0, 1])

    def test_known_digit_patterns(self) -> None:
        modules = encode_modules("0012345678905")
        # system digit 0 puts every left digit in the odd table, a 0 is 0001101
        self.assertEqual(modules[3:10], [0, 0, 0, 1, 1, 0, 1])
        # right hand 5 is 1001110
        self.assertEqual(modules[-10:-3], [1, 0, 0, 1, 1, 1, 0])

    def test_accepts_barcodes_and_lists(self) -> None:
        code = "5901234123457"
        self.assertEqual(encode_modules(Barcode.from_string(code)), encode_modules(code))
        self.assertEqual(encode_modules([int(c) for c in code]), encode_modules(code))

    def test_invalid_code(self) -> None:
        with self.assertRaises(ValueError):
            encode_widths("4006381333932")
        with self.assertRaises(ValueError):
            encode_widths("40063813339?1")

    def test_draw(self) -> None:
        image = draw_barcode("4006381333931", module_width=2, height=50, margin=10)
        self.assertEqual(image.size, (95 * 2 + 20, 50))
        self.assertEqual(image.mode, "RGB")
        self.assertEqual(image.getpixel((0, 25)), (255, 255, 255))
        self.assertEqual(image.getpixel((10, 25)), (0, 0, 0))
        self.assertEqual(image.getpixel((12, 25)), (255, 255, 255))


if __name__ == "__main__":
    unittest.main()
