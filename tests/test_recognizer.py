from __future__ import annotations

import unittest

import numpy
from PIL import Image, ImageDraw, ImageOps

from ean13scan.device import ArrayDevice, ImageDevice
from ean13scan.encoder import draw_barcode
from ean13scan.recognizer import read_scanline, recognize, scanline_rows

MARGIN = 40
MODULE = 4


class TestRecognize(unittest.TestCase):
    def test_scanline_rows(self) -> None:
        self.assertEqual(scanline_rows(120, 30), list(range(0, 120, 4)))
        self.assertEqual(scanline_rows(100, 3), [0, 33, 66])

    def test_clean_image(self) -> None:
        for code in ("4006381333931", "5901234123457", "0012345678905"):
            device = ImageDevice(draw_barcode(code, module_width=MODULE, margin=MARGIN))
            barcode = recognize(device)
            self.assertEqual(str(barcode), code)
            self.assertTrue(barcode.is_valid())

    def test_upside_down_image(self) -> None:
        image = ImageOps.mirror(draw_barcode("5901234123457", module_width=MODULE, margin=MARGIN))
        self.assertEqual(str(recognize(ImageDevice(image))), "5901234123457")

    def test_device_recognize(self) -> None:
        device = ImageDevice(draw_barcode("4006381333931", module_width=MODULE, margin=MARGIN))
        self.assertEqual(str(device.recognize(scanline_count=5)), "4006381333931")

    def test_noisy_image(self) -> None:
        image = draw_barcode("4006381333931", module_width=MODULE, margin=MARGIN)
        pixels = numpy.asarray(image).astype(int)
        rng = numpy.random.default_rng(3)
        pixels = pixels + rng.integers(-20, 21, size=pixels.shape)
        pixels = numpy.clip(pixels, 0, 255).astype(numpy.uint8)

        self.assertEqual(str(recognize(ArrayDevice(pixels))), "4006381333931")

    def test_partly_covered_image(self) -> None:
        image = draw_barcode("4006381333931", module_width=MODULE, height=120, margin=MARGIN)
        draw = ImageDraw.Draw(image)
        # blot out the third left digit on the top half
        x0 = MARGIN + (3 + 2 * 7) * MODULE
        draw.rectangle([x0, 0, x0 + 7 * MODULE - 1, 59], fill=(255, 255, 255))

        messages = []
        barcode = recognize(ImageDevice(image), trace=messages.append)

        self.assertEqual(str(barcode), "4006381333931")
        self.assertIn("Scanlines with a valid code: 15/30", messages)

    def test_blank_image(self) -> None:
        device = ImageDevice(Image.new("RGB", (300, 100), "white"))
        barcode = recognize(device)
        self.assertEqual(str(barcode), "?" * 13)
        self.assertFalse(barcode.is_valid())

    def test_read_scanline(self) -> None:
        device = ImageDevice(draw_barcode("4006381333931", module_width=MODULE, margin=MARGIN))
        path = device.get_path(0, 10, device.image_width() - 1, 10)
        self.assertEqual(read_scanline(path), (4, 0, 0, 6, 3, 8, 1, 3, 3, 3, 9, 3, 1))
        self.assertIsNone(read_scanline(numpy.full((300, 3), 255, dtype=numpy.uint8)))

    def test_bad_scanline_count(self) -> None:
        device = ImageDevice(Image.new("RGB", (10, 10), "white"))
        with self.assertRaises(ValueError):
            recognize(device, scanline_count=0)


if __name__ == "__main__":
    unittest.main()
