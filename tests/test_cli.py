from __future__ import annotations

import contextlib
import io
import os
import tempfile
import unittest

from PIL import Image

from ean13scan.__main__ import main
from ean13scan.encoder import draw_barcode


class TestCli(unittest.TestCase):
    def run_main(self, argv) -> tuple:
        out = io.StringIO()
        with contextlib.redirect_stdout(out):
            status = main(argv)
        return status, out.getvalue()

    def test_reads_image_file(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            filename = os.path.join(tmp, "code.bmp")
            draw_barcode("5901234123457").save(filename)
            status, output = self.run_main([filename])

        self.assertEqual(status, 0)
        self.assertIn("The recognized barcode is: 5901234123457", output)

    def test_verbose(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            filename = os.path.join(tmp, "code.png")
            draw_barcode("5901234123457").save(filename)
            status, output = self.run_main([filename, "--verbose", "--scanlines", "4"])

        self.assertEqual(status, 0)
        self.assertIn("Scanline 0 result: 5901234123457", output)
        self.assertIn("CHECK:", output)

    def test_unreadable_code(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            filename = os.path.join(tmp, "blank.png")
            Image.new("RGB", (200, 60), "white").save(filename)
            status, output = self.run_main([filename])

        self.assertEqual(status, 2)
        self.assertIn("?????????????", output)

    def test_missing_file(self) -> None:
        status, output = self.run_main(["/nonexistent/code.bmp"])
        self.assertEqual(status, 1)
        self.assertIn("Must give a path", output)

    def test_bad_scanline_count(self) -> None:
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                main(["code.bmp", "--scanlines", "0"])


if __name__ == "__main__":
    unittest.main()
