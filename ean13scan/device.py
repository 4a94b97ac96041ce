from abc import ABC, abstractmethod
from math import sqrt

import numpy
from PIL import Image

class Device(ABC):
    """Something that can hand out paths of RGB pixels across an image."""

    @abstractmethod
    def image_width(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def image_height(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_path(self, x1 : int, y1 : int, x2 : int, y2 : int, path_width : int = None) -> numpy.ndarray:
        """Sample the line from (x1, y1) to (x2, y2).

        Returns an (n, 3) uint8 array of RGB samples, n being the length of
        the line in pixels rounded to the nearest whole pixel (at least 1).
        """
        raise NotImplementedError

    def recognize(self, **kwargs):
        from .recognizer import recognize
        return recognize(self, **kwargs)

class ArrayDevice(Device):
    def __init__(self, pixels : numpy.ndarray):
        pixels = numpy.asarray(pixels)
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected an (height, width, 3) RGB array, got shape {pixels.shape}.")
        if pixels.shape[0] == 0 or pixels.shape[1] == 0:
            raise ValueError("Image has no pixels.")
        self.pixels = pixels.astype(numpy.uint8, copy=False)

    def image_width(self) -> int:
        return self.pixels.shape[1]

    def image_height(self) -> int:
        return self.pixels.shape[0]

    def get_path(self, x1, y1, x2, y2, path_width=None):
        # path_width is the row stride for devices that address a flat
        # buffer, the array already knows its own
        dx = x2 - x1
        dy = y2 - y1
        distance = max(int(sqrt(dx * dx + dy * dy) + 0.5), 1)

        # integer steps so a straight row doesn't skip or repeat pixels
        steps = numpy.arange(distance, dtype=numpy.int64)
        xs = x1 + (steps * dx) // distance
        ys = y1 + (steps * dy) // distance
        numpy.clip(xs, 0, self.image_width() - 1, out=xs)
        numpy.clip(ys, 0, self.image_height() - 1, out=ys)

        return self.pixels[ys, xs].copy()

def image_to_ndarray(image : Image.Image) -> numpy.ndarray:
    if image.mode != "RGB":
        # paletted and greyscale both need to go through RGB
        image = image.convert(mode = "RGB")
    return numpy.ndarray(shape = (image.height, image.width, 3), dtype = numpy.uint8, buffer = image.tobytes())

class ImageDevice(ArrayDevice):
    def __init__(self, image : Image.Image):
        super().__init__(image_to_ndarray(image))

    @classmethod
    def from_file(cls, filename) -> "ImageDevice":
        with Image.open(filename) as image:
            image.load()
            return cls(image)
