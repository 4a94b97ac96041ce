from collections import namedtuple

import numpy

BLACK = 0
WHITE = 255

# paths at least this long get single pixel noise removed after thresholding
DESPECKLE_MIN_WIDTH = 640

Field = namedtuple("Field", ("color", "length"))

def greyscale(path : numpy.ndarray) -> numpy.ndarray:
    path = numpy.asarray(path)
    if path.ndim != 2 or path.shape[1] != 3:
        raise ValueError(f"Expected a path of RGB samples, got shape {path.shape}.")
    return path.astype(numpy.int64).sum(axis=1) // 3

def binarize(path : numpy.ndarray) -> numpy.ndarray:
    """Threshold a path of RGB samples to black (0) and white (255).

    Each pixel is compared against a mix of the average brightness of the
    whole path and a moving average over a window a tenth of the path wide,
    so uneven lighting across a photo doesn't swallow bars.
    """
    grey = greyscale(path).tolist()
    width = len(grey)
    bw = [WHITE] * width
    if width == 0:
        return numpy.array(bw, dtype=numpy.uint8)

    average_illumination = sum(grey) // width

    # half window, at least 1 so short paths still get an average
    span = max(width // 20, 1)
    v1_index = -span + 1
    v2_index = span
    v1 = grey[0]
    v2 = grey[min(span, width - 1)]
    # window starts out hanging over the left edge, pad with the first sample
    moving_sum = grey[0] * span + sum(grey[:span])

    for i in range(1, width - 1):
        if v1_index > 0:
            v1 = grey[v1_index]
        if v2_index < width:
            v2 = grey[v2_index]
        else:
            v2 = grey[width - 1]
        moving_sum = moving_sum - v1 + v2
        moving_average = moving_sum // (span << 1)
        v1_index += 1
        v2_index += 1

        current_value = (grey[i - 1] + grey[i]) >> 1
        comparison_value = (3 * moving_average + average_illumination) >> 2
        if current_value < comparison_value - 3:
            bw[i] = BLACK

    if width >= DESPECKLE_MIN_WIDTH:
        for x in range(1, width - 1):
            if bw[x] != bw[x - 1] and bw[x] != bw[x + 1]:
                bw[x] = bw[x - 1]

    return numpy.array(bw, dtype=numpy.uint8)

def extract_fields(signal : numpy.ndarray) -> list:
    """Run length encode a black and white signal in to Fields.

    The last sample always joins the field before it.
    """
    values = numpy.array(signal, dtype=numpy.int64).ravel()
    if values.shape[0] == 0:
        return []
    if values.shape[0] > 1:
        values[-1] = values[-2]

    # indices where a new run starts
    starts = numpy.flatnonzero(numpy.diff(values)) + 1
    bounds = [0] + starts.tolist() + [values.shape[0]]

    fields = []
    for start, end in zip(bounds[:-1], bounds[1:]):
        fields.append(Field(int(values[start]), end - start))

    return fields

def path_to_fields(path : numpy.ndarray) -> list:
    return extract_fields(binarize(path))
