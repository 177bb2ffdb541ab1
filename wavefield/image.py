import numpy as np
from PIL import Image

from wavefield.errors import SizingError


def to_gray(output, width, height):
    if output.size < width * height:
        raise SizingError("output holds {} slots, image needs {}".format(
            output.size, width * height
        ))
    field = np.asarray(output[:width * height], dtype=np.float64).reshape(height, width)
    # saturating cast, NaN maps to black
    field = np.nan_to_num(255.0 * field, nan=0.0, posinf=255.0, neginf=0.0)
    return np.clip(field, 0.0, 255.0).astype(np.ubyte)

def to_image(output, width, height):
    return Image.fromarray(to_gray(output, width, height))

def save(output, width, height, path):
    to_image(output, width, height).save(path)
    return path

def preview(output, width, height, columns=64):
    step = max(1, -(-width // columns))
    gray = to_gray(output, width, height)
    return "\n".join(
        "".join("@" if v > 0 else "." for v in row)
        for row in gray[::2*step, ::step]
    )
