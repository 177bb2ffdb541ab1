from collections import namedtuple

import numpy as np
from pyopencl import cltypes

from wavefield.errors import SceneError


UINT_MAX = 2**32 - 1

FIELDS = ("time", "freq", "count", "width", "height")

SCENE_DTYPE = np.dtype([
    ("time", cltypes.float),
    ("freq", cltypes.float),
    ("count", cltypes.uint),
    ("width", cltypes.uint),
    ("height", cltypes.uint),
])

# Must match SCENE_DTYPE field for field, 20 bytes without padding.
SCENE_CDECL = """typedef struct {
    float time;
    float freq;
    uint count;
    uint width;
    uint height;
} Scene;
"""


def _float(name, value):
    try:
        with np.errstate(over="ignore"):
            v = cltypes.float(value)
    except (TypeError, ValueError, OverflowError) as e:
        raise SceneError("{} must be a number, got {!r}".format(name, value)) from e
    if not np.isfinite(v):
        raise SceneError("{} is not finite as f32: {!r}".format(name, value))
    return float(v)

def _uint(name, value):
    if isinstance(value, (bool, np.bool_)) or not isinstance(value, (int, np.integer)):
        raise SceneError("{} must be an integer, got {!r}".format(name, value))
    value = int(value)
    if value < 0 or value > UINT_MAX:
        raise SceneError("{} = {} does not fit in u32".format(name, value))
    return value


class SceneParameters(namedtuple("SceneParameters", FIELDS)):
    """Uniform record bound at slot 0 of every dispatch.

    Float fields are stored already rounded to f32 so that the host and the
    device see the same values.
    """

    __slots__ = ()

    def __new__(cls, time=0.0, freq=0.0, count=0, width=0, height=0):
        width = _uint("width", width)
        height = _uint("height", height)
        if width * height > UINT_MAX:
            raise SceneError(
                "grid {}x{} overflows the u32 linear index".format(width, height)
            )
        return super().__new__(
            cls,
            _float("time", time),
            _float("freq", freq),
            _uint("count", count),
            width,
            height,
        )

    @property
    def cells(self):
        return self.width * self.height

    def with_time(self, time):
        return type(self)(time, self.freq, self.count, self.width, self.height)

    def to_array(self):
        return np.array([tuple(self)], dtype=SCENE_DTYPE)

    def to_bytes(self):
        return self.to_array().tobytes()

    @classmethod
    def from_bytes(cls, data):
        if len(data) != SCENE_DTYPE.itemsize:
            raise SceneError("scene record must be {} bytes, got {}".format(
                SCENE_DTYPE.itemsize, len(data)
            ))
        rec = np.frombuffer(data, dtype=SCENE_DTYPE, count=1)[0]
        return cls(*[rec[f].item() for f in FIELDS])
