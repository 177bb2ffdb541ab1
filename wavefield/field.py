import textwrap

import numpy as np
from pyopencl import cltypes

from wavefield.errors import SceneError


def f32_literal(value):
    v = cltypes.float(value)
    if not np.isfinite(v):
        raise SceneError("cannot emit non-finite literal {!r}".format(value))
    # repr of the widened value reads back to the same f32
    return "{!r}f".format(float(v))


class Field:
    """Scalar function of a cell position and the scene parameters.

    A field is written twice: as OpenCL C statements in `body`, which see
    `float2 pos` and `__constant Scene *scene`, and as `evaluate`, the numpy
    counterpart used by the reference dispatch. Both must return f32.
    """

    name = "field"
    body = None

    def declaration(self):
        if self.body is None:
            raise NotImplementedError("{} has no OpenCL body".format(type(self).__name__))
        return "float {}(float2 pos, __constant Scene *scene) {{\n{}\n}}\n".format(
            self.name, textwrap.indent(textwrap.dedent(self.body).strip(), "    ")
        )

    def evaluate(self, x, y, scene):
        raise NotImplementedError()

    def __repr__(self):
        return "{}()".format(type(self).__name__)


class ConstantField(Field):
    def __init__(self, value=0.5):
        self.literal = f32_literal(value)
        self.value = cltypes.float(value)

    @property
    def body(self):
        return "return {};".format(self.literal)

    def evaluate(self, x, y, scene):
        return np.full(np.shape(x), self.value, dtype=cltypes.float)

    def __repr__(self):
        return "ConstantField({})".format(float(self.value))
