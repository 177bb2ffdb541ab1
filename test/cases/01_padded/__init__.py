#!/usr/bin/env python3

import numpy as np
from pyopencl import cltypes

from wavefield import reference
from wavefield.kernel import global_size
from wavefield.scene import SceneParameters
from test.cases.tester import Tester as BaseTester


w, h = 10, 10
# one slot per padded invocation, so an unguarded write would land in the tail
n = int(np.prod(global_size(w, h)))


class Tester(BaseTester):
    def run(self, dispatch):
        scene = SceneParameters(time=1.5, freq=440.0, count=3, width=w, height=h)
        out = np.full(n, -1.0, dtype=cltypes.float)
        dispatch(scene, out)
        return (out,)

    def verify(self, res):
        out, = res
        assert global_size(w, h) == (16, 16, 4)
        assert np.all(out[:w*h] == cltypes.float(0.5))
        assert np.all(out[w*h:] == cltypes.float(-1.0))

        scene = SceneParameters(width=w, height=h)
        hits = reference.run(scene, np.zeros(n, dtype=cltypes.float))
        assert np.all(hits[:w*h] == 1)
        assert np.all(hits[w*h:] == 0)
