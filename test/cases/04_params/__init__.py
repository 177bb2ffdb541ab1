#!/usr/bin/env python3

import numpy as np
from pyopencl import cltypes

from wavefield.scene import SceneParameters
from test.cases.tester import Tester as BaseTester


class Tester(BaseTester):
    def run(self, dispatch):
        w, h = 24, 9
        buf = []
        for t, f, c in [
            (0.0, 0.0, 0),
            (1e3, -1.0, 1),
            (3.25, 43000.0, 8),
            (1e-7, 3.4e38, 2**32 - 1),
        ]:
            out = np.zeros(w*h, dtype=cltypes.float)
            dispatch(SceneParameters(time=t, freq=f, count=c, width=w, height=h), out)
            buf.append(out)
        return buf

    def verify(self, res):
        for out in res:
            assert np.array_equal(out, res[0])
            assert np.all(out == cltypes.float(0.5))
