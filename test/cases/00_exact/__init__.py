#!/usr/bin/env python3

import numpy as np
from pyopencl import cltypes

from wavefield.scene import SceneParameters
from test.cases.tester import Tester as BaseTester


class Tester(BaseTester):
    def run(self, dispatch):
        scene = SceneParameters(time=0.0, freq=43000.0, count=8, width=8, height=8)
        out = np.full(64, np.nan, dtype=cltypes.float)
        dispatch(scene, out)
        return (out,)

    def verify(self, res):
        out, = res
        assert out.size == 64
        assert np.all(out == cltypes.float(0.5))
