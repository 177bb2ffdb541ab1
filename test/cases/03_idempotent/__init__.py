#!/usr/bin/env python3

import numpy as np
from pyopencl import cltypes

from wavefield.scene import SceneParameters
from test.cases.tester import Tester as BaseTester


class Tester(BaseTester):
    def run(self, dispatch):
        w, h = 13, 21
        scene = SceneParameters(time=2.0, freq=43000.0, count=8, width=w, height=h)
        rng = np.random.default_rng(13)
        first = rng.standard_normal(w*h).astype(cltypes.float)
        second = rng.uniform(-1e6, 1e6, w*h).astype(cltypes.float)
        dispatch(scene, first)
        dispatch(scene, second)
        dispatch(scene, second)
        return (first, second)

    def verify(self, res):
        first, second = res
        assert np.array_equal(first, second)
        assert np.all(first == cltypes.float(0.5))
