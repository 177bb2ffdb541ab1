import logging

import numpy as np
from pyopencl import cltypes

from wavefield.errors import BoundsError
from wavefield.field import ConstantField
from wavefield.kernel import GROUP_SHAPE, check_output, global_size


logger = logging.getLogger(__name__)


def invocations(width, height, group=GROUP_SHAPE):
    gx, gy, gz = global_size(width, height, group)
    z, y, x = np.meshgrid(
        np.arange(gz, dtype=np.int64),
        np.arange(gy, dtype=np.int64),
        np.arange(gx, dtype=np.int64),
        indexing="ij",
    )
    return x.ravel(), y.ravel(), z.ravel()

def run(scene, output, field=None, guard=True):
    """Evaluate one dispatch of the step kernel on the host.

    Writes into `output` in place and returns how many times each slot was
    written. `guard=False` reproduces the kernel without its bounds check:
    padded invocations then alias in-range slots, and any that land past the
    end of `output` raise `BoundsError` instead of writing.
    """
    check_output(scene, output)
    if field is None:
        field = ConstantField()

    x, y, z = invocations(scene.width, scene.height)
    if guard:
        mask = (z == 0) & (x < scene.width) & (y < scene.height)
        x, y = x[mask], y[mask]
    # u32 arithmetic on the device
    index = (x + y * scene.width) % 2**32

    if not guard:
        over = index >= output.size
        if np.any(over):
            raise BoundsError("{} invocations write past slot {}, first at index {}".format(
                np.count_nonzero(over), output.size - 1, index[over].min()
            ))

    values = field.evaluate(x.astype(cltypes.float), y.astype(cltypes.float), scene)
    values = np.broadcast_to(np.asarray(values, dtype=cltypes.float), index.shape)
    output[index] = values

    hits = np.zeros(output.size, dtype=np.int64)
    np.add.at(hits, index, 1)
    logger.debug(
        "reference dispatch %dx%d: %d invocations, %d writes",
        scene.width, scene.height, len(z), len(index),
    )
    return hits
