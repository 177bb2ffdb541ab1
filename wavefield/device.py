import logging

import numpy as np
import pyopencl as cl

from wavefield.errors import DeviceError
from wavefield.kernel import GROUP_SHAPE


logger = logging.getLogger(__name__)


def create_context(platform=-1):
    """Pick an OpenCL context.

    A negative index leaves the choice to pyopencl, which honours
    `PYOPENCL_CTX`; otherwise the first device of the given platform is used.
    """
    try:
        if platform < 0:
            return cl.create_some_context(interactive=False)
        platforms = cl.get_platforms()
        if platform >= len(platforms):
            raise DeviceError("platform index {} out of range, {} available".format(
                platform, len(platforms)
            ))
        device = platforms[platform].get_devices()[0]
        return cl.Context(devices=[device])
    except cl.Error as e:
        raise DeviceError("create context error {}".format(e)) from e

def describe(ctx):
    for device in ctx.devices:
        logger.info("adapter %s", device.name.strip())
        logger.info("  vendor %s", device.vendor.strip())
        logger.info("  device type %s", cl.device_type.to_string(device.type))
        logger.info("  platform %s", device.platform.name.strip())
        logger.info("  driver info %s", device.driver_version.strip())
        logger.info(
            "  max worker size (%s), max group %d",
            ", ".join(str(s) for s in device.max_work_item_sizes),
            device.max_work_group_size,
        )

def check_group_shape(device, group=GROUP_SHAPE, limit=None):
    sizes = device.max_work_item_sizes
    if limit is None:
        limit = device.max_work_group_size
    if any(g > s for g, s in zip(group, sizes)) or int(np.prod(group)) > limit:
        raise DeviceError("{} cannot run {}x{}x{} groups (item sizes {}, group limit {})".format(
            device.name.strip(), *group, tuple(sizes), limit
        ))
