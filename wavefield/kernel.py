import numpy as np
from pyopencl import cltypes

from wavefield.errors import SizingError
from wavefield.field import ConstantField
from wavefield.scene import SCENE_CDECL


GROUP_SHAPE = (8, 8, 4)
KERNEL_NAME = "step_field"

# z carries no address, only the first plane writes
STEP_TEMPLATE = """
__kernel __attribute__((reqd_work_group_size({gx}, {gy}, {gz})))
void {name}(__constant Scene *scene, __global float *output) {{
    uint x = get_global_id(0);
    uint y = get_global_id(1);
    if (get_global_id(2) != 0 || x >= scene->width || y >= scene->height) {{
        return;
    }}
    float2 pos = (float2)((float)x, (float)y);
    output[x + y * scene->width] = {field}(pos, scene);
}}
"""


def round_up(n, m):
    return (n + m - 1) // m * m

def global_size(width, height, group=GROUP_SHAPE):
    gx, gy, gz = group
    return (round_up(width, gx), round_up(height, gy), gz)

def group_count(width, height, group=GROUP_SHAPE):
    return tuple(g // l for g, l in zip(global_size(width, height, group), group))

def source(field=None):
    if field is None:
        field = ConstantField()
    gx, gy, gz = GROUP_SHAPE
    return "\n".join([
        SCENE_CDECL,
        field.declaration(),
        STEP_TEMPLATE.format(
            gx=gx, gy=gy, gz=gz,
            name=KERNEL_NAME,
            field=field.name,
        ),
    ])

def check_output(scene, output):
    if not isinstance(output, np.ndarray):
        raise SizingError("output must be a numpy array, got {}".format(type(output).__name__))
    if output.dtype != cltypes.float:
        raise SizingError("output dtype must be float32, got {}".format(output.dtype))
    if output.ndim != 1 or not output.flags.c_contiguous:
        raise SizingError("output must be a flat contiguous array, got shape {}".format(output.shape))
    if not output.flags.writeable:
        raise SizingError("output is read-only")
    if output.size < scene.cells:
        raise SizingError("output holds {} slots, {}x{} grid needs {}".format(
            output.size, scene.width, scene.height, scene.cells
        ))
