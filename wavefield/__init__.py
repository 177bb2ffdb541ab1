from wavefield.errors import (
    WavefieldError, SceneError, SizingError, BoundsError,
    DeviceError, BuildError, DispatchError,
)
from wavefield.scene import SCENE_DTYPE, SceneParameters
from wavefield.field import Field, ConstantField
from wavefield.kernel import GROUP_SHAPE, KERNEL_NAME, global_size, source
from wavefield.opencl import Mem, Renderer, run_kernel
from wavefield.device import create_context

from wavefield import reference, image
