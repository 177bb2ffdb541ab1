import logging
from contextlib import contextmanager
from time import time

import numpy as np
import pyopencl as cl
from pyopencl import cltypes

from wavefield.device import check_group_shape
from wavefield.errors import BuildError, DispatchError, SizingError
from wavefield.field import ConstantField
from wavefield.kernel import GROUP_SHAPE, KERNEL_NAME, check_output, global_size, source
from wavefield.scene import SCENE_DTYPE, SceneParameters


logger = logging.getLogger(__name__)


@contextmanager
def checked(step, error=DispatchError):
    try:
        yield
    except cl.Error as e:
        raise error("{} error {}".format(step, e)) from e


def build(ctx, src):
    with checked("build program", BuildError):
        return cl.Program(ctx, src).build()


class Mem:
    def __init__(self, content, flags=cl.mem_flags.READ_WRITE):
        self.content = content
        self.flags = flags

    @property
    def writable(self):
        return not self.flags & cl.mem_flags.READ_ONLY


def run_kernel(ctx, src, shape, *args, name=KERNEL_NAME, local=GROUP_SHAPE):
    """Build `src`, run `name` once over `shape` and copy `Mem` args back.

    Returns the time spent in the dispatch itself, in seconds.
    """
    if 0 in shape:
        logger.debug("empty dispatch %s skipped", shape)
        return 0.0

    queue = cl.CommandQueue(ctx)
    mf = cl.mem_flags

    kargs = []
    with checked("create buffers"):
        for arg in args:
            karg = arg
            if isinstance(arg, Mem):
                karg = cl.Buffer(ctx, arg.flags | mf.COPY_HOST_PTR, hostbuf=arg.content)
            kargs.append(karg)

    prg = build(ctx, src)
    with checked("create kernel", BuildError):
        kernel = cl.Kernel(prg, name)

    with checked("dispatch {}".format(name)):
        begin = time()
        kernel(queue, shape, local, *kargs)
        queue.flush()
        queue.finish()
        end = time()

    with checked("read back"):
        for arg, karg in zip(args, kargs):
            if isinstance(arg, Mem) and arg.writable:
                cl.enqueue_copy(queue, arg.content, karg)
        queue.flush()
        queue.finish()

    return end - begin


class Renderer:
    """Step kernel bound to one context and one grid size.

    The program, queue and device buffers are kept between frames, only the
    scene record is uploaded again for each dispatch.
    """

    def __init__(self, ctx, width, height, field=None):
        self.ctx = ctx
        grid = SceneParameters(width=width, height=height)
        self.width, self.height = grid.width, grid.height
        self.field = field if field is not None else ConstantField()
        self.shape = global_size(self.width, self.height)
        self.elapsed = 0.0

        self.program = build(ctx, source(self.field))
        with checked("create kernel", BuildError):
            self.kernel = cl.Kernel(self.program, KERNEL_NAME)
        for device in ctx.devices:
            limit = self.kernel.get_work_group_info(
                cl.kernel_work_group_info.WORK_GROUP_SIZE, device
            )
            check_group_shape(device, limit=min(limit, device.max_work_group_size))

        mf = cl.mem_flags
        with checked("create buffers"):
            self.queue = cl.CommandQueue(ctx)
            self.scene_buf = cl.Buffer(ctx, mf.READ_ONLY, size=SCENE_DTYPE.itemsize)
        self.output_buf = None
        self.capacity = 0

    def _reserve(self, size):
        if size == self.capacity:
            return
        with checked("create output buffer"):
            self.output_buf = cl.Buffer(
                self.ctx, cl.mem_flags.READ_WRITE,
                size=size * cltypes.float(0).itemsize,
            )
        self.capacity = size

    def _run(self, scene, output, upload):
        if (scene.width, scene.height) != (self.width, self.height):
            raise SizingError("scene grid {}x{} does not match renderer grid {}x{}".format(
                scene.width, scene.height, self.width, self.height
            ))
        check_output(scene, output)
        if scene.cells == 0:
            logger.debug("empty grid %dx%d, nothing to dispatch", scene.width, scene.height)
            return output

        self._reserve(output.size)
        with checked("upload scene"):
            cl.enqueue_copy(self.queue, self.scene_buf, scene.to_array())
            if upload:
                cl.enqueue_copy(self.queue, self.output_buf, output)

        with checked("dispatch {}".format(KERNEL_NAME)):
            self.queue.finish()
            begin = time()
            self.kernel(self.queue, self.shape, GROUP_SHAPE, self.scene_buf, self.output_buf)
            self.queue.finish()
            self.elapsed = time() - begin

        with checked("read back"):
            cl.enqueue_copy(self.queue, output, self.output_buf)
            self.queue.finish()

        logger.debug(
            "dispatched %s over %dx%d at t=%g in %.3f ms",
            self.shape, self.width, self.height, scene.time, 1e3 * self.elapsed,
        )
        return output

    def render(self, scene):
        output = np.empty(scene.cells, dtype=cltypes.float)
        return self._run(scene, output, upload=False)

    def dispatch(self, scene, output):
        return self._run(scene, output, upload=True)
