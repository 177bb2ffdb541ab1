#!/usr/bin/env python3

import os
import sys
import logging
import argparse

import colorama

from wavefield.device import create_context, describe
from wavefield.errors import WavefieldError
from wavefield.image import preview, save
from wavefield.opencl import Renderer
from wavefield.scene import SceneParameters


CG = colorama.Fore.GREEN
CR = colorama.Fore.RED
C_ = colorama.Style.RESET_ALL

# 1024x1024 at 43 kHz, 8 points
WIDTH, HEIGHT = 1024, 1024
POINT = 8
FREQUENCY = 43000


def positive(value):
    n = int(value)
    if n <= 0:
        raise argparse.ArgumentTypeError("must be positive, got {}".format(value))
    return n

def make_parser():
    parser = argparse.ArgumentParser(
        prog="wavefield",
        description="Evaluate the field kernel on an OpenCL device and save it as a grayscale image."
    )
    parser.add_argument(
        "-p", "--platform", metavar="INDEX", type=int, default=-1,
        help="Index of OpenCL platform to run on. Chosen by pyopencl if omitted."
    )
    parser.add_argument("--width", metavar="CELLS", type=positive, default=WIDTH)
    parser.add_argument("--height", metavar="CELLS", type=positive, default=HEIGHT)
    parser.add_argument("--time", metavar="SEC", type=float, default=0.0)
    parser.add_argument("--freq", metavar="HZ", type=float, default=float(FREQUENCY))
    parser.add_argument("--count", metavar="N", type=int, default=POINT)
    parser.add_argument(
        "-n", "--frames", metavar="N", type=positive, default=1,
        help="Number of frames to render, `time` advances by --step between them."
    )
    parser.add_argument("--step", metavar="SEC", type=float, default=1/60)
    parser.add_argument(
        "-o", "--output", metavar="PATH", default="output.png",
        help="Image path. With several frames an index is appended to the name."
    )
    parser.add_argument(
        "--preview", action="store_true",
        help="Draw a low-resolution preview of each frame in the terminal."
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser

def frame_path(path, index):
    base, ext = os.path.splitext(path)
    return "{}-{:04}{}".format(base, index, ext or ".png")

def run(args):
    ctx = create_context(args.platform)
    describe(ctx)

    scene = SceneParameters(
        time=args.time, freq=args.freq, count=args.count,
        width=args.width, height=args.height,
    )
    renderer = Renderer(ctx, scene.width, scene.height)

    paths = []
    for i in range(args.frames):
        output = renderer.render(scene)
        path = args.output if args.frames == 1 else frame_path(args.output, i)
        save(output, scene.width, scene.height, path)
        print("[ {}ok{} ] t={:.3f}s {:.3f} ms: {}".format(
            CG, C_, scene.time, 1e3*renderer.elapsed, path
        ))
        if args.preview:
            print(preview(output, scene.width, scene.height))
        paths.append(path)
        scene = scene.with_time(scene.time + args.step)
    return paths

def main(argv=None):
    args = make_parser().parse_args(argv)

    colorama.init()
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        run(args)
    except WavefieldError as e:
        print("[ {}fail{} ] {}".format(CR, C_, e), file=sys.stderr)
        return 1
    finally:
        colorama.deinit()
    return 0


if __name__ == "__main__":
    sys.exit(main())
