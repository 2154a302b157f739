#!/usr/bin/env python3
"""
attractor density renderer CLI

renders iterated maps and ODE systems as density images:
- bounding box search, histogram accumulation, cosine palette tone mapping
- preview and high resolution renders with an elapsed-time readout
- parameter records saved/loaded as JSON, render settings as YAML

usage:
  python main.py list
  python main.py render -a trigonometric -o trig.png
  python main.py render -a symmetric --random-coefs --seed 7 --preview -o sym.png
  python main.py render --params saved.json --config render.yaml -o out.png
"""

import argparse
import json
import sys
import time
from typing import Optional

import numpy as np

from attractors import AVAILABLE_ATTRACTORS, Attractor, create_attractor
from persistence import RenderConfig, PersistenceError, load_params, save_params
from viz import Palette, save_png, show_image


def cmd_list(args) -> int:
    """print every attractor with its formula and coefficient ranges"""
    print("═" * 60)
    print("AVAILABLE ATTRACTORS")
    print("═" * 60)
    for key, cls in AVAILABLE_ATTRACTORS.items():
        attractor = cls()
        print(f"{key}: {attractor.name}")
        print(f"  {attractor.map_str}")
        ranges = ", ".join(f"[{low:g}, {high:g}]" for low, high in attractor.coef_ranges())
        print(f"  ranges: {ranges}")
    return 0


def build_attractor(args, rng) -> Attractor:
    """attractor from a saved record or the registry, with command line edits applied"""
    if args.params:
        attractor = load_params(args.params)
        if args.random_coefs:
            attractor.change_random_coefs(rng)
    elif args.random_coefs:
        attractor = AVAILABLE_ATTRACTORS[args.attractor].random(rng)
    else:
        attractor = create_attractor(args.attractor)

    if args.coefs is not None:
        attractor.set_coefs(args.coefs)
    if args.init is not None:
        attractor.set_init_x(args.init)
    if args.random_init:
        attractor.set_random_init(rng)
    return attractor


def cmd_render(args) -> int:
    """render one attractor image and write it as PNG"""
    for label, value in (('iterations', args.iterations), ('width', args.width), ('height', args.height)):
        if value is not None and value <= 0:
            print(f"❌ --{label} must be a positive integer, got {value}")
            return 1

    try:
        config = RenderConfig.from_yaml(args.config) if args.config else RenderConfig()
    except (OSError, ValueError) as e:
        print(f"❌ failed to read config {args.config}: {e}")
        return 1
    seed = args.seed if args.seed is not None else config.seed
    rng = np.random.default_rng(seed)

    try:
        attractor = build_attractor(args, rng)
    except (PersistenceError, ValueError) as e:
        print(f"❌ failed to load attractor: {e}")
        return 1
    except OSError as e:
        print(f"❌ failed to read {args.params}: {e}")
        return 1

    palette = config.palette
    if args.random_palette:
        palette = Palette.random(rng)

    if args.preview:
        n = args.iterations if args.iterations is not None else config.preview_iterations
        width = height = config.preview_size
    else:
        n = config.clamp_iterations(args.iterations if args.iterations is not None else config.iterations)
        width = args.width if args.width is not None else config.width
        height = args.height if args.height is not None else config.height

    print("═" * 60)
    print(f"RENDER: {attractor.name}")
    print("═" * 60)
    print(f"map: {attractor.map_str}")
    print(f"coefs: {attractor.coefs().tolist()}")
    print(f"initial state: {attractor.state.get_init_x().tolist()}")
    print(f"iterations: {n:,}  size: {width}x{height}")

    start = time.time()
    image = attractor.gen_img(n, width, height, palette)
    elapsed = time.time() - start
    print(f"rendered in {elapsed:.3f} sec")

    status = 0
    if args.output:
        try:
            save_png(args.output, image)
            print(f"saved image to: {args.output}")
        except (OSError, ValueError) as e:
            print(f"❌ failed to save {args.output}: {e}")
            status = 1

    if args.save_params:
        try:
            save_params(attractor, args.save_params)
            print(f"saved parameters to: {args.save_params}")
        except OSError as e:
            print(f"❌ failed to save {args.save_params}: {e}")
            status = 1

    if args.show:
        show_image(image, attractor.name, elapsed)
    return status


def main(argv: Optional[list] = None) -> int:
    parser = argparse.ArgumentParser(description='attractor density renderer')
    subparsers = parser.add_subparsers(dest='command', help='commands')

    subparsers.add_parser('list', help='list available attractors')

    render_parser = subparsers.add_parser('render', help='render an attractor image')
    render_parser.add_argument('-a', '--attractor', type=str, default='trigonometric',
                               choices=list(AVAILABLE_ATTRACTORS.keys()),
                               help='attractor type')
    render_parser.add_argument('--params', type=str, default=None,
                               help='JSON parameter record to load instead of --attractor')
    render_parser.add_argument('-c', '--coefs', type=json.loads, default=None,
                               help='coefficients as a JSON list')
    render_parser.add_argument('-i', '--init', type=json.loads, default=None,
                               help='initial state as a JSON list')
    render_parser.add_argument('--random-coefs', action='store_true',
                               help='draw random coefficients')
    render_parser.add_argument('--random-init', action='store_true',
                               help='draw a random initial state')
    render_parser.add_argument('--random-palette', action='store_true',
                               help='draw random palette channels')
    render_parser.add_argument('-s', '--seed', type=int, default=None,
                               help='seed for the random draws')
    render_parser.add_argument('-n', '--iterations', type=int, default=None,
                               help='number of iterations')
    render_parser.add_argument('-W', '--width', type=int, default=None,
                               help='image width')
    render_parser.add_argument('-H', '--height', type=int, default=None,
                               help='image height')
    render_parser.add_argument('--preview', action='store_true',
                               help='fast low resolution render')
    render_parser.add_argument('--config', type=str, default=None,
                               help='YAML render configuration')
    render_parser.add_argument('-o', '--output', type=str, default=None,
                               help='PNG output path')
    render_parser.add_argument('--save-params', type=str, default=None,
                               help='write the parameter record as JSON')
    render_parser.add_argument('--show', action='store_true',
                               help='display the result in a window')

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == 'list':
        return cmd_list(args)
    elif args.command == 'render':
        return cmd_render(args)
    else:
        print(f"❌ unknown command: {args.command}")
        return 1


if __name__ == '__main__':
    sys.exit(main())
