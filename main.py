#!/usr/bin/env python3
"""
orbtrace - A Python Path Tracer for Sphere Scenes

Main entry point for rendering scene files.
"""

import argparse
import os
import sys
import time
from pathlib import Path

from orbtrace.renderer import Renderer, RenderSettings, get_platform_info
from orbtrace.scene_parser import SceneParseError, load_scene

SCENE_ENV_VAR = 'ORBTRACE_SCENE'


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='orbtrace - A Python Path Tracer for Sphere Scenes',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f'''
Examples:
  python main.py scenes/spheres.yaml --output render.png
  python main.py scenes/spheres.json --threads 8 --seed 42
  {SCENE_ENV_VAR}=scenes/spheres.yaml python main.py
        '''
    )

    parser.add_argument('scene', nargs='?', default=None,
                        help=f'Scene file (JSON or YAML, default: ${SCENE_ENV_VAR})')
    parser.add_argument('--output', type=str, default='output/render.png', help='Output filename')
    parser.add_argument('--threads', type=int, default=0, help='Number of threads (0=auto)')
    parser.add_argument('--tile-size', type=int, default=32, help='Tile edge in pixels (default: 32)')
    parser.add_argument('--seed', type=int, default=None, help='Random seed for reproducible renders')
    parser.add_argument('--info', action='store_true', help='Show platform info and exit')
    return parser


def main(argv=None):
    """Main entry point."""
    args = build_parser().parse_args(argv)

    # Show platform info
    if args.info:
        info = get_platform_info()
        print("orbtrace Platform Info:")
        print(f"  System: {info['system']}")
        print(f"  Machine: {info['machine']}")
        print(f"  Processor: {info['processor']}")
        print(f"  Python: {info['python_version']}")
        print(f"  CPU Cores: {info['cpu_count']}")
        print(f"  ARM: {info['is_arm']}")
        print(f"  x86: {info['is_x86']}")
        print(f"  Apple Silicon: {info['is_apple_silicon']}")
        return 0

    scene_path = args.scene or os.environ.get(SCENE_ENV_VAR)
    if not scene_path:
        print(f"Error: no scene file given (pass a path or set {SCENE_ENV_VAR})", file=sys.stderr)
        return 1

    try:
        scene = load_scene(scene_path)
    except SceneParseError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # Print header
    print("=" * 60)
    print("orbtrace Path Tracer")
    print("=" * 60)

    info = get_platform_info()
    print(f"Platform: {info['system']} {info['machine']}")
    print(f"CPU Cores: {info['cpu_count']}")

    settings = RenderSettings(
        tile_size=args.tile_size,
        num_threads=args.threads,
        seed=args.seed
    )

    print(f"\nScene: {scene_path}")
    print(f"  Resolution: {scene.width}x{scene.height}")
    print(f"  Samples: {scene.samples}")
    print(f"  Ray Bounces: {scene.ray_bounces}")
    print(f"  Spheres: {len(scene)} ({len(scene.lights)} emissive)")
    print(f"  Threads: {settings.num_threads}")

    renderer = Renderer(settings)

    # Progress tracking
    last_progress = [0]

    def progress_callback(progress: float):
        pct = int(progress * 100)
        if pct > last_progress[0]:
            last_progress[0] = pct
            bar_len = 40
            filled = int(bar_len * progress)
            bar = '█' * filled + '░' * (bar_len - filled)
            print(f'\rRendering: [{bar}] {pct}%', end='', flush=True)

    renderer.set_progress_callback(progress_callback)

    print("\nRendering...")
    start_time = time.time()

    image = renderer.render(scene)

    elapsed = time.time() - start_time
    print(f"\nRender completed in {elapsed:.2f} seconds")
    if elapsed > 0:
        print(f"  Rays per second: {(scene.width * scene.height * scene.samples) / elapsed:.0f}")

    # Ensure output directory exists
    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    print(f"\nSaving to: {args.output}")
    renderer.save_image(image, str(output_path))

    print("\nDone!")
    return 0


if __name__ == '__main__':
    sys.exit(main())
