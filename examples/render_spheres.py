#!/usr/bin/env python3
"""Render the two-sphere scene.

Renders a small sphere above a large ground sphere with normal shading and
a sky gradient, and writes the result as a plain-text PPM image. Scanline
progress is reported on stderr so the image can be piped from stdout.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH           Image width in pixels (default: 400)
    --aspect-ratio RATIO    Aspect ratio as W:H or a number (default: 16:9)
    --samples SAMPLES       Samples per pixel (default: 10)
    --no-antialias          One ray through each pixel center
    --seed SEED             Sample jitter seed (default: 0)
    --output OUTPUT         PPM output path, "-" for stdout (default: -)
    --png PNG               Also save a PNG copy to this path
    --cpu                   Force the CPU backend
    --quiet                 Suppress progress output

Example:
    python -m examples.render_spheres > image.ppm
    python -m examples.render_spheres --width 800 --samples 50 --output spheres.ppm
"""

from __future__ import annotations

import argparse
import sys
import time

import taichi as ti


def parse_aspect_ratio(value: str) -> float:
    """Parse an aspect ratio given as ``W:H`` or as a plain number."""
    try:
        if ":" in value:
            w, h = value.split(":", 1)
            ratio = float(w) / float(h)
        else:
            ratio = float(value)
    except (ValueError, ZeroDivisionError) as e:
        raise argparse.ArgumentTypeError(f"invalid aspect ratio: {value!r}") from e
    if not ratio > 0.0:
        raise argparse.ArgumentTypeError(f"aspect ratio must be positive: {value!r}")
    return ratio


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line parser."""
    parser = argparse.ArgumentParser(
        description="Render the two-sphere scene as a PPM image.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=400,
        help="Image width in pixels (default: 400)",
    )
    parser.add_argument(
        "--aspect-ratio",
        type=parse_aspect_ratio,
        default=16.0 / 9.0,
        help="Aspect ratio as W:H or a number (default: 16:9)",
    )
    parser.add_argument(
        "--samples",
        type=int,
        default=10,
        help="Number of samples per pixel (default: 10)",
    )
    parser.add_argument(
        "--no-antialias",
        action="store_true",
        help="Trace one ray through each pixel center",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=0,
        help="Sample jitter seed (default: 0)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="-",
        help='PPM output path, "-" for stdout (default: -)',
    )
    parser.add_argument(
        "--png",
        type=str,
        default=None,
        help="Also save a PNG copy to this path",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress progress output",
    )
    return parser


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command-line arguments."""
    return build_parser().parse_args(argv)


def init_taichi(force_cpu: bool = False, quiet: bool = False) -> None:
    """Initialize Taichi, preferring the GPU backend."""
    if force_cpu:
        ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False)
        if not quiet:
            print("Using CPU backend", file=sys.stderr)
        return

    try:
        ti.init(arch=ti.gpu, default_fp=ti.f64, fast_math=False)
        if not quiet:
            print("Using GPU backend", file=sys.stderr)
    except Exception:
        ti.init(arch=ti.cpu, default_fp=ti.f64, fast_math=False)
        if not quiet:
            print("Using CPU backend", file=sys.stderr)


def render_spheres(
    width: int = 400,
    aspect_ratio: float = 16.0 / 9.0,
    samples: int = 10,
    antialias: bool = True,
    seed: int = 0,
    output_path: str = "-",
    png_path: str | None = None,
    quiet: bool = False,
):
    """Render the two-sphere scene and write it out.

    Args:
        width: Image width in pixels.
        aspect_ratio: Image width divided by height.
        samples: Number of samples per pixel.
        antialias: If False, one ray per pixel center.
        seed: Sample jitter seed.
        output_path: PPM output path, or "-" for stdout.
        png_path: Optional PNG output path.
        quiet: If True, suppress progress output.

    Returns:
        The encoded image as a (height, width, 3) uint8 array.
    """
    # Lazy imports to allow Taichi initialization first
    from tiray.core.renderer import render
    from tiray.output.export import save_png, save_ppm
    from tiray.scene.spheres import SceneParams, create_sphere_scene

    params = SceneParams(
        aspect_ratio=aspect_ratio,
        image_width=width,
        samples_per_pixel=samples,
        antialias=antialias,
        seed=seed,
    )
    world, camera = create_sphere_scene(params)

    if not quiet:
        print(
            f"Rendering {camera.image_width}x{camera.image_height}, "
            f"{camera.samples_per_pixel if antialias else 1} samples per pixel...",
            file=sys.stderr,
        )

    start_time = time.time()
    log = None if quiet else sys.stderr
    out = sys.stdout if output_path == "-" else None
    pixels = render(camera, world, out=out, log=log)

    if output_path != "-":
        save_ppm(pixels, output_path)
        if not quiet:
            print(f"Saved to: {output_path}", file=sys.stderr)
    if png_path is not None:
        save_png(pixels, png_path)
        if not quiet:
            print(f"Saved to: {png_path}", file=sys.stderr)

    if not quiet:
        print(f"Total time: {time.time() - start_time:.2f}s", file=sys.stderr)

    return pixels


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = parse_args(argv)

    init_taichi(force_cpu=args.cpu, quiet=args.quiet)

    try:
        render_spheres(
            width=args.width,
            aspect_ratio=args.aspect_ratio,
            samples=args.samples,
            antialias=not args.no_antialias,
            seed=args.seed,
            output_path=args.output,
            png_path=args.png,
            quiet=args.quiet,
        )
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
