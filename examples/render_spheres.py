#!/usr/bin/env python3
"""Render the demo sphere scene.

This script builds the four-sphere, three-light demo scene (or loads a
scene from a JSON config), renders it with a single bounce of primary rays
and writes the result as a PPM or PNG image.

Usage:
    python -m examples.render_spheres [options]

Options:
    --width WIDTH       Image width in pixels (default: 1024)
    --height HEIGHT     Image height in pixels (default: 768)
    --output OUTPUT     Output file path, .ppm or .png (default: out.ppm)
    --shading MODE      Shading mode: lighting or distance (default: lighting)
    --scene PATH        JSON scene config (default: built-in demo scene)
    --open              Open the result in the platform image viewer
    --cpu               Force the CPU backend
    --verbose           Enable debug logging

Scene config format:
    {
        "ambient": 0.0,
        "objects": [
            {"type": "sphere", "centre": [0, 0, -16], "radius": 2,
             "material": {"diffuse_colour": [0.4, 0.4, 0.3],
                          "specular_exponent": 50, "albedo": [0.3, 0.6]}}
        ],
        "lights": [{"position": [-20, 20, 20], "intensity": 1.5}]
    }

Example:
    python -m examples.render_spheres --width 512 --height 384 --open
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from pathlib import Path

import taichi as ti

logger = logging.getLogger("render_spheres")


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        description="Render the demo sphere scene.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--width",
        type=int,
        default=1024,
        help="Image width in pixels (default: 1024)",
    )
    parser.add_argument(
        "--height",
        type=int,
        default=768,
        help="Image height in pixels (default: 768)",
    )
    parser.add_argument(
        "--output",
        type=str,
        default="out.ppm",
        help="Output file path, .ppm or .png (default: out.ppm)",
    )
    parser.add_argument(
        "--shading",
        choices=["lighting", "distance"],
        default="lighting",
        help="Shading mode (default: lighting)",
    )
    parser.add_argument(
        "--scene",
        type=str,
        default=None,
        help="JSON scene config (default: built-in demo scene)",
    )
    parser.add_argument(
        "--open",
        action="store_true",
        help="Open the result in the platform image viewer",
    )
    parser.add_argument(
        "--cpu",
        action="store_true",
        help="Force the CPU backend",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )
    return parser.parse_args()


def load_scene_config(path: str):
    """Read a JSON scene file into a SceneConfig.

    Entries are checked when the config is turned into a Scene.

    Raises:
        OSError: If the file cannot be read.
        ValueError: If the file is not valid JSON or not a JSON object.
    """
    from src.lumen.scene.scene import SceneConfig

    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(f"Scene config must be a JSON object, got {type(data).__name__}")
    return SceneConfig(
        objects=data.get("objects", []),
        lights=data.get("lights", []),
        ambient=data.get("ambient", 0.0),
    )


def render_spheres(
    width: int = 1024,
    height: int = 768,
    output_path: str = "out.ppm",
    shading: str = "lighting",
    scene_path: str | None = None,
    open_result: bool = False,
) -> Path:
    """Render the scene and save it to file.

    Args:
        width: Image width in pixels.
        height: Image height in pixels.
        output_path: Output file path (.ppm or .png).
        shading: Shading mode name ("lighting" or "distance").
        scene_path: Optional JSON scene config. The demo camera is used either way.
        open_result: Open the saved image in the platform viewer.

    Returns:
        Path to the saved image file.
    """
    # Lazy imports to allow Taichi initialization first
    from src.lumen.preview.export import open_image, save_image
    from src.lumen.render.renderer import Renderer, RenderSettings
    from src.lumen.render.shading import ShadingMode
    from src.lumen.scene.presets import create_demo_camera, create_demo_scene
    from src.lumen.scene.scene import Scene

    if scene_path is not None:
        scene = Scene.from_config(load_scene_config(scene_path))
        camera = create_demo_camera()
        logger.info("Loaded scene from %s: %r", scene_path, scene)
    else:
        scene, camera = create_demo_scene()

    settings = RenderSettings(width=width, height=height, shading=ShadingMode[shading.upper()])
    renderer = Renderer(scene, camera, settings)

    print(f"Rendering {width}x{height} ({shading} shading)...")
    start_time = time.time()
    image = renderer.render()
    render_time = time.time() - start_time

    output_file = Path(output_path)
    save_image(image, output_file)

    print(f"Saved to: {output_file.absolute()}")
    print(f"Render time: {render_time:.2f}s")

    if open_result:
        open_image(output_file)

    return output_file


def main() -> int:
    """Main entry point."""
    args = parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    ti.init(arch=ti.cpu if args.cpu else ti.gpu)

    try:
        render_spheres(
            width=args.width,
            height=args.height,
            output_path=args.output,
            shading=args.shading,
            scene_path=args.scene,
            open_result=args.open,
        )
        return 0
    except (OSError, ValueError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
