# preview_strip.py

"""
================================================================================
WORLD STRIP PREVIEW
================================================================================
This script is a command-line tool for rendering a horizontal strip of the
world (terrain and trees, no clouds) to a single PNG. It is a debugging aid
for inspecting a seed or a set of parameters without starting the viewer.
Nothing it writes is ever loaded back.

Usage:
    python preview_strip.py --min-x -3000 --max-x 3000 --seed 42 --out strip.png
================================================================================
"""
import os
import sys
import json
import logging
import argparse
import time

import numpy as np
from PIL import Image
from tqdm import tqdm

from scroll_world import config as DEFAULTS
from scroll_world.flora import Flora
from scroll_world.grid import snap_down
from scroll_world.height_profile import HeightProfile
from scroll_world.terrain import Terrain

# --- Preview Constants (Rule 1) ---
CHUNK_WIDTH_UNITS = 32 # Grid columns generated per step
SURFACE_LINE_COLOR = (40, 40, 40)

def paint_rect(canvas: np.ndarray, obj, min_x: int):
    """Paints one object into the (height, width, 3) canvas, clipped to its bounds."""
    height, width, _ = canvas.shape
    x0 = int(obj.x) - min_x
    y0 = int(obj.y)
    x1 = min(width, x0 + int(obj.width))
    y1 = min(height, y0 + int(obj.height))
    x0, y0 = max(0, x0), max(0, y0)
    if x0 < x1 and y0 < y1:
        canvas[y0:y1, x0:x1] = obj.color

def render_strip(settings: dict, min_x: int, max_x: int, logger: logging.Logger) -> np.ndarray:
    """
    Renders [min_x, max_x) to an RGB array, chunk by chunk. The exact ground
    surface (before snapping) is overlaid as a thin line.
    """
    unit = settings['grid_unit']
    min_x = snap_down(min_x, unit)
    max_x = snap_down(max_x, unit)
    width = max_x - min_x
    height = settings['screen_height']

    height_profile = HeightProfile.from_settings(settings)
    terrain = Terrain(settings, height_profile, logger)
    flora = Flora(settings, terrain, logger)

    canvas = np.zeros((height, width, 3), dtype=np.uint8)
    canvas[:, :] = DEFAULTS.SKY_COLOR

    chunk_px = CHUNK_WIDTH_UNITS * unit
    chunk_starts = list(range(min_x, max_x, chunk_px))
    tree_count = 0
    for start in tqdm(chunk_starts, desc="Rendering strip"):
        stop = min(start + chunk_px, max_x)
        for column in terrain.create_columns_in_range(start, stop):
            for tile in column:
                paint_rect(canvas, tile, min_x)
        trees = flora.create_in_range(start, stop)
        tree_count += len(trees)
        # Foliage first so trunks stay visible through it, as in the viewer's layers.
        for trunk, foliage in trees.items():
            for obj in foliage:
                paint_rect(canvas, obj, min_x)
            paint_rect(canvas, trunk, min_x)

    xs = np.arange(min_x, max_x, dtype=np.float64)
    surface = np.clip(height_profile.heights_at(xs).astype(int), 0, height - 1)
    canvas[surface, np.arange(width)] = SURFACE_LINE_COLOR

    logger.info(f"Rendered {width}px wide strip with {tree_count} trees.")
    return canvas

def save_strip(canvas: np.ndarray, out_path: str):
    """Saves the canvas as a palettized PNG (the strip has few colors)."""
    directory = os.path.dirname(out_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    img = Image.fromarray(canvas, 'RGB')
    img = img.convert('P', palette=Image.Palette.ADAPTIVE, colors=256)
    img.save(out_path, optimize=True)

def main(argv=None):
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("StripPreview")

    parser = argparse.ArgumentParser(description="Render a strip of the world to a PNG.")
    parser.add_argument('--config', type=str, default=None, help="Path to a JSON config with 'world_parameters'.")
    parser.add_argument('--seed', type=int, default=None, help="World seed (overrides the config).")
    parser.add_argument('--min-x', type=int, default=-2000)
    parser.add_argument('--max-x', type=int, default=2000)
    parser.add_argument('--out', type=str, default="strip.png")
    args = parser.parse_args(argv)

    world_params = {}
    if args.config:
        if not os.path.exists(args.config):
            logger.error(f"Config file not found: '{args.config}'")
            return 1
        with open(args.config, 'r') as f:
            world_params = json.load(f).get('world_parameters', {})
    if args.seed is not None:
        world_params['seed'] = args.seed

    try:
        settings = DEFAULTS.build_settings(world_params)
    except ValueError as e:
        logger.error(f"Invalid configuration: {e}")
        return 1

    unit = settings['grid_unit']
    if snap_down(args.min_x, unit) >= snap_down(args.max_x, unit):
        logger.warning("Empty range requested; nothing to render.")
        return 0

    start_time = time.time()
    canvas = render_strip(settings, args.min_x, args.max_x, logger)
    save_strip(canvas, args.out)
    logger.info(f"Saved '{args.out}' in {time.time() - start_time:.2f} seconds.")
    return 0

if __name__ == '__main__':
    sys.exit(main())
