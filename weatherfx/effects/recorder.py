"""
Effect Recorder - renders effects offline to Pillow frames and animations.

Drives a private FrameScheduler and RasterSurface through N ticks, copying
the surface after each one.
"""

import logging
import random
from pathlib import Path
from typing import List, Optional, Tuple, Union

from PIL import Image

from .conditions import Condition, EffectVariant
from .engine import ParticleEngine
from .scheduler import FrameScheduler
from .surface import RGB, RasterSurface

logger = logging.getLogger(__name__)

# Sky backdrops used when the caller asks for one by condition
SKY_BACKGROUNDS = {
    Condition.SUNNY: (56, 132, 214),
    Condition.CLOUDY: (112, 128, 144),
    Condition.RAINY: (47, 62, 82),
    Condition.SNOWY: (176, 190, 205),
    Condition.NONE: (20, 24, 32),
}


def parse_size(value: str) -> Tuple[int, int]:
    """Parse 'WIDTHxHEIGHT' into a pair of positive ints."""
    try:
        width_text, height_text = value.lower().split("x", 1)
        width, height = int(width_text), int(height_text)
    except (AttributeError, ValueError):
        raise ValueError(f"Size must look like 800x600, got {value!r}")
    if width <= 0 or height <= 0:
        raise ValueError(f"Size must be positive, got {value!r}")
    return width, height


def parse_color(value: Optional[str]) -> Optional[RGB]:
    """Parse '#RRGGBB' (or 'none'/'transparent') into an RGB tuple."""
    if value is None:
        return None
    text = value.strip().lstrip("#")
    if text.lower() in ("", "none", "transparent"):
        return None
    if len(text) != 6:
        raise ValueError(f"Color must look like #1E90FF, got {value!r}")
    try:
        return int(text[0:2], 16), int(text[2:4], 16), int(text[4:6], 16)
    except ValueError:
        raise ValueError(f"Color must look like #1E90FF, got {value!r}")


def record_frames(condition: Union[Condition, str], intensity=1.0,
                  size: Tuple[int, int] = (800, 600), frames: int = 60,
                  variant: Union[EffectVariant, str] = EffectVariant.SCENIC,
                  background: Optional[RGB] = None,
                  seed: Optional[int] = None) -> List[Image.Image]:
    """Render `frames` consecutive frames of an effect."""
    width, height = size
    surface = RasterSurface(width, height, background=background)
    scheduler = FrameScheduler()
    engine = ParticleEngine(scheduler, surface=surface, variant=variant, rng=random.Random(seed))

    handle = engine.start(condition, intensity)
    if handle is None:
        return []

    images = []
    try:
        for _ in range(max(0, frames)):
            scheduler.tick()
            images.append(surface.snapshot())
    finally:
        handle.stop()

    logger.info(f"Rendered {len(images)} frames of {engine.condition.value} "
                f"({engine.variant.value}, {len(engine.particles)} particles)")
    return images


def save_animation(frames: List[Image.Image], path: Union[str, Path], fps: int = 30) -> Path:
    """
    Write frames as an animated GIF or PNG (chosen by the file suffix).

    A single frame is written as a still image.
    """
    if not frames:
        raise ValueError("No frames to save")
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    duration = max(1, int(round(1000 / max(1, fps))))
    suffix = path.suffix.lower()

    if len(frames) == 1:
        frames[0].save(path)
    elif suffix == ".gif":
        # GIF has a 1-bit alpha channel; disposal 2 clears each frame
        frames[0].save(path, save_all=True, append_images=frames[1:],
                       duration=duration, loop=0, disposal=2)
    elif suffix in (".png", ".apng"):
        frames[0].save(path, format="PNG", save_all=True, append_images=frames[1:],
                       duration=duration, loop=0)
    else:
        raise ValueError(f"Unsupported animation format: {path.suffix or '(none)'}")

    logger.info(f"Saved {len(frames)} frames to {path}")
    return path
