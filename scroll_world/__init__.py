# scroll_world/__init__.py

# Procedural side-scrolling world: noise terrain, seeded flora, clouds and the
# streamer that keeps them materialized around a moving viewport.

from .config import build_settings
from .streaming import FruitConsumed, WorldStreamer

__all__ = ["build_settings", "FruitConsumed", "WorldStreamer"]
