# scroll_world/runtime/world.py

"""
================================================================================
WORLD RUNTIME
================================================================================
This module provides the user-facing `World` class, the pygame host that
connects the streaming core to the screen. It registers the streamer's
lifecycle hooks against its own render layers, drives the clock, the
day/night cycle and the cloud, and draws everything through a camera.

Data Contract:
---------------
- Inputs (on initialization):
    - settings (dict): As produced by config.build_settings().
    - logger: A configured Python logging object.
- Public Methods:
    - update(real_delta_time, viewport_x): One tick. Returns streamer events.
    - pour_rain(delta_time): Lets the cloud shed rain (wired to a trigger
      chosen by the host, e.g. the avatar's jump).
    - draw(screen, camera): Renders the frame.
- Side Effects: Draws to the given pygame surface.
================================================================================
"""
import logging
from collections import defaultdict
from typing import Protocol

# This module requires Pygame for rendering, as it is the runtime component.
import pygame

from .. import config as DEFAULTS
from ..clouds import Cloud
from ..entities import KIND_FRUIT, KIND_LEAF
from ..streaming import WorldStreamer
from .day_night_cycle import DayNightCycle

class Camera(Protocol):
    """
    A protocol defining the interface the World's renderer expects for a camera.
    Any host camera providing these attributes and methods will do.
    """
    x: float
    y: float
    screen_width: int
    screen_height: int

    def world_to_screen(self, world_x: float, world_y: float) -> tuple[float, float]: ...

def leaf_image(surface: pygame.Surface, leaf, elapsed: float) -> pygame.Surface:
    """
    The leaf's surface rotated by its sway angle and grown by its sway growth.
    Before the sway starts the surface itself is returned.
    """
    angle, growth = leaf.sway(elapsed)
    if angle == 0 and growth == 0:
        return surface
    scale = (leaf.width + growth) / leaf.width
    return pygame.transform.rotozoom(surface, angle, scale)

class World:
    """
    The main runtime class for a streamed world. Handles rendering, time and lighting.
    """
    def __init__(self, settings: dict, logger: logging.Logger = None):
        self.settings = settings
        self.logger = logger or logging.getLogger(__name__)
        self.logger.info(f"Initializing world with seed {settings['seed']}")

        # --- 1. Initialize Core Components (Rule 7 - Composition) ---
        self.streamer = WorldStreamer(settings, self.logger)
        self.clock = self.streamer.clock
        self.day_night_cycle = DayNightCycle(self.clock, settings, self.streamer.height_at)
        self.cloud = Cloud(settings, self.logger)
        self.cloud.create_in_range(0, settings['screen_width'])

        # --- 2. Render layers, fed by the streamer's lifecycle hooks ---
        self._layers = defaultdict(dict)
        self.streamer.add_enter_view_hook(self._add_to_layer)
        self.streamer.add_leave_view_hook(self._remove_from_layer)

        # --- 3. Surfaces created on demand ---
        self._overlay_surface = None
        self._halo_surface = None
        self._leaf_surfaces = {}  # leaf key -> unrotated surface
        self._rain_surfaces = {}  # (size, color) -> surface

        self.logger.info("World ready.")

    # --- Lifecycle hooks ---
    def _add_to_layer(self, obj):
        self._layers[DEFAULTS.LAYER_BY_KIND[obj.kind]][obj.key] = obj

    def _remove_from_layer(self, obj):
        self._layers[DEFAULTS.LAYER_BY_KIND[obj.kind]].pop(obj.key, None)
        self._leaf_surfaces.pop(obj.key, None)

    def height_at(self, x: float) -> float:
        return self.streamer.height_at(x)

    def update(self, real_delta_time: float, viewport_x: float) -> list:
        """
        Updates the world's internal state. Should be called once per frame.

        Args:
            real_delta_time (float): The real-world time elapsed since the last frame, in seconds.
            viewport_x (float): World x the camera is anchored on (the avatar).

        Returns:
            list: Events raised by the streamer during this tick.
        """
        events = self.streamer.tick(viewport_x, real_delta_time)
        self.day_night_cycle.update()
        self.cloud.update(real_delta_time)
        return events

    def pour_rain(self, delta_time: float) -> list:
        return self.cloud.pour_rain(delta_time)

    def draw(self, screen: pygame.Surface, camera: Camera):
        """
        Renders sky, sun, cloud, world objects, rain and the night overlay.

        Args:
            screen (pygame.Surface): The main display surface to draw on.
            camera (Camera): A camera object that conforms to the Camera protocol.
        """
        screen.fill(DEFAULTS.SKY_COLOR)
        self._draw_sun(screen)
        self._draw_screen_space(screen, self.cloud.tiles)
        self._draw_world_objects(screen, camera)
        self._draw_rain(screen)
        self._draw_night_overlay(screen)

    def _draw_sun(self, screen: pygame.Surface):
        center = self.day_night_cycle.sun_center
        halo_radius = self.day_night_cycle.halo_size // 2
        if self._halo_surface is None:
            self._halo_surface = pygame.Surface((halo_radius * 2, halo_radius * 2), pygame.SRCALPHA)
            pygame.draw.circle(self._halo_surface, DEFAULTS.SUN_HALO_COLOR, (halo_radius, halo_radius), halo_radius)
        screen.blit(self._halo_surface, (center[0] - halo_radius, center[1] - halo_radius))
        pygame.draw.circle(screen, DEFAULTS.SUN_COLOR, center, self.day_night_cycle.sun_size // 2)

    def _draw_screen_space(self, screen: pygame.Surface, objects: list):
        for obj in objects:
            pygame.draw.rect(screen, obj.color, pygame.Rect(obj.x, obj.y, obj.width, obj.height))

    def _draw_world_objects(self, screen: pygame.Surface, camera: Camera):
        """Draws active objects layer by layer, back to front."""
        elapsed = self.clock.now
        for layer in sorted(self._layers):
            for obj in self._layers[layer].values():
                if obj.kind == KIND_FRUIT and not obj.is_present:
                    continue
                sx, sy = camera.world_to_screen(obj.x, obj.y)
                if sx > camera.screen_width or sx + obj.width < 0:
                    continue
                if obj.kind == KIND_LEAF:
                    image = leaf_image(self._leaf_surface(obj), obj, elapsed)
                    center = (sx + obj.width / 2, sy + obj.height / 2)
                    screen.blit(image, image.get_rect(center=center))
                elif obj.kind == KIND_FRUIT:
                    pygame.draw.ellipse(screen, obj.color, pygame.Rect(sx, sy, obj.width, obj.height))
                else:
                    pygame.draw.rect(screen, obj.color, pygame.Rect(sx, sy, obj.width, obj.height))

    def _leaf_surface(self, leaf) -> pygame.Surface:
        surface = self._leaf_surfaces.get(leaf.key)
        if surface is None:
            surface = pygame.Surface((int(leaf.width), int(leaf.height)), pygame.SRCALPHA)
            surface.fill(leaf.color)
            self._leaf_surfaces[leaf.key] = surface
        return surface

    def _rain_surface(self, drop) -> pygame.Surface:
        size = (max(1, int(drop.width)), max(1, int(drop.height)))
        surface = self._rain_surfaces.get((size, drop.color))
        if surface is None:
            surface = pygame.Surface(size)
            surface.fill(drop.color)
            self._rain_surfaces[(size, drop.color)] = surface
        return surface

    def _draw_rain(self, screen: pygame.Surface):
        for drop in self.cloud.raindrops:
            surface = self._rain_surface(drop)
            # Shared surface: the alpha is set right before each blit.
            surface.set_alpha(int(drop.opacity * 255))
            screen.blit(surface, (drop.x, drop.y))

    def _draw_night_overlay(self, screen: pygame.Surface):
        """Darkens the frame according to the day/night cycle."""
        screen_size = screen.get_size()

        # Create or resize the overlay surface if needed
        if self._overlay_surface is None or self._overlay_surface.get_size() != screen_size:
            self._overlay_surface = pygame.Surface(screen_size, pygame.SRCALPHA)

        alpha = int(self.day_night_cycle.night_opacity * 255)
        self._overlay_surface.fill((0, 0, 0, alpha))
        screen.blit(self._overlay_surface, (0, 0))

    # --- Public API for User Control ---
    def set_game_speed(self, new_scale: float):
        """
        Sets the speed of simulation time.
        0 = paused, 1 = real-time, > 1 = fast-forward.
        """
        self.clock.set_speed(new_scale)
        self.logger.info(f"Game speed set to {new_scale}x.")

    def get_time_string(self) -> str:
        """Returns a formatted string of the current simulation time."""
        return self.clock.get_time_string()
