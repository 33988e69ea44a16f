# viewer.py

"""
================================================================================
STREAMED WORLD VIEWER
================================================================================
A small pygame host for the streaming world: a box stand-in for the avatar
walks over the terrain, the camera follows it, and the world is generated and
evicted around it as it moves.

Usage:
    python viewer.py [--config path/to/config.json] [--seed N]

Controls:
- Walk: A / D or Left / Right
- Jump (also makes the cloud rain): Space
- Change Game Speed: 1 (Paused), 2 (Normal), 3 (Fast)
- Quit: ESC or close window
================================================================================
"""
import os
import sys
import json
import logging
import argparse

import numpy as np
import pygame

from scroll_world import config as DEFAULTS
from scroll_world.runtime.world import World

# --- Application Constants (Rule 1) ---
CLOCK_TICK_RATE = 60
AVATAR_SIZE = 50
AVATAR_SPEED = 400.0 # px/s
AVATAR_JUMP_VELOCITY = -650.0 # px/s
AVATAR_GRAVITY = 600.0 # px/s^2
MAX_ENERGY = 100.0
ENERGY_TEXT_POSITION = (10, 20)

class FollowCamera:
    """Keeps the avatar horizontally centred; the vertical axis is fixed."""
    def __init__(self, screen_width: int, screen_height: int):
        self.screen_width = screen_width
        self.screen_height = screen_height
        self.x = 0.0
        self.y = screen_height / 2

    def world_to_screen(self, world_x, world_y):
        screen_x = world_x - self.x + self.screen_width / 2
        screen_y = world_y - self.y + self.screen_height / 2
        return screen_x, screen_y

class Avatar:
    """Just enough of an avatar to drive the viewport and touch fruit."""
    def __init__(self, x: float, y: float):
        self.x = x
        self.y = y
        self.velocity_y = 0.0
        self.on_ground = False
        self.energy = MAX_ENERGY

    def update(self, direction: int, delta_time: float, ground_top: float):
        self.x += direction * AVATAR_SPEED * delta_time
        self.velocity_y += AVATAR_GRAVITY * delta_time
        self.y += self.velocity_y * delta_time
        if self.y + AVATAR_SIZE >= ground_top:
            self.y = ground_top - AVATAR_SIZE
            self.velocity_y = 0.0
            self.on_ground = True
        else:
            self.on_ground = False

    def jump(self) -> bool:
        if not self.on_ground:
            return False
        self.velocity_y = AVATAR_JUMP_VELOCITY
        self.on_ground = False
        return True

    def add_energy(self, amount: float):
        self.energy = min(MAX_ENERGY, self.energy + amount)

class ViewerApp:
    """The main application class for the streamed world viewer."""
    def __init__(self, settings: dict):
        self.logger = logging.getLogger(__name__)

        self.logger.info("Initializing Pygame...")
        pygame.init()

        self.screen_width = settings['screen_width']
        self.screen_height = settings['screen_height']
        self.screen = pygame.display.set_mode((self.screen_width, self.screen_height))
        pygame.display.set_caption("Scroll World Viewer")
        self.font = pygame.font.Font(None, 36)

        self.clock = pygame.time.Clock()
        self.is_running = True

        self.world = World(settings, self.logger)
        self.camera = FollowCamera(self.screen_width, self.screen_height)
        start_x = self.screen_width / 2
        self.avatar = Avatar(start_x, self.world.height_at(start_x) - AVATAR_SIZE * 2)

    def run(self):
        """The main application loop."""
        while self.is_running:
            delta_time = self.clock.tick(CLOCK_TICK_RATE) / 1000.0
            self.handle_events(delta_time)
            self.update(delta_time)
            self.draw()

        self.logger.info("Exiting viewer.")
        pygame.quit()

    def handle_events(self, delta_time: float):
        """Processes user input and other events."""
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.is_running = False
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.is_running = False
                elif event.key == pygame.K_SPACE and self.avatar.jump():
                    self.world.pour_rain(delta_time)
                elif event.key == pygame.K_1:
                    self.world.set_game_speed(0)
                elif event.key == pygame.K_2:
                    self.world.set_game_speed(1)
                elif event.key == pygame.K_3:
                    self.world.set_game_speed(4)

    def update(self, delta_time: float):
        keys = pygame.key.get_pressed()
        direction = 0
        if keys[pygame.K_a] or keys[pygame.K_LEFT]:
            direction -= 1
        if keys[pygame.K_d] or keys[pygame.K_RIGHT]:
            direction += 1

        center_x = self.avatar.x + AVATAR_SIZE / 2
        self.avatar.update(direction, delta_time, self.world.streamer.terrain.top_at(center_x))
        self.camera.x = self.avatar.x + AVATAR_SIZE / 2

        # Contact first, so this tick's events already carry the energy.
        for fruit in self.world.streamer.fruits_touching(self.avatar.x, self.avatar.y, AVATAR_SIZE, AVATAR_SIZE):
            self.world.streamer.consume_fruit(fruit)

        for event in self.world.update(delta_time, self.camera.x):
            self.avatar.add_energy(event.amount)
            self.logger.debug(f"Ate fruit at {event.position}: +{event.amount} energy.")

    def draw(self):
        """Handles all rendering for the application."""
        self.world.draw(self.screen, self.camera)

        ax, ay = self.camera.world_to_screen(self.avatar.x, self.avatar.y)
        pygame.draw.rect(self.screen, (240, 240, 255), pygame.Rect(ax, ay, AVATAR_SIZE, AVATAR_SIZE))

        text = self.font.render(f"{round(self.avatar.energy)}%", True, (0, 0, 0))
        self.screen.blit(text, ENERGY_TEXT_POSITION)

        active = len(self.world.streamer.active_objects)
        pygame.display.set_caption(
            f"Scroll World Viewer | {self.world.get_time_string()} | Active objects: {active}"
        )
        pygame.display.flip()

def load_settings(config_path: str, seed: int = None) -> dict:
    """Reads the optional JSON config and consolidates it over the defaults."""
    world_params = {}
    if config_path:
        if not os.path.exists(config_path):
            raise FileNotFoundError(f"Config file not found: '{config_path}'")
        with open(config_path, 'r') as f:
            world_params = json.load(f).get('world_parameters', {})
    if seed is not None:
        world_params['seed'] = seed
    elif 'seed' not in world_params:
        # A fresh world every run unless a seed is pinned.
        world_params['seed'] = int(np.random.default_rng().integers(0, 2**31))
    return DEFAULTS.build_settings(world_params)

if __name__ == '__main__':
    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')
    logger = logging.getLogger("Viewer")

    parser = argparse.ArgumentParser(description="Walk through a procedurally streamed world.")
    parser.add_argument('--config', type=str, default=None, help="Path to a JSON config with 'world_parameters'.")
    parser.add_argument('--seed', type=int, default=None, help="World seed (random if omitted).")
    args = parser.parse_args()

    try:
        settings = load_settings(args.config, args.seed)
    except (FileNotFoundError, ValueError) as e:
        logger.error(f"Could not start viewer: {e}")
        sys.exit(1)

    app = ViewerApp(settings)
    app.run()
