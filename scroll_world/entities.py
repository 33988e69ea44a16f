# scroll_world/entities.py

"""
================================================================================
WORLD ENTITIES
================================================================================
Plain data objects for everything the generators place in the world. They
carry a position, a kind and a visual descriptor (size and color) and nothing
engine-specific: drawing, physics and collision stay with the host.

Data Contract:
---------------
- Every object exposes `kind`, `x`, `y` (top-left corner), `width`, `height`
  and `color`, plus `position`, `key` and `is_at(position)`.
- Objects compare by identity. Two generator calls over the same location
  produce equal keys but distinct instances; deduplication is the streaming
  layer's job.
- Fruit is the only entity with a state machine driven by the tick clock.
================================================================================
"""

# --- Kinds (Rule 1) ---
KIND_GROUND = "ground"
KIND_TRUNK = "trunk"
KIND_LEAF = "leaf"
KIND_FRUIT = "fruit"
KIND_CLOUD = "cloud"
KIND_RAINDROP = "raindrop"

# --- Fruit states ---
FRUIT_PRESENT = "present"
FRUIT_CONSUMED = "consumed"


class WorldObject:
    """Position, kind and visual descriptor of one placed object."""

    def __init__(self, kind: str, x: float, y: float, width: float, height: float, color: tuple):
        self.kind = kind
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.color = color

    @property
    def position(self) -> tuple:
        return (self.x, self.y)

    @property
    def key(self) -> tuple:
        """(kind, x, y): at most one active object may hold a given key."""
        return (self.kind, self.x, self.y)

    @property
    def center(self) -> tuple:
        return (self.x + self.width / 2, self.y + self.height / 2)

    def is_at(self, position: tuple) -> bool:
        return self.position == tuple(position)

    def overlaps(self, x: float, y: float, width: float, height: float) -> bool:
        """Axis-aligned rectangle overlap test, used by hosts for contact checks."""
        return (self.x < x + width and x < self.x + self.width and
                self.y < y + height and y < self.y + self.height)

    def __repr__(self):
        return f"{type(self).__name__}(kind={self.kind!r}, x={self.x}, y={self.y})"


class Tile(WorldObject):
    """One square ground block. Collidable."""
    collidable = True

    def __init__(self, x: int, y: int, size: int, color: tuple):
        super().__init__(KIND_GROUND, x, y, size, size, color)


class TerrainColumn:
    """The stacked tiles of one grid x, top tile first."""

    def __init__(self, x: int, top_y: int, tiles: list):
        self.x = x
        self.top_y = top_y
        self.tiles = tiles

    def __len__(self):
        return len(self.tiles)

    def __iter__(self):
        return iter(self.tiles)

    def __repr__(self):
        return f"TerrainColumn(x={self.x}, top_y={self.top_y}, depth={len(self.tiles)})"


class Trunk(WorldObject):
    """A tree trunk standing on the ground at base_y and extending upward."""
    collidable = True

    def __init__(self, x: int, base_y: int, height_blocks: int, unit: int, color: tuple):
        height = height_blocks * unit
        super().__init__(KIND_TRUNK, x, base_y - height, unit, height, color)
        self.base_y = base_y
        self.height_blocks = height_blocks

    @property
    def top_y(self) -> int:
        return self.y


class Leaf(WorldObject):
    """
    A foliage cell holding a leaf. The sway is cosmetic and a pure function of
    elapsed time, so an evicted leaf has nothing to cancel.
    """
    collidable = False

    def __init__(self, x: int, y: int, unit: int, color: tuple, sway_delay: float,
                 sway_period: float, min_angle: float, max_angle: float, growth: float):
        super().__init__(KIND_LEAF, x, y, unit, unit, color)
        self.sway_delay = sway_delay
        self.sway_period = sway_period
        self.min_angle = min_angle
        self.max_angle = max_angle
        self.growth = growth

    def sway(self, elapsed: float) -> tuple:
        """Returns (angle_degrees, extra_size_pixels) at the given elapsed time."""
        t = elapsed - self.sway_delay
        if t < 0:
            return (0.0, 0.0)
        # Back-and-forth: 0 -> 1 over one period, then 1 -> 0 over the next.
        phase = (t / self.sway_period) % 2.0
        fraction = phase if phase <= 1.0 else 2.0 - phase
        angle = self.min_angle + fraction * (self.max_angle - self.min_angle)
        return (angle, fraction * self.growth)


class Fruit(WorldObject):
    """
    A foliage cell holding a fruit.

    Present -> Consumed on contact (grants energy once), Consumed -> Present
    when the respawn deadline elapses. The deadline lives on the object; once
    the object is evicted nobody refreshes it again, so the timer is forgotten.
    """
    collidable = False

    def __init__(self, x: int, y: int, unit: int, color: tuple, energy: float, respawn_seconds: float):
        super().__init__(KIND_FRUIT, x, y, unit, unit, color)
        self.energy = energy
        self.respawn_seconds = respawn_seconds
        self.state = FRUIT_PRESENT
        self.respawn_deadline = None

    @property
    def is_present(self) -> bool:
        return self.state == FRUIT_PRESENT

    def consume(self, now: float):
        """
        Marks the fruit eaten at simulation time `now`.

        Returns:
            The energy granted, or None if the fruit was already consumed.
        """
        if self.state != FRUIT_PRESENT:
            return None
        self.state = FRUIT_CONSUMED
        self.respawn_deadline = now + self.respawn_seconds
        return self.energy

    def refresh(self, now: float) -> bool:
        """Regrows the fruit if its deadline has passed. Returns True on regrowth."""
        if self.state == FRUIT_CONSUMED and now >= self.respawn_deadline:
            self.state = FRUIT_PRESENT
            self.respawn_deadline = None
            return True
        return False


class CloudTile(WorldObject):
    """One cell of a cloud mask. Lives in screen space."""
    collidable = False

    def __init__(self, x: float, y: float, unit: int, color: tuple, column: int, row: int):
        super().__init__(KIND_CLOUD, x, y, unit, unit, color)
        self.column = column
        self.row = row


class Raindrop(WorldObject):
    """
    A falling drop that fades out linearly and then reports itself dead.
    Self-terminating: it is never tracked by the streamer.
    """
    collidable = False

    def __init__(self, x: float, y: float, size: float, color: tuple, gravity: float, fade_seconds: float):
        super().__init__(KIND_RAINDROP, x, y, size, size, color)
        self.gravity = gravity
        self.fade_seconds = fade_seconds
        self.velocity_y = 0.0
        self.age = 0.0
        self.opacity = 1.0

    @property
    def alive(self) -> bool:
        return self.age < self.fade_seconds

    def update(self, delta_time: float) -> bool:
        """Advances the fall and fade. Returns False once the drop has faded out."""
        self.velocity_y += self.gravity * delta_time
        self.y += self.velocity_y * delta_time
        self.age += delta_time
        self.opacity = max(0.0, 1.0 - self.age / self.fade_seconds)
        return self.alive

