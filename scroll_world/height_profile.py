# scroll_world/height_profile.py

"""
================================================================================
HEIGHT PROFILE
================================================================================
Maps a horizontal coordinate to the ground surface elevation by adding noise
to a fixed baseline. Screen coordinates grow downward, so a larger value means
lower ground.

Data Contract:
---------------
- Inputs (on initialization): baseline, amplitude and a NoiseField whose
  reference point is the same baseline.
- Public Methods:
    - height_at(x): Ground elevation at x (pure, total, continuous).
    - heights_at(xs): The same for a NumPy array of coordinates.
- Side Effects: None.
================================================================================
"""

import numpy as np

from .noise import NoiseField


class HeightProfile:
    """Ground elevation as baseline + noise(x, amplitude)."""

    def __init__(self, baseline: float, amplitude: float, noise_field: NoiseField):
        self.baseline = float(baseline)
        self.amplitude = float(amplitude)
        self.noise_field = noise_field

    @classmethod
    def from_settings(cls, settings: dict) -> 'HeightProfile':
        """Builds a profile whose noise field is referenced on the baseline."""
        noise_field = NoiseField(settings['seed'], settings['baseline'])
        return cls(settings['baseline'], settings['noise_amplitude'], noise_field)

    def height_at(self, x: float) -> float:
        return self.baseline + self.noise_field.noise(x, self.amplitude)

    def heights_at(self, xs: np.ndarray) -> np.ndarray:
        return self.baseline + self.noise_field.noise_array(xs, self.amplitude)
