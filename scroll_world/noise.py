# scroll_world/noise.py

"""
================================================================================
NOISE GENERATION UTILITIES
================================================================================
This module provides a layered 1D smooth-noise field built on classic 3D
gradient noise. It is designed to be a pure, stateless utility: the only state
a NoiseField carries is its immutable seed, reference wavelength and
permutation table.

Data Contract:
---------------
- Inputs:
    - p: A 512-entry permutation table (the 256-entry base table, doubled).
    - x: A horizontal world coordinate (float) or a NumPy array of them.
    - amplitude: Scales the final value.
- Outputs:
    - A float (or NumPy array) of noise values, roughly in [-amplitude, amplitude].
- Side Effects: None.
- Invariants: Repeated calls with the same x return bit-identical values.
================================================================================
"""

import numpy as np
from numba import njit

# Ken Perlin's reference permutation. Fixed so the field is reproducible
# across runs; the seed only offsets the sampling coordinates.
_BASE_PERMUTATION = np.array([
    151, 160, 137, 91, 90, 15, 131, 13, 201, 95, 96, 53, 194, 233, 7, 225,
    140, 36, 103, 30, 69, 142, 8, 99, 37, 240, 21, 10, 23, 190, 6, 148,
    247, 120, 234, 75, 0, 26, 197, 62, 94, 252, 219, 203, 117, 35, 11, 32,
    57, 177, 33, 88, 237, 149, 56, 87, 174, 20, 125, 136, 171, 168, 68, 175,
    74, 165, 71, 134, 139, 48, 27, 166, 77, 146, 158, 231, 83, 111, 229, 122,
    60, 211, 133, 230, 220, 105, 92, 41, 55, 46, 245, 40, 244, 102, 143, 54,
    65, 25, 63, 161, 1, 216, 80, 73, 209, 76, 132, 187, 208, 89, 18, 169,
    200, 196, 135, 130, 116, 188, 159, 86, 164, 100, 109, 198, 173, 186, 3, 64,
    52, 217, 226, 250, 124, 123, 5, 202, 38, 147, 118, 126, 255, 82, 85, 212,
    207, 206, 59, 227, 47, 16, 58, 17, 182, 189, 28, 42, 223, 183, 170, 213,
    119, 248, 152, 2, 44, 154, 163, 70, 221, 153, 101, 155, 167, 43, 172, 9,
    129, 22, 39, 253, 19, 98, 108, 110, 79, 113, 224, 232, 178, 185, 112, 104,
    218, 246, 97, 228, 251, 34, 242, 193, 238, 210, 144, 12, 191, 179, 162, 241,
    81, 51, 145, 235, 249, 14, 239, 107, 49, 192, 214, 31, 181, 199, 106, 157,
    184, 84, 204, 176, 115, 121, 50, 45, 127, 4, 150, 254, 138, 236, 205, 93,
    222, 114, 67, 29, 24, 72, 243, 141, 128, 195, 78, 66, 215, 61, 156, 180,
], dtype=np.int64)


def build_permutation_table() -> np.ndarray:
    """Returns the base permutation doubled to 512 entries to avoid index wrapping."""
    return np.concatenate([_BASE_PERMUTATION, _BASE_PERMUTATION])


@njit
def _lerp(t, a, b):
    "Linear interpolation."
    return a + t * (b - a)

@njit
def _fade(t):
    "6t^5 - 15t^4 + 10t^3"
    return t * t * t * (t * (t * 6 - 15) + 10)

@njit
def _gradient(h, x, y, z):
    """Dot product between the hashed gradient direction and the offset vector."""
    h = h & 15
    u = x if h < 8 else y
    if h < 4:
        v = y
    elif h == 12 or h == 14:
        v = x
    else:
        v = z
    return (u if (h & 1) == 0 else -u) + (v if (h & 2) == 0 else -v)

@njit
def smooth_noise_3d(p, x, y, z):
    """
    Classic 3D gradient noise at (x, y, z). The integer lattice coordinates
    are taken modulo 256 so any real input maps into the permutation table.
    """
    fx = np.floor(x)
    fy = np.floor(y)
    fz = np.floor(z)

    xi = int(fx) & 255
    yi = int(fy) & 255
    zi = int(fz) & 255

    x -= fx
    y -= fy
    z -= fz

    u = _fade(x)
    v = _fade(y)
    w = _fade(z)

    a = p[xi] + yi
    aa = p[a] + zi
    ab = p[a + 1] + zi
    b = p[xi + 1] + yi
    ba = p[b] + zi
    bb = p[b + 1] + zi

    near = _lerp(v,
                 _lerp(u, _gradient(p[aa], x, y, z), _gradient(p[ba], x - 1, y, z)),
                 _lerp(u, _gradient(p[ab], x, y - 1, z), _gradient(p[bb], x - 1, y - 1, z)))
    far = _lerp(v,
                _lerp(u, _gradient(p[aa + 1], x, y, z - 1), _gradient(p[ba + 1], x - 1, y, z - 1)),
                _lerp(u, _gradient(p[ab + 1], x, y - 1, z - 1), _gradient(p[bb + 1], x - 1, y - 1, z - 1)))
    return _lerp(w, near, far)

@njit
def layered_noise_1d(p, x, seed, start_point, amplitude):
    """
    Sums octaves of smooth noise from the largest wavelength (start_point)
    down to the last wavelength >= 1, halving each time. Each octave is
    weighted by its own wavelength so large features dominate.
    """
    value = 0.0
    wavelength = start_point
    while wavelength >= 1.0:
        value += smooth_noise_3d(p, x / wavelength + seed, seed, 0.0) * wavelength
        wavelength /= 2.0
    return value * amplitude / start_point

@njit
def layered_noise_1d_array(p, xs, seed, start_point, amplitude):
    """Vectorised form of layered_noise_1d for previews and batch sampling."""
    out = np.zeros(xs.shape[0])
    for i in range(xs.shape[0]):
        out[i] = layered_noise_1d(p, xs[i], seed, start_point, amplitude)
    return out


class NoiseField:
    """
    A seeded, smooth scalar function of a 1D coordinate.

    The reference point (start_point) fixes the largest wavelength of the
    field, so features scale with it.
    """
    def __init__(self, seed: int, start_point: float, permutation_table: np.ndarray = None):
        if start_point < 1:
            raise ValueError(f"start_point must be at least 1, got {start_point!r}")
        self.seed = float(seed)
        self.start_point = float(start_point)
        if permutation_table is None:
            permutation_table = build_permutation_table()
        self._p = permutation_table

    def noise(self, x: float, amplitude: float) -> float:
        """Returns the layered noise value at x, scaled by amplitude."""
        return float(layered_noise_1d(self._p, float(x), self.seed, self.start_point, float(amplitude)))

    def noise_array(self, xs: np.ndarray, amplitude: float) -> np.ndarray:
        """Samples the field at every coordinate of a 1D array."""
        xs = np.asarray(xs, dtype=np.float64)
        return layered_noise_1d_array(self._p, xs, self.seed, self.start_point, float(amplitude))
