from __future__ import annotations

import numpy as np

# Fixed lattice hash, doubled so p[p[x] + y] never needs a modulo.
_perm = np.random.default_rng(0x5EED).permutation(256)
PERM = np.concatenate([_perm, _perm]).astype(np.int64)


def _fade(t):
    return t * t * t * (t * (t * 6.0 - 15.0) + 10.0)


def _lerp(t, a, b):
    return a + t * (b - a)


def _grad(h, x, y, z):
    # 12 cube-edge gradients picked from the low 4 bits of the hash
    h = h & 15
    u = np.where(h < 8, x, y)
    v = np.where(h < 4, y, np.where((h == 12) | (h == 14), x, z))
    return np.where(h & 1, -u, u) + np.where(h & 2, -v, v)


def perlin3(x, y, z) -> np.ndarray:
    """Improved gradient noise, vectorized over broadcastable inputs."""
    x, y, z = np.broadcast_arrays(
        np.asarray(x, dtype=np.float64),
        np.asarray(y, dtype=np.float64),
        np.asarray(z, dtype=np.float64),
    )
    fx, fy, fz = np.floor(x), np.floor(y), np.floor(z)
    X = fx.astype(np.int64) & 255
    Y = fy.astype(np.int64) & 255
    Z = fz.astype(np.int64) & 255
    x, y, z = x - fx, y - fy, z - fz
    u, v, w = _fade(x), _fade(y), _fade(z)

    p = PERM
    A = p[X] + Y
    AA = p[A] + Z
    AB = p[A + 1] + Z
    B = p[X + 1] + Y
    BA = p[B] + Z
    BB = p[B + 1] + Z

    return _lerp(
        w,
        _lerp(
            v,
            _lerp(u, _grad(p[AA], x, y, z), _grad(p[BA], x - 1, y, z)),
            _lerp(u, _grad(p[AB], x, y - 1, z), _grad(p[BB], x - 1, y - 1, z)),
        ),
        _lerp(
            v,
            _lerp(u, _grad(p[AA + 1], x, y, z - 1), _grad(p[BA + 1], x - 1, y, z - 1)),
            _lerp(u, _grad(p[AB + 1], x, y - 1, z - 1), _grad(p[BB + 1], x - 1, y - 1, z - 1)),
        ),
    )


def signed_noise(x, z, t):
    """Coherent noise in [-1, 1] at column ``x`` of row ``z`` at time ``t``.

    Deterministic and continuous; takes scalars or arrays and returns the
    same shape (a float for all-scalar input).
    """
    out = np.clip(perlin3(x, z, t), -1.0, 1.0)
    if out.ndim == 0:
        return float(out)
    return out
