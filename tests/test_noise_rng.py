"""Coherent noise and the shared random source."""

import unittest

import numpy as np

from pleasures.core.noise import signed_noise
from pleasures.core.rng import RandomSource


class NoiseTests(unittest.TestCase):
    def setUp(self):
        self.xs = np.linspace(-200.0, 200.0, 801)

    def test_deterministic(self):
        a = signed_noise(self.xs, -12.0, 3.25)
        b = signed_noise(self.xs.copy(), -12.0, 3.25)
        np.testing.assert_array_equal(a, b)

    def test_bounded_and_not_flat(self):
        values = np.concatenate([signed_noise(self.xs, z, t) for z in (-50.0, 0.0, 14.0) for t in (0.3, 7.9)])
        self.assertLessEqual(values.max(), 1.0)
        self.assertGreaterEqual(values.min(), -1.0)
        self.assertGreater(values.std(), 0.01)

    def test_continuous_in_time(self):
        a = signed_noise(self.xs, 4.0, 10.0)
        b = signed_noise(self.xs, 4.0, 10.0 + 1e-4)
        self.assertLess(float(np.abs(a - b).max()), 1e-2)

    def test_scalar_in_scalar_out(self):
        v = signed_noise(0.25, 1.5, 2.75)
        self.assertIsInstance(v, float)
        self.assertEqual(v, float(signed_noise(np.array([0.25]), 1.5, 2.75)[0]))


class RandomSourceTests(unittest.TestCase):
    def test_bernoulli_extremes(self):
        rng = RandomSource()
        self.assertFalse(any(rng.bernoulli(0.0) for _ in range(500)))
        self.assertTrue(all(rng.bernoulli(1.0) for _ in range(500)))

    def test_bernoulli_rate(self):
        rng = RandomSource(np.random.default_rng(11))
        hits = sum(rng.bernoulli(0.25) for _ in range(20000))
        self.assertAlmostEqual(hits / 20000, 0.25, delta=0.02)

    def test_gaussian_and_uniform(self):
        rng = RandomSource()
        self.assertEqual(rng.gaussian(3.0, 0.0), 3.0)
        for _ in range(500):
            v = rng.uniform(-2.0, 5.0)
            self.assertGreaterEqual(v, -2.0)
            self.assertLess(v, 5.0)

    def test_entropy_seeded_sources_differ(self):
        a, b = RandomSource(), RandomSource()
        self.assertNotEqual([a.uniform(0, 1) for _ in range(4)], [b.uniform(0, 1) for _ in range(4)])

    def test_spawned_children_are_independent(self):
        children = RandomSource().spawn(3)
        self.assertEqual(len(children), 3)
        draws = [tuple(c.uniform(0, 1) for _ in range(4)) for c in children]
        self.assertEqual(len(set(draws)), 3)


if __name__ == "__main__":
    unittest.main()
