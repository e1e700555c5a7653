"""Wave field layout and full ticks."""

import unittest

import numpy as np

from pleasures.core.field import WaveField
from pleasures.core.params import ConfigError, WaveParams
from pleasures.core.rng import RandomSource
from tests.helpers import zero_noise


class LayoutTests(unittest.TestCase):
    def test_row_and_column_counts(self):
        field = WaveField(400, 200)
        self.assertEqual(len(field), 100)
        self.assertEqual(field.columns, 800)
        self.assertEqual(field.rows[0].z, -100.0)
        self.assertEqual(field.rows[-1].z, 98.0)
        self.assertEqual(field.rows[0].xs[0], -200.0)
        self.assertEqual(field.rows[0].xs[-1], 199.5)

    def test_bad_geometry_is_rejected(self):
        for args in ((0, 10), (10, -4), (1, 10), (10, 1), (10.5, 10), (True, 10)):
            with self.subTest(args=args):
                with self.assertRaises(ConfigError):
                    WaveField(*args)
        with self.assertRaises(ConfigError):
            WaveField(4, 10, WaveParams(dx=3.0))


class TickTests(unittest.TestCase):
    def test_lengths_never_change(self):
        field = WaveField(40, 20, WaveParams(wave_occur_prob=0.5))
        n = field.columns
        for i in range(50):
            field.tick(i / 60.0)
            for row in field:
                self.assertEqual(len(row.stormy), n)
                self.assertEqual(len(row.calm), n)
        self.assertEqual(field.ticks, 50)

    def test_every_row_spawns_when_certain(self):
        field = WaveField(40, 20, WaveParams(wave_occur_prob=1.0))
        self.assertEqual(field.tick(0.0), len(field))
        field = WaveField(40, 20, WaveParams(wave_occur_prob=0.0))
        self.assertEqual(field.tick(0.0), 0)
        self.assertEqual(field.stats()["queued"], 0)

    def test_calm_matches_stormy_at_center_and_vanishes_at_left_edge(self):
        field = WaveField(40, 20, WaveParams(wave_occur_prob=0.3, small_wave_height_mean=1.0))
        center = int(np.where(field.rows[0].xs == 0.0)[0][0])
        for i in range(40):
            field.tick(i * 0.05)
        for row in field:
            self.assertEqual(row.calm[center], row.stormy[center])
            self.assertEqual(row.calm[0], 0.0)

    def test_outputs(self):
        field = WaveField(40, 20, rng=RandomSource(np.random.default_rng(3)), noise=zero_noise)
        field.tick(0.0)
        lines = field.polylines()
        self.assertEqual(len(lines), len(field))
        for row, verts in zip(field, lines):
            self.assertEqual(verts.shape, (field.columns, 3))
            np.testing.assert_array_equal(verts[:, 0], row.xs)
            np.testing.assert_array_equal(verts[:, 1], row.calm)
            self.assertTrue(np.all(verts[:, 2] == row.z))
        self.assertEqual(field.heights().shape, (len(field), field.columns))
        stats = field.stats()
        self.assertEqual(stats["ticks"], 1)
        self.assertEqual(stats["rows"], len(field))

    def test_quiet_field_stays_flat_inside(self):
        params = WaveParams(
            wave_occur_prob=0.0, small_wave_height_mean=0.0, small_wave_height_std=0.0,
            perlin_noise_magnitude=0.0,
        )
        field = WaveField(40, 20, params)
        for i in range(20):
            field.tick(i * 0.1)
        self.assertEqual(float(np.abs(field.heights()).max()), 0.0)


if __name__ == "__main__":
    unittest.main()
