"""Command-line entry point (export mode only; the window needs a display)."""

import argparse
import contextlib
import io
import json
import os
import tempfile
import unittest

import unknown_pleasures


class ExportCliTests(unittest.TestCase):
    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def run_cli(self, *extra):
        args = ["--width", "20", "--depth", "10", "--size", "40x30", "--frames", "2",
                "--warmup", "1", "--log-level", "ERROR", *extra]
        return unknown_pleasures.main(args)

    def test_export_gif(self):
        out = os.path.join(self.tmp.name, "out.gif")
        self.assertEqual(self.run_cli("--export", out, "--no-titles", "--fps", "12"), 0)
        self.assertTrue(os.path.getsize(out) > 0)

    def test_params_file_is_used(self):
        params = os.path.join(self.tmp.name, "p.json")
        with open(params, "w") as f:
            json.dump({"wave": {"waveOccurProb": 1.0}, "scene": {"showTitles": False}}, f)
        out = os.path.join(self.tmp.name, "out.gif")
        self.assertEqual(self.run_cli("--params", params, "--export", out), 0)

    def test_config_errors_exit_with_2(self):
        bad = os.path.join(self.tmp.name, "bad.json")
        with open(bad, "w") as f:
            json.dump({"wave": {"waveOccurProb": 3}}, f)
        out = os.path.join(self.tmp.name, "out.gif")
        self.assertEqual(self.run_cli("--params", bad, "--export", out), 2)
        self.assertEqual(self.run_cli("--export", os.path.join(self.tmp.name, "out.bmp")), 2)
        self.assertEqual(self.run_cli("--export", out, "--fps", "0"), 2)

    def test_badly_typed_scene_exits_with_2(self):
        out = os.path.join(self.tmp.name, "out.gif")
        for scene in ({"fps": "30"}, {"cameraPosition": 5}, {"largeFontSize": "big"}):
            with self.subTest(scene=scene):
                bad = os.path.join(self.tmp.name, "scene.json")
                with open(bad, "w") as f:
                    json.dump({"scene": scene}, f)
                self.assertEqual(self.run_cli("--params", bad, "--export", out), 2)

    def test_negative_warmup_rejected(self):
        with self.assertRaises(argparse.ArgumentTypeError):
            unknown_pleasures.non_negative_int("-1")
        self.assertEqual(unknown_pleasures.non_negative_int("0"), 0)
        with contextlib.redirect_stderr(io.StringIO()):
            with self.assertRaises(SystemExit):
                self.run_cli("--export", os.path.join(self.tmp.name, "out.gif"), "--warmup", "-5")

    def test_size_parser(self):
        self.assertEqual(unknown_pleasures.parse_size("640x480"), (640, 480))
        with self.assertRaises(argparse.ArgumentTypeError):
            unknown_pleasures.parse_size("640")


if __name__ == "__main__":
    unittest.main()
