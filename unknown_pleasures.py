# -*- coding: utf-8 -*-
"""
Unknown Pleasures
Stacked wave traces in the style of the 1979 album cover, live or exported.

    unknown-pleasures                      # live preview window
    unknown-pleasures --export waves.gif   # render offline
"""
import argparse
import logging
import sys
import time

from pleasures.core import ConfigError, SceneParams, WaveField, WaveParams, load_params
from pleasures.logging_config import setup_logging

logger = logging.getLogger("pleasures.app")

DEFAULT_WIDTH = 400
DEFAULT_DEPTH = 200


def parse_size(text):
    try:
        w, h = (int(v) for v in text.lower().split("x"))
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected WxH, got {text!r}")
    if w <= 0 or h <= 0:
        raise argparse.ArgumentTypeError(f"size must be positive, got {text!r}")
    return w, h


def non_negative_int(text):
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {text!r}")
    if value < 0:
        raise argparse.ArgumentTypeError(f"must not be negative, got {value}")
    return value


def build_parser():
    p = argparse.ArgumentParser(prog="unknown-pleasures", description=__doc__.strip().splitlines()[0])
    p.add_argument("--width", type=int, default=DEFAULT_WIDTH, help="width extent of the field")
    p.add_argument("--depth", type=int, default=DEFAULT_DEPTH, help="depth extent of the field")
    p.add_argument("--params", metavar="FILE", help="JSON parameter file (sections 'wave' and 'scene')")
    p.add_argument("--export", metavar="FILE", help="render to .gif or .mp4 instead of opening a window")
    p.add_argument("--frames", type=int, default=180, help="frames to export")
    p.add_argument("--fps", type=int, default=None, help="frame rate (defaults to the scene fps)")
    p.add_argument("--warmup", type=non_negative_int, default=120, help="ticks simulated before the first exported frame")
    p.add_argument("--size", type=parse_size, default=(800, 800), help="output size WxH")
    p.add_argument("--no-titles", action="store_true", help="hide the title lettering")
    p.add_argument("--log-level", default="INFO", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    p.add_argument("--log-file", default=None)
    return p


def run_window(field, scene, size):
    from PySide6.QtCore import QTimer
    from PySide6.QtWidgets import QApplication, QMainWindow

    from pleasures.utils.gl_preview import GLPreviewWidget

    class MainWindow(QMainWindow):
        def __init__(self):
            super().__init__()
            self.setWindowTitle("Unknown Pleasures")
            self.resize(*size)
            self.field = field
            self.preview = GLPreviewWidget(scene, self)
            self.setCentralWidget(self.preview)
            self.start_time = time.perf_counter()
            self.timer = QTimer(self)
            self.timer.timeout.connect(self.on_tick)
            self.timer.start(max(1, int(1000 / scene.fps)))

        def on_tick(self):
            # one simulation step per drawn frame
            self.field.tick(time.perf_counter() - self.start_time)
            self.preview.set_polylines(self.field.polylines())
            if self.field.ticks % (scene.fps * 10) == 0:
                logger.debug("stats %s", self.field.stats())

    app = QApplication.instance() or QApplication(sys.argv)
    w = MainWindow()
    w.show()
    return app.exec()


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(getattr(logging, args.log_level), args.log_file)
    try:
        if args.params:
            wave, scene = load_params(args.params)
        else:
            wave, scene = WaveParams(), SceneParams()
        overrides = {}
        if args.no_titles:
            overrides["showTitles"] = False
        if args.fps is not None:
            overrides["fps"] = args.fps
        if overrides:
            scene = SceneParams.from_mapping({**scene.to_mapping(), **overrides})
        field = WaveField(args.width, args.depth, wave)
        if args.export:
            from pleasures.utils.export import export_animation

            export_animation(
                args.export, field, frames=args.frames, fps=scene.fps, size=args.size, scene=scene,
                warmup=args.warmup,
                progress=lambda pct: logger.debug("export %d%%", pct),
            )
            logger.info("Exported %s", args.export)
            return 0
    except ConfigError as e:
        logger.error("%s", e)
        return 2
    return run_window(field, scene, args.size)


if __name__ == "__main__":
    sys.exit(main())
