"""
Main entry point for the LayerZoom debug app.

Usage:
    python -m layerzoom_app [--relative-scale 3] [--expand-fraction 0.3] [--debug]
    layerzoom-debug  (if installed)
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from datetime import datetime


def setup_exception_hook():
    """Setup global exception hook to catch Qt exceptions."""
    log_file = Path.cwd() / "crash_log.txt"

    def exception_hook(exctype, value, tb):
        error_msg = ''.join(traceback.format_exception(exctype, value, tb))
        with open(log_file, "a", encoding="utf-8") as f:
            f.write(f"\n{'='*60}\n")
            f.write(f"UNHANDLED EXCEPTION at {datetime.now()}\n")
            f.write(f"{'='*60}\n")
            f.write(error_msg)
            f.write("\n")

        logging.getLogger("layerzoom_app").critical(
            "Unhandled exception (details in %s)", log_file,
            exc_info=(exctype, value, tb),
        )
        sys.__excepthook__(exctype, value, tb)

    sys.excepthook = exception_hook


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect the LayerZoom scale bar")
    parser.add_argument("--relative-scale", type=float, default=3.0,
                        help="Default size ratio between adjacent layers")
    parser.add_argument("--expand-fraction", type=float, default=0.3,
                        help="EXPANDED half-width as a fraction of layer spacing")
    parser.add_argument("--debug", action="store_true",
                        help="Verbose logging of visible layers")
    return parser.parse_args(argv)


def main(argv=None):
    """Launch the debug window over the demo hierarchy."""
    args = parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    setup_exception_hook()

    from PyQt6.QtWidgets import QApplication

    from layerzoom_core.domain.config import LayerDetailConfig
    from layerzoom_core.services.layer_detail import LayerDetailService
    from layerzoom_app.demo import demo_hierarchy
    from layerzoom_app.resources.styles import DARK_STYLESHEET
    from layerzoom_app.viewmodels import ZoomDebugVM
    from layerzoom_app.views.main_window import MainWindow

    app = QApplication(sys.argv[:1])
    app.setStyle("Fusion")
    app.setApplicationName("LayerZoom")
    app.setStyleSheet(DARK_STYLESHEET)

    config = LayerDetailConfig(
        default_relative_scale=args.relative_scale,
        expand_fraction=args.expand_fraction,
        debug=args.debug,
    )
    vm = ZoomDebugVM(LayerDetailService(config))
    vm.load_hierarchy(demo_hierarchy())

    window = MainWindow(vm)
    window.show()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
