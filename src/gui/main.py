"""
Main entry point for the RegForm GUI application.
"""

import argparse
import sys

from PySide6.QtWidgets import QApplication

from core.config_manager import ConfigManager
from core.engines import available_engines
from core.error_handler import init_logging, setup_error_handling
from gui.main_window import MainWindow


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Registration form with schema or manual validation")
    parser.add_argument(
        "--engine",
        choices=available_engines(),
        default=None,
        help="Validation engine to use (default: the configured engine)",
    )
    # Qt consumes its own arguments (e.g. -platform), ignore anything unknown
    args, _unknown = parser.parse_known_args(argv)
    return args


def main(argv: list[str] | None = None) -> int:
    """Main application entry point."""
    argv = sys.argv if argv is None else argv
    args = parse_args(argv[1:])

    app = QApplication(argv)

    config_manager = ConfigManager()
    init_logging(config_manager.get_log_level())
    setup_error_handling()

    window = MainWindow(engine_name=args.engine, config_manager=config_manager)
    window.show()

    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
