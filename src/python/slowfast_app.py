"""SlowFast entry point: set up logging, build the context and show the window."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from app_context import create_app_context
from config_manager import config
from controllers import ApplicationController
from error_handler import ErrorHandler
from logging_config import setup_logging
from ui.main_window import SlowFastView

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description='SlowFast - draw a speed curve over a video')
    parser.add_argument('--video', '-v', default=None,
                        help='Video file to open at startup (overrides playback.videoPath)')
    parser.add_argument('--time-source', '-t', default=None,
                        choices=['video', 'simulated', 'scrubbing'],
                        help='Clock driving the curve (overrides playback.timeSource)')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Entry point for the SlowFast window."""
    args = parse_args(argv)

    setup_logging()
    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    if args.video:
        config.set_setting("playback", "videoPath", args.video)
    if args.time_source:
        config.set_setting("playback", "timeSource", args.time_source)

    app = QApplication(sys.argv[:1])
    app.setApplicationName(config.get_string("ui", "windowTitle", "SlowFast"))

    try:
        context = create_app_context(config)
        controller = ApplicationController(context, config)
        view = SlowFastView(controller)
        controller.set_view(view)
    except Exception as e:
        ErrorHandler.log_exception(e, "Startup failed")
        return 1

    view.show()
    logger.info("SlowFast window shown")
    return app.exec()


if __name__ == '__main__':
    sys.exit(main())
