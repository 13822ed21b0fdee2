"""Allow running PomoTimer as a module: python -m pomotimer."""

import argparse
import logging
import sys

from PyQt6.QtWidgets import QApplication

from .app import PomodoroApp


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(prog="pomotimer", description="Pomodoro timer")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="logging verbosity (default: WARNING)",
    )
    parser.add_argument(
        "--no-widget",
        action="store_true",
        help="start in the tray without opening the floating widget",
    )
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(sys.argv[:1])
    app.setApplicationName("PomoTimer")
    app.setOrganizationName("PomoTimer")
    app.setQuitOnLastWindowClosed(False)

    pomodoro = PomodoroApp()
    app.aboutToQuit.connect(pomodoro.shutdown)
    pomodoro.show_tray()
    if not args.no_widget:
        pomodoro.open_timer()

    sys.exit(app.exec())


if __name__ == "__main__":
    main()
