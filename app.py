import argparse
import os, sys
from PySide6.QtWidgets import QApplication

from BackEnd.core.config import AppConfig
from BackEnd.core.logger import configure_logging
from BackEnd.core.subjects import Subject
from BackEnd.repos.assignment_repo import build_lookup
from FrontEnd.ui_main import MainWindow

def resource_path(relative_path):
    # works in dev and in PyInstaller .exe
    if hasattr(sys, "_MEIPASS"):
        return os.path.join(sys._MEIPASS, relative_path)
    return os.path.join(os.path.dirname(__file__), relative_path)

def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="studydesk", description="Subject study timer")
    parser.add_argument("--subject", choices=[s.value for s in Subject], default=None,
                        help="page to open first")
    parser.add_argument("--questions", type=int, default=10, help="questions per session")
    parser.add_argument("--duration", type=int, default=None,
                        help="total session length in minutes (overrides the computed one)")
    parser.add_argument("--student", default=None, help="student id whose mentor is shown")
    args = parser.parse_args(argv)
    if args.questions < 1:
        parser.error("--questions must be a positive integer")
    return args

def main(argv=None):
    args = parse_args(argv)
    config = AppConfig()
    if not config.assets_dir:
        config = config.model_copy(update={"assets_dir": resource_path("assets")})
    configure_logging(config)

    app = QApplication(sys.argv[:1])
    win = MainWindow(
        config, build_lookup(config), student_id=args.student, initial_subject=args.subject,
        total_questions=args.questions, total_duration=args.duration)
    win.show()
    sys.exit(app.exec())

if __name__ == "__main__":
    main()
