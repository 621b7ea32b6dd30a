import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PySide6.QtWidgets import QApplication

from BackEnd.core.config import AppConfig


class RecordingSound:
	"""Stands in for SoundService; remembers every cue request."""

	def __init__(self):
		self.calls = []

	def play(self, sound, times=1):
		self.calls.append((sound, times))


@pytest.fixture(scope="session", autouse=True)
def qt_app():
	# QTimer and the widgets need an application object; ticks are driven by hand in tests.
	app = QApplication.instance() or QApplication([])
	yield app


@pytest.fixture
def config(tmp_path):
	return AppConfig(_env_file=None, db_file=str(tmp_path / "study.db"), assets_dir=str(tmp_path))


@pytest.fixture
def sound():
	return RecordingSound()
