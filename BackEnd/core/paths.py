import os
from pathlib import Path

def user_data_dir(app_name="StudyDesk"):
	"""Return per-user data dir (Windows/macOS/Linux)."""
	if os.name == "nt":
		base = os.environ.get("LOCALAPPDATA", os.path.expanduser("~\\AppData\\Local"))
	elif os.name == "posix":
		base = os.environ.get("XDG_DATA_HOME", os.path.expanduser("~/.local/share"))
	else:
		base = os.path.expanduser("~")
	path = Path(base) / app_name
	path.mkdir(parents=True, exist_ok=True)
	return path

def db_path(db_file=None):
	"""Return Path to the local assignments DB, defaulting to the user data dir."""
	if db_file:
		return Path(db_file)
	return user_data_dir() / "studydesk.db"

def project_root():
	return Path(__file__).resolve().parent.parent.parent

def asset_path(relative_path, assets_dir=None):
	"""Resolve a sound/asset path such as 'sounds/beep.mp3'."""
	base = Path(assets_dir) if assets_dir else project_root() / "assets"
	return base / relative_path
