import logging

from PySide6.QtCore import QObject, QTimer, QUrl

from BackEnd.core.exceptions import SoundPlaybackError
from BackEnd.core.paths import asset_path

logger = logging.getLogger(__name__)


class SoundService(QObject):
	"""Plays short cues 1x/2x/3x. Failures are logged, never raised."""

	def __init__(self, config, parent=None):
		super().__init__(parent)
		self.config = config
		self._players = {}

	def play(self, sound, times=1):
		"""Fire-and-forget: queue `times` plays of `sound` spaced by cue_gap_ms."""
		if not self.config.sounds_enabled or times <= 0:
			return
		try:
			self._play_once(sound)
			for i in range(1, times):
				QTimer.singleShot(i * self.config.cue_gap_ms, lambda s=sound: self._safe_play(s))
		except Exception as e:
			logger.warning(f"Error playing sound {sound}: {e}")

	def _safe_play(self, sound):
		try:
			self._play_once(sound)
		except Exception as e:
			logger.warning(f"Error playing sound {sound}: {e}")

	def _play_once(self, sound):
		player = self._players.get(sound)
		if player is None:
			player = self._create_player(sound)
			self._players[sound] = player
		player.setPosition(0)
		player.play()

	def _create_player(self, sound):
		# QtMultimedia needs platform audio libraries; load it only on first use.
		from PySide6.QtMultimedia import QAudioOutput, QMediaPlayer

		path = asset_path(sound, self.config.assets_dir)
		if not path.exists():
			raise SoundPlaybackError(f"missing sound asset {path}")
		player = QMediaPlayer(self)
		output = QAudioOutput(self)
		player.setAudioOutput(output)
		player.setSource(QUrl.fromLocalFile(str(path)))
		player.errorOccurred.connect(
			lambda _err, msg, s=sound: logger.warning(f"Error playing sound {s}: {msg}")
		)
		return player
