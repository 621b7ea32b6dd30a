import logging

from PySide6.QtCore import QObject, Signal, QTimer

from BackEnd.core.clock import fmt_ms, percent_used
from BackEnd.services.sound_service import SoundService

logger = logging.getLogger(__name__)


class BreakTimerService(QObject):
	tick = Signal(int)  # emits seconds remaining
	state_changed = Signal(str)  # emits 'idle', 'running', 'paused'
	notice = Signal(str, str)
	completed = Signal()

	def __init__(self, config, duration_minutes=None, on_complete=None, sound_player=None):
		super().__init__()
		self.config = config
		self.duration_minutes = duration_minutes or config.break_minutes
		self.on_complete = on_complete
		self.sound = sound_player if sound_player is not None else SoundService(config)
		self.running = False
		self.paused = False
		self.time_remaining = self.duration
		self._timer = QTimer()
		self._timer.setInterval(1000)
		self._timer.timeout.connect(self._on_tick)

	@property
	def duration(self) -> int:
		return int(self.duration_minutes) * 60

	@property
	def progress(self) -> float:
		return percent_used(self.duration, self.time_remaining)

	@property
	def time_text(self) -> str:
		return fmt_ms(self.time_remaining)

	def start(self):
		if self.running:
			return
		if self.time_remaining <= 0:
			self.time_remaining = self.duration
		self.running = True
		self.paused = False
		self._timer.stop()
		self._timer.start()
		self.state_changed.emit('running')
		self.notice.emit("Break time started", f"Take a {self.duration_minutes}-minute break to recharge.")

	def pause(self):
		if not self.running or self.paused:
			return
		self._timer.stop()
		self.paused = True
		self.state_changed.emit('paused')

	def resume(self):
		if not self.running or not self.paused:
			return
		self.paused = False
		self._timer.stop()
		self._timer.start()
		self.state_changed.emit('running')

	def reset(self):
		self._timer.stop()
		self.running = False
		self.paused = False
		self.time_remaining = self.duration
		self.tick.emit(self.time_remaining)
		self.state_changed.emit('idle')

	def shutdown(self):
		self._timer.stop()

	def _on_tick(self):
		if not self.running or self.paused:
			self._timer.stop()
			return
		self.time_remaining = max(0, self.time_remaining - 1)
		self.tick.emit(self.time_remaining)
		if self.time_remaining == 0:
			self._complete()

	def _complete(self):
		self._timer.stop()
		self.running = False
		self.paused = False
		self.state_changed.emit('idle')
		self.sound.play(self.config.break_end_sound, 1)
		self.notice.emit("Break time over!", "Time to get back to studying.")
		logger.info("Break complete")
		if self.on_complete is not None:
			self.on_complete()
		self.completed.emit()
