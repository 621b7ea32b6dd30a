import enum
import logging
import random

from PySide6.QtCore import QObject, Signal, QTimer

from BackEnd.core.clock import fmt_hms, fmt_ms, percent_used
from BackEnd.core.subjects import MOTIVATIONAL_MESSAGES, REVISION_TOTAL_SECONDS, parse_subject
from BackEnd.services.sound_service import SoundService

logger = logging.getLogger(__name__)


class TimerState(str, enum.Enum):
	IDLE = "idle"
	COUNTDOWN = "countdown"
	RUNNING = "running"
	PAUSED = "paused"
	AWAITING_DECISION = "awaiting_decision"


class SubjectTimerService(QObject):
	"""Per-subject study timer with question pacing.

	idle -> countdown -> running <-> paused
	running -> awaiting_decision -> running | idle (all questions done)
	running -> idle (total time used up, or revision hour over)
	"""

	tick = Signal(int, int)  # emits (time_remaining, total_time_remaining)
	state_changed = Signal(str)
	countdown_changed = Signal(int)
	question_expired = Signal(int)  # emits 1-based question number
	question_resolved = Signal(bool)
	notice = Signal(str, str)  # emits (title, description)
	session_completed = Signal()

	def __init__(self, subject, config, total_questions=10, total_duration=None,
			on_complete=None, on_question_complete=None, sound_player=None, rng=None):
		super().__init__()
		self.subject = parse_subject(subject)
		self.config = config
		self.total_questions = int(total_questions)
		if self.total_questions < 1:
			logger.warning(f"total_questions={self.total_questions} is not allowed, using 1")
			self.total_questions = 1
		self.total_duration = total_duration
		self.on_complete = on_complete
		self.on_question_complete = on_question_complete
		self.sound = sound_player if sound_player is not None else SoundService(config)
		self._rng = rng or random

		self.state = TimerState.IDLE
		self.countdown = 0
		self.completed_questions = 0
		self.current_question_index = 0
		self.time_remaining = self.question_duration
		self.total_time_remaining = self.initial_total_time

		self._timer = QTimer()
		self._timer.setInterval(1000)
		self._timer.timeout.connect(self._on_tick)
		self._countdown_timer = QTimer()
		self._countdown_timer.setInterval(1000)
		self._countdown_timer.timeout.connect(self._on_countdown_tick)

	# --- derived values ---

	@property
	def question_duration(self) -> int:
		return self.subject.question_duration

	@property
	def initial_total_time(self) -> int:
		if self.total_duration:
			return int(self.total_duration) * 60
		if self.subject.is_revision:
			return REVISION_TOTAL_SECONDS
		return self.question_duration * max(1, self.total_questions)

	@property
	def is_active(self) -> bool:
		return self.state in (TimerState.RUNNING, TimerState.PAUSED, TimerState.AWAITING_DECISION)

	@property
	def is_paused(self) -> bool:
		return self.state in (TimerState.PAUSED, TimerState.AWAITING_DECISION)

	@property
	def question_number(self) -> int:
		return self.current_question_index + 1

	@property
	def question_progress(self) -> float:
		return percent_used(self.question_duration, self.time_remaining)

	@property
	def total_progress(self) -> float:
		return percent_used(self.initial_total_time, self.total_time_remaining)

	@property
	def questions_progress(self) -> float:
		progress = self.completed_questions * 100 / max(1, self.total_questions)
		return max(0.0, min(100.0, progress))

	@property
	def question_time_text(self) -> str:
		return fmt_ms(self.time_remaining)

	@property
	def total_time_text(self) -> str:
		return fmt_hms(self.total_time_remaining)

	# --- transitions ---

	def start(self):
		if self.state is not TimerState.IDLE:
			logger.debug(f"start() ignored in state {self.state.value}")
			return
		self.countdown = self.config.countdown_seconds
		self._set_state(TimerState.COUNTDOWN)
		self.notice.emit(
			f"Starting {self.subject.value} timer in {self.countdown} seconds", "Get ready!")
		self.countdown_changed.emit(self.countdown)
		if self.countdown <= 0:
			self._begin_running()
			return
		self._countdown_timer.stop()
		self._countdown_timer.start()

	def pause(self):
		if self.state is not TimerState.RUNNING:
			logger.debug(f"pause() ignored in state {self.state.value}")
			return
		self._timer.stop()
		self._set_state(TimerState.PAUSED)

	def resume(self):
		if self.state is not TimerState.PAUSED:
			logger.debug(f"resume() ignored in state {self.state.value}")
			return
		self._set_state(TimerState.RUNNING)
		self._restart_tick()

	def reset(self):
		self._timer.stop()
		self._countdown_timer.stop()
		self.countdown = 0
		self.completed_questions = 0
		self.current_question_index = 0
		self.time_remaining = self.question_duration
		self.total_time_remaining = self.initial_total_time
		self._set_state(TimerState.IDLE)
		self.tick.emit(self.time_remaining, self.total_time_remaining)
		logger.info(
			f"Timer reset for {self.subject.value}. Question duration: "
			f"{self.question_duration // 60} minutes, Total time: {self.total_time_remaining // 60} minutes")

	def resolve_question(self, completed: bool):
		"""Answer the 'did you finish question #n?' prompt."""
		if self.state is not TimerState.AWAITING_DECISION:
			logger.debug(f"resolve_question() ignored in state {self.state.value}")
			return
		finished_number = self.question_number
		self.current_question_index += 1
		self.time_remaining = self.question_duration
		self._set_state(TimerState.RUNNING)
		self._restart_tick()

		if completed:
			self.completed_questions += 1
			message = self._rng.choice(MOTIVATIONAL_MESSAGES)
			self.notice.emit(
				f"Question #{finished_number} completed!",
				f"{message} {self.completed_questions}/{self.total_questions} questions done in {self.subject.value}.")
		else:
			self.notice.emit(
				"Moving to next question",
				f"You're now working on question #{self.question_number} in {self.subject.value}.")

		if self.on_question_complete is not None:
			self.on_question_complete(completed)
		self.question_resolved.emit(completed)

		if self.completed_questions >= self.total_questions:
			self.sound.play(self.config.beep_sound, 3)
			self.notice.emit(
				f"{self.subject.value} session complete!",
				f"Congratulations! You've completed all {self.total_questions} questions. "
				f"Take a {self.config.break_minutes}-minute break.")
			self._notify_complete()
			self.reset()
		elif self.total_time_remaining == 0:
			self._complete_session()
		else:
			self.notice.emit(
				f"Starting question #{self.question_number}",
				f"You have {self.subject.minutes_per_question} minutes to complete this {self.subject.value} question.")

	def shutdown(self):
		"""Stop every pending timer; the service must not tick afterwards."""
		self._timer.stop()
		self._countdown_timer.stop()

	# --- timer slots ---

	def _on_countdown_tick(self):
		if self.state is not TimerState.COUNTDOWN:
			self._countdown_timer.stop()
			return
		self.countdown = max(0, self.countdown - 1)
		self.countdown_changed.emit(self.countdown)
		if self.countdown == 0:
			self._begin_running()

	def _on_tick(self):
		if self.state is not TimerState.RUNNING:
			self._timer.stop()
			return
		self.time_remaining = max(0, self.time_remaining - 1)
		self.total_time_remaining = max(0, self.total_time_remaining - 1)
		self.tick.emit(self.time_remaining, self.total_time_remaining)

		# Total time is checked first. The one exception is a question prompt
		# landing on the same tick: it is still asked so the last answer counts.
		question_due = self.time_remaining == 0 and not self.subject.is_revision
		if self.total_time_remaining == 0 and not question_due:
			self._complete_session()
		elif self.time_remaining == 0:
			if self.subject.is_revision:
				self._complete_session()
			else:
				self._expire_question()

	# --- internals ---

	def _begin_running(self):
		self._countdown_timer.stop()
		self.countdown = 0
		self.sound.play(self.config.beep_sound, 1)
		self.time_remaining = self.question_duration
		self._set_state(TimerState.RUNNING)
		self._restart_tick()
		if self.subject.is_revision:
			detail = "Revision time: 1 hour before starting practice questions"
		else:
			detail = f"Each {self.subject.value} question: {self.subject.minutes_per_question} minutes"
		self.notice.emit(f"{self.subject.value} timer started", detail)

	def _expire_question(self):
		self._timer.stop()
		self.sound.play(self.config.beep_sound, 2)
		self._set_state(TimerState.AWAITING_DECISION)
		self.question_expired.emit(self.question_number)
		self.notice.emit(
			f"Time's up for {self.subject.value} question!",
			f"Have you completed question #{self.question_number}?")

	def _complete_session(self):
		self._timer.stop()
		self._countdown_timer.stop()
		self._set_state(TimerState.IDLE)
		self.sound.play(self.config.beep_sound, 3)
		if self.subject.is_revision:
			detail = "Now you can start practicing questions."
		else:
			detail = f"Take a {self.config.break_minutes}-minute break before starting the next subject."
		self.notice.emit(f"{self.subject.value} session complete!", detail)
		self._notify_complete()

	def _notify_complete(self):
		logger.info(f"{self.subject.value} session complete")
		if self.on_complete is not None:
			self.on_complete()
		self.session_completed.emit()

	def _restart_tick(self):
		self._timer.stop()
		self._timer.start()

	def _set_state(self, state):
		if state is self.state:
			return
		self.state = state
		self.state_changed.emit(state.value)
