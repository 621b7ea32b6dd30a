import logging

import pytest

from BackEnd.core.subjects import MOTIVATIONAL_MESSAGES, Subject
from BackEnd.services.timer_service import SubjectTimerService, TimerState


class Recorder:
	def __init__(self, svc):
		self.states = []
		self.notices = []
		self.expired = []
		self.resolved = []
		self.completed = 0
		svc.state_changed.connect(self.states.append)
		svc.notice.connect(lambda title, desc: self.notices.append((title, desc)))
		svc.question_expired.connect(self.expired.append)
		svc.question_resolved.connect(self.resolved.append)
		svc.session_completed.connect(self._on_complete)

	def _on_complete(self):
		self.completed += 1


def make_timer(config, sound, subject=Subject.PHYSICS, **kwargs):
	return SubjectTimerService(subject, config, sound_player=sound, **kwargs)


def start_running(svc):
	svc.start()
	for _ in range(svc.config.countdown_seconds):
		svc._on_countdown_tick()
	assert svc.state is TimerState.RUNNING


def run_ticks(svc, n):
	for _ in range(n):
		svc._on_tick()


def expire_question(svc):
	run_ticks(svc, svc.time_remaining)


def test_initial_state(config, sound):
	svc = make_timer(config, sound, total_questions=4)
	assert svc.state is TimerState.IDLE
	assert svc.time_remaining == 300
	assert svc.total_time_remaining == 1200
	assert not svc.is_active
	assert not svc.is_paused
	assert svc.question_time_text == "05:00"
	assert svc.total_time_text == "00:20:00"


def test_total_time_uses_explicit_duration(config, sound):
	svc = make_timer(config, sound, subject=Subject.MATHEMATICS, total_duration=90)
	assert svc.total_time_remaining == 90 * 60


def test_total_time_for_revision_ignores_question_count(config, sound):
	svc = make_timer(config, sound, subject=Subject.REVISION, total_questions=7)
	assert svc.total_time_remaining == 3600


def test_total_time_with_zero_questions_counts_one(config, sound):
	svc = make_timer(config, sound, subject=Subject.CHEMISTRY, total_questions=0)
	assert svc.total_time_remaining == 180


def test_non_positive_question_count_is_clamped_to_one(config, sound):
	svc = make_timer(config, sound, total_questions=0, total_duration=60)
	rec = Recorder(svc)
	assert svc.total_questions == 1
	start_running(svc)
	expire_question(svc)
	svc.resolve_question(False)
	assert svc.state is TimerState.RUNNING
	assert rec.completed == 0
	expire_question(svc)
	svc.resolve_question(True)
	assert rec.completed == 1
	assert svc.state is TimerState.IDLE


def test_countdown_then_running(config, sound):
	svc = make_timer(config, sound)
	counts = []
	svc.countdown_changed.connect(counts.append)
	svc.start()
	assert svc.state is TimerState.COUNTDOWN
	assert svc.countdown == 3
	assert svc._countdown_timer.isActive()
	assert not svc._timer.isActive()

	svc._on_countdown_tick()
	svc._on_countdown_tick()
	assert svc.state is TimerState.COUNTDOWN
	assert sound.calls == []

	svc._on_countdown_tick()
	assert svc.state is TimerState.RUNNING
	assert svc.countdown == 0
	assert counts == [3, 2, 1, 0]
	assert not svc._countdown_timer.isActive()
	assert svc._timer.isActive()
	assert sound.calls == [(config.beep_sound, 1)]
	assert svc.time_remaining == 300


def test_start_is_ignored_unless_idle(config, sound):
	svc = make_timer(config, sound)
	start_running(svc)
	run_ticks(svc, 5)
	svc.start()
	assert svc.state is TimerState.RUNNING
	assert svc.time_remaining == 295


def test_tick_decrements_both_counters(config, sound):
	svc = make_timer(config, sound, total_questions=2)
	ticks = []
	svc.tick.connect(lambda q, t: ticks.append((q, t)))
	start_running(svc)
	run_ticks(svc, 3)
	assert svc.time_remaining == 297
	assert svc.total_time_remaining == 597
	assert ticks == [(299, 599), (298, 598), (297, 597)]


def test_pause_resume_does_not_skip_or_repeat_seconds(config, sound):
	svc = make_timer(config, sound, subject=Subject.MATHEMATICS)
	start_running(svc)
	run_ticks(svc, 10)
	assert svc.time_remaining == 470

	svc.pause()
	assert svc.state is TimerState.PAUSED
	assert svc.is_paused
	assert not svc._timer.isActive()
	# a stray tick while paused changes nothing
	svc._on_tick()
	assert svc.time_remaining == 470

	svc.resume()
	assert svc.state is TimerState.RUNNING
	assert svc._timer.isActive()
	assert svc.time_remaining == 470
	svc._on_tick()
	assert svc.time_remaining == 469


def test_invalid_transitions_are_noops(config, sound):
	svc = make_timer(config, sound)
	svc.pause()
	svc.resume()
	svc.resolve_question(True)
	assert svc.state is TimerState.IDLE
	assert svc.completed_questions == 0
	assert svc.current_question_index == 0

	start_running(svc)
	svc.resume()
	assert svc.state is TimerState.RUNNING


def test_question_expiry_waits_for_decision(config, sound):
	svc = make_timer(config, sound, total_questions=3)
	rec = Recorder(svc)
	start_running(svc)
	expire_question(svc)

	assert svc.state is TimerState.AWAITING_DECISION
	assert svc.is_paused
	assert svc.is_active
	assert not svc._timer.isActive()
	assert svc.time_remaining == 0
	assert rec.expired == [1]
	assert sound.calls[-1] == (config.beep_sound, 2)
	assert rec.notices[-1] == ("Time's up for Physics question!", "Have you completed question #1?")

	# pause does not leave the decision state
	svc.pause()
	assert svc.state is TimerState.AWAITING_DECISION
	svc.resume()
	assert svc.state is TimerState.AWAITING_DECISION


def test_resolve_completed_question(config, sound):
	answers = []
	svc = make_timer(config, sound, total_questions=3, on_question_complete=answers.append)
	rec = Recorder(svc)
	start_running(svc)
	expire_question(svc)
	svc.resolve_question(True)

	assert svc.state is TimerState.RUNNING
	assert svc._timer.isActive()
	assert svc.completed_questions == 1
	assert svc.current_question_index == 1
	assert svc.time_remaining == 300
	assert answers == [True]
	assert rec.resolved == [True]
	titles = [title for title, _ in rec.notices]
	assert "Question #1 completed!" in titles
	_, desc = next(n for n in rec.notices if n[0] == "Question #1 completed!")
	assert any(desc.startswith(msg) for msg in MOTIVATIONAL_MESSAGES)
	assert "1/3 questions done in Physics." in desc
	assert rec.notices[-1][0] == "Starting question #2"


def test_resolve_not_completed_moves_on(config, sound):
	answers = []
	svc = make_timer(config, sound, total_questions=3, on_question_complete=answers.append)
	rec = Recorder(svc)
	start_running(svc)
	expire_question(svc)
	svc.resolve_question(False)

	assert svc.state is TimerState.RUNNING
	assert svc.completed_questions == 0
	assert svc.current_question_index == 1
	assert svc.time_remaining == 300
	assert answers == [False]
	assert ("Moving to next question", "You're now working on question #2 in Physics.") in rec.notices


def test_all_questions_completed_resets_once(config, sound):
	completions = []
	svc = make_timer(config, sound, total_questions=5, on_complete=lambda: completions.append(1))
	rec = Recorder(svc)
	start_running(svc)

	for _ in range(5):
		expire_question(svc)
		assert svc.state is TimerState.AWAITING_DECISION
		svc.resolve_question(True)

	assert completions == [1]
	assert rec.completed == 1
	assert svc.state is TimerState.IDLE
	assert svc.completed_questions == 0
	assert svc.current_question_index == 0
	assert svc.time_remaining == 300
	assert svc.total_time_remaining == 1500
	assert not svc._timer.isActive()
	assert sound.calls[-1] == (config.beep_sound, 3)
	assert rec.notices[-1] == (
		"Physics session complete!",
		"Congratulations! You've completed all 5 questions. Take a 20-minute break.",
	)


def test_chemistry_two_question_session(config, sound):
	completions = []
	svc = make_timer(config, sound, subject=Subject.CHEMISTRY, total_questions=2,
		on_complete=lambda: completions.append(1))
	assert svc.total_time_remaining == 360
	start_running(svc)

	expire_question(svc)
	svc.resolve_question(True)
	assert svc.completed_questions == 1
	assert svc.current_question_index == 1
	assert svc.time_remaining == 180
	assert svc.total_time_remaining == 180

	expire_question(svc)
	svc.resolve_question(True)
	assert completions == [1]
	assert svc.state is TimerState.IDLE


def test_last_question_declined_with_no_time_left_completes(config, sound):
	completions = []
	svc = make_timer(config, sound, subject=Subject.CHEMISTRY, total_questions=1,
		on_complete=lambda: completions.append(1))
	start_running(svc)
	expire_question(svc)
	assert svc.total_time_remaining == 0
	svc.resolve_question(False)
	assert completions == [1]
	assert svc.state is TimerState.IDLE
	assert not svc._timer.isActive()


def test_total_time_exhaustion_completes_session(config, sound):
	completions = []
	svc = make_timer(config, sound, subject=Subject.MATHEMATICS, total_duration=1,
		on_complete=lambda: completions.append(1))
	rec = Recorder(svc)
	start_running(svc)
	run_ticks(svc, 60)

	assert completions == [1]
	assert svc.state is TimerState.IDLE
	assert not svc._timer.isActive()
	# terminal values stay until reset
	assert svc.total_time_remaining == 0
	assert svc.time_remaining == 420
	assert sound.calls[-1] == (config.beep_sound, 3)
	assert rec.notices[-1] == (
		"Mathematics session complete!",
		"Take a 20-minute break before starting the next subject.",
	)
	# further stray ticks do nothing
	svc._on_tick()
	assert svc.time_remaining == 420


def test_revision_completes_without_decision(config, sound):
	completions = []
	svc = make_timer(config, sound, subject=Subject.REVISION, on_complete=lambda: completions.append(1))
	rec = Recorder(svc)
	start_running(svc)
	run_ticks(svc, 3600)

	assert completions == [1]
	assert TimerState.AWAITING_DECISION.value not in rec.states
	assert rec.expired == []
	assert svc.state is TimerState.IDLE
	assert svc.time_remaining == 0
	assert svc.total_time_remaining == 0
	assert rec.notices[-1] == ("Revision session complete!", "Now you can start practicing questions.")


def test_revision_question_expiry_before_total(config, sound):
	completions = []
	svc = make_timer(config, sound, subject=Subject.REVISION, total_duration=120,
		on_complete=lambda: completions.append(1))
	start_running(svc)
	run_ticks(svc, 3600)
	assert completions == [1]
	assert svc.state is TimerState.IDLE
	assert svc.total_time_remaining == 3600


@pytest.mark.parametrize("target", list(TimerState))
def test_reset_from_any_state(config, sound, target):
	svc = make_timer(config, sound, subject=Subject.MATHEMATICS, total_questions=3)
	if target is not TimerState.IDLE:
		svc.start()
	if target in (TimerState.RUNNING, TimerState.PAUSED, TimerState.AWAITING_DECISION):
		for _ in range(3):
			svc._on_countdown_tick()
		run_ticks(svc, 20)
	if target is TimerState.PAUSED:
		svc.pause()
	if target is TimerState.AWAITING_DECISION:
		expire_question(svc)
		svc.resolve_question(True)
		expire_question(svc)
	assert svc.state is target

	svc.reset()
	assert svc.state is TimerState.IDLE
	assert svc.countdown == 0
	assert svc.completed_questions == 0
	assert svc.current_question_index == 0
	assert svc.time_remaining == 480
	assert svc.total_time_remaining == 480 * 3
	assert not svc._timer.isActive()
	assert not svc._countdown_timer.isActive()


def test_progress_is_clamped(config, sound):
	svc = make_timer(config, sound)
	svc.time_remaining = -50
	svc.total_time_remaining = -50
	assert svc.question_progress == 100.0
	assert svc.total_progress == 100.0
	svc.time_remaining = 10_000
	svc.total_time_remaining = 10_000
	assert svc.question_progress == 0.0
	assert svc.total_progress == 0.0
	svc.completed_questions = 99
	assert svc.questions_progress == 100.0


def test_progress_midway(config, sound):
	svc = make_timer(config, sound, total_questions=2)
	start_running(svc)
	run_ticks(svc, 150)
	assert svc.question_progress == 50.0
	assert svc.total_progress == 25.0


def test_shutdown_clears_pending_timers(config, sound):
	svc = make_timer(config, sound)
	svc.start()
	assert svc._countdown_timer.isActive()
	svc.shutdown()
	assert not svc._countdown_timer.isActive()

	svc = make_timer(config, sound)
	start_running(svc)
	svc.shutdown()
	assert not svc._timer.isActive()


def test_zero_countdown_starts_immediately(config, sound):
	config = config.model_copy(update={"countdown_seconds": 0})
	svc = make_timer(config, sound)
	svc.start()
	assert svc.state is TimerState.RUNNING
	assert sound.calls == [(config.beep_sound, 1)]


def test_sound_failure_does_not_break_timer(config, caplog):
	class BrokenSound:
		def play(self, sound, times=1):
			raise RuntimeError("autoplay blocked")

	from BackEnd.services.sound_service import SoundService

	service = SoundService(config)
	service._play_once = BrokenSound().play
	svc = make_timer(config, service)
	with caplog.at_level(logging.WARNING):
		start_running(svc)
		expire_question(svc)
	assert svc.state is TimerState.AWAITING_DECISION
	assert "autoplay blocked" in caplog.text
