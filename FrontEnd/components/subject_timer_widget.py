from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QPushButton, QVBoxLayout, QWidget

from BackEnd.services.timer_service import SubjectTimerService, TimerState
from FrontEnd.components.question_dialog import QuestionDecisionDialog
from FrontEnd.styles.design_tokens import SUBJECT_COLORS


class SubjectTimerWidget(QWidget):
	def __init__(self, subject, config, total_questions=10, total_duration=None,
			on_complete=None, on_question_complete=None, sound_player=None):
		super().__init__()
		self.service = SubjectTimerService(
			subject, config, total_questions=total_questions, total_duration=total_duration,
			on_complete=on_complete, on_question_complete=on_question_complete,
			sound_player=sound_player)
		self.subject = self.service.subject
		self._dialog = None

		outer = QVBoxLayout()
		outer.setContentsMargins(32, 32, 32, 32)

		self.card = QWidget()
		self.card.setObjectName("TimerCard")
		card_layout = QVBoxLayout()
		card_layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
		self.card.setLayout(card_layout)

		bg, fg = SUBJECT_COLORS[self.subject.value]
		header = QLabel(f"{self.subject.value} Timer\n{self.subject.description()}")
		header.setStyleSheet(f"background: {bg}; color: {fg}; border-radius: 10px; padding: 12px;")
		card_layout.addWidget(header)

		# Current question
		self.question_caption = QLabel("")
		self.question_caption.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.question_caption)
		self.timer_label = QLabel(self.service.question_time_text)
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.timer_label)
		self.question_bar = self._progress_bar()
		card_layout.addWidget(self.question_bar)
		self.question_pct = QLabel("")
		card_layout.addWidget(self.question_pct)

		# Question count (not shown for revision)
		self.count_label = QLabel("")
		self.count_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		self.count_bar = self._progress_bar()
		card_layout.addWidget(self.count_label)
		card_layout.addWidget(self.count_bar)
		if self.subject.is_revision:
			self.question_pct.hide()
			self.count_label.hide()
			self.count_bar.hide()

		# Whole session
		card_layout.addWidget(QLabel("Total Session Time"))
		self.total_label = QLabel(self.service.total_time_text)
		self.total_label.setObjectName("TotalLabel")
		self.total_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.total_label)
		self.total_bar = self._progress_bar()
		card_layout.addWidget(self.total_bar)

		self.countdown_label = QLabel("")
		self.countdown_label.setObjectName("CountdownLabel")
		self.countdown_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card_layout.addWidget(self.countdown_label)

		btn_layout = QHBoxLayout()
		btn_layout.setSpacing(24)
		self.start_btn = QPushButton("Start")
		self.start_btn.setObjectName("StartBtn")
		self.pause_btn = QPushButton("Pause")
		self.pause_btn.setObjectName("StartBtn")
		self.resume_btn = QPushButton("Resume")
		self.resume_btn.setObjectName("StartBtn")
		self.answer_btn = QPushButton("Answer")
		self.answer_btn.setObjectName("StartBtn")
		self.reset_btn = QPushButton("Reset")
		self.reset_btn.setObjectName("EndBtn")
		for btn in (self.start_btn, self.pause_btn, self.resume_btn, self.answer_btn, self.reset_btn):
			btn.setMinimumHeight(48)
			btn_layout.addWidget(btn)
		card_layout.addSpacing(16)
		card_layout.addLayout(btn_layout)

		outer.addWidget(self.card)
		self.notice_label = QLabel("")
		self.notice_label.setObjectName("NoticeLabel")
		self.notice_label.setWordWrap(True)
		self.notice_label.hide()
		outer.addWidget(self.notice_label)
		outer.addStretch()
		self.setLayout(outer)

		self.start_btn.clicked.connect(self.service.start)
		self.pause_btn.clicked.connect(self.service.pause)
		self.resume_btn.clicked.connect(self.service.resume)
		self.reset_btn.clicked.connect(self.service.reset)
		self.answer_btn.clicked.connect(self._ask_question)

		self.service.tick.connect(lambda *_: self._refresh())
		self.service.state_changed.connect(self._on_state)
		self.service.countdown_changed.connect(self._on_countdown)
		self.service.question_expired.connect(lambda _n: self._ask_question())
		self.service.question_resolved.connect(lambda _c: self._refresh())
		self.service.notice.connect(self._show_notice)

		self._on_state(self.service.state.value)

	def _progress_bar(self):
		bar = QProgressBar()
		bar.setRange(0, 100)
		bar.setTextVisible(False)
		bar.setFixedHeight(8)
		return bar

	def _refresh(self):
		svc = self.service
		if self.subject.is_revision:
			self.question_caption.setText("Revision Timer")
		else:
			self.question_caption.setText(f"Question #{svc.question_number} Timer")
		self.timer_label.setText(svc.question_time_text)
		self.question_bar.setValue(round(svc.question_progress))
		self.question_pct.setText(f"{round(svc.question_progress)}% of question time used")
		self.count_label.setText(f"{svc.completed_questions} / {svc.total_questions}  ({round(svc.questions_progress)}% complete)")
		self.count_bar.setValue(round(svc.questions_progress))
		self.total_label.setText(svc.total_time_text)
		self.total_bar.setValue(round(svc.total_progress))

	def _on_state(self, state):
		state = TimerState(state)
		self.start_btn.setVisible(state is TimerState.IDLE)
		self.pause_btn.setVisible(state is TimerState.RUNNING)
		self.resume_btn.setVisible(state is TimerState.PAUSED)
		self.answer_btn.setVisible(state is TimerState.AWAITING_DECISION)
		self.reset_btn.setVisible(state is not TimerState.COUNTDOWN)
		self.countdown_label.setVisible(state is TimerState.COUNTDOWN)
		self.card.setProperty("active", self.service.is_active)
		self.card.style().unpolish(self.card)
		self.card.style().polish(self.card)
		if state is not TimerState.AWAITING_DECISION:
			dialog = self._release_dialog()
			if dialog is not None:
				dialog.close()
		self._refresh()

	def _on_countdown(self, value):
		self.countdown_label.setText(f"{value}\nStarting soon...")

	def _ask_question(self):
		svc = self.service
		if svc.state is not TimerState.AWAITING_DECISION or self._dialog is not None:
			return
		self._dialog = QuestionDecisionDialog(
			self.subject, svc.question_number, svc.completed_questions, svc.total_questions, self)
		self._dialog.answered.connect(self._on_answer)
		self._dialog.rejected.connect(self._on_dialog_dismissed)
		self._dialog.open()

	def _on_answer(self, completed):
		self._release_dialog()
		self.service.resolve_question(completed)

	def _on_dialog_dismissed(self):
		# still awaiting; the Answer button reopens the prompt
		self._release_dialog()

	def _release_dialog(self):
		dialog, self._dialog = self._dialog, None
		if dialog is not None:
			dialog.deleteLater()
		return dialog

	def _show_notice(self, title, description):
		self.notice_label.setText(f"<b>{title}</b><br>{description}")
		self.notice_label.show()

	def shutdown(self):
		self.service.shutdown()
