from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import QDialog, QHBoxLayout, QLabel, QPushButton, QVBoxLayout

from FrontEnd.styles.design_tokens import SUBJECT_COLORS


class QuestionDecisionDialog(QDialog):
	"""Asks whether the question whose time just ran out was finished."""

	answered = Signal(bool)

	def __init__(self, subject, question_number, completed, total, parent=None):
		super().__init__(parent)
		self.setWindowTitle(f"Question #{question_number} Timer Complete")
		self.setModal(True)
		bg, fg = SUBJECT_COLORS.get(subject.value, ('#F3F4F6', '#1F2937'))

		layout = QVBoxLayout()
		layout.setSpacing(12)
		header = QLabel(f"Have you completed this {subject.value} question?")
		layout.addWidget(header)

		body = QLabel(
			f"Time's up for question #{question_number}!\n"
			f"You've spent {subject.minutes_per_question} minutes on this question.\n"
			f"Current progress: {completed}/{total} questions completed"
		)
		body.setAlignment(Qt.AlignmentFlag.AlignCenter)
		body.setStyleSheet(f"background: {bg}; color: {fg}; border-radius: 10px; padding: 16px;")
		layout.addWidget(body)

		buttons = QHBoxLayout()
		buttons.addStretch()
		self.yes_btn = QPushButton("Yes, completed")
		self.yes_btn.setObjectName("StartBtn")
		self.yes_btn.setDefault(True)
		self.no_btn = QPushButton("No, need more time")
		self.no_btn.setObjectName("EndBtn")
		buttons.addWidget(self.yes_btn)
		buttons.addWidget(self.no_btn)
		buttons.addStretch()
		layout.addLayout(buttons)
		self.setLayout(layout)

		self.yes_btn.clicked.connect(lambda: self._answer(True))
		self.no_btn.clicked.connect(lambda: self._answer(False))

	def _answer(self, completed):
		self.accept()
		self.answered.emit(completed)
