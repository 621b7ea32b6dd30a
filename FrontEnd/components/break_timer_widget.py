from PySide6.QtCore import Qt
from PySide6.QtWidgets import QHBoxLayout, QLabel, QProgressBar, QPushButton, QVBoxLayout, QWidget

from BackEnd.services.break_service import BreakTimerService
from FrontEnd.styles.design_tokens import COLORS


class BreakTimerWidget(QWidget):
	def __init__(self, config, on_complete=None, sound_player=None):
		super().__init__()
		self.service = BreakTimerService(config, on_complete=on_complete, sound_player=sound_player)

		outer = QVBoxLayout()
		outer.setContentsMargins(32, 32, 32, 32)
		card = QWidget()
		card.setObjectName("TimerCard")
		layout = QVBoxLayout()
		layout.setAlignment(Qt.AlignmentFlag.AlignCenter)
		card.setLayout(layout)

		header = QLabel(f"Break Timer\n{self.service.duration_minutes}-minute break between subjects")
		header.setStyleSheet(f"color: {COLORS['break_accent']}; padding: 12px;")
		layout.addWidget(header)
		self.timer_label = QLabel(self.service.time_text)
		self.timer_label.setObjectName("TimerLabel")
		self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
		layout.addWidget(self.timer_label)
		self.bar = QProgressBar()
		self.bar.setRange(0, 100)
		self.bar.setTextVisible(False)
		self.bar.setFixedHeight(8)
		layout.addWidget(self.bar)

		btn_layout = QHBoxLayout()
		self.start_pause_btn = QPushButton("Start Break")
		self.start_pause_btn.setObjectName("StartBtn")
		self.reset_btn = QPushButton("Reset")
		self.reset_btn.setObjectName("EndBtn")
		btn_layout.addWidget(self.start_pause_btn)
		btn_layout.addWidget(self.reset_btn)
		layout.addSpacing(16)
		layout.addLayout(btn_layout)
		outer.addWidget(card)

		self.notice_label = QLabel("")
		self.notice_label.setObjectName("NoticeLabel")
		self.notice_label.hide()
		outer.addWidget(self.notice_label)
		outer.addStretch()
		self.setLayout(outer)

		self.start_pause_btn.clicked.connect(self._start_pause)
		self.reset_btn.clicked.connect(self.service.reset)
		self.service.tick.connect(lambda _s: self._refresh())
		self.service.state_changed.connect(self._set_buttons)
		self.service.notice.connect(self._show_notice)

	def _refresh(self):
		self.timer_label.setText(self.service.time_text)
		self.bar.setValue(round(self.service.progress))

	def _set_buttons(self, state):
		if state == "running":
			self.start_pause_btn.setText("Pause")
		elif state == "paused":
			self.start_pause_btn.setText("Resume")
		else:
			self.start_pause_btn.setText("Start Break")
		self._refresh()

	def _start_pause(self):
		svc = self.service
		if not svc.running:
			svc.start()
		elif svc.paused:
			svc.resume()
		else:
			svc.pause()

	def _show_notice(self, title, description):
		self.notice_label.setText(f"<b>{title}</b><br>{description}")
		self.notice_label.show()

	def shutdown(self):
		self.service.shutdown()
