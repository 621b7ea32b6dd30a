import logging

from PySide6.QtWidgets import (
	QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QPushButton, QListWidget,
	QStackedWidget, QListWidgetItem
)
from PySide6.QtCore import Qt, QPropertyAnimation, QEasingCurve

from BackEnd.core.subjects import Subject, parse_subject
from BackEnd.services.sound_service import SoundService
from FrontEnd.components.break_timer_widget import BreakTimerWidget
from FrontEnd.components.mentor_card import MentorCard
from FrontEnd.components.subject_timer_widget import SubjectTimerWidget
from FrontEnd.styles.design_tokens import build_stylesheet

logger = logging.getLogger(__name__)

SIDEBAR_WIDTH = 240


class MainWindow(QMainWindow):
	def __init__(self, config, lookup, student_id=None, initial_subject=None,
			total_questions=10, total_duration=None):
		super().__init__()
		self.config = config
		self.lookup = lookup
		self.student_id = student_id
		self.setWindowTitle("StudyDesk")
		self.resize(1000, 720)
		self.setStyleSheet(build_stylesheet(config.theme))

		# one player shared by every page
		self.sound = SoundService(config, self)

		self.menu_btn = QPushButton("☰")
		self.menu_btn.setObjectName("MenuButton")
		self.menu_btn.setFixedSize(50, 50)
		self.menu_btn.setCursor(Qt.PointingHandCursor)
		self.menu_btn.setStyleSheet("margin: 0; padding: 0; border: none; font-size: 24px;")

		# --- Sidebar ---
		self.sidebar = QListWidget()
		self.sidebar.setMaximumWidth(SIDEBAR_WIDTH)
		self.sidebar.setSpacing(12)
		self.sidebar.setVerticalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		self.sidebar.setHorizontalScrollBarPolicy(Qt.ScrollBarAlwaysOff)
		self.sidebar.setStyleSheet("QListWidget { padding-top: 58px; } QListWidget::item { padding: 12px 0 12px 32px; }")

		self.stack = QStackedWidget()
		self.subject_pages = {}
		for subject in Subject:
			page = SubjectTimerWidget(
				subject, config, total_questions=total_questions, total_duration=total_duration,
				on_complete=lambda s=subject: self._on_subject_complete(s),
				sound_player=self.sound)
			self.subject_pages[subject] = page
			self._add_page(subject.value, page)
		self.break_page = BreakTimerWidget(config, sound_player=self.sound)
		self._add_page("Break", self.break_page)
		self.mentor_page = MentorCard(lookup)
		mentor_wrap = QWidget()
		mentor_layout = QVBoxLayout()
		mentor_layout.setContentsMargins(32, 32, 32, 32)
		mentor_layout.addWidget(self.mentor_page)
		mentor_layout.addStretch()
		mentor_wrap.setLayout(mentor_layout)
		self._add_page("My Mentor", mentor_wrap)

		# --- Sidebar Animation ---
		self.sidebar_anim = QPropertyAnimation(self.sidebar, b"maximumWidth")
		self.sidebar_anim.setDuration(0 if config.performance_mode else 220)
		self.sidebar_anim.setEasingCurve(QEasingCurve.InOutCubic)
		self._sidebar_open = True

		# --- Layout ---
		topbar = QHBoxLayout()
		topbar.setContentsMargins(0, 0, 0, 0)
		topbar.addSpacing(self.menu_btn.width())
		topbar.addStretch()
		topbar_frame = QWidget()
		topbar_frame.setLayout(topbar)

		content_widget = QWidget()
		content_layout = QVBoxLayout()
		content_layout.setContentsMargins(0, 0, 0, 0)
		content_layout.setSpacing(0)
		content_layout.addWidget(topbar_frame)
		content_layout.addWidget(self.stack)
		content_widget.setLayout(content_layout)

		main_layout = QHBoxLayout()
		main_layout.setContentsMargins(0, 0, 0, 0)
		main_layout.setSpacing(0)
		main_layout.addWidget(self.sidebar)
		main_layout.addWidget(content_widget)
		container = QWidget()
		container.setLayout(main_layout)
		self.setCentralWidget(container)

		self.sidebar.currentRowChanged.connect(self.stack.setCurrentIndex)
		self.menu_btn.clicked.connect(self._toggle_sidebar)
		self.menu_btn.setParent(container)
		self.menu_btn.move(0, 0)
		self.menu_btn.raise_()

		start_row = list(Subject).index(parse_subject(initial_subject)) if initial_subject else 0
		self.sidebar.setCurrentRow(start_row)
		self.mentor_page.load(student_id)

	def _add_page(self, title, widget):
		self.sidebar.addItem(QListWidgetItem(title))
		self.stack.addWidget(widget)

	def _on_subject_complete(self, subject):
		logger.info(f"{subject.value} finished, switching to the break timer")
		self.sidebar.setCurrentRow(len(Subject))

	def _toggle_sidebar(self):
		self.sidebar_anim.stop()
		self.sidebar_anim.setStartValue(self.sidebar.maximumWidth())
		self.sidebar_anim.setEndValue(0 if self._sidebar_open else SIDEBAR_WIDTH)
		self.sidebar_anim.start()
		self._sidebar_open = not self._sidebar_open

	def closeEvent(self, event):
		# No timer may outlive the window.
		for page in self.subject_pages.values():
			page.shutdown()
		self.break_page.shutdown()
		super().closeEvent(event)
