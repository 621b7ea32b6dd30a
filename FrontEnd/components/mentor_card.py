from PySide6.QtWidgets import QLabel, QVBoxLayout, QWidget
from PySide6.QtCore import Qt


class MentorCard(QWidget):
	"""Shows the student's assigned mentor, or an empty state."""

	def __init__(self, lookup):
		super().__init__()
		self.lookup = lookup
		self.setObjectName("TimerCard")
		layout = QVBoxLayout()
		layout.setAlignment(Qt.AlignmentFlag.AlignTop)
		title = QLabel("My Mentor")
		title.setObjectName("TotalLabel")
		layout.addWidget(title)
		self.name_label = QLabel("")
		self.email_label = QLabel("")
		self.since_label = QLabel("")
		for lbl in (self.name_label, self.email_label, self.since_label):
			layout.addWidget(lbl)
		self.setLayout(layout)
		self.show_empty()

	def show_empty(self):
		self.name_label.setText("No mentor assigned yet.")
		self.email_label.setText("An admin will assign you a mentor soon.")
		self.since_label.setText("")

	def load(self, student_id):
		mentor = self.lookup.fetch_assigned_mentor(student_id) if student_id else None
		if mentor is None:
			self.show_empty()
			return
		self.name_label.setText(mentor.mentor_name)
		self.email_label.setText(mentor.mentor_email)
		since = mentor.assigned_at.date().isoformat() if mentor.assigned_at else ""
		self.since_label.setText(f"Assigned since {since}" if since else "")
