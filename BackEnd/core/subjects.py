import enum


class Subject(str, enum.Enum):
	MATHEMATICS = "Mathematics"
	PHYSICS = "Physics"
	CHEMISTRY = "Chemistry"
	REVISION = "Revision"

	@property
	def question_duration(self) -> int:
		"""Per-question budget in seconds."""
		return QUESTION_DURATIONS[self]

	@property
	def is_revision(self) -> bool:
		return self is Subject.REVISION

	@property
	def minutes_per_question(self) -> int:
		return self.question_duration // 60

	def description(self) -> str:
		if self.is_revision:
			return "1 hour continuous revision session"
		return f"{self.minutes_per_question} minutes per question ({self.value})"


QUESTION_DURATIONS = {
	Subject.MATHEMATICS: 8 * 60,
	Subject.PHYSICS: 5 * 60,
	Subject.CHEMISTRY: 3 * 60,
	Subject.REVISION: 60 * 60,
}

REVISION_TOTAL_SECONDS = 60 * 60

MOTIVATIONAL_MESSAGES = (
	"Great job! Keep going! 🚀",
	"You're making excellent progress! 💪",
	"Awesome work! You're getting closer to your goal! ✨",
	"Fantastic! Your hard work is paying off! 🌟",
	"Excellent! You're on a roll! 🔥",
	"Amazing progress! Keep up the good work! 👏",
	"Well done! You're crushing it! 💯",
	"Brilliant work! You're doing great! 🎯",
	"Superb! You're making steady progress! 🏆",
	"Impressive! Keep up the momentum! 🌈",
)


def parse_subject(value) -> Subject:
	"""Accept a Subject or a case-insensitive subject name."""
	if isinstance(value, Subject):
		return value
	for subject in Subject:
		if subject.value.lower() == str(value).strip().lower():
			return subject
	raise ValueError(f"Unknown subject: {value!r}")
