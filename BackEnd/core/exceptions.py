"""Custom exceptions for StudyDesk."""


class StudyDeskError(Exception):
	"""Base exception for StudyDesk errors."""

	pass


class BaasError(StudyDeskError):
	"""Backend-as-a-service HTTP errors."""

	def __init__(self, message, status_code=None):
		super().__init__(message)
		self.status_code = status_code


class AssignmentLookupError(StudyDeskError):
	"""A single assignment or profile source could not be queried."""

	pass


class SoundPlaybackError(StudyDeskError):
	"""A sound cue could not be played."""

	pass
