import logging
import sqlite3
import uuid
from datetime import datetime
from pathlib import Path
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from BackEnd.core.clock import utc_now_iso
from BackEnd.core.exceptions import AssignmentLookupError, BaasError
from BackEnd.core.paths import db_path
from BackEnd.repos.rest_client import BaasClient

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.sql"

PRIMARY_TABLE = "assigned_students"
LEGACY_TABLE = "student_mentor_assignments"
ASSIGNMENT_TABLES = (PRIMARY_TABLE, LEGACY_TABLE)

UNKNOWN_MENTOR_NAME = "Unknown Mentor"
UNKNOWN_MENTOR_EMAIL = "No email available"


class MentorAssignment(BaseModel):
	model_config = ConfigDict(frozen=True, coerce_numbers_to_str=True)

	assignment_id: str = Field(validation_alias=AliasChoices("assignment_id", "id"))
	mentor_id: str
	assigned_at: Optional[datetime] = None
	source: str = ""

	@classmethod
	def from_row(cls, row, source):
		"""Validate a raw row ({'id', 'mentor_id', 'assigned_at'}) from any source."""
		return cls.model_validate(row).model_copy(update={"source": source})


class MentorProfile(BaseModel):
	model_config = ConfigDict(frozen=True)

	full_name: Optional[str] = None
	email: Optional[str] = None


class AssignedMentor(BaseModel):
	model_config = ConfigDict(frozen=True)

	assignment_id: str
	mentor_id: str
	mentor_name: str = UNKNOWN_MENTOR_NAME
	mentor_email: str = UNKNOWN_MENTOR_EMAIL
	assigned_at: Optional[datetime] = None


# --- local SQLite store ---

def connect(db_file=None):
	"""Open SQLite connection and ensure schema is applied."""
	with open(SCHEMA_PATH, encoding="utf-8") as f:
		schema = f.read()
	conn = sqlite3.connect(db_path(db_file))
	conn.row_factory = sqlite3.Row
	conn.executescript(schema)
	return conn

def _check_table(table):
	if table not in ASSIGNMENT_TABLES:
		raise ValueError(f"Unknown assignment table: {table}")

def assign_mentor(student_id, mentor_id, table=PRIMARY_TABLE, db_file=None, assigned_at=None):
	"""Record an assignment in the local store and return its id."""
	_check_table(table)
	assignment_id = str(uuid.uuid4())
	with connect(db_file) as conn:
		conn.execute(
			f"INSERT OR REPLACE INTO {table} (id, student_id, mentor_id, assigned_at) VALUES (?, ?, ?, ?)",
			(assignment_id, student_id, mentor_id, assigned_at or utc_now_iso())
		)
	return assignment_id

def upsert_profile(user_id, full_name=None, email=None, role="mentor", db_file=None):
	with connect(db_file) as conn:
		conn.execute(
			"INSERT OR REPLACE INTO profiles (id, full_name, email, role) VALUES (?, ?, ?, ?)",
			(user_id, full_name, email, role)
		)


# --- sources ---

class AssignmentSource:
	"""One place an assignment row may live."""

	name = "assignments"

	def latest_for_student(self, student_id) -> Optional[dict]:
		raise NotImplementedError


class SqliteAssignmentSource(AssignmentSource):
	def __init__(self, table, db_file=None):
		_check_table(table)
		self.name = table
		self.db_file = db_file

	def latest_for_student(self, student_id):
		try:
			with connect(self.db_file) as conn:
				cur = conn.execute(
					f"SELECT id, mentor_id, assigned_at FROM {self.name} WHERE student_id=? ORDER BY assigned_at DESC LIMIT 1",
					(student_id,)
				)
				row = cur.fetchone()
		except (sqlite3.Error, OSError) as e:
			raise AssignmentLookupError(f"{self.name}: {e}") from e
		return dict(row) if row else None


class RestAssignmentSource(AssignmentSource):
	def __init__(self, client: BaasClient, table):
		_check_table(table)
		self.name = table
		self.client = client

	def latest_for_student(self, student_id):
		try:
			return self.client.select_one(
				self.name, "id,mentor_id,assigned_at",
				filters={"student_id": student_id}, order="assigned_at.desc")
		except BaasError as e:
			raise AssignmentLookupError(str(e)) from e


class ProfileSource:
	def get_profile(self, user_id) -> Optional[dict]:
		raise NotImplementedError


class SqliteProfileSource(ProfileSource):
	def __init__(self, db_file=None):
		self.db_file = db_file

	def get_profile(self, user_id):
		try:
			with connect(self.db_file) as conn:
				cur = conn.execute("SELECT full_name, email FROM profiles WHERE id=?", (user_id,))
				row = cur.fetchone()
		except (sqlite3.Error, OSError) as e:
			raise AssignmentLookupError(f"profiles: {e}") from e
		return dict(row) if row else None


class RestProfileSource(ProfileSource):
	def __init__(self, client: BaasClient):
		self.client = client

	def get_profile(self, user_id):
		try:
			return self.client.select_one("profiles", "full_name,email", filters={"id": user_id})
		except BaasError as e:
			raise AssignmentLookupError(str(e)) from e


# --- lookup ---

class AssignmentLookup:
	"""Finds a student's mentor by trying each source in order."""

	def __init__(self, sources, profiles: Optional[ProfileSource] = None):
		self.sources = list(sources)
		self.profiles = profiles

	def find_assignment(self, student_id) -> Optional[MentorAssignment]:
		"""Return the newest assignment from the first source that has one, else None."""
		if not student_id:
			return None
		logger.info(f"Fetching assigned mentor for student: {student_id}")
		for source in self.sources:
			try:
				row = source.latest_for_student(student_id)
			except AssignmentLookupError as e:
				logger.error(f"Error fetching mentor assignment from {source.name}: {e}")
				continue
			if not row:
				logger.info(f"No mentor found in {source.name}")
				continue
			try:
				return MentorAssignment.from_row(row, source.name)
			except ValidationError as e:
				logger.error(f"Invalid assignment row in {source.name}: {e}")
		logger.info("No mentor assigned to this student")
		return None

	def find_mentor(self, student_id) -> Optional[str]:
		assignment = self.find_assignment(student_id)
		return assignment.mentor_id if assignment else None

	def fetch_assigned_mentor(self, student_id) -> Optional[AssignedMentor]:
		"""Assignment joined with the mentor's profile; profile gaps use placeholders."""
		assignment = self.find_assignment(student_id)
		if assignment is None:
			return None
		profile = MentorProfile()
		if self.profiles is not None:
			try:
				profile = MentorProfile.model_validate(self.profiles.get_profile(assignment.mentor_id) or {})
			except (AssignmentLookupError, ValidationError) as e:
				logger.error(f"Error fetching mentor profile: {e}")
		return AssignedMentor(
			assignment_id=assignment.assignment_id,
			mentor_id=assignment.mentor_id,
			mentor_name=profile.full_name or UNKNOWN_MENTOR_NAME,
			mentor_email=profile.email or UNKNOWN_MENTOR_EMAIL,
			assigned_at=assignment.assigned_at,
		)


def build_lookup(config, session=None) -> AssignmentLookup:
	"""Default lookup: current table first, then the legacy one."""
	if config.baas_url:
		client = BaasClient(config.baas_url, config.baas_key, timeout=config.request_timeout, session=session)
		sources = [RestAssignmentSource(client, table) for table in ASSIGNMENT_TABLES]
		return AssignmentLookup(sources, RestProfileSource(client))
	sources = [SqliteAssignmentSource(table, config.db_file) for table in ASSIGNMENT_TABLES]
	return AssignmentLookup(sources, SqliteProfileSource(config.db_file))
