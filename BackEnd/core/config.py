from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppConfig(BaseSettings):
	"""Application settings, built once at startup and handed to each service."""

	model_config = SettingsConfigDict(
		env_prefix="STUDYDESK_", env_file=".env", env_file_encoding="utf-8",
		case_sensitive=False, extra="ignore",
	)

	log_level: str = "INFO"

	# Timers
	countdown_seconds: int = Field(default=3, ge=0)
	break_minutes: int = Field(default=20, gt=0)

	# Sound cues
	sounds_enabled: bool = True
	assets_dir: Optional[str] = None
	beep_sound: str = "sounds/beep.mp3"
	break_end_sound: str = "sounds/break-end.mp3"
	cue_gap_ms: int = Field(default=500, ge=0)

	# Display
	theme: Literal["light", "dark"] = "light"
	performance_mode: bool = False

	# Backend-as-a-service (PostgREST API). Local SQLite is used when unset.
	baas_url: Optional[str] = None
	baas_key: Optional[str] = None
	request_timeout: float = 10.0
	db_file: Optional[str] = None
