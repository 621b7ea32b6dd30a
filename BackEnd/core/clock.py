from datetime import datetime, timezone

def utc_now_iso():
	"""Return current UTC time as ISO8601 string (no microseconds)."""
	return datetime.now(timezone.utc).replace(microsecond=0).isoformat()

def fmt_ms(seconds: int) -> str:
	"""Format seconds as MM:SS (minutes are not wrapped at one hour)."""
	seconds = max(0, int(seconds))
	m = seconds // 60
	s = seconds % 60
	return f"{m:02}:{s:02}"

def fmt_hms(seconds: int) -> str:
	"""Format seconds as HH:MM:SS."""
	seconds = max(0, int(seconds))
	h = seconds // 3600
	m = (seconds % 3600) // 60
	s = seconds % 60
	return f"{h:02}:{m:02}:{s:02}"

def percent_used(total: int, remaining: int) -> float:
	"""Share of `total` already consumed, clamped to [0, 100]."""
	if total <= 0:
		return 0.0
	progress = (total - remaining) * 100 / total
	return max(0.0, min(100.0, progress))
