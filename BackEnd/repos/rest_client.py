import logging

import requests

from BackEnd.core.exceptions import BaasError

logger = logging.getLogger(__name__)


class BaasClient:
	"""Minimal client for the hosted backend's PostgREST table API."""

	def __init__(self, base_url, api_key, timeout=10.0, session=None):
		self.base_url = base_url.rstrip("/")
		self.api_key = api_key
		self.timeout = timeout
		self.session = session or requests.Session()
		self._access_token = None

	def set_access_token(self, token):
		"""Use a signed-in user's token so row-level security applies to them."""
		self._access_token = token

	def _headers(self):
		return {
			"apikey": self.api_key or "",
			"Authorization": f"Bearer {self._access_token or self.api_key or ''}",
			"Accept": "application/json",
		}

	def select(self, table, columns="*", filters=None, order=None, limit=None):
		"""GET /rest/v1/<table> with eq-filters. Returns a list of row dicts."""
		params = {"select": columns}
		for key, value in (filters or {}).items():
			params[key] = f"eq.{value}"
		if order:
			params["order"] = order
		if limit is not None:
			params["limit"] = str(limit)

		url = f"{self.base_url}/rest/v1/{table}"
		try:
			resp = self.session.get(url, params=params, headers=self._headers(), timeout=self.timeout)
		except requests.RequestException as e:
			raise BaasError(f"{table}: request failed: {e}") from e

		if resp.status_code >= 400:
			raise BaasError(f"{table}: HTTP {resp.status_code} {resp.text[:200]}", resp.status_code)
		try:
			data = resp.json()
		except ValueError as e:
			raise BaasError(f"{table}: response is not JSON") from e
		if not isinstance(data, list):
			raise BaasError(f"{table}: expected a list of rows, got {type(data).__name__}")
		if any(not isinstance(row, dict) for row in data):
			raise BaasError(f"{table}: expected every row to be an object")
		logger.debug(f"{table}: {len(data)} row(s) for {filters}")
		return data

	def select_one(self, table, columns="*", filters=None, order=None):
		rows = self.select(table, columns, filters=filters, order=order, limit=1)
		return rows[0] if rows else None
