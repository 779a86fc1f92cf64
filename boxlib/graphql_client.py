import requests

from boxlib import box_errors
from boxlib.github_types import QueryEnvelope

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"
DEFAULT_TIMEOUT_SECONDS = 30


#============================================
class GraphQLClient:
	"""
	Thin requests wrapper for the GitHub GraphQL endpoint.
	"""

	def __init__(
		self,
		token: str,
		endpoint: str = GITHUB_GRAPHQL_URL,
		timeout_seconds: int = DEFAULT_TIMEOUT_SECONDS,
		log_fn=None,
	):
		self.token = (token or "").strip()
		self.endpoint = endpoint
		self.timeout_seconds = timeout_seconds
		self.log_fn = log_fn
		self._api_call_count = 0

	#============================================
	def log(self, message: str) -> None:
		"""
		Emit one log line when logger is configured.
		"""
		if self.log_fn is not None:
			self.log_fn(message)

	#============================================
	def api_usage_snapshot(self) -> dict:
		"""
		Return API counters for reporting.
		"""
		return {"api_call_count": self._api_call_count}

	#============================================
	def build_headers(self) -> dict:
		return {
			"Authorization": f"bearer {self.token}",
			"Content-Type": "application/json",
		}

	#============================================
	def execute(self, query: str) -> QueryEnvelope:
		"""
		POST one query and return the decoded response envelope.

		The envelope shape is not checked here; callers parse it with the
		github_types helpers for the query they sent.
		"""
		if not self.token:
			raise box_errors.AuthenticationMissingError(
				"GH_TOKEN is required. Set it in the environment or settings.yaml github.token."
			)
		self._api_call_count += 1
		try:
			response = requests.post(
				self.endpoint,
				headers=self.build_headers(),
				json={"query": query},
				timeout=self.timeout_seconds,
			)
		except requests.RequestException as error:
			raise box_errors.TransportError(f"GitHub API request failed: {error}") from error

		if not response.ok:
			raise box_errors.TransportError(
				f"GitHub API request failed: {response.status_code} {response.reason}",
				status_code=response.status_code,
				status_text=response.reason or "",
			)
		try:
			payload = response.json()
		except ValueError as error:
			raise box_errors.TransportError(
				"GitHub API returned a non-JSON body.",
				status_code=response.status_code,
				status_text=response.reason or "",
			) from error
		if not isinstance(payload, dict):
			raise box_errors.TransportError(
				"GitHub API returned a non-object JSON body.",
				status_code=response.status_code,
				status_text=response.reason or "",
			)
		envelope = QueryEnvelope.from_payload(payload)
		for error_item in envelope.errors:
			if isinstance(error_item, dict):
				self.log(f"GraphQL error: {error_item.get('message', error_item)}")
		return envelope
