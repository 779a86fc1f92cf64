from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from datetime import timezone
from zoneinfo import ZoneInfo

from boxlib import box_errors
from boxlib import github_types
from boxlib import graphql_queries

SEGMENT_ORDER = ("morning", "daytime", "evening", "night")
# [start, end) local hours per segment
SEGMENT_HOURS = {
	"morning": (6, 12),
	"daytime": (12, 18),
	"evening": (18, 24),
	"night": (0, 6),
}


#============================================
def segment_for_hour(hour: int) -> str:
	"""
	Map a local hour of day to its day segment name.
	"""
	if isinstance(hour, bool) or not isinstance(hour, int) or not 0 <= hour <= 23:
		raise box_errors.InvalidArgumentError(f"Hour must be between 0 and 23, got {hour!r}")
	for name in SEGMENT_ORDER:
		start, end = SEGMENT_HOURS[name]
		if start <= hour < end:
			return name
	raise box_errors.InvalidArgumentError(f"No day segment covers hour {hour}")


#============================================
def parse_committed_date(ts: str) -> datetime:
	"""
	Parse an ISO timestamp string into a timezone-aware datetime.
	"""
	parsed = datetime.fromisoformat(ts.replace("Z", "+00:00"))
	if parsed.tzinfo is None:
		parsed = parsed.replace(tzinfo=timezone.utc)
	return parsed


#============================================
def local_hour(ts: str, tz_value: ZoneInfo) -> int:
	return parse_committed_date(ts).astimezone(tz_value).hour


#============================================
@dataclass
class DaySegmentCounts:
	morning: int = 0
	daytime: int = 0
	evening: int = 0
	night: int = 0

	def add_hour(self, hour: int) -> str:
		name = segment_for_hour(hour)
		setattr(self, name, getattr(self, name) + 1)
		return name

	def total(self) -> int:
		return self.morning + self.daytime + self.evening + self.night

	def as_pairs(self) -> list[tuple[str, int]]:
		return [(name, getattr(self, name)) for name in SEGMENT_ORDER]


#============================================
@dataclass(frozen=True)
class FetchOutcome:
	"""
	Result of one commit-history fetch: either history or error is set.
	"""

	repository: github_types.Repository
	history: github_types.CommitHistory | None = None
	error: Exception | None = None

	@property
	def succeeded(self) -> bool:
		return self.error is None


#============================================
class CommitTimeAnalyzer:
	"""
	Resolve the viewer, list contributed repos, and bucket commit times.
	"""

	def __init__(self, client, timezone_name: str = "UTC", log_fn=None, warn_fn=None):
		self.client = client
		self.timezone_name = (timezone_name or "").strip() or "UTC"
		self.tz_value = ZoneInfo(self.timezone_name)
		self.log_fn = log_fn
		self.warn_fn = warn_fn

	#============================================
	def log(self, message: str) -> None:
		if self.log_fn is not None:
			self.log_fn(message)

	#============================================
	def warn(self, message: str) -> None:
		if self.warn_fn is not None:
			self.warn_fn(message)

	#============================================
	def fetch_identity(self) -> tuple[str, str]:
		"""
		Return viewer (login, id) or raise IdentityResolutionError.
		"""
		try:
			envelope = self.client.execute(graphql_queries.viewer_identity_query())
		except box_errors.BoxError as error:
			raise box_errors.IdentityResolutionError(
				f"Failed to get username and id: {error}"
			) from error
		if envelope.has_bad_credentials():
			raise box_errors.IdentityResolutionError(
				"Failed to get username and id: Invalid GitHub token. Please check your GH_TOKEN"
			)
		identity = github_types.parse_viewer_identity(envelope)
		if identity.login is None or identity.id is None:
			raise box_errors.IdentityResolutionError(
				"Failed to get username and id: Unable to fetch user information"
			)
		self.log(f"Fetched user info: {identity.login} ({identity.id})")
		return identity.login, identity.id

	#============================================
	def fetch_contributed_repositories(self, login: str) -> list[github_types.Repository]:
		"""
		Return non-fork repositories the user contributed to.
		"""
		try:
			envelope = self.client.execute(graphql_queries.contributed_repositories_query(login))
		except box_errors.BoxError as error:
			raise box_errors.RepositoryListError(
				f"Failed to get contributed repos: {error}"
			) from error
		if envelope.has_bad_credentials():
			raise box_errors.RepositoryListError(
				"Failed to get contributed repos: Invalid GitHub token. Please check your GH_TOKEN"
			)
		repositories = []
		for node in github_types.parse_contributed_repositories(envelope):
			if node.is_fork:
				continue
			if node.name is None or node.owner is None:
				continue
			repositories.append(github_types.Repository(name=node.name, owner=node.owner))
		self.log(f"Found {len(repositories)} contributed repositories")
		return repositories

	#============================================
	def fetch_commit_history(self, author_id: str, repository: github_types.Repository) -> FetchOutcome:
		"""
		Fetch one repository's commit history, capturing failure as an outcome.
		"""
		query = graphql_queries.commit_history_query(author_id, repository.name, repository.owner)
		try:
			envelope = self.client.execute(query)
		except box_errors.BoxError as error:
			return FetchOutcome(repository=repository, error=error)
		history = github_types.parse_commit_history(envelope)
		return FetchOutcome(repository=repository, history=history)

	#============================================
	def analyze(self, author_id: str, repositories: list[github_types.Repository]) -> DaySegmentCounts:
		"""
		Fetch commit histories one repo at a time and bucket commit hours.

		Failed fetches are warned about and skipped. When every fetch
		fails the counts stay at zero.
		"""
		self.log(f"Using timezone: {self.timezone_name}")
		outcomes = []
		for repository in repositories:
			outcome = self.fetch_commit_history(author_id, repository)
			if not outcome.succeeded:
				self.warn(f"Failed to fetch commits for {repository.full_name}: {outcome.error}")
			outcomes.append(outcome)

		succeeded = [outcome for outcome in outcomes if outcome.succeeded]
		failed_count = len(outcomes) - len(succeeded)
		self.log(
			f"Fetched commit history: {len(succeeded)} succeeded, {failed_count} failed"
		)

		counts = DaySegmentCounts()
		for outcome in succeeded:
			for committed_date in outcome.history.committed_dates:
				try:
					hour = local_hour(committed_date, self.tz_value)
				except ValueError:
					self.log(
						f"Skipping unparsable commit date in {outcome.repository.full_name}: "
						+ f"{committed_date!r}"
					)
					continue
				counts.add_hour(hour)
		return counts
