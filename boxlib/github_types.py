from __future__ import annotations

from dataclasses import dataclass
from dataclasses import field

BAD_CREDENTIALS_MESSAGE = "Bad credentials"


#============================================
def dig(payload, keys: list[str]):
	"""
	Walk nested mappings by key path, returning None on any missing level.
	"""
	current = payload
	for key in keys:
		if not isinstance(current, dict):
			return None
		current = current.get(key)
	return current


#============================================
def clean_text(value) -> str | None:
	"""
	Return a stripped non-empty string or None.
	"""
	if not isinstance(value, str):
		return None
	text = value.strip()
	return text or None


#============================================
@dataclass(frozen=True)
class QueryEnvelope:
	"""
	Top-level GraphQL response body with optional data and message.
	"""

	data: dict | None = None
	message: str | None = None
	errors: list = field(default_factory=list)

	@classmethod
	def from_payload(cls, payload: dict) -> QueryEnvelope:
		data = payload.get("data")
		message = payload.get("message")
		errors = payload.get("errors")
		return cls(
			data=data if isinstance(data, dict) else None,
			message=message if isinstance(message, str) else None,
			errors=errors if isinstance(errors, list) else [],
		)

	def has_bad_credentials(self) -> bool:
		return self.message == BAD_CREDENTIALS_MESSAGE


#============================================
@dataclass(frozen=True)
class Repository:
	name: str
	owner: str

	@property
	def full_name(self) -> str:
		return f"{self.owner}/{self.name}"


#============================================
@dataclass(frozen=True)
class ViewerIdentity:
	login: str | None
	id: str | None


#============================================
@dataclass(frozen=True)
class ContributedRepository:
	name: str | None
	owner: str | None
	is_fork: bool


#============================================
@dataclass(frozen=True)
class CommitHistory:
	committed_dates: list[str] = field(default_factory=list)


#============================================
def parse_viewer_identity(envelope: QueryEnvelope) -> ViewerIdentity:
	"""
	Read viewer login and id, leaving absent values as None.
	"""
	viewer = dig(envelope.data, ["viewer"])
	return ViewerIdentity(
		login=clean_text(dig(viewer, ["login"])),
		id=clean_text(dig(viewer, ["id"])),
	)


#============================================
def parse_contributed_repositories(envelope: QueryEnvelope) -> list[ContributedRepository]:
	"""
	Read contributed repository nodes; a missing node list yields [].
	"""
	nodes = dig(envelope.data, ["user", "repositoriesContributedTo", "nodes"])
	if not isinstance(nodes, list):
		return []
	repositories = []
	for node in nodes:
		if not isinstance(node, dict):
			continue
		repositories.append(
			ContributedRepository(
				name=clean_text(node.get("name")),
				owner=clean_text(dig(node, ["owner", "login"])),
				is_fork=bool(node.get("isFork")),
			)
		)
	return repositories


#============================================
def parse_commit_history(envelope: QueryEnvelope) -> CommitHistory:
	"""
	Read committedDate values from default-branch history edges.

	Edges without a timestamp are dropped; a missing edge list yields no dates.
	"""
	edges = dig(
		envelope.data,
		["repository", "defaultBranchRef", "target", "history", "edges"],
	)
	if not isinstance(edges, list):
		return CommitHistory()
	dates = []
	for edge in edges:
		committed_date = clean_text(dig(edge, ["node", "committedDate"]))
		if committed_date is None:
			continue
		dates.append(committed_date)
	return CommitHistory(committed_dates=dates)
