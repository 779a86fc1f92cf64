from types import SimpleNamespace

import github
import pytest
import requests

import productive_box
from boxlib import graphql_client


#============================================
def install_graphql(monkeypatch, answer_fn) -> list:
	"""
	Route GraphQL POSTs to answer_fn(query) -> payload dict.
	"""
	queries = []

	def fake_post(url, headers=None, json=None, timeout=None):
		queries.append(json["query"])
		payload = answer_fn(json["query"])
		return SimpleNamespace(ok=True, status_code=200, reason="OK", json=lambda: payload)

	monkeypatch.setattr(graphql_client.requests, "post", fake_post)
	return queries


#============================================
def set_env(monkeypatch, tmp_path) -> list[str]:
	monkeypatch.setenv("GH_TOKEN", "secret")
	monkeypatch.setenv("GIST_ID", "abc123")
	monkeypatch.delenv("TIMEZONE", raising=False)
	return ["--settings", str(tmp_path / "missing.yaml")]


#============================================
def test_bad_credentials_aborts_before_repository_fetch(monkeypatch, tmp_path, capsys) -> None:
	"""
	Credential rejection on identity lookup should exit 1 after one query.
	"""
	argv = set_env(monkeypatch, tmp_path)
	queries = install_graphql(monkeypatch, lambda query: {"message": "Bad credentials"})
	with pytest.raises(SystemExit) as caught:
		productive_box.main(argv)
	assert caught.value.code == 1
	assert len(queries) == 1
	assert "viewer" in queries[0]
	captured = capsys.readouterr()
	assert "Invalid GitHub token" in captured.err


#============================================
def test_missing_token_exits_with_settings_error(monkeypatch, tmp_path, capsys) -> None:
	argv = set_env(monkeypatch, tmp_path)
	monkeypatch.delenv("GH_TOKEN")
	queries = install_graphql(monkeypatch, lambda query: {})
	with pytest.raises(SystemExit) as caught:
		productive_box.main(argv)
	assert caught.value.code == 1
	assert queries == []
	assert "GH_TOKEN" in capsys.readouterr().err


#============================================
def test_no_contributed_repositories_exits(monkeypatch, tmp_path, capsys) -> None:
	argv = set_env(monkeypatch, tmp_path)

	def answer(query):
		if "viewer" in query:
			return {"data": {"viewer": {"login": "alice", "id": "U_1"}}}
		return {"data": {"user": {"repositoriesContributedTo": {"nodes": []}}}}

	install_graphql(monkeypatch, answer)
	with pytest.raises(SystemExit):
		productive_box.main(argv)
	assert "No contributed repositories found" in capsys.readouterr().err


#============================================
def test_dry_run_prints_report(monkeypatch, tmp_path, capsys) -> None:
	"""
	Dry run should fetch, bucket, and print the report without publishing.
	"""
	argv = set_env(monkeypatch, tmp_path) + ["--dry-run", "--timezone", "UTC"]
	monkeypatch.delenv("GIST_ID")

	def answer(query):
		if "viewer" in query:
			return {"data": {"viewer": {"login": "alice", "id": "U_1"}}}
		if "repositoriesContributedTo" in query:
			nodes = [
				{"isFork": False, "name": "tool", "owner": {"login": "alice"}},
				{"isFork": True, "name": "fork", "owner": {"login": "alice"}},
			]
			return {"data": {"user": {"repositoriesContributedTo": {"nodes": nodes}}}}
		edges = [
			{"node": {"committedDate": "2026-01-05T07:00:00Z"}},
			{"node": {"committedDate": "2026-01-05T22:00:00Z"}},
		]
		return {
			"data": {
				"repository": {
					"defaultBranchRef": {"target": {"history": {"edges": edges}}}
				}
			}
		}

	queries = install_graphql(monkeypatch, answer)
	productive_box.main(argv)
	assert len(queries) == 3
	out = capsys.readouterr().out
	assert "🌞 Morning     1 commits" in out
	assert "🌃 Evening     1 commits" in out
	assert "All done!" in out


#============================================
def answer_one_repo(query: str) -> dict:
	"""
	Viewer alice with one repo holding a morning and an evening commit.
	"""
	if "viewer" in query:
		return {"data": {"viewer": {"login": "alice", "id": "U_1"}}}
	if "repositoriesContributedTo" in query:
		nodes = [{"isFork": False, "name": "tool", "owner": {"login": "alice"}}]
		return {"data": {"user": {"repositoriesContributedTo": {"nodes": nodes}}}}
	edges = [
		{"node": {"committedDate": "2026-01-05T07:00:00Z"}},
		{"node": {"committedDate": "2026-01-05T08:00:00Z"}},
		{"node": {"committedDate": "2026-01-05T22:00:00Z"}},
	]
	return {
		"data": {
			"repository": {
				"defaultBranchRef": {"target": {"history": {"edges": edges}}}
			}
		}
	}


#============================================
class RecordingGist:
	def __init__(self):
		self.files = {"productive.md": object()}
		self.edits = []

	def edit(self, **kwargs) -> None:
		self.edits.append(kwargs)


#============================================
def install_github(monkeypatch, get_gist) -> list:
	"""
	Replace PyGithub's Github class with a stub serving get_gist.
	"""
	requested = []

	def fake_github(auth=None):
		def recorded_get_gist(gist_id):
			requested.append(gist_id)
			return get_gist(gist_id)
		return SimpleNamespace(get_gist=recorded_get_gist)

	monkeypatch.setattr(github, "Github", fake_github)
	return requested


#============================================
def test_publish_run_updates_gist(monkeypatch, tmp_path, capsys) -> None:
	"""
	A full run should overwrite the first gist file with the report.
	"""
	argv = set_env(monkeypatch, tmp_path)
	install_graphql(monkeypatch, answer_one_repo)
	gist = RecordingGist()
	requested = install_github(monkeypatch, lambda gist_id: gist)
	productive_box.main(argv)
	assert requested == ["abc123"]
	assert len(gist.edits) == 1
	new_file = gist.edits[0]["files"]["productive.md"]
	identity = new_file._identity
	assert identity["filename"] == "I'm an early 🐤"
	assert identity["content"].splitlines()[0].startswith("🌞 Morning     2 commits")
	out = capsys.readouterr().out
	assert "All done!" in out


#============================================
def test_publish_connection_error_exits_with_error_line(monkeypatch, tmp_path, capsys) -> None:
	argv = set_env(monkeypatch, tmp_path)
	install_graphql(monkeypatch, answer_one_repo)

	def get_gist(gist_id):
		raise requests.ConnectionError("connection reset")

	install_github(monkeypatch, get_gist)
	with pytest.raises(SystemExit) as caught:
		productive_box.main(argv)
	assert caught.value.code == 1
	err = capsys.readouterr().err
	assert "Error: Failed to update gist: connection reset" in err


#============================================
def test_runtime_error_outside_taxonomy_exits_with_error_line(monkeypatch, tmp_path, capsys) -> None:
	"""
	Plain RuntimeErrors should still end in an error line and exit status 1.
	"""
	argv = set_env(monkeypatch, tmp_path)
	install_graphql(monkeypatch, answer_one_repo)

	def fake_github(auth=None):
		raise RuntimeError("Missing dependency: PyGithub. Install it with pip install PyGithub.")

	monkeypatch.setattr(github, "Github", fake_github)
	with pytest.raises(SystemExit) as caught:
		productive_box.main(argv)
	assert caught.value.code == 1
	assert "Error: Missing dependency: PyGithub" in capsys.readouterr().err
