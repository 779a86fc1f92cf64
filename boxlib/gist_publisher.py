import requests

from boxlib import box_errors
from boxlib import report

MORNING_TITLE = "I'm an early 🐤"
NIGHT_TITLE = "I'm a night 🦉"


#============================================
def choose_title(lines: list[str]) -> str:
	"""
	Pick the gist title from morning versus evening percentages.

	Percentages are read back from the formatted lines so the title always
	agrees with the published text.
	"""
	morning_percent = report.parse_line_percent(lines[0]) if len(lines) > 0 else 0.0
	evening_percent = report.parse_line_percent(lines[2]) if len(lines) > 2 else 0.0
	if morning_percent > evening_percent:
		return MORNING_TITLE
	return NIGHT_TITLE


#============================================
class GistPublisher:
	"""
	Thin PyGithub wrapper that overwrites the first file of one gist.
	"""

	def __init__(self, token: str, gist_id: str, log_fn=None, github_client=None):
		self.gist_id = (gist_id or "").strip()
		self.log_fn = log_fn
		try:
			from github import Auth
			from github import Github
			from github import InputFileContent
			from github.GithubException import GithubException
		except ModuleNotFoundError as error:
			raise RuntimeError(
				"Missing dependency: PyGithub. Install it with pip install PyGithub."
			) from error
		self._github_exception_class = GithubException
		self._input_file_class = InputFileContent
		if github_client is None:
			github_client = Github(auth=Auth.Token(token))
		self.client = github_client

	#============================================
	def log(self, message: str) -> None:
		"""
		Emit one log line when logger is configured.
		"""
		if self.log_fn is not None:
			self.log_fn(message)

	#============================================
	def publish(self, lines: list[str]) -> str:
		"""
		Write the report lines into the gist and return the new file title.
		"""
		if not self.gist_id:
			raise box_errors.PublishError("Failed to update gist: GIST_ID is required")
		try:
			gist = self.client.get_gist(self.gist_id)
			files = gist.files or {}
			if len(files) == 0:
				raise box_errors.PublishTargetEmptyError(
					"Failed to update gist: No files found in the gist"
				)
			filename = next(iter(files))
			title = choose_title(lines)
			gist.edit(
				files={
					filename: self._input_file_class("\n".join(lines), new_name=title),
				}
			)
		except self._github_exception_class as error:
			raise box_errors.PublishError(f"Failed to update gist: {error}") from error
		except requests.RequestException as error:
			raise box_errors.PublishError(f"Failed to update gist: {error}") from error
		self.log(f"Successfully updated gist {self.gist_id} as {title!r}")
		return title
