import os
from dataclasses import dataclass
from zoneinfo import ZoneInfo
from zoneinfo import ZoneInfoNotFoundError

import yaml

from boxlib import box_errors
from boxlib.github_types import dig

DEFAULT_TIMEZONE = "UTC"
# environment variable -> settings.yaml key path
ENV_SETTING_PATHS = {
	"GH_TOKEN": ["github", "token"],
	"GIST_ID": ["gist", "id"],
	"TIMEZONE": ["report", "timezone"],
}


#============================================
@dataclass(frozen=True)
class BoxSettings:
	github_token: str
	gist_id: str
	timezone_name: str = DEFAULT_TIMEZONE


#============================================
def load_settings(path_text: str) -> tuple[dict, str]:
	"""
	Load the YAML settings mapping; a missing or empty file gives {}.
	"""
	resolved_path = os.path.abspath(os.path.expanduser(path_text))
	if not os.path.isfile(resolved_path):
		return {}, resolved_path
	with open(resolved_path, "r", encoding="utf-8") as handle:
		try:
			data = yaml.safe_load(handle)
		except yaml.YAMLError as error:
			raise box_errors.SettingsError(f"Invalid YAML in {resolved_path}: {error}") from error
	if data is None:
		return {}, resolved_path
	if not isinstance(data, dict):
		raise box_errors.SettingsError(f"Settings file must contain a mapping: {resolved_path}")
	return data, resolved_path


#============================================
def resolve_value(settings: dict, env_name: str, environ) -> str:
	"""
	Resolve one value, preferring the environment over settings.yaml.
	"""
	env_value = (environ.get(env_name, "") or "").strip()
	if env_value:
		return env_value
	file_value = dig(settings, ENV_SETTING_PATHS[env_name])
	if file_value is None:
		return ""
	return str(file_value).strip()


#============================================
def validate_timezone(name: str) -> str:
	"""
	Return the zone name when ZoneInfo knows it, else raise SettingsError.
	"""
	try:
		ZoneInfo(name)
	except (ZoneInfoNotFoundError, ValueError) as error:
		raise box_errors.SettingsError(f"Unknown timezone: {name!r}") from error
	return name


#============================================
def resolve_box_settings(
	settings: dict,
	environ=None,
	timezone_override: str = "",
	require_gist: bool = True,
) -> BoxSettings:
	"""
	Build BoxSettings from YAML settings and environment variables.

	Every missing required key is reported in a single SettingsError.
	"""
	if environ is None:
		environ = os.environ
	token = resolve_value(settings, "GH_TOKEN", environ)
	gist_id = resolve_value(settings, "GIST_ID", environ)
	missing = []
	if not token:
		missing.append("GH_TOKEN")
	if require_gist and not gist_id:
		missing.append("GIST_ID")
	if missing:
		raise box_errors.SettingsError(
			f"Missing required environment variables: {', '.join(missing)}"
		)
	timezone_name = (timezone_override or "").strip()
	if not timezone_name:
		timezone_name = resolve_value(settings, "TIMEZONE", environ) or DEFAULT_TIMEZONE
	return BoxSettings(
		github_token=token,
		gist_id=gist_id,
		timezone_name=validate_timezone(timezone_name),
	)
