from datetime import datetime

import rich.console

LOG_PREFIX = "productive_box"
STDOUT_CONSOLE = rich.console.Console()
STDERR_CONSOLE = rich.console.Console(stderr=True)


#============================================
def format_line(message: str) -> str:
	now_text = datetime.now().strftime("%H:%M:%S")
	return f"[{LOG_PREFIX} {now_text}] {message}"


#============================================
def pick_style(message: str) -> str:
	"""
	Choose a console style from message keywords.
	"""
	lower = message.lower()
	if ("failed" in lower) or ("error" in lower):
		return "bold red"
	if "skipping" in lower:
		return "yellow"
	if ("updated" in lower) or ("analyzed" in lower) or ("found" in lower):
		return "green"
	return "cyan"


#============================================
def log_step(message: str) -> None:
	"""
	Print one timestamped progress line to stdout.
	"""
	STDOUT_CONSOLE.print(
		format_line(message),
		style=pick_style(message),
		markup=False,
		highlight=False,
		soft_wrap=True,
	)


#============================================
def log_warning(message: str) -> None:
	"""
	Print one timestamped warning line to stderr.
	"""
	STDERR_CONSOLE.print(
		format_line(f"Warning: {message}"),
		style="yellow",
		markup=False,
		highlight=False,
		soft_wrap=True,
	)


#============================================
def log_error(message: str) -> None:
	STDERR_CONSOLE.print(
		format_line(f"Error: {message}"),
		style="bold red",
		markup=False,
		highlight=False,
		soft_wrap=True,
	)


#============================================
def print_report(lines: list[str]) -> None:
	"""
	Print report lines verbatim to stdout.
	"""
	for line in lines:
		STDOUT_CONSOLE.print(line, markup=False, highlight=False, soft_wrap=True)
