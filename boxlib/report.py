import re

from boxlib import bar_chart
from boxlib import box_errors
from boxlib.commit_times import DaySegmentCounts

BAR_WIDTH = 21
LABEL_WIDTH = 9
COUNT_WIDTH = 5
COMMIT_TEXT_WIDTH = 14
PERCENT_WIDTH = 5
SEGMENT_LABELS = {
	"morning": "🌞 Morning",
	"daytime": "🌆 Daytime",
	"evening": "🌃 Evening",
	"night": "🌙 Night",
}
PERCENT_SUFFIX_RE = re.compile(r"(-?\d+(?:\.\d+)?)%\s*$")


#============================================
def format_report_line(label: str, commits: int, percent: float) -> str:
	"""
	Format one aligned report line with its bar chart.
	"""
	commit_text = f"{commits:>{COUNT_WIDTH}} commits"
	bar = bar_chart.render_bar_chart(percent, BAR_WIDTH)
	percent_text = f"{percent:>{PERCENT_WIDTH}.1f}%"
	return f"{label:<{LABEL_WIDTH}} {commit_text:<{COMMIT_TEXT_WIDTH}} {bar} {percent_text}"


#============================================
def generate_report_lines(counts: DaySegmentCounts, log_fn=None) -> list[str]:
	"""
	Render morning, daytime, evening, and night lines in that order.

	Raises NoCommitsFoundError when there is nothing to report.
	"""
	total = counts.total()
	if total == 0:
		raise box_errors.NoCommitsFoundError(
			"No commits found. Make sure your repositories have commits."
		)
	if log_fn is not None:
		log_fn(f"Analyzed {total} total commits")
	lines = []
	for name, commits in counts.as_pairs():
		percent = commits / total * 100
		lines.append(format_report_line(SEGMENT_LABELS[name], commits, percent))
	return lines


#============================================
def parse_line_percent(line: str) -> float:
	"""
	Read the trailing percentage back out of a formatted report line.
	"""
	match = PERCENT_SUFFIX_RE.search(line or "")
	if match is None:
		return 0.0
	return float(match.group(1))
