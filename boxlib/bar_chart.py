import math

from boxlib import box_errors

# index 0 is empty, index 8 is a full block, 1-7 are eighths
BAR_SYMBOLS = "░▏▎▍▌▋▊▉█"
EMPTY_SYMBOL = BAR_SYMBOLS[0]
FULL_SYMBOL = BAR_SYMBOLS[8]


#============================================
def render_bar_chart(percent: float, width: int) -> str:
	"""
	Render percent as a fixed-width bar with one-eighth block resolution.

	Raises InvalidArgumentError when percent is outside [0, 100] or when
	width is below 1. Values are never clamped.
	"""
	if isinstance(percent, bool) or not isinstance(percent, (int, float)):
		raise box_errors.InvalidArgumentError(f"Percent must be a number, got {percent!r}")
	if math.isnan(percent) or percent < 0 or percent > 100:
		raise box_errors.InvalidArgumentError(
			f"Percent must be between 0 and 100, got {percent}"
		)
	if isinstance(width, bool) or not isinstance(width, int):
		raise box_errors.InvalidArgumentError(f"Width must be an integer, got {width!r}")
	if width < 1:
		raise box_errors.InvalidArgumentError(f"Width must be at least 1, got {width}")

	eighths = math.floor(width * 8 * percent / 100)
	full_blocks = eighths // 8
	if full_blocks >= width:
		return FULL_SYMBOL * width

	partial = BAR_SYMBOLS[eighths % 8]
	bar = FULL_SYMBOL * full_blocks + partial
	return bar.ljust(width, EMPTY_SYMBOL)
