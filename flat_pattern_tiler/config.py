"""
Shared configuration and constants.
"""

import dataclasses


MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0

DEFAULT_MARGIN = 0.5
DEFAULT_OVERLAP = 0.75
DEFAULT_PAGE_WIDTH = 17.0
DEFAULT_PAGE_HEIGHT = 11.0

# Geometry tolerances, millimeters for coordinates and unitless for t values.
PARALLEL_TOLERANCE = 1.0e-10
NEAR_MISS_TOLERANCE = 1.0e-10
COINCIDENT_TOLERANCE = 1.0e-9

ROTATION_STEP = 1.0
PREFERRED_ROTATION = 90.0

ALIGNMENT_MARK_SIZE = 0.3
SCALE_MARK_POINTS = (
	(12.7, 0.0),
	(0.0, 0.0),
	(0.0, 12.7),
	(12.7, 12.7),
	(12.7, 25.4),
	(0.0, 25.4),
	(0.0, 31.75),
	(6.35, 31.75),
	(6.35, 38.1),
	(0.0, 38.1),
)

DEFAULT_LINE_WIDTH = 0.4
MATRIX_LINE_WIDTH = 0.2
TIKZ_PRECISION = 6


@dataclasses.dataclass
class SheetConfig:
	margin: float = DEFAULT_MARGIN
	overlap: float = DEFAULT_OVERLAP
	page_width: float = DEFAULT_PAGE_WIDTH
	page_height: float = DEFAULT_PAGE_HEIGHT

	@property
	def available_width(self) -> float:
		return self.page_width - 2.0 * self.margin

	@property
	def available_height(self) -> float:
		return self.page_height - 2.0 * self.margin


@dataclasses.dataclass(frozen=True)
class PageOffset:
	x: float
	y: float


@dataclasses.dataclass(frozen=True)
class PageLayout:
	columns: int
	rows: int
	pattern_width: float
	pattern_height: float
	offsets: tuple[PageOffset, ...]

	@property
	def tile_count(self) -> int:
		return self.columns * self.rows


#============================================
def inches_to_mm(value: float) -> float:
	"""
	Convert inches to millimeters.

	Args:
		value: Inches value.

	Returns:
		Millimeters value.
	"""
	return value * MM_PER_INCH


#============================================
def mm_to_inches(value: float) -> float:
	"""
	Convert millimeters to inches.

	Args:
		value: Millimeters value.

	Returns:
		Inches value.
	"""
	return value / MM_PER_INCH


#============================================
def inches_to_points(value: float) -> float:
	"""
	Convert inches to points.

	Args:
		value: Inches value.

	Returns:
		Points value.
	"""
	return value * POINTS_PER_INCH


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to points.
	"""
	return value * POINTS_PER_INCH / MM_PER_INCH


#============================================
def describe_sheet(sheet: SheetConfig) -> str:
	"""
	Short human-readable sheet summary.
	"""
	return (
		f"{sheet.page_width:g} x {sheet.page_height:g} in sheets, "
		f"margin {sheet.margin:g} in, overlap {sheet.overlap:g} in"
	)


#============================================
def validate_sheet_config(sheet: SheetConfig) -> None:
	"""
	Reject sheet settings that leave no usable printable area.

	Args:
		sheet: Sheet configuration.

	Raises:
		ValueError: When margins swallow the page or tiles cannot advance.
	"""
	if sheet.margin < 0.0 or sheet.overlap < 0.0:
		raise ValueError(
			f"Margin and overlap must be non-negative (margin={sheet.margin}, overlap={sheet.overlap})"
		)
	if sheet.available_width <= 0.0 or sheet.available_height <= 0.0:
		raise ValueError(
			f"Page {sheet.page_width}x{sheet.page_height} in has no printable area with margin {sheet.margin} in"
		)
	if sheet.available_width <= sheet.overlap or sheet.available_height <= sheet.overlap:
		raise ValueError(
			f"Overlap {sheet.overlap} in must be smaller than the printable area "
			f"{sheet.available_width}x{sheet.available_height} in"
		)
