"""
Registration geometry: scale mark, alignment marks and the page matrix.

All coordinates returned here are millimeters in the page frame, with the
origin at the physical lower-left corner of the sheet.
"""

# Standard Library
import dataclasses

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.geometry


Point = fpt.geometry.Point
PageOffset = fpt.config.PageOffset
SheetConfig = fpt.config.SheetConfig

ALIGNMENT_MARK_SIZE = fpt.config.ALIGNMENT_MARK_SIZE
SCALE_MARK_POINTS = fpt.config.SCALE_MARK_POINTS

MARK_NORMAL = "NORMAL"
MARK_ROTATED = "ROTATED"

# filled quarter circles, as (start angle, end angle) in degrees
MARK_QUADRANTS = {
	MARK_NORMAL: ((0.0, 90.0), (180.0, 270.0)),
	MARK_ROTATED: ((90.0, 180.0), (270.0, 360.0)),
}


@dataclasses.dataclass(frozen=True)
class AlignmentMark:
	center: Point
	radius: float
	orientation: str

	@property
	def quadrants(self) -> tuple[tuple[float, float], ...]:
		return MARK_QUADRANTS[self.orientation]


@dataclasses.dataclass(frozen=True)
class PageMatrix:
	origin: Point
	step_x: float
	step_y: float
	width: float
	height: float
	current_cell: tuple[float, float, float, float]

	def grid_lines(self) -> tuple[list[float], list[float]]:
		"""
		Grid line positions relative to the matrix origin.

		Returns:
			Tuple of (x positions, y positions).
		"""
		return (_grid_positions(self.step_x, self.width), _grid_positions(self.step_y, self.height))


#============================================
def _grid_positions(step: float, extent: float) -> list[float]:
	positions = []
	index = 0
	# tolerance keeps the closing line despite rounding in the scaled step
	while index * step <= extent + 1.0e-9:
		positions.append(index * step)
		index += 1
	return positions


#============================================
def build_scale_mark(sheet: SheetConfig) -> list[Point]:
	"""
	Stepped reference outline for checking 1:1 print scale.

	The outline has 1/2 inch and 1/4 inch steps and sits just inside the
	left margin, above the lower overlap band.

	Args:
		sheet: Sheet configuration.

	Returns:
		Polyline points in the page frame.
	"""
	origin = (
		fpt.config.inches_to_mm(sheet.margin),
		fpt.config.inches_to_mm(2.0 * sheet.overlap),
	)
	return [fpt.geometry.add(origin, point) for point in SCALE_MARK_POINTS]


#============================================
def build_alignment_marks(sheet: SheetConfig) -> list[AlignmentMark]:
	"""
	Corner marks centered in the overlap band.

	Diagonal corners share an orientation so marks on neighboring sheets
	complete each other when the overlap is lined up.

	Args:
		sheet: Sheet configuration.

	Returns:
		Marks for bottom-left, bottom-right, top-left, top-right.
	"""
	edge_offset = sheet.margin + 0.5 * sheet.overlap
	radius = fpt.config.inches_to_mm(0.5 * ALIGNMENT_MARK_SIZE)
	left = fpt.config.inches_to_mm(edge_offset)
	right = fpt.config.inches_to_mm(sheet.page_width - edge_offset)
	bottom = fpt.config.inches_to_mm(edge_offset)
	top = fpt.config.inches_to_mm(sheet.page_height - edge_offset)
	return [
		AlignmentMark(center=(left, bottom), radius=radius, orientation=MARK_NORMAL),
		AlignmentMark(center=(right, bottom), radius=radius, orientation=MARK_ROTATED),
		AlignmentMark(center=(left, top), radius=radius, orientation=MARK_ROTATED),
		AlignmentMark(center=(right, top), radius=radius, orientation=MARK_NORMAL),
	]


#============================================
def smallest_spacing(values: list[float]) -> float:
	"""
	Gap between the two smallest distinct values, or 0.0 if all are equal.
	"""
	distinct = sorted(set(values))
	if len(distinct) > 1:
		return distinct[1] - distinct[0]
	return 0.0


#============================================
def build_page_matrix(
	offsets: tuple[PageOffset, ...] | list[PageOffset],
	current: PageOffset,
	sheet: SheetConfig,
) -> PageMatrix | None:
	"""
	Miniature map of the tile grid with the current page filled.

	The map is scaled so its larger side equals the overlap, keeping it
	inside the lower overlap band next to the bottom-left alignment mark.

	Args:
		offsets: Offsets of every tile.
		current: Offset of the page being drawn.
		sheet: Sheet configuration.

	Returns:
		PageMatrix, or None for a single page.
	"""
	if len(offsets) < 2:
		return None

	xs = [offset.x for offset in offsets]
	ys = [offset.y for offset in offsets]
	delta_x = smallest_spacing(xs)
	delta_y = smallest_spacing(ys)
	if delta_x == 0.0:
		if delta_y <= 0.0:
			raise AssertionError("Page offsets do not form a grid")
		delta_x = delta_y * sheet.page_width / sheet.page_height
	if delta_y == 0.0:
		if delta_x <= 0.0:
			raise AssertionError("Page offsets do not form a grid")
		delta_y = delta_x * sheet.page_height / sheet.page_width

	max_x = fpt.config.inches_to_mm(max(xs) + delta_x)
	max_y = fpt.config.inches_to_mm(max(ys) + delta_y)
	delta_x = fpt.config.inches_to_mm(delta_x)
	delta_y = fpt.config.inches_to_mm(delta_y)

	largest = fpt.config.inches_to_mm(sheet.overlap)
	factor = largest / max(max_x, max_y)

	cell_x = fpt.config.inches_to_mm(current.x) * factor
	cell_y = fpt.config.inches_to_mm(current.y) * factor
	origin = (
		fpt.config.inches_to_mm(sheet.margin + sheet.overlap),
		fpt.config.inches_to_mm(sheet.margin),
	)
	return PageMatrix(
		origin=origin,
		step_x=delta_x * factor,
		step_y=delta_y * factor,
		width=max_x * factor,
		height=max_y * factor,
		current_cell=(cell_x, cell_y, cell_x + delta_x * factor, cell_y + delta_y * factor),
	)
