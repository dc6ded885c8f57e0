"""
Segment intersections with a page's printable rectangle.
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

PARALLEL_TOLERANCE = fpt.config.PARALLEL_TOLERANCE
NEAR_MISS_TOLERANCE = fpt.config.NEAR_MISS_TOLERANCE
COINCIDENT_TOLERANCE = fpt.config.COINCIDENT_TOLERANCE

UP = (0.0, 1.0)
RIGHT = (1.0, 0.0)


@dataclasses.dataclass(frozen=True)
class PageRect:
	min_x: float
	min_y: float
	max_x: float
	max_y: float

	@property
	def lower_left(self) -> Point:
		return (self.min_x, self.min_y)

	@property
	def lower_right(self) -> Point:
		return (self.max_x, self.min_y)

	@property
	def upper_left(self) -> Point:
		return (self.min_x, self.max_y)

	@property
	def upper_right(self) -> Point:
		return (self.max_x, self.max_y)


@dataclasses.dataclass(frozen=True)
class IntersectionCandidate:
	error: float
	point: Point


#============================================
def page_rect(offset: PageOffset, sheet: SheetConfig) -> PageRect:
	"""
	Build the printable rectangle of a tile in millimeters.

	Args:
		offset: Tile lower-left corner in inches.
		sheet: Sheet configuration.

	Returns:
		PageRect in the pattern frame.
	"""
	min_x = fpt.config.inches_to_mm(offset.x)
	min_y = fpt.config.inches_to_mm(offset.y)
	return PageRect(
		min_x=min_x,
		min_y=min_y,
		max_x=min_x + fpt.config.inches_to_mm(sheet.available_width),
		max_y=min_y + fpt.config.inches_to_mm(sheet.available_height),
	)


#============================================
def is_on_page(point: Point, rect: PageRect) -> bool:
	"""
	Strict interior test; boundary points count as off the page.
	"""
	if point[0] <= rect.min_x or point[0] >= rect.max_x:
		return False
	if point[1] <= rect.min_y or point[1] >= rect.max_y:
		return False
	return True


#============================================
def compute_t_error(t: float) -> float:
	"""
	Distance of a parametric value from the [0, 1] interval.
	"""
	if t < 0.0:
		return -t
	if t > 1.0:
		return t - 1.0
	return 0.0


#============================================
def promote_near_misses(
	accepted: list[Point],
	rejected: list[IntersectionCandidate],
	expected_count: int,
	tolerance: float = NEAR_MISS_TOLERANCE,
	required: bool = True,
) -> list[Point]:
	"""
	Best-effort nearest boundary points for floating point near-misses.

	Rejected candidates are promoted in order of increasing parametric
	error until the expected count is reached. Candidates repeating an
	intersection already in the result are skipped. When the count is
	required, a promoted candidate outside the tolerance means the
	caller's geometry is inconsistent; otherwise promotion stops there.

	Args:
		accepted: Intersections that passed the [0, 1] checks.
		rejected: Candidates that failed, with their worst t error.
		expected_count: Number of intersections the caller needs.
		tolerance: Largest t error that may be promoted.
		required: Raise instead of returning fewer than expected_count.

	Returns:
		Accepted intersections plus any promoted candidates.
	"""
	result = list(accepted)
	if len(result) >= expected_count:
		return result
	ranked = sorted(rejected, key=lambda candidate: candidate.error)
	for candidate in ranked:
		if len(result) >= expected_count:
			break
		if candidate.error >= tolerance:
			if not required:
				break
			raise AssertionError(
				f"Nearest boundary candidate {candidate.point} misses by t error {candidate.error:.3g}"
			)
		if any(fpt.geometry.points_close(candidate.point, kept, COINCIDENT_TOLERANCE) for kept in result):
			continue
		result.append(candidate.point)
	return result


#============================================
def merge_coincident(points: list[Point]) -> list[Point]:
	"""
	Drop repeated intersections, such as a crossing through a corner.
	"""
	merged: list[Point] = []
	for point in points:
		if any(fpt.geometry.points_close(point, kept, COINCIDENT_TOLERANCE) for kept in merged):
			continue
		merged.append(point)
	return merged


#============================================
def _parallel_edge_intersections(p1: Point, p2: Point, rect: PageRect) -> list[Point]:
	"""
	Endpoints of a segment that runs along a page edge.
	"""
	direction = fpt.geometry.subtract(p2, p1)
	intersections: list[Point] = []
	if fpt.geometry.cross_2d_norm(direction, RIGHT) < PARALLEL_TOLERANCE:
		on_edge = (
			abs(p1[1] - rect.min_y) < PARALLEL_TOLERANCE
			or abs(p1[1] - rect.max_y) < PARALLEL_TOLERANCE
		)
		if on_edge:
			for point in (p1, p2):
				if rect.min_x <= point[0] <= rect.max_x:
					intersections.append(point)
	elif fpt.geometry.cross_2d_norm(direction, UP) < PARALLEL_TOLERANCE:
		on_edge = (
			abs(p1[0] - rect.min_x) < PARALLEL_TOLERANCE
			or abs(p1[0] - rect.max_x) < PARALLEL_TOLERANCE
		)
		if on_edge:
			for point in (p1, p2):
				if rect.min_y <= point[1] <= rect.max_y:
					intersections.append(point)
	return intersections


#============================================
def get_boundary_intersections(
	p1: Point,
	p2: Point,
	rect: PageRect,
	expected_count: int,
	required: bool = True,
) -> list[Point]:
	"""
	Find where the segment p1-p2 crosses the edges of a page rectangle.

	Args:
		p1: Segment start in millimeters.
		p2: Segment end in millimeters.
		rect: Printable rectangle.
		expected_count: Intersections the caller needs; near-misses are
			promoted to reach it.
		required: Raise when near-misses cannot reach expected_count.

	Returns:
		List of intersection points.
	"""
	intersections = _parallel_edge_intersections(p1, p2, rect)
	if len(intersections) == 2:
		return intersections

	direction = fpt.geometry.subtract(p2, p1)
	rejected: list[IntersectionCandidate] = []

	edges: list[tuple[Point, Point, Point]] = []
	if abs(fpt.geometry.dot(direction, RIGHT)) > PARALLEL_TOLERANCE:
		edges.append((rect.lower_left, rect.upper_left, UP))
		edges.append((rect.lower_right, rect.upper_right, UP))
	if abs(fpt.geometry.dot(direction, UP)) > PARALLEL_TOLERANCE:
		edges.append((rect.lower_left, rect.lower_right, RIGHT))
		edges.append((rect.upper_left, rect.upper_right, RIGHT))

	# test both the segment and the edge parameter, a line hit alone is not enough
	for edge_start, edge_end, edge_direction in edges:
		isect = fpt.geometry.find_intersection(p1, direction, edge_start, edge_direction)
		t_segment = fpt.geometry.solve_for_t(p1, p2, isect)
		t_edge = fpt.geometry.solve_for_t(edge_start, edge_end, isect)
		error = max(compute_t_error(t_segment), compute_t_error(t_edge))
		if error == 0.0:
			intersections.append(isect)
		else:
			rejected.append(IntersectionCandidate(error=error, point=isect))

	intersections = merge_coincident(intersections)
	return promote_near_misses(intersections, rejected, expected_count, required=required)


#============================================
def get_boundary_intersection(p1: Point, p2: Point, rect: PageRect) -> Point:
	"""
	Single crossing point for a segment with exactly one endpoint on the page.

	Args:
		p1: Segment start.
		p2: Segment end.
		rect: Printable rectangle.

	Returns:
		The boundary crossing point.
	"""
	intersections = get_boundary_intersections(p1, p2, rect, 1)
	if len(intersections) > 1:
		# an endpoint within rounding of an edge is both on the page and a hit
		inside = p1 if is_on_page(p1, rect) else p2
		crossings = [
			point for point in intersections
			if not fpt.geometry.points_close(point, inside, COINCIDENT_TOLERANCE)
		]
		intersections = crossings or intersections[:1]
	if len(intersections) != 1:
		raise AssertionError(
			f"Expected one boundary crossing for {p1} -> {p2}, found {len(intersections)}"
		)
	return intersections[0]


#============================================
def points_cross_page(p1: Point, p2: Point, rect: PageRect) -> tuple[Point, Point] | None:
	"""
	Entry and exit points of a segment whose endpoints are both off the page.

	Args:
		p1: Segment start.
		p2: Segment end.
		rect: Printable rectangle.

	Returns:
		Pair of boundary points in drawing order, or None when the segment
		misses the page or only touches a corner.
	"""
	if fpt.geometry.points_close(p1, p2, COINCIDENT_TOLERANCE):
		return None
	# a real crossing has an entry and an exit, so near-misses may fill in the pair
	intersections = get_boundary_intersections(p1, p2, rect, 2, required=False)
	if len(intersections) < 2:
		return None
	ordered = sorted(intersections, key=lambda point: fpt.geometry.solve_for_t(p1, p2, point))
	return (ordered[0], ordered[-1])
