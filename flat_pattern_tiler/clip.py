"""
Clip a pattern polyline against one page's printable rectangle.
"""

# Standard Library
import dataclasses

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.geometry
import flat_pattern_tiler.intersect


Point = fpt.geometry.Point
PatternPath = fpt.geometry.PatternPath
PageRect = fpt.intersect.PageRect

is_on_page = fpt.intersect.is_on_page
get_boundary_intersection = fpt.intersect.get_boundary_intersection
points_cross_page = fpt.intersect.points_cross_page


@dataclasses.dataclass
class ClippedSegment:
	points: list[Point]
	closes_path: bool = False


@dataclasses.dataclass
class ClipResult:
	segments: list[ClippedSegment]
	point_count: int

	@property
	def is_blank(self) -> bool:
		return self.point_count == 0


class _PageWalker:
	"""
	Track the drawn segment while walking a path across one page.
	"""

	def __init__(self, rect: PageRect):
		self.rect = rect
		self.segments: list[ClippedSegment] = []
		self.current: ClippedSegment | None = None
		self.last_point: Point | None = None
		self.point_count = 0

	def step(self, point: Point, count_point: bool = True, closing: bool = False) -> None:
		on_page = is_on_page(point, self.rect)
		if self.current is None:
			if not on_page:
				# outside to outside
				if self.last_point is not None:
					crossing = points_cross_page(self.last_point, point, self.rect)
					if crossing is not None:
						self.segments.append(
							ClippedSegment(points=list(crossing), closes_path=closing)
						)
						self.point_count += 1
			elif self.last_point is not None:
				# outside to inside
				entry = get_boundary_intersection(self.last_point, point, self.rect)
				self.current = ClippedSegment(points=[entry, point])
				if count_point:
					self.point_count += 1
			else:
				self.current = ClippedSegment(points=[point])
				self.point_count += 1
		elif not on_page:
			# inside to outside
			exit_point = get_boundary_intersection(self.last_point, point, self.rect)
			self.current.points.append(exit_point)
			self.current.closes_path = closing
			self.segments.append(self.current)
			self.current = None
		else:
			self.current.points.append(point)
			if count_point:
				self.point_count += 1
		self.last_point = point

	def finish(self, closing: bool = False) -> ClipResult:
		if self.current is not None:
			self.current.closes_path = closing
			self.segments.append(self.current)
			self.current = None
		return ClipResult(segments=self.segments, point_count=self.point_count)


#============================================
def clip_path(path: PatternPath, rect: PageRect) -> ClipResult:
	"""
	Clip a pattern path to a printable rectangle.

	Every boundary crossing splits the drawing into a new segment. For a
	closed path the closing edge goes through the same rules, so the
	final segment returns to the first point when that point is on the
	page.

	Args:
		path: Pattern path in millimeters.
		rect: Page printable rectangle in millimeters.

	Returns:
		ClipResult with the clipped segments and the on-page point count.
	"""
	walker = _PageWalker(rect)
	for point in path.points:
		walker.step(point)
	if path.closed and len(path.points) > 1:
		walker.step(path.points[0], count_point=False, closing=True)
		return walker.finish(closing=True)
	return walker.finish()


#============================================
def translate_segments(segments: list[ClippedSegment], origin: Point) -> list[ClippedSegment]:
	"""
	Move clipped segments into a frame whose origin is the given point.

	Args:
		segments: Clipped segments in the pattern frame.
		origin: New origin in the pattern frame.

	Returns:
		New list of translated segments.
	"""
	translated = []
	for segment in segments:
		points = [fpt.geometry.subtract(point, origin) for point in segment.points]
		translated.append(ClippedSegment(points=points, closes_path=segment.closes_path))
	return translated
