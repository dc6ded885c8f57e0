"""
2D point and polyline primitives.
"""

# Standard Library
import dataclasses
import math


Point = tuple[float, float]

QUARTER_TURN_TERMS = (
	(1.0, 0.0),
	(0.0, 1.0),
	(-1.0, 0.0),
	(0.0, -1.0),
)


@dataclasses.dataclass(frozen=True)
class PatternPath:
	points: tuple[Point, ...]
	closed: bool = True

	def __post_init__(self) -> None:
		if not self.points:
			raise ValueError("Pattern path needs at least one point")

	def __len__(self) -> int:
		return len(self.points)


#============================================
def add(a: Point, b: Point) -> Point:
	return (a[0] + b[0], a[1] + b[1])


#============================================
def subtract(a: Point, b: Point) -> Point:
	return (a[0] - b[0], a[1] - b[1])


#============================================
def scale(a: Point, factor: float) -> Point:
	return (a[0] * factor, a[1] * factor)


#============================================
def dot(a: Point, b: Point) -> float:
	return a[0] * b[0] + a[1] * b[1]


#============================================
def cross_2d_norm(v1: Point, v2: Point) -> float:
	"""
	Magnitude of the 2D cross product, zero for parallel vectors.

	Args:
		v1: First vector.
		v2: Second vector.

	Returns:
		Absolute value of v1.x * v2.y - v1.y * v2.x.
	"""
	return abs(v1[0] * v2[1] - v1[1] * v2[0])


#============================================
def find_intersection(p1: Point, dir1: Point, p2: Point, dir2: Point) -> Point:
	"""
	Intersect two infinite lines given in point-direction form.

	Args:
		p1: Point on the first line.
		dir1: Direction of the first line.
		p2: Point on the second line.
		dir2: Direction of the second line.

	Returns:
		Intersection point, computed along the second line.
	"""
	denominator = dir2[0] * dir1[1] - dir1[0] * dir2[1]
	if denominator == 0.0:
		raise AssertionError(f"Lines through {p1} and {p2} are parallel")
	t2 = (p1[0] * dir1[1] + dir1[0] * (p2[1] - p1[1]) - p2[0] * dir1[1]) / denominator
	return add(p2, scale(dir2, t2))


#============================================
def solve_for_t(p1: Point, p2: Point, p3: Point) -> float:
	"""
	Solve p3 = p1 + t * (p2 - p1) for t.

	The three points are assumed colinear. The larger component of
	p2 - p1 is used as the divisor to keep the result stable for
	segments that are nearly aligned with an axis.

	Args:
		p1: Reference segment start.
		p2: Reference segment end.
		p3: Point on the reference line.

	Returns:
		Parametric position of p3.
	"""
	direction = subtract(p2, p1)
	if abs(direction[0]) > abs(direction[1]):
		return (p3[0] - p1[0]) / direction[0]
	if direction[1] == 0.0:
		raise AssertionError(f"Zero-length reference segment at {p1}")
	return (p3[1] - p1[1]) / direction[1]


#============================================
def path_bounds(points: tuple[Point, ...] | list[Point]) -> tuple[float, float, float, float]:
	"""
	Compute the axis-aligned bounding box of a point sequence.

	Returns:
		Tuple of (min_x, min_y, max_x, max_y).
	"""
	xs = [point[0] for point in points]
	ys = [point[1] for point in points]
	return (min(xs), min(ys), max(xs), max(ys))


#============================================
def shift_to_zero(path: PatternPath) -> PatternPath:
	"""
	Translate a path so its minimum x and y are zero.

	Args:
		path: Input pattern path.

	Returns:
		New shifted pattern path.
	"""
	min_x, min_y, _max_x, _max_y = path_bounds(path.points)
	shifted = tuple((x - min_x, y - min_y) for x, y in path.points)
	return PatternPath(points=shifted, closed=path.closed)


#============================================
def rotation_terms(angle: float) -> tuple[float, float]:
	"""
	Cosine and sine of an angle in degrees, exact for quarter turns.

	Args:
		angle: Angle in degrees.

	Returns:
		Tuple of (cos, sin).
	"""
	quarter_turns = angle / 90.0
	if quarter_turns == int(quarter_turns):
		return QUARTER_TURN_TERMS[int(quarter_turns) % 4]
	radians = math.radians(angle)
	return (math.cos(radians), math.sin(radians))


#============================================
def rotate_path(path: PatternPath, angle: float) -> PatternPath:
	"""
	Rotate a path counter-clockwise about the origin.

	Args:
		path: Input pattern path.
		angle: Rotation in degrees.

	Returns:
		New rotated pattern path.
	"""
	if angle == 0.0:
		return PatternPath(points=tuple(path.points), closed=path.closed)
	cos_a, sin_a = rotation_terms(angle)
	rotated = tuple(
		(x * cos_a - y * sin_a, x * sin_a + y * cos_a)
		for x, y in path.points
	)
	return PatternPath(points=rotated, closed=path.closed)


#============================================
def points_close(a: Point, b: Point, tolerance: float) -> bool:
	return math.isclose(a[0], b[0], abs_tol=tolerance) and math.isclose(a[1], b[1], abs_tol=tolerance)
