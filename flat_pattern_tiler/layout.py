"""
Tile grid planning and rotation search.
"""

# Standard Library
import dataclasses
import math
from typing import Callable, Iterable, Iterator

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.geometry


PatternPath = fpt.geometry.PatternPath
PageOffset = fpt.config.PageOffset
PageLayout = fpt.config.PageLayout
SheetConfig = fpt.config.SheetConfig

ROTATION_STEP = fpt.config.ROTATION_STEP
PREFERRED_ROTATION = fpt.config.PREFERRED_ROTATION


@dataclasses.dataclass(frozen=True)
class RotationCandidate:
	angle: float
	tile_count: int


#============================================
def count_tiles(paper_dim: float, pattern_dim: float, sheet: SheetConfig) -> int:
	"""
	Number of tiles needed along one axis.

	Args:
		paper_dim: Paper size along the axis in inches.
		pattern_dim: Pattern extent along the axis in inches.
		sheet: Sheet configuration.

	Returns:
		Tile count, at least 1.
	"""
	step = paper_dim - 2.0 * sheet.margin - sheet.overlap
	if step <= 0.0:
		raise AssertionError(f"Tile step {step} in is not positive")
	count = math.ceil((pattern_dim - paper_dim + 2.0 * sheet.margin) / step) + 1
	return max(1, count)


#============================================
def plan_pages(path: PatternPath, sheet: SheetConfig) -> PageLayout:
	"""
	Place tiles over a normalized pattern.

	A layout of a single tile centers the pattern on the sheet; larger
	layouts start flush with the pattern origin and advance by the
	printable size minus the overlap.

	Args:
		path: Pattern path shifted so its minimum x and y are zero.
		sheet: Sheet configuration.

	Returns:
		PageLayout with offsets ordered by column, then row.
	"""
	min_x, min_y, max_x, max_y = fpt.geometry.path_bounds(path.points)
	if min_x < 0.0 or min_y < 0.0:
		raise AssertionError(f"Pattern is not normalized (min corner {min_x}, {min_y})")
	pattern_width = fpt.config.mm_to_inches(max_x)
	pattern_height = fpt.config.mm_to_inches(max_y)

	columns = count_tiles(sheet.page_width, pattern_width, sheet)
	rows = count_tiles(sheet.page_height, pattern_height, sheet)

	base_x = 0.0
	base_y = 0.0
	if columns * rows == 1:
		base_x = 0.5 * (pattern_width - sheet.page_width) + sheet.margin
		base_y = 0.5 * (pattern_height - sheet.page_height) + sheet.margin

	step_x = sheet.available_width - sheet.overlap
	step_y = sheet.available_height - sheet.overlap
	offsets = []
	for column in range(columns):
		for row in range(rows):
			offsets.append(PageOffset(x=base_x + column * step_x, y=base_y + row * step_y))

	return PageLayout(
		columns=columns,
		rows=rows,
		pattern_width=pattern_width,
		pattern_height=pattern_height,
		offsets=tuple(offsets),
	)


#============================================
def candidate_angles(step: float = ROTATION_STEP) -> Iterator[float]:
	"""
	Rotation angles in search order: 0, the preferred quarter turn, then a sweep.
	"""
	if step <= 0.0:
		raise ValueError(f"Rotation step must be positive, got {step}")
	yield 0.0
	yield PREFERRED_ROTATION
	index = 1
	while index * step < 360.0:
		yield index * step
		index += 1


#============================================
def evaluate_rotation(path: PatternPath, sheet: SheetConfig, angle: float) -> RotationCandidate:
	"""
	Tile count for the pattern rotated by one angle.
	"""
	rotated = fpt.geometry.shift_to_zero(fpt.geometry.rotate_path(path, angle))
	layout = plan_pages(rotated, sheet)
	return RotationCandidate(angle=angle, tile_count=layout.tile_count)


#============================================
def select_rotation(candidates: Iterable[RotationCandidate]) -> RotationCandidate:
	"""
	Pick the first candidate with the fewest tiles.

	Later candidates only win with a strictly smaller tile count, so the
	search order decides ties.
	"""
	return min(candidates, key=lambda candidate: candidate.tile_count)


#============================================
def choose_rotation(
	path: PatternPath,
	sheet: SheetConfig,
	step: float = ROTATION_STEP,
	map_func: Callable = map,
) -> float:
	"""
	Find the rotation angle that needs the fewest printed tiles.

	Args:
		path: Pattern path in millimeters.
		sheet: Sheet configuration.
		step: Sweep increment in degrees.
		map_func: Order-preserving map, e.g. an executor's map for
			parallel evaluation.

	Returns:
		Winning angle in degrees.
	"""
	angles = list(candidate_angles(step))
	candidates = map_func(
		evaluate_rotation,
		[path] * len(angles),
		[sheet] * len(angles),
		angles,
	)
	return select_rotation(candidates).angle


#============================================
def orient_pattern(
	path: PatternPath,
	sheet: SheetConfig,
	optimize: bool = True,
	map_func: Callable = map,
) -> tuple[float, PatternPath]:
	"""
	Rotate a pattern to its best angle and move it to the origin.

	Returns:
		Tuple of (angle in degrees, normalized rotated path).
	"""
	normalized = fpt.geometry.shift_to_zero(path)
	angle = 0.0
	if optimize:
		angle = choose_rotation(normalized, sheet, map_func=map_func)
	oriented = fpt.geometry.shift_to_zero(fpt.geometry.rotate_path(normalized, angle))
	return (angle, oriented)
