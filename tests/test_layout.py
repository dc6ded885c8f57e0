import concurrent.futures

import pytest

import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.geometry
import flat_pattern_tiler.layout


PatternPath = fpt.geometry.PatternPath
SheetConfig = fpt.config.SheetConfig
RotationCandidate = fpt.layout.RotationCandidate

MM_PER_INCH = fpt.config.MM_PER_INCH


#============================================
def build_rectangle(width_in: float, height_in: float) -> PatternPath:
	"""
	Closed rectangle outline in millimeters from inch dimensions.
	"""
	width = width_in * MM_PER_INCH
	height = height_in * MM_PER_INCH
	return PatternPath(
		points=((0.0, 0.0), (width, 0.0), (width, height), (0.0, height)),
		closed=True,
	)


#============================================
def test_count_tiles_formula() -> None:
	sheet = SheetConfig()
	assert fpt.layout.count_tiles(17.0, 10.0, sheet) == 1
	assert fpt.layout.count_tiles(11.0, 10.0, sheet) == 1
	assert fpt.layout.count_tiles(17.0, 30.0, sheet) == 2
	assert fpt.layout.count_tiles(11.0, 30.0, sheet) == 4
	assert fpt.layout.count_tiles(17.0, 0.0, sheet) == 1


#============================================
def test_tile_count_monotonic_in_pattern_size() -> None:
	"""
	Larger patterns never need fewer tiles.
	"""
	sheet = SheetConfig()
	previous = 0
	for tenth in range(0, 800):
		size = tenth / 10.0
		count = fpt.layout.count_tiles(sheet.page_width, size, sheet) * fpt.layout.count_tiles(
			sheet.page_height, size * 0.5, sheet
		)
		assert count >= previous
		previous = count


#============================================
def test_single_tile_is_centered() -> None:
	"""
	A 10 x 10 inch square fits one 17 x 11 sheet and sits in its middle.
	"""
	layout = fpt.layout.plan_pages(build_rectangle(10.0, 10.0), SheetConfig())
	assert layout.columns == 1
	assert layout.rows == 1
	assert len(layout.offsets) == 1
	assert layout.offsets[0].x == pytest.approx(-3.0)
	assert layout.offsets[0].y == pytest.approx(0.0)


#============================================
def test_multi_tile_grid_starts_at_origin() -> None:
	sheet = SheetConfig()
	layout = fpt.layout.plan_pages(build_rectangle(30.0, 10.0), sheet)
	assert layout.columns == 2
	assert layout.rows == 1
	assert [offset.x for offset in layout.offsets] == pytest.approx([0.0, 15.25])
	assert [offset.y for offset in layout.offsets] == pytest.approx([0.0, 0.0])


#============================================
def test_grid_offsets_are_column_major() -> None:
	"""
	Consecutive tiles overlap by exactly the overlap width.
	"""
	sheet = SheetConfig()
	layout = fpt.layout.plan_pages(build_rectangle(30.0, 20.0), sheet)
	assert layout.columns == 2
	assert layout.rows == 3
	expected = [(0.0, 0.0), (0.0, 9.25), (0.0, 18.5), (15.25, 0.0), (15.25, 9.25), (15.25, 18.5)]
	actual = [(offset.x, offset.y) for offset in layout.offsets]
	assert actual == [pytest.approx(point) for point in expected]
	step = layout.offsets[3].x - layout.offsets[0].x
	assert sheet.available_width - step == pytest.approx(sheet.overlap)


#============================================
def test_plan_pages_requires_normalized_pattern() -> None:
	path = PatternPath(points=((-1.0, 0.0), (10.0, 10.0)), closed=False)
	with pytest.raises(AssertionError):
		fpt.layout.plan_pages(path, SheetConfig())


#============================================
def test_candidate_angle_order() -> None:
	angles = list(fpt.layout.candidate_angles(1.0))
	assert angles[:4] == [0.0, 90.0, 1.0, 2.0]
	assert angles[-1] == 359.0
	assert len(angles) == 361


#============================================
def test_select_rotation_keeps_earliest_on_ties() -> None:
	candidates = [
		RotationCandidate(angle=0.0, tile_count=2),
		RotationCandidate(angle=90.0, tile_count=1),
		RotationCandidate(angle=5.0, tile_count=1),
	]
	assert fpt.layout.select_rotation(candidates).angle == 90.0
	tied = [RotationCandidate(angle=0.0, tile_count=1), RotationCandidate(angle=90.0, tile_count=1)]
	assert fpt.layout.select_rotation(tied).angle == 0.0


#============================================
def test_tall_pattern_prefers_quarter_turn() -> None:
	"""
	A 6 x 15 inch pattern needs two 17 x 11 sheets upright, one on its side.
	"""
	sheet = SheetConfig()
	path = build_rectangle(6.0, 15.0)
	assert fpt.layout.evaluate_rotation(path, sheet, 0.0).tile_count == 2
	assert fpt.layout.evaluate_rotation(path, sheet, 90.0).tile_count == 1
	assert fpt.layout.choose_rotation(path, sheet) == 90.0


#============================================
def test_tie_prefers_zero_rotation() -> None:
	path = build_rectangle(5.0, 5.0)
	assert fpt.layout.choose_rotation(path, SheetConfig()) == 0.0


#============================================
def test_rotation_never_worse_than_zero() -> None:
	"""
	The chosen angle needs no more tiles than the unrotated pattern.
	"""
	sheet = SheetConfig()
	path = PatternPath(
		points=((0.0, 0.0), (600.0, 150.0), (640.0, 300.0), (100.0, 420.0), (20.0, 200.0)),
		closed=True,
	)
	angle = fpt.layout.choose_rotation(path, sheet)
	baseline = fpt.layout.evaluate_rotation(path, sheet, 0.0).tile_count
	assert fpt.layout.evaluate_rotation(path, sheet, angle).tile_count <= baseline


#============================================
def test_parallel_search_matches_sequential() -> None:
	sheet = SheetConfig()
	path = PatternPath(
		points=((0.0, 0.0), (500.0, 480.0), (520.0, 520.0), (10.0, 60.0)),
		closed=True,
	)
	sequential = fpt.layout.choose_rotation(path, sheet)
	with concurrent.futures.ThreadPoolExecutor(max_workers=4) as executor:
		parallel = fpt.layout.choose_rotation(path, sheet, map_func=executor.map)
	assert parallel == sequential


#============================================
def test_orient_pattern_without_search() -> None:
	path = PatternPath(points=((5.0, 7.0), (15.0, 9.0)), closed=False)
	angle, oriented = fpt.layout.orient_pattern(path, SheetConfig(), optimize=False)
	assert angle == 0.0
	assert oriented.points == ((0.0, 0.0), (10.0, 2.0))
