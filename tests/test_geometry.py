import pytest

import flat_pattern_tiler as fpt
import flat_pattern_tiler.geometry


PatternPath = fpt.geometry.PatternPath


#============================================
def test_solve_for_t_uses_dominant_axis() -> None:
	"""
	Parametric position along horizontal and vertical segments.
	"""
	assert fpt.geometry.solve_for_t((0.0, 0.0), (10.0, 0.0), (5.0, 0.0)) == pytest.approx(0.5)
	assert fpt.geometry.solve_for_t((0.0, 0.0), (0.0, 4.0), (0.0, 1.0)) == pytest.approx(0.25)
	assert fpt.geometry.solve_for_t((2.0, 2.0), (12.0, 3.0), (22.0, 4.0)) == pytest.approx(2.0)


#============================================
def test_solve_for_t_rejects_zero_length() -> None:
	with pytest.raises(AssertionError):
		fpt.geometry.solve_for_t((1.0, 1.0), (1.0, 1.0), (1.0, 1.0))


#============================================
def test_find_intersection() -> None:
	"""
	Diagonal line against a vertical line.
	"""
	point = fpt.geometry.find_intersection((0.0, 0.0), (1.0, 1.0), (5.0, 0.0), (0.0, 1.0))
	assert point == pytest.approx((5.0, 5.0))


#============================================
def test_cross_2d_norm_parallel() -> None:
	assert fpt.geometry.cross_2d_norm((1.0, 0.0), (2.0, 0.0)) == 0.0
	assert fpt.geometry.cross_2d_norm((1.0, 0.0), (0.0, -3.0)) == 3.0


#============================================
def test_shift_then_zero_rotation_round_trip() -> None:
	"""
	Shifting to the origin and rotating by 0 degrees keeps coordinates exactly.
	"""
	path = PatternPath(points=((-5.5, 3.25), (10.0, -2.0), (4.125, 7.0)), closed=True)
	shifted = fpt.geometry.shift_to_zero(path)
	assert shifted.points == ((0.0, 5.25), (15.5, 0.0), (9.625, 9.0))
	rotated = fpt.geometry.rotate_path(shifted, 0.0)
	assert rotated.points == shifted.points
	assert rotated.closed
	assert path.points[0] == (-5.5, 3.25)


#============================================
def test_quarter_turns_are_exact() -> None:
	"""
	Multiples of 90 degrees swap axes without rounding noise.
	"""
	path = PatternPath(points=((254.0, 0.0), (0.0, 381.0)), closed=False)
	assert fpt.geometry.rotate_path(path, 90.0).points == ((0.0, 254.0), (-381.0, 0.0))
	assert fpt.geometry.rotate_path(path, 180.0).points == ((-254.0, 0.0), (0.0, -381.0))
	assert fpt.geometry.rotate_path(path, 270.0).points == ((0.0, -254.0), (381.0, 0.0))


#============================================
def test_general_rotation() -> None:
	path = PatternPath(points=((1.0, 0.0),), closed=False)
	rotated = fpt.geometry.rotate_path(path, 45.0)
	assert rotated.points[0] == pytest.approx((0.5 ** 0.5, 0.5 ** 0.5))


#============================================
def test_path_bounds() -> None:
	bounds = fpt.geometry.path_bounds([(1.0, 2.0), (-3.0, 5.0), (4.0, -1.0)])
	assert bounds == (-3.0, -1.0, 4.0, 5.0)


#============================================
def test_empty_path_rejected() -> None:
	with pytest.raises(ValueError):
		PatternPath(points=(), closed=False)
