"""
Load flat pattern polylines from point lists and SVG files.
"""

# Standard Library
import pathlib

# PIP3 modules
import defusedxml.ElementTree as ElementTree

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.geometry


Point = fpt.geometry.Point
PatternPath = fpt.geometry.PatternPath

UNIT_SCALES = {
	"mm": 1.0,
	"in": fpt.config.MM_PER_INCH,
}


#============================================
def parse_point_line(line: str) -> Point | None:
	"""
	Parse one "x,y" or "x y" line.

	Args:
		line: Raw text line.

	Returns:
		Point, or None for blank and comment lines.
	"""
	content = line.split("#", 1)[0].strip()
	if not content:
		return None
	tokens = content.replace(",", " ").split()
	if len(tokens) != 2:
		raise ValueError(f"Expected two coordinates, got '{line.strip()}'")
	return (float(tokens[0]), float(tokens[1]))


#============================================
def parse_point_text(text: str) -> list[Point]:
	points = []
	for line in text.splitlines():
		point = parse_point_line(line)
		if point is not None:
			points.append(point)
	return points


#============================================
def parse_svg_points(svg_data: bytes) -> tuple[list[Point], bool]:
	"""
	Read the first polyline or polygon of an SVG document.

	SVG y runs downward, so y is negated to keep the outline's handedness.

	Args:
		svg_data: SVG file contents.

	Returns:
		Tuple of (points, closed). Polygons are closed.
	"""
	root = ElementTree.fromstring(svg_data)
	for element in root.iter():
		tag = element.tag
		if not (tag.endswith("polyline") or tag.endswith("polygon")):
			continue
		tokens = element.attrib.get("points", "").replace(",", " ").split()
		if len(tokens) % 2 != 0:
			raise ValueError("SVG points attribute has an odd number of coordinates")
		points = []
		for index in range(0, len(tokens), 2):
			points.append((float(tokens[index]), -float(tokens[index + 1])))
		return (points, tag.endswith("polygon"))
	return ([], False)


#============================================
def load_pattern(
	path: pathlib.Path,
	units: str = "mm",
	closed: bool | None = None,
) -> PatternPath:
	"""
	Load a pattern outline and convert it to millimeters.

	Args:
		path: Point list or SVG file.
		units: Input units, "mm" or "in".
		closed: Override for the closed flag; SVG polygons and point lists
			default to closed, SVG polylines to open.

	Returns:
		PatternPath in millimeters.
	"""
	if units not in UNIT_SCALES:
		raise ValueError(f"Unknown units '{units}', expected one of {sorted(UNIT_SCALES)}")
	path = pathlib.Path(path)
	if path.suffix.lower() == ".svg":
		points, file_closed = parse_svg_points(path.read_bytes())
	else:
		points = parse_point_text(path.read_text(encoding="utf-8"))
		file_closed = True
	if not points:
		raise ValueError(f"No pattern points found in {path}")
	if closed is None:
		closed = file_closed
	factor = UNIT_SCALES[units]
	scaled = tuple((x * factor, y * factor) for x, y in points)
	return PatternPath(points=scaled, closed=closed)
