"""
LaTeX/TikZ serialization of a tiled pattern document.
"""

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.document
import flat_pattern_tiler.registration


Document = fpt.document.Document
DocumentPage = fpt.document.DocumentPage
AlignmentMark = fpt.registration.AlignmentMark
PageMatrix = fpt.registration.PageMatrix
SheetConfig = fpt.config.SheetConfig

TIKZ_PRECISION = fpt.config.TIKZ_PRECISION

END_PICTURE = "    \\end{tikzpicture}\n  };\n\\end{tikzpicture}\n\n"
TRAILER = "\\end{document}\n"


#============================================
def format_number(value: float) -> str:
	"""
	Format a number with a fixed count of significant digits.
	"""
	text = f"{value:.{TIKZ_PRECISION}g}"
	if text == "-0":
		return "0"
	return text


#============================================
def format_point(point: tuple[float, float]) -> str:
	return f"({format_number(point[0])},{format_number(point[1])})"


#============================================
def begin_picture(x: float = 0.0, y: float = 0.0) -> str:
	"""
	Open an overlay picture anchored at the page's lower-left corner.

	Args:
		x: Horizontal shift in inches.
		y: Vertical shift in inches.

	Returns:
		TikZ source text.
	"""
	text = "\\begin{tikzpicture}[remember picture, overlay]\n"
	text += f"\\node [xshift={format_number(x)}in,yshift={format_number(y)}in] at (current page.south west){{"
	text += "\n    \\begin{tikzpicture}[remember picture, overlay]\n"
	return text


#============================================
def build_header(sheet: SheetConfig) -> str:
	"""
	Document preamble naming the paper size and margins.

	Args:
		sheet: Sheet configuration.

	Returns:
		TikZ source text.
	"""
	lines = [
		"\\documentclass{article}",
		"",
		"\\usepackage{tikz}",
		(
			f"\\usepackage[margin={format_number(sheet.margin)}in,"
			f"paperwidth={format_number(sheet.page_width)}in,"
			f"paperheight={format_number(sheet.page_height)}in]{{geometry}}"
		),
		"",
		"\\begin{document}",
		"",
		"\\tikzset",
		"{",
		"  x=1mm,",
		"  y=1mm",
		"}",
		"",
		"",
	]
	return "\n".join(lines)


#============================================
def build_polyline(points: list[tuple[float, float]]) -> str:
	return "\\draw " + " -- ".join(format_point(point) for point in points) + ";\n"


#============================================
def build_alignment_mark(mark: AlignmentMark) -> str:
	"""
	Two filled quarter circles inside a circle outline.
	"""
	radius = f"{format_number(mark.radius)}mm"
	center = format_point(mark.center)
	text = ""
	for start, end in mark.quadrants:
		text += (
			f"  \\fill {center} -- ++({format_number(start)}:{radius}) "
			f"arc [start angle={format_number(start)}, end angle={format_number(end)}, radius={radius}] -- cycle;\n"
		)
	text += f"  \\draw {center} circle [radius={radius}];\n"
	return text


#============================================
def build_page_matrix(matrix: PageMatrix) -> str:
	x0, y0, x1, y1 = matrix.current_cell
	text = "% Page arrangement matrix\n"
	text += begin_picture(
		fpt.config.mm_to_inches(matrix.origin[0]),
		fpt.config.mm_to_inches(matrix.origin[1]),
	)
	text += (
		f"  \\draw[xstep={format_number(matrix.step_x)},ystep={format_number(matrix.step_y)},very thin] "
		f"(0,0) grid {format_point((matrix.width, matrix.height))};\n"
	)
	text += f"  \\fill {format_point((x0, y0))} rectangle {format_point((x1, y1))};\n"
	text += END_PICTURE
	return text


#============================================
def build_page(page: DocumentPage) -> str:
	"""
	TikZ source for one retained page.

	Args:
		page: Assembled document page.

	Returns:
		TikZ source text.
	"""
	text = "\\newpage\n\\thispagestyle{empty}\n\n"
	if page.scale_mark is not None:
		text += "% Scale mark\n"
		text += begin_picture()
		text += build_polyline(page.scale_mark)
		text += END_PICTURE

	text += begin_picture()
	text += "% Pattern path\n"
	for segment in page.segments:
		text += build_polyline(segment.points) + "\n"
	text += END_PICTURE

	if page.alignment_marks:
		text += "% Alignment marks\n"
		text += begin_picture()
		for mark in page.alignment_marks:
			text += build_alignment_mark(mark)
		text += END_PICTURE
	if page.page_matrix is not None:
		text += build_page_matrix(page.page_matrix)
	return text


#============================================
def build_tikz_document(document: Document) -> str:
	"""
	Full LaTeX source: header, one block per retained page, trailer.

	Args:
		document: Assembled document.

	Returns:
		LaTeX source text.
	"""
	text = build_header(document.sheet)
	for page in document.pages:
		text += build_page(page)
	text += TRAILER
	return text
