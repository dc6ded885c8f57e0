"""
PDF rendering of a tiled pattern document with ReportLab.
"""

# Standard Library
import pathlib

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.document
import flat_pattern_tiler.registration


Document = fpt.document.Document
DocumentPage = fpt.document.DocumentPage
AlignmentMark = fpt.registration.AlignmentMark
PageMatrix = fpt.registration.PageMatrix

DEFAULT_LINE_WIDTH = fpt.config.DEFAULT_LINE_WIDTH
MATRIX_LINE_WIDTH = fpt.config.MATRIX_LINE_WIDTH

mm_to_points = fpt.config.mm_to_points


#============================================
def draw_polyline(
	pdf: reportlab.pdfgen.canvas.Canvas,
	points: list[tuple[float, float]],
) -> None:
	"""
	Stroke a polyline given in page-frame millimeters.

	Args:
		pdf: ReportLab canvas.
		points: Polyline points.
	"""
	if len(points) < 2:
		return
	path = pdf.beginPath()
	path.moveTo(mm_to_points(points[0][0]), mm_to_points(points[0][1]))
	for x, y in points[1:]:
		path.lineTo(mm_to_points(x), mm_to_points(y))
	pdf.drawPath(path, stroke=1, fill=0)


#============================================
def draw_alignment_mark(pdf: reportlab.pdfgen.canvas.Canvas, mark: AlignmentMark) -> None:
	"""
	Draw two filled quarter circles and the surrounding circle outline.

	Args:
		pdf: ReportLab canvas.
		mark: Alignment mark.
	"""
	center_x = mm_to_points(mark.center[0])
	center_y = mm_to_points(mark.center[1])
	radius = mm_to_points(mark.radius)
	for start, end in mark.quadrants:
		pdf.wedge(
			center_x - radius,
			center_y - radius,
			center_x + radius,
			center_y + radius,
			start,
			end - start,
			stroke=0,
			fill=1,
		)
	pdf.circle(center_x, center_y, radius, stroke=1, fill=0)


#============================================
def draw_page_matrix(pdf: reportlab.pdfgen.canvas.Canvas, matrix: PageMatrix) -> None:
	"""
	Draw the page arrangement grid with the current cell filled.

	Args:
		pdf: ReportLab canvas.
		matrix: Page matrix geometry.
	"""
	origin_x, origin_y = matrix.origin
	xs, ys = matrix.grid_lines()
	pdf.setLineWidth(MATRIX_LINE_WIDTH)
	pdf.grid(
		[mm_to_points(origin_x + x) for x in xs],
		[mm_to_points(origin_y + y) for y in ys],
	)
	x0, y0, x1, y1 = matrix.current_cell
	pdf.rect(
		mm_to_points(origin_x + x0),
		mm_to_points(origin_y + y0),
		mm_to_points(x1 - x0),
		mm_to_points(y1 - y0),
		stroke=0,
		fill=1,
	)
	pdf.setLineWidth(DEFAULT_LINE_WIDTH)


#============================================
def draw_page(pdf: reportlab.pdfgen.canvas.Canvas, page: DocumentPage) -> None:
	"""
	Draw one retained page onto the current canvas page.

	Args:
		pdf: ReportLab canvas.
		page: Assembled document page.
	"""
	pdf.setLineWidth(DEFAULT_LINE_WIDTH)
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	pdf.setFillColorRGB(0.0, 0.0, 0.0)
	if page.scale_mark is not None:
		draw_polyline(pdf, page.scale_mark)
	for segment in page.segments:
		draw_polyline(pdf, segment.points)
	for mark in page.alignment_marks:
		draw_alignment_mark(pdf, mark)
	if page.page_matrix is not None:
		draw_page_matrix(pdf, page.page_matrix)


#============================================
def render_pdf(document: Document, output_path: pathlib.Path) -> None:
	"""
	Write every retained page of a document to a PDF file.

	Args:
		document: Assembled document.
		output_path: Output PDF path.
	"""
	sheet = document.sheet
	page_size = (
		fpt.config.inches_to_points(sheet.page_width),
		fpt.config.inches_to_points(sheet.page_height),
	)
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=page_size)
	pdf.setTitle("Flat pattern tiles")
	pdf.setSubject(fpt.config.describe_sheet(sheet))
	for page in document.pages:
		draw_page(pdf, page)
		pdf.showPage()
	pdf.save()
