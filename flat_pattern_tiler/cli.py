"""
CLI entry points for tiling a flat pattern onto printable sheets.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# PIP3 modules
import reportlab.lib.pagesizes

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.config
import flat_pattern_tiler.document
import flat_pattern_tiler.pattern_io
import flat_pattern_tiler.writer


SheetConfig = fpt.config.SheetConfig

DEFAULT_MARGIN = fpt.config.DEFAULT_MARGIN
DEFAULT_OVERLAP = fpt.config.DEFAULT_OVERLAP
DEFAULT_PAGE_WIDTH = fpt.config.DEFAULT_PAGE_WIDTH
DEFAULT_PAGE_HEIGHT = fpt.config.DEFAULT_PAGE_HEIGHT
POINTS_PER_INCH = fpt.config.POINTS_PER_INCH

PAPER_SIZES = {
	"letter": reportlab.lib.pagesizes.letter,
	"legal": reportlab.lib.pagesizes.legal,
	"tabloid": reportlab.lib.pagesizes.elevenSeventeen,
	"ledger": reportlab.lib.pagesizes.landscape(reportlab.lib.pagesizes.elevenSeventeen),
	"a4": reportlab.lib.pagesizes.A4,
	"a3": reportlab.lib.pagesizes.A3,
}


#============================================
def paper_size_inches(name: str, landscape: bool) -> tuple[float, float]:
	"""
	Look up a named paper size.

	Args:
		name: Paper name from PAPER_SIZES.
		landscape: Force the long side horizontal.

	Returns:
		Tuple of (width, height) in inches.
	"""
	size = PAPER_SIZES[name.lower()]
	if landscape:
		size = reportlab.lib.pagesizes.landscape(size)
	return (size[0] / POINTS_PER_INCH, size[1] / POINTS_PER_INCH)


#============================================
def build_sheet_config(args: argparse.Namespace) -> SheetConfig:
	"""
	Build sheet config from CLI args.

	Explicit page dimensions win over a named paper size. Landscape turns
	the named paper size, or the sheet size when no paper is named.

	Args:
		args: Parsed argparse namespace.

	Returns:
		SheetConfig.
	"""
	page_width = DEFAULT_PAGE_WIDTH
	page_height = DEFAULT_PAGE_HEIGHT
	if args.paper is not None:
		page_width, page_height = paper_size_inches(args.paper, args.landscape)
	if args.page_width is not None:
		page_width = args.page_width
	if args.page_height is not None:
		page_height = args.page_height
	if args.landscape and args.paper is None:
		page_width, page_height = reportlab.lib.pagesizes.landscape((page_width, page_height))
	sheet = SheetConfig(
		margin=args.margin,
		overlap=args.overlap,
		page_width=page_width,
		page_height=page_height,
	)
	return sheet


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Tile a flat pattern outline onto printable sheets.")
	parser.add_argument("input", help="Pattern point list (x,y per line) or SVG polyline/polygon.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", required=True, help="Output .tex or .pdf path.")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output layout manifest JSON path.")

	input_group = parser.add_argument_group("Input")
	input_group.add_argument("-u", "--units", dest="units", choices=sorted(fpt.pattern_io.UNIT_SCALES), help="Input coordinate units.")
	input_group.add_argument("--closed", dest="closed", action="store_true", help="Treat the outline as closed.")
	input_group.add_argument("--open", dest="closed", action="store_false", help="Treat the outline as open.")

	sheet_group = parser.add_argument_group("Sheet")
	sheet_group.add_argument("--paper", dest="paper", choices=sorted(PAPER_SIZES), default=None, help="Named paper size.")
	sheet_group.add_argument("--landscape", dest="landscape", action="store_true", help="Put the long side of the sheet horizontal.")
	sheet_group.add_argument("--page-width", dest="page_width", type=float, default=None, help="Page width in inches.")
	sheet_group.add_argument("--page-height", dest="page_height", type=float, default=None, help="Page height in inches.")
	sheet_group.add_argument("--margin", dest="margin", type=float, default=DEFAULT_MARGIN, help="Margin in inches.")
	sheet_group.add_argument("--overlap", dest="overlap", type=float, default=DEFAULT_OVERLAP, help="Overlap between sheets in inches.")

	behavior_group = parser.add_argument_group("Behavior")
	behavior_group.add_argument("-r", "--optimize-rotation", dest="optimize_rotation", action="store_true", help="Rotate the pattern to use the fewest sheets.")
	behavior_group.add_argument("-R", "--no-optimize-rotation", dest="optimize_rotation", action="store_false", help="Keep the pattern orientation.")

	parser.set_defaults(
		units="mm",
		closed=None,
		landscape=False,
		optimize_rotation=True,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> bool:
	"""
	Run the full pipeline from pattern input to printable output.

	Args:
		args: Parsed argparse namespace.

	Returns:
		True when the output was written.
	"""
	print("Flat pattern tiling pipeline")
	print(f"Input: {args.input}")
	print(f"Output: {args.output_path}")
	if args.manifest_path:
		print(f"Manifest: {args.manifest_path}")

	sheet = build_sheet_config(args)
	print(f"Sheet: {fpt.config.describe_sheet(sheet)}")
	print(f"Optimize rotation: {args.optimize_rotation}")

	start_time = time.perf_counter()
	input_path = pathlib.Path(args.input)
	pattern = fpt.pattern_io.load_pattern(input_path, units=args.units, closed=args.closed)
	print(f"Pattern points: {len(pattern)} ({'closed' if pattern.closed else 'open'})")

	layout_start = time.perf_counter()
	document = fpt.document.build_document(
		pattern,
		sheet,
		optimize_rotation=args.optimize_rotation,
	)
	layout_end = time.perf_counter()
	print(f"Rotation: {document.rotation:g} deg")
	print(f"Tile grid: {document.layout.columns} x {document.layout.rows}")
	print(f"Blank tiles skipped: {len(document.skipped_tiles)}")

	output_path = pathlib.Path(args.output_path)
	write_start = time.perf_counter()
	if not fpt.writer.write_document(document, output_path):
		return False
	write_end = time.perf_counter()
	print(f"Pages written: {len(document.pages)}")

	if args.manifest_path:
		fpt.writer.write_manifest(pathlib.Path(args.manifest_path), document, input_path)
		print(f"Manifest written: {args.manifest_path}")

	total_time = time.perf_counter() - start_time
	print(
		"Timing: layout={:.2f}s write={:.2f}s total={:.2f}s".format(
			layout_end - layout_start,
			write_end - write_start,
			total_time,
		)
	)
	return True


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	if not run_pipeline(args):
		sys.exit(1)
