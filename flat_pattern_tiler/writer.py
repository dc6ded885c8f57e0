"""
Write tiled documents and layout manifests to disk.
"""

# Standard Library
import json
import pathlib

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.document
import flat_pattern_tiler.pdf_out
import flat_pattern_tiler.tikz_out


Document = fpt.document.Document


#============================================
def write_document(document: Document, output_path: pathlib.Path) -> bool:
	"""
	Serialize a document, choosing PDF or LaTeX/TikZ by file suffix.

	Args:
		document: Assembled document.
		output_path: Destination path; ".pdf" writes a PDF, anything else
			writes LaTeX source.

	Returns:
		True on success, False when the destination cannot be written.
	"""
	output_path = pathlib.Path(output_path)
	try:
		if output_path.suffix.lower() == ".pdf":
			fpt.pdf_out.render_pdf(document, output_path)
		else:
			text = fpt.tikz_out.build_tikz_document(document)
			with output_path.open("w", encoding="utf-8") as handle:
				handle.write(text)
	except OSError as error:
		print(f"Failed to write template to '{output_path}': {error}")
		return False
	return True


#============================================
def write_manifest(
	manifest_path: pathlib.Path,
	document: Document,
	source_path: pathlib.Path | None = None,
) -> None:
	"""
	Write a manifest JSON file describing the page layout.

	Args:
		manifest_path: Output path.
		document: Assembled document.
		source_path: Pattern input file, if any.
	"""
	sheet = document.sheet
	layout = document.layout
	data = {
		"source": str(source_path) if source_path is not None else None,
		"rotation_degrees": document.rotation,
		"sheet": {
			"margin": sheet.margin,
			"overlap": sheet.overlap,
			"page_width": sheet.page_width,
			"page_height": sheet.page_height,
		},
		"pattern_size_inches": {
			"width": layout.pattern_width,
			"height": layout.pattern_height,
		},
		"grid": {
			"columns": layout.columns,
			"rows": layout.rows,
			"tiles": layout.tile_count,
		},
		"offsets": [{"x": offset.x, "y": offset.y} for offset in layout.offsets],
		"pages": [
			{
				"tile_index": page.tile_index,
				"offset": {"x": page.offset.x, "y": page.offset.y},
				"segments": len(page.segments),
				"point_count": page.point_count,
				"scale_mark": page.scale_mark is not None,
			}
			for page in document.pages
		],
		"skipped_tiles": document.skipped_tiles,
	}
	with manifest_path.open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
