"""
Assemble per-page drawing content for a tiled flat pattern.
"""

# Standard Library
import dataclasses
import enum
from typing import Callable

# local repo modules
import flat_pattern_tiler as fpt
import flat_pattern_tiler.clip
import flat_pattern_tiler.config
import flat_pattern_tiler.geometry
import flat_pattern_tiler.intersect
import flat_pattern_tiler.layout
import flat_pattern_tiler.registration


Point = fpt.geometry.Point
PatternPath = fpt.geometry.PatternPath
PageOffset = fpt.config.PageOffset
PageLayout = fpt.config.PageLayout
SheetConfig = fpt.config.SheetConfig
ClippedSegment = fpt.clip.ClippedSegment
AlignmentMark = fpt.registration.AlignmentMark
PageMatrix = fpt.registration.PageMatrix


class PageState(enum.Enum):
	AWAITING_FIRST_NON_BLANK_PAGE = "awaiting_first_non_blank_page"
	EMITTING = "emitting"


@dataclasses.dataclass
class DocumentPage:
	tile_index: int
	offset: PageOffset
	segments: list[ClippedSegment]
	point_count: int
	scale_mark: list[Point] | None = None
	alignment_marks: list[AlignmentMark] = dataclasses.field(default_factory=list)
	page_matrix: PageMatrix | None = None


@dataclasses.dataclass
class Document:
	sheet: SheetConfig
	rotation: float
	layout: PageLayout
	pages: list[DocumentPage]
	skipped_tiles: list[int]

	@property
	def tile_count(self) -> int:
		return self.layout.tile_count


#============================================
def advance_page_state(state: PageState, page_is_blank: bool) -> tuple[bool, PageState]:
	"""
	Decide whether a page gets the scale mark.

	Blank pages are dropped and leave the state alone, so the next page
	with pattern geometry still counts as the first.

	Args:
		state: Current state.
		page_is_blank: True when no pattern points landed on the page.

	Returns:
		Tuple of (include scale mark, next state).
	"""
	if page_is_blank:
		return (False, state)
	if state is PageState.AWAITING_FIRST_NON_BLANK_PAGE:
		return (True, PageState.EMITTING)
	return (False, state)


#============================================
def page_origin(offset: PageOffset, sheet: SheetConfig) -> Point:
	"""
	Physical lower-left corner of a sheet in the pattern frame, in millimeters.
	"""
	return (
		fpt.config.inches_to_mm(offset.x - sheet.margin),
		fpt.config.inches_to_mm(offset.y - sheet.margin),
	)


#============================================
def assemble_pages(
	path: PatternPath,
	layout: PageLayout,
	sheet: SheetConfig,
) -> tuple[list[DocumentPage], list[int]]:
	"""
	Clip the pattern to every tile and attach registration geometry.

	Args:
		path: Oriented, normalized pattern path in millimeters.
		layout: Planned tile layout.
		sheet: Sheet configuration.

	Returns:
		Tuple of (retained pages, skipped tile indices).
	"""
	multi_page = len(layout.offsets) > 1
	alignment_marks: list[AlignmentMark] = []
	if multi_page:
		alignment_marks = fpt.registration.build_alignment_marks(sheet)

	pages: list[DocumentPage] = []
	skipped: list[int] = []
	state = PageState.AWAITING_FIRST_NON_BLANK_PAGE
	for tile_index, offset in enumerate(layout.offsets):
		rect = fpt.intersect.page_rect(offset, sheet)
		clipped = fpt.clip.clip_path(path, rect)
		include_scale_mark, state = advance_page_state(state, clipped.is_blank)
		if clipped.is_blank:
			skipped.append(tile_index)
			continue

		page = DocumentPage(
			tile_index=tile_index,
			offset=offset,
			segments=fpt.clip.translate_segments(clipped.segments, page_origin(offset, sheet)),
			point_count=clipped.point_count,
		)
		if include_scale_mark:
			page.scale_mark = fpt.registration.build_scale_mark(sheet)
		if multi_page:
			page.alignment_marks = list(alignment_marks)
			page.page_matrix = fpt.registration.build_page_matrix(layout.offsets, offset, sheet)
		pages.append(page)
	return (pages, skipped)


#============================================
def build_document(
	path: PatternPath,
	sheet: SheetConfig,
	optimize_rotation: bool = True,
	map_func: Callable = map,
) -> Document:
	"""
	Lay out a flat pattern over printable sheets.

	Args:
		path: Pattern path in millimeters.
		sheet: Sheet configuration in inches.
		optimize_rotation: Search for the rotation with the fewest tiles.
		map_func: Map used by the rotation search.

	Returns:
		Document with every non-blank page.
	"""
	fpt.config.validate_sheet_config(sheet)
	angle, oriented = fpt.layout.orient_pattern(
		path,
		sheet,
		optimize=optimize_rotation,
		map_func=map_func,
	)
	layout = fpt.layout.plan_pages(oriented, sheet)
	pages, skipped = assemble_pages(oriented, layout, sheet)
	return Document(
		sheet=sheet,
		rotation=angle,
		layout=layout,
		pages=pages,
		skipped_tiles=skipped,
	)
