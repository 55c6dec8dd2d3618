"""
Page composition: QR glyphs and captions on the label grid.
"""

# Standard Library
import concurrent.futures
import dataclasses
import pathlib

# PIP3 modules
import reportlab.lib.utils
import reportlab.pdfgen.canvas

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.config
import asn_qr_labels.errors
import asn_qr_labels.glyphs
import asn_qr_labels.logger
import asn_qr_labels.sequence
import asn_qr_labels.symbol


logger = aql.logger.get_logger(__name__)

GridSpec = aql.config.GridSpec
GenerationRequest = aql.config.GenerationRequest
GlyphStore = aql.glyphs.GlyphStore
StorageError = aql.errors.StorageError

MM = aql.config.MM
DEFAULT_FONT_REGULAR = aql.config.DEFAULT_FONT_REGULAR
CAPTION_FONT_SIZE = aql.config.CAPTION_FONT_SIZE
BORDER_LINE_WIDTH = aql.config.BORDER_LINE_WIDTH


@dataclasses.dataclass(frozen=True)
class LabelCell:
	row: int
	col: int
	identifier: str
	x: float
	y: float


#============================================
def compute_cell_origin(grid: GridSpec, row: int, col: int) -> tuple[float, float]:
	"""
	Compute the top-left corner of a label cell.

	Args:
		grid: Sheet geometry.
		row: Row index.
		col: Column index.

	Returns:
		Tuple of (x, y) in millimeters from the top-left page corner.
	"""
	x = grid.margin_left + col * (grid.label_width + grid.gutter_x)
	y = grid.margin_top + row * grid.label_height
	return (x, y)


#============================================
def build_page_cells(start_number: int, request: GenerationRequest, grid: GridSpec) -> list[LabelCell]:
	"""
	Build the cells of one page in reading order.

	Args:
		start_number: Number of the first label on the page.
		request: Generation request.
		grid: Sheet geometry.

	Returns:
		List of LabelCell, rows outer and columns inner.
	"""
	cells: list[LabelCell] = []
	for row in range(grid.labels_down):
		for col in range(grid.labels_across):
			identifier = aql.sequence.identifier_at(
				start_number,
				row,
				col,
				grid.labels_across,
				request.prefix,
				request.zeros,
			)
			x, y = compute_cell_origin(grid, row, col)
			cells.append(LabelCell(row=row, col=col, identifier=identifier, x=x, y=y))
	return cells


class PageSurface:
	"""
	Append-only drawing access to the current page of a document.

	Cells must be placed in reading order; positions are given in
	millimeters from the top-left corner and converted to PDF points.
	"""

	def __init__(self, pdf: reportlab.pdfgen.canvas.Canvas, grid: GridSpec, page_number: int):
		self.pdf = pdf
		self.grid = grid
		self.page_number = page_number
		self.cells: list[LabelCell] = []

	@property
	def complete(self) -> bool:
		return len(self.cells) == self.grid.labels_per_page

	#============================================
	def next_position(self) -> tuple[int, int]:
		index = len(self.cells)
		return divmod(index, self.grid.labels_across)

	#============================================
	def _to_points(self, x: float, y: float) -> tuple[float, float]:
		return (x * MM, (self.grid.page_height - y) * MM)

	#============================================
	def place(self, cell: LabelCell, glyph_path: pathlib.Path, borders: bool) -> None:
		"""
		Draw one label: glyph, caption and optional outline.

		Args:
			cell: Cell to draw, which must be the next in reading order.
			glyph_path: PNG file of the cell's QR glyph.
			borders: Outline the cell.
		"""
		if self.complete or (cell.row, cell.col) != self.next_position():
			raise ValueError(
				f"cell ({cell.row}, {cell.col}) placed out of order on page {self.page_number}"
			)
		grid = self.grid

		glyph_x, glyph_y = self._to_points(
			cell.x,
			cell.y + grid.glyph_offset_y + grid.glyph_size,
		)
		try:
			image_reader = reportlab.lib.utils.ImageReader(str(glyph_path))
			self.pdf.drawImage(
				image_reader,
				glyph_x,
				glyph_y,
				width=grid.glyph_size * MM,
				height=grid.glyph_size * MM,
				mask=None,
				preserveAspectRatio=False,
				anchor="sw",
			)
		except OSError as error:
			raise StorageError(cell.identifier, f"failed to place glyph {glyph_path}: {error}") from error

		text_x, text_y = self._to_points(
			cell.x + grid.glyph_size + grid.glyph_margin_x,
			cell.y + grid.label_height / 2.0,
		)
		self.pdf.setFont(DEFAULT_FONT_REGULAR, CAPTION_FONT_SIZE)
		self.pdf.drawString(text_x, text_y, cell.identifier)

		if borders:
			box_x, box_y = self._to_points(cell.x, cell.y + grid.label_height)
			self.pdf.setLineWidth(BORDER_LINE_WIDTH)
			self.pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
			self.pdf.rect(
				box_x,
				box_y,
				grid.label_width * MM,
				grid.label_height * MM,
				stroke=1,
				fill=0,
			)
		self.cells.append(cell)


#============================================
def render_glyph(identifier: str, store: GlyphStore) -> pathlib.Path:
	"""
	Encode an identifier and write its glyph file.

	Args:
		identifier: Label identifier.
		store: Glyph store of the current generation call.

	Returns:
		Path of the glyph PNG.
	"""
	image = aql.symbol.encode_symbol(identifier)
	try:
		return store.materialize(image)
	except StorageError as error:
		raise StorageError(identifier, f"{error.subject}: {error.cause}") from error


#============================================
def compose_page(
	surface: PageSurface,
	start_number: int,
	request: GenerationRequest,
	store: GlyphStore,
	pool: concurrent.futures.Executor | None = None,
) -> list[LabelCell]:
	"""
	Fill one page with labels.

	Glyphs may be rendered on a worker pool, but cells are always placed in
	reading order and the first failing cell in that order is reported.

	Args:
		surface: Current page.
		start_number: Number of the first label on the page.
		request: Generation request.
		store: Glyph store of the current generation call.
		pool: Optional executor for glyph rendering.

	Returns:
		Placed cells.
	"""
	cells = build_page_cells(start_number, request, surface.grid)
	if pool is None:
		for cell in cells:
			surface.place(cell, render_glyph(cell.identifier, store), request.borders)
	else:
		futures = [pool.submit(render_glyph, cell.identifier, store) for cell in cells]
		try:
			for cell, future in zip(cells, futures):
				surface.place(cell, future.result(), request.borders)
		except BaseException:
			for future in futures:
				future.cancel()
			raise

	logger.debug(
		"page_composed",
		page=surface.page_number,
		first=cells[0].identifier,
		last=cells[-1].identifier,
	)
	return surface.cells
