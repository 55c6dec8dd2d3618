"""
Document assembly: pages of labels into one PDF.
"""

# Standard Library
import concurrent.futures
import contextlib
import dataclasses
import io
import os
import pathlib
import tempfile

# PIP3 modules
import reportlab.pdfgen.canvas

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.compose
import asn_qr_labels.config
import asn_qr_labels.errors
import asn_qr_labels.glyphs
import asn_qr_labels.logger
import asn_qr_labels.sequence


logger = aql.logger.get_logger(__name__)

GridSpec = aql.config.GridSpec
GenerationRequest = aql.config.GenerationRequest
GlyphStore = aql.glyphs.GlyphStore
PageSurface = aql.compose.PageSurface
LabelError = aql.errors.LabelError
OutputError = aql.errors.OutputError

AVERY_L4731REV_25 = aql.config.AVERY_L4731REV_25
DEFAULT_WORKERS = aql.config.DEFAULT_WORKERS
MM = aql.config.MM
VERSION = aql.config.VERSION


@dataclasses.dataclass
class GenerationResult:
	pages: int
	labels_per_page: int
	total_labels: int
	first_identifier: str
	last_identifier: str
	document: bytes
	output_path: pathlib.Path | None


#============================================
def write_document(data: bytes, output_path: pathlib.Path) -> pathlib.Path:
	"""
	Write a finished document to its destination.

	The parent directory is created when missing. Bytes go to a sibling
	temp file which then replaces the destination, so a failed write never
	leaves a partial file under the destination name.

	Args:
		data: PDF bytes.
		output_path: Destination path.

	Returns:
		Destination path.
	"""
	output_path = pathlib.Path(output_path)
	temp_name = None
	try:
		output_path.parent.mkdir(parents=True, exist_ok=True)
		handle, temp_name = tempfile.mkstemp(
			prefix=f".{output_path.name}.",
			suffix=".tmp",
			dir=str(output_path.parent),
		)
		with os.fdopen(handle, "wb") as stream:
			stream.write(data)
		os.replace(temp_name, output_path)
	except OSError as error:
		if temp_name is not None:
			pathlib.Path(temp_name).unlink(missing_ok=True)
		raise OutputError(str(output_path), f"error saving PDF: {error}") from error
	return output_path


#============================================
def _new_document(buffer: io.BytesIO, request: GenerationRequest, grid: GridSpec) -> reportlab.pdfgen.canvas.Canvas:
	pdf = reportlab.pdfgen.canvas.Canvas(
		buffer,
		pagesize=(grid.page_width * MM, grid.page_height * MM),
		invariant=1,
	)
	pdf.setTitle(f"{request.prefix} labels")
	pdf.setCreator(f"asn-qr-labels {VERSION}")
	return pdf


#============================================
def generate(
	request: GenerationRequest,
	output_path: str | pathlib.Path | None = None,
	glyph_dir: str | pathlib.Path | None = None,
	workers: int = DEFAULT_WORKERS,
	grid: GridSpec = AVERY_L4731REV_25,
) -> GenerationResult:
	"""
	Generate a label sheet PDF.

	Args:
		request: Validated generation request.
		output_path: Optional destination file. Without it the document is
			only returned as bytes.
		glyph_dir: Directory for transient glyph files, system temp dir by
			default.
		workers: Worker threads for glyph rendering, 1 or less renders
			inline.
		grid: Sheet geometry.

	Returns:
		GenerationResult with the finished document.
	"""
	aql.config.validate_request(request)
	labels_per_page = grid.labels_per_page

	buffer = io.BytesIO()
	pdf = _new_document(buffer, request, grid)

	with contextlib.ExitStack() as stack:
		store = stack.enter_context(GlyphStore(glyph_dir))
		pool = None
		if workers > 1:
			pool = stack.enter_context(
				concurrent.futures.ThreadPoolExecutor(
					max_workers=workers,
					thread_name_prefix="glyph",
				)
			)

		for page in range(request.pages):
			start_num = request.start + page * labels_per_page
			surface = PageSurface(pdf, grid, page + 1)
			try:
				aql.compose.compose_page(surface, start_num, request, store, pool)
			except LabelError as error:
				logger.error(
					"generation_failed",
					page=page + 1,
					kind=error.kind,
					subject=error.subject,
					cause=error.cause,
				)
				raise
			pdf.showPage()

		try:
			pdf.save()
		except (OSError, ValueError) as error:
			raise OutputError("<document>", f"error finalizing PDF: {error}") from error

	document = buffer.getvalue()
	written_path = None
	if output_path is not None:
		written_path = write_document(document, pathlib.Path(output_path))

	last_number = request.start + request.pages * labels_per_page - 1
	result = GenerationResult(
		pages=request.pages,
		labels_per_page=labels_per_page,
		total_labels=request.pages * labels_per_page,
		first_identifier=aql.sequence.format_identifier(request.prefix, request.start, request.zeros),
		last_identifier=aql.sequence.format_identifier(request.prefix, last_number, request.zeros),
		document=document,
		output_path=written_path,
	)
	logger.info(
		"document_generated",
		pages=result.pages,
		labels=result.total_labels,
		first=result.first_identifier,
		last=result.last_identifier,
		output=None if written_path is None else str(written_path),
	)
	return result
