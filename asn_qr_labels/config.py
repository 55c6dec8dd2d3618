"""
Shared configuration, sheet geometry and request model.
"""

# Standard Library
import dataclasses

# PIP3 modules
import reportlab.lib.pagesizes
import reportlab.lib.units

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.errors


VERSION = "1.0.0"

MM = reportlab.lib.units.mm

DEFAULT_START = 1
DEFAULT_PREFIX = "ASN"
DEFAULT_PAGES = 1
DEFAULT_ZEROS = 4
DEFAULT_OUTPUT = "labels.pdf"
DEFAULT_HOST = "0.0.0.0"
DEFAULT_PORT = 8080
DEFAULT_WORKERS = 4

DEFAULT_FONT_REGULAR = "Helvetica"
CAPTION_FONT_SIZE = 8
BORDER_LINE_WIDTH = 0.2 * MM

SYMBOL_RESOLUTION = 100
GLYPH_PREFIX = "asn-label-"
GLYPH_SUFFIX = ".png"


@dataclasses.dataclass(frozen=True)
class GridSpec:
	name: str
	labels_across: int
	labels_down: int
	label_width: float
	label_height: float
	gutter_x: float
	margin_left: float
	margin_top: float
	glyph_size: float
	glyph_margin_x: float
	glyph_offset_y: float
	page_width: float
	page_height: float

	@property
	def labels_per_page(self) -> int:
		return self.labels_across * self.labels_down


# Avery L4731REV-25, all lengths in millimeters
AVERY_L4731REV_25 = GridSpec(
	name="Avery L4731REV-25",
	labels_across=7,
	labels_down=27,
	label_width=25.4,
	label_height=10.0,
	gutter_x=2.55,
	margin_left=8.45,
	margin_top=13.5,
	glyph_size=9.0,
	glyph_margin_x=0.5,
	glyph_offset_y=0.5,
	page_width=reportlab.lib.pagesizes.A4[0] / MM,
	page_height=reportlab.lib.pagesizes.A4[1] / MM,
)


@dataclasses.dataclass(frozen=True)
class GenerationRequest:
	start: int = DEFAULT_START
	prefix: str = DEFAULT_PREFIX
	zeros: int = DEFAULT_ZEROS
	pages: int = DEFAULT_PAGES
	borders: bool = False


#============================================
def _is_int(value: object) -> bool:
	return isinstance(value, int) and not isinstance(value, bool)


#============================================
def validate_request(request: GenerationRequest) -> GenerationRequest:
	"""
	Reject a request that cannot be generated.

	No defaults are substituted here; front ends apply their own.

	Args:
		request: Request to check.

	Returns:
		The same request.
	"""
	if not _is_int(request.start) or request.start < 0:
		raise aql.errors.RequestError("start", f"must be an integer >= 0, got {request.start!r}")
	if not isinstance(request.prefix, str):
		raise aql.errors.RequestError("prefix", f"must be a string, got {request.prefix!r}")
	if not _is_int(request.zeros) or request.zeros < 0:
		raise aql.errors.RequestError("zeros", f"must be an integer >= 0, got {request.zeros!r}")
	if not _is_int(request.pages) or request.pages < 1:
		raise aql.errors.RequestError("pages", f"must be an integer >= 1, got {request.pages!r}")
	if not isinstance(request.borders, bool):
		raise aql.errors.RequestError("borders", f"must be a boolean, got {request.borders!r}")
	return request
