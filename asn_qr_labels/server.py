"""
HTTP front end serving label PDFs on demand.
"""

# Standard Library
import datetime
import socket

# PIP3 modules
import fastapi
import fastapi.responses
import uvicorn

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.config
import asn_qr_labels.errors
import asn_qr_labels.logger
import asn_qr_labels.render


logger = aql.logger.get_logger(__name__)

GenerationRequest = aql.config.GenerationRequest
LabelError = aql.errors.LabelError

AVERY_L4731REV_25 = aql.config.AVERY_L4731REV_25
DEFAULT_START = aql.config.DEFAULT_START
DEFAULT_PREFIX = aql.config.DEFAULT_PREFIX
DEFAULT_PAGES = aql.config.DEFAULT_PAGES
DEFAULT_ZEROS = aql.config.DEFAULT_ZEROS
VERSION = aql.config.VERSION

PROJECT_URL = "https://github.com/tobiaswx/asn-qrcode-generator"
# accepted spellings of true, matched exactly
TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
CLIENT_ERRORS = (aql.errors.RequestError, aql.errors.EncodingError)

BANNER = r"""
    _    ____  _   _     ___  ____      ____          _      
   / \  / ___|| \ | |   / _ \|  _ \    / ___|___   __| | ___ 
  / _ \ \___ \|  \| |  | | | | |_) |  | |   / _ \ / _  |/ _ \
 / ___ \ ___) | |\  |  | |_| |  _ <   | |__| (_) | (_| |  __/
/_/   \_\____/|_| \_|   \__\_\_| \_\   \____\___/ \__,_|\___|
                                             Label Generator v{version}

Server Information:
------------------
Hostname: {hostname}
Time: {time}
Version: v{version}

API Usage:
----------
Generate labels: GET /generate
Parameters:
  - start    : Starting ASN number (default: {start})
  - prefix   : Prefix for ASN (default: "{prefix}")
  - pages    : Number of pages (default: {pages})
  - zeros    : Number of leading zeros (default: {zeros})
  - borders  : Show borders, true/false (default: false)

Examples:
--------
Basic usage:
  /generate?start=1000&prefix=ASN&pages=1

With all parameters:
  /generate?start=1000&prefix=ASN&pages=2&zeros=5&borders=true

Label Sheet Info:
---------------
Type: {sheet}
Layout: {across} x {down} ({per_page} labels per page)
Size: {width}mm x {height}mm

For more information visit:
{project_url}
"""

app = fastapi.FastAPI(
	title="ASN QR Code Label Generator",
	version=VERSION,
)


#============================================
def parse_int(value: str | None) -> int:
	"""
	Parse a query integer, 0 when missing or malformed.
	"""
	if value is None:
		return 0
	try:
		return int(value.strip())
	except ValueError:
		return 0


#============================================
def parse_bool(value: str | None) -> bool:
	if value is None:
		return False
	return value in TRUE_VALUES


#============================================
def request_from_query(
	start: str | None,
	prefix: str | None,
	pages: str | None,
	zeros: str | None,
	borders: str | None,
) -> GenerationRequest:
	"""
	Map query parameters to a generation request.

	Missing, malformed or zero numbers fall back to the defaults, and an
	empty prefix falls back to the default prefix.

	Returns:
		GenerationRequest.
	"""
	return GenerationRequest(
		start=parse_int(start) or DEFAULT_START,
		prefix=prefix or DEFAULT_PREFIX,
		zeros=parse_int(zeros) or DEFAULT_ZEROS,
		pages=parse_int(pages) or DEFAULT_PAGES,
		borders=parse_bool(borders),
	)


#============================================
@app.get("/", response_class=fastapi.responses.PlainTextResponse)
def root() -> str:
	return BANNER.format(
		version=VERSION,
		hostname=socket.gethostname(),
		time=datetime.datetime.now(datetime.timezone.utc).strftime("%a, %d %b %Y %H:%M:%S %Z"),
		start=DEFAULT_START,
		prefix=DEFAULT_PREFIX,
		pages=DEFAULT_PAGES,
		zeros=DEFAULT_ZEROS,
		sheet=AVERY_L4731REV_25.name,
		across=AVERY_L4731REV_25.labels_across,
		down=AVERY_L4731REV_25.labels_down,
		per_page=AVERY_L4731REV_25.labels_per_page,
		width=AVERY_L4731REV_25.label_width,
		height=AVERY_L4731REV_25.label_height,
		project_url=PROJECT_URL,
	)


#============================================
@app.get("/generate")
def generate_labels(
	start: str | None = None,
	prefix: str | None = None,
	pages: str | None = None,
	zeros: str | None = None,
	borders: str | None = None,
) -> fastapi.Response:
	"""
	Generate a label PDF and return it as an attachment.

	Runs in the worker threadpool, one document per request.
	"""
	request = request_from_query(start, prefix, pages, zeros, borders)
	filename = f"asn-{request.start}.pdf"
	try:
		result = aql.render.generate(request)
	except LabelError as error:
		status_code = 400 if isinstance(error, CLIENT_ERRORS) else 500
		logger.warning("generate_request_failed", status=status_code, error=str(error))
		raise fastapi.HTTPException(
			status_code=status_code,
			detail={"error": error.kind, "message": str(error)},
		) from error

	return fastapi.Response(
		content=result.document,
		media_type="application/pdf",
		headers={"Content-Disposition": f"attachment; filename={filename}"},
	)


#============================================
def serve(host: str, port: int) -> None:
	"""
	Run the HTTP server until interrupted.
	"""
	logger.info("server_starting", host=host, port=port)
	uvicorn.run(app, host=host, port=port, log_config=None)
