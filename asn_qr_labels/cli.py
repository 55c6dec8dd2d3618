"""
CLI entry points for ASN QR label sheets.
"""

# Standard Library
import argparse
import pathlib
import sys
import time

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.config
import asn_qr_labels.errors
import asn_qr_labels.logger
import asn_qr_labels.render


GenerationRequest = aql.config.GenerationRequest
LabelError = aql.errors.LabelError

AVERY_L4731REV_25 = aql.config.AVERY_L4731REV_25
DEFAULT_START = aql.config.DEFAULT_START
DEFAULT_PREFIX = aql.config.DEFAULT_PREFIX
DEFAULT_PAGES = aql.config.DEFAULT_PAGES
DEFAULT_ZEROS = aql.config.DEFAULT_ZEROS
DEFAULT_OUTPUT = aql.config.DEFAULT_OUTPUT
DEFAULT_HOST = aql.config.DEFAULT_HOST
DEFAULT_PORT = aql.config.DEFAULT_PORT
DEFAULT_WORKERS = aql.config.DEFAULT_WORKERS


#============================================
def build_request(args: argparse.Namespace) -> GenerationRequest:
	"""
	Build a generation request from CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		GenerationRequest.
	"""
	return GenerationRequest(
		start=args.start,
		prefix=args.prefix,
		zeros=args.zeros,
		pages=args.pages,
		borders=args.borders,
	)


#============================================
def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
	"""
	Parse command line arguments.

	Args:
		argv: Argument list, sys.argv when None.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(
		description=f"Generate ASN QR code labels for {AVERY_L4731REV_25.name} sheets.",
	)

	label_group = parser.add_argument_group("Labels")
	label_group.add_argument("-s", "--start", dest="start", type=int, default=DEFAULT_START, help="Starting ASN number.")
	label_group.add_argument("-x", "--prefix", dest="prefix", default=DEFAULT_PREFIX, help="Prefix for ASN numbers.")
	label_group.add_argument("-z", "--zeros", dest="zeros", type=int, default=DEFAULT_ZEROS, help="Number of leading zeros in the number.")
	label_group.add_argument("-p", "--pages", dest="pages", type=int, default=DEFAULT_PAGES, help="Number of pages to generate.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-o", "--output", dest="output_path", default=DEFAULT_OUTPUT, help="Output PDF file.")
	output_group.add_argument("-b", "--borders", dest="borders", action="store_true", help="Show label borders (for debugging).")
	output_group.add_argument("-B", "--no-borders", dest="borders", action="store_false", help="Hide label borders.")
	output_group.add_argument("-w", "--workers", dest="workers", type=int, default=DEFAULT_WORKERS, help="Glyph rendering threads.")

	server_group = parser.add_argument_group("Server")
	server_group.add_argument("--serve", dest="serve", action="store_true", help="Run as HTTP server.")
	server_group.add_argument("--host", dest="host", default=DEFAULT_HOST, help="HTTP server bind address.")
	server_group.add_argument("--port", dest="port", type=int, default=DEFAULT_PORT, help="HTTP server port.")
	server_group.add_argument("--log-json", dest="log_json", action="store_true", help="Log JSON lines.")

	parser.set_defaults(
		borders=False,
		serve=False,
		log_json=False,
	)

	args = parser.parse_args(argv)
	return args


#============================================
def run_pipeline(args: argparse.Namespace) -> pathlib.Path:
	"""
	Generate the label PDF described by the CLI args.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Written PDF path.
	"""
	request = build_request(args)
	print("ASN QR label pipeline")
	print(f"Sheet: {AVERY_L4731REV_25.name}")
	print(f"Output PDF: {args.output_path}")
	print(f"Start: {request.start}")
	print(f"Prefix: {request.prefix}")
	print(f"Leading zeros: {request.zeros}")
	print(f"Pages: {request.pages}")
	print(f"Draw borders: {request.borders}")

	start_time = time.perf_counter()
	result = aql.render.generate(
		request,
		output_path=pathlib.Path(args.output_path),
		workers=args.workers,
	)
	total_time = time.perf_counter() - start_time

	print(f"Pages written: {result.pages}")
	print(f"Labels printed: {result.total_labels} ({result.first_identifier} .. {result.last_identifier})")
	print(f"Timing: total={total_time:.2f}s")
	print(f"Generated PDF file: {result.output_path}")
	return result.output_path


#============================================
def main(argv: list[str] | None = None) -> None:
	"""
	Main entry point.
	"""
	args = parse_args(argv)
	aql.logger.configure_logging(json_output=args.log_json)

	if args.serve:
		# imported here so batch runs do not load the web stack
		import asn_qr_labels.server
		aql.server.serve(args.host, args.port)
		return

	try:
		run_pipeline(args)
	except LabelError as error:
		print(f"Error generating PDF: {error}", file=sys.stderr)
		sys.exit(1)
