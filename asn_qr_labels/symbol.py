"""
QR symbol encoding.
"""

# Standard Library
import io

# PIP3 modules
import PIL.Image
import qrcode
import qrcode.constants
import qrcode.exceptions

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.config
import asn_qr_labels.errors


SYMBOL_RESOLUTION = aql.config.SYMBOL_RESOLUTION
EncodingError = aql.errors.EncodingError


#============================================
def encode_symbol(text: str, size: int = SYMBOL_RESOLUTION) -> PIL.Image.Image:
	"""
	Encode text as a square QR glyph.

	The symbol uses error correction level M and the smallest version that
	fits. Every module is scaled by the same whole-number factor and the
	symbol is centered on a white square, so the same text always gives the
	same pixels. A symbol with more modules than pixels cannot be scaled.

	Args:
		text: Text to encode.
		size: Output width and height in pixels.

	Returns:
		RGBA image of size x size pixels.
	"""
	qr = qrcode.QRCode(
		version=None,
		error_correction=qrcode.constants.ERROR_CORRECT_M,
		box_size=1,
		border=0,
	)
	try:
		qr.add_data(text)
		qr.make(fit=True)
	except (qrcode.exceptions.DataOverflowError, ValueError) as error:
		raise EncodingError(text, f"failed to encode QR code: {error}") from error

	modules = qr.modules_count
	factor = size // modules
	if factor < 1:
		raise EncodingError(
			text,
			f"failed to scale QR code: {modules} modules do not fit in {size}x{size} pixels",
		)

	try:
		symbol = qr.make_image(fill_color="black", back_color="white").convert("L")
		symbol = symbol.resize((modules * factor, modules * factor), PIL.Image.Resampling.NEAREST)
		image = PIL.Image.new("L", (size, size), 255)
		offset = (size - modules * factor) // 2
		image.paste(symbol, (offset, offset))
	except ValueError as error:
		raise EncodingError(text, f"failed to scale QR code: {error}") from error
	return image.convert("RGBA")


#============================================
def glyph_png_bytes(image: PIL.Image.Image) -> bytes:
	"""
	Encode a glyph image as PNG.
	"""
	buffer = io.BytesIO()
	image.save(buffer, format="PNG")
	return buffer.getvalue()


#============================================
def symbol_png_bytes(text: str, size: int = SYMBOL_RESOLUTION) -> bytes:
	return glyph_png_bytes(encode_symbol(text, size))
