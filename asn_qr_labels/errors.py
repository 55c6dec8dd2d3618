"""
Error taxonomy for label generation.
"""


class LabelError(Exception):
	"""
	Base error carrying the offending subject and a cause description.

	The subject is an identifier, a file path or a request field name.
	"""

	kind = "label_error"

	def __init__(self, subject: str, cause: str):
		self.subject = str(subject)
		self.cause = str(cause)
		super().__init__(f"{self.subject}: {self.cause}")


class RequestError(LabelError):
	kind = "invalid_request"


class EncodingError(LabelError):
	"""
	A QR symbol could not be produced for the text.
	"""

	kind = "encoding_failed"


class StorageError(LabelError):
	"""
	A transient glyph file could not be created or written.
	"""

	kind = "storage_failed"


class OutputError(LabelError):
	"""
	The final document could not be serialized or written.
	"""

	kind = "output_failed"
