"""
Transient glyph files referenced by the page composer.
"""

# Standard Library
import os
import pathlib
import tempfile
import threading

# PIP3 modules
import PIL.Image

# local repo modules
import asn_qr_labels as aql
import asn_qr_labels.config
import asn_qr_labels.errors
import asn_qr_labels.logger


logger = aql.logger.get_logger(__name__)

GLYPH_PREFIX = aql.config.GLYPH_PREFIX
GLYPH_SUFFIX = aql.config.GLYPH_SUFFIX
StorageError = aql.errors.StorageError


class GlyphStore:
	"""
	Owns the glyph PNG files written during one document generation.

	Use it as a context manager so every file is removed when the
	generation call ends, whether it succeeded or not. Registration is
	safe from several worker threads.
	"""

	def __init__(self, directory: str | pathlib.Path | None = None):
		self.directory = None if directory is None else str(directory)
		self._paths: set[pathlib.Path] = set()
		self._lock = threading.Lock()

	def __enter__(self) -> "GlyphStore":
		return self

	def __exit__(self, exc_type, exc_value, traceback) -> None:
		self.release_all()

	def __len__(self) -> int:
		with self._lock:
			return len(self._paths)

	#============================================
	def paths(self) -> list[pathlib.Path]:
		with self._lock:
			return sorted(self._paths)

	#============================================
	def materialize(self, image: PIL.Image.Image) -> pathlib.Path:
		"""
		Write a glyph image to a new temp PNG file.

		Args:
			image: Glyph raster.

		Returns:
			Path of the written file.
		"""
		try:
			handle, name = tempfile.mkstemp(
				prefix=GLYPH_PREFIX,
				suffix=GLYPH_SUFFIX,
				dir=self.directory,
			)
		except OSError as error:
			location = self.directory or tempfile.gettempdir()
			raise StorageError(location, f"failed to create temp file: {error}") from error

		path = pathlib.Path(name)
		# tracked before writing so a failed write is still cleaned up
		with self._lock:
			self._paths.add(path)

		try:
			with os.fdopen(handle, "wb") as stream:
				image.save(stream, format="PNG")
		except (OSError, ValueError) as error:
			raise StorageError(str(path), f"failed to encode PNG: {error}") from error
		return path

	#============================================
	def release_all(self) -> None:
		"""
		Delete every tracked glyph file. Safe to call more than once.
		"""
		with self._lock:
			paths = list(self._paths)
			self._paths.clear()
		for path in paths:
			try:
				path.unlink(missing_ok=True)
			except OSError as error:
				logger.warning("glyph_release_failed", path=str(path), error=str(error))
