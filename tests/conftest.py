"""
Pytest configuration for local imports and shared fixtures.
"""

# Standard Library
import io
import os
import re
import sys

# PIP3 modules
import pypdf
import pytest

#============================================


def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
def read_page_identifiers(document: bytes, prefix: str = "ASN") -> list[list[str]]:
	"""
	Extract the caption identifiers of every page of a PDF.

	Args:
		document: PDF bytes.
		prefix: Identifier prefix to look for.

	Returns:
		One list of identifiers per page, in content order.
	"""
	reader = pypdf.PdfReader(io.BytesIO(document))
	pattern = re.compile(re.escape(prefix) + r"\d+")
	return [pattern.findall(page.extract_text() or "") for page in reader.pages]


@pytest.fixture
def glyph_dir(tmp_path):
	path = tmp_path / "glyphs"
	path.mkdir()
	return path
