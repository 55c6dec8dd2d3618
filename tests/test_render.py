import io

import pypdf
import pytest

import asn_qr_labels.config
import asn_qr_labels.errors
import asn_qr_labels.render

from conftest import read_page_identifiers


GenerationRequest = asn_qr_labels.config.GenerationRequest


#============================================
def test_single_page_scenario(glyph_dir) -> None:
	"""
	One page runs from ASN0001 to ASN0189 in reading order.
	"""
	request = GenerationRequest(start=1, prefix="ASN", zeros=4, pages=1, borders=False)
	result = asn_qr_labels.render.generate(request, glyph_dir=glyph_dir)

	assert result.pages == 1
	assert result.labels_per_page == 189
	assert result.first_identifier == "ASN0001"
	assert result.last_identifier == "ASN0189"
	assert result.output_path is None
	assert result.document.startswith(b"%PDF")

	pages = read_page_identifiers(result.document)
	assert len(pages) == 1
	assert sorted(pages[0]) == [f"ASN{number:04d}" for number in range(1, 190)]
	assert list(glyph_dir.iterdir()) == []


#============================================
def test_second_page_continues_sequence(glyph_dir) -> None:
	"""
	Page two starts right after the last label of page one.
	"""
	request = GenerationRequest(start=1, prefix="ASN", zeros=4, pages=2)
	result = asn_qr_labels.render.generate(request, glyph_dir=glyph_dir, workers=4)

	pages = read_page_identifiers(result.document)
	assert len(pages) == 2
	assert len(pages[0]) == len(pages[1]) == 189
	assert min(pages[1]) == "ASN0190"
	assert max(pages[1]) == "ASN0378"
	assert result.last_identifier == "ASN0378"
	assert list(glyph_dir.iterdir()) == []


#============================================
def test_generation_is_deterministic(glyph_dir) -> None:
	"""
	Identical requests give byte-identical documents, pooled or inline.
	"""
	request = GenerationRequest(start=42, prefix="DOC", zeros=5, pages=1)
	first = asn_qr_labels.render.generate(request, glyph_dir=glyph_dir, workers=1)
	second = asn_qr_labels.render.generate(request, glyph_dir=glyph_dir, workers=8)
	assert first.document == second.document
	assert read_page_identifiers(first.document, "DOC") == read_page_identifiers(second.document, "DOC")


#============================================
def test_wide_numbers_and_zero_padding(glyph_dir) -> None:
	request = GenerationRequest(start=9950, prefix="ASN", zeros=0, pages=1)
	result = asn_qr_labels.render.generate(request, glyph_dir=glyph_dir)
	assert result.first_identifier == "ASN9950"
	assert result.last_identifier == "ASN10138"
	identifiers = read_page_identifiers(result.document)[0]
	assert "ASN9999" in identifiers
	assert "ASN10000" in identifiers


#============================================
def test_output_path_is_written(tmp_path, glyph_dir) -> None:
	"""
	A destination in a missing directory is created and written.
	"""
	output_path = tmp_path / "nested" / "out" / "labels.pdf"
	result = asn_qr_labels.render.generate(
		GenerationRequest(pages=1),
		output_path=output_path,
		glyph_dir=glyph_dir,
	)
	assert result.output_path == output_path
	assert output_path.read_bytes() == result.document
	assert len(pypdf.PdfReader(io.BytesIO(result.document)).pages) == 1
	assert sorted(path.name for path in output_path.parent.iterdir()) == ["labels.pdf"]


#============================================
def test_unencodable_text_leaves_no_glyphs(tmp_path, glyph_dir) -> None:
	"""
	Oversized identifiers abort generation without leftovers.
	"""
	output_path = tmp_path / "labels.pdf"
	request = GenerationRequest(prefix="x" * 3000, pages=1)
	with pytest.raises(asn_qr_labels.errors.EncodingError) as excinfo:
		asn_qr_labels.render.generate(request, output_path=output_path, glyph_dir=glyph_dir)
	assert excinfo.value.subject.endswith("0001")
	assert list(glyph_dir.iterdir()) == []
	assert not output_path.exists()


#============================================
def test_unusable_glyph_directory_raises_storage_error(tmp_path) -> None:
	request = GenerationRequest(pages=1)
	with pytest.raises(asn_qr_labels.errors.StorageError) as excinfo:
		asn_qr_labels.render.generate(request, glyph_dir=tmp_path / "missing", workers=1)
	assert excinfo.value.subject == "ASN0001"


#============================================
def test_unwritable_destination_raises_output_error(tmp_path, glyph_dir) -> None:
	"""
	A destination that cannot be replaced reports OutputError, leaving no temp file.
	"""
	output_path = tmp_path / "out"
	output_path.mkdir()
	with pytest.raises(asn_qr_labels.errors.OutputError) as excinfo:
		asn_qr_labels.render.generate(GenerationRequest(), output_path=output_path, glyph_dir=glyph_dir)
	assert excinfo.value.subject == str(output_path)
	assert sorted(path.name for path in tmp_path.iterdir()) == ["glyphs", "out"]
	assert list(glyph_dir.iterdir()) == []


#============================================
@pytest.mark.parametrize(
	"fields",
	[
		{"pages": 0},
		{"pages": -1},
		{"start": -5},
		{"zeros": -1},
		{"pages": 1.5},
		{"borders": "yes"},
	],
)
def test_invalid_requests_are_rejected(fields, glyph_dir) -> None:
	request = GenerationRequest(**fields)
	with pytest.raises(asn_qr_labels.errors.RequestError):
		asn_qr_labels.render.generate(request, glyph_dir=glyph_dir)
	assert list(glyph_dir.iterdir()) == []
