from __future__ import annotations

from io import BytesIO
from pathlib import Path

import docx
import fitz
import pytest
from docx.opc.constants import CONTENT_TYPE as CT
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.packuri import PackURI
from docx.opc.part import Part

from citecheck_core.ingest.documents import DocumentError, extract_text, extract_text_from_path

W_NS = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


def test_plain_text_is_decoded() -> None:
    assert extract_text("Roe v. Wade, 410 U.S. 113".encode("utf-8"), "brief.txt") == (
        "Roe v. Wade, 410 U.S. 113"
    )
    assert extract_text(b"", "empty.md") == ""


def test_invalid_utf8_is_rejected() -> None:
    with pytest.raises(DocumentError, match="UTF-8"):
        extract_text(b"\xff\xfe\xfa", "brief.txt")


def test_unsupported_extension() -> None:
    with pytest.raises(DocumentError, match="Unsupported file type"):
        extract_text(b"data", "brief.rtf")


def test_pdf_bytes_must_match_extension() -> None:
    with pytest.raises(DocumentError, match="does not look like a PDF"):
        extract_text(b"plain text pretending", "brief.pdf")


def test_docx_bytes_must_match_extension() -> None:
    with pytest.raises(DocumentError, match="does not look like a Word"):
        extract_text(b"%PDF-1.7 not a docx", "brief.docx")


def test_pdf_text_extraction() -> None:
    with fitz.open() as doc:
        page = doc.new_page()
        page.insert_text((72, 72), "Roe v. Wade, 410 U.S. 113 (1973)")
        data = doc.tobytes()

    assert "410 U.S. 113" in extract_text(data, "brief.pdf")


def test_docx_text_extraction(tmp_path: Path) -> None:
    document = docx.Document()
    document.add_paragraph("Miranda v. Arizona, 384 U.S. 436 (1966)")
    table = document.add_table(rows=1, cols=1)
    table.cell(0, 0).text = "123 F.3d 456"
    path = tmp_path / "brief.docx"
    document.save(str(path))

    text = extract_text_from_path(path)

    assert "384 U.S. 436" in text
    assert "123 F.3d 456" in text


def test_docx_from_memory() -> None:
    buffer = BytesIO()
    document = docx.Document()
    document.add_paragraph("Smith v. Jones")
    document.save(buffer)

    assert "Smith v. Jones" in extract_text(buffer.getvalue(), "Brief.DOCX")


def _notes_xml(root_tag: str, note_tag: str, *texts: str) -> bytes:
    separators = (
        f'<w:{note_tag} w:type="separator" w:id="-1"><w:p><w:r><w:separator/></w:r></w:p></w:{note_tag}>'
        f'<w:{note_tag} w:type="continuationSeparator" w:id="0"><w:p><w:r>'
        f"<w:continuationSeparator/></w:r></w:p></w:{note_tag}>"
    )
    notes = "".join(
        f'<w:{note_tag} w:id="{index}"><w:p><w:r><w:t xml:space="preserve">{text[:5]}</w:t></w:r>'
        f"<w:r><w:t>{text[5:]}</w:t></w:r></w:p></w:{note_tag}>"
        for index, text in enumerate(texts, start=1)
    )
    return f'<w:{root_tag} xmlns:w="{W_NS}">{separators}{notes}</w:{root_tag}>'.encode("utf-8")


def _attach(document, partname: str, content_type: str, reltype: str, blob: bytes) -> None:
    part = Part(PackURI(partname), content_type, blob, document.part.package)
    document.part.relate_to(part, reltype)


def test_docx_footnotes_and_endnotes_are_read() -> None:
    document = docx.Document()
    document.add_paragraph("Body text without cites.")
    _attach(
        document,
        "/word/footnotes.xml",
        CT.WML_FOOTNOTES,
        RT.FOOTNOTES,
        _notes_xml("footnotes", "footnote", "Roe v. Wade, 410 U.S. 113 (1973)."),
    )
    _attach(
        document,
        "/word/endnotes.xml",
        CT.WML_ENDNOTES,
        RT.ENDNOTES,
        _notes_xml("endnotes", "endnote", "See 123 F.3d 456."),
    )
    buffer = BytesIO()
    document.save(buffer)

    text = extract_text(buffer.getvalue(), "brief.docx")
    lines = [line for line in text.split("\n") if line]

    assert lines == [
        "Body text without cites.",
        "Roe v. Wade, 410 U.S. 113 (1973).",
        "See 123 F.3d 456.",
    ]


def test_docx_without_notes_has_only_body_text() -> None:
    buffer = BytesIO()
    document = docx.Document()
    document.add_paragraph("Body only.")
    document.save(buffer)

    assert extract_text(buffer.getvalue(), "brief.docx").strip() == "Body only."
