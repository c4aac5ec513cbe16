from __future__ import annotations

from io import BytesIO
from pathlib import Path

import docx
import fitz
from docx.document import Document as DocxDocument
from docx.opc.constants import RELATIONSHIP_TYPE as RT
from docx.opc.part import Part
from lxml import etree

SUPPORTED_EXTENSIONS: tuple[str, ...] = (".pdf", ".docx", ".txt", ".md")

_PDF_SIGNATURE = b"%PDF"
_ZIP_SIGNATURE = b"PK\x03\x04"

_W_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"
_SEPARATOR_NOTE_TYPES = frozenset({"separator", "continuationSeparator", "continuationNotice"})


class DocumentError(ValueError):
    """Raised with a user-facing message when a document cannot be read."""


def _w(tag: str) -> str:
    return f"{{{_W_NAMESPACE}}}{tag}"


def _pdf_text(data: bytes, filename: str) -> str:
    if not data.lstrip().startswith(_PDF_SIGNATURE):
        raise DocumentError(f"{filename} does not look like a PDF file")
    parts: list[str] = []
    try:
        with fitz.open(stream=data, filetype="pdf") as doc:
            for page in doc:
                parts.append(page.get_text())
    except (fitz.FileDataError, RuntimeError) as exc:
        raise DocumentError(f"Could not read PDF {filename}: {exc}") from exc
    return "\n".join(parts)


def _note_paragraphs(blob: bytes, note_tag: str) -> list[str]:
    root = etree.fromstring(blob)
    paragraphs: list[str] = []
    for note in root.iter(_w(note_tag)):
        if note.get(_w("type")) in _SEPARATOR_NOTE_TYPES:
            continue
        for paragraph in note.iter(_w("p")):
            text = "".join(node.text or "" for node in paragraph.iter(_w("t")))
            if text:
                paragraphs.append(text)
    return paragraphs


def _related_parts(document: DocxDocument, reltype: str) -> list[Part]:
    # Notes hang off the main document part; some writers relate them from the package.
    parts: list[Part] = []
    for rels in (document.part.rels, document.part.package.rels):
        for rel in rels.values():
            if rel.reltype == reltype and not rel.is_external and rel.target_part not in parts:
                parts.append(rel.target_part)
    return parts


def _docx_text(data: bytes, filename: str) -> str:
    if not data.startswith(_ZIP_SIGNATURE):
        raise DocumentError(f"{filename} does not look like a Word (.docx) file")
    try:
        document = docx.Document(BytesIO(data))
    except Exception as exc:  # noqa: BLE001 - python-docx raises assorted zip/xml errors
        raise DocumentError(f"Could not read Word document {filename}: {exc}") from exc

    parts = [paragraph.text for paragraph in document.paragraphs]
    for table in document.tables:
        for row in table.rows:
            parts.extend(cell.text for cell in row.cells)

    for reltype, note_tag in ((RT.FOOTNOTES, "footnote"), (RT.ENDNOTES, "endnote")):
        for part in _related_parts(document, reltype):
            try:
                parts.extend(_note_paragraphs(part.blob, note_tag))
            except etree.XMLSyntaxError as exc:
                raise DocumentError(
                    f"Could not read {note_tag}s in Word document {filename}: {exc}"
                ) from exc
    return "\n".join(parts)


def _plain_text(data: bytes, filename: str) -> str:
    try:
        return data.decode("utf-8-sig")
    except UnicodeDecodeError as exc:
        raise DocumentError(f"{filename} is not valid UTF-8 text") from exc


def extract_text(data: bytes, filename: str) -> str:
    extension = Path(filename).suffix.lower()
    if extension == ".pdf":
        return _pdf_text(data, filename)
    if extension == ".docx":
        return _docx_text(data, filename)
    if extension in (".txt", ".md"):
        return _plain_text(data, filename)
    raise DocumentError(
        f"Unsupported file type: {extension or filename}. "
        f"Supported: {', '.join(SUPPORTED_EXTENSIONS)}"
    )


def extract_text_from_path(path: str | Path) -> str:
    file_path = Path(path)
    return extract_text(file_path.read_bytes(), file_path.name)
