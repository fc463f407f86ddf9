"""Document service - placeholder order documents

Order documents are never fetched from the court. Every download returns the
same single-page PDF, assembled once at import time.
"""
from typing import Any, List, Optional

from court_fetcher.exceptions import InvalidRequestError

PDF_MEDIA_TYPE = "application/pdf"
DOWNLOAD_FILENAME = "court_order.pdf"

PLACEHOLDER_TITLE = "Delhi High Court - Order Document"
PLACEHOLDER_BODY = "This is a sample court order for demonstration."


def _escape_pdf_text(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_placeholder_pdf(title: str = PLACEHOLDER_TITLE, body: str = PLACEHOLDER_BODY) -> bytes:
    """
    Build a minimal PDF 1.4 document with two lines of Helvetica text.

    The xref table is computed from the actual object offsets, so the
    output opens cleanly in strict readers.
    """
    stream = (
        "BT\n"
        "/F1 12 Tf\n"
        "72 720 Td\n"
        f"({_escape_pdf_text(title)}) Tj\n"
        "0 -20 Td\n"
        f"({_escape_pdf_text(body)}) Tj\n"
        "ET"
    ).encode("latin-1")

    objects: List[bytes] = [
        b"<<\n/Type /Catalog\n/Pages 2 0 R\n>>",
        b"<<\n/Type /Pages\n/Kids [3 0 R]\n/Count 1\n>>",
        b"<<\n/Type /Page\n/Parent 2 0 R\n/MediaBox [0 0 612 792]\n/Contents 4 0 R\n"
        b"/Resources <<\n/Font <<\n/F1 5 0 R\n>>\n>>\n>>",
        b"<<\n/Length %d\n>>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<<\n/Type /Font\n/Subtype /Type1\n/BaseFont /Helvetica\n>>",
    ]

    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body_bytes in enumerate(objects, start=1):
        offsets.append(len(out))
        out += b"%d 0 obj\n" % number + body_bytes + b"\nendobj\n\n"

    xref_offset = len(out)
    out += b"xref\n0 %d\n" % (len(objects) + 1)
    out += b"0000000000 65535 f \n"
    for offset in offsets:
        out += b"%010d 00000 n \n" % offset
    out += b"trailer\n<<\n/Size %d\n/Root 1 0 R\n>>\n" % (len(objects) + 1)
    out += b"startxref\n%d\n%%%%EOF" % xref_offset
    return bytes(out)


PLACEHOLDER_PDF = build_placeholder_pdf()


def get_order_document(pdf_url: Optional[Any]) -> bytes:
    """
    Return the document for an order link.

    Raises:
        InvalidRequestError: If no link was supplied
    """
    if not pdf_url:
        raise InvalidRequestError("PDF URL is required")
    return PLACEHOLDER_PDF
