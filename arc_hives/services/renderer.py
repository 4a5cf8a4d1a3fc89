"""PDF rendering for certificates of authorship."""

from dataclasses import dataclass
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import simpleSplit
from reportlab.pdfgen import canvas

from arc_hives.schemas.certificate import CertificateView

PDF_MEDIA_TYPE = "application/pdf"

_MARGIN = 80
_BODY_FONT = "Helvetica"
_BODY_SIZE = 14
_LINE_HEIGHT = 30


@dataclass(frozen=True)
class RenderedDocument:
    content: bytes
    filename: str
    media_type: str


def render_certificate(certificate: CertificateView) -> RenderedDocument:
    """
    Lay out a certificate as a one-page PDF.

    Args:
        certificate: Certificate view to render

    Returns:
        RenderedDocument with the PDF bytes, attachment filename and media type
    """
    buffer = BytesIO()
    width, height = A4
    pdf = canvas.Canvas(buffer, pagesize=A4, invariant=True)

    pdf.setTitle(f"Certificate of Authorship - {certificate.title}")
    pdf.setSubject(f"Article {certificate.article_id}")
    pdf.setKeywords(
        f"article_id={certificate.article_id} certificate_id={certificate.certificate_id}"
    )

    pdf.setFont("Helvetica-Bold", 22)
    pdf.drawCentredString(width / 2, height - 80, "Certificate of Authorship")

    y = height - 140
    pdf.setFont(_BODY_FONT, _BODY_SIZE)
    title_lines = simpleSplit(
        f"Title: {certificate.title}", _BODY_FONT, _BODY_SIZE, width - 2 * _MARGIN
    )
    for line in title_lines:
        pdf.drawString(_MARGIN, y, line)
        y -= _LINE_HEIGHT

    for line in (
        f"Article ID: {certificate.article_id}",
        f"Certificate ID: {certificate.certificate_id}",
        f"Issued At: {certificate.issued_at.isoformat()}",
    ):
        pdf.drawString(_MARGIN, y, line)
        y -= _LINE_HEIGHT

    y -= _LINE_HEIGHT
    pdf.setFont("Helvetica-Oblique", 12)
    for line in simpleSplit(
        certificate.attestation_message, "Helvetica-Oblique", 12, width - 2 * _MARGIN
    ):
        pdf.drawString(_MARGIN, y, line)
        y -= 18

    pdf.showPage()
    pdf.save()

    return RenderedDocument(
        content=buffer.getvalue(),
        filename=f"certificate_{certificate.article_id}.pdf",
        media_type=PDF_MEDIA_TYPE,
    )
