"""Tests for certificate PDF rendering."""

import re
from datetime import datetime
from io import BytesIO

from pypdf import PdfReader

from arc_hives.schemas.certificate import ATTESTATION_MESSAGE, CertificateView
from arc_hives.services.renderer import render_certificate

CERTIFICATE_ID = "0f8fad5b-d9cb-469f-a165-70867728950e"


def _certificate(title="A Study of Hives"):
    return CertificateView(
        article_id=42,
        certificate_id=CERTIFICATE_ID,
        title=title,
        issued_at=datetime(2026, 1, 2, 3, 4, 5),
    )


def _text(content: bytes) -> str:
    return PdfReader(BytesIO(content)).pages[0].extract_text()


def test_render_metadata():
    document = render_certificate(_certificate())

    assert document.filename == "certificate_42.pdf"
    assert document.media_type == "application/pdf"
    assert document.content.startswith(b"%PDF")


def test_rendered_ids_can_be_read_back():
    document = render_certificate(_certificate())
    text = _text(document.content)

    assert re.search(r"Article ID: (\d+)", text).group(1) == "42"
    assert re.search(r"Certificate ID: ([0-9a-f-]{36})", text).group(1) == CERTIFICATE_ID

    keywords = PdfReader(BytesIO(document.content)).metadata["/Keywords"]
    assert f"certificate_id={CERTIFICATE_ID}" in keywords


def test_render_includes_heading_title_and_timestamp():
    text = _text(render_certificate(_certificate()).content)

    assert "Certificate of Authorship" in text
    assert "A Study of Hives" in text
    assert "2026-01-02T03:04:05" in text
    assert ATTESTATION_MESSAGE.split()[0] in text


def test_render_is_deterministic():
    assert render_certificate(_certificate()).content == render_certificate(_certificate()).content


def test_long_titles_are_wrapped():
    title = "An Extremely Long Title " * 10
    text = _text(render_certificate(_certificate(title=title)).content)

    assert "Article ID: 42" in text
    assert text.count("Extremely") == 10
