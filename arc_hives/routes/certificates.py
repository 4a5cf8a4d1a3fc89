"""Verification and certificate routes."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Response, UploadFile

from arc_hives.dependencies import get_store
from arc_hives.errors import NotFound, ValidationError
from arc_hives.schemas.certificate import CertificateView
from arc_hives.services.certificates import CertificateIssuer
from arc_hives.services.fingerprint import fingerprint, normalize_fingerprint
from arc_hives.services.renderer import render_certificate
from arc_hives.services.store import ArticleStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/verify", tags=["certificates"])


def _certify(store: ArticleStore, digest: str) -> CertificateView:
    certificate = CertificateIssuer(store).verify(digest)
    if certificate is None:
        raise NotFound("No article matches this fingerprint", operation="verify")
    return certificate


@router.get("/{fingerprint_hex}", response_model=CertificateView)
def verify_fingerprint(fingerprint_hex: str, store: ArticleStore = Depends(get_store)):
    """Return the certificate of authorship for a fingerprint."""
    return _certify(store, normalize_fingerprint(fingerprint_hex))


@router.post("", response_model=CertificateView)
async def verify_content(
    file: Optional[UploadFile] = File(None),
    content: Optional[str] = Form(None),
    store: ArticleStore = Depends(get_store),
):
    """Fingerprint submitted content and return the matching certificate."""
    if file is not None:
        digest = fingerprint(await file.read())
    elif content:
        digest = fingerprint(content)
    else:
        raise ValidationError("file or content is required")
    return _certify(store, digest)


@router.get("/{fingerprint_hex}/certificate")
def download_certificate(fingerprint_hex: str, store: ArticleStore = Depends(get_store)):
    """Return the certificate rendered as a PDF attachment."""
    certificate = _certify(store, normalize_fingerprint(fingerprint_hex))
    document = render_certificate(certificate)
    logger.info(f"Rendered certificate {certificate.certificate_id} for article {certificate.article_id}")
    return Response(
        content=document.content,
        media_type=document.media_type,
        headers={"Content-Disposition": f'attachment; filename="{document.filename}"'},
    )
