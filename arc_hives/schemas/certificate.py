"""Certificate Pydantic schemas."""

from datetime import datetime

from pydantic import BaseModel

ATTESTATION_MESSAGE = (
    "This certifies that the article identified above was first published on "
    "Arc-Hives and that its content fingerprint is held on record."
)


class CertificateView(BaseModel):
    """Certificate of authorship, recomputed on every verification request."""

    article_id: int
    certificate_id: str
    title: str
    issued_at: datetime
    attestation_message: str = ATTESTATION_MESSAGE
