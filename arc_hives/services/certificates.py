"""Certificate of authorship issuance."""

import logging
import uuid
from datetime import datetime
from typing import Optional

from arc_hives.schemas.certificate import CertificateView
from arc_hives.services.store import ArticleStore

logger = logging.getLogger(__name__)


class CertificateIssuer:
    """Looks up an article by fingerprint and certifies it exactly once."""

    def __init__(self, store: ArticleStore):
        self.store = store

    def verify(self, fingerprint: str) -> Optional[CertificateView]:
        """
        Verify a fingerprint and build its certificate.

        The certificate id is allocated on the first successful verification
        and reused afterwards. The view itself is rebuilt on every call from
        the article's current title, with a fresh issued_at.

        Args:
            fingerprint: Normalized content fingerprint

        Returns:
            CertificateView, or None if no article has this fingerprint
        """
        article = self.store.get_by_fingerprint(fingerprint)
        if article is None:
            logger.info(f"No article matches fingerprint {fingerprint[:16]}")
            return None

        certificate_id = article.certificate_id
        if certificate_id is None:
            certificate_id = self.store.set_certificate_id(article.id, str(uuid.uuid4()))
            logger.info(f"Allocated certificate {certificate_id} for article {article.id}")

        return CertificateView(
            article_id=article.id,
            certificate_id=certificate_id,
            title=article.title,
            issued_at=datetime.utcnow(),
        )
