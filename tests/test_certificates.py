"""Tests for the certificate issuer."""

import uuid

from arc_hives.models import Article
from arc_hives.schemas.certificate import ATTESTATION_MESSAGE
from arc_hives.services.certificates import CertificateIssuer
from arc_hives.services.fingerprint import fingerprint


def test_unknown_fingerprint_returns_none_without_writes(store, make_article, test_db):
    article = make_article()

    assert CertificateIssuer(store).verify(fingerprint("never published")) is None

    test_db.expire_all()
    assert test_db.get(Article, article.id).certificate_id is None


def test_first_verify_allocates_certificate(store, make_article, test_db):
    article = make_article(title="On Bees", content="bees are great")

    certificate = CertificateIssuer(store).verify(fingerprint("bees are great"))

    assert certificate.article_id == article.id
    assert certificate.title == "On Bees"
    assert certificate.attestation_message == ATTESTATION_MESSAGE
    uuid.UUID(certificate.certificate_id)
    test_db.expire_all()
    assert test_db.get(Article, article.id).certificate_id == certificate.certificate_id


def test_verify_is_idempotent(store, make_article):
    make_article(content="stable")
    issuer = CertificateIssuer(store)

    first = issuer.verify(fingerprint("stable"))
    second = issuer.verify(fingerprint("stable"))

    assert first.certificate_id == second.certificate_id
    assert second.issued_at >= first.issued_at


def test_certified_article_is_not_rewritten(store, make_article, monkeypatch):
    make_article(content="already", certificate_id="11111111-2222-3333-4444-555555555555")

    def fail(*args, **kwargs):
        raise AssertionError("set_certificate_id must not be called")

    monkeypatch.setattr(store, "set_certificate_id", fail)

    certificate = CertificateIssuer(store).verify(fingerprint("already"))

    assert certificate.certificate_id == "11111111-2222-3333-4444-555555555555"


def test_certificate_uses_current_title(store, make_article, test_db):
    article = make_article(title="Draft title", content="body")
    issuer = CertificateIssuer(store)
    issuer.verify(fingerprint("body"))

    article.title = "Final title"
    test_db.commit()

    assert issuer.verify(fingerprint("body")).title == "Final title"


def test_concurrent_allocation_keeps_the_stored_id(store, make_article, test_db):
    """A verifier that loses the allocation race reports the winner's id."""
    article = make_article(content="raced")
    stale = store.get_by_fingerprint(fingerprint("raced"))
    assert stale.certificate_id is None

    # Another request certifies the article in the meantime
    test_db.query(Article).filter(Article.id == article.id).update(
        {Article.certificate_id: "winner-id"}, synchronize_session=False
    )
    test_db.commit()

    assert store.set_certificate_id(article.id, "loser-id") == "winner-id"
