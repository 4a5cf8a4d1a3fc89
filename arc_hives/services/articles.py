"""Article publication."""

import json
import logging
from typing import Any, List, Optional

from arc_hives.errors import Conflict, ValidationError
from arc_hives.models.article import Article
from arc_hives.services.file_storage import FileStorage
from arc_hives.services.fingerprint import fingerprint
from arc_hives.services.pdf_parser import extract_text_from_pdf
from arc_hives.services.store import ArticleStore

logger = logging.getLogger(__name__)

TEXT_EXTENSIONS = (".txt", ".md", ".text")


def parse_bibliography(value: Any) -> List[Any]:
    """Accept a list, a single entry or a JSON string; unparsable strings become []."""
    if value is None or value == "":
        return []
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            logger.warning(f"Error parsing bibliography JSON: {e}")
            return []
    return value if isinstance(value, list) else [value]


def _extract_content(data: bytes, filename: str, content_type: Optional[str]) -> Optional[str]:
    """Best-effort text for an uploaded file; None when it holds no readable text."""
    name = (filename or "").lower()
    if name.endswith(".pdf") or content_type == "application/pdf":
        try:
            return extract_text_from_pdf(data)
        except ValueError as e:
            logger.warning(f"Could not extract text from {filename}: {e}")
            return None
    if name.endswith(TEXT_EXTENSIONS) or (content_type or "").startswith("text/"):
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            logger.warning(f"{filename} is not UTF-8 text, storing without content")
            return None
    return None


def publish_article(
    store: ArticleStore,
    title: Optional[str],
    content: Optional[str] = None,
    file_data: Optional[bytes] = None,
    filename: Optional[str] = None,
    content_type: Optional[str] = None,
    file_storage: Optional[FileStorage] = None,
    authors: Optional[str] = None,
    original_link: Optional[str] = None,
    bibliography: Any = None,
) -> Article:
    """
    Publish an article from inline text or an uploaded file.

    The fingerprint covers the submitted bytes only: the UTF-8 text for
    inline content, the raw file bytes for uploads.

    Raises:
        ValidationError: If the title or the content is missing
        Conflict: If identical content was already published
        StoreUnavailable: On database errors
    """
    if not title or not title.strip():
        raise ValidationError("title is required")
    if file_data is None and not content:
        raise ValidationError("content or file is required")
    if file_data is not None and file_storage is None:
        raise ValueError("file_storage is required for file uploads")

    if file_data is not None:
        digest = fingerprint(file_data)
        content = _extract_content(file_data, filename, content_type)
    else:
        digest = fingerprint(content)

    if store.get_by_fingerprint(digest) is not None:
        raise Conflict("This exact content was already published", operation="create")

    reference = None
    if file_data is not None:
        reference = file_storage.save(filename, file_data)

    article = Article(
        title=title.strip(),
        authors=authors,
        original_link=original_link,
        bibliography=parse_bibliography(bibliography),
        content=content,
        file_url=file_storage.public_url(reference) if reference else None,
        fingerprint=digest,
        points=0.0,
    )
    try:
        return store.create(article)
    except Conflict:
        if reference:
            file_storage.delete(reference)
        raise
