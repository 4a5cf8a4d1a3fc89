"""FastAPI dependencies wiring the store adapter into request handlers."""

from fastapi import Depends
from sqlalchemy.orm import Session

from arc_hives.config import settings
from arc_hives.database import get_db
from arc_hives.services.file_storage import FileStorage
from arc_hives.services.store import ArticleStore


def get_file_storage() -> FileStorage:
    return FileStorage(settings.FILE_STORAGE_DIR, settings.FILE_PUBLIC_BASE_URL)


def get_store(
    db: Session = Depends(get_db),
    file_storage: FileStorage = Depends(get_file_storage),
) -> ArticleStore:
    """Build a store adapter bound to the request's session."""
    return ArticleStore(db, file_storage)
