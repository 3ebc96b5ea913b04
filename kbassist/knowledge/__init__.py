"""Knowledge-base document management.

Responsibilities:
    - Document snapshot loading (stale-but-visible on failure)
    - File upload and URL import with busy-flag exclusion
    - Confirmed deletion
    - Derived per-source counts

Every mutation is followed by a full reload; the snapshot is never patched locally.
"""

from kbassist.knowledge.ingestion import (
    LOAD_ERROR_MESSAGE,
    ConfirmDelete,
    KnowledgeIngestionController,
)

__all__ = ["LOAD_ERROR_MESSAGE", "ConfirmDelete", "KnowledgeIngestionController"]
