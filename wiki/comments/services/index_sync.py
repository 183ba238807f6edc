# ============================================
# comments/services/index_sync.py
# ============================================
import logging
from typing import Any, Dict, Optional

from comments.clients.search_client import SearchIndexClient
from comments.exceptions import PageNotFound
from comments.selectors.comment import CommentSelector
from pages.models import Page
from pages.selectors.page import PageSelector
from pages.services.page import PageService

logger = logging.getLogger(__name__)


class IndexSyncService:

    @staticmethod
    def build_snapshot(page: Page) -> Dict[str, Any]:
        """Indexable document of a page; the indexer wants `safe_content`"""
        return {
            'id': page.id,
            'path': page.path,
            'locale_code': page.locale_code,
            'title': page.title,
            'description': page.description,
            'extra': page.extra or {},
            'safe_content': PageService.sanitize_rendered_body(page.render),
        }

    @staticmethod
    def run(page_id: int) -> Optional[Dict[str, Any]]:
        """
        Recompute page.extra["comment"] from every comment of the page and
        push the page to the search index.

        The snapshot is fully rebuilt (newest comment first). A page without
        comments is left untouched.
        """
        contents = list(
            CommentSelector.get_comments_by_page(page_id).values_list('content', flat=True)
        )
        if not contents:
            logger.info("No comments to index on page %s.", page_id)
            return None

        if PageSelector.get_page_by_id(page_id) is None:
            raise PageNotFound()

        PageService.patch_metadata(page_id, {'comment': contents})

        # re-read: extra now holds the new snapshot, render is needed for safe_content
        page = PageSelector.get_page_by_id(page_id)
        snapshot = IndexSyncService.build_snapshot(page)
        SearchIndexClient.upsert(snapshot)

        logger.info("Indexed %d comment(s) of page %s", len(contents), page_id)
        return snapshot
