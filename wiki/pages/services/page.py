# ============================================
# pages/services/page.py
# ============================================
import html
import logging
import re
from typing import Any, Dict

from django.db import transaction
from django.utils.html import strip_tags

from pages.models import Page

logger = logging.getLogger(__name__)

_WHITESPACE_RE = re.compile(r'\s+')
_BLOCK_END_RE = re.compile(
    r'(</(?:p|div|h[1-6]|li|ul|ol|tr|td|th|table|blockquote|pre|section|article)>|<br\s*/?>)',
    re.IGNORECASE
)


class PageService:

    @staticmethod
    @transaction.atomic
    def patch_metadata(page_id: int, partial_extra: Dict[str, Any]) -> None:
        """
        Merge partial_extra into page.extra.

        Only the given keys are rewritten; the row is locked for the
        read-modify-write so other keys of the bag are kept as stored.
        """
        page = Page.objects.select_for_update().only('id', 'extra').get(id=page_id)
        extra = dict(page.extra or {})
        extra.update(partial_extra)
        Page.objects.filter(id=page_id).update(extra=extra)
        logger.debug("Patched metadata of page %s: keys=%s", page_id, list(partial_extra))

    @staticmethod
    def sanitize_rendered_body(render: str) -> str:
        """Plain indexable text from rendered HTML"""
        if not render:
            return ''
        # block elements become word boundaries before the tags go away
        text = html.unescape(strip_tags(_BLOCK_END_RE.sub(r'\1 ', render)))
        return _WHITESPACE_RE.sub(' ', text).strip()
