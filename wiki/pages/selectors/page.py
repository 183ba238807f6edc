# ============================================
# pages/selectors/page.py
# ============================================
from typing import Optional
from pages.models import Page


class PageSelector:

    @staticmethod
    def get_page_by_id(page_id: int) -> Optional[Page]:
        """Get single page"""
        try:
            return Page.objects.get(id=page_id)
        except Page.DoesNotExist:
            return None

    @staticmethod
    def get_page_by_path(path: str, locale_code: str = 'en') -> Optional[Page]:
        """Get page by locale + path"""
        try:
            return Page.objects.get(path=path, locale_code=locale_code)
        except Page.DoesNotExist:
            return None
