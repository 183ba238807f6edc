# ============================================
# pages/models/__init__.py
# ============================================
from .page import Page

__all__ = [
    'Page',
]
