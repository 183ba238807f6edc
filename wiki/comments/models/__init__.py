# ============================================
# comments/models/__init__.py
# ============================================
from .comment import Comment

__all__ = [
    'Comment',
]
