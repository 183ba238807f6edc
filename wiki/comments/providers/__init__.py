# ============================================
# comments/providers/__init__.py
# ============================================
from typing import Optional

from django.conf import settings
from django.core.signals import setting_changed
from django.dispatch import receiver
from django.utils.module_loading import import_string

from .base import CommentProvider

DEFAULT_PROVIDER = 'comments.providers.default.DefaultCommentProvider'

_provider: Optional[CommentProvider] = None


def get_comment_provider() -> CommentProvider:
    """Instance of the backend named in COMMENTS_PROVIDER"""
    global _provider
    if _provider is None:
        provider_cls = import_string(getattr(settings, 'COMMENTS_PROVIDER', DEFAULT_PROVIDER))
        _provider = provider_cls()
    return _provider


@receiver(setting_changed)
def _reset_provider(*, setting, **kwargs):
    global _provider
    if setting == 'COMMENTS_PROVIDER':
        _provider = None


__all__ = [
    'CommentProvider',
    'get_comment_provider',
]
