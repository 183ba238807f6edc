# ============================================
# comments/clients/search_client.py
# ============================================
import logging
from typing import Any, Dict

import requests
from django.conf import settings

logger = logging.getLogger(__name__)


class SearchIndexClient:
    """Client to push page snapshots to the Search Service API"""

    @classmethod
    def _base_url(cls) -> str:
        return (getattr(settings, 'SEARCH_SERVICE_URL', '') or '').rstrip('/')

    @classmethod
    def upsert(cls, snapshot: Dict[str, Any]) -> bool:
        """
        Insert or replace the indexed document of a page.
        Best effort: returns False when not configured or on request errors.
        """
        base_url = cls._base_url()
        if not base_url:
            logger.warning("SEARCH_SERVICE_URL not set; page %s not indexed.", snapshot.get('id'))
            return False

        try:
            response = requests.put(
                f"{base_url}/pages/{snapshot['id']}",
                json=snapshot,
                timeout=getattr(settings, 'SEARCH_TIMEOUT', 5),
            )
            response.raise_for_status()
            return True
        except requests.RequestException as e:
            logger.warning("Error indexing page %s: %s", snapshot.get('id'), e)
            return False
