# ============================================
# planning/clients/user_client.py
# ============================================
import logging
from typing import Dict, List, Optional

import requests
from django.conf import settings
from django.core.cache import cache

logger = logging.getLogger(__name__)


class UserServiceClient:
    """Client for the external user directory that resolves actor ids to display data"""

    CACHE_PREFIX = 'planning:user:'

    @classmethod
    def base_url(cls) -> Optional[str]:
        url = getattr(settings, 'USER_SERVICE_URL', None)
        return url.rstrip('/') if url else None

    @classmethod
    def _timeout(cls) -> int:
        return getattr(settings, 'USER_SERVICE_TIMEOUT', 5)

    @classmethod
    def _cache_ttl(cls) -> int:
        return getattr(settings, 'USER_CACHE_TTL', 300)

    @classmethod
    def get_users_by_ids(cls, user_ids: List[str]) -> Dict[str, Dict]:
        """
        Batch get users by IDs
        Returns dict: {user_id: user_data}
        """
        base_url = cls.base_url()
        if not base_url or not user_ids:
            return {}

        users_dict = {}
        ids_to_fetch = []

        for user_id in set(user_ids):
            cached = cache.get(f"{cls.CACHE_PREFIX}{user_id}")
            if cached:
                users_dict[user_id] = cached
            else:
                ids_to_fetch.append(user_id)

        if not ids_to_fetch:
            return users_dict

        try:
            response = requests.post(
                f"{base_url}/users/batch",
                json={'ids': sorted(ids_to_fetch)},
                timeout=cls._timeout()
            )
            response.raise_for_status()
            fetched_users = response.json()
        except requests.RequestException as e:
            logger.warning("[users] batch fetch of %s users failed: %s", len(ids_to_fetch), e)
            return users_dict

        for user in fetched_users:
            user_id = str(user['id'])
            users_dict[user_id] = user
            cache.set(f"{cls.CACHE_PREFIX}{user_id}", user, cls._cache_ttl())

        return users_dict
