"""
Credential snapshot cache.

Caches the credential looked up on the validation path, keyed by a hash
of the key string and a generation counter. Every mutation bumps the
generation, so a snapshot loaded before the mutation is stored under a
key that is never read again.
"""
import hashlib
import logging
import uuid
from datetime import datetime
from typing import Any, Awaitable, Callable, Dict, Optional

from django.conf import settings

from core.domain.value_objects import DomainWhitelist
from core.infrastructure.cache import CachePort
from core.infrastructure.cache_adapters import DjangoCacheAdapter
from credentials.domain.credential import Credential, CredentialStatus

logger = logging.getLogger(__name__)


def credential_to_snapshot(credential: Credential) -> Dict[str, Any]:
    return {
        "id": str(credential.id),
        "key_string": credential.key_string,
        "secret_hash": credential.secret_hash,
        "owner_identity_id": str(credential.owner_identity_id),
        "product_id": str(credential.product_id),
        "status": credential.status.value,
        "expires_at": credential.expires_at.isoformat() if credential.expires_at else None,
        "allowed_domains": credential.allowed_domains.to_list(),
        "created_at": credential.created_at.isoformat(),
        "updated_at": credential.updated_at.isoformat(),
    }


def credential_from_snapshot(data: Dict[str, Any]) -> Credential:
    return Credential(
        id=uuid.UUID(data["id"]),
        key_string=data["key_string"],
        secret_hash=data["secret_hash"],
        owner_identity_id=uuid.UUID(data["owner_identity_id"]),
        product_id=uuid.UUID(data["product_id"]),
        status=CredentialStatus(data["status"]),
        expires_at=datetime.fromisoformat(data["expires_at"]) if data["expires_at"] else None,
        allowed_domains=DomainWhitelist(frozenset(data["allowed_domains"])),
        created_at=datetime.fromisoformat(data["created_at"]),
        updated_at=datetime.fromisoformat(data["updated_at"]),
    )


class CredentialCacheService:
    """Read-through cache for credentials used by validation."""

    def __init__(self, cache: Optional[CachePort] = None, ttl_seconds: Optional[int] = None):
        self.cache = cache or DjangoCacheAdapter(namespace="credential")
        self._ttl_seconds = ttl_seconds

    @property
    def ttl_seconds(self) -> int:
        if self._ttl_seconds is not None:
            return self._ttl_seconds
        return settings.CREDENTIAL_CACHE_TTL_SECONDS

    @property
    def enabled(self) -> bool:
        return self.ttl_seconds > 0

    @staticmethod
    def _digest(key_string: str) -> str:
        return hashlib.sha256(key_string.encode()).hexdigest()[:32]

    async def _generation(self, digest: str) -> int:
        return await self.cache.get(f"gen:{digest}") or 0

    async def get_or_load(
        self,
        key_string: str,
        loader: Callable[[str], Awaitable[Optional[Credential]]],
    ) -> Optional[Credential]:
        """
        Cached credential for ``key_string``, loading and caching it on a miss.

        The generation is read before ``loader`` runs, so a load that races
        a mutation is filed under the superseded generation.
        """
        if not self.enabled:
            return await loader(key_string)

        digest = self._digest(key_string)
        snapshot_key = f"{digest}:{await self._generation(digest)}"
        cached = await self.cache.get(snapshot_key)
        if cached:
            try:
                return credential_from_snapshot(cached)
            except (KeyError, TypeError, ValueError) as e:
                logger.warning("Discarding unreadable credential snapshot: %s", e)

        credential = await loader(key_string)
        if credential is not None:
            await self.cache.set(
                snapshot_key, credential_to_snapshot(credential), timeout=self.ttl_seconds
            )
        return credential

    async def invalidate(self, key_string: str) -> None:
        """Retire every snapshot cached for ``key_string`` so far."""
        if not self.enabled:
            return
        await self.cache.incr(f"gen:{self._digest(key_string)}")
