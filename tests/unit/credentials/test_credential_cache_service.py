"""
Unit tests for CredentialCacheService.
"""
import pytest

from conftest import FIXED_NOW
from credentials.application.services.credential_cache_service import CredentialCacheService


class CountingLoader:
    """Loads from the credential repository and counts calls."""

    def __init__(self, credential_repository):
        self.credential_repository = credential_repository
        self.calls = 0

    async def __call__(self, key_string):
        self.calls += 1
        return await self.credential_repository.find_by_key_string(key_string)


@pytest.mark.asyncio
class TestCredentialCacheService:
    async def test_second_lookup_is_served_from_cache(
        self, cache_service, credential_repository, make_credential
    ):
        credential, _ = make_credential(allowed_domains=["example.com"], status="revoked")
        loader = CountingLoader(credential_repository)

        first = await cache_service.get_or_load(credential.key_string, loader)
        second = await cache_service.get_or_load(credential.key_string, loader)

        assert first == credential
        assert second == credential
        assert loader.calls == 1

    async def test_key_string_is_not_used_verbatim(
        self, cache_service, cache, credential_repository, make_credential
    ):
        credential, _ = make_credential()
        await cache_service.get_or_load(
            credential.key_string, CountingLoader(credential_repository)
        )
        assert cache.data
        assert all(credential.key_string not in key for key in cache.data)

    async def test_unknown_key_is_not_cached(self, cache_service, cache, credential_repository):
        loader = CountingLoader(credential_repository)

        assert await cache_service.get_or_load("LK-MISSING", loader) is None
        assert await cache_service.get_or_load("LK-MISSING", loader) is None
        assert loader.calls == 2
        assert cache.data == {}

    async def test_disabled_when_ttl_is_zero(self, cache, credential_repository, make_credential):
        service = CredentialCacheService(cache=cache, ttl_seconds=0)
        credential, _ = make_credential()
        loader = CountingLoader(credential_repository)

        await service.get_or_load(credential.key_string, loader)
        await service.get_or_load(credential.key_string, loader)
        await service.invalidate(credential.key_string)

        assert not service.enabled
        assert loader.calls == 2
        assert cache.data == {}

    async def test_unreadable_snapshot_is_replaced(
        self, cache_service, cache, credential_repository, make_credential
    ):
        credential, _ = make_credential()
        loader = CountingLoader(credential_repository)
        await cache_service.get_or_load(credential.key_string, loader)
        for key in cache.data:
            cache.data[key] = {"garbage": True}

        assert await cache_service.get_or_load(credential.key_string, loader) == credential
        assert loader.calls == 2

    async def test_invalidate_forces_a_reload(
        self, cache_service, credential_repository, make_credential
    ):
        credential, _ = make_credential()
        loader = CountingLoader(credential_repository)
        await cache_service.get_or_load(credential.key_string, loader)

        await credential_repository.revoke(credential.id, FIXED_NOW)
        await cache_service.invalidate(credential.key_string)
        reloaded = await cache_service.get_or_load(credential.key_string, loader)

        assert reloaded.is_revoked
        assert loader.calls == 2

    async def test_load_that_races_a_revoke_is_not_served_afterwards(
        self, cache_service, credential_repository, make_credential
    ):
        credential, _ = make_credential()

        async def stale_loader(key_string):
            # Read the row, then let a revoke commit and retire the cache
            # before this load gets to fill it.
            loaded = await credential_repository.find_by_key_string(key_string)
            await credential_repository.revoke(credential.id, FIXED_NOW)
            await cache_service.invalidate(key_string)
            return loaded

        raced = await cache_service.get_or_load(credential.key_string, stale_loader)
        after = await cache_service.get_or_load(
            credential.key_string, CountingLoader(credential_repository)
        )

        assert not raced.is_revoked
        assert after.is_revoked
