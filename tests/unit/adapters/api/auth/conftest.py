import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from src.core.application import create_application
from src.domain.services.auth.access_token import AccessTokenIssuer
from src.domain.services.auth.expired_token import ExpiredTokenClaimsExtractor
from src.domain.services.auth.token_lifecycle import TokenLifecycleService
from src.infrastructure.dependency_injection.auth_dependencies import (
    get_signing_key_provider,
    get_token_lifecycle_service,
)


@pytest.fixture
def app_keys():
    """Signing keys built from the test environment, shared with the bearer guard."""
    return get_signing_key_provider()


@pytest.fixture
def api_lifecycle(user_manager, refresh_tokens, app_keys):
    return TokenLifecycleService(
        user_manager=user_manager,
        refresh_tokens=refresh_tokens,
        issuer=AccessTokenIssuer(app_keys),
        claims_extractor=ExpiredTokenClaimsExtractor(app_keys),
        keys=app_keys,
    )


@pytest.fixture
def app(api_lifecycle):
    application = create_application()
    application.dependency_overrides[get_token_lifecycle_service] = lambda: api_lifecycle
    yield application
    application.dependency_overrides.clear()


@pytest_asyncio.fixture
async def client(app):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac


@pytest.fixture
def registration():
    return {
        "email": "alice@example.com",
        "password": "P@ssw0rd!",
        "first_name": "Alice",
        "last_name": "Liddell",
    }
