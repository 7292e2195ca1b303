import pytest

REGISTER_URL = "/api/v1/auth/register"


@pytest.mark.asyncio
async def test_register_returns_token_pair(client, registration):
    # Act
    response = await client.post(REGISTER_URL, json=registration)

    # Assert
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["errors"] == []
    assert body["token"].count(".") == 2
    assert body["refresh_token"]


@pytest.mark.asyncio
async def test_duplicate_registration_is_bad_request(client, registration):
    await client.post(REGISTER_URL, json=registration)

    response = await client.post(REGISTER_URL, json=registration)

    assert response.status_code == 400
    assert response.json() == {
        "token": "",
        "refresh_token": "",
        "success": False,
        "errors": ["User with this email already exists."],
    }


@pytest.mark.asyncio
async def test_weak_password_lists_every_reason(client, registration):
    registration["password"] = "weakpass"

    response = await client.post(REGISTER_URL, json=registration)

    assert response.status_code == 400
    assert response.json()["errors"] == [
        "Password must contain at least one uppercase letter.",
        "Password must contain at least one digit.",
        "Password must contain at least one special character.",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("missing", ["email", "password", "first_name", "last_name"])
async def test_missing_field_is_rejected_by_schema(client, registration, missing):
    registration.pop(missing)

    response = await client.post(REGISTER_URL, json=registration)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_malformed_email_is_rejected_by_schema(client, registration):
    registration["email"] = "not-an-email"

    response = await client.post(REGISTER_URL, json=registration)

    assert response.status_code == 422


@pytest.mark.asyncio
async def test_correlation_id_is_echoed(client, registration):
    response = await client.post(
        REGISTER_URL, json=registration, headers={"X-Correlation-ID": "req-123"}
    )

    assert response.headers["X-Correlation-ID"] == "req-123"


@pytest.mark.asyncio
async def test_correlation_id_is_generated_when_absent(client, registration):
    response = await client.post(REGISTER_URL, json=registration)

    assert response.headers["X-Correlation-ID"]
