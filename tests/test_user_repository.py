import json

import httpx
import pytest
import pytest_asyncio

from orea.errors import ApiError, ErrorKind
from orea.models import User
from orea.services.api_client import ApiClient
from orea.services.user_repository import UserRepository, filter_users


@pytest_asyncio.fixture
async def repository(config, fake_api):
    client = ApiClient(config, transport=httpx.MockTransport(fake_api))
    yield UserRepository(client)
    await client.aclose()


def _repository_for(config, handler) -> UserRepository:
    return UserRepository(ApiClient(config, transport=httpx.MockTransport(handler)))


@pytest.mark.asyncio
async def test_list_users_decodes_records(repository):
    users = await repository.list_users()

    assert [user.id for user in users] == [1, 2]
    assert users[1].name == "Ervin Howell"


@pytest.mark.asyncio
async def test_get_user_and_missing_user(repository):
    assert (await repository.get_user(2)).name == "Ervin Howell"

    with pytest.raises(ApiError) as info:
        await repository.get_user(99)
    assert info.value.kind is ErrorKind.NOT_FOUND
    assert info.value.status_code == 404


@pytest.mark.asyncio
async def test_create_user_ignores_client_id(repository, fake_api, user_payload):
    draft = User.from_json(user_payload(500, "Clementine Bauch"))

    created = await repository.create_user(draft)

    sent = json.loads(fake_api.requests[-1].content)
    assert "id" not in sent
    assert created.id == 3
    assert created.name == "Clementine Bauch"


@pytest.mark.asyncio
async def test_update_user_sends_path_id(repository, fake_api):
    original = await repository.get_user(1)
    changed = User(
        name="Leanne Renamed",
        email=original.email,
        phone=original.phone,
        website=original.website,
        company=original.company,
        address=original.address,
    )

    updated = await repository.update_user(1, changed)

    request = fake_api.requests[-1]
    assert request.method == "PUT"
    assert request.url.path == "/users/1"
    assert json.loads(request.content)["id"] == 1
    assert updated == changed.with_id(1)


@pytest.mark.asyncio
async def test_delete_user_twice_fails_the_second_time(repository):
    await repository.delete_user(1)

    with pytest.raises(ApiError) as info:
        await repository.delete_user(1)
    assert info.value.kind is ErrorKind.NOT_FOUND


@pytest.mark.asyncio
async def test_transport_errors_pass_through_unchanged(config):
    def handler(request: httpx.Request):
        raise httpx.ConnectError("refused", request=request)

    repository = _repository_for(config, handler)
    with pytest.raises(ApiError) as info:
        await repository.list_users()

    assert info.value.kind is ErrorKind.NETWORK


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(200, text="<html>oops</html>"),
        httpx.Response(200, json={"users": []}),
        httpx.Response(200, json=[{"id": 1}]),
    ],
)
async def test_decode_failures_are_reported_as_unknown(config, response):
    repository = _repository_for(config, lambda request: response)

    with pytest.raises(ApiError) as info:
        await repository.list_users()

    assert info.value.kind is ErrorKind.UNKNOWN
    assert info.value.message.startswith("Réponse invalide")


@pytest.mark.asyncio
async def test_search_users_matches_name_email_and_company(repository):
    assert [u.id for u in await repository.search_users("ERVIN")] == [2]
    assert [u.id for u in await repository.search_users("romaguera")] == [1, 2]
    assert await repository.search_users("nobody") == []


def test_filter_users_with_empty_query_returns_everything(user_payload):
    users = [User.from_json(user_payload(1)), User.from_json(user_payload(2, "Ervin Howell"))]

    assert filter_users(users, "") == users
    assert filter_users(users, "leanne@") == [users[0]]
