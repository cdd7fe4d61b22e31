"""Tests for the developer storage."""

import pytest
from unittest.mock import AsyncMock

from developers import Developer, DeveloperAlreadyExistsError
from edge import ClientErrorException, EdgeDeveloper, ServerErrorException

DEVELOPER_ID = "6d8f7c3e-2f6b-4a1e-9c5d-0a1b2c3d4e5f"


@pytest.mark.asyncio
async def test_load_fetches_and_caches(storage, mock_edge_client, edge_developer, entity_cache):
    mock_edge_client.get_developer.return_value = edge_developer

    developer = await storage.load("jane.doe@example.com")

    assert developer.id == "jane.doe@example.com"
    assert entity_cache.has(DEVELOPER_ID)
    assert entity_cache.has("jane.doe@example.com")

    # Served from the static cache, by either identity form.
    assert await storage.load(DEVELOPER_ID) is developer
    mock_edge_client.get_developer.assert_awaited_once()


@pytest.mark.asyncio
async def test_load_uses_shared_cache(storage, mock_edge_client, edge_developer, entity_cache):
    await entity_cache.save_entities([edge_developer])

    developer = await storage.load(DEVELOPER_ID)

    assert developer.email == "jane.doe@example.com"
    mock_edge_client.get_developer.assert_not_awaited()


@pytest.mark.asyncio
async def test_load_missing_developer_returns_none(storage, mock_edge_client):
    mock_edge_client.get_developer.side_effect = ClientErrorException(
        "Developer does not exist",
        code=Developer.ERROR_CODE_DEVELOPER_DOES_NOT_EXIST,
        status_code=404,
    )

    assert await storage.load("ghost@example.com") is None


@pytest.mark.asyncio
async def test_load_propagates_server_errors(storage, mock_edge_client):
    mock_edge_client.get_developer.side_effect = ServerErrorException("boom", status_code=500)

    with pytest.raises(ServerErrorException):
        await storage.load("jane.doe@example.com")


@pytest.mark.asyncio
async def test_load_multiple_lists_all_developers(storage, mock_edge_client, edge_developer, entity_cache):
    other = EdgeDeveloper(developer_id="other-id", email="john@example.com", status="inactive")
    mock_edge_client.list_developers.return_value = [edge_developer, other]

    developers = await storage.load_multiple()

    assert [d.id for d in developers] == ["jane.doe@example.com", "john@example.com"]
    assert entity_cache.has("other-id")


@pytest.mark.asyncio
async def test_load_multiple_skips_missing_ids(storage, mock_edge_client, edge_developer):
    mock_edge_client.get_developer.side_effect = [
        edge_developer,
        ClientErrorException("missing", status_code=404),
    ]

    developers = await storage.load_multiple(["jane.doe@example.com", "ghost@example.com"])

    assert [d.id for d in developers] == ["jane.doe@example.com"]


@pytest.mark.asyncio
async def test_save_creates_new_developer(storage, mock_edge_client, edge_developer, account_store, jane_account):
    mock_edge_client.create_developer.return_value = edge_developer
    developer = storage.create({
        "email": "jane.doe@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "user_name": "janedoe",
    })

    saved = await storage.save(developer)

    assert saved.developer_id == DEVELOPER_ID
    assert saved.id == "jane.doe@example.com"
    mock_edge_client.set_developer_status.assert_not_awaited()
    assert account_store.load(jane_account.id).apigee_edge_developer_id == DEVELOPER_ID


@pytest.mark.asyncio
async def test_save_new_inactive_developer_sets_status(storage, mock_edge_client, edge_developer):
    mock_edge_client.create_developer.return_value = edge_developer
    developer = storage.create({"email": "jane.doe@example.com", "status": "inactive"})

    saved = await storage.save(developer)

    mock_edge_client.set_developer_status.assert_awaited_once_with("jane.doe@example.com", "inactive")
    assert saved.status == "inactive"


@pytest.mark.asyncio
async def test_save_existing_developer_raises_conflict(storage, mock_edge_client):
    mock_edge_client.create_developer.side_effect = ClientErrorException(
        "Developer already exists",
        code=Developer.ERROR_CODE_DEVELOPER_ALREADY_EXISTS,
        status_code=409,
    )
    developer = storage.create({"email": "jane.doe@example.com"})

    with pytest.raises(DeveloperAlreadyExistsError) as exc_info:
        await storage.save(developer)
    assert exc_info.value.email == "jane.doe@example.com"


@pytest.mark.asyncio
async def test_save_updates_by_original_email(storage, mock_edge_client, edge_developer, sample_developer_data, entity_cache):
    mock_edge_client.get_developer.return_value = edge_developer
    developer = await storage.load("jane.doe@example.com")
    developer.email = "jane@example.org"
    mock_edge_client.update_developer.return_value = EdgeDeveloper.model_validate(
        {**sample_developer_data, "email": "jane@example.org"}
    )

    saved = await storage.save(developer)

    args = mock_edge_client.update_developer.await_args.args
    assert args[0] == "jane.doe@example.com"
    assert saved.id == "jane@example.org"
    assert not entity_cache.has("jane.doe@example.com")
    assert entity_cache.has("jane@example.org")
    assert await storage.load("jane@example.org") is saved


@pytest.mark.asyncio
async def test_save_applies_status_change(storage, mock_edge_client, edge_developer, sample_developer_data):
    mock_edge_client.get_developer.return_value = edge_developer
    developer = await storage.load(DEVELOPER_ID)
    developer.status = "inactive"
    mock_edge_client.update_developer.return_value = EdgeDeveloper.model_validate(sample_developer_data)

    saved = await storage.save(developer)

    mock_edge_client.set_developer_status.assert_awaited_once_with("jane.doe@example.com", "inactive")
    assert saved.status == "inactive"


@pytest.mark.asyncio
async def test_delete_invalidates_both_identity_forms(storage, mock_edge_client, edge_developer, entity_cache):
    """Test that deleting by email also drops entries keyed by developer id."""
    other = EdgeDeveloper(developer_id="other-id", email="john@example.com", status="active")
    mock_edge_client.list_developers.return_value = [edge_developer, other]
    developers = await storage.load_multiple()

    await storage.delete(developers)

    for key in ("jane.doe@example.com", DEVELOPER_ID, "john@example.com", "other-id"):
        assert not entity_cache.has(key)
    assert await storage.entity_cache.get_entities([DEVELOPER_ID, "other-id"]) == []
    assert [call.args[0] for call in mock_edge_client.delete_developer.await_args_list] == [
        "jane.doe@example.com", "john@example.com"
    ]


@pytest.mark.asyncio
async def test_delete_resets_cache_by_developer_id_after_default_reset(storage, mock_edge_client, edge_developer):
    mock_edge_client.get_developer.return_value = edge_developer
    developer = await storage.load("jane.doe@example.com")
    storage.reset_cache = AsyncMock()

    await storage.delete([developer])

    calls = [call.args[0] for call in storage.reset_cache.await_args_list]
    assert calls == [["jane.doe@example.com"], [DEVELOPER_ID]]


@pytest.mark.asyncio
async def test_cache_reset_failure_does_not_abort_delete(storage, mock_edge_client, edge_developer):
    mock_edge_client.get_developer.return_value = edge_developer
    developer = await storage.load("jane.doe@example.com")
    storage.reset_cache = AsyncMock(side_effect=[None, RuntimeError("cache backend down")])

    await storage.delete([developer])

    mock_edge_client.delete_developer.assert_awaited_once_with("jane.doe@example.com")


@pytest.mark.asyncio
async def test_reset_cache_without_ids_clears_everything(storage, mock_edge_client, edge_developer, entity_cache):
    mock_edge_client.get_developer.return_value = edge_developer
    await storage.load("jane.doe@example.com")

    await storage.reset_cache()

    assert entity_cache.keys == set()
    await storage.load("jane.doe@example.com")
    assert mock_edge_client.get_developer.await_count == 2


@pytest.mark.asyncio
async def test_failed_delete_still_invalidates_deleted_developers(storage, mock_edge_client, edge_developer, entity_cache):
    """Test that developers deleted before a failing call leave no cache entries."""
    other = EdgeDeveloper(developer_id="other-id", email="john@example.com", status="active")
    mock_edge_client.list_developers.return_value = [edge_developer, other]
    developers = await storage.load_multiple()
    mock_edge_client.delete_developer.side_effect = [
        edge_developer,
        ServerErrorException("boom", status_code=500),
    ]

    with pytest.raises(ServerErrorException):
        await storage.delete(developers)

    assert not entity_cache.has("jane.doe@example.com")
    assert not entity_cache.has(DEVELOPER_ID)
    assert entity_cache.has("john@example.com")
    assert entity_cache.has("other-id")

    mock_edge_client.get_developer.side_effect = ClientErrorException("missing", status_code=404)
    assert await storage.load("jane.doe@example.com") is None
    assert await storage.load(DEVELOPER_ID) is None


@pytest.mark.asyncio
async def test_failed_status_change_keeps_created_developer(storage, mock_edge_client, edge_developer, sample_developer_data, entity_cache, account_store, jane_account):
    """Test that a developer created on Edge is not treated as new when the status call fails."""
    mock_edge_client.create_developer.return_value = edge_developer
    mock_edge_client.set_developer_status.side_effect = ServerErrorException("boom", status_code=500)
    developer = storage.create({"email": "jane.doe@example.com", "status": "inactive"})

    with pytest.raises(ServerErrorException):
        await storage.save(developer)

    assert not developer.is_new()
    assert developer.developer_id == DEVELOPER_ID
    assert developer.status == "active"
    assert entity_cache.has(DEVELOPER_ID)
    assert account_store.load(jane_account.id).apigee_edge_developer_id == DEVELOPER_ID
    assert await storage.load(DEVELOPER_ID) is developer

    # Retrying updates the existing developer instead of creating it again.
    mock_edge_client.set_developer_status.side_effect = None
    mock_edge_client.update_developer.return_value = EdgeDeveloper.model_validate(sample_developer_data)
    developer.status = "inactive"

    saved = await storage.save(developer)

    assert mock_edge_client.create_developer.await_count == 1
    mock_edge_client.update_developer.assert_awaited_once()
    assert saved.status == "inactive"
