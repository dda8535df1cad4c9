import json

import pytest

from conftest import TOKEN
from trade_journal.client import AuthError, RequestFailed, ValidationError
from trade_journal.schemas import LoginCredentials, User
from trade_journal.session import (FileSessionStorage, InMemorySessionStorage,
                                   Navigator, Route, SessionStore)


@pytest.fixture
def empty_session(client, navigator):
    storage = InMemorySessionStorage()
    store = SessionStore(client, storage, navigator)
    return store, storage


def test_load_restores_persisted_user(session):
    assert session.loading is False
    assert session.user == User(username="alice", token=TOKEN)
    assert session.is_authenticated


def test_not_authenticated_before_load(client, storage, navigator):
    store = SessionStore(client, storage, navigator)
    assert store.loading is True
    assert not store.is_authenticated


async def test_login_persists_user_and_goes_home(empty_session, navigator):
    store, storage = empty_session
    store.load()
    navigator.location = Route.LOGIN
    user = await store.login(LoginCredentials(username="alice", password="secret"))
    assert store.user == user
    assert storage.load() == user
    assert navigator.location is Route.HOME


async def test_failed_login_leaves_state_untouched(empty_session, navigator):
    store, storage = empty_session
    store.load()
    navigator.location = Route.LOGIN
    with pytest.raises(RequestFailed):
        await store.login(LoginCredentials(username="alice", password="nope"))
    assert store.user is None
    assert storage.load() is None
    assert navigator.location is Route.LOGIN


async def test_register_signs_in(empty_session, api):
    store, storage = empty_session
    user = await store.register(
        LoginCredentials(username="bob", password="pw"), confirm_password="pw"
    )
    assert user.username == "bob"
    assert storage.load() == user
    assert "bob" in api.users


async def test_register_password_mismatch_fails_before_any_request(empty_session, api):
    store, _ = empty_session
    with pytest.raises(ValidationError, match="Passwords do not match"):
        await store.register(
            LoginCredentials(username="bob", password="pw"), confirm_password="pw2"
        )
    assert api.requests == []


def test_logout_clears_session_and_goes_to_login(session, storage, navigator):
    session.logout()
    assert session.user is None
    assert storage.load() is None
    assert navigator.location is Route.LOGIN


async def test_401_clears_session_once_and_navigates_to_login(session, storage, client, api, navigator):
    routes = []
    navigator.add_listener(routes.append)
    api.fail[("GET", "/trades")] = (401, "expired")
    with pytest.raises(AuthError):
        await client.list_trades()
    assert storage.clear_count == 1
    assert session.user is None
    assert routes == [Route.LOGIN]


def test_navigator_notifies_listeners():
    navigator = Navigator()
    seen = []
    navigator.add_listener(seen.append)
    navigator.push(Route.LOGIN)
    navigator.push(Route.HOME)
    assert seen == [Route.LOGIN, Route.HOME]
    assert navigator.location is Route.HOME


def test_file_storage_round_trip(tmp_path):
    storage = FileSessionStorage(tmp_path / "nested" / "session.json")
    assert storage.load() is None
    user = User(username="alice", token="t")
    storage.save(user)
    assert json.loads(storage.path.read_text()) == {"user": {"username": "alice", "token": "t"}}
    assert storage.load() == user
    storage.clear()
    assert storage.load() is None
    storage.clear()


@pytest.mark.parametrize("content", ["not json", "[1, 2]", '{"user": {"username": "x"}}', "{}"])
def test_file_storage_ignores_malformed_content(tmp_path, content):
    path = tmp_path / "session.json"
    path.write_text(content)
    assert FileSessionStorage(path).load() is None


def test_invalidate_after_sign_out_does_nothing(session, storage, navigator):
    routes = []
    navigator.add_listener(routes.append)
    session.invalidate()
    session.invalidate()
    assert storage.clear_count == 1
    assert routes == [Route.LOGIN]
