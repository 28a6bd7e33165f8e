import pytest

from orea.controllers.session import SessionController
from orea.router import AppRouter, decide
from orea.state import SessionState

PATHS = ["/", "/login", "/dashboard", "/users", "/users/3", ""]


@pytest.mark.parametrize("path", PATHS)
def test_loading_session_never_redirects(path):
    assert decide(SessionState.loading(), path) is None


@pytest.mark.parametrize("path", [p for p in PATHS if p != "/login"])
def test_anonymous_session_is_sent_to_login(path):
    assert decide(SessionState.anonymous(), path) == "/login"


def test_anonymous_session_may_open_login():
    assert decide(SessionState.anonymous(), "/login") is None


def test_authenticated_session_skips_login():
    session = SessionState.authenticated("alice")

    assert decide(session, "/login") == "/dashboard"
    assert decide(session, "/dashboard") is None
    assert decide(session, "/users") is None


def test_custom_paths():
    session = SessionState.authenticated("alice")

    assert decide(session, "/signin", login_path="/signin", home_path="/") == "/"
    assert decide(SessionState.anonymous(), "/", login_path="/signin") == "/signin"


@pytest.mark.parametrize("session", [SessionState.loading(), SessionState.anonymous(), SessionState.authenticated("a")])
@pytest.mark.parametrize("path", PATHS)
def test_decide_is_referentially_transparent(session, path):
    first = decide(session, path)

    assert all(decide(session, path) == first for _ in range(3))
    assert session == SessionState(session.is_authenticated, session.username, session.is_loading)


def test_session_state_rejects_authenticated_without_username():
    with pytest.raises(ValueError):
        SessionState(is_authenticated=True)


@pytest.mark.asyncio
async def test_router_waits_for_restore_then_redirects(store):
    session = SessionController(store)
    router = AppRouter(session)

    assert router.location == "/"

    await session.restore()

    assert router.location == "/login"


@pytest.mark.asyncio
async def test_router_follows_login_and_logout(store):
    session = SessionController(store)
    router = AppRouter(session)
    await session.restore()
    locations = []
    router.subscribe(lambda previous, current: locations.append(current))

    await session.login("alice", "x")
    assert router.location == "/dashboard"

    assert router.go("/users") == "/users"

    await session.logout()
    assert router.location == "/login"
    assert locations == ["/dashboard", "/users", "/login"]


@pytest.mark.asyncio
async def test_router_ignores_session_changes_that_keep_access(store):
    session = SessionController(store)
    router = AppRouter(session)
    await session.restore()
    await session.login("alice", "x")
    router.go("/users")

    await session.login("bob", "y")

    assert router.location == "/users"


@pytest.mark.asyncio
async def test_disposed_router_stops_listening(store):
    session = SessionController(store)
    router = AppRouter(session)
    router.dispose()

    await session.restore()

    assert router.location == "/"
