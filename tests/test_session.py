from planner.models import UserPublic
from planner.session import UserSession


USER = UserPublic(id="u1", email="learner@example.com")


def test_sign_in_and_out_notify_subscribers():
    session = UserSession()
    seen = []
    session.subscribe(seen.append)

    assert not session.is_authenticated
    session.sign_in(USER, "tok")
    assert session.is_authenticated
    assert session.user_id == "u1"
    assert session.token == "tok"

    session.sign_out()
    assert session.user is None
    assert seen == [USER, None]


def test_sign_out_when_signed_out_is_silent():
    session = UserSession()
    seen = []
    session.subscribe(seen.append)
    session.sign_out()
    assert seen == []


def test_unsubscribe_stops_notifications():
    session = UserSession()
    seen = []
    unsubscribe = session.subscribe(seen.append)
    unsubscribe()
    unsubscribe()  # second call is a no-op
    session.sign_in(USER, "tok")
    assert seen == []


def test_failing_listener_does_not_block_others():
    session = UserSession()
    seen = []

    def broken(_user):
        raise RuntimeError("boom")

    session.subscribe(broken)
    session.subscribe(seen.append)
    session.sign_in(USER, "tok")
    assert seen == [USER]


def test_sessions_are_independent():
    a, b = UserSession(), UserSession()
    a.sign_in(USER, "tok")
    assert b.user is None
