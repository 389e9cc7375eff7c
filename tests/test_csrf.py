from cartform.core.csrf import CsrfTokenManager, build_csrf_manager
from cartform.core.config import Settings


def _manager(enabled=True):
    return CsrfTokenManager(secret="s3cret", cookie_name="csrftoken", enabled=enabled)


def test_token_round_trip():
    m = _manager()
    cookie = m.new_cookie_value()
    token = m.token_for("add_to_cart", cookie)
    assert m.is_valid("add_to_cart", cookie, token)


def test_token_is_bound_to_cookie_and_form():
    m = _manager()
    cookie = m.new_cookie_value()
    token = m.token_for("add_to_cart", cookie)
    assert not m.is_valid("add_to_cart", m.new_cookie_value(), token)
    assert not m.is_valid("other_form", cookie, token)


def test_token_depends_on_secret():
    cookie = "abc"
    other = CsrfTokenManager(secret="different", cookie_name="csrftoken")
    assert other.token_for("add_to_cart", cookie) != _manager().token_for("add_to_cart", cookie)


def test_missing_cookie_or_token_fails():
    m = _manager()
    assert not m.is_valid("add_to_cart", None, "deadbeef")
    assert not m.is_valid("add_to_cart", "abc", None)
    assert not m.is_valid("add_to_cart", "abc", "")


def test_disabled_manager_accepts_anything():
    assert _manager(enabled=False).is_valid("add_to_cart", None, None)


def test_build_from_settings():
    m = build_csrf_manager(Settings(SECRET_KEY="k", CSRF_COOKIE_NAME="xsrf", CSRF_ENABLED=False))
    assert m.cookie_name == "xsrf"
    assert m.enabled is False


def test_non_ascii_token_fails():
    m = _manager()
    cookie = m.new_cookie_value()
    assert not m.is_valid("add_to_cart", cookie, "é")
    assert not m.is_valid("add_to_cart", cookie, m.token_for("add_to_cart", cookie)[:-1] + "é")
    assert not m.is_valid("add_to_cart", cookie, "\ud800")


def test_non_string_token_fails():
    m = _manager()
    cookie = m.new_cookie_value()
    assert not m.is_valid("add_to_cart", cookie, ["deadbeef"])
    assert not m.is_valid("add_to_cart", cookie, 12345)
