"""
Tests for the session/auth handshake.
"""

import pytest

from frankly.auth import IdentityToken, KeySecret, SessionCookie, SessionToken
from frankly.exceptions import InvalidCredential, InvalidResponse, NotAuthenticated, RequestError
from frankly.identity import decode_identity_token
from frankly.session import Session, fetch_nonce, login, open_session
from frankly.transport import Dispatcher

from conftest import APP_KEY, APP_SECRET, BASE_URL, call_kwargs, make_response


@pytest.fixture
def dispatcher(http):
    return Dispatcher(BASE_URL, http=http)


class TestFetchNonce:

    def test_json_string(self, dispatcher, http):
        http.request.return_value = make_response(body="abc-123")

        assert fetch_nonce(dispatcher) == "abc-123"

        method, url, _ = call_kwargs(http)
        assert (method, url) == ("GET", BASE_URL + "auth/nonce")

    def test_bare_text(self, dispatcher, http):
        http.request.return_value = make_response(raw=b"abc-123\n")

        assert fetch_nonce(dispatcher) == "abc-123"

    def test_empty_nonce(self, dispatcher, http):
        http.request.return_value = make_response(body="")

        with pytest.raises(InvalidResponse):
            fetch_nonce(dispatcher)


class TestLogin:

    def test_session_token(self, dispatcher, http):
        http.request.return_value = make_response(
            body={"token": "sess", "app_id": 3, "user_id": 9, "role": "admin", "expiry": 123}
        )

        state = login(dispatcher, "identity")

        assert state.credential == SessionToken("sess")
        assert isinstance(state.session, Session)
        assert state.session.app_id == 3
        assert state.session.role == "admin"

        method, url, kwargs = call_kwargs(http)
        assert (method, url) == ("POST", BASE_URL + "auth")
        assert kwargs["params"] == {"identity_token": "identity"}

    def test_cookie_when_no_token(self, dispatcher, http):
        http.request.return_value = make_response(
            body={"app_id": 3, "role": "admin"}, cookies={"app-session": "cookie-value"}
        )

        state = login(dispatcher, "identity")

        assert state.credential == SessionCookie({"app-session": "cookie-value"})

    def test_no_credential_in_response(self, dispatcher, http):
        http.request.return_value = make_response(body={"role": "admin"})

        with pytest.raises(NotAuthenticated):
            login(dispatcher, "identity")

    def test_rejected(self, dispatcher, http):
        http.request.return_value = make_response(401, body={"error": "bad token"})

        with pytest.raises(RequestError) as exc:
            login(dispatcher, "identity")
        assert exc.value.status_code == 401

    def test_mistyped_token(self, dispatcher, http):
        http.request.return_value = make_response(body={"token": 12345})

        with pytest.raises(InvalidResponse) as exc:
            login(dispatcher, "identity")
        assert exc.value.body == '{"token": 12345}'

    def test_extra_session_fields_kept(self, dispatcher, http):
        http.request.return_value = make_response(body={"token": "t", "platform": "web"})

        assert login(dispatcher, "identity").session.platform == "web"


class TestOpenSession:

    def test_key_secret_signs_admin_token(self, dispatcher, http):
        http.request.side_effect = [
            make_response(body="nonce-42"),
            make_response(body={"token": "sess"}),
        ]

        state = open_session(dispatcher, KeySecret(APP_KEY, APP_SECRET))

        assert state.credential == SessionToken("sess")

        _, _, nonce_kwargs = call_kwargs(http, 0)
        assert nonce_kwargs["headers"]["frankly-app-key"] == APP_KEY

        _, _, login_kwargs = call_kwargs(http, 1)
        claims = decode_identity_token(login_kwargs["params"]["identity_token"], APP_SECRET)
        assert claims.app_key == APP_KEY
        assert claims.nonce == "nonce-42"
        assert claims.role == "admin"
        assert claims.user_id is None

    def test_identity_token_skips_signing(self, dispatcher, http):
        http.request.return_value = make_response(body={"token": "sess"})

        open_session(dispatcher, IdentityToken("pre-signed"))

        assert http.request.call_count == 1
        _, _, kwargs = call_kwargs(http)
        assert kwargs["params"] == {"identity_token": "pre-signed"}
        assert "frankly-app-key" not in kwargs["headers"]

    @pytest.mark.parametrize("auth", [KeySecret(APP_KEY, ""), KeySecret("", APP_SECRET), IdentityToken("")])
    def test_empty_inputs_rejected_before_any_request(self, dispatcher, http, auth):
        with pytest.raises(InvalidCredential):
            open_session(dispatcher, auth)

        http.request.assert_not_called()

    def test_unknown_auth(self, dispatcher):
        with pytest.raises(TypeError):
            open_session(dispatcher, SessionToken("t"))
