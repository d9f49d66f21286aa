"""
Tests for the session gate in front of protected routes.
"""

import pytest

from auth.tokens import TokenCodec

UNAUTHORIZED_BODY = {
    "status": 401,
    "error": "You are not authorized to access this resource",
}


class TestSessionGate:
    def test_valid_cookie_passes_identity(self, client, codec):
        token = codec.sign({"user_id": "u-1", "email": "a@x.com"})

        response = client.post("/test/login", cookies={"userToken": token})

        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "User correctly connected"
        assert body["data"] == {"user_id": "u-1", "email": "a@x.com"}

    def test_no_cookie_header(self, client):
        response = client.post("/test/login")
        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED_BODY

    def test_other_cookie_only(self, client, codec):
        token = codec.sign({"user_id": "u-1"})
        response = client.post("/test/login", cookies={"sessionid": token})
        assert response.status_code == 401

    def test_empty_token(self, client):
        response = client.post("/test/login", headers={"Cookie": "userToken="})
        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED_BODY

    def test_session_cookie_among_others(self, client, codec):
        token = codec.sign({"user_id": "u-1"})
        response = client.post(
            "/test/login",
            headers={"Cookie": f"theme=dark; userToken={token}; lang=en"},
        )
        assert response.status_code == 200

    @pytest.mark.parametrize(
        "make_token",
        [
            lambda codec: codec.sign({"user_id": "u-1"}, expires_in=-5),
            lambda codec: TokenCodec(
                secret="a-different-secret-that-is-long-enough"
            ).sign({"user_id": "u-1"}),
            lambda codec: "garbage",
        ],
        ids=["expired", "foreign-signature", "malformed"],
    )
    def test_rejections_are_indistinguishable(self, client, codec, make_token):
        response = client.post(
            "/test/login", cookies={"userToken": make_token(codec)}
        )
        assert response.status_code == 401
        assert response.json() == UNAUTHORIZED_BODY

    def test_rejection_reason_is_logged(self, client, codec, caplog):
        token = codec.sign({"user_id": "u-1"}, expires_in=-5)
        with caplog.at_level("WARNING", logger="auth.dependencies"):
            client.post("/test/login", cookies={"userToken": token})
        assert "TokenExpired" in caplog.text
