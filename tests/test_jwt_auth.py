import jwt
import pytest
from app.utils import create_access_token, create_refresh_token, decode_token, TokenError


def test_access_token_encodes_identity(app):
    token = create_access_token(7, "merchant", "9876543210", merchant_id=3)
    payload = decode_token(token)
    assert payload["user_id"] == 7
    assert payload["sub"] == "7"
    assert payload["role"] == "merchant"
    assert payload["phone"] == "9876543210"
    assert payload["merchant_id"] == 3


def test_refresh_token_type_enforced(app):
    token = create_refresh_token(7)
    assert decode_token(token, expected_type="refresh")["user_id"] == 7
    with pytest.raises(TokenError):
        decode_token(token)


def test_foreign_signature_rejected(app):
    forged = jwt.encode({"sub": "1", "type": "access"}, "not-our-secret", algorithm="HS256")
    with pytest.raises(TokenError):
        decode_token(forged)


def test_token_for_deleted_identity_is_401(client, app):
    token = create_access_token(999, "admin", "9000000000")
    resp = client.get("/api/v1/admin/stats", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 401
