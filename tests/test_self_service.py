from models import db
from models.merchant import Merchant
from models.rider import DeliveryBoy
from models.user import User
from app.version import API_PREFIX


def _merchant_for(user):
    merchant = Merchant(
        user_id=user.id, store_name="Chai Stop", owner_name="Imran", phone=user.phone,
        city="Hyderabad", category="cafe", fssai="77777777777777", status="inactive",
    )
    db.session.add(merchant)
    db.session.commit()
    return merchant


def test_merchant_me(client, make_identity):
    user, headers = make_identity("9700000001", role="merchant")
    _merchant_for(user)
    resp = client.get(f"{API_PREFIX}/merchant/me", headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["store_name"] == "Chai Stop"


def test_merchant_me_without_profile_is_404(client, make_identity):
    _, headers = make_identity("9700000002", role="merchant")
    assert client.get(f"{API_PREFIX}/merchant/me", headers=headers).status_code == 404


def test_store_toggle_independent_of_status(client, make_identity):
    user, headers = make_identity("9700000003", role="merchant")
    merchant = _merchant_for(user)
    resp = client.patch(f"{API_PREFIX}/merchant/me/store-status", json={"store_status": "open"}, headers=headers)
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "open"
    refreshed = db.session.get(Merchant, merchant.id)
    assert refreshed.is_open is True
    assert refreshed.status == "inactive"

    resp = client.patch(f"{API_PREFIX}/merchant/me/store-status", json={"is_open": False}, headers=headers)
    assert resp.get_json()["status"] == "closed"


def test_self_endpoints_reject_other_roles(client, make_identity):
    _, rider_headers = make_identity("9700000004", role="rider")
    _, merchant_headers = make_identity("9700000005", role="merchant")
    assert client.get(f"{API_PREFIX}/merchant/me", headers=rider_headers).status_code == 403
    assert client.get(f"{API_PREFIX}/delivery/me", headers=merchant_headers).status_code == 403
    assert client.get(f"{API_PREFIX}/delivery/me").status_code == 401


def test_rider_me_and_online_toggle(client, make_identity):
    user, headers = make_identity("9700000006", role="rider", name="Sunil")
    db.session.add(DeliveryBoy(user_id=user.id, area="Whitefield"))
    db.session.commit()

    data = client.get(f"{API_PREFIX}/delivery/me", headers=headers).get_json()["data"]
    assert data["name"] == "Sunil"
    assert data["online_status"] == "offline"

    resp = client.patch(f"{API_PREFIX}/delivery/me/online-status", json={"online_status": "online"}, headers=headers)
    assert resp.get_json()["online_status"] == "online"
    resp = client.patch(f"{API_PREFIX}/delivery/me/online-status", json={"online_status": "later"}, headers=headers)
    assert resp.get_json()["online_status"] == "offline"


def test_profile_get_returns_own_identity(client, make_identity):
    user, headers = make_identity("9700000007", name="Meera")
    resp = client.get(f"{API_PREFIX}/profile", headers=headers)
    assert resp.status_code == 200
    data = resp.get_json()["data"]
    assert data["id"] == user.id
    assert data["name"] == "Meera"
    assert data["role"] == "customer"


def test_profile_patch_applies_only_present_fields(client, make_identity):
    user, headers = make_identity("9700000008", name="Old Name")
    user.address = "Flat 2, Indiranagar"
    db.session.commit()

    resp = client.patch(f"{API_PREFIX}/profile", json={"name": "New Name"}, headers=headers)
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["updated"] == ["name"]
    assert body["data"]["name"] == "New Name"
    refreshed = db.session.get(User, user.id)
    assert refreshed.name == "New Name"
    assert refreshed.address == "Flat 2, Indiranagar"
    assert refreshed.role == "customer"


def test_profile_patch_ignores_blank_and_admin_owned_fields(client, make_identity):
    user, headers = make_identity("9700000009", name="Kept")
    resp = client.patch(
        f"{API_PREFIX}/profile",
        json={"name": "  ", "role": "admin", "status": "suspended", "profile_image": "avatars/9700000009.png"},
        headers=headers,
    )
    assert resp.status_code == 200
    assert resp.get_json()["updated"] == ["profile_image"]
    refreshed = db.session.get(User, user.id)
    assert refreshed.name == "Kept"
    assert refreshed.role == "customer"
    assert refreshed.status == "active"
    assert refreshed.profile_image == "avatars/9700000009.png"


def test_profile_rejects_overlong_name(client, make_identity):
    _, headers = make_identity("9700000010")
    resp = client.patch(f"{API_PREFIX}/profile", json={"name": "x" * 121}, headers=headers)
    assert resp.status_code == 400


def test_profile_requires_active_identity(client, make_identity, admin_headers):
    _, inactive_headers = make_identity("9700000011", status="inactive")
    assert client.get(f"{API_PREFIX}/profile").status_code == 401
    assert client.get(f"{API_PREFIX}/profile", headers=inactive_headers).status_code == 403
    # admins read their own identity the same way
    resp = client.get(f"{API_PREFIX}/profile", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["role"] == "admin"
