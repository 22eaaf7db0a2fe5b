from models import db
from models.user import User
from models.rider import DeliveryBoy
from app.version import API_PREFIX

BASE = f"{API_PREFIX}/admin/riders"


def _create(client, headers, phone="9811122233", **extra):
    body = {"phone": phone, "name": "Ravi", "vehicle_no": "KA01AB1234", "area": "HSR"}
    body.update(extra)
    return client.post(BASE, json=body, headers=headers)


def _profile(user_id):
    return DeliveryBoy.query.filter_by(user_id=user_id).one()


def test_create_rider_defaults(client, admin_headers):
    resp = _create(client, admin_headers)
    assert resp.status_code == 201
    data = resp.get_json()
    user = db.session.get(User, data["id"])
    assert user.role == "rider"
    profile = _profile(data["id"])
    assert profile.id == data["rider_id"]
    assert profile.approval_status == "pending"
    assert profile.online_status == "offline"
    assert profile.vehicle == "Bike"
    assert profile.vehicle_number == "KA01AB1234"


def test_rider_phone_unique_across_identities(client, admin_headers, make_identity):
    make_identity("9811122233", role="customer")
    users_before = User.query.count()
    resp = _create(client, admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()["field"] == "phone"
    assert User.query.count() == users_before
    assert DeliveryBoy.query.count() == 0


def test_rider_invalid_phone_and_email(client, admin_headers):
    assert _create(client, admin_headers, phone="12345").status_code == 400
    assert _create(client, admin_headers, email="not-an-email").status_code == 400
    assert User.query.filter_by(role="rider").count() == 0


def test_approval_lifecycle(client, admin_headers):
    user_id = _create(client, admin_headers).get_json()["id"]
    url = f"{BASE}/{user_id}/approval"

    body = client.patch(url, json={"approval_status": "approved"}, headers=admin_headers).get_json()
    assert body["approved_at"] is not None
    assert body["rejected_reason"] is None

    body = client.patch(
        url, json={"approval_status": "rejected", "reason": "Blurry licence"}, headers=admin_headers
    ).get_json()
    assert body["rejected_reason"] == "Blurry licence"
    assert body["approved_at"] is None

    body = client.patch(url, json={"approval_status": "pending"}, headers=admin_headers).get_json()
    assert body["approved_at"] is None
    assert body["rejected_reason"] is None
    profile = _profile(user_id)
    assert profile.approval_status == "pending"


def test_invalid_approval_value_rejected(client, admin_headers):
    user_id = _create(client, admin_headers).get_json()["id"]
    resp = client.patch(f"{BASE}/{user_id}/approval", json={"approval_status": "maybe"}, headers=admin_headers)
    assert resp.status_code == 400
    assert _profile(user_id).approval_status == "pending"


def test_soft_delete_keeps_rows(client, admin_headers):
    user_id = _create(client, admin_headers).get_json()["id"]
    client.patch(f"{BASE}/{user_id}/online", json={"online": True}, headers=admin_headers)
    client.patch(f"{BASE}/{user_id}/approval", json={"approval_status": "approved"}, headers=admin_headers)
    users_before = User.query.count()
    riders_before = DeliveryBoy.query.count()

    resp = client.delete(f"{BASE}/{user_id}", headers=admin_headers)
    assert resp.status_code == 200
    assert User.query.count() == users_before
    assert DeliveryBoy.query.count() == riders_before
    assert db.session.get(User, user_id).status == "inactive"
    profile = _profile(user_id)
    assert profile.online_status == "offline"
    assert profile.approval_status == "pending"


def test_profile_patch_applies_only_present_fields(client, admin_headers):
    user_id = _create(client, admin_headers).get_json()["id"]
    resp = client.patch(
        f"{BASE}/{user_id}/profile",
        json={"vehicle": "Scooter", "name": "Ravi Kumar"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert sorted(resp.get_json()["updated"]) == ["name", "vehicle"]
    profile = _profile(user_id)
    assert profile.vehicle == "Scooter"
    assert profile.vehicle_number == "KA01AB1234"
    assert profile.area == "HSR"
    assert db.session.get(User, user_id).name == "Ravi Kumar"


def test_bank_patch(client, admin_headers):
    user_id = _create(client, admin_headers).get_json()["id"]
    resp = client.patch(
        f"{BASE}/{user_id}/bank",
        json={"bank_name": "SBI", "ifsc": "SBIN0000001"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    profile = _profile(user_id)
    assert profile.bank_name == "SBI"
    assert profile.ifsc == "SBIN0000001"
    assert profile.account_no is None


def test_kyc_and_status(client, admin_headers):
    user_id = _create(client, admin_headers).get_json()["id"]
    assert client.patch(f"{BASE}/{user_id}/kyc", json={"kyc_status": "approved"}, headers=admin_headers).status_code == 200
    assert _profile(user_id).kyc_status == "approved"
    assert client.patch(f"{BASE}/{user_id}/kyc", json={"kyc_status": "done"}, headers=admin_headers).status_code == 400

    assert client.patch(f"{BASE}/{user_id}/status", json={"status": "suspended"}, headers=admin_headers).status_code == 200
    assert db.session.get(User, user_id).status == "suspended"


def test_non_rider_identity_is_not_found(client, admin_headers, make_identity):
    customer, _ = make_identity("9000000002", role="customer")
    assert client.get(f"{BASE}/{customer.id}", headers=admin_headers).status_code == 404
    resp = client.patch(f"{BASE}/{customer.id}/online", json={"online": True}, headers=admin_headers)
    assert resp.status_code == 404


def test_pagination_bounds(client, admin_headers):
    for i in range(3):
        _create(client, admin_headers, phone=f"98000000{i:02d}")
    body = client.get(f"{BASE}?pageSize=500", headers=admin_headers).get_json()
    assert body["pageSize"] == 100
    assert len(body["rows"]) <= 100
    assert body["total"] == 3

    body = client.get(f"{BASE}?page=0&pageSize=2", headers=admin_headers).get_json()
    assert body["page"] == 1
    assert len(body["rows"]) == 2
    assert client.get(f"{BASE}?page=-4", headers=admin_headers).get_json()["page"] == 1


def test_list_search_and_filters(client, admin_headers):
    first = _create(client, admin_headers, phone="9800000001", area="Koramangala").get_json()["id"]
    second = _create(client, admin_headers, phone="9800000002", area="BTM").get_json()["id"]
    client.patch(f"{BASE}/{second}/online", json={"online": True}, headers=admin_headers)

    rows = client.get(f"{BASE}?q=koram", headers=admin_headers).get_json()["rows"]
    assert [r["user_id"] for r in rows] == [first]

    rows = client.get(f"{BASE}?online=1", headers=admin_headers).get_json()["rows"]
    assert [r["user_id"] for r in rows] == [second]

    rows = client.get(f"{BASE}?approval=nonsense", headers=admin_headers).get_json()["rows"]
    assert [r["user_id"] for r in rows] == [second, first]
