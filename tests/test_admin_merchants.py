import re
from sqlalchemy.exc import OperationalError
from models import db
from models.user import User
from models.merchant import Merchant
from app.version import API_PREFIX

BASE = f"{API_PREFIX}/admin/merchants"


def merchant_body(**overrides):
    body = {
        "store_name": "Spice Route",
        "owner_name": "Asha Rao",
        "phone": "9876543210",
        "email": "asha@example.com",
        "address": "12 MG Road",
        "city": "Bengaluru",
        "category": "restaurant",
        "gst": "29ABCDE1234F1Z5",
        "fssai": "12345678901234",
    }
    body.update(overrides)
    return body


def _create(client, headers, **overrides):
    return client.post(BASE, json=merchant_body(**overrides), headers=headers)


def test_create_merchant_links_identity_and_code(client, admin_headers):
    resp = _create(client, admin_headers)
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["ok"] is True
    assert re.fullmatch(r"RST-\d{6}", data["merchant_code"])
    assert data["merchant_code"] == f"RST-{data['id']:06d}"

    merchant = db.session.get(Merchant, data["id"])
    assert merchant.user_id == data["user_id"]
    assert merchant.approved_at is None
    user = db.session.get(User, data["user_id"])
    assert user.role == "merchant"
    assert user.phone == "9876543210"
    assert user.name == "Asha Rao"


def test_first_merchant_code_is_padded(client, admin_headers):
    data = _create(client, admin_headers).get_json()
    assert data["merchant_code"] == "RST-000001"


def test_duplicate_phone_conflict_rolls_back(client, admin_headers):
    assert _create(client, admin_headers).status_code == 201
    users_before = User.query.count()
    merchants_before = Merchant.query.count()

    resp = _create(
        client, admin_headers,
        email="other@example.com", gst="29ABCDE1234F2Z5", fssai="99999999999999",
    )
    assert resp.status_code == 409
    body = resp.get_json()
    assert body["ok"] is False
    assert body["field"] == "phone"
    assert User.query.count() == users_before
    assert Merchant.query.count() == merchants_before


def test_conflicts_reported_in_fixed_order(client, admin_headers):
    _create(client, admin_headers)
    # email, gst and fssai all collide; email is reported first
    resp = _create(client, admin_headers, phone="9123456780")
    assert resp.status_code == 409
    assert resp.get_json()["field"] == "email"

    resp = _create(client, admin_headers, phone="9123456780", email="new@example.com")
    assert resp.get_json()["field"] == "gst"

    resp = _create(client, admin_headers, phone="9123456780", email="new@example.com", gst="")
    assert resp.get_json()["field"] == "fssai"


def test_absent_optional_values_never_collide(client, admin_headers):
    assert _create(client, admin_headers, email="", gst="").status_code == 201
    resp = _create(
        client, admin_headers, phone="9123456780", email=None, gst=None, fssai="11111111111111",
    )
    assert resp.status_code == 201


def test_existing_customer_promoted_not_duplicated(client, admin_headers, make_identity):
    customer, _ = make_identity("9876543210", role="customer", name="Original Name")
    users_before = User.query.count()

    resp = _create(client, admin_headers)
    assert resp.status_code == 201
    data = resp.get_json()
    assert data["user_id"] == customer.id
    assert User.query.count() == users_before

    user = db.session.get(User, customer.id)
    assert user.role == "merchant"
    assert user.name == "Original Name"


def test_gst_grammar_checked_before_database(client, admin_headers):
    resp = _create(client, admin_headers, gst="29ABCDE1234F1Y5")
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Validation error"
    assert Merchant.query.count() == 0


def test_missing_required_fields_rejected(client, admin_headers):
    resp = client.post(BASE, json={"store_name": "Only a name"}, headers=admin_headers)
    assert resp.status_code == 400
    fields = {tuple(e["loc"]) for e in resp.get_json()["errors"]}
    assert ("phone",) in fields
    assert ("fssai",) in fields


def test_update_excludes_own_row_from_uniqueness(client, admin_headers):
    data = _create(client, admin_headers).get_json()
    resp = client.put(
        f"{BASE}/{data['id']}",
        json=merchant_body(store_name="Spice Route Express", email="asha.rao@example.com"),
        headers=admin_headers,
    )
    assert resp.status_code == 200
    merchant = db.session.get(Merchant, data["id"])
    assert merchant.store_name == "Spice Route Express"
    # identity contact follows the linked profile
    assert db.session.get(User, data["user_id"]).email == "asha.rao@example.com"


def test_update_conflicts_with_other_merchant(client, admin_headers):
    _create(client, admin_headers)
    other = _create(
        client, admin_headers,
        phone="9123456780", email="b@example.com", gst="29ABCDE1234F2Z5", fssai="22222222222222",
    ).get_json()
    resp = client.put(f"{BASE}/{other['id']}", json=merchant_body(), headers=admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()["field"] == "phone"


def test_update_missing_merchant_is_404(client, admin_headers):
    resp = client.put(f"{BASE}/999", json=merchant_body(), headers=admin_headers)
    assert resp.status_code == 404


def test_status_propagates_to_identity(client, admin_headers):
    data = _create(client, admin_headers).get_json()
    resp = client.patch(f"{BASE}/{data['id']}/status", json={"status": "inactive"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["status"] == "inactive"
    assert db.session.get(Merchant, data["id"]).status == "inactive"
    assert db.session.get(User, data["user_id"]).status == "inactive"


def test_status_sync_falls_back_to_phone_for_unlinked_rows(client, admin_headers, make_identity):
    user, _ = make_identity("9000011111", role="merchant")
    merchant = Merchant(
        store_name="Legacy", owner_name="Old", phone="9000011111", city="Pune",
        category="bakery", fssai="33333333333333", status="active",
    )
    db.session.add(merchant)
    db.session.commit()

    resp = client.patch(f"{BASE}/{merchant.id}/status", json={"status": "inactive"}, headers=admin_headers)
    assert resp.status_code == 200
    assert db.session.get(User, user.id).status == "inactive"
    assert db.session.get(Merchant, merchant.id).user_id == user.id


def test_approval_is_idempotent(client, admin_headers):
    data = _create(client, admin_headers).get_json()
    url = f"{BASE}/{data['id']}/approve"
    first = client.patch(url, json={"approved": True}, headers=admin_headers).get_json()
    second = client.patch(url, json={"approved": True}, headers=admin_headers).get_json()
    assert first["approved_at"] is not None
    assert second["approved_at"] == first["approved_at"]
    assert db.session.get(Merchant, data["id"]).status == "active"


def test_unapprove_clears_timestamp_and_syncs_status(client, admin_headers):
    data = _create(client, admin_headers).get_json()
    url = f"{BASE}/{data['id']}/approve"
    client.patch(url, json={"approved": True}, headers=admin_headers)
    resp = client.patch(url, json={"approved": "false", "status": "inactive"}, headers=admin_headers)
    body = resp.get_json()
    assert body["approved"] is False
    assert body["approved_at"] is None
    assert db.session.get(User, data["user_id"]).status == "inactive"


def test_list_filters_and_paginates(client, admin_headers):
    _create(client, admin_headers)
    _create(
        client, admin_headers,
        store_name="Bake House", phone="9123456780", email="bake@example.com",
        gst=None, fssai="44444444444444", city="Mysuru", category="bakery",
    )
    resp = client.get(f"{BASE}?q=bake", headers=admin_headers)
    body = resp.get_json()
    assert body["total"] == 1
    assert body["rows"][0]["store_name"] == "Bake House"

    # unknown enum values are ignored
    body = client.get(f"{BASE}?status=bogus&pageSize=1", headers=admin_headers).get_json()
    assert body["total"] == 2
    assert body["pageSize"] == 1
    assert len(body["rows"]) == 1
    # newest first
    assert body["rows"][0]["store_name"] == "Bake House"

    body = client.get(f"{BASE}?pageSize=1000", headers=admin_headers).get_json()
    assert body["pageSize"] == 200


def test_get_merchant(client, admin_headers):
    data = _create(client, admin_headers).get_json()
    resp = client.get(f"{BASE}/{data['id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.get_json()["data"]["merchant_code"] == data["merchant_code"]
    assert client.get(f"{BASE}/12345", headers=admin_headers).status_code == 404


def test_insert_race_maps_to_field_conflict(client, admin_headers, monkeypatch):
    assert _create(client, admin_headers).status_code == 201
    users_before = User.query.count()
    merchants_before = Merchant.query.count()
    # let the duplicate reach the unique constraint
    monkeypatch.setattr(
        "app.services.merchants.check_merchant_uniqueness", lambda req, exclude_id=None: None
    )

    resp = _create(
        client, admin_headers,
        phone="9123456780", email="race@example.com", fssai="99999999999999",
    )
    assert resp.status_code == 409
    body = resp.get_json()
    assert body["ok"] is False
    assert body["field"] == "gst"
    assert User.query.count() == users_before
    assert Merchant.query.count() == merchants_before


def test_status_sync_failure_rolls_back(client, admin_headers, monkeypatch):
    data = _create(client, admin_headers).get_json()

    def failing_sync(merchant, status):
        raise OperationalError("UPDATE users", {}, Exception("lock wait timeout"))

    monkeypatch.setattr("app.services.merchants.sync_identity_status", failing_sync)
    resp = client.patch(f"{BASE}/{data['id']}/status", json={"status": "inactive"}, headers=admin_headers)
    assert resp.status_code == 500
    assert resp.get_json()["ok"] is False
    assert db.session.get(Merchant, data["id"]).status == "active"
    assert db.session.get(User, data["user_id"]).status == "active"


def test_fssai_must_be_fourteen_digits(client, admin_headers):
    resp = _create(client, admin_headers, fssai="1234567890123")
    assert resp.status_code == 400
    assert ("fssai",) in {tuple(e["loc"]) for e in resp.get_json()["errors"]}
    assert Merchant.query.count() == 0


def test_update_onto_existing_customer_phone_conflicts(client, admin_headers, make_identity):
    make_identity("9000000055", role="customer")
    data = _create(client, admin_headers).get_json()
    resp = client.put(f"{BASE}/{data['id']}", json=merchant_body(phone="9000000055"), headers=admin_headers)
    assert resp.status_code == 409
    assert resp.get_json()["field"] == "phone"
    assert db.session.get(Merchant, data["id"]).phone == "9876543210"
    assert db.session.get(User, data["user_id"]).phone == "9876543210"
