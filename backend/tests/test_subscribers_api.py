from fastapi.testclient import TestClient

from factories import make_notification, make_subscriber
from notification_feed.main import app

client = TestClient(app)

HEADERS = {"X-Environment-Id": "env-1", "X-Organization-Id": "org-1"}


def test_create_and_get_subscriber():
    r = client.post("/subscribers/", json={"subscriber_id": "alice", "email": "alice@example.com", "first_name": "Alice"}, headers=HEADERS)
    assert r.status_code == 200, r.text
    assert r.json()["subscriber_id"] == "alice"

    r2 = client.get("/subscribers/alice", headers=HEADERS)
    assert r2.status_code == 200
    assert r2.json()["email"] == "alice@example.com"
    assert r2.json()["first_name"] == "Alice"


def test_create_twice_updates_supplied_fields():
    client.post("/subscribers/", json={"subscriber_id": "bob", "first_name": "Bob", "phone": "+1"}, headers=HEADERS)
    r = client.post("/subscribers/", json={"subscriber_id": "bob", "last_name": "Builder"}, headers=HEADERS)
    assert r.status_code == 200
    body = r.json()
    assert body["first_name"] == "Bob"
    assert body["last_name"] == "Builder"
    assert body["phone"] == "+1"


def test_subscriber_lookup_is_environment_scoped():
    client.post("/subscribers/", json={"subscriber_id": "carol"}, headers=HEADERS)
    r = client.get("/subscribers/carol", headers={"X-Environment-Id": "env-2"})
    assert r.status_code == 404
    assert r.json()["detail"] == "Subscriber not found for id carol"


def test_create_validates_payload():
    r = client.post("/subscribers/", json={"subscriber_id": "dave", "email": "not-an-email"}, headers=HEADERS)
    assert r.status_code == 422
    r = client.post("/subscribers/", json={"subscriber_id": ""}, headers=HEADERS)
    assert r.status_code == 422


def test_subscriber_notifications(db):
    sub = make_subscriber(db, "erin")
    other = make_subscriber(db, "frank")
    make_notification(db, sub, channels=["email"], transaction_id="tx-erin")
    make_notification(db, other, transaction_id="tx-frank")
    db.commit()

    r = client.get("/subscribers/erin/notifications", headers=HEADERS)
    assert r.status_code == 200, r.text
    items = r.json()
    assert [i["transaction_id"] for i in items] == ["tx-erin"]
    assert items[0]["channels"] == ["email"]
    assert not {"jobs", "subscriber", "template"} & items[0].keys()

    assert client.get("/subscribers/nobody/notifications", headers=HEADERS).status_code == 404
