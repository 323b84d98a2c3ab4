from app.models.item import Item
from app.models.notification import Notification


def _item_body(**overrides):
    body = {
        "title": "Road bike",
        "description": "Aluminium frame, 54cm",
        "category": "Sports Equipment",
        "dailyRate": 12.5,
        "securityDeposit": 80,
        "location": {"address": "Dorm B", "campus": "North"},
        "tags": ["cycling", "outdoor"],
    }
    body.update(overrides)
    return body


def test_create_and_fetch_item(client, make_user, auth_header):
    owner = make_user()
    res = client.post("/items", json=_item_body(), headers=auth_header(owner))
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["ownerId"] == owner.id
    assert data["availability"] == "Available"
    assert data["location"] == {"address": "Dorm B", "campus": "North"}

    fetched = client.get(f"/items/{data['id']}").get_json()["data"]
    assert fetched["viewCount"] == 1
    assert fetched["dailyRate"] == 12.5


def test_create_validates_category(client, make_user, auth_header):
    owner = make_user()
    res = client.post("/items", json=_item_body(category="Spaceships"), headers=auth_header(owner))
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_search_filters(client, make_user, make_item):
    owner = make_user()
    make_item(owner, title="Canon camera", daily_rate="40", campus="North", tags=["photo"])
    make_item(owner, title="Camping stove", daily_rate="8", category="Other", campus="South")
    make_item(owner, title="Desk lamp", daily_rate="3", category="Furniture", campus="North")

    def titles(qs):
        return sorted(i["title"] for i in client.get(f"/items?{qs}").get_json()["data"])

    assert titles("search=cam") == ["Camping stove", "Canon camera"]
    assert titles("search=photo") == ["Canon camera"]
    assert titles("campus=North&maxPrice=10") == ["Desk lamp"]
    assert titles("category=Other") == ["Camping stove"]

    page = client.get("/items?sortBy=dailyRate&sortOrder=asc&limit=2").get_json()
    assert [i["title"] for i in page["data"]] == ["Desk lamp", "Camping stove"]
    assert page["totalItems"] == 3
    assert page["totalPages"] == 2


def test_bad_price_filter(client):
    assert client.get("/items?minPrice=cheap").status_code == 400


def test_only_owner_updates(client, make_user, make_item, auth_header):
    owner, other = make_user(), make_user()
    item = make_item(owner)

    res = client.put(f"/items/{item.id}", json={"dailyRate": 5}, headers=auth_header(other))
    assert res.status_code == 403

    res = client.put(f"/items/{item.id}", json={"dailyRate": 5, "availability": "Maintenance"},
                     headers=auth_header(owner))
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["dailyRate"] == 5.0
    assert data["availability"] == "Maintenance"


def test_owner_cannot_mark_rented(client, make_user, make_item, auth_header):
    owner = make_user()
    item = make_item(owner)
    res = client.put(f"/items/{item.id}", json={"availability": "Rented"}, headers=auth_header(owner))
    assert res.status_code == 400


def test_delete_blocked_by_ongoing_rental(client, make_user, make_item, make_request, auth_header, future_dates):
    owner, borrower = make_user(), make_user()
    item = make_item(owner)
    make_request(item, borrower, *future_dates, status="Accepted")

    res = client.delete(f"/items/{item.id}", headers=auth_header(owner))
    assert res.status_code == 400
    assert res.get_json()["message"] == "Item has an ongoing rental"


def test_delete_soft_deletes(client, make_user, make_item, auth_header):
    owner = make_user()
    item = make_item(owner)
    assert client.delete(f"/items/{item.id}", headers=auth_header(owner)).status_code == 200
    assert client.get(f"/items/user/{owner.id}").get_json()["data"] == []


def test_delete_cancels_pending_requests(client, db, make_user, make_item, make_request, auth_header, future_dates):
    owner, borrower = make_user(), make_user()
    item = make_item(owner)
    req = make_request(item, borrower, *future_dates)

    assert client.delete(f"/items/{item.id}", headers=auth_header(owner)).status_code == 200

    data = client.get(f"/lending/{req.id}", headers=auth_header(borrower)).get_json()["data"]
    assert data["status"] == "Cancelled"
    assert data["cancellationReason"] == "Item was removed by its owner"

    res = client.post(f"/lending/{req.id}/accept", headers=auth_header(owner))
    assert res.status_code == 400

    db.session.expire_all()
    assert db.session.get(Item, item.id).availability == "Available"
    notes = Notification.query.filter_by(user_id=borrower.id, related_id=req.id, type="System").all()
    assert len(notes) == 1


def test_admin_deactivation_cancels_pending_requests(client, make_user, make_item, make_request, auth_header,
                                                     future_dates):
    admin, owner, borrower = make_user(role="admin"), make_user(), make_user()
    item = make_item(owner)
    req = make_request(item, borrower, *future_dates)

    assert client.put(f"/admin/items/{item.id}/deactivate", headers=auth_header(admin)).status_code == 200

    data = client.get(f"/lending/{req.id}", headers=auth_header(borrower)).get_json()["data"]
    assert data["status"] == "Cancelled"
    assert data["cancellationReason"] == "Item was removed by an admin"
