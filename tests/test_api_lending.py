from app.models.item import Item
from app.models.lending_request import LendingRequest


def _body(item, start, end, **extra):
    data = {"itemId": item.id, "startDate": start.isoformat(), "endDate": end.isoformat()}
    data.update(extra)
    return data


def test_create_request_over_http(client, make_user, make_item, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    item = make_item(lender, daily_rate="20")
    start, end = future_dates

    res = client.post("/lending/request", json=_body(item, start, end, message="hi"),
                      headers=auth_header(borrower))
    assert res.status_code == 201
    data = res.get_json()["data"]
    assert data["status"] == "Pending"
    assert data["totalCost"] == 60.0
    assert data["borrower"]["id"] == borrower.id
    assert data["lender"]["id"] == lender.id


def test_unverified_user_cannot_borrow(client, make_user, make_item, auth_header, future_dates):
    lender, borrower = make_user(), make_user(verified=False)
    item = make_item(lender)
    start, end = future_dates

    res = client.post("/lending/request", json=_body(item, start, end), headers=auth_header(borrower))
    assert res.status_code == 403
    assert res.get_json() == {
        "success": False,
        "message": "Account verification required to borrow, lend, or chat.",
    }


def test_requires_token(client):
    res = client.post("/lending/request", json={})
    assert res.status_code == 401
    assert res.get_json()["success"] is False


def test_bad_dates_are_rejected(client, make_user, make_item, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    item = make_item(lender)
    start, end = future_dates

    res = client.post("/lending/request", json=_body(item, end, start), headers=auth_header(borrower))
    assert res.status_code == 400

    res = client.post("/lending/request", json={"itemId": item.id, "startDate": "not-a-date",
                                                "endDate": end.isoformat()},
                      headers=auth_header(borrower))
    assert res.status_code == 400
    assert res.get_json()["success"] is False


def test_unknown_item_is_404(client, make_user, auth_header, future_dates):
    borrower = make_user()
    start, end = future_dates
    res = client.post("/lending/request",
                      json={"itemId": 4242, "startDate": start.isoformat(), "endDate": end.isoformat()},
                      headers=auth_header(borrower))
    assert res.status_code == 404
    assert res.get_json() == {"success": False, "message": "Item not found"}


def test_only_lender_accepts(client, db, make_user, make_item, make_request, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    item = make_item(lender)
    req = make_request(item, borrower, *future_dates)

    res = client.post(f"/lending/{req.id}/accept", headers=auth_header(borrower))
    assert res.status_code == 403

    res = client.post(f"/lending/{req.id}/accept", headers=auth_header(lender))
    assert res.status_code == 200
    assert res.get_json()["data"]["status"] == "Accepted"

    db.session.expire_all()
    assert db.session.get(Item, item.id).availability == "Rented"

    res = client.post(f"/lending/{req.id}/accept", headers=auth_header(lender))
    assert res.status_code == 400


def test_reject_with_reason(client, db, make_user, make_item, make_request, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    req = make_request(make_item(lender), borrower, *future_dates)

    res = client.post(f"/lending/{req.id}/reject", json={"reason": "busy that week"},
                      headers=auth_header(lender))
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["status"] == "Rejected"
    assert data["cancellationReason"] == "busy that week"


def test_outsider_cannot_view_or_chat(client, make_user, make_item, make_request, auth_header, future_dates):
    lender, borrower, stranger = make_user(), make_user(), make_user()
    req = make_request(make_item(lender), borrower, *future_dates)

    assert client.get(f"/lending/{req.id}", headers=auth_header(stranger)).status_code == 403
    res = client.post(f"/lending/{req.id}/messages", json={"content": "hello"}, headers=auth_header(stranger))
    assert res.status_code == 403


def test_chat_between_parties(client, make_user, make_item, make_request, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    req = make_request(make_item(lender), borrower, *future_dates)

    res = client.post(f"/lending/{req.id}/messages", json={"content": "  when can I pick it up?  "},
                      headers=auth_header(borrower))
    assert res.status_code == 201
    assert res.get_json()["data"]["content"] == "when can I pick it up?"

    res = client.post(f"/lending/{req.id}/messages", json={"content": "   "}, headers=auth_header(borrower))
    assert res.status_code == 400

    rows = client.get(f"/lending/{req.id}/messages", headers=auth_header(lender)).get_json()["data"]
    assert len(rows) == 1
    assert rows[0]["isOwnMessage"] is False


def test_my_requests_filters_by_side(client, make_user, make_item, make_request, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    make_request(make_item(lender), borrower, *future_dates)
    make_request(make_item(borrower, title="Tent"), lender, *future_dates)

    h = auth_header(borrower)
    assert len(client.get("/lending/my-requests", headers=h).get_json()["data"]) == 2
    borrowing = client.get("/lending/my-requests?type=borrowing", headers=h).get_json()["data"]
    assert [r["item"]["title"] for r in borrowing] == ["DSLR Camera"]
    lending = client.get("/lending/my-requests?type=lending", headers=h).get_json()["data"]
    assert [r["item"]["title"] for r in lending] == ["Tent"]


def test_complete_releases_item(client, db, make_user, make_item, make_request, auth_header, future_dates):
    lender, borrower = make_user(), make_user()
    item = make_item(lender)
    req = make_request(item, borrower, *future_dates, status="Active")

    res = client.post(f"/lending/{req.id}/complete", headers=auth_header(borrower))
    assert res.status_code == 200
    data = res.get_json()["data"]
    assert data["status"] == "Completed"
    assert data["lateFee"] == 0.0

    db.session.expire_all()
    assert db.session.get(Item, item.id).availability == "Available"
    assert db.session.get(LendingRequest, req.id).actual_return_date is not None
