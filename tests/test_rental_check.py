from datetime import datetime, timedelta

from app.models.lending_request import LendingRequest
from app.models.notification import Notification
from app.tasks.rental_check import check_rentals


def test_started_requests_become_active(app, db, make_user, make_item, make_request):
    owner, borrower = make_user(), make_user()
    now = datetime.utcnow()
    req = make_request(make_item(owner), borrower, now - timedelta(hours=1), now + timedelta(days=3),
                       status="Accepted")

    summary = check_rentals()

    assert summary["activated"] == 1
    db.session.expire_all()
    assert db.session.get(LendingRequest, req.id).status == "Active"


def test_overdue_rental_notified_once(app, make_user, make_item, make_request):
    owner, borrower = make_user(), make_user()
    now = datetime.utcnow()
    req = make_request(make_item(owner), borrower, now - timedelta(days=5), now - timedelta(days=1),
                       status="Active")

    first = check_rentals()
    second = check_rentals()

    assert first["lateNotified"] == 1
    assert second["lateNotified"] == 0
    notes = Notification.query.filter_by(user_id=borrower.id, type="LateReturn").all()
    assert len(notes) == 1
    assert notes[0].related_id == req.id


def test_due_soon_reminder(app, make_user, make_item, make_request):
    owner, borrower = make_user(), make_user()
    now = datetime.utcnow()
    make_request(make_item(owner), borrower, now - timedelta(days=2), now + timedelta(hours=6), status="Active")

    summary = check_rentals()

    assert summary["remindersSent"] == 1
    assert Notification.query.filter_by(user_id=borrower.id, type="ReturnReminder").count() == 1


def test_pending_and_completed_requests_ignored(app, make_user, make_item, make_request):
    owner, borrower = make_user(), make_user()
    item = make_item(owner)
    now = datetime.utcnow()
    make_request(item, borrower, now - timedelta(days=5), now - timedelta(days=1), status="Pending")
    make_request(item, borrower, now - timedelta(days=5), now - timedelta(days=1), status="Completed")

    summary = check_rentals()
    assert summary == {"activated": 0, "overdue": 0, "dueSoon": 0, "lateNotified": 0, "remindersSent": 0}
