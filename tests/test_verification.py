import pytest

from app.models.notification import Notification
from app.models.user import User
from app.models.verification_request import VerificationRequest
from app.repositories.verification_repo import VerificationRepo
from app.services.verification_service import VerificationService
from app.utils.errors import InvalidArgument, InvalidState, NotFound


def test_resubmission_reuses_single_request(make_user):
    u = make_user(verified=False)
    first = VerificationService.submit(u.id, "msg1")
    second = VerificationService.submit(u.id, "msg2")

    rows = VerificationRequest.query.filter_by(user_id=u.id).all()
    assert len(rows) == 1
    assert first.id == second.id
    assert rows[0].message == "msg2"
    assert rows[0].status == "pending"


def test_resubmission_clears_previous_review(make_user):
    admin, u = make_user(role="admin"), make_user(verified=False)
    req = VerificationService.submit(u.id, "student id attached")
    VerificationService.review(admin.id, req.id, "rejected", "photo unreadable")

    again = VerificationService.submit(u.id, "new photo")
    assert again.status == "pending"
    assert again.admin_note == ""
    assert again.reviewed_by_id is None
    assert again.reviewed_at is None


def test_verified_user_cannot_submit(make_user):
    u = make_user(verified=True)
    with pytest.raises(InvalidState, match="already verified"):
        VerificationService.submit(u.id, "please")


def test_approval_verifies_user_and_notifies(db, make_user):
    admin, u = make_user(role="admin"), make_user(verified=False)
    req = VerificationService.submit(u.id, "hi")

    VerificationService.review(admin.id, req.id, "approved", "looks good")

    db.session.expire_all()
    assert db.session.get(User, u.id).is_verified is True
    assert req.reviewed_by_id == admin.id
    assert req.reviewed_at is not None
    note = Notification.query.filter_by(user_id=u.id, type="Verification").one()
    assert note.message == "Your verification request is approved."


def test_review_keeps_previous_note_when_none_given(make_user):
    admin, u = make_user(role="admin"), make_user(verified=False)
    req = VerificationService.submit(u.id, "hi")
    VerificationService.review(admin.id, req.id, "pending", "waiting on docs")
    VerificationService.review(admin.id, req.id, "rejected", None)
    assert req.admin_note == "waiting on docs"


def test_review_invalid_status_or_missing(make_user):
    admin = make_user(role="admin")
    with pytest.raises(InvalidArgument):
        VerificationService.review(admin.id, 1, "maybe", None)
    with pytest.raises(NotFound):
        VerificationService.review(admin.id, 999, "approved", None)


def test_admin_messages_append_in_order_and_truncate_notification(make_user):
    admin, u = make_user(role="admin"), make_user(verified=False)
    req = VerificationService.submit(u.id, "hi")

    long_text = "x" * 200
    VerificationService.post_admin_message(admin.id, req.id, "  Please upload a clearer photo  ")
    VerificationService.post_admin_message(admin.id, req.id, long_text)

    assert [m.content for m in req.admin_messages] == ["Please upload a clearer photo", long_text]
    assert all(m.sender_id == admin.id for m in req.admin_messages)

    notes = (
        Notification.query
        .filter_by(user_id=u.id, type="VerificationMessage")
        .order_by(Notification.id)
        .all()
    )
    assert len(notes) == 2
    assert len(notes[1].message) == 140

    with pytest.raises(InvalidArgument):
        VerificationService.post_admin_message(admin.id, req.id, "   ")


def test_concurrent_first_submission_reuses_existing_row(monkeypatch, make_user):
    u = make_user(verified=False)
    first = VerificationService.submit(u.id, "from tab one")

    # the second submission's lookup ran before the first row was committed
    real_lookup = VerificationRepo.get_by_user
    misses = {"left": 1}

    def lookup(user_id):
        if misses["left"]:
            misses["left"] -= 1
            return None
        return real_lookup(user_id)

    monkeypatch.setattr(VerificationRepo, "get_by_user", staticmethod(lookup))

    second = VerificationService.submit(u.id, "from tab two")

    rows = VerificationRequest.query.filter_by(user_id=u.id).all()
    assert len(rows) == 1
    assert second.id == first.id
    assert rows[0].message == "from tab two"
    assert rows[0].status == "pending"
