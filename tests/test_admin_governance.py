import pytest

from app.models.user import User
from app.repositories.user_repo import UserRepo
from app.services.admin_service import AdminService
from app.utils.errors import InvalidArgument, InvalidOperation, NotFound


def _role(db, user):
    db.session.expire_all()
    return db.session.get(User, user.id).role


def test_sole_admin_cannot_demote_self(db, make_user):
    a = make_user(role="admin")
    with pytest.raises(InvalidOperation, match="Admins cannot demote themselves"):
        AdminService.change_role(a.id, a.id, "user")
    assert _role(db, a) == "admin"


def test_self_demotion_blocked_even_with_other_admins(db, make_user):
    a, _b = make_user(role="admin"), make_user(role="admin")
    with pytest.raises(InvalidOperation, match="demote themselves"):
        AdminService.change_role(a.id, a.id, "user")


def test_last_admin_cannot_be_removed(db, make_user):
    a, b = make_user(role="admin"), make_user(role="admin")

    AdminService.change_role(a.id, b.id, "user")
    assert _role(db, b) == "user"

    # b's old session still claims admin; only a remains
    with pytest.raises(InvalidOperation, match="Cannot remove the last admin"):
        AdminService.change_role(b.id, a.id, "user")
    assert _role(db, a) == "admin"


def test_promote_user(db, make_user):
    a, u = make_user(role="admin"), make_user()
    AdminService.change_role(a.id, u.id, "admin")
    assert _role(db, u) == "admin"
    assert UserRepo.count_admins() == 2


def test_invalid_role_and_missing_target(make_user):
    a = make_user(role="admin")
    with pytest.raises(InvalidArgument):
        AdminService.change_role(a.id, a.id, "superuser")
    with pytest.raises(NotFound):
        AdminService.change_role(a.id, 9999, "admin")


def test_conditional_demotion_is_a_single_statement(db, make_user):
    a, b = make_user(role="admin"), make_user(role="admin")
    assert UserRepo.demote_admin_unless_last(b.id) is True
    assert UserRepo.demote_admin_unless_last(a.id) is False
    db.session.commit()
    assert UserRepo.count_admins() == 1


def test_deactivate_last_active_admin_blocked(db, make_user):
    a = make_user(role="admin")
    make_user(role="admin", active=False)
    with pytest.raises(InvalidOperation, match="last active admin"):
        AdminService.deactivate_user(a.id)


def test_deactivate_regular_user(db, make_user):
    make_user(role="admin")
    u = make_user()
    AdminService.deactivate_user(u.id)
    db.session.expire_all()
    assert db.session.get(User, u.id).is_active is False


def test_delete_review_recomputes_rating(db, make_user, make_item, make_request, future_dates):
    from app.services.review_service import ReviewService

    owner, b1, b2 = make_user(), make_user(), make_user()
    item = make_item(owner)
    r1 = make_request(item, b1, *future_dates, status="Completed")
    r2 = make_request(item, b2, *future_dates, status="Completed")
    rev1 = ReviewService.create(b1.id, r1.id, owner.id, 5, "Great lender")
    ReviewService.create(b2.id, r2.id, owner.id, 3, "Late pickup")

    assert db.session.get(User, owner.id).review_count == 2
    assert db.session.get(User, owner.id).rating == 4.0

    AdminService.delete_review(rev1.id)
    db.session.expire_all()
    owner = db.session.get(User, owner.id)
    assert owner.review_count == 1
    assert owner.rating == 3.0
