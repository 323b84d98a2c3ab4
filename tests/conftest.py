from datetime import datetime, timedelta
from decimal import Decimal

import pytest
from werkzeug.security import generate_password_hash

from app import create_app
from app.config import TestConfig
from app.extensions import db as _db
from app.models.item import Item
from app.models.lending_request import LendingRequest
from app.models.user import User
from app.services import lending_rules
from app.services.auth_service import AuthService


@pytest.fixture
def app():
    app = create_app(TestConfig)
    with app.app_context():
        _db.create_all()
        yield app
        _db.session.remove()
        _db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def db(app):
    return _db


@pytest.fixture
def make_user(app):
    seq = {"n": 0}

    def _make(role="user", verified=True, active=True, name=None, password="secret123"):
        seq["n"] += 1
        n = seq["n"]
        u = User(
            name=name or f"Student {n}",
            email=f"student{n}@campus.edu",
            password_hash=generate_password_hash(password),
            role=role,
            is_verified=verified,
            is_active=active,
        )
        _db.session.add(u)
        _db.session.commit()
        return u

    return _make


@pytest.fixture
def make_item(app):
    def _make(owner, daily_rate="50", deposit="100", **fields):
        item = Item(
            owner_id=owner.id,
            title=fields.pop("title", "DSLR Camera"),
            description=fields.pop("description", "Canon body with kit lens"),
            category=fields.pop("category", "Electronics"),
            daily_rate=Decimal(daily_rate),
            security_deposit=Decimal(deposit),
            **fields,
        )
        _db.session.add(item)
        _db.session.commit()
        return item

    return _make


@pytest.fixture
def make_request(app):
    """Stores a LendingRequest directly, bypassing the date checks of create()."""
    def _make(item, borrower, start, end, status="Pending"):
        req = LendingRequest(
            item_id=item.id,
            borrower_id=borrower.id,
            lender_id=item.owner_id,
            start_date=start,
            end_date=end,
            status=status,
            total_cost=lending_rules.total_cost(start, end, item.daily_rate),
            security_deposit=item.security_deposit,
        )
        _db.session.add(req)
        if status in ("Accepted", "Active"):
            item.availability = "Rented"
        _db.session.commit()
        return req

    return _make


@pytest.fixture
def auth_header(app):
    def _header(user):
        return {"Authorization": f"Bearer {AuthService.issue_token(user)}"}

    return _header


@pytest.fixture
def future_dates():
    """(start, end) three days apart, starting tomorrow at midnight UTC."""
    today = datetime.utcnow().replace(hour=0, minute=0, second=0, microsecond=0)
    start = today + timedelta(days=1)
    return start, start + timedelta(days=3)
