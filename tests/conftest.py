import pytest

from app import create_app
from config import TestConfig
from extensions import db


@pytest.fixture
def app():
    app = create_app(TestConfig)
    ctx = app.app_context()
    ctx.push()
    yield app
    db.session.remove()
    db.drop_all()
    ctx.pop()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


def register(client, email, password="secret123", first_name="Alice", last_name="Admin"):
    r = client.post("/api/users/register", json={
        "firstName": first_name,
        "lastName": last_name,
        "email": email,
        "password": password,
    })
    assert r.status_code == 201, r.get_json()
    return r.get_json()


def login(client, email, password="secret123"):
    r = client.post("/api/users/login", json={"email": email, "password": password})
    assert r.status_code == 200, r.get_json()
    return r.get_json()["token"]


@pytest.fixture
def make_admin(client):
    """Register an admin, give them a company and return a fresh token."""
    def _make_admin(email, company_name="Acme"):
        register(client, email)
        token = login(client, email)
        r = client.post("/api/users/create-company", headers=auth_header(token), json={
            "companyName": company_name,
            "industry": "Retail",
            "address": "1 Main St",
        })
        assert r.status_code == 201, r.get_json()
        return login(client, email)
    return _make_admin


@pytest.fixture
def mail_outbox(app):
    from extensions import mail
    with mail.record_messages() as outbox:
        yield outbox
