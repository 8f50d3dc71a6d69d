import pytest

from conftest import auth_header, login, register
from extensions import db
from models.role_model import CustomRole, RolePermission
from models.user_model import User
from services.role_service import RoleService
from utils.errors import AdminRequired, CrossTenantAccess, NoTenant, RoleInUse


def _create_role(client, token, name="Sales Rep", permissions=None):
    return client.post("/api/users/roles", headers=auth_header(token), json={
        "roleName": name,
        "description": f"{name} role",
        "permissions": permissions if permissions is not None else [
            {"permissionName": "view_orders", "hasAccess": True},
            {"permissionName": "edit_orders", "hasAccess": False},
        ],
    })


def _invite(client, token, email):
    r = client.post("/api/users/invite", headers=auth_header(token), json={
        "email": email, "temporaryPassword": "temp123",
    })
    assert r.status_code == 201, r.get_json()
    return r.get_json()["id"]


def test_create_role_persists_permissions(client, make_admin):
    token = make_admin("alice@acme.com")
    r = _create_role(client, token)
    assert r.status_code == 201
    body = r.get_json()
    assert body["roleName"] == "Sales Rep"
    assert [(p["permissionName"], p["hasAccess"]) for p in body["permissions"]] == [
        ("view_orders", True),
        ("edit_orders", False),
    ]
    assert RolePermission.query.count() == 2


def test_create_role_with_no_permissions(client, make_admin):
    token = make_admin("alice@acme.com")
    r = _create_role(client, token, permissions=[])
    assert r.status_code == 201
    assert r.get_json()["permissions"] == []


def test_create_role_requires_company(client):
    register(client, "nobody@example.com")
    token = login(client, "nobody@example.com")
    r = _create_role(client, token)
    assert r.status_code == 409
    assert r.get_json()["code"] == "no_tenant"
    assert CustomRole.query.count() == 0


def test_duplicate_role_name_in_same_company(client, make_admin):
    token = make_admin("alice@acme.com")
    assert _create_role(client, token).status_code == 201
    r = _create_role(client, token)
    assert r.status_code == 409
    assert r.get_json()["code"] == "duplicate_role"
    assert CustomRole.query.count() == 1


def test_same_role_name_allowed_in_other_company(client, make_admin):
    acme = make_admin("alice@acme.com", "Acme")
    globex = make_admin("hank@globex.com", "Globex")
    assert _create_role(client, acme).status_code == 201
    assert _create_role(client, globex).status_code == 201
    assert CustomRole.query.count() == 2


def test_blank_permission_name_creates_nothing(client, make_admin):
    token = make_admin("alice@acme.com")
    r = _create_role(client, token, permissions=[
        {"permissionName": "view_orders", "hasAccess": True},
        {"permissionName": "  ", "hasAccess": True},
    ])
    assert r.status_code == 400
    assert CustomRole.query.count() == 0
    assert RolePermission.query.count() == 0


def test_list_roles_is_scoped_to_company(client, make_admin):
    acme = make_admin("alice@acme.com", "Acme")
    globex = make_admin("hank@globex.com", "Globex")
    _create_role(client, acme, "Sales Rep")
    _create_role(client, globex, "Auditor")

    r = client.get("/api/users/roles", headers=auth_header(acme))
    assert r.status_code == 200
    assert [role["roleName"] for role in r.get_json()["roles"]] == ["Sales Rep"]


def test_cannot_delete_role_of_other_company(client, make_admin):
    acme = make_admin("alice@acme.com", "Acme")
    globex = make_admin("hank@globex.com", "Globex")
    role_id = _create_role(client, acme).get_json()["id"]

    r = client.delete(f"/api/users/roles/{role_id}", headers=auth_header(globex))
    assert r.status_code == 403
    assert r.get_json()["code"] == "cross_tenant_access"
    assert db.session.get(CustomRole, role_id) is not None


def test_cannot_assign_role_of_other_company(client, make_admin):
    acme = make_admin("alice@acme.com", "Acme")
    globex = make_admin("hank@globex.com", "Globex")
    role_id = _create_role(client, acme).get_json()["id"]
    ivan_id = _invite(client, globex, "ivan@globex.com")

    r = client.post(f"/api/users/{ivan_id}/assign-role", headers=auth_header(globex),
                    json={"customRoleId": role_id})
    assert r.status_code == 403
    assert db.session.get(User, ivan_id).custom_role_id is None


def test_cannot_assign_role_to_user_of_other_company(client, make_admin):
    acme = make_admin("alice@acme.com", "Acme")
    globex = make_admin("hank@globex.com", "Globex")
    ivan_id = _invite(client, globex, "ivan@globex.com")
    role_id = _create_role(client, acme).get_json()["id"]

    r = client.post(f"/api/users/{ivan_id}/assign-role", headers=auth_header(acme),
                    json={"customRoleId": role_id})
    assert r.status_code == 403
    assert r.get_json()["code"] == "cross_tenant_access"


def test_delete_role_in_use_then_after_clearing(client, make_admin):
    token = make_admin("alice@acme.com")
    role_id = _create_role(client, token).get_json()["id"]
    bob_id = _invite(client, token, "bob@acme.com")
    r = client.post(f"/api/users/{bob_id}/assign-role", headers=auth_header(token),
                    json={"customRoleId": role_id})
    assert r.status_code == 200
    assert r.get_json()["customRoleName"] == "Sales Rep"

    r = client.delete(f"/api/users/roles/{role_id}", headers=auth_header(token))
    assert r.status_code == 409
    assert r.get_json()["code"] == "role_in_use"

    r = client.post(f"/api/users/{bob_id}/assign-role", headers=auth_header(token),
                    json={"customRoleId": None})
    assert r.status_code == 200
    assert r.get_json()["customRoleId"] is None

    r = client.delete(f"/api/users/roles/{role_id}", headers=auth_header(token))
    assert r.status_code == 200
    assert db.session.get(CustomRole, role_id) is None
    assert RolePermission.query.filter_by(role_id=role_id).count() == 0


def test_delete_unknown_role(client, make_admin):
    token = make_admin("alice@acme.com")
    r = client.delete("/api/users/roles/999", headers=auth_header(token))
    assert r.status_code == 404


def test_service_errors_are_typed(app, client, make_admin):
    make_admin("alice@acme.com", "Acme")
    make_admin("hank@globex.com", "Globex")
    register(client, "loner@example.com")
    alice = User.query.filter_by(email="alice@acme.com").first()
    hank = User.query.filter_by(email="hank@globex.com").first()
    loner = User.query.filter_by(email="loner@example.com").first()

    role, status = RoleService.create_role(alice, {"roleName": "Manager", "permissions": []})
    assert status == 201

    with pytest.raises(NoTenant):
        RoleService.list_roles(loner)
    with pytest.raises(CrossTenantAccess):
        RoleService.delete_role(hank, role["id"])

    RoleService.assign_role(alice, alice.id, role["id"])
    with pytest.raises(RoleInUse):
        RoleService.delete_role(alice, role["id"])


def test_string_has_access_is_rejected(client, make_admin):
    token = make_admin("alice@acme.com")
    r = _create_role(client, token, permissions=[
        {"permissionName": "view_orders", "hasAccess": "false"},
    ])
    assert r.status_code == 400
    assert r.get_json()["code"] == "validation_error"
    assert CustomRole.query.count() == 0


def test_missing_has_access_means_denied(client, make_admin):
    token = make_admin("alice@acme.com")
    r = _create_role(client, token, permissions=[{"permissionName": "view_orders"}])
    assert r.status_code == 201
    [permission] = r.get_json()["permissions"]
    assert permission["permissionName"] == "view_orders"
    assert permission["hasAccess"] is False


def test_permission_insert_failure_leaves_no_role(client, make_admin, monkeypatch):
    token = make_admin("alice@acme.com")

    def unstorable_permission(permission_name, has_access):
        return RolePermission(permission_name=None, has_access=has_access)

    monkeypatch.setattr("services.role_service.RolePermission", unstorable_permission)
    r = _create_role(client, token)
    assert r.status_code == 503
    assert r.get_json()["retryable"] is True
    assert CustomRole.query.count() == 0
    assert RolePermission.query.count() == 0


def test_non_object_body_is_rejected(client, make_admin):
    token = make_admin("alice@acme.com")
    r = client.post("/api/users/roles", headers=auth_header(token), json=[{"roleName": "x"}])
    assert r.status_code == 400
    assert r.get_json()["code"] == "validation_error"

    bob_id = _invite(client, token, "bob@acme.com")
    r = client.post(f"/api/users/{bob_id}/assign-role", headers=auth_header(token), json=[1])
    assert r.status_code == 400
    assert CustomRole.query.count() == 0


def test_member_cannot_manage_roles(client, make_admin):
    token = make_admin("alice@acme.com")
    bob_id = _invite(client, token, "bob@acme.com")
    role_id = _create_role(client, token).get_json()["id"]
    bob_token = login(client, "bob@acme.com", "temp123")

    r = _create_role(client, bob_token, name="Boss")
    assert r.status_code == 403
    assert r.get_json()["code"] == "admin_required"

    r = client.post(f"/api/users/{bob_id}/assign-role", headers=auth_header(bob_token),
                    json={"customRoleId": role_id})
    assert r.status_code == 403
    assert db.session.get(User, bob_id).custom_role_id is None

    r = client.delete(f"/api/users/roles/{role_id}", headers=auth_header(bob_token))
    assert r.status_code == 403
    assert r.get_json()["code"] == "admin_required"
    assert CustomRole.query.count() == 1

    bob = db.session.get(User, bob_id)
    with pytest.raises(AdminRequired):
        RoleService.list_roles(bob)
