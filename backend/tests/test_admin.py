import pytest

from inventory_api.errors import InvalidOperation, NotFound
from inventory_api.models.user import User
from inventory_api.services.admin_service import AdminService
from inventory_api.services.auth_service import AuthService


def test_admin_cannot_deactivate_self(db, admin):
    with pytest.raises(InvalidOperation):
        AdminService(db).set_user_status(admin, admin.id, False)
    db.expire_all()
    assert db.query(User).filter(User.id == admin.id).one().is_active is True


def test_toggle_other_user(db, admin, user):
    svc = AdminService(db)
    assert svc.set_user_status(admin, user.id, False).is_active is False
    assert svc.set_user_status(admin, user.id, True).is_active is True


def test_toggle_unknown_user(db, admin):
    with pytest.raises(NotFound):
        AdminService(db).set_user_status(admin, 9999, False)


def test_list_users_search_and_role(db, admin, user):
    auth = AuthService(db)
    auth.register("alfred", "alfred12")
    auth.register("zed", "zed12345", role="admin")
    svc = AdminService(db)

    users, total = svc.list_users(search="AL")
    assert total == 2
    assert {u.username for u in users} == {"alice", "alfred"}

    users, total = svc.list_users(role="admin")
    assert [u.username for u in users] == ["zed", "admin"]

    users, total = svc.list_users(page=2, limit=3)
    assert total == 4
    assert len(users) == 1


def test_admin_endpoints_forbidden_for_regular_users(client, user_headers):
    for path in ("/api/admin/dashboard", "/api/admin/stats", "/api/admin/users"):
        res = client.get(path, headers=user_headers)
        assert res.status_code == 403
        assert res.json()["success"] is False
    res = client.put("/api/admin/users/1/status", json={"isActive": False}, headers=user_headers)
    assert res.status_code == 403


def test_dashboard_endpoint(client, admin_headers):
    res = client.get("/api/admin/dashboard", headers=admin_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert set(data) == {"summary", "charts", "recentActivity", "stockAlerts"}
    assert data["summary"]["users"]["admins"] == 1


def test_stats_endpoint(client, admin_headers):
    data = client.get("/api/admin/stats", headers=admin_headers).json()["data"]
    assert data["collections"]["users"]["count"] == 1
    assert data["collections"]["products"]["count"] == 0
    assert data["database"]["collections"] == 2


def test_users_endpoint_hides_passwords(client, user, admin_headers):
    res = client.get("/api/admin/users", params={"role": "user"}, headers=admin_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert [u["username"] for u in data["users"]] == ["alice"]
    assert all("password" not in key.lower() for u in data["users"] for key in u)
    assert data["pagination"]["totalItems"] == 1


def test_status_endpoint(client, admin, user, admin_headers):
    res = client.put(f"/api/admin/users/{user.id}/status", json={"isActive": False}, headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "User deactivated successfully"
    assert res.json()["data"]["user"]["isActive"] is False


def test_status_endpoint_rejects_self_modification(client, db, admin, admin_headers):
    res = client.put(f"/api/admin/users/{admin.id}/status", json={"isActive": False}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "Cannot modify your own account status"}
    db.expire_all()
    assert db.query(User).filter(User.id == admin.id).one().is_active is True


def test_status_endpoint_validation_and_not_found(client, admin_headers):
    assert client.put("/api/admin/users/9999/status", json={"isActive": False}, headers=admin_headers).status_code == 404
    assert client.put("/api/admin/users/9999/status", json={"isActive": "nope"}, headers=admin_headers).status_code == 400


def test_user_search_treats_wildcards_literally(db, admin, user):
    AuthService(db).register("bob12", "bob12345")
    svc = AdminService(db)
    assert svc.list_users(search="_") == ([], 0)
    assert svc.list_users(search="%")[1] == 0
    users, total = svc.list_users(search="B12")
    assert [u.username for u in users] == ["bob12"]
