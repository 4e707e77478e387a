# ================================
# USER MANAGEMENT TESTS (test_users.py)
# ================================

import uuid


NEW_USER = {
    "name": "Kabir Shah",
    "email": "kabir@greenvalley.org",
    "password": "kabir-pass-1",
    "role": "staff",
}


class TestAdminCreateUser:

    def test_admin_creates_user_without_switching_session(self, client, admin, admin_headers):
        response = client.post(
            "/api/users",
            json={**NEW_USER, "permissions": ["reports"]},
            headers=admin_headers
        )

        assert response.status_code == 201
        user = response.json()["user"]
        assert user["role"] == "staff"
        assert user["permissions"] == ["reports"]
        assert "set-cookie" not in response.headers

        me = client.get("/api/users/me", headers=admin_headers).json()["user"]
        assert me["id"] == str(admin.id)

    def test_unknown_permission_rejected(self, client, admin_headers):
        response = client.post(
            "/api/users",
            json={**NEW_USER, "permissions": ["launch_rockets"]},
            headers=admin_headers
        )

        assert response.status_code == 400
        assert "launch_rockets" in response.json()["detail"]

    def test_non_admin_forbidden(self, client, committee_headers):
        response = client.post("/api/users", json=NEW_USER, headers=committee_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Forbidden: insufficient role"


class TestListAndGet:

    def test_list_newest_first_with_role_filter(self, client, admin, resident, other_resident, staff, admin_headers):
        response = client.get("/api/users", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 4

        residents = client.get("/api/users?role=resident", headers=admin_headers).json()
        assert residents["count"] == 2
        assert {u["email"] for u in residents["users"]} == {"riya@greenvalley.org", "omar@greenvalley.org"}

    def test_member_management_permission_grants_read(self, client, make_user, headers_for, resident):
        manager = make_user("committee_member", permissions=["member_management"])

        assert client.get("/api/users", headers=headers_for(manager)).status_code == 200
        assert client.get(f"/api/users/{resident.id}", headers=headers_for(manager)).status_code == 200

    def test_resident_cannot_list(self, client, resident_headers):
        assert client.get("/api/users", headers=resident_headers).status_code == 403

    def test_get_missing_user(self, client, admin_headers):
        response = client.get(f"/api/users/{uuid.uuid4()}", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["detail"] == "User not found"

    def test_unknown_role_filter(self, client, admin_headers):
        response = client.get("/api/users?role=landlord", headers=admin_headers)
        assert response.status_code == 400


class TestUpdateUsers:

    def test_partial_update(self, client, resident, admin_headers):
        response = client.patch(
            f"/api/users/{resident.id}",
            json={"unit": "A-102", "phone": "9876543210"},
            headers=admin_headers
        )

        assert response.status_code == 200
        user = response.json()["user"]
        assert user["unit"] == "A-102"
        assert user["phone"] == "9876543210"
        assert user["name"] == "Riya Resident"

    def test_update_permissions_by_email(self, client, committee, admin_headers):
        response = client.patch(
            "/api/users/permissions",
            json={"email": "COMMITTEE@greenvalley.org", "permissions": ["announcements", "reports"]},
            headers=admin_headers
        )

        assert response.status_code == 200
        assert response.json()["user"]["permissions"] == ["announcements", "reports"]

    def test_update_permissions_unknown_email(self, client, admin_headers):
        response = client.patch(
            "/api/users/permissions",
            json={"email": "ghost@greenvalley.org", "permissions": []},
            headers=admin_headers
        )
        assert response.status_code == 404

    def test_update_permissions_unknown_name(self, client, committee, admin_headers):
        response = client.patch(
            "/api/users/permissions",
            json={"email": "committee@greenvalley.org", "permissions": ["superpower"]},
            headers=admin_headers
        )
        assert response.status_code == 400

    def test_toggle_active(self, client, resident, admin_headers):
        first = client.patch(f"/api/users/{resident.id}/toggle-active", headers=admin_headers)
        assert first.status_code == 200
        assert first.json() == {"message": "User disabled", "user_id": str(resident.id), "is_active": False}

        second = client.patch(f"/api/users/{resident.id}/toggle-active", headers=admin_headers)
        assert second.json()["message"] == "User enabled"
        assert second.json()["is_active"] is True

    def test_admin_cannot_deactivate_self(self, client, admin, admin_headers):
        response = client.patch(f"/api/users/{admin.id}/toggle-active", headers=admin_headers)
        assert response.status_code == 400


class TestDeleteUsers:

    def test_delete_user(self, client, resident, admin_headers):
        response = client.delete(f"/api/users/{resident.id}", headers=admin_headers)

        assert response.status_code == 200
        assert client.get(f"/api/users/{resident.id}", headers=admin_headers).status_code == 404

    def test_delete_missing_user(self, client, admin_headers):
        assert client.delete(f"/api/users/{uuid.uuid4()}", headers=admin_headers).status_code == 404

    def test_admin_cannot_delete_self(self, client, admin, admin_headers):
        response = client.delete(f"/api/users/{admin.id}", headers=admin_headers)

        assert response.status_code == 400
        assert response.json()["detail"] == "Cannot delete yourself"
