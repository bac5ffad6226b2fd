"""
认证 API 测试
"""
from fastapi.testclient import TestClient

from hotel_booking.security.auth import create_access_token, decode_token
from hotel_booking.models.ontology import UserRole


class TestAuthLogin:
    """登录接口测试"""

    def test_login_success(self, client: TestClient, staff_user):
        response = client.post("/auth/login", json={"username": "front1", "password": "123456"})

        assert response.status_code == 200
        data = response.json()
        assert data["token_type"] == "bearer"
        assert decode_token(data["access_token"])["sub"] == str(staff_user.id)

    def test_login_wrong_password(self, client: TestClient, staff_user):
        response = client.post("/auth/login", json={"username": "front1", "password": "wrong"})
        assert response.status_code == 401

    def test_login_inactive_user(self, client: TestClient, staff_user, db_session):
        staff_user.is_active = False
        db_session.commit()

        response = client.post("/auth/login", json={"username": "front1", "password": "123456"})
        assert response.status_code == 401


class TestProtectedRoutes:
    def test_missing_token(self, client: TestClient):
        response = client.get("/bookings")
        assert response.status_code in (401, 403)

    def test_invalid_token(self, client: TestClient):
        response = client.get("/bookings", headers={"Authorization": "Bearer not-a-token"})
        assert response.status_code == 401

    def test_token_for_unknown_user(self, client: TestClient):
        token = create_access_token(12345, UserRole.STAFF)
        response = client.get("/bookings", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
