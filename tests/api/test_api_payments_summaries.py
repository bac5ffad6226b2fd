"""
支付与每日汇总 API 测试
"""
import pytest
from datetime import datetime
from decimal import Decimal
from fastapi.testclient import TestClient

from hotel_booking.models.ontology import BookingStatus, Payment, PaymentStatus


class TestPaymentsApi:
    def test_payment_lifecycle(self, client: TestClient, auth_headers, make_booking):
        booking = make_booking()

        response = client.post("/payments", json={
            "booking_id": booking.id, "amount": "200.00", "payment_method": "cash"
        }, headers=auth_headers)
        assert response.status_code == 201
        payment_id = response.json()["id"]
        assert response.json()["status"] == "pending"

        response = client.put(f"/payments/{payment_id}", json={"status": "completed"},
                              headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["status"] == "completed"

        response = client.get(f"/payments?booking_id={booking.id}", headers=auth_headers)
        assert response.json()["total"] == 1

        assert client.delete(f"/payments/{payment_id}", headers=auth_headers).status_code == 200
        assert client.get(f"/payments/{payment_id}", headers=auth_headers).status_code == 404

    def test_payment_without_method(self, client: TestClient, auth_headers, make_booking):
        booking = make_booking()
        response = client.post("/payments", json={"booking_id": booking.id, "amount": "10"},
                               headers=auth_headers)
        assert response.status_code == 400

    def test_payment_for_missing_booking(self, client: TestClient, auth_headers):
        response = client.post("/payments", json={
            "booking_id": 999, "amount": "10", "payment_method": "cash"
        }, headers=auth_headers)
        assert response.status_code == 404

    def test_unchanged_payment_returned(self, client: TestClient, auth_headers, make_booking, db_session):
        booking = make_booking()
        payment = Payment(booking_id=booking.id, amount=Decimal("50"), status=PaymentStatus.PENDING)
        db_session.add(payment)
        db_session.commit()

        response = client.put(f"/payments/{payment.id}", json={"status": "pending"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["id"] == payment.id


class TestDailySummariesApi:
    @pytest.fixture
    def completed_bookings(self, make_booking):
        for amount in ("100", "150", "200"):
            make_booking(status=BookingStatus.COMPLETED, total_amount=Decimal(amount),
                         booking_date=datetime(2024, 7, 1, 12, 0))

    def test_generate_review_and_list(self, client: TestClient, auth_headers, completed_bookings):
        response = client.post("/daily-summaries/generate", json={"summary_date": "2024-07-01"},
                               headers=auth_headers)
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["total_amount"]) == Decimal("450")
        assert data["completed_bookings"] == 3
        assert data["status"] == "unchecked"

        response = client.put("/daily-summaries/2024-07-01/status", json={"status": "checked"},
                              headers=auth_headers)
        assert response.json()["status"] == "checked"

        response = client.get("/daily-summaries/2024-07-01", headers=auth_headers)
        assert response.json()["status"] == "checked"

        response = client.get("/daily-summaries", headers=auth_headers)
        assert response.json()["total"] == 1

    def test_missing_summary(self, client: TestClient, auth_headers):
        assert client.get("/daily-summaries/2024-07-01", headers=auth_headers).status_code == 404
        response = client.put("/daily-summaries/2024-07-01/status", json={"status": "checked"},
                              headers=auth_headers)
        assert response.status_code == 404

    def test_misconfigured_revenue_status(self, client: TestClient, auth_headers, monkeypatch):
        from hotel_booking.config import settings
        monkeypatch.setattr(settings, "SUMMARY_REVENUE_STATUSES", ["paid"])

        response = client.post("/daily-summaries/generate", json={"summary_date": "2024-07-01"},
                               headers=auth_headers)
        assert response.status_code == 500
        assert response.json()["detail"] == "服务器内部错误"
