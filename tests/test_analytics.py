from datetime import datetime, timedelta, timezone

from conftest import booking_payload, find_activity, login_superadmin
from tour_service.app.crud import analytics_crud


def make_booking(client, name="Agafay Desert Combo Experience", **overrides):
    activity = find_activity(client, name)
    response = client.post("/api/bookings", json=booking_payload(activity["id"], **overrides))
    assert response.status_code == 201
    return response.json()


def test_booking_analytics_counts_each_status(admin_client):
    bookings = [make_booking(admin_client) for _ in range(4)]
    for booking, status in zip(bookings[1:], ("confirmed", "completed", "cancelled")):
        admin_client.patch(f"/api/admin/bookings/{booking['id']}/status", json={"status": status})

    response = admin_client.get("/api/admin/analytics/bookings")

    assert response.status_code == 200
    assert response.json() == {
        "total": 4, "pending": 1, "confirmed": 1, "completed": 1, "cancelled": 1}


def test_activity_analytics_counts_bookings(admin_client):
    make_booking(admin_client)
    make_booking(admin_client)
    make_booking(admin_client, name="Essaouira Day Trip")

    counts = {a["name"]: a["bookingCount"]
              for a in admin_client.get("/api/admin/analytics/activities").json()}

    assert counts["Agafay Desert Combo Experience"] == 2
    assert counts["Essaouira Day Trip"] == 1
    assert counts["Ourika Valley Day Trip"] == 0


def test_earnings_sum_paid_amounts_this_month(client):
    paid = make_booking(client)
    make_booking(client)
    login_superadmin(client)
    client.patch(f"/api/admin/bookings/{paid['id']}/payment", json={"mode": "full"})

    response = client.get("/api/admin/analytics/earnings")

    assert response.status_code == 200
    assert response.json() == {"currentMonth": 900, "lastMonth": 0, "currency": "MAD"}


def test_earnings_split_by_calendar_month(storage):
    now = datetime(2025, 3, 15, 12, 0, tzinfo=timezone.utc)
    for created_at, paid in ((datetime(2025, 3, 2, tzinfo=timezone.utc), 900),
                             (datetime(2025, 2, 20, tzinfo=timezone.utc), 270),
                             (datetime(2025, 1, 31, tzinfo=timezone.utc), 5000)):
        booking = storage.create_booking({
            "customer_name": "Guest", "customer_phone": "+212600000000",
            "activity_id": "a1", "number_of_people": 2, "preferred_date": created_at.date(),
            "total_amount": "900", "payment_status": "deposit_paid", "paid_amount": paid})
        storage.bookings[booking.id] = booking.model_copy(update={"created_at": created_at})

    earnings = analytics_crud.get_earnings(storage, now=now)

    assert earnings.current_month == 900
    assert earnings.last_month == 270


def test_earnings_in_january_look_back_to_december(storage):
    booking = storage.create_booking({
        "customer_name": "Guest", "customer_phone": "+212600000000",
        "activity_id": "a1", "number_of_people": 1, "preferred_date": datetime(2024, 12, 1).date(),
        "total_amount": "450", "payment_status": "fully_paid", "paid_amount": 450})
    storage.bookings[booking.id] = booking.model_copy(
        update={"created_at": datetime(2024, 12, 10, tzinfo=timezone.utc)})

    earnings = analytics_crud.get_earnings(storage, now=datetime(2025, 1, 5, tzinfo=timezone.utc))

    assert earnings.current_month == 0
    assert earnings.last_month == 450


def test_price_comparison(admin_client):
    response = admin_client.get("/api/admin/getyourguide/comparison")

    assert response.status_code == 200
    rows = {r["name"]: r for r in response.json()}
    agafay = rows["Agafay Desert Combo Experience"]
    assert agafay["ourPrice"] == 450
    assert agafay["getyourguidePrice"] == 600
    assert agafay["savings"] == 150
    assert agafay["savingsPercent"] == 25.0


def test_performance_metrics(admin_client):
    first = make_booking(admin_client)
    make_booking(admin_client)
    admin_client.patch(f"/api/admin/bookings/{first['id']}/status", json={"status": "confirmed"})

    response = admin_client.get("/api/admin/performance-metrics", params={"range": "7d"})

    assert response.status_code == 200
    metrics = response.json()
    assert metrics["range"] == "7d"
    assert metrics["bookingConversion"]["rate"] == 50
    assert metrics["bookingConversion"]["totalBookings"] == 2
    assert metrics["revenue"]["total"] == 1800
    assert len(metrics["revenue"]["hourly"]) == 24
    assert sum(h["amount"] for h in metrics["revenue"]["hourly"]) == 1800
    assert len(metrics["revenue"]["daily"]) == 7
    assert metrics["revenue"]["daily"][-1]["amount"] == 1800
    assert metrics["revenue"]["byActivity"] == [{
        "activityId": first["activityId"], "name": "Agafay Desert Combo Experience",
        "revenue": 1800, "bookings": 2}]
    assert len(metrics["peakHours"]) == 24
    assert sum(h["bookings"] for h in metrics["peakHours"]) == 2


def test_performance_metrics_rejects_unknown_range(admin_client):
    response = admin_client.get("/api/admin/performance-metrics", params={"range": "2y"})
    assert response.status_code == 400


def test_performance_alerts_without_bookings(admin_client):
    response = admin_client.get("/api/admin/performance-alerts")

    assert response.status_code == 200
    messages = [a["message"] for a in response.json()["alerts"]]
    assert messages == ["No bookings in the last 24 hours", "Low booking conversion rate"]


def test_performance_alerts_clear_with_converted_recent_bookings(storage):
    now = datetime.now(timezone.utc)
    booking = storage.create_booking({
        "customer_name": "Guest", "customer_phone": "+212600000000",
        "activity_id": "a1", "number_of_people": 1, "preferred_date": now.date(),
        "total_amount": "450", "status": "confirmed"})

    alerts = analytics_crud.get_performance_alerts(storage, now=now + timedelta(minutes=1))

    assert booking.status == "confirmed"
    assert alerts.alerts == []
