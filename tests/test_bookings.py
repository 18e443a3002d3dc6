import logging

from conftest import booking_payload, find_activity, login_superadmin

AGAFAY = "Agafay Desert Combo Experience"


def create_booking(client, **overrides):
    activity = find_activity(client, AGAFAY)
    response = client.post("/api/bookings", json=booking_payload(activity["id"], **overrides))
    assert response.status_code == 201, response.text
    return response.json()


def test_booking_for_two_people_on_450_activity(client):
    activity = find_activity(client, AGAFAY)
    assert activity["price"] == "450"

    response = client.post("/api/bookings", json=booking_payload(activity["id"]))

    assert response.status_code == 201
    booking = response.json()
    assert booking["totalAmount"] == "900"
    assert booking["status"] == "pending"
    assert booking["paymentStatus"] == "unpaid"
    assert booking["paidAmount"] == 0
    assert booking["preferredDate"] == "2025-07-15"
    assert booking["participantNames"] == ["Marie", "Paul"]

    notification = booking["notification"]
    assert len(notification["whatsappLinks"]) == 3
    assert notification["customerWhatsappLink"].startswith("https://wa.me/33612345678?text=")


def test_participant_names_default_to_customer(client):
    booking = create_booking(client, participantNames=None, numberOfPeople=1)
    assert booking["participantNames"] == ["Marie"]
    assert booking["totalAmount"] == "450"


def test_total_amount_truncates_decimal_price(client, storage):
    activity = storage.create_activity({
        "name": "Sunset Camel Ride", "description": "Camels", "price": "450.90",
        "image": "/img.jpg", "category": "Desert"})

    response = client.post("/api/bookings", json=booking_payload(activity.id, numberOfPeople=3))

    assert response.status_code == 201
    assert response.json()["totalAmount"] == "1350"


def test_unknown_activity_is_404(client):
    response = client.post("/api/bookings", json=booking_payload("missing-activity"))
    assert response.status_code == 404
    assert response.json() == {"message": "Activity not found"}


def test_zero_people_is_validation_error(client):
    activity = find_activity(client, AGAFAY)
    response = client.post("/api/bookings", json=booking_payload(activity["id"], numberOfPeople=0))
    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation error"
    assert body["errors"]


def test_script_tags_are_stripped_from_input(client):
    booking = create_booking(client, customerName="<script>alert(1)</script>Marie",
                             notes="Call me <script>x()</script>please")
    assert booking["customerName"] == "Marie"
    assert booking["notes"] == "Call me please"


def test_admin_lists_bookings_with_activity(admin_client):
    first = create_booking(admin_client)
    second = create_booking(admin_client, customerName="Jean")

    response = admin_client.get("/api/admin/bookings")

    assert response.status_code == 200
    bookings = response.json()
    assert [b["id"] for b in bookings] == [second["id"], first["id"]]
    assert bookings[0]["activity"]["name"] == AGAFAY


def test_admin_gets_single_booking(admin_client):
    booking = create_booking(admin_client)

    response = admin_client.get(f"/api/admin/bookings/{booking['id']}")
    assert response.status_code == 200
    assert response.json()["activity"]["price"] == "450"

    assert admin_client.get("/api/admin/bookings/nope").status_code == 404


def test_update_status_writes_audit_entry(admin_client, storage):
    booking = create_booking(admin_client)

    response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/status",
                                  json={"status": "confirmed"})

    assert response.status_code == 200
    assert response.json()["status"] == "confirmed"
    actions = [log.action for log in storage.list_audit_logs()]
    assert f"Updated booking {booking['id']} status to confirmed" in actions


def test_update_status_rejects_unknown_status(admin_client):
    booking = create_booking(admin_client)
    response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/status",
                                  json={"status": "shipped"})
    assert response.status_code == 400


def test_update_status_missing_booking(admin_client):
    response = admin_client.patch("/api/admin/bookings/nope/status", json={"status": "confirmed"})
    assert response.status_code == 404
    assert response.json()["message"] == "Booking not found"


def test_full_payment_pays_total(admin_client):
    booking = create_booking(admin_client)

    response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/payment",
                                  json={"mode": "full"})

    assert response.status_code == 200
    body = response.json()
    assert body["paidAmount"] == int(body["totalAmount"]) == 900
    assert body["paymentStatus"] == "fully_paid"
    assert body["paymentMethod"] == "cash"
    assert body["notification"]["paymentType"] == "full"


def test_deposit_then_balance(admin_client, storage):
    booking = create_booking(admin_client)
    url = f"/api/admin/bookings/{booking['id']}/payment"

    deposit = admin_client.patch(url, json={"mode": "deposit"}).json()
    assert deposit["paymentStatus"] == "deposit_paid"
    assert deposit["paidAmount"] == 270
    assert deposit["depositAmount"] == 270
    assert deposit["paymentMethod"] == "cash_deposit"
    assert deposit["notification"]["paymentType"] == "deposit"

    balance = admin_client.patch(url, json={"mode": "balance"}).json()
    assert balance["paymentStatus"] == "fully_paid"
    assert balance["paidAmount"] == 900

    actions = [log.action for log in storage.list_audit_logs()]
    assert f"Updated booking {booking['id']} payment status to fully_paid" in actions


def test_raw_payment_update_is_stored_as_given(admin_client):
    booking = create_booking(admin_client)

    response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/payment", json={
        "paymentStatus": "deposit_paid",
        "paidAmount": 100,
        "paymentMethod": "cash_deposit",
        "depositAmount": 100,
    })

    assert response.status_code == 200
    body = response.json()
    assert body["paymentStatus"] == "deposit_paid"
    assert body["paidAmount"] == 100
    assert body["depositAmount"] == 100


def test_payment_update_needs_mode_or_status(admin_client):
    booking = create_booking(admin_client)
    response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/payment",
                                  json={"paidAmount": 100})
    assert response.status_code == 400


def test_payment_update_missing_booking(admin_client):
    response = admin_client.patch("/api/admin/bookings/nope/payment", json={"mode": "full"})
    assert response.status_code == 404


def test_whatsapp_links_for_booking(admin_client):
    booking = create_booking(admin_client)

    response = admin_client.get(f"/api/admin/bookings/{booking['id']}/whatsapp-links")

    assert response.status_code == 200
    body = response.json()
    assert body["bookingId"] == booking["id"]
    assert [link["name"] for link in body["whatsappLinks"]] == ["Ahmed", "Yahia", "Nadia"]
    assert body["customerWhatsappLink"].startswith("https://wa.me/33612345678")


def test_superadmin_can_manage_bookings(client):
    booking = create_booking(client)
    login_superadmin(client)
    response = client.patch(f"/api/admin/bookings/{booking['id']}/status",
                            json={"status": "completed"})
    assert response.status_code == 200


def test_raw_payment_update_rejects_null_paid_amount(admin_client):
    booking = create_booking(admin_client)

    response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/payment", json={
        "paymentStatus": "fully_paid", "paidAmount": None})

    assert response.status_code == 400
    assert response.json()["message"] == "Validation error"


def test_overpaying_deposit_is_logged(admin_client, caplog):
    booking = create_booking(admin_client)

    with caplog.at_level(logging.WARNING):
        response = admin_client.patch(f"/api/admin/bookings/{booking['id']}/payment",
                                      json={"mode": "deposit", "amount": 5000})

    assert response.status_code == 200
    assert response.json()["paidAmount"] == 5000
    assert f"Booking {booking['id']} paid amount 5000 exceeds total 900" in caplog.text
