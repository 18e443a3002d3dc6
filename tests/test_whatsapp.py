from datetime import date, datetime, timezone
from urllib.parse import unquote

from tour_service.app.schemas.bookings_schemas import BookingOut
from tour_service.app.util.whatsapp_service import (
    WhatsAppService, build_whatsapp_link, phone_digits)


def make_booking(**overrides) -> BookingOut:
    values = dict(
        id="booking-1",
        customer_name="Marie",
        customer_phone="+33 6 12 34 56 78",
        activity_id="activity-1",
        number_of_people=2,
        preferred_date=date(2025, 7, 15),
        participant_names=["Marie", "Paul"],
        total_amount="900",
        created_at=datetime.now(timezone.utc),
    )
    values.update(overrides)
    return BookingOut(**values)


def test_phone_digits_strips_everything_but_digits():
    assert phone_digits("+212 600-623630") == "212600623630"


def test_link_encodes_like_encode_uri_component():
    link = build_whatsapp_link("+212600623630", "Hello World! (déjà) a&b=c")
    assert link == ("https://wa.me/212600623630?text="
                    "Hello%20World!%20(d%C3%A9j%C3%A0)%20a%26b%3Dc")


def test_admin_contacts():
    contacts = WhatsAppService().get_admin_contacts()
    assert [(c.name, c.phone, c.role) for c in contacts] == [
        ("Ahmed", "+212600623630", "admin"),
        ("Yahia", "+212693323368", "admin"),
        ("Nadia", "+212654497354", "superadmin"),
    ]


def test_booking_notification_links_every_admin_and_the_customer():
    booking = make_booking()
    notification = WhatsAppService().booking_notification(booking, "Agafay Desert Combo Experience")

    assert notification.success
    assert len(notification.whatsapp_links) == 3
    assert notification.whatsapp_links[0].link.startswith("https://wa.me/212600623630?text=")
    assert notification.customer_whatsapp_link.startswith("https://wa.me/33612345678?text=")

    assert "Activity: Agafay Desert Combo Experience" in notification.message
    assert "Names: Marie, Paul" in notification.message
    assert "Date: Tuesday, July 15, 2025" in notification.message

    assert "Bonjour Marie" in notification.customer_message
    assert "• Date: 15/07/2025" in notification.customer_message
    assert "booking-1" in notification.customer_message
    assert unquote(notification.customer_whatsapp_link.split("text=")[1]) == notification.customer_message


def test_notes_line_only_when_notes_given():
    service = WhatsAppService()
    assert "Notes:" not in service.format_booking_message(make_booking(), "Trip")
    assert "Notes: Vegetarian" in service.format_booking_message(make_booking(notes="Vegetarian"), "Trip")


def test_deposit_payment_message_shows_remaining_balance():
    booking = make_booking(payment_status="deposit_paid", paid_amount=270, deposit_amount=270)
    notification = WhatsAppService().payment_notification(booking, "Trip", "deposit")

    assert notification.payment_type == "deposit"
    assert "ACOMPTE PAYÉ" in notification.message
    assert "270 MAD (acompte)" in notification.message
    assert "SOLDE RESTANT: 630 MAD" in notification.message


def test_full_payment_message():
    booking = make_booking(payment_status="fully_paid", paid_amount=900)
    notification = WhatsAppService().payment_notification(booking, "Trip", "full")

    assert "PAIEMENT COMPLET" in notification.message
    assert "900 MAD (complet)" in notification.message
    assert "SOLDE RESTANT" not in notification.message
