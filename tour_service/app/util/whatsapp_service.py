import logging
import re
from datetime import date, datetime
from typing import List, Optional
from urllib.parse import quote

from shared.utils.enums import UserRole
from ..schemas.whatsapp_schemas import (
    BookingLinksOut, BookingNotification, PaymentNotification, WhatsAppContact, WhatsAppLink)
from ..util.pricing import parse_price

logger = logging.getLogger(__name__)

WA_ME_URL = "https://wa.me"

# characters encodeURIComponent leaves alone
URI_COMPONENT_SAFE = "-_.!~*'()"

ADMIN_CONTACTS = [
    WhatsAppContact(name="Ahmed", phone="+212600623630", role=UserRole.ADMIN.value),
    WhatsAppContact(name="Yahia", phone="+212693323368", role=UserRole.ADMIN.value),
    WhatsAppContact(name="Nadia", phone="+212654497354", role=UserRole.SUPER_ADMIN.value),
]

PAYMENT_METHOD_TEXT = {
    "cash": "Espèces (paiement complet)",
    "cash_deposit": "Espèces (acompte)",
}

PAYMENT_STATUS_TEXT = {
    "unpaid": "❌ Non payé",
    "deposit_paid": "🟡 Acompte payé",
    "fully_paid": "✅ Entièrement payé",
}

BOOKING_STATUS_TEXT = {
    "pending": "🟡 En attente",
    "confirmed": "✅ Confirmée",
    "cancelled": "❌ Annulée",
    "completed": "✅ Terminée",
}


def phone_digits(phone: str) -> str:
    return re.sub(r"\D", "", phone or "")


def build_whatsapp_link(phone: str, message: str) -> str:
    return f"{WA_ME_URL}/{phone_digits(phone)}?text={quote(message, safe=URI_COMPONENT_SAFE)}"


def _long_date(value: Optional[date]) -> str:
    if not value:
        return "Non spécifiée"
    return f"{value:%A}, {value:%B} {value.day}, {value.year}"


def _french_date(value: Optional[date]) -> str:
    return value.strftime("%d/%m/%Y") if value else "À confirmer"


def _french_timestamp(value: datetime) -> str:
    return value.strftime("%d/%m/%Y %H:%M:%S")


class WhatsAppService:
    """Formats booking messages and wa.me links for staff to send by hand."""

    def __init__(self, contacts: List[WhatsAppContact] = None):
        self.contacts = list(contacts or ADMIN_CONTACTS)

    def get_admin_contacts(self) -> List[WhatsAppContact]:
        return list(self.contacts)

    def get_admin_links(self, message: str) -> List[WhatsAppLink]:
        return [
            WhatsAppLink(name=c.name, phone=c.phone, role=c.role,
                         link=build_whatsapp_link(c.phone, message))
            for c in self.contacts
        ]

    # ---------------- Message templates ----------------

    def format_booking_message(self, booking, activity_name: str, now: datetime = None) -> str:
        now = now or datetime.now()
        names = ", ".join(booking.participant_names or []) or booking.customer_name
        lines = [
            "📌 New Booking",
            f"Activity: {activity_name}",
            f"Date: {_long_date(booking.preferred_date)}",
            f"People: {booking.number_of_people}",
            f"Names: {names}",
            f"Phone: {booking.customer_phone}",
        ]
        if booking.notes:
            lines.append(f"Notes: {booking.notes}")
        lines += [
            "",
            "💰 INFORMATIONS PAIEMENT:",
            f"• Méthode: {PAYMENT_METHOD_TEXT.get(booking.payment_method or 'cash', 'Espèces')}",
            f"• Statut: {PAYMENT_STATUS_TEXT.get(booking.payment_status, booking.payment_status)}",
            f"• Montant total: {booking.total_amount} MAD",
            f"• Statut réservation: {BOOKING_STATUS_TEXT.get(booking.status, booking.status)}",
            "",
            f"⏰ Réservation créée: {_french_timestamp(now)}",
            "",
            "🎯 ACTION REQUISE:",
            "1. Contactez le client rapidement",
            "2. Confirmez la disponibilité",
            "3. Organisez le point de rendez-vous",
            "4. Préparez l'expérience",
            "",
            f"📞 Contactez {booking.customer_name} au {booking.customer_phone}",
        ]
        return "\n".join(lines)

    def format_customer_confirmation(self, booking, activity_name: str) -> str:
        contacts = "\n".join(f"• {c.name}: {c.phone}" for c in self.contacts)
        return (
            "🏜️ CONFIRMATION DE RÉSERVATION - MarrakechDunes\n"
            "\n"
            f"Bonjour {booking.customer_name},\n"
            "\n"
            "✅ Votre réservation a été enregistrée avec succès !\n"
            "\n"
            "📋 DÉTAILS DE VOTRE RÉSERVATION:\n"
            f"• Activité: {activity_name}\n"
            f"• Date: {_french_date(booking.preferred_date)}\n"
            f"• Nombre de personnes: {booking.number_of_people}\n"
            f"• Montant total: {booking.total_amount} MAD\n"
            f"• ID de réservation: {booking.id}\n"
            "\n"
            "💰 PAIEMENT:\n"
            "• Mode de paiement: Espèces (sur place)\n"
            f"• Statut: {PAYMENT_STATUS_TEXT.get(booking.payment_status, booking.payment_status)}\n"
            "\n"
            "📍 POINT DE RENDEZ-VOUS:\n"
            "Nous vous contacterons sous peu pour confirmer le lieu et l'heure exacte de départ.\n"
            "\n"
            "📞 CONTACT:\n"
            f"{contacts}\n"
            "\n"
            "🎯 PROCHAINES ÉTAPES:\n"
            "1. Notre équipe vous contactera dans les 24h\n"
            "2. Confirmation du point de rendez-vous\n"
            "3. Instructions détaillées pour votre activité\n"
            "\n"
            "Merci d'avoir choisi MarrakechDunes pour votre aventure marocaine !\n"
            "\n"
            "L'équipe MarrakechDunes 🐪"
        )

    def format_payment_message(self, booking, activity_name: str, payment_type: str,
                               now: datetime = None) -> str:
        now = now or datetime.now()
        total = parse_price(booking.total_amount) or 0
        if payment_type == "full":
            title = "PAIEMENT COMPLET"
            amount = f"{total} MAD (complet)"
        else:
            title = "ACOMPTE PAYÉ"
            amount = f"{booking.paid_amount} MAD (acompte)"

        lines = [
            f"💰 {title} CONFIRMÉ - MarrakechDunes",
            "",
            "📋 RÉSERVATION:",
            f"• ID: {booking.id}",
            f"• Client: {booking.customer_name}",
            f"• Activité: {activity_name}",
            f"• Montant payé: {amount}",
            "",
            "✅ STATUT: Paiement confirmé en espèces",
            f"📅 Date: {_french_timestamp(now)}",
        ]
        if payment_type == "deposit":
            lines += ["", f"⚠️ SOLDE RESTANT: {max(total - booking.paid_amount, 0)} MAD"]
        lines += ["", "🎯 PROCHAINES ÉTAPES:"]
        if payment_type == "deposit":
            lines += ["• Collecter le solde restant le jour J",
                      "• Confirmer le point de rendez-vous",
                      "• Préparer l'activité"]
        else:
            lines += ["• Confirmer le point de rendez-vous",
                      "• Préparer l'activité",
                      "• Client entièrement payé"]
        lines += ["", f"📞 Client: {booking.customer_phone}"]
        return "\n".join(lines)

    # ---------------- Notifications ----------------

    def booking_notification(self, booking, activity_name: str) -> BookingNotification:
        message = self.format_booking_message(booking, activity_name)
        customer_message = self.format_customer_confirmation(booking, activity_name)

        for contact in self.contacts:
            logger.info("WhatsApp booking alert for %s (%s) %s:\n%s",
                        contact.name, contact.role.upper(), contact.phone, message)
        logger.info("WhatsApp customer confirmation to %s:\n%s",
                    booking.customer_phone, customer_message)

        return BookingNotification(
            recipients=self.get_admin_contacts(),
            message=message,
            whatsapp_links=self.get_admin_links(message),
            customer_message=customer_message,
            customer_whatsapp_link=build_whatsapp_link(booking.customer_phone, customer_message),
        )

    def payment_notification(self, booking, activity_name: str, payment_type: str) -> PaymentNotification:
        message = self.format_payment_message(booking, activity_name, payment_type)
        for contact in self.contacts:
            logger.info("WhatsApp payment confirmation for %s %s:\n%s",
                        contact.name, contact.phone, message)

        return PaymentNotification(
            payment_type=payment_type,
            message=message,
            whatsapp_links=self.get_admin_links(message),
        )

    def booking_links(self, booking, activity_name: str) -> BookingLinksOut:
        message = self.format_booking_message(booking, activity_name)
        customer_message = self.format_customer_confirmation(booking, activity_name)
        return BookingLinksOut(
            booking_id=booking.id,
            message=message,
            whatsapp_links=self.get_admin_links(message),
            customer_message=customer_message,
            customer_whatsapp_link=build_whatsapp_link(booking.customer_phone, customer_message),
        )


whatsapp_service = WhatsAppService()
