from typing import List, Optional

from shared.core.schemas import CamelModel


class WhatsAppContact(CamelModel):
    name: str
    phone: str
    role: str


class WhatsAppLink(CamelModel):
    name: str
    phone: str
    role: Optional[str] = None
    link: str


class BookingNotification(CamelModel):
    success: bool = True
    recipients: List[WhatsAppContact]
    message: str
    whatsapp_links: List[WhatsAppLink]
    customer_message: str
    customer_whatsapp_link: str


class PaymentNotification(CamelModel):
    success: bool = True
    payment_type: str
    message: str
    whatsapp_links: List[WhatsAppLink]


class BookingLinksOut(CamelModel):
    booking_id: str
    message: str
    whatsapp_links: List[WhatsAppLink]
    customer_message: str
    customer_whatsapp_link: str
