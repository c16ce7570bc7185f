from __future__ import annotations

from urllib.parse import quote

from .formatting import format_rupiah

WHATSAPP_BASE = "https://wa.me/"


def whatsapp_contact_url(phone: str) -> str:
    digits = "".join(ch for ch in phone if ch.isdigit())
    if not digits:
        raise ValueError("WhatsApp phone number must contain digits")
    return f"{WHATSAPP_BASE}{digits}"


def _with_text(phone: str, text: str) -> str:
    return f"{whatsapp_contact_url(phone)}?text={quote(text)}"


def whatsapp_inquiry_url(product_name: str, *, phone: str) -> str:
    """Link used on product cards."""

    return _with_text(phone, f"Halo, saya tertarik dengan {product_name}, apakah masih tersedia?")


def whatsapp_order_url(product_name: str, price: float, *, phone: str) -> str:
    """Link used on the product detail page."""

    text = (
        f"Halo Admin, saya tertarik dengan produk *{product_name}* "
        f"yang harganya {format_rupiah(price)}. Apakah stoknya masih ada?"
    )
    return _with_text(phone, text)
