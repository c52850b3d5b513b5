"""Helpers shared by the unit and component tests."""
from app.domain.schemas import Address, CustomerInfo


class RecordingNotifier:
    """Notifier that keeps every event in memory."""

    def __init__(self):
        self.events = []

    def notify(self, event: dict) -> None:
        self.events.append(event)


class FailingNotifier:
    """Notifier whose transport is down."""

    def notify(self, event: dict) -> None:
        raise ConnectionError("broker unreachable")


CUSTOMER = CustomerInfo(name="Ada Lovelace", email="ada@example.com", phone="+44 20 7946 0000")
SHIPPING = Address(address="12 Analytical Row", city="London", state="Greater London",
                   country="UK", zip_code="N1 9GU")
BILLING = Address(address="1 Engine Street", city="Cambridge", state="Cambridgeshire",
                  country="UK", zip_code="CB2 1TN")

CHECKOUT_PAYLOAD = {
    "customerName": CUSTOMER.name,
    "customerEmail": CUSTOMER.email,
    "customerPhone": CUSTOMER.phone,
    "shippingAddress": SHIPPING.address,
    "shippingCity": SHIPPING.city,
    "shippingState": SHIPPING.state,
    "shippingCountry": SHIPPING.country,
    "shippingZipCode": SHIPPING.zip_code,
}
