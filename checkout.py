# checkout.py
import logging
from typing import Any, Optional

from errors import ConfigurationError
from gateway import AbacatePayClient, PixCustomer
from models import PAID, PENDING
from schemas import (
  BillingOut,
  CheckoutResponse,
  CustomerOut,
  PaymentCheckResponse,
  validate_customer,
)
from store import RecordStore

logger = logging.getLogger(__name__)

PRICE = "9.90"
PRICE_CENTS = 990
PIX_EXPIRES_IN = 86400  # 24h
PIX_DESCRIPTION = "Confeitaria Lucrativa - Curso Completo"


class CheckoutService:
  def __init__(self, store: RecordStore, gateway: Optional[AbacatePayClient] = None):
    self.store = store
    self.gateway = gateway

  def _require_gateway(self, error: Optional[str] = None) -> AbacatePayClient:
    if self.gateway is None:
      raise ConfigurationError("ABACATEPAY_API_KEY is not set", error=error)
    return self.gateway

  async def checkout(self, payload: Any) -> CheckoutResponse:
    """Validate the customer, record a pending billing and ask AbacatePay for a PIX QR code."""
    data = validate_customer(payload)
    logger.info("Customer data validated")

    customer = self.store.create_customer(data.model_dump())
    logger.info("Customer created: %s", customer.id)

    billing = self.store.create_billing(
      {"customer_id": customer.id, "amount": PRICE, "status": PENDING}
    )
    logger.info("Billing created: %s", billing.id)

    gateway = self._require_gateway()

    logger.info("Creating PIX QR code for billing %s", billing.id)
    pix = await gateway.create_pix_charge(
      amount_cents=PRICE_CENTS,
      expires_in=PIX_EXPIRES_IN,
      description=PIX_DESCRIPTION,
      customer=PixCustomer(
        name=data.name,
        cellphone=data.phone,
        email=data.email,
        taxId=data.tax_id,
      ),
      external_id=billing.id,
    )
    logger.info("PIX created: %s", pix.id)

    updated = self.store.update_billing(
      billing.id,
      {
        "abacatepay_id": pix.id,
        "pix_code": pix.br_code,
        "qr_code_url": pix.br_code_base64,
        "status": pix.status,
      },
    )

    return CheckoutResponse(
      billing=BillingOut.from_record(updated),
      customer=CustomerOut.from_record(customer),
      pix_id=pix.id,
      pix_code=pix.br_code,
      qr_code_url=pix.br_code_base64,
      amount=pix.amount,
      expires_at=pix.expires_at,
    )

  async def check_payment(self, pix_id: str) -> PaymentCheckResponse:
    gateway = self._require_gateway(error="Internal server error")

    pix = await gateway.check_pix_status(pix_id)
    logger.info("Payment status for %s: %s", pix_id, pix.status)

    # any status other than PAID counts as unpaid, EXPIRED included
    is_paid = pix.status == PAID
    if is_paid:
      billing = self.store.find_billing_by_gateway_id(pix_id)
      if billing is not None and billing.status != PAID:
        self.store.update_billing(billing.id, {"status": PAID})
        logger.info("Billing %s marked as PAID", billing.id)

    return PaymentCheckResponse(status=pix.status, expires_at=pix.expires_at, is_paid=is_paid)
