# checkout_route.py
import json
import logging
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends, Request

from checkout import CheckoutService
from config import Settings, get_settings
from deps import get_checkout_service
from errors import InvalidInput
from schemas import CheckoutResponse, PaymentCheckResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["checkout"])

FORM_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")

async def read_payload(request: Request) -> Any:
  """Checkout body as a dict: JSON or form-encoded, None when empty."""
  content_type = request.headers.get("content-type", "")
  if content_type.startswith(FORM_TYPES):
    form = await request.form()
    return {k: v for k, v in form.items() if isinstance(v, str)}

  body = await request.body()
  if not body.strip():
    return None
  try:
    return json.loads(body)
  except ValueError:
    raise InvalidInput(details=[{"path": ["body"], "message": "JSON decode error", "code": "json_invalid"}])

@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
  payload: Any = Depends(read_payload),
  service: CheckoutService = Depends(get_checkout_service),
):
  logger.info("Checkout request received")
  result = await service.checkout(payload)
  logger.info("Checkout completed for billing %s", result.billing.id)
  return result

@router.get("/payment/check/{pix_id}", response_model=PaymentCheckResponse)
async def check_payment(pix_id: str, service: CheckoutService = Depends(get_checkout_service)):
  logger.info("Checking payment for PIX id %s", pix_id)
  return await service.check_payment(pix_id)

@router.get("/test")
def api_test(settings: Settings = Depends(get_settings)):
  return {
    "message": "API working!",
    "timestamp": datetime.now(timezone.utc).isoformat(),
    "environment": settings.environment,
  }
