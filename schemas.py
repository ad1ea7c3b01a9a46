# schemas.py
from typing import Any, Dict, List, Optional

from email_validator import EmailNotValidError, validate_email
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from errors import InvalidInput
from models import Billing, Customer


class CustomerIn(BaseModel):
  # wire names only: `tax_id` must not stand in for `taxId`
  name: str = Field(min_length=2)
  email: str
  phone: str = Field(min_length=10)
  tax_id: str = Field(alias="taxId", min_length=11)

  @field_validator("email")
  @classmethod
  def check_email(cls, value: str) -> str:
    # validated only; the address is stored and forwarded as typed
    try:
      validate_email(value, check_deliverability=False)
    except EmailNotValidError as e:
      raise ValueError(f"value is not a valid email address: {e}")
    return value


def _violations(exc: ValidationError) -> List[Dict[str, Any]]:
  return [
    {"path": [str(p) for p in err["loc"]], "message": err["msg"], "code": err["type"]}
    for err in exc.errors(include_url=False)
  ]


def validate_customer(payload: Any) -> CustomerIn:
  """Validate a raw checkout body, raising InvalidInput with one entry per bad field."""
  if not isinstance(payload, dict):
    payload = {}
  try:
    return CustomerIn.model_validate(payload)
  except ValidationError as e:
    raise InvalidInput(details=_violations(e))


class CustomerOut(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  id: str
  name: str
  email: str
  phone: str
  tax_id: str = Field(alias="taxId")

  @classmethod
  def from_record(cls, c: Customer) -> "CustomerOut":
    return cls(id=c.id, name=c.name, email=c.email, phone=c.phone, tax_id=c.tax_id)


class BillingOut(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  id: str
  customer_id: str = Field(alias="customerId")
  amount: str
  status: str
  abacatepay_id: Optional[str] = Field(default=None, alias="abacatePayId")
  pix_code: Optional[str] = Field(default=None, alias="pixCode")
  qr_code_url: Optional[str] = Field(default=None, alias="qrCodeUrl")

  @classmethod
  def from_record(cls, b: Billing) -> "BillingOut":
    return cls(
      id=b.id,
      customer_id=b.customer_id,
      amount=b.amount,
      status=b.status,
      abacatepay_id=b.abacatepay_id,
      pix_code=b.pix_code,
      qr_code_url=b.qr_code_url,
    )


class CheckoutResponse(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  billing: BillingOut
  customer: CustomerOut
  pix_id: str = Field(alias="pixId")
  pix_code: str = Field(alias="pixCode")
  qr_code_url: str = Field(alias="qrCodeUrl")
  amount: int
  expires_at: str = Field(alias="expiresAt")


class PaymentCheckResponse(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  status: str
  expires_at: str = Field(alias="expiresAt")
  is_paid: bool = Field(alias="isPaid")
