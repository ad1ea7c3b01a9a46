# models.py
from typing import Optional
from datetime import datetime, timezone
from sqlmodel import SQLModel, Field

PENDING = "PENDING"
PAID = "PAID"

def utcnow() -> datetime:
  return datetime.now(timezone.utc)

class Customer(SQLModel, table=True):
  id: str = Field(primary_key=True, index=True)
  name: str
  email: str
  phone: str
  tax_id: str
  created_at: datetime = Field(default_factory=utcnow)

class Billing(SQLModel, table=True):
  id: str = Field(primary_key=True, index=True)
  customer_id: str = Field(index=True)  # not a foreign key
  amount: str = "9.90"
  status: str = PENDING  # PENDING|PAID|gateway-reported
  abacatepay_id: Optional[str] = Field(default=None, index=True)
  pix_code: Optional[str] = None
  qr_code_url: Optional[str] = None
  created_at: datetime = Field(default_factory=utcnow)
