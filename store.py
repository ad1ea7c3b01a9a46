# store.py
"""Record stores for customers and billings.

`InMemoryStore` keeps everything in process memory and is lost on restart.
`SqlStore` writes through SQLModel and is picked when DATABASE_URL is set.
Neither one locks; concurrent updates to the same billing are last-write-wins.
"""
import uuid
from typing import Any, Dict, Optional

from sqlalchemy.engine import Engine
from sqlmodel import select

from db import init_db, new_session
from models import Billing, Customer, PENDING


def generate_id() -> str:
  return uuid.uuid4().hex


class RecordStore:
  def create_customer(self, data: Dict[str, Any]) -> Customer:
    raise NotImplementedError()

  def create_billing(self, data: Dict[str, Any]) -> Billing:
    raise NotImplementedError()

  def update_billing(self, billing_id: str, patch: Dict[str, Any]) -> Optional[Billing]:
    raise NotImplementedError()

  def find_billing_by_gateway_id(self, gateway_id: str) -> Optional[Billing]:
    raise NotImplementedError()

  def get_customer(self, customer_id: str) -> Optional[Customer]:
    raise NotImplementedError()

  def get_billing(self, billing_id: str) -> Optional[Billing]:
    raise NotImplementedError()


def _new_customer(data: Dict[str, Any]) -> Customer:
  return Customer(**{**data, "id": generate_id()})


def _new_billing(data: Dict[str, Any]) -> Billing:
  values = {"status": PENDING, **data, "id": generate_id()}
  return Billing(**values)


class InMemoryStore(RecordStore):
  def __init__(self):
    self.customers: Dict[str, Customer] = {}
    self.billings: Dict[str, Billing] = {}

  def create_customer(self, data):
    customer = _new_customer(data)
    self.customers[customer.id] = customer
    return customer

  def create_billing(self, data):
    billing = _new_billing(data)
    self.billings[billing.id] = billing
    return billing

  def update_billing(self, billing_id, patch):
    billing = self.billings.get(billing_id)
    if billing is None:
      return None
    for key, value in patch.items():
      setattr(billing, key, value)
    return billing

  def find_billing_by_gateway_id(self, gateway_id):
    for billing in self.billings.values():
      if billing.abacatepay_id == gateway_id:
        return billing
    return None

  def get_customer(self, customer_id):
    return self.customers.get(customer_id)

  def get_billing(self, billing_id):
    return self.billings.get(billing_id)


class SqlStore(RecordStore):
  def __init__(self, engine: Engine):
    self.engine = engine
    init_db(engine)

  def _add(self, row):
    with new_session(self.engine) as session:
      session.add(row)
      session.commit()
      session.refresh(row)
    return row

  def create_customer(self, data):
    return self._add(_new_customer(data))

  def create_billing(self, data):
    return self._add(_new_billing(data))

  def update_billing(self, billing_id, patch):
    with new_session(self.engine) as session:
      billing = session.get(Billing, billing_id)
      if billing is None:
        return None
      for key, value in patch.items():
        setattr(billing, key, value)
      session.add(billing)
      session.commit()
      session.refresh(billing)
      return billing

  def find_billing_by_gateway_id(self, gateway_id):
    with new_session(self.engine) as session:
      stmt = select(Billing).where(Billing.abacatepay_id == gateway_id)
      return session.exec(stmt).first()

  def get_customer(self, customer_id):
    with new_session(self.engine) as session:
      return session.get(Customer, customer_id)

  def get_billing(self, billing_id):
    with new_session(self.engine) as session:
      return session.get(Billing, billing_id)
