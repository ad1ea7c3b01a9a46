import pytest
from sqlalchemy.pool import StaticPool
from sqlmodel import create_engine

from models import PAID, PENDING
from store import InMemoryStore, SqlStore

CUSTOMER = {"name": "Ana Silva", "email": "ana@example.com", "phone": "11999999999", "tax_id": "12345678901"}


def sqlite_store():
  engine = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
  return SqlStore(engine)


@pytest.fixture(params=["memory", "sql"])
def any_store(request):
  if request.param == "memory":
    return InMemoryStore()
  return sqlite_store()


def test_create_customer_generates_distinct_ids(any_store):
  ids = set()
  for _ in range(20):
    c = any_store.create_customer(CUSTOMER)
    assert c.id
    ids.add(c.id)
    assert any_store.get_customer(c.id).tax_id == "12345678901"
  assert len(ids) == 20


def test_create_billing_defaults_to_pending(any_store):
  b = any_store.create_billing({"customer_id": "c1", "amount": "9.90"})
  assert b.status == PENDING
  assert b.abacatepay_id is None
  assert any_store.get_billing(b.id).amount == "9.90"


def test_update_billing_merges_patch(any_store):
  b = any_store.create_billing({"customer_id": "c1", "amount": "9.90"})
  updated = any_store.update_billing(b.id, {"abacatepay_id": "pix_1", "pix_code": "000201"})
  assert updated.abacatepay_id == "pix_1"
  assert updated.pix_code == "000201"
  assert updated.customer_id == "c1"
  assert updated.status == PENDING


def test_update_unknown_billing_returns_none(any_store):
  b = any_store.create_billing({"customer_id": "c1", "amount": "9.90"})
  assert any_store.update_billing("missing", {"status": PAID}) is None
  assert any_store.get_billing(b.id).status == PENDING
  assert any_store.get_billing("missing") is None


def test_update_unknown_billing_leaves_memory_collection_alone():
  s = InMemoryStore()
  s.create_billing({"customer_id": "c1", "amount": "9.90"})
  before = dict(s.billings)
  assert s.update_billing("missing", {"status": PAID}) is None
  assert s.billings == before


def test_find_billing_by_gateway_id(any_store):
  a = any_store.create_billing({"customer_id": "c1", "amount": "9.90"})
  b = any_store.create_billing({"customer_id": "c2", "amount": "9.90"})
  any_store.update_billing(b.id, {"abacatepay_id": "pix_2"})
  assert any_store.find_billing_by_gateway_id("pix_2").id == b.id
  assert any_store.find_billing_by_gateway_id("pix_9") is None
  assert a.id != b.id


def test_sql_store_stamps_created_at():
  s = sqlite_store()
  c = s.create_customer(CUSTOMER)
  b = s.create_billing({"customer_id": c.id, "amount": "9.90"})
  assert s.get_customer(c.id).created_at is not None
  assert s.get_billing(b.id).created_at is not None
