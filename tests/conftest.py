import json
import os
import sys

import httpx
import pytest
from fastapi.testclient import TestClient

# Ensure project root is on sys.path for module resolution
ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), os.pardir))
if ROOT_DIR not in sys.path:
  sys.path.insert(0, ROOT_DIR)

from deps import get_gateway, get_store
from gateway import AbacatePayClient
from main import app
from store import InMemoryStore

PIX_DATA = {
  "id": "pix_1",
  "brCode": "000201...",
  "brCodeBase64": "data:...",
  "status": "PENDING",
  "amount": 990,
  "expiresAt": "2024-01-02T00:00:00Z",
}

ANA = {
  "name": "Ana Silva",
  "email": "ana@example.com",
  "phone": "11999999999",
  "taxId": "12345678901",
}


class FakeAbacatePay:
  """Canned AbacatePay responses served through httpx.MockTransport."""

  def __init__(self):
    self.requests = []
    self.create = (200, {"data": PIX_DATA, "error": None})
    self.set_status("PENDING")

  def set_status(self, status):
    self.check = (200, {"data": {"status": status, "expiresAt": PIX_DATA["expiresAt"]}, "error": None})

  def handler(self, request: httpx.Request) -> httpx.Response:
    self.requests.append(request)
    if request.url.path.endswith("/pixQrCode/create"):
      status_code, body = self.create
    elif request.url.path.endswith("/pixQrCode/check"):
      status_code, body = self.check
    else:
      return httpx.Response(404)
    if isinstance(body, str):
      return httpx.Response(status_code, text=body)
    return httpx.Response(status_code, json=body)

  def sent_json(self, index=-1):
    return json.loads(self.requests[index].content)

  def client(self, api_key="test-key") -> AbacatePayClient:
    return AbacatePayClient(api_key, transport=httpx.MockTransport(self.handler))


@pytest.fixture
def store():
  return InMemoryStore()


@pytest.fixture
def fake_gateway():
  return FakeAbacatePay()


@pytest.fixture
def client(store, fake_gateway):
  app.dependency_overrides[get_store] = lambda: store
  app.dependency_overrides[get_gateway] = lambda: fake_gateway.client()
  yield TestClient(app)
  app.dependency_overrides.clear()


@pytest.fixture
def unconfigured_client(store):
  app.dependency_overrides[get_store] = lambda: store
  app.dependency_overrides[get_gateway] = lambda: None
  yield TestClient(app)
  app.dependency_overrides.clear()
