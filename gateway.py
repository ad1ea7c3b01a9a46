# gateway.py
"""AbacatePay PIX client.

Two calls, no retries: create a PIX QR code and check its status.
HTTP failures map to GatewayUnavailable, an `error` field in the body maps
to GatewayRejected with the gateway's own error passed through as details.
"""
import logging
from typing import Any, Dict, Optional

import httpx
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from config import DEFAULT_GATEWAY_URL
from errors import ConfigurationError, GatewayRejected, GatewayUnavailable

logger = logging.getLogger(__name__)


class PixCustomer(BaseModel):
  name: str
  cellphone: str
  email: str
  taxId: str


class PixCharge(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  id: str
  br_code: str = Field(alias="brCode")
  br_code_base64: str = Field(alias="brCodeBase64")
  status: str
  amount: int
  expires_at: str = Field(alias="expiresAt")


class PixStatus(BaseModel):
  model_config = ConfigDict(populate_by_name=True)

  status: str
  expires_at: str = Field(alias="expiresAt")


class AbacatePayClient:
  def __init__(
    self,
    api_key: str,
    base_url: str = DEFAULT_GATEWAY_URL,
    timeout: float = 30.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
  ):
    if not api_key:
      raise ConfigurationError("ABACATEPAY_API_KEY is not set")
    self.api_key = api_key
    self.base_url = base_url.rstrip("/")
    self.timeout = timeout
    self.transport = transport

  def _headers(self) -> Dict[str, str]:
    return {
      "Authorization": f"Bearer {self.api_key}",
      "Content-Type": "application/json",
    }

  async def _send(self, method: str, path: str, unavailable: str, rejected: str, **kwargs) -> Dict[str, Any]:
    url = f"{self.base_url}{path}"
    try:
      async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
        r = await client.request(method, url, headers=self._headers(), **kwargs)
    except httpx.HTTPError as e:
      logger.error("AbacatePay request failed: %s %s: %s", method, path, e)
      raise GatewayUnavailable(f"{method} {path} failed: {e}", error=unavailable) from e

    if not r.is_success:
      logger.error("AbacatePay API error: %s %s", r.status_code, r.reason_phrase)
      raise GatewayUnavailable(f"AbacatePay returned {r.status_code}", error=unavailable)

    try:
      body = r.json()
    except ValueError as e:
      raise GatewayUnavailable("AbacatePay returned a non-JSON body", error=unavailable) from e
    if not isinstance(body, dict):
      raise GatewayUnavailable("AbacatePay returned an unexpected body", error=unavailable)

    if body.get("error"):
      logger.error("AbacatePay rejected %s: %s", path, body["error"])
      raise GatewayRejected(body["error"], error=rejected)

    data = body.get("data")
    if not isinstance(data, dict):
      raise GatewayUnavailable("AbacatePay response has no data", error=unavailable)
    return data

  async def create_pix_charge(
    self,
    amount_cents: int,
    expires_in: int,
    description: str,
    customer: PixCustomer,
    external_id: str,
  ) -> PixCharge:
    payload = {
      "amount": amount_cents,
      "expiresIn": expires_in,
      "description": description,
      "customer": customer.model_dump(),
      "metadata": {"externalId": external_id},
    }
    data = await self._send(
      "POST",
      "/pixQrCode/create",
      unavailable="Error communicating with payment service",
      rejected="Error creating PIX",
      json=payload,
    )
    try:
      return PixCharge.model_validate(data)
    except ValidationError as e:
      raise GatewayUnavailable(
        f"Malformed PIX charge: {e}", error="Error communicating with payment service"
      ) from e

  async def check_pix_status(self, pix_id: str) -> PixStatus:
    data = await self._send(
      "GET",
      "/pixQrCode/check",
      unavailable="Error checking payment status",
      rejected="Error verifying payment",
      params={"id": pix_id},
    )
    try:
      return PixStatus.model_validate(data)
    except ValidationError as e:
      raise GatewayUnavailable(
        f"Malformed PIX status: {e}", error="Error checking payment status"
      ) from e
