# errors.py
from typing import Any, Optional


class CheckoutError(Exception):
  """Base error turned into a JSON envelope at the request boundary.

  `error` is the public message; callers may override the class default
  per flow (checkout vs payment check).
  """

  status_code = 500
  error = "Internal server error"

  def __init__(self, message: Optional[str] = None, details: Any = None, error: Optional[str] = None):
    if error:
      self.error = error
    super().__init__(message or self.error)
    self.details = details

  def to_dict(self) -> dict:
    body = {"error": self.error}
    if self.details is not None:
      body["details"] = self.details
    return body


class InvalidInput(CheckoutError):
  status_code = 400
  error = "Invalid data"


class ConfigurationError(CheckoutError):
  status_code = 500
  error = "Internal server error while processing payment"


class GatewayError(CheckoutError):
  pass


class GatewayUnavailable(GatewayError):
  status_code = 500
  error = "Error communicating with payment service"


class GatewayRejected(GatewayError):
  status_code = 400
  error = "Error creating PIX"

  def __init__(self, details: Any, error: Optional[str] = None):
    super().__init__(f"Gateway rejected request: {details}", details=details, error=error)
