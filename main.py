import logging
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from checkout_route import router as checkout_router
from config import get_settings
from errors import CheckoutError, ConfigurationError, InvalidInput

logging.basicConfig(
  level=logging.INFO,
  format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

SERVICE_NAME = "confeitaria-api"

SECURITY_HEADERS = {
  "X-Content-Type-Options": "nosniff",
  "X-Frame-Options": "SAMEORIGIN",
  "Referrer-Policy": "no-referrer",
  "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
  "Cross-Origin-Opener-Policy": "same-origin",
}

settings = get_settings()

app = FastAPI(title="Confeitaria API", version="1.0.0")
app.add_middleware(GZipMiddleware)
app.add_middleware(
  CORSMiddleware,
  allow_origins=settings.cors_origins,
  allow_credentials=True,
  allow_methods=["*"],
  allow_headers=["*"],
)
app.include_router(checkout_router)

if not settings.abacatepay_api_key:
  logger.error("ABACATEPAY_API_KEY is not set; checkout and payment check will fail")
else:
  logger.info("AbacatePay API configured")


@app.middleware("http")
async def security_headers(request: Request, call_next):
  response = await call_next(request)
  for name, value in SECURITY_HEADERS.items():
    response.headers.setdefault(name, value)
  return response


@app.exception_handler(CheckoutError)
async def checkout_error_handler(request: Request, exc: CheckoutError):
  logger.error("%s %s failed: %s", request.method, request.url.path, exc)
  body = exc.to_dict()
  if isinstance(exc, ConfigurationError) and get_settings().is_development:
    body["message"] = str(exc)
  return JSONResponse(status_code=exc.status_code, content=body)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
  details = [
    {"path": [str(p) for p in err.get("loc", ())], "message": err.get("msg", ""), "code": err.get("type", "")}
    for err in exc.errors()
  ]
  return await checkout_error_handler(request, InvalidInput(details=details))


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
  if exc.status_code == 404:
    return JSONResponse(status_code=404, content={"error": "Endpoint not found"})
  return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
  logger.exception("Unhandled error on %s %s", request.method, request.url.path)
  body = {"error": "Internal server error"}
  if get_settings().is_development:
    body["message"] = str(exc)
  # ServerErrorMiddleware sits outside security_headers
  return JSONResponse(status_code=500, content=body, headers=SECURITY_HEADERS)


@app.get("/health")
def health():
  return {
    "status": "ok",
    "timestamp": datetime.now(timezone.utc).isoformat(),
    "service": SERVICE_NAME,
  }


if __name__ == "__main__":
  logger.info("Server starting on port %s", settings.port)
  logger.info("Environment: %s", settings.environment)
  logger.info("CORS allowed for: %s", ", ".join(settings.cors_origins))
  uvicorn.run(app, host="0.0.0.0", port=settings.port)
