# deps.py
from functools import lru_cache
from typing import Optional

from fastapi import Depends

from checkout import CheckoutService
from config import Settings, get_settings
from db import make_engine
from gateway import AbacatePayClient
from store import InMemoryStore, RecordStore, SqlStore


@lru_cache
def _store_for(database_url: str) -> RecordStore:
  if database_url:
    return SqlStore(make_engine(database_url))
  return InMemoryStore()


def get_store(settings: Settings = Depends(get_settings)) -> RecordStore:
  return _store_for(settings.database_url)


def get_gateway(settings: Settings = Depends(get_settings)) -> Optional[AbacatePayClient]:
  if not settings.abacatepay_api_key:
    return None
  return AbacatePayClient(
    settings.abacatepay_api_key,
    base_url=settings.abacatepay_base_url,
    timeout=settings.abacatepay_timeout,
  )


def get_checkout_service(
  store: RecordStore = Depends(get_store),
  gateway: Optional[AbacatePayClient] = Depends(get_gateway),
) -> CheckoutService:
  return CheckoutService(store, gateway)
