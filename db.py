# db.py
from sqlalchemy.engine import Engine
from sqlmodel import SQLModel, create_engine, Session

def make_engine(database_url: str) -> Engine:
  if not database_url:
    raise RuntimeError("DATABASE_URL is not set")
  return create_engine(database_url, echo=False, pool_pre_ping=True)

def init_db(engine: Engine) -> None:
  SQLModel.metadata.create_all(engine)

def new_session(engine: Engine) -> Session:
  return Session(engine, expire_on_commit=False)
