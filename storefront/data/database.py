# storefront/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from storefront.utils.settings import DATABASE_URL

#sqlite (dev/testy) nie lubi sesji dzielonych miedzy watkami
connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, pool_pre_ping=True, connect_args=connect_args)
SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def is_constraint_violation(exc, constraint_name: str, columns: str) -> bool:
    """
    Czy IntegrityError pochodzi z konkretnego constrainta.
    postgres (psycopg2) podaje nazwe w diag, sqlite tylko kolumny w komunikacie.
    """
    orig = getattr(exc, "orig", None)
    diag = getattr(orig, "diag", None)
    name = getattr(diag, "constraint_name", None)
    if name:
        return name == constraint_name
    return f"UNIQUE constraint failed: {columns}" in str(orig)
