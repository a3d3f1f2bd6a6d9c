# bazar/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from bazar.utils.settings import DATABASE_URL

engine = create_engine(
    DATABASE_URL,
    pool_pre_ping=True,
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()


def init_db(bind=None):
    """Create all tables registered on Base.metadata."""
    # models have to be imported before create_all
    import bazar.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind or engine)
