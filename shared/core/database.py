from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import StaticPool
from shared.core.config import GROCERY_DATABASE_URL, settings

Base = declarative_base()


def build_engine(url: str):
    if url.startswith("sqlite"):
        # in-memory sqlite must share a single connection across threads
        return create_engine(
            url,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    return create_engine(
        url,
        pool_pre_ping=True,
        pool_recycle=300,
        pool_size=settings.DB_POOL_SIZE,          # max idle connections
        max_overflow=settings.DB_MAX_OVERFLOW,    # max temporary extra connections
        pool_timeout=30                           # wait time before failing
    )


grocery_engine = build_engine(GROCERY_DATABASE_URL)
GrocerySessionLocal = sessionmaker(
    autocommit=False, autoflush=False, bind=grocery_engine)


# Dependency
def get_grocery_db():
    db = GrocerySessionLocal()
    try:
        yield db
    finally:
        db.close()
