from sqlmodel import SQLModel, create_engine
from sqlalchemy.pool import StaticPool


def create_storage_engine(url: str):
    # in-memory SQLite must share one connection or every session sees an empty db
    if url in ("sqlite://", "sqlite:///:memory:"):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )

    connect_args = {"check_same_thread": False} if url.startswith("sqlite") else {}
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        connect_args=connect_args,
    )


def create_db_and_tables(engine):
    from storefront.models import stored_value  # noqa: F401
    SQLModel.metadata.create_all(engine)
