from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker


def build_engine(database_url: str) -> Engine:
    if database_url.startswith("sqlite"):
        # sync-хендлеры FastAPI выполняются в пуле потоков
        return create_engine(database_url, connect_args={"check_same_thread": False})
    connect_args = {}
    if database_url.startswith("postgresql"):
        connect_args = {"client_encoding": "utf8"}
    return create_engine(
        database_url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=3600,
        connect_args=connect_args,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)
