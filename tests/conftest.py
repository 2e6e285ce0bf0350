import pytest
import os
import sys

CURRENT_DIR = os.path.dirname(__file__)
SERVICE_ROOT = os.path.dirname(CURRENT_DIR)
if SERVICE_ROOT not in sys.path:
    sys.path.insert(0, SERVICE_ROOT)

# Настройки читаются при импорте, поэтому задаём их до импорта приложения
os.environ.setdefault("DATABASE_URL", "sqlite:///./test_accounts.db")
os.environ.setdefault("PASSWORD_ROUNDS", "4")
os.environ.setdefault("LOG_LEVEL", "WARNING")

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from userauth.infrastructure.models import Base
from userauth.infrastructure.repositories import AccountRepository
from userauth.infrastructure.security import CredentialStore, build_context


@pytest.fixture
def store():
    """Хранилище с минимальной стоимостью bcrypt, чтобы тесты были быстрыми"""
    return CredentialStore(build_context(rounds=4))


@pytest.fixture
def db_session():
    """Сессия in-memory SQLite с созданными таблицами"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine, autocommit=False, autoflush=False)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


@pytest.fixture
def repo(db_session):
    return AccountRepository(db_session)
