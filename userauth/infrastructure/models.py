from datetime import datetime

from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy import String, Integer, DateTime

class Base(DeclarativeBase): pass

class AccountORM(Base):
    __tablename__ = "accounts"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(50), nullable=False)
    # email хранится как введён; уникальность и поиск по нормализованной копии.
    # Длину не ограничиваем: валидатор её не проверяет
    email: Mapped[str] = mapped_column(String, nullable=False)
    email_normalized: Mapped[str] = mapped_column(String, unique=True, index=True, nullable=False)
    password_digest: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    def __repr__(self) -> str:
        return f"AccountORM(id={self.id!r}, email={self.email!r})"
