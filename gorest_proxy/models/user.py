"""User ORM — local copy of a GoREST user record.

Invariants:
    - id is an integer primary key; GoREST ids are stored as-is
    - name, email, gender, status are non-nullable
    - gender/status hold Gender/UserStatus values (core/domain_types.py)
"""

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from gorest_proxy.db.base import Base


class User(Base):
    """User record persisted from GoREST or created locally."""
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    gender: Mapped[str] = mapped_column(String(10), nullable=False)
    status: Mapped[str] = mapped_column(String(10), nullable=False)

    def __repr__(self) -> str:
        return f"User(id={self.id!r}, name={self.name!r}, status={self.status!r})"
