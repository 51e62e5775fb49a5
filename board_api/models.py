from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field, Relationship, SQLModel


def utcnow() -> datetime:
    # naive UTC in a plain DateTime column; SQLite does not keep tzinfo
    return datetime.now(timezone.utc).replace(tzinfo=None)


class UserBase(SQLModel):
    name: str = Field(max_length=50)
    email: str = Field(max_length=100, unique=True, index=True)


class User(UserBase, table=True):
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    boards: list["Board"] = Relationship(back_populates="user", cascade_delete=True)


class BoardBase(SQLModel):
    title: str = Field(max_length=200)
    content: str


class Board(BoardBase, table=True):
    __tablename__ = "boards"

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="users.id", ondelete="CASCADE", index=True)
    view_count: int = Field(default=0)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime, index=True)
    updated_at: datetime = Field(default_factory=utcnow, sa_type=DateTime)

    user: Optional[User] = Relationship(back_populates="boards")
