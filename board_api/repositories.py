"""Persistence gateway for users and boards.

Repositories stage changes and flush; committing is left to the caller so a
service operation maps to one transaction.
"""

from typing import Optional

from sqlalchemy import update
from sqlalchemy.orm import selectinload
from sqlmodel import Session, col, select

from board_api.models import Board, User


class UserRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, user_id: int) -> Optional[User]:
        return self.session.get(User, user_id)

    def get_by_email(self, email: str) -> Optional[User]:
        return self.session.exec(select(User).where(User.email == email)).first()

    def get_by_name_and_email(self, name: str, email: str) -> Optional[User]:
        stmt = select(User).where(User.name == name, User.email == email)
        return self.session.exec(stmt).first()

    def email_exists(self, email: str) -> bool:
        return self.get_by_email(email) is not None

    def add(self, user: User) -> User:
        self.session.add(user)
        self.session.flush()
        return user


class BoardRepository:
    def __init__(self, session: Session):
        self.session = session

    def get(self, board_id: int) -> Optional[Board]:
        stmt = (
            select(Board)
            .where(Board.id == board_id)
            .options(selectinload(Board.user))
        )
        return self.session.exec(stmt).first()

    def list_newest_first(self) -> list[Board]:
        stmt = (
            select(Board)
            .options(selectinload(Board.user))
            .order_by(col(Board.created_at).desc(), col(Board.id).desc())
        )
        return list(self.session.exec(stmt).all())

    def add(self, board: Board) -> Board:
        self.session.add(board)
        self.session.flush()
        return board

    def increment_view_count(self, board: Board) -> Board:
        """Atomic ``view_count + 1`` at the store, then reload the row."""
        self.session.exec(
            update(Board)
            .where(col(Board.id) == board.id)
            .values(view_count=col(Board.view_count) + 1)
        )
        self.session.flush()
        self.session.refresh(board, attribute_names=["view_count"])
        return board

    def delete(self, board: Board) -> None:
        self.session.delete(board)
        self.session.flush()
