"""Board CRUD with per-post ownership checks.

Ownership is the only authorization rule: a board can be edited or deleted
by the user whose id is stored in ``board.user_id``. Any authenticated user
can list and read boards, and every detail read bumps the view counter.
"""

import logging

from sqlmodel import Session

from board_api.errors import ErrorCode, ServiceResult
from board_api.models import Board, utcnow
from board_api.repositories import BoardRepository
from board_api.schemas import BoardResponse

logger = logging.getLogger(__name__)

SUMMARY_LENGTH = 100
ELLIPSIS = "..."

MSG_LIST_OK = "Boards loaded."
MSG_GET_OK = "Board loaded."
MSG_CREATE_OK = "Board created."
MSG_UPDATE_OK = "Board updated."
MSG_DELETE_OK = "Board deleted."
MSG_NOT_FOUND = "Board not found."
MSG_FORBIDDEN_UPDATE = "You do not have permission to edit this board."
MSG_FORBIDDEN_DELETE = "You do not have permission to delete this board."


def summarize(content: str, limit: int = SUMMARY_LENGTH) -> str:
    if len(content) > limit:
        return content[:limit] + ELLIPSIS
    return content


def to_response(board: Board, can_edit: bool, content: str | None = None) -> BoardResponse:
    return BoardResponse(
        id=board.id,
        title=board.title,
        content=board.content if content is None else content,
        author_name=board.user.name if board.user else "",
        created_at=board.created_at,
        updated_at=board.updated_at,
        view_count=board.view_count,
        can_edit=can_edit,
    )


class BoardService:
    def __init__(self, session: Session):
        self.session = session
        self.boards = BoardRepository(session)

    @staticmethod
    def is_owner(board: Board, caller_id: int) -> bool:
        return board.user_id == caller_id

    def list_boards(self, caller_id: int) -> ServiceResult[list[BoardResponse]]:
        try:
            items = [
                to_response(b, self.is_owner(b, caller_id), content=summarize(b.content))
                for b in self.boards.list_newest_first()
            ]
            return ServiceResult.ok(MSG_LIST_OK, items)
        except Exception as e:
            return self._internal_failure("loading boards", e)

    def get_board(self, board_id: int, caller_id: int) -> ServiceResult[BoardResponse]:
        try:
            board = self.boards.get(board_id)
            if board is None:
                return ServiceResult.fail(ErrorCode.NOT_FOUND, MSG_NOT_FOUND)

            self.boards.increment_view_count(board)
            self.session.commit()
            return ServiceResult.ok(MSG_GET_OK, to_response(board, self.is_owner(board, caller_id)))
        except Exception as e:
            return self._internal_failure("loading the board", e)

    def create_board(self, title: str, content: str, caller_id: int) -> ServiceResult[BoardResponse]:
        try:
            now = utcnow()
            board = Board(
                title=title,
                content=content,
                user_id=caller_id,
                view_count=0,
                created_at=now,
                updated_at=now,
            )
            self.boards.add(board)
            self.session.commit()
            self.session.refresh(board)
            logger.info("Board created", extra={"user_id": caller_id, "board_id": board.id})
            return ServiceResult.ok(MSG_CREATE_OK, to_response(board, can_edit=True))
        except Exception as e:
            return self._internal_failure("creating the board", e)

    def update_board(
        self, board_id: int, title: str, content: str, caller_id: int,
    ) -> ServiceResult[BoardResponse]:
        try:
            board = self.boards.get(board_id)
            if board is None:
                return ServiceResult.fail(ErrorCode.NOT_FOUND, MSG_NOT_FOUND)
            if not self.is_owner(board, caller_id):
                logger.warning(
                    "Board update refused for non-owner",
                    extra={"user_id": caller_id, "board_id": board_id},
                )
                return ServiceResult.fail(ErrorCode.FORBIDDEN, MSG_FORBIDDEN_UPDATE)

            board.title = title
            board.content = content
            board.updated_at = utcnow()
            self.session.add(board)
            self.session.commit()
            self.session.refresh(board)
            return ServiceResult.ok(MSG_UPDATE_OK, to_response(board, can_edit=True))
        except Exception as e:
            return self._internal_failure("updating the board", e)

    def delete_board(self, board_id: int, caller_id: int) -> ServiceResult[None]:
        try:
            board = self.boards.get(board_id)
            if board is None:
                return ServiceResult.fail(ErrorCode.NOT_FOUND, MSG_NOT_FOUND)
            if not self.is_owner(board, caller_id):
                logger.warning(
                    "Board delete refused for non-owner",
                    extra={"user_id": caller_id, "board_id": board_id},
                )
                return ServiceResult.fail(ErrorCode.FORBIDDEN, MSG_FORBIDDEN_DELETE)

            self.boards.delete(board)
            self.session.commit()
            logger.info("Board deleted", extra={"user_id": caller_id, "board_id": board_id})
            return ServiceResult.ok(MSG_DELETE_OK)
        except Exception as e:
            return self._internal_failure("deleting the board", e)

    def _internal_failure(self, operation: str, exc: Exception) -> ServiceResult:
        self.session.rollback()
        logger.exception(
            f"Unexpected error while {operation}",
            extra={"error_code": ErrorCode.INTERNAL_FAILURE.value},
        )
        return ServiceResult.fail(
            ErrorCode.INTERNAL_FAILURE,
            f"An error occurred while {operation}: {exc}",
        )
