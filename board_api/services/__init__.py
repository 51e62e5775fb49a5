from board_api.services.auth import AuthService
from board_api.services.boards import BoardService

__all__ = ["AuthService", "BoardService"]
