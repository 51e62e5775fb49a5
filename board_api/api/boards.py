from fastapi import APIRouter, Depends, status

from board_api.dependencies import get_board_service, get_current_identity
from board_api.schemas import ApiResponse, BoardRequest, BoardResponse
from board_api.security import Identity
from board_api.services import BoardService

router = APIRouter()


@router.get("", response_model=ApiResponse[list[BoardResponse]])
def list_boards(
    identity: Identity = Depends(get_current_identity),
    service: BoardService = Depends(get_board_service),
):
    return service.list_boards(identity.user_id).to_response()


@router.get("/{board_id}", response_model=ApiResponse[BoardResponse])
def get_board(
    board_id: int,
    identity: Identity = Depends(get_current_identity),
    service: BoardService = Depends(get_board_service),
):
    return service.get_board(board_id, identity.user_id).to_response()


@router.post("", response_model=ApiResponse[BoardResponse], status_code=status.HTTP_201_CREATED)
def create_board(
    body: BoardRequest,
    identity: Identity = Depends(get_current_identity),
    service: BoardService = Depends(get_board_service),
):
    result = service.create_board(body.title, body.content, identity.user_id)
    return result.to_response(success_status=status.HTTP_201_CREATED)


@router.put("/{board_id}", response_model=ApiResponse[BoardResponse])
def update_board(
    board_id: int,
    body: BoardRequest,
    identity: Identity = Depends(get_current_identity),
    service: BoardService = Depends(get_board_service),
):
    return service.update_board(board_id, body.title, body.content, identity.user_id).to_response()


@router.delete("/{board_id}", response_model=ApiResponse[None])
def delete_board(
    board_id: int,
    identity: Identity = Depends(get_current_identity),
    service: BoardService = Depends(get_board_service),
):
    return service.delete_board(board_id, identity.user_id).to_response()
