from datetime import datetime, timedelta
from unittest.mock import MagicMock

import pytest
from sqlmodel import Session, select

from board_api.errors import ErrorCode
from board_api.models import Board, User
from board_api.services import BoardService


@pytest.fixture()
def alice(make_user):
    return make_user("alice", "alice@example.com")


@pytest.fixture()
def bob(make_user):
    return make_user("bob", "bob@example.com")


def test_create_then_get_round_trip(board_service, alice):
    created = board_service.create_board("T", "C", alice.id)
    assert created.success
    assert created.data.view_count == 0
    assert created.data.can_edit is True
    assert created.data.created_at == created.data.updated_at

    fetched = board_service.get_board(created.data.id, alice.id)

    assert fetched.success
    assert fetched.data.title == "T"
    assert fetched.data.content == "C"
    assert fetched.data.can_edit is True
    assert fetched.data.view_count == 1
    assert fetched.data.author_name == "alice"


def test_every_read_increments_view_count(board_service, alice, bob, session):
    board_id = board_service.create_board("T", "C", alice.id).data.id

    board_service.get_board(board_id, alice.id)
    board_service.get_board(board_id, bob.id)
    third = board_service.get_board(board_id, bob.id)

    assert third.data.view_count == 3
    assert third.data.can_edit is False
    assert session.get(Board, board_id).view_count == 3


def test_get_missing_board_is_not_found(board_service, alice):
    result = board_service.get_board(12345, alice.id)
    assert not result.success
    assert result.error is ErrorCode.NOT_FOUND


def test_list_orders_newest_first(board_service, alice, session):
    base = datetime(2024, 1, 1, 12, 0, 0)
    # inserted out of order so id order and time order disagree
    for title, offset in (("middle", 1), ("oldest", 0), ("newest", 2)):
        stamp = base + timedelta(hours=offset)
        session.add(Board(title=title, content="c", user_id=alice.id, created_at=stamp, updated_at=stamp))
    session.commit()

    result = board_service.list_boards(alice.id)

    assert [b.title for b in result.data] == ["newest", "middle", "oldest"]


def test_list_breaks_timestamp_ties_by_id_descending(board_service, alice, session):
    stamp = datetime(2024, 1, 1)
    for title in ("first", "second"):
        session.add(Board(title=title, content="c", user_id=alice.id, created_at=stamp, updated_at=stamp))
        session.commit()

    assert [b.title for b in board_service.list_boards(alice.id).data] == ["second", "first"]


def test_list_truncates_long_content_only(board_service, alice):
    exact = "x" * 100
    long = "y" * 101
    board_service.create_board("exact", exact, alice.id)
    board_service.create_board("long", long, alice.id)

    by_title = {b.title: b for b in board_service.list_boards(alice.id).data}

    assert by_title["exact"].content == exact
    assert by_title["long"].content == "y" * 100 + "..."


def test_list_sets_can_edit_per_item(board_service, alice, bob):
    board_service.create_board("mine", "c", alice.id)
    board_service.create_board("theirs", "c", bob.id)

    flags = {b.title: b.can_edit for b in board_service.list_boards(alice.id).data}

    assert flags == {"mine": True, "theirs": False}


def test_list_does_not_touch_view_count(board_service, alice):
    board_service.create_board("T", "C", alice.id)
    board_service.list_boards(alice.id)
    assert board_service.list_boards(alice.id).data[0].view_count == 0


def test_owner_can_update(board_service, alice):
    created = board_service.create_board("T", "C", alice.id).data

    result = board_service.update_board(created.id, "T2", "C2", alice.id)

    assert result.success
    assert result.data.title == "T2"
    assert result.data.content == "C2"
    assert result.data.can_edit is True
    assert result.data.updated_at >= result.data.created_at
    assert result.data.created_at == created.created_at


def test_non_owner_cannot_update(board_service, alice, bob, session):
    board_id = board_service.create_board("T", "C", alice.id).data.id

    result = board_service.update_board(board_id, "hacked", "hacked", bob.id)

    assert not result.success
    assert result.error is ErrorCode.FORBIDDEN
    session.expire_all()
    board = session.get(Board, board_id)
    assert (board.title, board.content) == ("T", "C")


def test_update_missing_board_is_not_found(board_service, alice):
    result = board_service.update_board(999, "T", "C", alice.id)
    assert result.error is ErrorCode.NOT_FOUND


def test_owner_can_delete(board_service, alice, session):
    board_id = board_service.create_board("T", "C", alice.id).data.id

    result = board_service.delete_board(board_id, alice.id)

    assert result.success
    assert session.get(Board, board_id) is None


def test_non_owner_cannot_delete(board_service, alice, bob, session):
    board_id = board_service.create_board("T", "C", alice.id).data.id

    result = board_service.delete_board(board_id, bob.id)

    assert not result.success
    assert result.error is ErrorCode.FORBIDDEN
    assert session.get(Board, board_id) is not None


def test_delete_missing_board_is_not_found(board_service, alice):
    assert board_service.delete_board(999, alice.id).error is ErrorCode.NOT_FOUND


def test_is_owner_compares_user_ids():
    board = Board(title="T", content="C", user_id=7)
    assert BoardService.is_owner(board, 7)
    assert not BoardService.is_owner(board, 8)


def test_deleting_user_cascades_to_boards(board_service, alice, session):
    board_service.create_board("T", "C", alice.id)
    board_service.create_board("T2", "C2", alice.id)

    session.delete(session.get(User, alice.id))
    session.commit()

    assert session.exec(select(Board)).all() == []


def test_store_failure_becomes_internal_failure():
    broken = MagicMock(spec=Session)
    broken.exec.side_effect = RuntimeError("database is down")
    service = BoardService(broken)

    result = service.list_boards(1)

    assert not result.success
    assert result.error is ErrorCode.INTERNAL_FAILURE
    assert "database is down" in result.message
    broken.rollback.assert_called_once()
