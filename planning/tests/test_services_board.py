import pytest

from planning.exceptions import BadRequest, EntityNotFound, Forbidden, InvalidStatusTransition
from planning.models import Board, BoardColumn, WorkItem
from planning.services.board import BoardService
from planning.services.epic import EpicService
from planning.services.status import StatusService


@pytest.mark.django_db
def test_new_board_has_one_empty_column_per_status(board, project):
    view = BoardService.get_board_view(project.id)

    assert board.name == "Engineering Board"
    assert [c.status_name for c in view.columns] == ["BACKLOG", "TODO", "IN PROGRESS", "DONE", "CANCELLED"]
    assert [c.order_index for c in view.columns] == [0, 1, 2, 3, 4]
    assert all(c.item_count == 0 and c.wip_limit is None and not c.is_collapsed for c in view.columns)
    assert view.total_items == 0


@pytest.mark.django_db
def test_board_skips_inactive_statuses(project, statuses, owner):
    StatusService.update_status(status_id=statuses["CANCELLED"].id, is_active=False)
    board = BoardService.create_board(project_id=project.id, actor_id=str(owner.id), name="Kanban")
    assert board.name == "Kanban"
    assert board.columns.count() == 4


@pytest.mark.django_db
def test_columns_follow_status_order_not_creation_order(project, owner):
    for name, order_index in (("LATE", 10), ("FIRST", 2), ("MIDDLE", 7)):
        StatusService.create_status(name=name, order_index=order_index)

    board = BoardService.create_board(project_id=project.id, actor_id=str(owner.id))

    columns = BoardColumn.objects.filter(board=board).select_related("status").order_by("order_index")
    assert [c.status.name for c in columns] == ["FIRST", "MIDDLE", "LATE"]
    assert [c.order_index for c in columns] == [0, 1, 2]
    view = BoardService.get_board_view(project.id)
    assert [c.status_name for c in view.columns] == ["FIRST", "MIDDLE", "LATE"]


@pytest.mark.django_db
def test_second_board_is_rejected(board, project, owner):
    with pytest.raises(BadRequest):
        BoardService.create_board(project_id=project.id, actor_id=str(owner.id))
    assert Board.objects.filter(project=project).count() == 1


@pytest.mark.django_db
def test_only_owner_or_privileged_configures_board(project, statuses, other_user, staff):
    with pytest.raises(Forbidden):
        BoardService.create_board(project_id=project.id, actor_id=str(other_user.id))
    board = BoardService.create_board(project_id=project.id, actor_id=str(staff.id), is_privileged=True)
    assert board.columns.count() == 5


@pytest.mark.django_db
def test_view_without_board_is_not_found(project):
    with pytest.raises(EntityNotFound):
        BoardService.get_board_view(project.id)


@pytest.mark.django_db
def test_view_groups_and_orders_cards(board, project, make_item, owner, statuses):
    first = make_item("first")
    second = make_item("second")
    third = make_item("third")
    # pull "third" ahead of the others in the TODO lane
    WorkItem.objects.filter(id=third.id).update(order_index=-1)
    BoardService.move_work_item(
        project_id=project.id, work_item_id=second.id,
        to_status_id=statuses["IN PROGRESS"].id, actor_id=str(owner.id)
    )

    view = BoardService.get_board_view(project.id)
    lanes = {c.status_name: [card.key for card in c.work_items] for c in view.columns}

    assert lanes["TODO"] == [third.key, first.key]
    assert lanes["IN PROGRESS"] == [second.key]
    assert lanes["DONE"] == []
    assert view.total_items == 3


@pytest.mark.django_db
def test_view_filters_narrow_cards_not_columns(board, project, make_item, owner):
    epic = EpicService.create_epic(project_id=project.id, summary="Payments", actor_id=str(owner.id))
    make_item("Refund flow", epic_id=epic.id, assignee_id="alice")
    make_item("Invoice export", assignee_id="bob")
    make_item("Refund emails", assignee_id="bob")

    by_epic = BoardService.get_board_view(project.id, epic_ids=[epic.id])
    assert by_epic.total_items == 1
    assert len(by_epic.columns) == 5
    card = by_epic.columns[1].work_items[0]
    assert card.epic_key == epic.key

    by_people = BoardService.get_board_view(project.id, assignee_ids=["alice", "bob"])
    assert by_people.total_items == 3

    by_text = BoardService.get_board_view(project.id, assignee_ids=["bob"], search_text="refund")
    assert [c.summary for col in by_text.columns for c in col.work_items] == ["Refund emails"]


@pytest.mark.django_db
def test_wip_limit_is_advisory(board, project, make_item, owner):
    todo_column = board.columns.get(status__name="TODO")
    make_item("a")
    make_item("b")

    BoardService.update_column(
        project_id=project.id, column_id=todo_column.id, actor_id=str(owner.id), wip_limit=1
    )
    make_item("c")

    column = BoardService.get_board_view(project.id).columns[1]
    assert column.item_count == 3
    assert column.is_over_wip_limit is True


@pytest.mark.django_db
def test_update_column_toggles_collapse(board, project, owner):
    done = board.columns.get(status__name="DONE")
    updated = BoardService.update_column(
        project_id=project.id, column_id=done.id, actor_id=str(owner.id), is_collapsed=True
    )
    assert updated.is_collapsed is True
    assert updated.wip_limit is None


@pytest.mark.django_db
def test_update_column_of_another_board(board, project, other_project, statuses, owner, other_user):
    other_board = BoardService.create_board(project_id=other_project.id, actor_id=str(other_user.id))
    foreign_column = other_board.columns.first()
    with pytest.raises(EntityNotFound):
        BoardService.update_column(
            project_id=project.id, column_id=foreign_column.id, actor_id=str(owner.id), wip_limit=3
        )


@pytest.mark.django_db
def test_move_only_changes_status(board, project, make_item, owner, statuses):
    epic = EpicService.create_epic(project_id=project.id, summary="E", actor_id=str(owner.id))
    task = make_item("task", epic_id=epic.id)
    sub = make_item("sub", item_type=WorkItem.ItemType.SUBTASK, parent_id=task.id, epic_id=epic.id)
    before = WorkItem.objects.get(id=sub.id)

    BoardService.move_work_item(
        project_id=project.id, work_item_id=sub.id,
        to_status_id=statuses["DONE"].id, actor_id=str(owner.id)
    )

    after = WorkItem.objects.get(id=sub.id)
    assert after.status_id == statuses["DONE"].id
    assert (after.parent_id, after.epic_id, after.order_index) == (before.parent_id, before.epic_id, before.order_index)
    assert after.updated_at >= before.updated_at


@pytest.mark.django_db
def test_move_rejected_by_transition_rule(board, project, make_item, owner, statuses):
    item = make_item("x")
    StatusService.create_transition(
        from_status_id=statuses["TODO"].id, to_status_id=statuses["DONE"].id, is_allowed=False
    )
    with pytest.raises(InvalidStatusTransition):
        BoardService.move_work_item(
            project_id=project.id, work_item_id=item.id,
            to_status_id=statuses["DONE"].id, actor_id=str(owner.id)
        )
    item.refresh_from_db()
    assert item.status_id == statuses["TODO"].id


@pytest.mark.django_db
def test_move_item_of_other_project(board, project, other_project, statuses, owner):
    foreign = WorkItem.objects.create(
        project=other_project, key="OPS-1", item_type=WorkItem.ItemType.TASK,
        summary="foreign", status=statuses["TODO"], reporter_id="x"
    )
    with pytest.raises(EntityNotFound):
        BoardService.move_work_item(
            project_id=project.id, work_item_id=foreign.id,
            to_status_id=statuses["DONE"].id, actor_id=str(owner.id)
        )


@pytest.mark.django_db
def test_reorder_with_permutation(board, project, owner):
    ids = list(board.columns.order_by("order_index").values_list("id", flat=True))
    new_order = list(reversed(ids))

    BoardService.reorder_columns(project_id=project.id, column_ids=new_order, actor_id=str(owner.id))

    view = BoardService.get_board_view(project.id)
    assert [c.id for c in view.columns] == new_order
    assert [c.status_name for c in view.columns][0] == "CANCELLED"


@pytest.mark.django_db


@pytest.mark.parametrize("mutate", [
    lambda ids: ids[:-1],                 # missing one
    lambda ids: ids + [ids[0]],           # extra duplicate
    lambda ids: ids[:-1] + [ids[0]],      # right size, duplicate
    lambda ids: ids[:-1] + [987654],      # unknown id
])
def test_invalid_reorder_keeps_previous_order(board, project, owner, mutate):
    ids = list(board.columns.order_by("order_index").values_list("id", flat=True))
    with pytest.raises(BadRequest):
        BoardService.reorder_columns(project_id=project.id, column_ids=mutate(ids), actor_id=str(owner.id))

    after = list(BoardColumn.objects.filter(board=board).order_by("order_index").values_list("id", flat=True))
    assert after == ids


@pytest.mark.django_db
def test_update_and_delete_board(board, project, owner):
    updated = BoardService.update_board(project_id=project.id, actor_id=str(owner.id), name="Team board")
    assert updated.name == "Team board"

    BoardService.delete_board(project_id=project.id, actor_id=str(owner.id))
    assert not Board.objects.filter(project=project).exists()
    assert not BoardColumn.objects.exists()
