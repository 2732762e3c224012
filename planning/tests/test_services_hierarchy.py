import pytest

from planning.exceptions import CircularHierarchy, EntityNotFound, InvalidHierarchy
from planning.models import WorkItem
from planning.services.hierarchy import HierarchyService
from planning.services.work_item import WorkItemService

TASK = WorkItem.ItemType.TASK
BUG = WorkItem.ItemType.BUG
SUBTASK = WorkItem.ItemType.SUBTASK


# ---------- pure cycle detection ----------

def test_no_parent_never_cycles():
    assert HierarchyService({1: None}).would_create_cycle(1, None) is False


def test_self_parent_is_a_cycle():
    assert HierarchyService({1: None}).would_create_cycle(1, 1) is True


def test_descendant_as_parent_is_a_cycle():
    # 1 <- 2 <- 3
    tree = HierarchyService({1: None, 2: 1, 3: 2})
    assert tree.would_create_cycle(1, 3) is True
    assert tree.would_create_cycle(1, 2) is True


def test_unrelated_parent_is_fine():
    tree = HierarchyService({1: None, 2: 1, 3: None, 4: 3})
    assert tree.would_create_cycle(1, 4) is False
    assert tree.would_create_cycle(2, 3) is False


def test_check_is_repeatable_and_does_not_mutate():
    parents = {1: None, 2: 1}
    tree = HierarchyService(parents)
    first = tree.would_create_cycle(1, 2)
    second = tree.would_create_cycle(1, 2)
    assert first is second is True
    assert tree.parent_of(1) is None
    assert parents == {1: None, 2: 1}


def test_existing_loop_elsewhere_terminates(caplog):
    # 5 <-> 6 already loop; 7 hangs below them
    tree = HierarchyService({1: None, 5: 6, 6: 5, 7: 5})
    with caplog.at_level("WARNING", logger="planning.services.hierarchy"):
        assert tree.would_create_cycle(1, 7) is False
    assert "existing parent cycle" in caplog.text


# ---------- type rules through the work item service ----------

@pytest.mark.django_db
def test_subtask_requires_parent(make_item):
    with pytest.raises(InvalidHierarchy):
        make_item("orphan", item_type=SUBTASK)


@pytest.mark.django_db
def test_subtask_under_task_or_bug(make_item):
    task = make_item("task")
    bug = make_item("bug", item_type=BUG)
    assert make_item("s1", item_type=SUBTASK, parent_id=task.id).parent_id == task.id
    assert make_item("s2", item_type=SUBTASK, parent_id=bug.id).parent_id == bug.id


@pytest.mark.django_db
def test_subtask_cannot_nest_under_subtask(make_item):
    task = make_item("task")
    sub = make_item("sub", item_type=SUBTASK, parent_id=task.id)
    with pytest.raises(InvalidHierarchy):
        make_item("deeper", item_type=SUBTASK, parent_id=sub.id)


@pytest.mark.django_db
def test_task_cannot_have_parent(make_item):
    task = make_item("task")
    with pytest.raises(InvalidHierarchy) as exc:
        make_item("child task", item_type=TASK, parent_id=task.id)
    assert "Tasks cannot have parent work items" in str(exc.value.detail)


@pytest.mark.django_db
def test_unknown_parent_is_not_found(make_item):
    with pytest.raises(EntityNotFound):
        make_item("sub", item_type=SUBTASK, parent_id=424242)


@pytest.mark.django_db
def test_parent_must_be_in_same_project(make_item, other_project, statuses):
    foreign = WorkItem.objects.create(
        project=other_project, key="OPS-1", item_type=TASK, summary="foreign",
        status=statuses["TODO"], reporter_id="x"
    )
    with pytest.raises(InvalidHierarchy):
        make_item("sub", item_type=SUBTASK, parent_id=foreign.id)


@pytest.mark.django_db
def test_reparent_into_own_subtask_is_circular(make_item, owner):
    task = make_item("task")
    sub = make_item("sub", item_type=SUBTASK, parent_id=task.id)

    with pytest.raises(CircularHierarchy):
        WorkItemService.update_work_item(
            work_item_id=task.id, actor_id=str(owner.id), parent_id=sub.id
        )

    task.refresh_from_db()
    assert task.parent_id is None


@pytest.mark.django_db
def test_reparent_subtask_between_tasks(make_item, owner):
    first = make_item("first")
    second = make_item("second")
    sub = make_item("sub", item_type=SUBTASK, parent_id=first.id)

    WorkItemService.update_work_item(work_item_id=sub.id, actor_id=str(owner.id), parent_id=second.id)
    sub.refresh_from_db()
    assert sub.parent_id == second.id
