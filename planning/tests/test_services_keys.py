import gc
import threading

import pytest
from django.db import connections

from planning.exceptions import KeyGenerationError
from planning.models import Epic, KeySequence, Project, WorkItem
from planning.services.epic import EpicService
from planning.services.key_generation import KeyGenerationService
from planning.services.status import StatusService
from planning.services.work_item import WorkItemService


@pytest.mark.django_db
def test_work_item_keys_are_sequential(project):
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-1"
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-2"
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-3"


@pytest.mark.django_db
def test_epic_and_work_item_counters_are_independent(project):
    assert KeyGenerationService.next_epic_key("ENG") == "ENG-EPIC-1"
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-1"
    assert KeyGenerationService.next_epic_key("ENG") == "ENG-EPIC-2"

    kinds = set(KeySequence.objects.filter(project=project).values_list("kind", flat=True))
    assert kinds == {KeySequence.Kind.EPIC, KeySequence.Kind.WORK_ITEM}


@pytest.mark.django_db
def test_counters_are_per_project(project, other_project):
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-1"
    assert KeyGenerationService.next_work_item_key("OPS") == "OPS-1"
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-2"


@pytest.mark.django_db
def test_unknown_project_raises():
    with pytest.raises(KeyGenerationError) as exc:
        KeyGenerationService.next_work_item_key("NOPE")
    assert exc.value.status_code == 404
    assert "NOPE" in str(exc.value.detail)


@pytest.mark.django_db
def test_existing_keys_are_not_reissued(project, statuses, owner):
    # Rows written before the counter existed
    for key in ("ENG-3", "ENG-7", "ENG-notanumber"):
        WorkItem.objects.create(
            project=project, key=key, item_type=WorkItem.ItemType.TASK,
            summary=key, status=statuses["TODO"], reporter_id=str(owner.id)
        )

    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-8"
    assert KeyGenerationService.next_work_item_key("ENG") == "ENG-9"


@pytest.mark.django_db
def test_epic_keys_do_not_collide_with_work_item_prefix(project, statuses, owner):
    WorkItem.objects.create(
        project=project, key="ENG-4", item_type=WorkItem.ItemType.TASK,
        summary="legacy", status=statuses["TODO"], reporter_id=str(owner.id)
    )
    assert KeyGenerationService.next_epic_key("ENG") == "ENG-EPIC-1"


@pytest.mark.django_db(transaction=True)
def test_concurrent_issuance_yields_distinct_keys():
    StatusService.seed_default_statuses()
    Project.objects.create(key="ENG", name="Engineering", owner_id="1")

    keys = []
    errors = []
    keys_guard = threading.Lock()

    def worker():
        try:
            for _ in range(5):
                key = KeyGenerationService.next_work_item_key("ENG")
                with keys_guard:
                    keys.append(key)
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=worker) for _ in range(6)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    assert len(keys) == 30
    assert len(set(keys)) == 30
    assert sorted(int(k.split("-")[1]) for k in keys) == list(range(1, 31))


@pytest.mark.django_db(transaction=True)
def test_concurrent_creates_commit_every_item():
    StatusService.seed_default_statuses()
    project = Project.objects.create(key="ENG", name="Engineering", owner_id="1")

    errors = []

    def create_items(worker_no):
        try:
            for n in range(5):
                WorkItemService.create_work_item(
                    project_id=project.id,
                    summary=f"w{worker_no}-{n}",
                    item_type=WorkItem.ItemType.TASK,
                    actor_id="1"
                )
        except Exception as exc:  # surfaced through the assertion below
            errors.append(exc)
        finally:
            connections.close_all()

    def create_epics():
        try:
            for n in range(3):
                EpicService.create_epic(project_id=project.id, summary=f"epic-{n}", actor_id="1")
        except Exception as exc:
            errors.append(exc)
        finally:
            connections.close_all()

    threads = [threading.Thread(target=create_items, args=(i,)) for i in range(4)]
    threads.append(threading.Thread(target=create_epics))
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert errors == []
    keys = WorkItem.objects.filter(project=project).values_list("key", flat=True)
    assert sorted(keys, key=lambda k: int(k.split("-")[1])) == [f"ENG-{n}" for n in range(1, 21)]
    epic_keys = set(Epic.objects.filter(project=project).values_list("key", flat=True))
    assert epic_keys == {"ENG-EPIC-1", "ENG-EPIC-2", "ENG-EPIC-3"}


@pytest.mark.django_db
def test_issuance_lock_is_released_after_use(project):
    KeyGenerationService.next_work_item_key("ENG")
    gc.collect()
    assert project.id not in KeyGenerationService._locks
