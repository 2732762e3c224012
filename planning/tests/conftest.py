import pytest
from django.contrib.auth import get_user_model
from rest_framework.test import APIClient

from planning.models import Project, WorkItem
from planning.services.board import BoardService
from planning.services.status import StatusService
from planning.services.work_item import WorkItemService

User = get_user_model()

@pytest.fixture
def owner(db):
    return User.objects.create_user(username="owner", password="pass")

@pytest.fixture
def other_user(db):
    return User.objects.create_user(username="outsider", password="pass")

@pytest.fixture
def staff(db):
    return User.objects.create_user(username="admin", password="pass", is_staff=True)

@pytest.fixture
def statuses(db):
    # BACKLOG, TODO (default), IN PROGRESS, DONE, CANCELLED
    return {s.name: s for s in StatusService.seed_default_statuses()}

@pytest.fixture
def project(owner):
    return Project.objects.create(key="ENG", name="Engineering", owner_id=str(owner.id))

@pytest.fixture
def other_project(other_user):
    return Project.objects.create(key="OPS", name="Operations", owner_id=str(other_user.id))

@pytest.fixture
def board(project, statuses, owner):
    return BoardService.create_board(project_id=project.id, actor_id=str(owner.id))

@pytest.fixture
def make_item(project, statuses, owner):
    """Create work items in the ENG project through the service"""
    def _make(summary="Item", item_type=WorkItem.ItemType.TASK, **kwargs):
        kwargs.setdefault("project_id", project.id)
        return WorkItemService.create_work_item(
            summary=summary,
            item_type=item_type,
            actor_id=str(owner.id),
            **kwargs
        )
    return _make

@pytest.fixture
def api_client(owner):
    api = APIClient()
    api.force_authenticate(user=owner)
    return api

@pytest.fixture
def staff_client(staff):
    api = APIClient()
    api.force_authenticate(user=staff)
    return api

@pytest.fixture
def outsider_client(other_user):
    api = APIClient()
    api.force_authenticate(user=other_user)
    return api
