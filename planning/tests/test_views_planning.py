from unittest import mock

import pytest
from rest_framework.test import APIClient

from planning.models import BoardColumn, WorkItem
from planning.services.status import StatusService


@pytest.mark.django_db
def test_requires_authentication(statuses):
    resp = APIClient().get("/api/statuses/")
    assert resp.status_code == 401


@pytest.mark.django_db
def test_status_list_and_create(api_client, statuses):
    resp = api_client.get("/api/statuses/")
    assert resp.status_code == 200
    assert [s["name"] for s in resp.json()] == ["BACKLOG", "TODO", "IN PROGRESS", "DONE", "CANCELLED"]

    resp = api_client.post("/api/statuses/", {"name": "REVIEW", "color": "#8e44ad", "order_index": 5}, format="json")
    assert resp.status_code == 201, resp.content

    resp = api_client.post("/api/statuses/", {"name": "REVIEW"}, format="json")
    assert resp.status_code == 400
    assert resp.json()["code"] == "duplicate_key"


@pytest.mark.django_db
def test_seed_is_staff_only(api_client, staff_client):
    assert api_client.post("/api/statuses/seed/").status_code == 403

    resp = staff_client.post("/api/statuses/seed/")
    assert resp.status_code == 201
    assert len(resp.json()) == 5

    again = staff_client.post("/api/statuses/seed/")
    assert again.status_code == 200
    assert again.json() == []


@pytest.mark.django_db
def test_transition_rules_endpoints(api_client, statuses):
    todo, done = statuses["TODO"].id, statuses["DONE"].id

    resp = api_client.post(
        "/api/statuses/transitions/",
        {"from_status_id": todo, "to_status_id": done, "is_allowed": False},
        format="json"
    )
    assert resp.status_code == 201, resp.content
    assert resp.json()["from_status_name"] == "TODO"

    resp = api_client.post(
        "/api/statuses/validate-transition/", {"from_status_id": todo, "to_status_id": done}, format="json"
    )
    assert resp.json() == {"is_valid": False}

    resp = api_client.post(
        "/api/statuses/validate-transition/", {"from_status_id": done, "to_status_id": done}, format="json"
    )
    assert resp.json() == {"is_valid": True}

    resp = api_client.get(f"/api/statuses/transitions/?from_status_id={todo}")
    assert len(resp.json()) == 1

    assert api_client.get(f"/api/statuses/{todo}/transitions/").json() == []
    assert api_client.get("/api/statuses/transitions/?from_status_id=abc").status_code == 400


@pytest.mark.django_db
def test_delete_status_in_use(api_client, statuses, make_item):
    make_item("blocker")
    resp = api_client.delete(f"/api/statuses/{statuses['TODO'].id}/")
    assert resp.status_code == 400
    assert "0 epics and 1 work items" in resp.json()["detail"]

    assert api_client.delete(f"/api/statuses/{statuses['BACKLOG'].id}/").status_code == 204


@pytest.mark.django_db
def test_project_create_and_list(api_client, owner):
    resp = api_client.post("/api/projects/", {"key": "eng", "name": "Engineering"}, format="json")
    assert resp.status_code == 400
    assert "key" in resp.json()

    resp = api_client.post("/api/projects/", {"key": "ENG", "name": "Engineering"}, format="json")
    assert resp.status_code == 201, resp.content
    assert resp.json()["owner_id"] == str(owner.id)

    resp = api_client.get("/api/projects/")
    assert resp.status_code == 200
    assert resp.json()["count"] == 1
    assert resp.json()["results"][0]["work_item_count"] == 0


@pytest.mark.django_db
def test_project_archive_by_outsider_forbidden(outsider_client, api_client, project):
    resp = outsider_client.post(f"/api/projects/{project.id}/archive/")
    assert resp.status_code == 403
    assert resp.json()["code"] == "forbidden"

    assert api_client.post(f"/api/projects/{project.id}/archive/").json()["is_archived"] is True
    assert api_client.post(f"/api/projects/{project.id}/unarchive/").json()["is_archived"] is False


@pytest.mark.django_db
def test_work_item_lifecycle(api_client, project, statuses, owner):
    resp = api_client.post(
        "/api/workitems/",
        {"project_id": project.id, "summary": "Set up CI", "item_type": "TASK"},
        format="json"
    )
    assert resp.status_code == 201, resp.content
    body = resp.json()
    assert body["key"] == "ENG-1"
    assert body["status_name"] == "TODO"
    assert body["reporter_id"] == str(owner.id)
    item_id = body["id"]

    resp = api_client.put(f"/api/workitems/{item_id}/", {"summary": "Set up CI pipeline"}, format="json")
    assert resp.status_code == 200
    assert resp.json()["summary"] == "Set up CI pipeline"

    resp = api_client.get("/api/workitems/key/ENG-1/")
    assert resp.status_code == 200
    assert resp.json()["id"] == item_id

    resp = api_client.put(f"/api/workitems/{item_id}/status/", {"status_id": statuses["DONE"].id}, format="json")
    assert resp.json()["status_name"] == "DONE"

    resp = api_client.put(f"/api/workitems/{item_id}/assign/", {"assignee_id": "u-9"}, format="json")
    assert resp.json()["assignee_id"] == "u-9"

    assert api_client.delete(f"/api/workitems/{item_id}/").status_code == 204
    assert api_client.get(f"/api/workitems/{item_id}/").status_code == 404


@pytest.mark.django_db
def test_work_item_errors_carry_codes(api_client, project, statuses, make_item):
    resp = api_client.post(
        "/api/workitems/",
        {"project_id": project.id, "summary": "Orphan", "item_type": "SUBTASK"},
        format="json"
    )
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid_hierarchy"

    resp = api_client.post(
        "/api/workitems/", {"project_id": 9999, "summary": "x", "item_type": "TASK"}, format="json"
    )
    assert resp.status_code == 404
    assert resp.json()["detail"] == "Project with ID 9999 not found"

    task = make_item("task")
    sub = make_item("sub", item_type=WorkItem.ItemType.SUBTASK, parent_id=task.id)
    resp = api_client.put(f"/api/workitems/{task.id}/", {"parent_id": sub.id}, format="json")
    assert resp.status_code == 400
    assert resp.json()["code"] == "circular_hierarchy"

    StatusService.create_transition(
        from_status_id=statuses["TODO"].id, to_status_id=statuses["DONE"].id, is_allowed=False
    )
    resp = api_client.put(f"/api/workitems/{task.id}/status/", {"status_id": statuses["DONE"].id}, format="json")
    assert resp.status_code == 400
    assert resp.json() == {
        "detail": "Cannot transition from 'TODO' to 'DONE'",
        "code": "invalid_status_transition",
    }


@pytest.mark.django_db
def test_search_get_and_post(api_client, make_item):
    make_item("Login bug", item_type=WorkItem.ItemType.BUG)
    make_item("Logout", assignee_id="a1")
    make_item("Billing")

    resp = api_client.get("/api/workitems/search/?search_text=log&page_size=1")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 2
    assert len(body["results"]) == 1

    resp = api_client.post("/api/workitems/search/", {"item_type": "BUG"}, format="json")
    assert [r["summary"] for r in resp.json()["results"]] == ["Login bug"]

    resp = api_client.post("/api/workitems/search/", {"item_type": "STORY"}, format="json")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_epic_endpoints(api_client, project, statuses):
    resp = api_client.post("/api/epics/", {"project_id": project.id, "summary": "Payments"}, format="json")
    assert resp.status_code == 201, resp.content
    epic = resp.json()
    assert epic["key"] == "ENG-EPIC-1"
    assert epic["work_item_count"] == 0

    resp = api_client.put(f"/api/epics/{epic['id']}/status/", {"status_id": statuses["IN PROGRESS"].id}, format="json")
    assert resp.json()["status_name"] == "IN PROGRESS"

    resp = api_client.get(f"/api/epics/?project_id={project.id}")
    assert resp.json()["count"] == 1

    assert api_client.delete(f"/api/epics/{epic['id']}/").status_code == 204


@pytest.mark.django_db
def test_epic_endpoints_reject_outsiders(api_client, outsider_client, staff_client, project, statuses):
    epic = api_client.post("/api/epics/", {"project_id": project.id, "summary": "Payments"}, format="json").json()

    resp = outsider_client.put(f"/api/epics/{epic['id']}/", {"summary": "Mine"}, format="json")
    assert resp.status_code == 403
    assert resp.json()["code"] == "forbidden"
    assert outsider_client.delete(f"/api/epics/{epic['id']}/").status_code == 403

    assert staff_client.delete(f"/api/epics/{epic['id']}/").status_code == 204


@pytest.mark.django_db
def test_board_flow(api_client, project, statuses, make_item):
    resp = api_client.get(f"/api/projects/{project.id}/board/view/")
    assert resp.status_code == 404

    resp = api_client.post(f"/api/projects/{project.id}/board/", {}, format="json")
    assert resp.status_code == 201, resp.content
    columns = resp.json()["columns"]
    assert len(columns) == 5

    assert api_client.post(f"/api/projects/{project.id}/board/", {}, format="json").status_code == 400

    item = make_item("Card", assignee_id="alice")
    make_item("Other card", assignee_id="bob")

    resp = api_client.get(f"/api/projects/{project.id}/board/view/?assignee_id=alice&assignee_id=carol")
    view = resp.json()
    assert view["total_items"] == 1
    assert [c["item_count"] for c in view["columns"]] == [0, 1, 0, 0, 0]
    assert view["columns"][1]["work_items"][0]["key"] == item.key

    resp = api_client.put(
        f"/api/projects/{project.id}/board/workitems/{item.id}/move/",
        {"to_status_id": statuses["IN PROGRESS"].id},
        format="json"
    )
    assert resp.status_code == 200
    assert resp.json()["status_name"] == "IN PROGRESS"

    in_progress = next(c for c in columns if c["status_name"] == "IN PROGRESS")
    resp = api_client.put(
        f"/api/projects/{project.id}/board/columns/{in_progress['id']}/",
        {"wip_limit": 2, "is_collapsed": True},
        format="json"
    )
    assert resp.status_code == 200
    assert (resp.json()["wip_limit"], resp.json()["is_collapsed"]) == (2, True)

    new_order = [c["id"] for c in reversed(columns)]
    resp = api_client.put(
        f"/api/projects/{project.id}/board/columns/reorder/", {"column_ids": new_order}, format="json"
    )
    assert resp.status_code == 200
    assert [c["id"] for c in resp.json()["columns"]] == new_order

    resp = api_client.put(
        f"/api/projects/{project.id}/board/columns/reorder/", {"column_ids": new_order[:2]}, format="json"
    )
    assert resp.status_code == 400
    stored = list(BoardColumn.objects.order_by("order_index").values_list("id", flat=True))
    assert stored == new_order


@pytest.mark.django_db
def test_board_view_filter_validation(api_client, board, project):
    resp = api_client.get(f"/api/projects/{project.id}/board/view/?epic_id=abc")
    assert resp.status_code == 400


@pytest.mark.django_db
def test_user_data_is_attached_when_directory_configured(api_client, make_item, settings):
    settings.USER_SERVICE_URL = "http://users.local/api"
    item = make_item("Enriched", assignee_id="42")

    fake = mock.Mock()
    fake.json.return_value = [{"id": 42, "name": "Ada"}, {"id": item.reporter_id, "name": "Owner"}]
    fake.raise_for_status.return_value = None

    with mock.patch("planning.clients.user_client.requests.post", return_value=fake) as post:
        resp = api_client.get(f"/api/workitems/{item.id}/")

    assert post.called
    assert resp.json()["assignee"]["name"] == "Ada"


@pytest.mark.django_db
def test_schema_is_served(api_client):
    resp = api_client.get("/api/schema/")
    assert resp.status_code == 200
