# ============================================
# planning/services/work_item.py
# ============================================
import logging
from typing import Optional

from django.db import transaction
from django.db.models import Max

from planning.exceptions import BadRequest, EntityNotFound, Forbidden, InvalidHierarchy
from planning.models import Epic, Project, Status, WorkItem
from planning.selectors.status import StatusSelector
from planning.services.hierarchy import HierarchyService
from planning.services.key_generation import KeyGenerationService
from planning.services.status import StatusService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('summary', 'description', 'assignee_id', 'priority', 'due_date', 'order_index')


class WorkItemService:

    @staticmethod
    def _get_work_item(work_item_id: int, for_update: bool = False) -> WorkItem:
        queryset = WorkItem.objects.select_related('project', 'status')
        if for_update:
            queryset = queryset.select_for_update(of=('self',))
        try:
            return queryset.get(id=work_item_id)
        except WorkItem.DoesNotExist:
            raise EntityNotFound('Work item', work_item_id)

    @staticmethod
    def _get_open_project(project_id: int) -> Project:
        try:
            project = Project.objects.get(id=project_id)
        except Project.DoesNotExist:
            raise EntityNotFound('Project', project_id)
        if project.is_archived:
            raise BadRequest(f"Project '{project.key}' is archived")
        return project

    @staticmethod
    def _get_epic(epic_id: Optional[int], project_id: int) -> Optional[Epic]:
        if epic_id is None:
            return None
        try:
            epic = Epic.objects.get(id=epic_id)
        except Epic.DoesNotExist:
            raise EntityNotFound('Epic', epic_id)
        if epic.project_id != project_id:
            raise InvalidHierarchy("Epic does not belong to the specified project.")
        return epic

    @staticmethod
    def _get_target_status(status_id: int) -> Status:
        status = StatusSelector.get_status_by_id(status_id)
        if status is None:
            raise EntityNotFound('Status', status_id)
        return status

    @staticmethod
    def _next_order_index(project_id: int, status_id: int) -> int:
        """Position at the end of the item's status lane"""
        current = (
            WorkItem.objects
            .filter(project_id=project_id, status_id=status_id)
            .aggregate(top=Max('order_index'))['top']
        )
        return 0 if current is None else current + 1

    @staticmethod
    def _check_can_modify(work_item: WorkItem, actor_id: str, is_privileged: bool) -> None:
        """Reporter, assignee, project owner or a privileged actor may edit"""
        if is_privileged:
            return
        allowed = {work_item.reporter_id, work_item.assignee_id, work_item.project.owner_id}
        if actor_id not in allowed:
            raise Forbidden("Only the reporter, assignee or project owner can modify this work item")

    @staticmethod
    def _check_can_delete(work_item: WorkItem, actor_id: str, is_privileged: bool) -> None:
        if is_privileged:
            return
        if actor_id not in (work_item.reporter_id, work_item.project.owner_id):
            raise Forbidden("Only reporter or project owner can delete work item")

    @staticmethod
    def create_work_item(
        *,
        project_id: int,
        summary: str,
        item_type: str,
        actor_id: str,
        description: str = '',
        epic_id: Optional[int] = None,
        parent_id: Optional[int] = None,
        assignee_id: Optional[str] = None,
        reporter_id: Optional[str] = None,
        priority: int = WorkItem.Priority.MEDIUM,
        due_date=None
    ) -> WorkItem:
        """Create a new work item in the default status"""

        with KeyGenerationService.serialized(project_id), transaction.atomic():
            project = WorkItemService._get_open_project(project_id)
            epic = WorkItemService._get_epic(epic_id, project.id)
            parent = HierarchyService.validate_new_parent(
                item_type=item_type,
                project_id=project.id,
                parent_id=parent_id
            )

            status = StatusSelector.get_default_status()
            if status is None:
                raise BadRequest("No default status found. Please ensure at least one status is marked as default.")

            key = KeyGenerationService.next_work_item_key(project.key)

            work_item = WorkItem.objects.create(
                project=project,
                epic=epic,
                parent=parent,
                key=key,
                item_type=item_type,
                summary=summary,
                description=description,
                status=status,
                assignee_id=assignee_id,
                reporter_id=reporter_id or actor_id,
                priority=priority,
                due_date=due_date,
                order_index=WorkItemService._next_order_index(project.id, status.id)
            )

        logger.info("[workitem] %s created by %s (%s)", work_item.key, actor_id, item_type)
        return work_item

    @staticmethod
    @transaction.atomic
    def update_work_item(
        *,
        work_item_id: int,
        actor_id: str,
        is_privileged: bool = False,
        **data
    ) -> WorkItem:
        """
        Apply field changes. Every check runs before the first write:
        hierarchy when ``parent_id`` changes, the status graph when
        ``status_id`` changes.
        """

        work_item = WorkItemService._get_work_item(work_item_id, for_update=True)
        WorkItemService._check_can_modify(work_item, actor_id, is_privileged)

        changes = {}

        if 'parent_id' in data and data['parent_id'] != work_item.parent_id:
            parent = HierarchyService.validate_reparent(work_item, data['parent_id'])
            changes['parent'] = parent

        if 'epic_id' in data and data['epic_id'] != work_item.epic_id:
            changes['epic'] = WorkItemService._get_epic(data['epic_id'], work_item.project_id)

        if 'status_id' in data and data['status_id'] != work_item.status_id:
            new_status = WorkItemService._get_target_status(data['status_id'])
            StatusService.check_transition(work_item.status, new_status)
            changes['status'] = new_status

        for field in UPDATABLE_FIELDS:
            if field in data and getattr(work_item, field) != data[field]:
                changes[field] = data[field]

        for attr, value in changes.items():
            setattr(work_item, attr, value)

        work_item.save()

        if changes:
            logger.info("[workitem] %s updated by %s: %s", work_item.key, actor_id, ', '.join(sorted(changes)))
        return work_item

    @staticmethod
    @transaction.atomic
    def move_work_item(*, work_item_id: int, to_status_id: int) -> WorkItem:
        """Status change only; ordering and hierarchy are left alone"""

        work_item = WorkItemService._get_work_item(work_item_id, for_update=True)
        new_status = WorkItemService._get_target_status(to_status_id)
        StatusService.check_transition(work_item.status, new_status)

        old_name = work_item.status.name
        work_item.status = new_status
        work_item.save(update_fields=['status', 'updated_at'])

        logger.info("[workitem] %s moved %s -> %s", work_item.key, old_name, new_status.name)
        return work_item

    @staticmethod
    def assign_work_item(
        *,
        work_item_id: int,
        assignee_id: Optional[str],
        actor_id: str,
        is_privileged: bool = False
    ) -> WorkItem:
        return WorkItemService.update_work_item(
            work_item_id=work_item_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            assignee_id=assignee_id
        )

    @staticmethod
    @transaction.atomic
    def delete_work_item(*, work_item_id: int, actor_id: str, is_privileged: bool = False) -> None:
        """Hard delete; blocked while child work items exist"""

        work_item = WorkItemService._get_work_item(work_item_id)
        WorkItemService._check_can_delete(work_item, actor_id, is_privileged)

        child_count = work_item.children.count()
        if child_count:
            raise BadRequest(
                f"Cannot delete work item '{work_item.key}' because it has {child_count} child work items. "
                "Please delete or reassign them first."
            )

        logger.info("[workitem] %s deleted by %s", work_item.key, actor_id)
        work_item.delete()
