# ============================================
# planning/services/epic.py
# ============================================
import logging
from typing import Optional

from django.db import transaction

from planning.exceptions import BadRequest, EntityNotFound, Forbidden
from planning.models import Epic, Project
from planning.selectors.status import StatusSelector
from planning.services.key_generation import KeyGenerationService
from planning.services.project import ProjectService
from planning.services.status import StatusService

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = ('summary', 'description', 'assignee_id', 'priority', 'start_date', 'due_date')


class EpicService:

    @staticmethod
    def _get_epic(epic_id: int) -> Epic:
        try:
            return Epic.objects.select_related('project', 'status').select_for_update(of=('self',)).get(id=epic_id)
        except Epic.DoesNotExist:
            raise EntityNotFound('Epic', epic_id)

    @staticmethod
    def _check_dates(start_date, due_date) -> None:
        if start_date and due_date and due_date < start_date:
            raise BadRequest("Due date cannot be before start date")

    @staticmethod
    def _check_can_modify(epic: Epic, actor_id: str, is_privileged: bool) -> None:
        """Project owner, the epic's assignee or a privileged actor may edit"""
        if is_privileged or actor_id in (epic.project.owner_id, epic.assignee_id):
            return
        raise Forbidden("Only the assignee or project owner can modify this epic")

    @staticmethod
    def create_epic(
        *,
        project_id: int,
        summary: str,
        actor_id: str,
        description: str = '',
        assignee_id: Optional[str] = None,
        priority: int = 3,
        start_date=None,
        due_date=None
    ) -> Epic:
        """Create an epic in the default status"""

        with KeyGenerationService.serialized(project_id), transaction.atomic():
            try:
                project = Project.objects.get(id=project_id)
            except Project.DoesNotExist:
                raise EntityNotFound('Project', project_id)
            if project.is_archived:
                raise BadRequest(f"Project '{project.key}' is archived")

            EpicService._check_dates(start_date, due_date)

            status = StatusSelector.get_default_status()
            if status is None:
                raise BadRequest("No default status found. Please ensure at least one status is marked as default.")

            epic = Epic.objects.create(
                project=project,
                key=KeyGenerationService.next_epic_key(project.key),
                summary=summary,
                description=description,
                status=status,
                assignee_id=assignee_id,
                priority=priority,
                start_date=start_date,
                due_date=due_date
            )

        logger.info("[epic] %s created by %s", epic.key, actor_id)
        return epic

    @staticmethod
    @transaction.atomic
    def update_epic(*, epic_id: int, actor_id: str, is_privileged: bool = False, **data) -> Epic:
        epic = EpicService._get_epic(epic_id)
        EpicService._check_can_modify(epic, actor_id, is_privileged)

        changes = {}
        if 'status_id' in data and data['status_id'] != epic.status_id:
            new_status = StatusSelector.get_status_by_id(data['status_id'])
            if new_status is None:
                raise EntityNotFound('Status', data['status_id'])
            StatusService.check_transition(epic.status, new_status)
            changes['status'] = new_status

        for field in UPDATABLE_FIELDS:
            if field in data and getattr(epic, field) != data[field]:
                changes[field] = data[field]

        EpicService._check_dates(
            changes.get('start_date', epic.start_date),
            changes.get('due_date', epic.due_date)
        )

        for attr, value in changes.items():
            setattr(epic, attr, value)
        epic.save()

        if changes:
            logger.info("[epic] %s updated by %s: %s", epic.key, actor_id, ', '.join(sorted(changes)))
        return epic

    @staticmethod
    def change_epic_status(*, epic_id: int, status_id: int, actor_id: str, is_privileged: bool = False) -> Epic:
        return EpicService.update_epic(
            epic_id=epic_id,
            actor_id=actor_id,
            is_privileged=is_privileged,
            status_id=status_id
        )

    @staticmethod
    @transaction.atomic
    def delete_epic(*, epic_id: int, actor_id: str, is_privileged: bool = False) -> None:
        epic = EpicService._get_epic(epic_id)
        ProjectService.check_owner(epic.project, actor_id, is_privileged, 'delete an epic')

        work_item_count = epic.work_items.count()
        if work_item_count:
            raise BadRequest(
                f"Cannot delete epic '{epic.key}' because it contains {work_item_count} work items. "
                "Please delete or reassign them first."
            )

        logger.info("[epic] %s deleted by %s", epic.key, actor_id)
        epic.delete()
