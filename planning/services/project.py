# ============================================
# planning/services/project.py
# ============================================
import logging

from django.db import transaction

from planning.exceptions import BadRequest, DuplicateKey, EntityNotFound, Forbidden
from planning.models import Project

logger = logging.getLogger(__name__)


class ProjectService:

    @staticmethod
    def _get_project(project_id: int) -> Project:
        try:
            return Project.objects.get(id=project_id)
        except Project.DoesNotExist:
            raise EntityNotFound('Project', project_id)

    @staticmethod
    def check_owner(project: Project, actor_id: str, is_privileged: bool, action: str) -> None:
        if is_privileged or project.owner_id == actor_id:
            return
        raise Forbidden(f"Only the project owner can {action}")

    @staticmethod
    @transaction.atomic
    def create_project(
        *,
        key: str,
        name: str,
        owner_id: str,
        description: str = ''
    ) -> Project:
        """Create a new project"""

        if Project.objects.filter(key=key).exists():
            raise DuplicateKey(f"Project with key '{key}' already exists")

        project = Project.objects.create(
            key=key,
            name=name,
            description=description,
            owner_id=owner_id,
            is_active=True,
            is_archived=False
        )

        logger.info("[project] %s created by %s", project.key, owner_id)
        return project

    @staticmethod
    @transaction.atomic
    def update_project(
        *,
        project_id: int,
        actor_id: str,
        is_privileged: bool = False,
        **data
    ) -> Project:
        project = ProjectService._get_project(project_id)
        ProjectService.check_owner(project, actor_id, is_privileged, 'update the project')

        for field in ('name', 'description', 'is_active'):
            if field in data:
                setattr(project, field, data[field])

        project.save()
        return project

    @staticmethod
    def _set_archived(project_id: int, actor_id: str, is_privileged: bool, archived: bool) -> Project:
        project = ProjectService._get_project(project_id)
        action = 'archive the project' if archived else 'unarchive the project'
        ProjectService.check_owner(project, actor_id, is_privileged, action)

        project.is_archived = archived
        project.save(update_fields=['is_archived', 'updated_at'])
        logger.info("[project] %s archived=%s by %s", project.key, archived, actor_id)
        return project

    @staticmethod
    @transaction.atomic
    def archive_project(*, project_id: int, actor_id: str, is_privileged: bool = False) -> Project:
        return ProjectService._set_archived(project_id, actor_id, is_privileged, True)

    @staticmethod
    @transaction.atomic
    def unarchive_project(*, project_id: int, actor_id: str, is_privileged: bool = False) -> Project:
        return ProjectService._set_archived(project_id, actor_id, is_privileged, False)

    @staticmethod
    @transaction.atomic
    def delete_project(*, project_id: int, actor_id: str, is_privileged: bool = False) -> None:
        """Delete a project that owns nothing; otherwise it should be archived"""

        project = ProjectService._get_project(project_id)
        ProjectService.check_owner(project, actor_id, is_privileged, 'delete the project')

        epic_count = project.epics.count()
        work_item_count = project.work_items.count()
        if epic_count or work_item_count:
            raise BadRequest(
                f"Cannot delete project '{project.name}' because it contains {epic_count} epics and "
                f"{work_item_count} work items. Please delete or reassign them first, or archive the project instead."
            )

        logger.info("[project] %s deleted by %s", project.key, actor_id)
        project.delete()
