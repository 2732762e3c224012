# ============================================
# planning/selectors/project.py
# ============================================
from typing import Optional
from django.db.models import Count, QuerySet
from planning.models import Project


class ProjectSelector:

    @staticmethod
    def get_project_by_id(project_id: int) -> Optional[Project]:
        """Get single project by ID"""
        try:
            return Project.objects.get(id=project_id)
        except Project.DoesNotExist:
            return None

    @staticmethod
    def get_project_by_key(key: str) -> Optional[Project]:
        """Get project by key"""
        try:
            return Project.objects.get(key=key)
        except Project.DoesNotExist:
            return None

    @staticmethod
    def get_projects_list(
        owner_id: str = None,
        is_active: bool = None,
        is_archived: bool = None
    ) -> QuerySet:
        """Projects with epic and work item counts"""
        queryset = Project.objects.annotate(
            epic_count=Count('epics', distinct=True),
            work_item_count=Count('work_items', distinct=True),
        )

        if owner_id:
            queryset = queryset.filter(owner_id=owner_id)

        if is_active is not None:
            queryset = queryset.filter(is_active=is_active)

        if is_archived is not None:
            queryset = queryset.filter(is_archived=is_archived)

        return queryset.order_by('-updated_at', '-id')
