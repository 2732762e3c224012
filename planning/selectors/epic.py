# ============================================
# planning/selectors/epic.py
# ============================================
from typing import List, Optional
from django.db.models import Count, Q, QuerySet
from planning.models import Epic
from planning.clients.user_client import UserServiceClient


def _with_counts(queryset: QuerySet) -> QuerySet:
    return queryset.annotate(
        work_item_count=Count('work_items', distinct=True),
        completed_work_item_count=Count(
            'work_items',
            filter=Q(work_items__status__is_completed_status=True),
            distinct=True
        ),
    )


class EpicSelector:

    @staticmethod
    def get_epic_by_id(epic_id: int) -> Optional[Epic]:
        """Get single epic with its work item counts"""
        try:
            return _with_counts(
                Epic.objects.select_related('project', 'status')
            ).get(id=epic_id)
        except Epic.DoesNotExist:
            return None

    @staticmethod
    def get_epic_by_key(key: str) -> Optional[Epic]:
        try:
            return _with_counts(
                Epic.objects.select_related('project', 'status')
            ).get(key=key)
        except Epic.DoesNotExist:
            return None

    @staticmethod
    def get_epics_list(
        project_id: int = None,
        status_id: int = None,
        assignee_id: str = None
    ) -> QuerySet:
        queryset = _with_counts(Epic.objects.select_related('project', 'status'))

        if project_id:
            queryset = queryset.filter(project_id=project_id)

        if status_id:
            queryset = queryset.filter(status_id=status_id)

        if assignee_id:
            queryset = queryset.filter(assignee_id=assignee_id)

        return queryset.order_by('-updated_at', '-id')

    @staticmethod
    def enrich_epics_with_users(epics: List[Epic]) -> List[Epic]:
        """Fetch and attach assignee data to epics"""
        user_ids = [str(e.assignee_id) for e in epics if e.assignee_id]
        users_dict = UserServiceClient.get_users_by_ids(user_ids)

        for epic in epics:
            epic.assignee_data = users_dict.get(str(epic.assignee_id)) if epic.assignee_id else None

        return epics
