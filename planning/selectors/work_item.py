# ============================================
# planning/selectors/work_item.py
# ============================================
from typing import Iterable, List, Optional, Tuple
from django.db.models import Count, Q, QuerySet
from planning.models import WorkItem
from planning.clients.user_client import UserServiceClient


class WorkItemSelector:

    @staticmethod
    def get_work_item_by_id(work_item_id: int) -> Optional[WorkItem]:
        """Get single work item with related data"""
        try:
            return WorkItem.objects.select_related(
                'project', 'epic', 'parent', 'status'
            ).annotate(
                child_count=Count('children', distinct=True)
            ).get(id=work_item_id)
        except WorkItem.DoesNotExist:
            return None

    @staticmethod
    def get_work_item_by_key(key: str) -> Optional[WorkItem]:
        try:
            return WorkItem.objects.select_related(
                'project', 'epic', 'parent', 'status'
            ).annotate(
                child_count=Count('children', distinct=True)
            ).get(key=key)
        except WorkItem.DoesNotExist:
            return None

    @staticmethod
    def search(
        project_id: int = None,
        epic_id: int = None,
        item_type: str = None,
        status_id: int = None,
        assignee_id: str = None,
        reporter_id: str = None,
        priority: int = None,
        search_text: str = None
    ) -> QuerySet:
        """Filtered work items, most recently updated first"""
        queryset = WorkItem.objects.select_related(
            'project', 'epic', 'status'
        ).annotate(
            child_count=Count('children', distinct=True)
        )

        if project_id:
            queryset = queryset.filter(project_id=project_id)

        if epic_id:
            queryset = queryset.filter(epic_id=epic_id)

        if item_type:
            queryset = queryset.filter(item_type=item_type)

        if status_id:
            queryset = queryset.filter(status_id=status_id)

        if assignee_id:
            queryset = queryset.filter(assignee_id=assignee_id)

        if reporter_id:
            queryset = queryset.filter(reporter_id=reporter_id)

        if priority:
            queryset = queryset.filter(priority=priority)

        if search_text and search_text.strip():
            text = search_text.strip()
            queryset = queryset.filter(
                Q(key__icontains=text) |
                Q(summary__icontains=text) |
                Q(description__icontains=text)
            )

        return queryset.order_by('-updated_at', '-id')

    @staticmethod
    def paginate(queryset: QuerySet, page: int = 1, page_size: int = 50) -> Tuple[List[WorkItem], int]:
        """Slice one page and return it with the total count"""
        page = max(page, 1)
        total = queryset.count()
        offset = (page - 1) * page_size
        return list(queryset[offset:offset + page_size]), total

    @staticmethod
    def enrich_work_items_with_users(work_items: Iterable) -> list:
        """Fetch and attach assignee/reporter data to work items or board cards"""
        work_items = list(work_items)
        user_ids = set()

        for item in work_items:
            if item.assignee_id:
                user_ids.add(str(item.assignee_id))
            if getattr(item, 'reporter_id', None):
                user_ids.add(str(item.reporter_id))

        users_dict = UserServiceClient.get_users_by_ids(list(user_ids))

        for item in work_items:
            item.assignee_data = users_dict.get(str(item.assignee_id)) if item.assignee_id else None
            if hasattr(item, 'reporter_id'):
                item.reporter_data = users_dict.get(str(item.reporter_id))

        return work_items
