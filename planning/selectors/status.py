# ============================================
# planning/selectors/status.py
# ============================================
from typing import Optional
from django.db.models import QuerySet
from planning.models import Status, StatusTransition


class StatusSelector:

    @staticmethod
    def get_status_by_id(status_id: int) -> Optional[Status]:
        try:
            return Status.objects.get(id=status_id)
        except Status.DoesNotExist:
            return None

    @staticmethod
    def list_statuses(include_inactive: bool = False) -> QuerySet:
        """Statuses in display order"""
        queryset = Status.objects.all()
        if not include_inactive:
            queryset = queryset.filter(is_active=True)
        return queryset.order_by('order_index', 'id')

    @staticmethod
    def get_default_status() -> Optional[Status]:
        """Status assigned to newly created epics and work items"""
        return (
            Status.objects
            .filter(is_default_for_new=True, is_active=True)
            .order_by('order_index', 'id')
            .first()
        )

    @staticmethod
    def list_transitions(from_status_id: int = None) -> QuerySet:
        queryset = StatusTransition.objects.select_related('from_status', 'to_status')
        if from_status_id:
            queryset = queryset.filter(from_status_id=from_status_id)
        return queryset.order_by('from_status__order_index', 'to_status__order_index', 'id')
