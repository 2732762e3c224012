# ============================================
# planning/services/status.py
# ============================================
import logging
from typing import List, Optional

from django.db import transaction

from planning.exceptions import (
    BadRequest,
    DuplicateKey,
    EntityNotFound,
    InvalidStatusTransition,
)
from planning.models import Epic, Status, StatusTransition, WorkItem

logger = logging.getLogger(__name__)


# (name, color, order_index, is_default_for_new, is_completed, is_cancelled)
DEFAULT_STATUSES = [
    ('BACKLOG', '#34495e', 0, False, False, False),
    ('TODO', '#95a5a6', 1, True, False, False),
    ('IN PROGRESS', '#3498db', 2, False, False, False),
    ('DONE', '#2ecc71', 3, False, True, False),
    ('CANCELLED', '#e74c3c', 4, False, False, True),
]

STATUS_FIELDS = (
    'name', 'color', 'order_index', 'is_default_for_new',
    'is_completed_status', 'is_cancelled_status', 'is_active',
)


class StatusService:
    """
    Owns the status set and the directed transition graph between statuses.

    The graph is a table of ``(from, to) -> is_allowed`` edges. A move with
    no edge is allowed, so the workflow is permissive until rules are added.
    """

    @staticmethod
    def _get_status(status_id: int, label: str = 'Status') -> Status:
        try:
            return Status.objects.get(id=status_id)
        except Status.DoesNotExist:
            raise EntityNotFound(label, status_id)

    @staticmethod
    def _check_name_available(name: str, exclude_id: Optional[int] = None) -> None:
        queryset = Status.objects.filter(name=name)
        if exclude_id is not None:
            queryset = queryset.exclude(id=exclude_id)
        if queryset.exists():
            raise DuplicateKey(f"Status with name '{name}' already exists")

    # ---------- transition graph ----------

    @staticmethod
    def validate_transition(from_status_id: int, to_status_id: int) -> bool:
        """Is moving from one status to another allowed?"""
        if from_status_id == to_status_id:
            return True

        rule = (
            StatusTransition.objects
            .filter(from_status_id=from_status_id, to_status_id=to_status_id)
            .values_list('is_allowed', flat=True)
            .first()
        )
        if rule is None:
            return True
        return rule

    @staticmethod
    def allowed_transitions(from_status_id: int) -> List[Status]:
        """
        Targets with an explicit allowed edge from ``from_status_id``.

        Statuses reachable only through the permissive default are not listed.
        """
        return list(
            Status.objects
            .filter(transitions_to__from_status_id=from_status_id, transitions_to__is_allowed=True)
            .order_by('order_index', 'id')
        )

    @staticmethod
    def check_transition(current: Status, target: Status) -> None:
        """Raise unless an entity in ``current`` may move to ``target``"""
        if current.id == target.id:
            return
        if not target.is_active:
            raise BadRequest(f"Status '{target.name}' is not active")
        if not StatusService.validate_transition(current.id, target.id):
            logger.info("[status] rejected transition %s -> %s", current.name, target.name)
            raise InvalidStatusTransition(current.name, target.name)

    @staticmethod
    @transaction.atomic
    def create_transition(
        *,
        from_status_id: int,
        to_status_id: int,
        is_allowed: bool = True
    ) -> StatusTransition:
        from_status = StatusService._get_status(from_status_id, 'Source status')
        to_status = StatusService._get_status(to_status_id, 'Target status')

        if StatusTransition.objects.filter(from_status=from_status, to_status=to_status).exists():
            raise DuplicateKey(
                f"Transition from '{from_status.name}' to '{to_status.name}' already exists"
            )

        transition = StatusTransition.objects.create(
            from_status=from_status,
            to_status=to_status,
            is_allowed=is_allowed
        )
        logger.info(
            "[status] transition rule %s -> %s allowed=%s",
            from_status.name, to_status.name, is_allowed
        )
        return transition

    # ---------- status CRUD ----------

    @staticmethod
    @transaction.atomic
    def create_status(
        *,
        name: str,
        color: str = '',
        order_index: int = 0,
        is_default_for_new: bool = False,
        is_completed_status: bool = False,
        is_cancelled_status: bool = False
    ) -> Status:
        StatusService._check_name_available(name)

        return Status.objects.create(
            name=name,
            color=color,
            order_index=order_index,
            is_default_for_new=is_default_for_new,
            is_completed_status=is_completed_status,
            is_cancelled_status=is_cancelled_status,
            is_active=True
        )

    @staticmethod
    @transaction.atomic
    def update_status(*, status_id: int, **data) -> Status:
        status = StatusService._get_status(status_id)

        if 'name' in data and data['name'] != status.name:
            StatusService._check_name_available(data['name'], exclude_id=status.id)

        changed = []
        for field in STATUS_FIELDS:
            if field in data and getattr(status, field) != data[field]:
                setattr(status, field, data[field])
                changed.append(field)

        if changed:
            status.save(update_fields=changed)
        return status

    @staticmethod
    @transaction.atomic
    def delete_status(*, status_id: int) -> None:
        status = StatusService._get_status(status_id)

        epic_count = Epic.objects.filter(status=status).count()
        work_item_count = WorkItem.objects.filter(status=status).count()
        if epic_count or work_item_count:
            raise BadRequest(
                f"Cannot delete status '{status.name}' because it is in use by "
                f"{epic_count} epics and {work_item_count} work items"
            )

        logger.info("[status] deleting status %s", status.name)
        status.delete()

    @staticmethod
    @transaction.atomic
    def seed_default_statuses() -> List[Status]:
        """Insert the default workflow unless any status exists. Returns what was created."""
        if Status.objects.exists():
            return []

        Status.objects.bulk_create([
            Status(
                name=name,
                color=color,
                order_index=order_index,
                is_default_for_new=is_default,
                is_completed_status=is_completed,
                is_cancelled_status=is_cancelled,
                is_active=True
            )
            for name, color, order_index, is_default, is_completed, is_cancelled in DEFAULT_STATUSES
        ])
        created = list(Status.objects.order_by('order_index', 'id'))
        logger.info("[status] seeded %s default statuses", len(created))
        return created
