# ============================================
# planning/services/key_generation.py
# ============================================
import logging
import re
import threading
import weakref
from contextlib import contextmanager

from django.db import transaction
from django.db.models import F

from planning.exceptions import KeyGenerationError
from planning.models import Epic, KeySequence, Project, WorkItem

logger = logging.getLogger(__name__)


class KeyGenerationService:
    """
    Issues human-readable keys: ``{PROJECT}-EPIC-{n}`` for epics and
    ``{PROJECT}-{n}`` for work items.

    Issuance for one project is serialized twice over: a reentrant
    in-process lock keeps threads of this worker in single file, and the
    ``KeySequence`` row is locked with ``select_for_update`` and incremented
    with an ``F()`` expression so separate processes cannot read the same
    value either.

    Creators wrap their whole transaction in ``serialized()`` so the lock is
    held until the new row and the bumped counter are committed together.
    """

    # Entries live only while some thread holds or waits on the lock
    _locks = weakref.WeakValueDictionary()
    _locks_guard = threading.Lock()

    @classmethod
    @contextmanager
    def serialized(cls, project_id: int):
        with cls._locks_guard:
            lock = cls._locks.get(project_id)
            if lock is None:
                lock = threading.RLock()
                cls._locks[project_id] = lock
        with lock:
            yield

    @staticmethod
    def _prefix(project_key: str, kind: str) -> str:
        if kind == KeySequence.Kind.EPIC:
            return f"{project_key}-EPIC-"
        return f"{project_key}-"

    @staticmethod
    def _highest_existing_number(project: Project, kind: str) -> int:
        """Highest numeric suffix among keys already stored for the project"""
        prefix = KeyGenerationService._prefix(project.key, kind)
        model = Epic if kind == KeySequence.Kind.EPIC else WorkItem
        pattern = re.compile(rf"^{re.escape(prefix)}(\d+)$")

        keys = model.objects.filter(project=project, key__startswith=prefix).values_list('key', flat=True)
        numbers = [int(m.group(1)) for m in (pattern.match(k) for k in keys) if m]
        return max(numbers, default=0)

    @classmethod
    def _next_number(cls, project: Project, kind: str) -> int:
        with cls.serialized(project.id):
            with transaction.atomic():
                sequence, created = KeySequence.objects.select_for_update().get_or_create(
                    project=project,
                    kind=kind,
                    defaults={'last_value': cls._highest_existing_number(project, kind)},
                )
                KeySequence.objects.filter(pk=sequence.pk).update(last_value=F('last_value') + 1)
                sequence.refresh_from_db(fields=['last_value'])

        if created:
            logger.info("[keys] started %s sequence for %s", kind, project.key)
        return sequence.last_value

    @staticmethod
    def _get_project(project_key: str) -> Project:
        try:
            return Project.objects.get(key=project_key)
        except Project.DoesNotExist:
            raise KeyGenerationError(f"Project with key '{project_key}' not found")

    @classmethod
    def next_epic_key(cls, project_key: str) -> str:
        project = cls._get_project(project_key)
        number = cls._next_number(project, KeySequence.Kind.EPIC)
        return f"{cls._prefix(project.key, KeySequence.Kind.EPIC)}{number}"

    @classmethod
    def next_work_item_key(cls, project_key: str) -> str:
        project = cls._get_project(project_key)
        number = cls._next_number(project, KeySequence.Kind.WORK_ITEM)
        return f"{cls._prefix(project.key, KeySequence.Kind.WORK_ITEM)}{number}"
