# ============================================
# planning/services/hierarchy.py
# ============================================
"""
Guards the work item hierarchy: Epic -> Task/Bug -> Subtask.

Parent links are read into a plain ``{id: parent_id}`` table and walked
with an explicit visited set, so the walk terminates even if the stored
data already contains a loop.
"""
import logging
from typing import Mapping, Optional

from planning.exceptions import CircularHierarchy, EntityNotFound, InvalidHierarchy
from planning.models import WorkItem

logger = logging.getLogger(__name__)

PARENT_TYPES = (WorkItem.ItemType.TASK, WorkItem.ItemType.BUG)


class HierarchyService:

    def __init__(self, parents: Mapping[int, Optional[int]]):
        self._parents = dict(parents)

    @classmethod
    def for_project(cls, project_id: int) -> 'HierarchyService':
        """Snapshot of the parent links of every work item in the project"""
        rows = WorkItem.objects.filter(project_id=project_id).values_list('id', 'parent_id')
        return cls(dict(rows))

    def parent_of(self, entity_id: int) -> Optional[int]:
        return self._parents.get(entity_id)

    def would_create_cycle(self, entity_id: int, proposed_parent_id: Optional[int]) -> bool:
        """
        True when making ``proposed_parent_id`` the parent of ``entity_id``
        would close a loop, i.e. the proposed parent is the entity itself or
        one of its descendants. Never mutates anything.
        """
        if proposed_parent_id is None:
            return False
        if proposed_parent_id == entity_id:
            return True

        visited = set()
        current = proposed_parent_id
        while current is not None:
            if current == entity_id:
                return True
            if current in visited:
                logger.warning(
                    "[hierarchy] existing parent cycle through work item %s found while checking %s -> %s",
                    current, entity_id, proposed_parent_id
                )
                return False
            visited.add(current)
            current = self.parent_of(current)

        return False

    def ensure_no_cycle(self, entity_id: int, proposed_parent_id: Optional[int]) -> None:
        if self.would_create_cycle(entity_id, proposed_parent_id):
            raise CircularHierarchy(
                f"Setting work item {proposed_parent_id} as parent of {entity_id} "
                f"would create a circular reference"
            )

    # ---------- type rules ----------

    @staticmethod
    def validate_type_rules(item_type: str, parent: Optional[WorkItem]) -> None:
        """
        Nesting is capped by type: Subtasks hang under a Task or Bug, Tasks
        and Bugs never have a parent, so the tree is at most two levels deep.
        """
        if item_type == WorkItem.ItemType.SUBTASK:
            if parent is None:
                raise InvalidHierarchy("Subtasks must have a parent Task or Bug.")
            if parent.item_type not in PARENT_TYPES:
                raise InvalidHierarchy(
                    f"Subtasks can only be children of Tasks or Bugs. "
                    f"Cannot assign a Subtask to {parent.get_item_type_display()} {parent.key}."
                )
            if parent.parent_id is not None:
                raise InvalidHierarchy(
                    "Maximum nesting level exceeded. Only one level of nesting is allowed (Task → Subtask)."
                )
            return

        if parent is not None:
            label = WorkItem.ItemType(item_type).label
            raise InvalidHierarchy(f"{label}s cannot have parent work items. Only Subtasks can have parents.")

    @staticmethod
    def load_parent(parent_id: Optional[int], project_id: int) -> Optional[WorkItem]:
        """Fetch the proposed parent and check it lives in the same project"""
        if parent_id is None:
            return None
        try:
            parent = WorkItem.objects.get(id=parent_id)
        except WorkItem.DoesNotExist:
            raise EntityNotFound('Parent work item', parent_id)
        if parent.project_id != project_id:
            raise InvalidHierarchy("Parent work item does not belong to the same project.")
        return parent

    @classmethod
    def validate_new_parent(cls, *, item_type: str, project_id: int, parent_id: Optional[int]) -> Optional[WorkItem]:
        """Checks for an item that does not exist yet, so nothing can descend from it"""
        parent = cls.load_parent(parent_id, project_id)
        cls.validate_type_rules(item_type, parent)
        return parent

    @classmethod
    def validate_reparent(cls, work_item: WorkItem, parent_id: Optional[int]) -> Optional[WorkItem]:
        """Checks for moving an existing item under ``parent_id`` (or to the top level)"""
        parent = cls.load_parent(parent_id, work_item.project_id)
        if parent is not None:
            cls.for_project(work_item.project_id).ensure_no_cycle(work_item.id, parent.id)
        cls.validate_type_rules(work_item.item_type, parent)
        if parent is not None and work_item.children.exists():
            raise InvalidHierarchy(
                f"{work_item.key} has child work items and cannot itself be nested."
            )
        return parent
