# ============================================
# planning/models/__init__.py
# ============================================
from .project import Project
from .status import Status, StatusTransition
from .epic import Epic
from .work_item import WorkItem
from .board import Board, BoardColumn
from .key_sequence import KeySequence

__all__ = [
    'Project',
    'Status',
    'StatusTransition',
    'Epic',
    'WorkItem',
    'Board',
    'BoardColumn',
    'KeySequence',
]
