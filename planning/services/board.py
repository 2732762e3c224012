# ============================================
# planning/services/board.py
# ============================================
"""
Kanban board over a project's work items.

The board stores only its column layout (one column per status). The view
is derived on every read from the work items themselves, so the board never
holds state that can drift from them.
"""
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from django.db import transaction
from django.db.models import Q

from planning.exceptions import BadRequest, EntityNotFound
from planning.models import Board, BoardColumn, Project, WorkItem
from planning.selectors.board import BoardSelector
from planning.selectors.status import StatusSelector
from planning.selectors.work_item import WorkItemSelector
from planning.services.project import ProjectService
from planning.services.work_item import WorkItemService

logger = logging.getLogger(__name__)


@dataclass
class WorkItemCard:
    id: int
    key: str
    summary: str
    item_type: str
    priority: int
    assignee_id: Optional[str]
    epic_id: Optional[int]
    epic_key: Optional[str]
    parent_id: Optional[int]
    due_date: object
    order_index: int
    assignee_data: Optional[dict] = None


@dataclass
class BoardColumnView:
    id: int
    status_id: int
    status_name: str
    status_color: str
    is_completed_status: bool
    is_cancelled_status: bool
    order_index: int
    wip_limit: Optional[int]
    is_collapsed: bool
    work_items: List[WorkItemCard] = field(default_factory=list)

    @property
    def item_count(self) -> int:
        return len(self.work_items)

    @property
    def is_over_wip_limit(self) -> bool:
        return self.wip_limit is not None and self.item_count > self.wip_limit


@dataclass
class BoardView:
    id: int
    project_id: int
    project_key: str
    name: str
    description: str
    columns: List[BoardColumnView]

    @property
    def total_items(self) -> int:
        return sum(column.item_count for column in self.columns)


class BoardService:

    @staticmethod
    def _get_project(project_id: int) -> Project:
        try:
            return Project.objects.get(id=project_id)
        except Project.DoesNotExist:
            raise EntityNotFound('Project', project_id)

    @staticmethod
    def get_board(project_id: int) -> Board:
        board = BoardSelector.get_board_by_project(project_id)
        if board is None:
            raise EntityNotFound(f"Board for project {project_id}")
        return board

    @staticmethod
    @transaction.atomic
    def create_board(
        *,
        project_id: int,
        actor_id: str,
        is_privileged: bool = False,
        name: Optional[str] = None,
        description: str = ''
    ) -> Board:
        """Create the board with one column per active status"""

        project = BoardService._get_project(project_id)
        ProjectService.check_owner(project, actor_id, is_privileged, 'create a board')

        if Board.objects.filter(project=project).exists():
            raise BadRequest(f"A board already exists for project '{project.key}'")

        board = Board.objects.create(
            project=project,
            name=name or f"{project.name} Board",
            description=description
        )

        statuses = StatusSelector.list_statuses()
        BoardColumn.objects.bulk_create([
            BoardColumn(board=board, status=status, order_index=index)
            for index, status in enumerate(statuses)
        ])

        logger.info("[board] created for %s with %s columns", project.key, len(statuses))
        return BoardSelector.get_board_by_project(project.id)

    @staticmethod
    @transaction.atomic
    def update_board(
        *,
        project_id: int,
        actor_id: str,
        is_privileged: bool = False,
        **data
    ) -> Board:
        board = BoardService.get_board(project_id)
        ProjectService.check_owner(board.project, actor_id, is_privileged, 'update the board')

        for attr in ('name', 'description'):
            if attr in data:
                setattr(board, attr, data[attr])
        board.save()
        return board

    @staticmethod
    @transaction.atomic
    def delete_board(*, project_id: int, actor_id: str, is_privileged: bool = False) -> None:
        board = BoardService.get_board(project_id)
        ProjectService.check_owner(board.project, actor_id, is_privileged, 'delete the board')

        logger.info("[board] deleted for %s by %s", board.project.key, actor_id)
        board.delete()

    @staticmethod
    def get_board_view(
        project_id: int,
        epic_ids: Optional[Sequence[int]] = None,
        assignee_ids: Optional[Sequence[str]] = None,
        search_text: Optional[str] = None
    ) -> BoardView:
        """
        Columns in board order, each with its matching work items sorted by
        ``(order_index, id)``. Filters narrow the cards only; every column is
        always present, empty or not.
        """
        board = BoardService.get_board(project_id)
        columns = list(board.columns.all())

        queryset = (
            WorkItem.objects
            .select_related('epic')
            .filter(project_id=project_id, status_id__in=[c.status_id for c in columns])
        )
        if epic_ids:
            queryset = queryset.filter(epic_id__in=epic_ids)
        if assignee_ids:
            queryset = queryset.filter(assignee_id__in=assignee_ids)
        if search_text and search_text.strip():
            text = search_text.strip()
            queryset = queryset.filter(Q(key__icontains=text) | Q(summary__icontains=text))

        by_status: Dict[int, List[WorkItemCard]] = {}
        for item in queryset.order_by('order_index', 'id'):
            by_status.setdefault(item.status_id, []).append(WorkItemCard(
                id=item.id,
                key=item.key,
                summary=item.summary,
                item_type=item.item_type,
                priority=item.priority,
                assignee_id=item.assignee_id,
                epic_id=item.epic_id,
                epic_key=item.epic.key if item.epic_id else None,
                parent_id=item.parent_id,
                due_date=item.due_date,
                order_index=item.order_index,
            ))

        column_views = [
            BoardColumnView(
                id=column.id,
                status_id=column.status_id,
                status_name=column.status.name,
                status_color=column.status.color,
                is_completed_status=column.status.is_completed_status,
                is_cancelled_status=column.status.is_cancelled_status,
                order_index=column.order_index,
                wip_limit=column.wip_limit,
                is_collapsed=column.is_collapsed,
                work_items=by_status.get(column.status_id, []),
            )
            for column in columns
        ]

        WorkItemSelector.enrich_work_items_with_users(
            card for column in column_views for card in column.work_items
        )

        return BoardView(
            id=board.id,
            project_id=board.project_id,
            project_key=board.project.key,
            name=board.name,
            description=board.description,
            columns=column_views,
        )

    @staticmethod
    def move_work_item(
        *,
        project_id: int,
        work_item_id: int,
        to_status_id: int,
        actor_id: str
    ) -> WorkItem:
        """Drag a card to another column; only the status changes"""

        BoardService.get_board(project_id)
        if not WorkItem.objects.filter(id=work_item_id, project_id=project_id).exists():
            raise EntityNotFound(f"Work item {work_item_id} in project {project_id}")

        work_item = WorkItemService.move_work_item(work_item_id=work_item_id, to_status_id=to_status_id)
        logger.info("[board] %s moved by %s", work_item.key, actor_id)
        return work_item

    @staticmethod
    @transaction.atomic
    def update_column(
        *,
        project_id: int,
        column_id: int,
        actor_id: str,
        is_privileged: bool = False,
        **data
    ) -> BoardColumn:
        """WIP limits are advisory: lowering one below the current count is allowed"""

        board = BoardService.get_board(project_id)
        ProjectService.check_owner(board.project, actor_id, is_privileged, 'configure the board')

        column = BoardSelector.get_column(board.id, column_id)
        if column is None:
            raise EntityNotFound('Board column', column_id)

        changed = [attr for attr in ('wip_limit', 'is_collapsed') if attr in data]
        for attr in changed:
            setattr(column, attr, data[attr])
        if changed:
            column.save(update_fields=changed)
        return column

    @staticmethod
    @transaction.atomic
    def reorder_columns(
        *,
        project_id: int,
        column_ids: List[int],
        actor_id: str,
        is_privileged: bool = False
    ) -> Board:
        """
        ``column_ids`` must be a permutation of the board's columns. Position
        in the list becomes the column's ``order_index``; nothing is written
        unless the whole list is valid.
        """
        board = BoardService.get_board(project_id)
        ProjectService.check_owner(board.project, actor_id, is_privileged, 'configure the board')

        columns = {c.id: c for c in BoardColumn.objects.select_for_update().filter(board=board)}

        if len(column_ids) != len(columns):
            raise BadRequest(
                f"Column list must contain all {len(columns)} columns of the board, got {len(column_ids)}"
            )
        if len(set(column_ids)) != len(column_ids):
            raise BadRequest("Column list contains duplicates")
        unknown = [cid for cid in column_ids if cid not in columns]
        if unknown:
            raise BadRequest(f"Columns {unknown} do not belong to this board")

        for index, column_id in enumerate(column_ids):
            columns[column_id].order_index = index
        BoardColumn.objects.bulk_update(columns.values(), ['order_index'])

        logger.info("[board] columns reordered for %s by %s", board.project.key, actor_id)
        return BoardSelector.get_board_by_project(project_id)
