# ============================================
# planning/selectors/board.py
# ============================================
from typing import Optional
from django.db.models import Prefetch
from planning.models import Board, BoardColumn


class BoardSelector:

    @staticmethod
    def get_board_by_project(project_id: int) -> Optional[Board]:
        """Board of a project with its columns (ordered) and their statuses"""
        columns = BoardColumn.objects.select_related('status').order_by('order_index', 'id')
        try:
            return (
                Board.objects
                .select_related('project')
                .prefetch_related(Prefetch('columns', queryset=columns))
                .get(project_id=project_id)
            )
        except Board.DoesNotExist:
            return None

    @staticmethod
    def get_column(board_id: int, column_id: int) -> Optional[BoardColumn]:
        try:
            return BoardColumn.objects.select_related('status').get(id=column_id, board_id=board_id)
        except BoardColumn.DoesNotExist:
            return None
