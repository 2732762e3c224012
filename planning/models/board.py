# ============================================
# planning/models/board.py
# ============================================
from django.db import models


class Board(models.Model):
    project = models.OneToOneField(
        'Project',
        on_delete=models.CASCADE,
        related_name='board'
    )
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'boards'

    def __str__(self):
        return f"{self.project.key} - {self.name}"


class BoardColumn(models.Model):
    board = models.ForeignKey(
        'Board',
        on_delete=models.CASCADE,
        related_name='columns'
    )
    status = models.ForeignKey(
        'Status',
        on_delete=models.CASCADE,
        related_name='board_columns'
    )
    order_index = models.IntegerField(default=0)
    wip_limit = models.PositiveIntegerField(null=True, blank=True)
    is_collapsed = models.BooleanField(default=False)

    class Meta:
        db_table = 'board_columns'
        ordering = ['order_index', 'id']
        constraints = [
            models.UniqueConstraint(
                fields=['board', 'status'],
                name='uniq_board_column_status',
            ),
        ]

    def __str__(self):
        return f"{self.board_id} - {self.status_id}"
