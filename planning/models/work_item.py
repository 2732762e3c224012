# ============================================
# planning/models/work_item.py
# ============================================
from django.db import models


class WorkItem(models.Model):
    class ItemType(models.TextChoices):
        TASK = 'TASK', 'Task'
        BUG = 'BUG', 'Bug'
        SUBTASK = 'SUBTASK', 'Subtask'

    class Priority(models.IntegerChoices):
        HIGHEST = 1, 'Highest'
        HIGH = 2, 'High'
        MEDIUM = 3, 'Medium'
        LOW = 4, 'Low'
        LOWEST = 5, 'Lowest'

    project = models.ForeignKey(
        'Project',
        on_delete=models.PROTECT,
        related_name='work_items'
    )
    epic = models.ForeignKey(
        'Epic',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='work_items'
    )
    parent = models.ForeignKey(
        'self',
        on_delete=models.PROTECT,
        null=True,
        blank=True,
        related_name='children'
    )
    key = models.CharField(max_length=50, unique=True, db_index=True)
    item_type = models.CharField(max_length=10, choices=ItemType.choices)
    summary = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.ForeignKey(
        'Status',
        on_delete=models.PROTECT,
        related_name='work_items'
    )
    assignee_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    reporter_id = models.CharField(max_length=64, db_index=True)
    priority = models.PositiveSmallIntegerField(
        choices=Priority.choices,
        default=Priority.MEDIUM
    )
    due_date = models.DateField(null=True, blank=True)
    order_index = models.IntegerField(default=0)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'work_items'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['project', 'status'], name='work_items_project_status_idx'),
            models.Index(fields=['project', 'order_index'], name='work_items_project_order_idx'),
        ]

    def __str__(self):
        return f"{self.key} - {self.summary}"
