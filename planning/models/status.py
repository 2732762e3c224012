# ============================================
# planning/models/status.py
# ============================================
from django.db import models


class Status(models.Model):
    name = models.CharField(max_length=50, unique=True)
    color = models.CharField(max_length=20, blank=True, default='')
    order_index = models.IntegerField(default=0)
    is_default_for_new = models.BooleanField(default=False)
    is_completed_status = models.BooleanField(default=False)
    is_cancelled_status = models.BooleanField(default=False)
    is_active = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'statuses'
        ordering = ['order_index', 'id']
        verbose_name_plural = 'statuses'

    def __str__(self):
        return self.name


class StatusTransition(models.Model):
    """Directed edge of the status graph. A missing edge means the move is allowed."""

    from_status = models.ForeignKey(
        'Status',
        on_delete=models.CASCADE,
        related_name='transitions_from'
    )
    to_status = models.ForeignKey(
        'Status',
        on_delete=models.CASCADE,
        related_name='transitions_to'
    )
    is_allowed = models.BooleanField(default=True)
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        db_table = 'status_transitions'
        ordering = ['from_status_id', 'to_status_id']
        constraints = [
            models.UniqueConstraint(
                fields=['from_status', 'to_status'],
                name='uniq_status_transition_pair',
            ),
        ]

    def __str__(self):
        arrow = '->' if self.is_allowed else '-x->'
        return f"{self.from_status_id} {arrow} {self.to_status_id}"
