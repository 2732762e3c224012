# ============================================
# planning/models/epic.py
# ============================================
from django.core.validators import MaxValueValidator, MinValueValidator
from django.db import models


class Epic(models.Model):
    project = models.ForeignKey(
        'Project',
        on_delete=models.PROTECT,
        related_name='epics'
    )
    key = models.CharField(max_length=50, unique=True, db_index=True)
    summary = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    status = models.ForeignKey(
        'Status',
        on_delete=models.PROTECT,
        related_name='epics'
    )
    assignee_id = models.CharField(max_length=64, null=True, blank=True, db_index=True)
    priority = models.PositiveSmallIntegerField(
        default=3,
        validators=[MinValueValidator(1), MaxValueValidator(5)]
    )
    start_date = models.DateField(null=True, blank=True)
    due_date = models.DateField(null=True, blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'epics'
        ordering = ['-updated_at']
        indexes = [
            models.Index(fields=['project', 'status'], name='epics_project_status_idx'),
        ]

    def __str__(self):
        return f"{self.key} - {self.summary}"
