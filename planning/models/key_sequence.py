# ============================================
# planning/models/key_sequence.py
# ============================================
from django.db import models


class KeySequence(models.Model):
    """Per-project counter backing human-readable key issuance."""

    class Kind(models.TextChoices):
        EPIC = 'EPIC', 'Epic'
        WORK_ITEM = 'WORK_ITEM', 'Work item'

    project = models.ForeignKey(
        'Project',
        on_delete=models.CASCADE,
        related_name='key_sequences'
    )
    kind = models.CharField(max_length=10, choices=Kind.choices)
    last_value = models.PositiveIntegerField(default=0)

    class Meta:
        db_table = 'key_sequences'
        constraints = [
            models.UniqueConstraint(
                fields=['project', 'kind'],
                name='uniq_key_sequence_project_kind',
            ),
        ]

    def __str__(self):
        return f"{self.project_id}:{self.kind}={self.last_value}"
