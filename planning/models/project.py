# ============================================
# planning/models/project.py
# ============================================
from django.db import models


class Project(models.Model):
    key = models.CharField(max_length=10, unique=True, db_index=True)
    name = models.CharField(max_length=200)
    description = models.TextField(blank=True)
    owner_id = models.CharField(max_length=64, db_index=True)
    is_active = models.BooleanField(default=True)
    is_archived = models.BooleanField(default=False)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'projects'
        ordering = ['-updated_at']

    def __str__(self):
        return f"{self.key} - {self.name}"
