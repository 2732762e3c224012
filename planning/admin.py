from django.contrib import admin
from .models import Board, BoardColumn, Epic, KeySequence, Project, Status, StatusTransition, WorkItem

@admin.register(Project)
class ProjectAdmin(admin.ModelAdmin):
    list_display = ("id", "key", "name", "owner_id", "is_active", "is_archived", "updated_at")
    list_filter = ("is_active", "is_archived")
    search_fields = ("key", "name")

@admin.register(Status)
class StatusAdmin(admin.ModelAdmin):
    list_display = ("id", "name", "order_index", "is_default_for_new", "is_completed_status", "is_cancelled_status", "is_active")
    list_filter = ("is_active",)
    ordering = ("order_index", "id")

@admin.register(StatusTransition)
class StatusTransitionAdmin(admin.ModelAdmin):
    list_display = ("id", "from_status", "to_status", "is_allowed", "created_at")
    list_filter = ("is_allowed",)

@admin.register(Epic)
class EpicAdmin(admin.ModelAdmin):
    list_display = ("id", "key", "summary", "project", "status", "assignee_id", "priority", "due_date")
    list_filter = ("status", "project")
    search_fields = ("key", "summary")

@admin.register(WorkItem)
class WorkItemAdmin(admin.ModelAdmin):
    list_display = ("id", "key", "item_type", "summary", "project", "epic", "parent", "status", "assignee_id", "updated_at")
    list_filter = ("item_type", "status", "project")
    search_fields = ("key", "summary", "description")
    raw_id_fields = ("epic", "parent")

class BoardColumnInline(admin.TabularInline):
    model = BoardColumn
    extra = 0

@admin.register(Board)
class BoardAdmin(admin.ModelAdmin):
    list_display = ("id", "project", "name", "updated_at")
    inlines = [BoardColumnInline]

@admin.register(KeySequence)
class KeySequenceAdmin(admin.ModelAdmin):
    list_display = ("id", "project", "kind", "last_value")
    list_filter = ("kind",)
