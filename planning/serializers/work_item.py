# ============================================
# planning/serializers/work_item.py
# ============================================
from rest_framework import serializers
from planning.models import WorkItem


class WorkItemCreateSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    summary = serializers.CharField(max_length=200)
    item_type = serializers.ChoiceField(choices=WorkItem.ItemType.choices)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    epic_id = serializers.IntegerField(required=False, allow_null=True)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    assignee_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    reporter_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    priority = serializers.ChoiceField(
        choices=WorkItem.Priority.choices,
        default=WorkItem.Priority.MEDIUM
    )
    due_date = serializers.DateField(required=False, allow_null=True)


class WorkItemUpdateSerializer(serializers.Serializer):
    """``item_type`` is absent on purpose: the type is fixed at creation"""
    summary = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    epic_id = serializers.IntegerField(required=False, allow_null=True)
    parent_id = serializers.IntegerField(required=False, allow_null=True)
    status_id = serializers.IntegerField(required=False)
    assignee_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    priority = serializers.ChoiceField(choices=WorkItem.Priority.choices, required=False)
    due_date = serializers.DateField(required=False, allow_null=True)
    order_index = serializers.IntegerField(required=False)


class WorkItemStatusSerializer(serializers.Serializer):
    status_id = serializers.IntegerField()


class WorkItemAssignSerializer(serializers.Serializer):
    assignee_id = serializers.CharField(max_length=64, allow_null=True)


class WorkItemSearchSerializer(serializers.Serializer):
    project_id = serializers.IntegerField(required=False)
    epic_id = serializers.IntegerField(required=False)
    item_type = serializers.ChoiceField(choices=WorkItem.ItemType.choices, required=False)
    status_id = serializers.IntegerField(required=False)
    assignee_id = serializers.CharField(max_length=64, required=False)
    reporter_id = serializers.CharField(max_length=64, required=False)
    priority = serializers.ChoiceField(choices=WorkItem.Priority.choices, required=False)
    search_text = serializers.CharField(required=False, allow_blank=True)
    page = serializers.IntegerField(min_value=1, required=False, default=1)
    page_size = serializers.IntegerField(min_value=1, required=False)


class WorkItemOutputSerializer(serializers.ModelSerializer):
    project_key = serializers.CharField(source='project.key', read_only=True)
    epic_key = serializers.CharField(source='epic.key', read_only=True, default=None)
    parent_key = serializers.CharField(source='parent.key', read_only=True, default=None)
    status_name = serializers.CharField(source='status.name', read_only=True)
    assignee = serializers.SerializerMethodField()
    reporter = serializers.SerializerMethodField()
    child_count = serializers.IntegerField(read_only=True, default=None)

    class Meta:
        model = WorkItem
        fields = [
            'id', 'key', 'project_id', 'project_key', 'item_type', 'summary',
            'description', 'epic_id', 'epic_key', 'parent_id', 'parent_key',
            'status_id', 'status_name', 'assignee_id', 'assignee', 'reporter_id',
            'reporter', 'priority', 'due_date', 'order_index', 'child_count',
            'created_at', 'updated_at'
        ]

    def get_assignee(self, obj):
        return getattr(obj, 'assignee_data', None)

    def get_reporter(self, obj):
        return getattr(obj, 'reporter_data', None)


class WorkItemListOutputSerializer(serializers.ModelSerializer):
    """Lighter serializer for search results"""
    status_name = serializers.CharField(source='status.name', read_only=True)
    assignee = serializers.SerializerMethodField()

    class Meta:
        model = WorkItem
        fields = [
            'id', 'key', 'item_type', 'summary', 'epic_id', 'parent_id',
            'status_id', 'status_name', 'assignee_id', 'assignee',
            'priority', 'updated_at'
        ]

    def get_assignee(self, obj):
        assignee_data = getattr(obj, 'assignee_data', None)
        if assignee_data:
            return {'id': assignee_data['id'], 'name': assignee_data.get('name')}
        return None
