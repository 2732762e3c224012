# ============================================
# planning/serializers/epic.py
# ============================================
from rest_framework import serializers
from planning.models import Epic


class EpicCreateSerializer(serializers.Serializer):
    project_id = serializers.IntegerField()
    summary = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')
    assignee_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    priority = serializers.IntegerField(min_value=1, max_value=5, required=False, default=3)
    start_date = serializers.DateField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)


class EpicUpdateSerializer(serializers.Serializer):
    summary = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    status_id = serializers.IntegerField(required=False)
    assignee_id = serializers.CharField(max_length=64, required=False, allow_null=True)
    priority = serializers.IntegerField(min_value=1, max_value=5, required=False)
    start_date = serializers.DateField(required=False, allow_null=True)
    due_date = serializers.DateField(required=False, allow_null=True)


class EpicStatusSerializer(serializers.Serializer):
    status_id = serializers.IntegerField()


class EpicOutputSerializer(serializers.ModelSerializer):
    project_key = serializers.CharField(source='project.key', read_only=True)
    status_name = serializers.CharField(source='status.name', read_only=True)
    assignee = serializers.SerializerMethodField()
    work_item_count = serializers.IntegerField(read_only=True, default=None)
    completed_work_item_count = serializers.IntegerField(read_only=True, default=None)

    class Meta:
        model = Epic
        fields = [
            'id', 'key', 'project_id', 'project_key', 'summary', 'description',
            'status_id', 'status_name', 'assignee_id', 'assignee', 'priority',
            'start_date', 'due_date', 'work_item_count', 'completed_work_item_count',
            'created_at', 'updated_at'
        ]

    def get_assignee(self, obj):
        return getattr(obj, 'assignee_data', None)
