# ============================================
# planning/serializers/board.py
# ============================================
from rest_framework import serializers
from planning.models import Board, BoardColumn


class BoardCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class BoardUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)


class BoardColumnUpdateSerializer(serializers.Serializer):
    wip_limit = serializers.IntegerField(min_value=1, required=False, allow_null=True)
    is_collapsed = serializers.BooleanField(required=False)


class ColumnReorderSerializer(serializers.Serializer):
    column_ids = serializers.ListField(child=serializers.IntegerField(), allow_empty=False)


class BoardMoveSerializer(serializers.Serializer):
    to_status_id = serializers.IntegerField()


class BoardColumnOutputSerializer(serializers.ModelSerializer):
    status_name = serializers.CharField(source='status.name', read_only=True)
    status_color = serializers.CharField(source='status.color', read_only=True)

    class Meta:
        model = BoardColumn
        fields = ['id', 'status_id', 'status_name', 'status_color', 'order_index', 'wip_limit', 'is_collapsed']


class BoardOutputSerializer(serializers.ModelSerializer):
    project_key = serializers.CharField(source='project.key', read_only=True)
    columns = BoardColumnOutputSerializer(many=True, read_only=True)

    class Meta:
        model = Board
        fields = ['id', 'project_id', 'project_key', 'name', 'description', 'columns', 'created_at', 'updated_at']


# ---- derived view (plain objects, not models)

class WorkItemCardSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    key = serializers.CharField()
    summary = serializers.CharField()
    item_type = serializers.CharField()
    priority = serializers.IntegerField()
    assignee_id = serializers.CharField(allow_null=True)
    assignee = serializers.DictField(source='assignee_data', allow_null=True)
    epic_id = serializers.IntegerField(allow_null=True)
    epic_key = serializers.CharField(allow_null=True)
    parent_id = serializers.IntegerField(allow_null=True)
    due_date = serializers.DateField(allow_null=True)
    order_index = serializers.IntegerField()


class BoardColumnViewSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    status_id = serializers.IntegerField()
    status_name = serializers.CharField()
    status_color = serializers.CharField()
    is_completed_status = serializers.BooleanField()
    is_cancelled_status = serializers.BooleanField()
    order_index = serializers.IntegerField()
    wip_limit = serializers.IntegerField(allow_null=True)
    is_collapsed = serializers.BooleanField()
    item_count = serializers.IntegerField()
    is_over_wip_limit = serializers.BooleanField()
    work_items = WorkItemCardSerializer(many=True)


class BoardViewSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    project_id = serializers.IntegerField()
    project_key = serializers.CharField()
    name = serializers.CharField()
    description = serializers.CharField()
    total_items = serializers.IntegerField()
    columns = BoardColumnViewSerializer(many=True)
