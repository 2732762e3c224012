# ============================================
# planning/serializers/status.py
# ============================================
from rest_framework import serializers
from planning.models import Status, StatusTransition

COLOR_PATTERN = r'^#[0-9A-Fa-f]{6}$'


class StatusCreateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50)
    color = serializers.RegexField(COLOR_PATTERN, required=False, default='')
    order_index = serializers.IntegerField(required=False, default=0)
    is_default_for_new = serializers.BooleanField(required=False, default=False)
    is_completed_status = serializers.BooleanField(required=False, default=False)
    is_cancelled_status = serializers.BooleanField(required=False, default=False)


class StatusUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=50, required=False)
    color = serializers.RegexField(COLOR_PATTERN, required=False)
    order_index = serializers.IntegerField(required=False)
    is_default_for_new = serializers.BooleanField(required=False)
    is_completed_status = serializers.BooleanField(required=False)
    is_cancelled_status = serializers.BooleanField(required=False)
    is_active = serializers.BooleanField(required=False)


class StatusOutputSerializer(serializers.ModelSerializer):
    class Meta:
        model = Status
        fields = [
            'id', 'name', 'color', 'order_index', 'is_default_for_new',
            'is_completed_status', 'is_cancelled_status', 'is_active', 'created_at'
        ]


class TransitionCreateSerializer(serializers.Serializer):
    from_status_id = serializers.IntegerField()
    to_status_id = serializers.IntegerField()
    is_allowed = serializers.BooleanField(required=False, default=True)


class TransitionValidateSerializer(serializers.Serializer):
    from_status_id = serializers.IntegerField()
    to_status_id = serializers.IntegerField()


class TransitionOutputSerializer(serializers.ModelSerializer):
    from_status_name = serializers.CharField(source='from_status.name', read_only=True)
    to_status_name = serializers.CharField(source='to_status.name', read_only=True)

    class Meta:
        model = StatusTransition
        fields = [
            'id', 'from_status_id', 'from_status_name',
            'to_status_id', 'to_status_name', 'is_allowed', 'created_at'
        ]
