# ============================================
# planning/serializers/project.py
# ============================================
from rest_framework import serializers
from planning.models import Project


class ProjectCreateSerializer(serializers.Serializer):
    key = serializers.RegexField(
        r'^[A-Z][A-Z0-9]{1,9}$',
        max_length=10,
        error_messages={'invalid': 'Key must be 2-10 uppercase letters or digits, starting with a letter.'}
    )
    name = serializers.CharField(max_length=200)
    description = serializers.CharField(required=False, allow_blank=True, default='')


class ProjectUpdateSerializer(serializers.Serializer):
    name = serializers.CharField(max_length=200, required=False)
    description = serializers.CharField(required=False, allow_blank=True)
    is_active = serializers.BooleanField(required=False)


class ProjectOutputSerializer(serializers.ModelSerializer):
    owner = serializers.SerializerMethodField()
    epic_count = serializers.IntegerField(read_only=True, default=None)
    work_item_count = serializers.IntegerField(read_only=True, default=None)

    class Meta:
        model = Project
        fields = [
            'id', 'key', 'name', 'description', 'owner_id', 'owner',
            'is_active', 'is_archived', 'epic_count', 'work_item_count',
            'created_at', 'updated_at'
        ]

    def get_owner(self, obj):
        return getattr(obj, 'owner_data', None)
