import re

from rest_framework import serializers

from user.adapters.serializers.user_serializers import UserSummarySerializer
from workspace.models import MemberRole, Workspace, WorkspaceMember

HEX_COLOR = re.compile(r'^#([A-Fa-f0-9]{6}|[A-Fa-f0-9]{3})$')


def validate_hex_color(value):
    if value and not HEX_COLOR.match(value):
        raise serializers.ValidationError("Invalid color")
    return value


class WorkspaceSerializer(serializers.ModelSerializer):
    color = serializers.CharField(required=False, validators=[validate_hex_color])
    memberCount = serializers.IntegerField(source='member_count', read_only=True)
    projectCount = serializers.IntegerField(source='project_count', read_only=True)
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = Workspace
        fields = ('id', 'name', 'description', 'color', 'memberCount', 'projectCount', 'createdAt', 'updatedAt')
        extra_kwargs = {
            'name': {'min_length': 1},
            'description': {'required': False, 'allow_blank': True, 'allow_null': True},
        }

    def create(self, validated_data):
        return Workspace.objects.create_for_owner(self.context['request'].user, **validated_data)


class WorkspaceMemberSerializer(serializers.ModelSerializer):
    workspaceId = serializers.IntegerField(source='workspace_id', read_only=True)
    userId = serializers.IntegerField(source='user_id', read_only=True)
    joinedAt = serializers.DateTimeField(source='joined_at', read_only=True)
    user = UserSummarySerializer(read_only=True)

    class Meta:
        model = WorkspaceMember
        fields = ('id', 'workspaceId', 'userId', 'role', 'joinedAt', 'user')


class InviteMemberSerializer(serializers.Serializer):
    """Invite an existing user by email; used for workspaces and projects."""
    email = serializers.EmailField()
    role = serializers.ChoiceField(choices=MemberRole.choices, default=MemberRole.MEMBER)

    def validate_email(self, value):
        return value.strip().lower()
