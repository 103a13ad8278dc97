from django.contrib.auth.models import User
from rest_framework import serializers

from user.models import SystemRole, UserProfile, display_name


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField()


class UserSummarySerializer(serializers.ModelSerializer):
    """Compact user representation embedded in other resources."""
    name = serializers.SerializerMethodField()

    class Meta:
        model = User
        fields = ('id', 'name', 'email')

    def get_name(self, obj):
        return display_name(obj)


class UserSerializer(UserSummarySerializer):
    role = serializers.SerializerMethodField()
    avatar = serializers.SerializerMethodField()
    createdAt = serializers.DateTimeField(source='date_joined', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'name', 'email', 'role', 'avatar', 'createdAt')

    def get_role(self, obj):
        profile = getattr(obj, 'profile', None)
        return profile.role if profile else SystemRole.MEMBER

    def get_avatar(self, obj):
        profile = getattr(obj, 'profile', None)
        if profile is None or not profile.avatar:
            return None
        request = self.context.get('request')
        if request is not None:
            return request.build_absolute_uri(profile.avatar.url)
        return profile.avatar.url


class RegisterSerializer(serializers.Serializer):
    name = serializers.CharField(min_length=2, max_length=255)
    email = serializers.EmailField(max_length=150)
    password = serializers.CharField(min_length=6, write_only=True)
    confirmPassword = serializers.CharField(write_only=True)

    def validate_email(self, value):
        return value.strip().lower()

    def validate(self, attrs):
        if attrs['password'] != attrs['confirmPassword']:
            raise serializers.ValidationError({'confirmPassword': ["Passwords don't match"]})
        return attrs

    def create(self, validated_data):
        email = validated_data['email']
        user = User.objects.create_user(
            username=email,
            email=email,
            password=validated_data['password'],
            first_name=validated_data['name'][:150],
        )
        UserProfile.objects.create(user=user, name=validated_data['name'], role=SystemRole.MEMBER)
        return user
