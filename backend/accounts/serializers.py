"""
Serializers for user registration and profile management.
"""

from django.conf import settings
from django.contrib.auth import password_validation
from django.utils.crypto import constant_time_compare
from rest_framework import serializers

from .directory import user_summary
from .models import User


class UserProfileSerializer(serializers.ModelSerializer):
    """
    Public profile of a user plus their role.
    """

    name = serializers.CharField(max_length=150, required=False, allow_blank=True)
    email = serializers.EmailField(required=False)
    profileImageUrl = serializers.CharField(
        source='profile_image_url',
        max_length=2048,
        required=False,
        allow_blank=True
    )
    password = serializers.CharField(write_only=True, required=False, min_length=8)

    class Meta:
        model = User
        fields = ['id', 'name', 'email', 'profileImageUrl', 'role', 'password']
        read_only_fields = ['id', 'role']

    def validate_email(self, value):
        """Emails double as login names, so they must be unique."""
        value = value.strip().lower()
        duplicates = User.objects.filter(email__iexact=value)
        if self.instance is not None:
            duplicates = duplicates.exclude(pk=self.instance.pk)
        if duplicates.exists():
            raise serializers.ValidationError("User already exists")
        return value

    def validate_password(self, value):
        password_validation.validate_password(value, self.instance)
        return value

    def to_representation(self, instance):
        data = user_summary(instance)
        data['role'] = instance.role
        return data

    def update(self, instance, validated_data):
        password = validated_data.pop('password', None)
        email = validated_data.get('email')
        for attr, value in validated_data.items():
            setattr(instance, attr, value)
        if email:
            instance.username = email
        if password:
            instance.set_password(password)
        instance.save()
        return instance


class RegisterSerializer(UserProfileSerializer):
    """
    Validates a new account.

    A matching ``adminInviteToken`` grants the admin role; anything else
    (including no token) registers a member.
    """

    name = serializers.CharField(max_length=150)
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, min_length=8)
    adminInviteToken = serializers.CharField(write_only=True, required=False, allow_blank=True)

    class Meta(UserProfileSerializer.Meta):
        fields = UserProfileSerializer.Meta.fields + ['adminInviteToken']

    def create(self, validated_data):
        token = validated_data.pop('adminInviteToken', '')
        role = User.Role.MEMBER
        if settings.ADMIN_INVITE_TOKEN and token and constant_time_compare(
            token, settings.ADMIN_INVITE_TOKEN
        ):
            role = User.Role.ADMIN

        return User.objects.create_user(
            username=validated_data['email'],
            email=validated_data['email'],
            password=validated_data['password'],
            name=validated_data['name'].strip(),
            profile_image_url=validated_data.get('profile_image_url', ''),
            role=role,
        )
