from rest_framework import serializers
from django.contrib.auth import get_user_model

User = get_user_model()

USERNAME_PATTERN = r'^[a-zA-Z0-9_\u4e00-\u9fa5]+$'
PASSWORD_MIN_LENGTH = 6


class UserSerializer(serializers.ModelSerializer):
    createdAt = serializers.DateTimeField(source='created_at', read_only=True)
    updatedAt = serializers.DateTimeField(source='updated_at', read_only=True)

    class Meta:
        model = User
        fields = ('id', 'username', 'email', 'createdAt', 'updatedAt')


class UserSummarySerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ('id', 'username')


class RegisterSerializer(serializers.Serializer):
    username = serializers.RegexField(
        USERNAME_PATTERN,
        min_length=2,
        max_length=50,
        error_messages={
            'required': 'Username is required',
            'blank': 'Username is required',
            'min_length': 'Username must be between 2 and 50 characters',
            'max_length': 'Username must be between 2 and 50 characters',
            'invalid': 'Username may only contain letters, digits, underscores and CJK characters',
        },
    )
    password = serializers.CharField(
        write_only=True,
        trim_whitespace=False,
        min_length=PASSWORD_MIN_LENGTH,
        error_messages={
            'required': 'Password is required',
            'blank': 'Password is required',
            'min_length': f'Password must be at least {PASSWORD_MIN_LENGTH} characters',
        },
    )
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={'invalid': 'Email format is invalid'},
    )

    def validate_username(self, value):
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError('Username already exists')
        return value

    def validate_email(self, value):
        if not value:
            return None
        value = User.objects.normalize_email(value)
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError('Email is already in use')
        return value

    def create(self, validated_data):
        return User.objects.create_user(
            username=validated_data['username'],
            email=validated_data.get('email'),
            password=validated_data['password'],
        )


class LoginSerializer(serializers.Serializer):
    username = serializers.CharField(error_messages={
        'required': 'Username is required',
        'blank': 'Username is required',
    })
    password = serializers.CharField(trim_whitespace=False, error_messages={
        'required': 'Password is required',
        'blank': 'Password is required',
    })


class UpdateMeSerializer(serializers.ModelSerializer):
    email = serializers.EmailField(
        required=False,
        allow_blank=True,
        allow_null=True,
        error_messages={'invalid': 'Email format is invalid'},
    )

    class Meta:
        model = User
        fields = ('email',)

    def validate_email(self, value):
        if not value:
            return None
        value = User.objects.normalize_email(value)
        taken = User.objects.filter(email__iexact=value).exclude(pk=self.instance.pk).exists()
        if taken:
            raise serializers.ValidationError('Email is already used by another user')
        return value

    def update(self, instance, validated_data):
        # an empty email leaves the stored one untouched
        email = validated_data.get('email')
        if email:
            instance.email = email
            instance.save(update_fields=['email', 'updated_at'])
        return instance


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(trim_whitespace=False, error_messages={
        'required': 'Current password is required',
        'blank': 'Current password is required',
    })
    newPassword = serializers.CharField(
        trim_whitespace=False,
        min_length=PASSWORD_MIN_LENGTH,
        error_messages={
            'required': 'New password is required',
            'blank': 'New password is required',
            'min_length': f'New password must be at least {PASSWORD_MIN_LENGTH} characters',
        },
    )

    def validate_currentPassword(self, value):
        user = self.context['request'].user
        if not user.check_password(value):
            raise serializers.ValidationError('Current password is incorrect')
        return value

    def save(self, **kwargs):
        user = self.context['request'].user
        user.set_password(self.validated_data['newPassword'])
        user.save(update_fields=['password', 'updated_at'])
        return user
