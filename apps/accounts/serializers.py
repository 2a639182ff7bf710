from rest_framework import serializers
from django.contrib.auth.password_validation import validate_password
from .models import User, UserRole


class UserSerializer(serializers.ModelSerializer):
    """Own profile. Never exposes password hash or tokens."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = [
            'id',
            'email',
            'username',
            'first_name',
            'last_name',
            'display_name',
            'phone',
            'avatar_url',
            'role',
            'email_verified',
            'created_at',
            'last_login',
        ]
        read_only_fields = ['id', 'email', 'username', 'role', 'email_verified', 'created_at', 'last_login']


class UserRegistrationSerializer(serializers.ModelSerializer):
    """Serializer for user registration."""

    password = serializers.CharField(
        write_only=True,
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    password_confirm = serializers.CharField(
        write_only=True,
        required=True,
        style={'input_type': 'password'}
    )
    role = serializers.ChoiceField(
        choices=[UserRole.BUYER, UserRole.SELLER, UserRole.DEALER],
        default=UserRole.BUYER,
    )

    class Meta:
        model = User
        fields = [
            'email',
            'username',
            'password',
            'password_confirm',
            'first_name',
            'last_name',
            'phone',
            'role',
        ]
        extra_kwargs = {
            'username': {'required': False},
        }

    def validate_username(self, value):
        value = value.lower()
        if User.objects.filter(username=value).exists():
            raise serializers.ValidationError('Username is already taken')
        return value

    def validate(self, attrs):
        """Validate password confirmation."""
        if attrs['password'] != attrs['password_confirm']:
            raise serializers.ValidationError({
                'password_confirm': 'Passwords do not match'
            })
        return attrs


class UserLoginSerializer(serializers.Serializer):
    """Credentials. ``login`` takes either the email address or the username."""

    login = serializers.CharField(max_length=255)
    password = serializers.CharField(
        required=True,
        write_only=True,
        style={'input_type': 'password'}
    )


class PasswordResetRequestSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)


class PasswordResetConfirmSerializer(serializers.Serializer):
    """Serializer for password reset confirmation."""

    token = serializers.CharField(required=True)
    new_password = serializers.CharField(
        required=True,
        validators=[validate_password],
        style={'input_type': 'password'}
    )
    new_password_confirm = serializers.CharField(
        required=True,
        style={'input_type': 'password'}
    )

    def validate(self, attrs):
        if attrs['new_password'] != attrs['new_password_confirm']:
            raise serializers.ValidationError({
                'new_password_confirm': 'Passwords do not match'
            })
        return attrs


class UserPublicSerializer(serializers.ModelSerializer):
    """Public user info (sellers on listings, conversation participants)."""

    display_name = serializers.CharField(source='get_display_name', read_only=True)

    class Meta:
        model = User
        fields = ['id', 'username', 'display_name', 'avatar_url', 'role', 'created_at']
        read_only_fields = fields


class SellerProfileSerializer(serializers.Serializer):
    """Public seller page: identity plus reputation and inventory counts."""

    user = UserPublicSerializer()
    average_rating = serializers.FloatField(allow_null=True)
    review_count = serializers.IntegerField()
    active_vehicle_count = serializers.IntegerField()
    sold_vehicle_count = serializers.IntegerField()


class EmailTokenSerializer(serializers.Serializer):
    token = serializers.CharField(help_text="Token from the verification email")
