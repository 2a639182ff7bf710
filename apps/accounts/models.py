from django.contrib.auth.models import AbstractBaseUser, BaseUserManager, PermissionsMixin
from django.db import models
from django.utils import timezone
import uuid


class UserRole(models.TextChoices):
    BUYER = 'buyer', 'Buyer'
    SELLER = 'seller', 'Seller'
    DEALER = 'dealer', 'Dealer'
    ADMIN = 'admin', 'Admin'


SELLING_ROLES = (UserRole.SELLER, UserRole.DEALER, UserRole.ADMIN)


class UserManager(BaseUserManager):
    """Custom user manager for email-based authentication."""

    def create_user(self, email, password=None, **extra_fields):
        if not email:
            raise ValueError('Email is required')

        email = self.normalize_email(email).lower()
        extra_fields.setdefault('username', email.split('@')[0])
        extra_fields['username'] = extra_fields['username'].lower()

        user = self.model(email=email, **extra_fields)
        user.set_password(password)
        user.save(using=self._db)
        return user

    def create_superuser(self, email, password=None, **extra_fields):
        extra_fields.setdefault('is_staff', True)
        extra_fields.setdefault('is_superuser', True)
        extra_fields.setdefault('email_verified', True)
        extra_fields.setdefault('role', UserRole.ADMIN)

        if extra_fields.get('is_staff') is not True:
            raise ValueError('Superuser must have is_staff=True')
        if extra_fields.get('is_superuser') is not True:
            raise ValueError('Superuser must have is_superuser=True')

        return self.create_user(email, password, **extra_fields)


class User(AbstractBaseUser, PermissionsMixin):
    """Marketplace user. Buyers, private sellers, dealers and admins share one table."""

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(unique=True, max_length=255, db_index=True)
    username = models.CharField(unique=True, max_length=100)
    first_name = models.CharField(max_length=100, blank=True)
    last_name = models.CharField(max_length=100, blank=True)
    phone = models.CharField(max_length=20, blank=True)
    avatar_url = models.URLField(max_length=500, blank=True)
    role = models.CharField(max_length=20, choices=UserRole.choices, default=UserRole.BUYER, db_index=True)

    # Email verification and password reset
    email_verified = models.BooleanField(default=False)
    verification_token = models.CharField(max_length=64, blank=True, null=True)
    password_reset_token = models.CharField(max_length=64, blank=True, null=True, unique=True)
    password_reset_expires_at = models.DateTimeField(null=True, blank=True)

    # Permissions
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=False)

    # Timestamps
    created_at = models.DateTimeField(auto_now_add=True)
    last_login = models.DateTimeField(null=True, blank=True)
    deleted_at = models.DateTimeField(null=True, blank=True)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    REQUIRED_FIELDS = []

    class Meta:
        db_table = 'users'
        indexes = [
            models.Index(fields=['role', 'is_active']),
            models.Index(fields=['created_at']),
        ]

    def __str__(self):
        return self.email

    def get_full_name(self):
        return f"{self.first_name} {self.last_name}".strip()

    def get_display_name(self):
        """Return full name or username."""
        return self.get_full_name() or self.username

    def is_dealer(self):
        return self.role == UserRole.DEALER

    def is_marketplace_admin(self):
        return self.role == UserRole.ADMIN or self.is_staff

    def can_sell(self):
        return self.role in SELLING_ROLES

    def has_valid_reset_token(self, token) -> bool:
        if not token or self.password_reset_token != token:
            return False
        return self.password_reset_expires_at is not None and self.password_reset_expires_at > timezone.now()

    def clear_reset_token(self):
        self.password_reset_token = None
        self.password_reset_expires_at = None

    def anonymize(self):
        """Remove personal data and deactivate the account."""
        self.email = f"deleted_{self.id}@anonymized.local"
        self.username = f"deleted_{self.id.hex[:12]}"
        self.first_name = ''
        self.last_name = ''
        self.phone = ''
        self.avatar_url = ''
        self.verification_token = None
        self.clear_reset_token()
        self.is_active = False
        self.deleted_at = timezone.now()
        self.set_unusable_password()
        self.save()
