# apps/core/models.py
from django.contrib.auth.models import AbstractUser
from django.db import models


class Role(models.TextChoices):
    ADMIN = 'admin', 'Admin'
    PROJECT_MANAGER = 'project_manager', 'Project Manager'
    TEAM_LEAD = 'team_lead', 'Team Lead'
    MEMBER = 'member', 'Member'


class Organization(models.Model):
    """Granica tenanta: posiada użytkowników i projekty."""

    class Plan(models.TextChoices):
        FREE = 'free', 'Free'
        PRO = 'pro', 'Pro'
        ENTERPRISE = 'enterprise', 'Enterprise'

    class SubscriptionStatus(models.TextChoices):
        ACTIVE = 'active', 'Active'
        INACTIVE = 'inactive', 'Inactive'
        CANCELLED = 'cancelled', 'Cancelled'

    name = models.CharField(max_length=200, unique=True)
    # Właściciel ustawiany po utworzeniu pierwszego admina (jajko i kura)
    owner = models.ForeignKey(
        'core.User',
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='owned_organizations'
    )
    domain = models.CharField(max_length=200, blank=True)
    address = models.CharField(max_length=255, blank=True)
    website = models.URLField(blank=True)

    plan = models.CharField(max_length=20, choices=Plan.choices, default=Plan.FREE)
    subscription_status = models.CharField(
        max_length=20,
        choices=SubscriptionStatus.choices,
        default=SubscriptionStatus.ACTIVE
    )
    subscription_start = models.DateField(null=True, blank=True)
    subscription_end = models.DateField(null=True, blank=True)

    allow_time_tracking = models.BooleanField(default=True)
    default_currency = models.CharField(max_length=3, default='USD')

    created_at = models.DateTimeField(auto_now_add=True)

    def __str__(self):
        return self.name


class User(AbstractUser):
    # Logujemy się e-mailem; username == email
    name = models.CharField(max_length=150)
    avatar = models.URLField(blank=True)
    role = models.CharField(max_length=20, choices=Role.choices, default=Role.MEMBER)
    organization = models.ForeignKey(
        Organization,
        null=True, blank=True,
        on_delete=models.SET_NULL,
        related_name='users'
    )

    def __str__(self):
        return self.name or self.email

    @property
    def is_admin(self):
        return self.role == Role.ADMIN
