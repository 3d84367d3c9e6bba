"""
Users — Models

Custom User model with UUID PK and email-based authentication. The
stock engine only consumes an authenticated user as the acting
identity on each movement.

@file users/models.py
"""

import uuid

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models
from django.utils import timezone
from django.utils.translation import gettext_lazy as _

from core.models import TimestampMixin
from users.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin, TimestampMixin):
    """
    Account that records stock movements. ADMIN users may additionally
    manage categories.
    """

    class RoleChoices(models.TextChoices):
        ADMIN = 'ADMIN', _('Administrator')
        USER = 'USER', _('User')

    id = models.UUIDField(primary_key=True, default=uuid.uuid4, editable=False)
    email = models.EmailField(_('email'), unique=True)
    name = models.CharField(_('name'), max_length=150)
    role = models.CharField(
        _('role'), max_length=10,
        choices=RoleChoices.choices, default=RoleChoices.USER,
        db_index=True,
    )

    is_staff = models.BooleanField(_('staff status'), default=False)
    is_active = models.BooleanField(_('active'), default=True)
    date_joined = models.DateTimeField(_('date joined'), default=timezone.now)

    objects = UserManager()

    USERNAME_FIELD = 'email'
    EMAIL_FIELD = 'email'
    REQUIRED_FIELDS = ['name']

    class Meta:
        verbose_name = _('user')
        verbose_name_plural = _('users')
        ordering = ['-created_at']

    def __str__(self):
        return self.name or self.email

    def get_full_name(self):
        return self.name or self.email

    def get_short_name(self):
        return self.name.split(' ')[0] if self.name else self.email

    @property
    def is_admin(self) -> bool:
        return self.is_superuser or self.role == self.RoleChoices.ADMIN
