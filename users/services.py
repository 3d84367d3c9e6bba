"""
Users — Service Layer

Account registration. No HTTP context — services receive plain
Python arguments and raise typed exceptions.

@file users/services.py
"""

import logging

from django.db import transaction

from core.exceptions import DuplicateResourceError, InvalidInputError

from .models import User

logger = logging.getLogger('stockledger')

MIN_PASSWORD_LENGTH = 6


class UserService:
    """Registration of accounts that act on stock."""

    @staticmethod
    @transaction.atomic
    def register_user(
        *,
        name: str,
        email: str,
        password: str,
        role: str = User.RoleChoices.USER,
    ) -> User:
        if not name or not email or not password:
            raise InvalidInputError(detail='Name, email and password are required.')
        if len(password) < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(
                detail=f'Password must be at least {MIN_PASSWORD_LENGTH} characters.',
            )
        if role not in User.RoleChoices.values:
            raise InvalidInputError(detail=f'Invalid role: {role}.')

        email = email.strip().lower()
        if User.objects.filter(email=email).exists():
            raise DuplicateResourceError(detail='Email already registered.')

        user = User.objects.create_user(email=email, password=password, name=name, role=role)
        logger.info('User %s registered with role %s', user.pk, role)
        return user
