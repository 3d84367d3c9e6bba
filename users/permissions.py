"""
Users — DRF Permission Classes

@file users/permissions.py
"""

from rest_framework.permissions import SAFE_METHODS, BasePermission


class IsAdminRole(BasePermission):
    """User must be a superuser or hold the ADMIN role."""

    def has_permission(self, request, view):
        user = request.user
        if not user or not user.is_authenticated:
            return False
        return user.is_admin


class IsAdminRoleOrReadOnly(IsAdminRole):
    """Reads open to any authenticated user; writes require ADMIN."""

    def has_permission(self, request, view):
        if request.method in SAFE_METHODS:
            return bool(request.user and request.user.is_authenticated)
        return super().has_permission(request, view)
