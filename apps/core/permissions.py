#apps/core/permissions.py

from rest_framework.permissions import BasePermission


class IsAdminOrStaff(BasePermission):
    """
    관리자 / 채점자 전용 Permission
    - superuser, is_staff, role=admin 중 하나
    """
    message = "Admin access required."

    def has_permission(self, request, view):
        user = request.user
        return bool(
            user
            and user.is_authenticated
            and getattr(user, "is_grader", False)
        )


def is_owner(user, submission) -> bool:
    """제출물 소유자 여부 (관리자는 소유자가 아님)."""
    return bool(user and user.is_authenticated and submission.user_id == user.id)
