from django.contrib.auth.models import AbstractUser, Group, Permission
from django.db import models


# --------------------------------------------------
# Custom User (AUTH_USER_MODEL)
# --------------------------------------------------

class User(AbstractUser):
    """
    Custom User 모델
    - AUTH_USER_MODEL = core.User
    - role: admin(출제/채점) / student(응시)
    - auth.User 와의 groups / permissions reverse accessor 충돌 방지
    """

    class Role(models.TextChoices):
        ADMIN = "admin", "Admin"
        STUDENT = "student", "Student"

    name = models.CharField(max_length=50, blank=True, null=True)
    role = models.CharField(
        max_length=20,
        choices=Role.choices,
        default=Role.STUDENT,
    )
    avatar = models.URLField(blank=True, null=True)

    groups = models.ManyToManyField(
        Group,
        related_name="core_users",
        blank=True,
    )
    user_permissions = models.ManyToManyField(
        Permission,
        related_name="core_users",
        blank=True,
    )

    class Meta:
        app_label = "core"
        db_table = "accounts_user"
        ordering = ["-id"]

    def __str__(self):
        return self.username

    @property
    def is_grader(self) -> bool:
        return bool(self.is_superuser or self.is_staff or self.role == self.Role.ADMIN)
