"""Account roles.

Roles are carried in access and refresh token claims so downstream
authorization can decide without a database lookup. Issuing or changing a
role is an administrative concern outside the authentication flows.

Role Hierarchy:
    admin > moderator > user

    - admin: Full platform administration
    - moderator: Curates shared resources (the "teacher" role in the
      classroom deployment)
    - user: Standard member (students, readers)

Usage:
    from src.domain.enums import AccountRole

    if account.role == AccountRole.ADMIN:
        # Admin-only logic
"""

from enum import Enum


class AccountRole(str, Enum):
    """Account roles.

    String Enum:
        Inherits from str for easy serialization into JWT claims.
        Values are lowercase to match the stored column values.
    """

    USER = "user"
    MODERATOR = "moderator"
    ADMIN = "admin"

    @classmethod
    def values(cls) -> list[str]:
        """Get all role values as strings.

        Returns:
            list[str]: Role values ordered from least to most privileged.
        """
        return [role.value for role in cls]
