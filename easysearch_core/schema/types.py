"""Domain types shared across the store and auth layers.

UserRole and UserStatus mirror the CHECK constraints in schema.sql.
"""

from enum import Enum


class UserRole(str, Enum):
    """Account role. Fixed at creation."""

    CUSTOMER = "CUSTOMER"
    HOST = "HOST"
    ADMIN = "ADMIN"


class UserStatus(str, Enum):
    """Account status. Only ACTIVE accounts pass the access guard."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    BLOCKED = "BLOCKED"


# Role-specific profile table, created in the same transaction as the user
PROFILE_TABLES: dict[UserRole, str] = {
    UserRole.CUSTOMER: "customers",
    UserRole.HOST: "hosts",
    UserRole.ADMIN: "admins",
}
