"""Import all models so SQLModel.metadata picks them up."""

from punchease.models.account import Account, AccountRead
from punchease.models.company import Company, CompanyIdentity
from punchease.models.company_settings import CompanySettings
from punchease.models.profile import Profile, ProfileRead
from punchease.models.user_role import AppRole, UserRoleAssignment

__all__ = [
    "Account",
    "AccountRead",
    "AppRole",
    "Company",
    "CompanyIdentity",
    "CompanySettings",
    "Profile",
    "ProfileRead",
    "UserRoleAssignment",
]
