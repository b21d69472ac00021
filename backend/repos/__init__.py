"""
Repository layer for DevConnect.

All document store access lives here and ONLY here.
"""

from backend.repos.post_repo import PostRepo
from backend.repos.profile_repo import ProfileRepo
from backend.repos.user_repo import UserRepo

__all__ = [
    "UserRepo",
    "ProfileRepo",
    "PostRepo",
]
