from .page import PaginationQuery, PaginationPolicy
from .user_id import UserId
from .user_DTO import (
    UserType,
    UserLastUpdatedWith,
    UserDTO,
    UserPageDTO,
    SearchUserDTO,
    SearchUserResponse,
    CreateOrUpdateUserResponse,
    UserCreated,
    UserUpdated,
)

__all__ = [
    "PaginationQuery",
    "PaginationPolicy",
    "UserId",
    "UserType",
    "UserLastUpdatedWith",
    "UserDTO",
    "UserPageDTO",
    "SearchUserDTO",
    "SearchUserResponse",
    "CreateOrUpdateUserResponse",
    "UserCreated",
    "UserUpdated",
]
