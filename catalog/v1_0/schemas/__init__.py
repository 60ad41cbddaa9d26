from .user_schema import UserUpsert, UserListQuery, UserSearchQuery
__all__ = [
    "UserUpsert",
    "UserListQuery",
    "UserSearchQuery",
]
