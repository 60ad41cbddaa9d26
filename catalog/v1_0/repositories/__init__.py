from .user_repository import UserRepository, DELETED_USER_NAME, SEARCH_LIMIT
from .paginated import list_paginated_keyset
from .pagination_token import PaginateToken
from . import pagination_token
__all__ = [
    "UserRepository",
    "DELETED_USER_NAME",
    "SEARCH_LIMIT",
    "list_paginated_keyset",
    "PaginateToken",
    "pagination_token",
]
