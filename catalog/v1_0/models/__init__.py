from .base import Base
from .users import User, DbUserType, DbUserLastUpdatedWith
__all__ = [
    "Base",
    "User",
    "DbUserType",
    "DbUserLastUpdatedWith",
]
