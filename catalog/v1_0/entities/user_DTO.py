from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .user_id import UserId


class UserType(str, Enum):
    APPLICATION = "application"
    HUMAN = "human"


class UserLastUpdatedWith(str, Enum):
    """Entry point that last wrote the user."""
    CREATE_ENDPOINT = "create-endpoint"
    CONFIG_CALL_CREATION = "config-call-creation"
    UPDATE_ENDPOINT = "update-endpoint"


@dataclass(slots=True)
class UserDTO:
    id: UserId
    name: str
    email: Optional[str]
    user_type: UserType
    last_updated_with: UserLastUpdatedWith
    created_at: datetime
    updated_at: Optional[datetime]


@dataclass(slots=True)
class UserPageDTO:
    """Keyset page of users; ``next_page_token`` is None only for an empty page."""
    users: List[UserDTO]
    next_page_token: Optional[str] = None


@dataclass(slots=True)
class SearchUserDTO:
    id: UserId
    name: str
    email: Optional[str]
    user_type: UserType


@dataclass(slots=True)
class SearchUserResponse:
    users: List[SearchUserDTO] = field(default_factory=list)


@dataclass(slots=True)
class CreateOrUpdateUserResponse(ABC):
    user: UserDTO

    @property
    @abstractmethod
    def created(self) -> bool: ...


@dataclass(slots=True)
class UserCreated(CreateOrUpdateUserResponse):
    @property
    def created(self) -> bool:
        return True


@dataclass(slots=True)
class UserUpdated(CreateOrUpdateUserResponse):
    @property
    def created(self) -> bool:
        return False
