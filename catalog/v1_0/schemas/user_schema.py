from typing import List, Optional
from pydantic import BaseModel, EmailStr, Field, field_validator

from catalog.v1_0.entities import UserId, UserLastUpdatedWith, UserType


def _check_user_id(v: str) -> str:
    UserId.parse(v)
    return v


class UserUpsert(BaseModel):
    """Input schema to create or update a user."""
    id: str = Field(..., description="Identity-provider-qualified id, e.g. 'oidc~<subject>'")
    name: str = Field(..., min_length=1, max_length=256)
    email: Optional[EmailStr] = None
    user_type: UserType = UserType.HUMAN
    last_updated_with: UserLastUpdatedWith = UserLastUpdatedWith.CREATE_ENDPOINT

    model_config = {
        "json_schema_extra": {
            "example": {
                "id": "oidc~d223d88c-85b6-4859-b5c5-27f3825e47f6",
                "name": "Peter Cold",
                "email": "peter@example.com",
                "user_type": "human",
                "last_updated_with": "create-endpoint",
            }
        }
    }

    @field_validator("id")
    @classmethod
    def _valid_id(cls, v: str) -> str:
        return _check_user_id(v)

    @property
    def user_id(self) -> UserId:
        return UserId.parse(self.id)


class UserListQuery(BaseModel):
    """Filters and cursor for listing users."""
    filter_ids: Optional[List[str]] = None
    filter_name: Optional[str] = None
    page_token: Optional[str] = None
    page_size: Optional[int] = Field(None, ge=1)

    @field_validator("filter_ids")
    @classmethod
    def _valid_ids(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [_check_user_id(i) for i in v]

    @property
    def user_ids(self) -> Optional[List[UserId]]:
        if self.filter_ids is None:
            return None
        return [UserId.parse(i) for i in self.filter_ids]


class UserSearchQuery(BaseModel):
    search: str = Field(..., min_length=1, max_length=64)
