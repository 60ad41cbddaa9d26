# catalog/v1_0/models/users.py
import enum
from datetime import datetime
from sqlalchemy import Enum, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from .base import Base


class DbUserLastUpdatedWith(enum.Enum):
    CreateEndpoint = "create-endpoint"
    ConfigCallCreation = "config-call-creation"
    UpdateEndpoint = "update-endpoint"


class DbUserType(enum.Enum):
    Application = "application"
    Human = "human"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    return [member.value for member in enum_cls]


class User(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(Text, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str | None] = mapped_column(Text)
    last_updated_with: Mapped[DbUserLastUpdatedWith] = mapped_column(
        Enum(DbUserLastUpdatedWith, name="user_last_updated_with", values_callable=_enum_values),
        nullable=False,
    )
    user_type: Mapped[DbUserType] = mapped_column(
        Enum(DbUserType, name="user_type", values_callable=_enum_values),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    updated_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
    deleted_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True))
