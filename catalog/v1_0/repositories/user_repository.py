from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import Boolean, func, literal_column, select, update
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import MappingError, StoreError
from catalog.core.logger import logger
from catalog.storage.database.trigram import TRIGRAM_DISTANCE_FN
from catalog.utils.tx import maybe_begin
from catalog.v1_0.entities import (
    CreateOrUpdateUserResponse,
    PaginationPolicy,
    PaginationQuery,
    SearchUserDTO,
    SearchUserResponse,
    UserCreated,
    UserDTO,
    UserId,
    UserLastUpdatedWith,
    UserPageDTO,
    UserType,
    UserUpdated,
)
from catalog.v1_0.models import DbUserLastUpdatedWith, DbUserType, User
from . import pagination_token
from .paginated import list_paginated_keyset

DELETED_USER_NAME = "Deleted User"
SEARCH_LIMIT = 10
SUPPORTED_DIALECTS = frozenset({"postgresql", "sqlite"})

# Storage and domain enums are mapped explicitly; their spellings may diverge.
_USER_TYPE_FROM_DB: dict[DbUserType, UserType] = {
    DbUserType.Application: UserType.APPLICATION,
    DbUserType.Human: UserType.HUMAN,
}
_USER_TYPE_TO_DB: dict[UserType, DbUserType] = {v: k for k, v in _USER_TYPE_FROM_DB.items()}

_LAST_UPDATED_WITH_FROM_DB: dict[DbUserLastUpdatedWith, UserLastUpdatedWith] = {
    DbUserLastUpdatedWith.CreateEndpoint: UserLastUpdatedWith.CREATE_ENDPOINT,
    DbUserLastUpdatedWith.ConfigCallCreation: UserLastUpdatedWith.CONFIG_CALL_CREATION,
    DbUserLastUpdatedWith.UpdateEndpoint: UserLastUpdatedWith.UPDATE_ENDPOINT,
}
_LAST_UPDATED_WITH_TO_DB: dict[UserLastUpdatedWith, DbUserLastUpdatedWith] = {
    v: k for k, v in _LAST_UPDATED_WITH_FROM_DB.items()
}

_RETURNED_COLUMNS = (
    User.id,
    User.name,
    User.email,
    User.last_updated_with,
    User.user_type,
    User.created_at,
    User.updated_at,
)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def _parse_user_id(raw: str) -> UserId:
    try:
        return UserId.parse(raw)
    except ValueError as e:
        logger.error("Stored user id %r does not parse: %s", raw, e)
        raise MappingError(f"Stored user id {raw!r} is invalid: {e}") from e


def _to_user(row) -> UserDTO:
    """Map an ORM instance or a RETURNING row to the domain entity."""
    return UserDTO(
        id=_parse_user_id(row.id),
        name=row.name,
        email=row.email,
        user_type=_USER_TYPE_FROM_DB[row.user_type],
        last_updated_with=_LAST_UPDATED_WITH_FROM_DB[row.last_updated_with],
        created_at=pagination_token.as_utc(row.created_at),
        updated_at=pagination_token.as_utc(row.updated_at) if row.updated_at else None,
    )


class UserRepository:
    model = User

    @staticmethod
    def _dialect(session: AsyncSession) -> str:
        name = session.get_bind().dialect.name
        if name not in SUPPORTED_DIALECTS:
            raise StoreError(f"Unsupported database dialect: {name}")
        return name

    async def list_users(
        self,
        *,
        filter_ids: Optional[Iterable[UserId]] = None,
        filter_name: Optional[str] = None,
        page: Optional[PaginationQuery] = None,
        policy: PaginationPolicy = PaginationPolicy(),
        session: AsyncSession,
    ) -> UserPageDTO:
        page = page or PaginationQuery()
        page_size = policy.page_size(page.page_size)
        token = pagination_token.decode(page.page_token) if page.page_token else None

        filters = [User.deleted_at.is_(None)]
        if filter_name:
            filters.append(User.name.icontains(filter_name, autoescape=True))
        if filter_ids is not None:
            filters.append(User.id.in_([str(i) for i in filter_ids]))

        try:
            rows = await list_paginated_keyset(
                session=session,
                model=User,
                created_col=User.created_at,
                id_col=User.id,
                limit=page_size,
                after=token,
                base_filters=filters,
            )
        except SQLAlchemyError as e:
            raise StoreError("Error fetching users") from e

        users = [_to_user(r) for r in rows]
        logger.debug("Listed users count=%s page_size=%s", len(users), page_size)

        next_page_token = None
        if users:
            last = users[-1]
            next_page_token = pagination_token.encode(last.created_at, str(last.id))

        return UserPageDTO(users=users, next_page_token=next_page_token)

    async def create_or_update_user(
        self,
        *,
        id: UserId,
        name: str,
        email: Optional[str],
        last_updated_with: UserLastUpdatedWith,
        user_type: UserType,
        session: AsyncSession,
    ) -> CreateOrUpdateUserResponse:
        now = _now()
        values = {
            "id": str(id),
            "name": name,
            "email": email,
            "last_updated_with": _LAST_UPDATED_WITH_TO_DB[last_updated_with],
            "user_type": _USER_TYPE_TO_DB[user_type],
        }
        changes = {
            "name": name,
            "email": email,
            "last_updated_with": values["last_updated_with"],
            "user_type": values["user_type"],
            "updated_at": now,
            "deleted_at": None,
        }

        try:
            if self._dialect(session) == "postgresql":
                created, row = await self._upsert_postgresql(values, changes, now, session)
            else:
                created, row = await self._upsert_sqlite(values, changes, now, session)
        except SQLAlchemyError as e:
            raise StoreError("Error creating or updating user") from e

        user = _to_user(row)
        logger.debug("Upserted user id=%s created=%s", user.id, created)
        return UserCreated(user) if created else UserUpdated(user)

    async def _upsert_postgresql(self, values: dict, changes: dict, now: datetime, session: AsyncSession):
        stmt = postgresql.insert(User).values(**values, created_at=now)
        stmt = stmt.on_conflict_do_update(index_elements=[User.id], set_=changes).returning(
            literal_column("(xmax = 0)", Boolean).label("created"),
            *_RETURNED_COLUMNS,
        )
        row = (await session.execute(stmt)).one()
        return bool(row.created), row

    async def _upsert_sqlite(self, values: dict, changes: dict, now: datetime, session: AsyncSession):
        # SQLite has no xmax: a DO NOTHING insert reports the conflict
        # by returning no row, and the follow-up update runs in the same transaction.
        async with maybe_begin(session):
            insert_stmt = (
                sqlite.insert(User)
                .values(**values, created_at=now)
                .on_conflict_do_nothing(index_elements=[User.id])
                .returning(*_RETURNED_COLUMNS)
            )
            row = (await session.execute(insert_stmt)).first()
            if row is not None:
                return True, row

            update_stmt = (
                update(User)
                .where(User.id == values["id"])
                .values(**changes)
                .returning(*_RETURNED_COLUMNS)
                .execution_options(synchronize_session=False)
            )
            row = (await session.execute(update_stmt)).one()
            return False, row

    async def delete_user(self, id: UserId, session: AsyncSession) -> bool:
        stmt = (
            update(User)
            .where(User.id == str(id))
            .values(deleted_at=_now(), name=DELETED_USER_NAME, email=None)
            .execution_options(synchronize_session=False)
        )
        try:
            result = await session.execute(stmt)
        except SQLAlchemyError as e:
            raise StoreError("Error deleting user") from e

        matched = (result.rowcount or 0) > 0
        logger.debug("Soft-deleted user id=%s matched=%s", id, matched)
        return matched

    async def search_user(self, search_term: str, session: AsyncSession) -> SearchUserResponse:
        haystack = User.name + " " + func.coalesce(User.email, "")
        if self._dialect(session) == "postgresql":
            dist = haystack.op("<->", return_type=postgresql.DOUBLE_PRECISION)(search_term)
        else:
            dist = getattr(func, TRIGRAM_DISTANCE_FN)(haystack, search_term)
        dist = dist.label("dist")

        # Soft-deleted rows stay searchable.
        stmt = (
            select(User.id, User.name, User.email, User.user_type, dist)
            .order_by(dist.asc(), User.id.asc())
            .limit(SEARCH_LIMIT)
        )
        try:
            rows = (await session.execute(stmt)).all()
        except SQLAlchemyError as e:
            raise StoreError("Error searching user") from e

        return SearchUserResponse(
            users=[
                SearchUserDTO(
                    id=_parse_user_id(r.id),
                    name=r.name,
                    email=r.email,
                    user_type=_USER_TYPE_FROM_DB[r.user_type],
                )
                for r in rows
            ]
        )
