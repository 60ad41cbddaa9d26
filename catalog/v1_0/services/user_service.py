from fastapi import HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from catalog.core.errors import InvalidToken, MappingError, StoreError
from catalog.core.logger import logger
from catalog.v1_0.entities import (
    CreateOrUpdateUserResponse,
    PaginationPolicy,
    PaginationQuery,
    SearchUserResponse,
    UserId,
    UserPageDTO,
)
from catalog.v1_0.repositories import UserRepository
from catalog.v1_0.schemas import UserListQuery, UserSearchQuery, UserUpsert


class UserService:
    def __init__(self, user_repository: UserRepository, pagination_policy: PaginationPolicy) -> None:
        self.user_repo = user_repository
        self.pagination_policy = pagination_policy

    async def list_users(self, query: UserListQuery, db: AsyncSession) -> UserPageDTO:
        """
        List active users, one keyset page at a time.

        Args:
            query: Id/name filters plus the opaque page token and page size.
            db: Active async database session.

        Returns:
            UserPageDTO with the page and the token for the next one. A
            non-empty page always carries a token, so callers stop after the
            first empty page.

        Raises:
            HTTPException:
                - 400 if the page token is invalid.
                - 500 if the query fails or a stored row is corrupt.
        """
        logger.debug(
            "[UserService] List users filter_name=%s filter_ids=%s page_size=%s",
            query.filter_name,
            query.filter_ids,
            query.page_size,
        )
        try:
            async with db.begin():
                return await self.user_repo.list_users(
                    filter_ids=query.user_ids,
                    filter_name=query.filter_name,
                    page=PaginationQuery(page_token=query.page_token, page_size=query.page_size),
                    policy=self.pagination_policy,
                    session=db,
                )
        except InvalidToken as e:
            logger.info("[UserService] Rejected page token: %s", e)
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=e.message)
        except (StoreError, MappingError) as e:
            logger.error("[UserService] List failed: %s", e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to list users")

    async def create_or_update(self, payload: UserUpsert, db: AsyncSession) -> CreateOrUpdateUserResponse:
        """
        Create the user or overwrite it in place, resurrecting soft-deleted rows.

        Returns:
            UserCreated or UserUpdated carrying the stored user.

        Raises:
            HTTPException: 500 if the upsert fails.
        """
        logger.info(
            "[UserService] Upsert user id=%s type=%s via=%s",
            payload.id,
            payload.user_type.value,
            payload.last_updated_with.value,
        )

        if not db.in_transaction():
            await db.begin()
        try:
            result = await self.user_repo.create_or_update_user(
                id=payload.user_id,
                name=payload.name,
                email=payload.email,
                last_updated_with=payload.last_updated_with,
                user_type=payload.user_type,
                session=db,
            )
            await db.commit()
        except (StoreError, MappingError) as e:
            await db.rollback()
            logger.error("[UserService] Upsert failed id=%s: %s", payload.id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to create or update user")

        logger.info(
            "[UserService] User %s id=%s",
            "created" if result.created else "updated",
            result.user.id,
        )
        return result

    async def delete(self, user_id: UserId, db: AsyncSession) -> bool:
        """
        Soft-delete a user; the row keeps its id and creation time.

        Raises:
            HTTPException:
                - 404 if no user with that id was ever created.
                - 500 if the update fails.
        """
        logger.warning("[UserService] Delete user id=%s", user_id)

        if not db.in_transaction():
            await db.begin()
        try:
            matched = await self.user_repo.delete_user(user_id, db)
            await db.commit()
        except StoreError as e:
            await db.rollback()
            logger.error("[UserService] Delete failed id=%s: %s", user_id, e, exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to delete user")

        if not matched:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="User not found.")
        return True

    async def search(self, query: UserSearchQuery, db: AsyncSession) -> SearchUserResponse:
        logger.debug(f"[UserService] Search users term={query.search!r}")
        try:
            async with db.begin():
                return await self.user_repo.search_user(query.search, db)
        except (StoreError, MappingError) as e:
            logger.error(f"[UserService] Search failed: {e}", exc_info=True)
            raise HTTPException(status_code=500, detail="Failed to search users")
