from typing import Optional, Sequence, Type, TypeVar
from sqlalchemy import select, and_, or_
from sqlalchemy.sql.elements import ColumnElement
from sqlalchemy.ext.asyncio import AsyncSession

from .pagination_token import PaginateToken

ModelT = TypeVar("ModelT")

WhereExpr = ColumnElement[bool]


def keyset_after(created_col, id_col, token: Optional[PaginateToken]) -> Optional[WhereExpr]:
    """Rows strictly after ``token`` in ``(created_at, id)`` order; None without a token."""
    if token is None:
        return None
    return or_(
        created_col > token.created_at,
        and_(created_col == token.created_at, id_col > token.id),
    )


async def list_paginated_keyset(
    *,
    session: AsyncSession,
    model: Type[ModelT],
    created_col,
    id_col,
    limit: int,
    after: Optional[PaginateToken] = None,
    base_filters: Sequence[WhereExpr] = (),
) -> list[ModelT]:
    filters = list(base_filters)
    seek = keyset_after(created_col, id_col, after)
    if seek is not None:
        filters.append(seek)

    stmt = (
        select(model)
        .where(*filters)
        .order_by(created_col.asc(), id_col.asc())
        .limit(limit)
        .execution_options(populate_existing=True)
    )
    return list((await session.execute(stmt)).scalars().all())
