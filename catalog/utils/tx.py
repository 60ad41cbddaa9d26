from contextlib import asynccontextmanager
from sqlalchemy.ext.asyncio import AsyncSession


@asynccontextmanager
async def maybe_begin(session: AsyncSession):
    """
    Run the block inside the session's current transaction, or open one.

    Statements that must land atomically together (the SQLite upsert pair)
    go through here so callers that already manage a transaction keep
    control of commit/rollback.
    """
    if session.in_transaction():
        yield
    else:
        async with session.begin():
            yield
