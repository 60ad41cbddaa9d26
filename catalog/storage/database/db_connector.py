from collections.abc import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.engine.url import make_url, URL
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool, StaticPool
from catalog.core.settings import settings
from catalog.core.logger import logger
from .trigram import register_sqlite_functions


def normalize_url(raw: str) -> URL:
    u = make_url(raw)
    if u.get_backend_name() != "postgresql":
        return u
    # asyncpg rejects libpq query options (sslmode, channel_binding); keep only the basics.
    return URL.create(
        drivername="postgresql+asyncpg",
        username=u.username,
        password=u.password,
        host=u.host,
        port=u.port,
        database=u.database,
    )


def build_engine(raw_url: str, *, echo: bool = False, ssl: bool = True) -> AsyncEngine:
    url = normalize_url(raw_url)
    backend = url.get_backend_name()

    if backend == "sqlite":
        memory = url.database in (None, "", ":memory:")
        engine = create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool if memory else NullPool,
        )

        @event.listens_for(engine.sync_engine, "connect")
        def _on_connect(dbapi_connection, connection_record):
            register_sqlite_functions(dbapi_connection)

    else:
        engine = create_async_engine(
            url.render_as_string(hide_password=False),
            echo=echo,
            poolclass=NullPool,
            pool_pre_ping=True,
            execution_options={"isolation_level": "READ COMMITTED"},
            connect_args={
                "ssl": ssl,
                "statement_cache_size": 0,   # PgBouncer transaction pooling
            },
        )

    logger.debug("Database engine ready backend=%s", backend)
    return engine


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=engine, expire_on_commit=False, autoflush=False, class_=AsyncSession)


engine = build_engine(
    settings.DATABASE_URL.get_secret_value(),
    echo=settings.DEBUG,
    ssl=settings.DATABASE_SSL,
)

async_session = build_session_factory(engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    session: AsyncSession = async_session()
    try:
        yield session
    finally:
        await session.close()


async def dispose_engine() -> None:
    await engine.dispose()
