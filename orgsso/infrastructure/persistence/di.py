from typing import AsyncIterable

from dishka import provide
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from orgsso.config import Config
from orgsso.domain.auth.port.user_store import UserStore
from orgsso.domain.shared.uow import UnitOfWork
from orgsso.infrastructure.persistence.database import (
    create_db_engine,
    create_session_factory,
)
from orgsso.infrastructure.persistence.repository.user_store import SqlAlchemyUserStore
from orgsso.infrastructure.persistence.uow import SqlAlchemyUnitOfWork
from orgsso.util.di.base import Provider
from orgsso.util.di.scope import Scope


class PersistenceProvider(Provider):
    # APP-scoped factories
    @provide(scope=Scope.APP)
    async def get_engine(self, config: Config) -> AsyncIterable[AsyncEngine]:
        engine = create_db_engine(config.database)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    # UOW-scoped session (one per unit of work)
    @provide(scope=Scope.UOW)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterable[AsyncSession]:
        async with session_factory() as session:
            yield session
            await session.commit()

    user_store = provide(SqlAlchemyUserStore, scope=Scope.UOW, provides=UserStore)
    uow = provide(SqlAlchemyUnitOfWork, scope=Scope.UOW, provides=UnitOfWork)
