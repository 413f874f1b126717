"""SQLAlchemy unit of work over the request session."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from orgsso.domain.shared.uow import UnitOfWork

logger = logging.getLogger(__name__)


class SqlAlchemyUnitOfWork(UnitOfWork):
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        logger.warning("Rolling back unit of work")
        await self.session.rollback()
