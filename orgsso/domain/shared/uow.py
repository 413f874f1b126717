from abc import ABC, abstractmethod
from types import TracebackType


class UnitOfWork(ABC):
    """Transaction boundary around a group of writes.

    Used as `async with uow:`; leaving the block with an exception rolls
    back everything written inside it and re-raises.
    """

    @abstractmethod
    async def commit(self) -> None: ...

    @abstractmethod
    async def rollback(self) -> None: ...

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc is not None:
            await self.rollback()
        else:
            await self.commit()
