"""SQLAlchemy implementation of the user store."""

from datetime import UTC, datetime
from uuid import UUID, uuid4

from sqlalchemy import insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from orgsso.domain.auth.model.user import (
    CreatedOrganization,
    NewAccount,
    OrganizationLink,
    User,
)
from orgsso.domain.auth.model.value import ProviderKey, Role, UserId
from orgsso.domain.auth.port.user_store import UserStore
from orgsso.domain.shared.error import NotFoundError
from orgsso.infrastructure.persistence.tables import (
    organization_members_table,
    organizations_table,
    users_table,
)


def _row_to_user(row: dict) -> User:
    """Convert a database row to a User model."""
    return User(
        id=UserId(UUID(row["id"])),
        email=row["email"],
        provider=ProviderKey(row["provider"]),
        provider_id=row["provider_id"],
        created_at=row["created_at"],
    )


def _user_to_dict(user: User) -> dict:
    """Convert a User model to a database row dict."""
    return {
        "id": str(user.id),
        "email": user.email,
        "provider": user.provider.value,
        "provider_id": user.provider_id,
        "created_at": user.created_at,
    }


class SqlAlchemyUserStore(UserStore):
    """SQLAlchemy implementation of UserStore.

    The unique (provider, provider_id) constraint on users rejects a second
    account for the same identity; the IntegrityError propagates.
    """

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def find_by_provider_identity(
        self, provider: ProviderKey, external_id: str
    ) -> User | None:
        stmt = select(users_table).where(
            users_table.c.provider == provider.value,
            users_table.c.provider_id == external_id,
        )
        result = await self.session.execute(stmt)
        row = result.mappings().first()
        return _row_to_user(dict(row)) if row else None

    async def create_organization_and_user(
        self, account: NewAccount, ip: str, user_agent: str
    ) -> CreatedOrganization:
        now = datetime.now(UTC)
        organization_id = str(uuid4())
        user = User.create(
            email=account.email,
            provider=account.provider,
            provider_id=account.provider_id,
        )

        await self.session.execute(
            insert(organizations_table).values(
                id=organization_id,
                name=account.company or account.email,
                created_ip=ip,
                created_user_agent=user_agent,
                created_at=now,
            )
        )
        await self.session.execute(insert(users_table).values(**_user_to_dict(user)))
        await self.session.execute(
            insert(organization_members_table).values(
                organization_id=organization_id,
                user_id=str(user.id),
                role=Role.ADMIN.value,
                invitation_id=None,
                created_at=now,
            )
        )
        await self.session.flush()

        return CreatedOrganization(organization_id=organization_id, users=[user])

    async def add_user_to_organization(
        self,
        user_id: UserId,
        invitation_id: str,
        organization_id: str,
        role: Role,
    ) -> OrganizationLink:
        stmt = select(organizations_table.c.id).where(organizations_table.c.id == organization_id)
        result = await self.session.execute(stmt)
        if result.first() is None:
            raise NotFoundError(
                f"Organization not found: {organization_id}",
                code="organization_not_found",
            )

        await self.session.execute(
            insert(organization_members_table).values(
                organization_id=organization_id,
                user_id=str(user_id),
                role=role.value,
                invitation_id=invitation_id,
                created_at=datetime.now(UTC),
            )
        )
        await self.session.flush()

        return OrganizationLink(organization_id=organization_id)
