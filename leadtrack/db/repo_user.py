"""User repository for database CRUD operations."""

import uuid_utils
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from leadtrack.crypto.password import verify_password
from leadtrack.db.models_user import UserEntity


class UserCreateData(BaseModel):
    """Parameters for inserting a user."""

    name: str
    email: str
    password_hash: str


async def get_user_by_email(session: AsyncSession, email: str) -> UserEntity | None:
    """Look up a user by email address (case-insensitive)."""
    stmt = select(UserEntity).where(UserEntity.email == email.lower())
    result = await session.execute(stmt)
    return result.scalar_one_or_none()


async def create_user(session: AsyncSession, data: UserCreateData) -> UserEntity:
    """Insert a new user; raises IntegrityError on a duplicate email."""
    user = UserEntity(
        id=str(uuid_utils.uuid7()),
        name=data.name,
        email=data.email.lower(),
        password_hash=data.password_hash,
    )
    session.add(user)
    await session.flush()
    return user


async def insert_user_if_absent(
    session: AsyncSession, data: UserCreateData
) -> tuple[UserEntity, bool]:
    """Insert a user, tolerating a concurrent insert of the same email.

    The second element is True when this call inserted the row. The insert
    runs in a savepoint so a duplicate email only rolls back this attempt;
    the row that won is then returned.
    """
    try:
        async with session.begin_nested():
            user = await create_user(session, data)
    except IntegrityError:
        winner = await get_user_by_email(session, data.email)
        if winner is None:
            raise
        return winner, False
    return user, True


async def verify_credentials(
    session: AsyncSession, email: str, password: str
) -> UserEntity | None:
    """Authenticate a user by email and password."""
    user = await get_user_by_email(session, email)
    if user is None:
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
