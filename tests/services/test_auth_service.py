"""Tests for AuthService with a real admin table."""

import pytest
from pydantic import SecretStr
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from blogku.db import transaction
from blogku.errors import DuplicateEntryError, InvalidCredentialsError
from blogku.managers.token_manager import decode_access_token
from blogku.repositories import AdminRepository
from blogku.schemas import AdminCreate
from blogku.services.auth import ADMIN_ROLE, AuthService

PASSWORD = "correct horse battery"


def _payload(username: str = "editor", email: str = "editor@example.com") -> AdminCreate:
    return AdminCreate(username=username, email=email, password=SecretStr(PASSWORD))


@pytest.mark.asyncio
async def test_create_then_login_by_email_and_username(
    session_maker: async_sessionmaker[AsyncSession],
) -> None:
    async with transaction(session_maker) as session:
        created = await AuthService(AdminRepository(session)).create_admin(_payload())

    assert created.username == "editor"

    for identifier in ("editor@example.com", "editor"):
        async with transaction(session_maker) as session:
            login = await AuthService(AdminRepository(session)).login(identifier, PASSWORD)

        assert login.id == created.id
        token = decode_access_token(login.token)
        assert token is not None
        assert token.sub == created.id
        assert token.role == ADMIN_ROLE


@pytest.mark.asyncio
async def test_password_is_stored_hashed(session_maker: async_sessionmaker[AsyncSession]) -> None:
    async with transaction(session_maker) as session:
        await AuthService(AdminRepository(session)).create_admin(_payload())

    async with transaction(session_maker) as session:
        admin = await AdminRepository(session).get_for_auth("editor")

    assert admin is not None
    assert admin.password != PASSWORD
    assert admin.password.startswith("$argon2")


@pytest.mark.asyncio
async def test_duplicate_admin_rejected(session_maker: async_sessionmaker[AsyncSession]) -> None:
    async with transaction(session_maker) as session:
        await AuthService(AdminRepository(session)).create_admin(_payload())

    async with transaction(session_maker) as session:
        service = AuthService(AdminRepository(session))
        with pytest.raises(DuplicateEntryError):
            await service.create_admin(_payload(email="other@example.com"))
        with pytest.raises(DuplicateEntryError):
            await service.create_admin(_payload(username="other"))


@pytest.mark.asyncio
@pytest.mark.parametrize(
    ("identifier", "password"),
    [("editor", "wrong password"), ("nobody@example.com", PASSWORD)],
)
async def test_login_failures_look_the_same(
    session_maker: async_sessionmaker[AsyncSession],
    identifier: str,
    password: str,
) -> None:
    async with transaction(session_maker) as session:
        await AuthService(AdminRepository(session)).create_admin(_payload())

    async with transaction(session_maker) as session:
        with pytest.raises(InvalidCredentialsError):
            await AuthService(AdminRepository(session)).login(identifier, password)
