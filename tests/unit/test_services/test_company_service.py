"""Tests for company onboarding and user accounts."""

import pytest

from brokerage.core.exceptions import Conflict, NotFound
from brokerage.models.user import UserRole
from brokerage.schemas.company import CompanyCreate, CompanyOnboard
from brokerage.schemas.user import UserCreate, UserRegister
from brokerage.services.company_service import CompanyService
from brokerage.services.user_service import UserService


@pytest.mark.unit
@pytest.mark.asyncio
async def test_slug_is_unique(db):
    await CompanyService.create_company(db, CompanyCreate(name="B Corp", slug="b-corp"))

    with pytest.raises(Conflict):
        await CompanyService.create_company(db, CompanyCreate(name="Other", slug="b-corp"))


@pytest.mark.unit
def test_slug_is_normalised():
    assert CompanyCreate(name="B Corp", slug="  B-Corp ").slug == "b-corp"
    with pytest.raises(ValueError):
        CompanyCreate(name="B Corp", slug="b corp!")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_inactive_company_is_not_resolvable(db):
    company = await CompanyService.create_company(
        db, CompanyCreate(name="Closed", slug="closed")
    )
    company.is_active = False
    await db.flush()

    with pytest.raises(NotFound):
        await CompanyService.require_by_slug(db, "closed")


@pytest.mark.unit
@pytest.mark.asyncio
async def test_self_registration_never_joins_a_company(db):
    company = await CompanyService.create_company(db, CompanyCreate(name="B Corp", slug="b-corp"))

    # a company id in the body is not part of the registration contract
    user = await UserService.register_user(
        db,
        UserRegister.model_validate(
            {
                "email": "corretor@imoveis.com.br",
                "password": "password123",
                "company_id": company.id,
            }
        ),
    )

    assert user.company_id is None
    assert user.role == "user"
    assert await UserService.list_users_in_company(db, company.id) == []


@pytest.mark.unit
@pytest.mark.asyncio
async def test_onboard_creates_company_with_first_admin(db):
    company, admin = await CompanyService.onboard(
        db,
        CompanyOnboard(
            name="B Corp",
            slug="b-corp",
            admin_email="Dono@B-Corp.com.br",
            admin_password="password123",
        ),
    )

    assert admin.company_id == company.id
    assert admin.role == "admin"
    assert admin.email == "dono@b-corp.com.br"


@pytest.mark.unit
@pytest.mark.asyncio
async def test_onboard_with_taken_email_creates_nothing(session_factory):
    async with session_factory() as setup:
        await UserService.register_user(
            setup, UserRegister(email="dono@b-corp.com.br", password="password123")
        )
        await setup.commit()

    async with session_factory() as db:
        with pytest.raises(Conflict):
            await CompanyService.onboard(
                db,
                CompanyOnboard(
                    name="B Corp",
                    slug="b-corp",
                    admin_email="dono@b-corp.com.br",
                    admin_password="password123",
                ),
            )

    async with session_factory() as check:
        assert await CompanyService.get_company_by_slug(check, "b-corp") is None


@pytest.mark.unit
@pytest.mark.asyncio
async def test_admin_created_user_joins_company_and_authenticates(db):
    company = await CompanyService.create_company(db, CompanyCreate(name="B Corp", slug="b-corp"))

    user = await UserService.create_user_by_admin(
        db,
        UserCreate(email="Agent@B-Corp.com.br", password="password123", role=UserRole.admin),
        company_id=company.id,
    )

    assert user.email == "agent@b-corp.com.br"
    assert user.role == "admin"
    assert [u.id for u in await UserService.list_users_in_company(db, company.id)] == [user.id]
    assert (await UserService.authenticate(db, "AGENT@b-corp.com.br", "password123")).id == user.id
    assert await UserService.authenticate(db, "agent@b-corp.com.br", "wrong-password") is None
