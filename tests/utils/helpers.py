"""Test helper functions for the HTTP API."""

from typing import Dict, Tuple

from httpx import AsyncClient

PASSWORD = "correct-horse-battery"


async def login(client: AsyncClient, email: str) -> Dict[str, str]:
    """Log in with the shared test password and return Authorization headers."""
    response = await client.post(
        "/login", data={"username": email, "password": PASSWORD}
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


async def register_and_login(client: AsyncClient, email: str) -> Dict[str, str]:
    """Self-register a company-less user and return Authorization headers for it."""
    response = await client.post(
        "/register", json={"email": email, "password": PASSWORD}
    )
    assert response.status_code == 201, response.text
    return await login(client, email)


async def onboard(client: AsyncClient, slug: str) -> Tuple[str, Dict[str, str]]:
    """Onboard a company with its first admin; return (company_id, admin headers)."""
    email = f"broker@{slug}.com.br"
    response = await client.post(
        "/companies",
        json={
            "name": f"{slug.title()} Imóveis",
            "slug": slug,
            "admin_email": email,
            "admin_password": PASSWORD,
        },
    )
    assert response.status_code == 201, response.text
    return response.json()["id"], await login(client, email)


async def create_listing(client: AsyncClient, headers: Dict[str, str], **overrides) -> str:
    payload = {"title": "Apartamento Aldebaran", "city": "Campinas", "state": "SP"}
    payload.update(overrides)
    response = await client.post("/properties", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["id"]
