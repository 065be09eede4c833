"""Request helpers shared by the API tests."""

from httpx import AsyncClient, Response

PDF_TYPE = "application/pdf"


async def register(
    client: AsyncClient,
    username: str = "alice",
    email: str = "alice@example.com",
    password: str = "secret123",
    display_name: str = "Alice",
) -> Response:
    return await client.post(
        "/api/register",
        json={
            "username": username,
            "password": password,
            "displayName": display_name,
            "email": email,
        },
    )


async def upload(
    client: AsyncClient,
    *,
    title: str = "Data Structures",
    description: str = "Lecture notes on trees and graphs",
    category_id: int | str = 1,
    filename: str = "trees.pdf",
    content: bytes = b"%PDF-1.4 test",
    content_type: str = PDF_TYPE,
) -> Response:
    return await client.post(
        "/api/notes",
        data={"title": title, "description": description, "categoryId": str(category_id)},
        files={"file": (filename, content, content_type)},
    )
