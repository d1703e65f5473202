# /tests/test_export_service.py

import io

import pytest
from PIL import Image

from app.services import export_service

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"

WORKSHEET = """**Section A: Fill in the blanks**
1. Water turns into vapour when it is ____.
2. Clouds are made of tiny ____ droplets.

**Section B**
Explain why puddles <dry up> on a sunny day & what happens next."""


@pytest.mark.parametrize("kind, title, extension, expected", [
    ("worksheet", "Water Cycle Basics", "pdf", "worksheet_Water_Cycle_Basics.pdf"),
    ("story", "  Rain / Sun: a tale?  ", "png", "story_Rain__Sun_a_tale.png"),
    ("story", "", ".pdf", "story_document.pdf"),
    ("story", "बारिश की कहानी", "pdf", "story_बारिश_की_कहानी.pdf"),
])
def test_build_filename(kind, title, extension, expected):
    assert export_service.build_filename(kind, title, extension) == expected


def test_render_pdf_produces_a_pdf_document():
    """Markup characters in the text must not break reportlab's paragraph parser."""
    body = export_service.render_pdf(WORKSHEET, "Water Cycle <Grade 4>", "english")

    assert body.startswith(b"%PDF")
    assert body.rstrip().endswith(b"%%EOF")


def test_render_image_produces_a_png():
    body = export_service.render_image(WORKSHEET, "Water Cycle")

    assert body.startswith(PNG_SIGNATURE)


def test_render_image_grows_with_content():
    short = Image.open(io.BytesIO(export_service.render_image("One line.", "Title")))
    long = Image.open(io.BytesIO(export_service.render_image("\n".join(["Another line."] * 30), "Title")))

    assert short.width == long.width == export_service.IMAGE_WIDTH
    assert long.height > short.height


# --- Routes ---

def test_export_routes_require_authentication(client):
    response = client.post("/api/export/pdf", json={"content": "Hello", "title": "Greeting"})
    assert response.status_code == 401


def test_export_pdf_route(client, auth_headers):
    response = client.post(
        "/api/export/pdf",
        json={"content": WORKSHEET, "title": "Water Cycle Basics", "kind": "worksheet"},
        headers=auth_headers(),
    )

    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert "worksheet_Water_Cycle_Basics.pdf" in response.headers["content-disposition"]
    assert response.content.startswith(b"%PDF")


def test_saved_content_can_be_downloaded_as_png(client, auth_headers):
    headers = auth_headers()
    saved = client.post(
        "/api/content",
        json={"type": "story", "title": "Rain", "content": "Once upon a time..."},
        headers=headers,
    ).json()

    response = client.get(f"/api/content/{saved['id']}/export?format=png", headers=headers)

    assert response.status_code == 200
    assert response.headers["content-type"] == "image/png"
    assert "story_Rain.png" in response.headers["content-disposition"]
    assert response.content.startswith(PNG_SIGNATURE)
