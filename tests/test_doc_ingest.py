"""
Tests for documentation ingestion and the documentation store
"""
import asyncio

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from backend.app.models.models import Base, Document, Feedback
from backend.app.services.doc_ingest import (
    MAX_CONTENT_LENGTH,
    extract_content,
    extract_title,
    ingest_docs,
)
from backend.app.services.doc_store import list_documents, save_feedback, upsert_document


PAGE = """
<html>
<head><title>Building skills &amp; flows - IBM Documentation</title>
<style>body { color: red; }</style></head>
<body>
<nav>Menu</nav>
<article>
  <h1>Building skills</h1>
  <script>track();</script>
  <p>Skills&nbsp;are   the building
  blocks of automations.</p>
</article>
</body>
</html>
"""


@pytest.fixture
def db():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    session = sessionmaker(bind=engine)()
    try:
        yield session
    finally:
        session.close()
        engine.dispose()


def test_extract_title():
    assert extract_title(PAGE) == "Building skills & flows"
    assert extract_title("<html></html>") == "Untitled"


def test_extract_content_strips_markup():
    content = extract_content(PAGE)

    assert content == "Building skills Skills are the building blocks of automations."
    assert "track" not in content
    assert "Menu" not in content


def test_extract_content_falls_back_to_main():
    assert extract_content("<main><p>Main text</p></main>") == "Main text"
    assert extract_content("<p>no container</p>") == ""


def test_extract_content_keeps_nested_blocks():
    page = '<div class="main-content"><div>Intro</div><p>The important body text.</p></div>'

    assert extract_content(page) == "Intro The important body text."


def test_extract_content_prefers_article_over_content_div():
    page = (
        '<div class="sidebar-content">Related links</div>'
        "<article><p>Article body</p></article>"
    )

    assert extract_content(page) == "Article body"


def test_extract_content_is_truncated():
    page = "<article>" + "word " * 5000 + "</article>"

    content = extract_content(page)

    assert len(content) == MAX_CONTENT_LENGTH + 3
    assert content.endswith("...")


def test_upsert_document_replaces_by_url(db):
    upsert_document(db, "Old", "old text", "skills", "https://example.com/a")
    upsert_document(db, "New", "new text", "skills", "https://example.com/a")
    upsert_document(db, "Admin", "admin text", "admin", "https://example.com/b")

    assert db.query(Document).count() == 2
    assert db.query(Document).filter_by(url="https://example.com/a").one().title == "New"
    assert [d.title for d in list_documents(db, category="skills")] == ["New"]
    assert [d.category for d in list_documents(db)] == ["admin", "skills"]


def test_save_feedback(db):
    save_feedback(db, "s1", 4, message_id="m1", comment="nice")

    feedback = db.query(Feedback).one()
    assert feedback.session_id == "s1"
    assert feedback.rating == 4
    assert feedback.created_at is not None


def test_ingest_docs(db):
    def handler(request):
        if request.url.path == "/missing":
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=PAGE)

    docs = [
        {"url": "https://docs.example.com/skills", "category": "skills"},
        {"url": "https://docs.example.com/missing", "category": "skills"},
    ]

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await ingest_docs(db, client, docs)

    stored = asyncio.run(run())

    assert stored == 1
    document = db.query(Document).one()
    assert document.url == "https://docs.example.com/skills"
    assert document.title == "Building skills & flows"
    assert document.category == "skills"


def test_ingest_docs_survives_network_errors(db):
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    async def run():
        async with httpx.AsyncClient(transport=httpx.MockTransport(handler)) as client:
            return await ingest_docs(db, client, [{"url": "https://docs.example.com/x", "category": "admin"}])

    assert asyncio.run(run()) == 0
    assert db.query(Document).count() == 0
