"""
Fetch WatsonX Orchestrate documentation pages and store them in the
documentation table, one row per url.
"""
import logging
from typing import Dict, List, Optional

import httpx
from bs4 import BeautifulSoup, Tag
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.services.doc_store import upsert_document

logger = logging.getLogger(__name__)

MAX_CONTENT_LENGTH = 10000

DOCS_TO_INGEST: List[Dict[str, str]] = [
    # Getting Started
    {
        "url": "https://www.ibm.com/docs/en/watsonx/watson-orchestrate/base?topic=getting-started-watsonx-orchestrate",
        "category": "getting-started",
    },
    # Apps and Skills
    {
        "url": "https://www.ibm.com/docs/en/watsonx/watson-orchestrate/base?topic=catalog-overview-apps-skills",
        "category": "skills",
    },
    # Building Skills
    {
        "url": "https://www.ibm.com/docs/en/watsonx/watson-orchestrate/base?topic=studio-building-skills-skill-flows",
        "category": "skills",
    },
    # Enhancing Skills
    {
        "url": "https://www.ibm.com/docs/en/watsonx/watson-orchestrate/current?topic=flows-enhancing-publishing-skills",
        "category": "skills",
    },
    # Admin Setup
    {
        "url": "https://www.ibm.com/docs/en/software-hub/5.1.x?topic=orchestrate-getting-started",
        "category": "admin",
    },
]

def extract_title(page: str) -> str:
    soup = BeautifulSoup(page, "html.parser")
    if soup.title is None:
        return "Untitled"
    title = soup.title.get_text().replace(" - IBM Documentation", "").strip()
    return title or "Untitled"


def find_main_block(soup: BeautifulSoup) -> Optional[Tag]:
    """First article, then a div whose class mentions content, then main"""
    block = soup.find("article")
    if block is None:
        block = soup.find("div", class_=lambda x: x and "content" in x)
    if block is None:
        block = soup.find("main")
    return block


def extract_content(page: str) -> str:
    """Main text of a page with markup stripped, truncated to MAX_CONTENT_LENGTH"""
    soup = BeautifulSoup(page, "html.parser")
    block = find_main_block(soup)
    if block is None:
        return ""

    for tag in block.find_all(["script", "style"]):
        tag.decompose()

    content = " ".join(block.get_text(" ", strip=True).split())
    if len(content) > MAX_CONTENT_LENGTH:
        content = content[:MAX_CONTENT_LENGTH] + "..."
    return content


async def fetch_doc_content(client: httpx.AsyncClient, url: str) -> Optional[Dict[str, str]]:
    """Download one page, returning its title and content, or None on failure"""
    logger.info(f"Fetching: {url}")
    try:
        response = await client.get(url)
    except httpx.HTTPError as e:
        logger.error(f"Error fetching {url}: {e}")
        return None

    if response.status_code != 200:
        logger.error(f"Failed to fetch {url}: {response.status_code}")
        return None

    return {"title": extract_title(response.text), "content": extract_content(response.text)}


async def ingest_docs(db: Session, client: httpx.AsyncClient, docs: Optional[List[Dict[str, str]]] = None) -> int:
    """Fetch and upsert every page; returns how many were stored"""
    docs = DOCS_TO_INGEST if docs is None else docs
    stored = 0

    for doc in docs:
        page = await fetch_doc_content(client, doc["url"])
        if page is None:
            continue

        try:
            upsert_document(db, page["title"], page["content"], doc["category"], doc["url"])
        except SQLAlchemyError as e:
            db.rollback()
            logger.error(f"Failed to store {page['title']}: {e}")
            continue

        logger.info(f"Ingested: {page['title']}")
        stored += 1

    return stored
