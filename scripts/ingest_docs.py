#!/usr/bin/env python3
"""
Documentation ingestion script for WXOrca.
Fetches IBM WatsonX Orchestrate documentation and stores it in the database.
"""
import argparse
import asyncio
import logging
import os
import sys

sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import httpx
from dotenv import load_dotenv

load_dotenv()

from backend.app.core.config import settings  # noqa: E402
from backend.app.db.database import SessionLocal, init_db  # noqa: E402
from backend.app.services.doc_ingest import DOCS_TO_INGEST, ingest_docs  # noqa: E402
from backend.app.services.doc_store import list_documents  # noqa: E402


async def main(category: str = None):
    print(f"Database: {settings.DATABASE_URL.split('@')[-1]}")
    init_db()

    docs = [doc for doc in DOCS_TO_INGEST if not category or doc["category"] == category]
    print(f"\nIngesting {len(docs)} documentation pages...\n")

    db = SessionLocal()
    try:
        async with httpx.AsyncClient(timeout=30.0, follow_redirects=True) as client:
            stored = await ingest_docs(db, client, docs)

        print(f"\n✓ Successfully ingested {stored}/{len(docs)} documents")

        print("\nDocuments in database:")
        for document in list_documents(db):
            print(f"  - [{document.category}] {document.title}")
    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Ingest WatsonX Orchestrate documentation pages")
    parser.add_argument("--category", help="Only ingest pages of this category")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log every request")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    asyncio.run(main(args.category))
