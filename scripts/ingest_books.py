"""Load the bundled book catalog into the database."""
import argparse
import asyncio
import sys
from pathlib import Path
from typing import Optional

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.config import settings
from app.db.connection import close_pool, init_db
from app.services.book_service import CatalogError, load_catalog, upsert_books


async def ingest_books(
    catalog_path: Path,
    batch_size: int = 100,
    limit: Optional[int] = None,
) -> int:
    """
    Upsert books from the catalog JSON file into the database.

    Args:
        catalog_path: Path to the JSON catalog
        batch_size: Number of books to write in each batch
        limit: Maximum number of books to ingest (None for all)

    Returns:
        Number of books written
    """
    print(f"📚 Starting book ingestion from {catalog_path}")
    print(f"   Batch size: {batch_size}")
    if limit:
        print(f"   Limit: {limit} books")

    try:
        books = load_catalog(catalog_path)
    except CatalogError as e:
        print(f"❌ {e}")
        return 0

    if limit:
        books = books[:limit]
    print(f"   Loaded {len(books)} books from catalog")

    await init_db()

    total_written = 0
    for batch_start in range(0, len(books), batch_size):
        batch = books[batch_start:batch_start + batch_size]
        print(f"\n   Processing batch {batch_start // batch_size + 1} ({len(batch)} books)...")
        total_written += await upsert_books(batch)
        print(f"      ✅ Wrote {len(batch)} books (total: {total_written})")

    print("\n✅ Book ingestion complete!")
    print(f"   Total books written: {total_written}")
    return total_written


async def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Load the bundled book catalog into the database",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Load the bundled catalog
  python scripts/ingest_books.py

  # Load the first 100 books from another catalog file
  python scripts/ingest_books.py --catalog my_books.json --limit 100
        """,
    )
    parser.add_argument(
        "--catalog",
        type=str,
        default=str(settings.catalog_path),
        help="Path to the JSON catalog (default: CATALOG_PATH setting)",
    )
    parser.add_argument(
        "--batch-size",
        type=int,
        default=100,
        help="Number of books to write per batch (default: 100)",
    )
    parser.add_argument(
        "--limit",
        type=int,
        default=None,
        help="Maximum number of books to ingest (default: all)",
    )

    args = parser.parse_args()

    catalog_path = Path(args.catalog)
    if not catalog_path.is_absolute():
        catalog_path = Path(__file__).parent.parent / catalog_path

    try:
        await ingest_books(
            catalog_path=catalog_path,
            batch_size=args.batch_size,
            limit=args.limit,
        )
    finally:
        await close_pool()


if __name__ == "__main__":
    asyncio.run(main())
