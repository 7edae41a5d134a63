"""Database seeder: authors plus a run of articles for local paging."""
import asyncio
import argparse
import random
import time
from datetime import datetime, timezone, timedelta

from bulletin.database import engine, async_session, Base
from bulletin.models import ArticleModel, AuthorModel

TOPICS = ["python", "asyncio", "sqlalchemy", "fastapi", "mysql", "caching",
          "pagination", "testing", "observability", "concurrency"]

async def seed(small: bool = False):
    num_authors = 5 if small else 50
    num_articles = 50 if small else 5000

    print(f"Seeding: {num_authors} authors, {num_articles} articles")
    start = time.perf_counter()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        authors = []
        for i in range(num_authors):
            author = AuthorModel(name=f"Author {i:03d}")
            session.add(author)
            authors.append(author)
        await session.flush()
        print(f"  Created {len(authors)} authors")

        # Strictly increasing created_at keeps every cursor boundary unambiguous.
        base = datetime.now(timezone.utc) - timedelta(days=365)
        batch_size = 500
        for batch_start in range(0, num_articles, batch_size):
            batch_end = min(batch_start + batch_size, num_articles)
            for i in range(batch_start, batch_end):
                created = base + timedelta(minutes=i)
                session.add(ArticleModel(
                    title=f"Article {i}: notes on {random.choice(TOPICS)}",
                    content=f"This is the full content of article {i}. " * 20,
                    author_id=random.choice(authors).id,
                    created_at=created,
                    updated_at=created,
                ))
            await session.flush()
            print(f"  Batch {batch_start}-{batch_end}: articles created")

        await session.commit()

    elapsed = time.perf_counter() - start
    print(f"\nSeeding complete in {elapsed:.1f}s")


def main():
    parser = argparse.ArgumentParser(description="Seed the article database")
    parser.add_argument("--small", action="store_true", help="Use small dataset (50 articles)")
    args = parser.parse_args()
    asyncio.run(seed(small=args.small))


if __name__ == "__main__":
    main()
