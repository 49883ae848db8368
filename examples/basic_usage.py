"""Basic usage example for the library search service."""

import asyncio
import sys
from pathlib import Path

from library_search import DEFAULT_CATALOG, LibrarySearchService, load_corpus
from library_search.catalog import document_filename

DEMO_QUERIES = [
    "helm drift detection",
    "git ssh authentication",
    "oci cosign verification",
    "slack alert provider",
    "kustomization sops decryption",
]


async def basic_search_demo(docs_dir: Path, index_dir: Path) -> None:
    """Index the downloaded Flux API docs and run a few queries."""
    print("🔍 Library Search - Basic Usage Demo")
    print("=" * 50)

    print(f"\n1. Loading {len(DEFAULT_CATALOG)} documents from {docs_dir}...")
    entries = load_corpus(docs_dir)

    print("\n2. Building the index...")
    async with LibrarySearchService.create(
        index_path=index_dir,
        entries=entries,
        load_existing=False,
        log_level="WARNING"
    ) as service:

        stats = await service.get_stats()
        print(f"   Documents: {stats['engine']['total_documents']}")
        print(f"   Vocabulary: {stats['engine']['vocabulary_size']} terms")

        print("\n3. Running queries...")
        for text in DEMO_QUERIES:
            results = await service.search(text, limit=3)
            print(f"\n   Query: '{text}'")
            for rank, result in enumerate(results, 1):
                print(f"   {rank}. {result.document.metadata.kind} "
                      f"({result.document.metadata.group}) score={result.score:.2f}")

        print("\n4. Markdown output for the first query:\n")
        print(await service.search_markdown(DEMO_QUERIES[0], limit=1, include_content=False))

        print("\n5. Saving the index snapshot...")
        await service.save_index()
        print(f"   Written to {service.snapshot_path}")

        health = await service.health_check()
        print(f"\n   System status: {health['status']}")
        print(f"   Total searches performed: {health['stats']['total_searches']}")

    print("\n✅ Demo completed successfully!")


def main() -> None:
    if len(sys.argv) < 2:
        print("usage: basic_usage.py DOCS_DIR [INDEX_DIR]")
        print("\nDOCS_DIR must contain one markdown file per catalog entry:")
        for metadata in DEFAULT_CATALOG:
            print(f"  {document_filename(metadata):32} <- {metadata.url}")
        sys.exit(1)

    docs_dir = Path(sys.argv[1])
    index_dir = Path(sys.argv[2]) if len(sys.argv) > 2 else Path("./demo_index")
    asyncio.run(basic_search_demo(docs_dir, index_dir))


if __name__ == "__main__":
    main()
