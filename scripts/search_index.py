"""Inspect and create the Atlas Search index used by the movie search API.

Full-text search, autocomplete suggestions and facets all query this index;
until it exists (and ATLAS_SEARCH_ENABLED=true) those endpoints return empty
results. Run:
	uv run python scripts/search_index.py

Environment:
	MONGODB_URI        (Atlas cluster connection string)
	DATABASE_NAME      (default sample_mflix)
	COLLECTION_NAME    (default movies)
	SEARCH_INDEX_NAME  (default default)
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Any, Dict, List

from pymongo.collection import Collection
from pymongo.errors import PyMongoError

# Ensure the repository root (which holds the src package) is on path
CURRENT_DIR = Path(__file__).resolve().parent
ROOT_DIR = CURRENT_DIR.parent
if str(ROOT_DIR) not in sys.path:
	sys.path.insert(0, str(ROOT_DIR))

from src.core.config import AppConfig  # noqa: E402
from src.core.errors import MovieSearchError  # noqa: E402
from src.database.mongo_client import open_connection  # noqa: E402
from src.search.index_definition import ensure_search_index  # noqa: E402

# Configure logging
logging.basicConfig(
	level=logging.INFO,
	format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
	handlers=[
		logging.StreamHandler(),
	],
)
logger = logging.getLogger(__name__)


def _print_header() -> None:
	header = "═" * 70
	title = "🔍 ATLAS SEARCH INDEXES"
	print(f"\n{header}")
	print(f"{title:^70}")
	print(f"{header}\n")


def _list_indexes(collection: Collection) -> List[Dict[str, Any]]:
	indexes = list(collection.list_search_indexes())
	logger.debug(f"Retrieved {len(indexes)} search indexes")
	return indexes


def _print_status_report(indexes: List[Dict[str, Any]]) -> None:
	if not indexes:
		print("   (No search indexes found)")
		return
	print(f"{'Index Name':<30} │ {'Status':<12} │ {'Queryable':<10}")
	print("─" * 60)
	for idx in indexes:
		queryable = "✅ yes" if idx.get("queryable") else "⏳ no"
		print(f"{idx.get('name', '?'):<30} │ {idx.get('status', '?'):<12} │ {queryable:<10}")
	print()


def main() -> int:
	_print_header()
	try:
		config = AppConfig.from_env()
		connection = open_connection(config)
	except MovieSearchError as e:
		logger.error(f"❌ {e}")
		return 1

	try:
		ensure_search_index(connection.collection, config.search_index_name)
		_print_status_report(_list_indexes(connection.collection))
		return 0
	except PyMongoError as e:
		logger.error(f"💥 Search index operation failed: {e}")
		return 1
	finally:
		connection.close()


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
