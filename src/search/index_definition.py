from __future__ import annotations

import json
import logging
from typing import Any, Dict

from pymongo.collection import Collection
from pymongo.operations import SearchIndexModel

logger = logging.getLogger(__name__)


def build_search_index_definition() -> Dict[str, Any]:
    """Atlas Search index definition backing full-text, autocomplete and facets.

    Field types mirror what the pipelines in ``strategies`` query:
      - title: autocomplete (suggestions) + string (full-text)
      - genres: stringFacet
      - imdb.rating: numberFacet
      - released: dateFacet
    Everything else stays dynamically mapped so plot/fullplot remain searchable.
    """

    return {
        "mappings": {
            "dynamic": True,
            "fields": {
                "title": [
                    {
                        "type": "autocomplete",
                        "tokenization": "edgeGram",
                        "minGrams": 2,
                        "maxGrams": 15,
                        "foldDiacritics": True,
                    },
                    {"type": "string"},
                ],
                "genres": [{"type": "stringFacet"}, {"type": "string"}],
                "imdb": {
                    "type": "document",
                    "dynamic": True,
                    "fields": {"rating": [{"type": "numberFacet"}, {"type": "number"}]},
                },
                "released": [{"type": "dateFacet"}, {"type": "date"}],
            },
        }
    }


def ensure_search_index(collection: Collection, index_name: str) -> bool:
    """Create the search index when missing. Returns True if it was created."""

    existing = {idx.get("name") for idx in collection.list_search_indexes()}
    if index_name in existing:
        logger.info(f"✅ Search index '{index_name}' already exists")
        return False

    definition = build_search_index_definition()
    logger.info(f"Creating search index '{index_name}':\n{json.dumps(definition, indent=2)}")
    collection.create_search_index(SearchIndexModel(definition=definition, name=index_name))
    logger.info(f"✅ Search index '{index_name}' requested; Atlas builds it asynchronously")
    return True
