"""Query a running movie search API from the command line.

Configuration via constants below (no CLI args). Run:
	uv run python scripts/search.py

Environment:
	HOST / PORT  (default localhost:3000)
"""

from __future__ import annotations

import json
import logging
import os
from typing import Any, List

import httpx

# ---------------------------------------------------------------------------
# Configuration Constants
# ---------------------------------------------------------------------------
BASE_URL: str = f"http://{os.getenv('HOST', 'localhost')}:{os.getenv('PORT', '3000')}"
ENDPOINT: str = "/api/search/exact"
PAYLOAD: dict = {"query": "The Matrix", "field": "title", "sort": "year"}
TIMEOUT_SECONDS: float = 30.0
LOG_LEVEL: str = "INFO"


def search(endpoint: str = ENDPOINT, payload: dict = PAYLOAD) -> List[Any]:
	"""POST the payload and log an aggregated multi-line block with results."""
	logger = logging.getLogger(__name__)

	with httpx.Client(base_url=BASE_URL, timeout=TIMEOUT_SECONDS) as client:
		response = client.post(endpoint, json=payload)
	if response.status_code != 200:
		error = response.json().get("error", response.text)
		raise RuntimeError(f"{endpoint} returned {response.status_code}: {error}")

	items = response.json()
	lines: List[str] = [f"Returned {len(items)} results. \nRequest: {endpoint} {payload!r} \n"]
	for idx, item in enumerate(items, start=1):
		if isinstance(item, dict):
			title = item.get("title")
			year = item.get("year")
			lines.append(f"{idx}. {title} ({year})" if title else f"{idx}. {json.dumps(item)}")
		else:
			lines.append(f"{idx}. {item}")
	logger.info("\n".join(lines))
	return items


def main() -> int:
	logging.basicConfig(
		level=getattr(logging, LOG_LEVEL.upper(), logging.INFO),
		format="%(asctime)s %(levelname)s %(name)s - %(message)s",
	)
	try:
		search()
		return 0
	except Exception as e:  # pragma: no cover
		logging.exception("Search failed: %s", e)
		return 1


if __name__ == "__main__":  # pragma: no cover
	raise SystemExit(main())
