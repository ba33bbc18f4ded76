"""JSON export of a lookup.

Why JSON:
- Interoperability with other recon tools and pipelines.
- Keeps evidence of a lookup without depending on the HTML/PDF render.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import LookupRecord


def lookup_payload(record: LookupRecord) -> dict:
    payload = record.model_dump(mode="json")
    payload["subdomains"] = record.sorted_subdomains()
    payload["total"] = record.total
    return payload


def dumps_lookup(record: LookupRecord) -> str:
    return json.dumps(lookup_payload(record), ensure_ascii=False, indent=2, sort_keys=True)


def export_lookup_json(*, record: LookupRecord, output_path: Path) -> Path:
    """Export a `LookupRecord` as UTF-8 JSON with a stable layout."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(dumps_lookup(record) + "\n", encoding="utf-8")
    return output_path
