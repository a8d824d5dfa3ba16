"""Run artifact helpers for persisting parsed models."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from typing import Any


def write_model_dump(
    model: dict[str, Any],
    run_id: str,
    output_file: str,
    source: str | None = None,
) -> str:
    """Write a parsed model as JSON together with run metadata and return its path."""
    directory = os.path.dirname(os.path.abspath(output_file))
    os.makedirs(directory, exist_ok=True)
    payload = {
        "run_id": run_id,
        "timestamp_utc": datetime.now(timezone.utc).isoformat(),
        "source": source,
        "model": model,
    }
    with open(output_file, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, ensure_ascii=False)
    return output_file
