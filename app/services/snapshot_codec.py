# app/services/snapshot_codec.py
import json
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from app.errors import ValidationError


def _default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, Decimal):
        return float(value)
    raise TypeError(f"{type(value).__name__} is not JSON serializable")


def encode_snapshot(data: Optional[Dict[str, Any]]) -> Optional[str]:
    """dict → stored text. ``None`` stays ``None`` so "no snapshot" survives."""
    if data is None:
        return None
    if not isinstance(data, dict):
        raise ValidationError("snapshot must be a JSON object")
    try:
        return json.dumps(data, ensure_ascii=False, default=_default)
    except (TypeError, ValueError) as e:
        raise ValidationError(f"snapshot is not serializable: {e}") from e


def decode_snapshot(raw: Optional[str]) -> Optional[Dict[str, Any]]:
    if raw is None:
        return None
    data = json.loads(raw)
    if not isinstance(data, dict):
        raise ValueError("stored snapshot is not a JSON object")
    return data
