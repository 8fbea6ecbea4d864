from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ImageRecord:
    """In-memory representation of a row in the IMAGE table.

    Attributes:
        id: Primary key (None for records not yet inserted).
        file_name: Original filename of the upload; may be None or empty.
        data: Raw uploaded bytes.
    """

    id: Optional[int]
    file_name: Optional[str]
    data: bytes = b""

    def to_json(self) -> Dict[str, Any]:
        """Return the JSON body shape used by the HTTP API (bytes as base64)."""
        return {
            "id": self.id,
            "fileName": self.file_name,
            "data": base64.b64encode(self.data).decode("ascii"),
        }
