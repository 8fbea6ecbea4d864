"""Content type lookup for stored image filenames."""

from typing import Optional, Tuple

DEFAULT_CONTENT_TYPE = "application/octet-stream"

# Checked in order; first matching suffix wins.
SUFFIX_CONTENT_TYPES: Tuple[Tuple[Tuple[str, ...], str], ...] = (
    ((".png",), "image/png"),
    ((".gif",), "image/gif"),
    ((".webp",), "image/webp"),
    ((".bmp",), "image/bmp"),
    ((".jpg", ".jpeg"), "image/jpeg"),
)


def content_type_for(file_name: Optional[str]) -> str:
    """Return the MIME type for `file_name` based on its suffix (case-insensitive).

    Missing names and unknown suffixes map to `application/octet-stream`.
    """
    if file_name is None:
        return DEFAULT_CONTENT_TYPE
    lower_name = file_name.lower()
    for suffixes, content_type in SUFFIX_CONTENT_TYPES:
        if lower_name.endswith(suffixes):
            return content_type
    return DEFAULT_CONTENT_TYPE
