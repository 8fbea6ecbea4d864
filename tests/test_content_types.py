"""Tests for suffix-based content type lookup."""

import pytest

from utils.content_types import DEFAULT_CONTENT_TYPE, content_type_for


class TestContentTypeFor:
    """Test content_type_for suffix table"""

    @pytest.mark.parametrize(
        "fileName,expected",
        [
            ("cat.png", "image/png"),
            ("a.PNG", "image/png"),
            ("anim.gif", "image/gif"),
            ("pic.WebP", "image/webp"),
            ("old.bmp", "image/bmp"),
            ("photo.jpg", "image/jpeg"),
            ("photo.jpeg", "image/jpeg"),
            ("PHOTO.JPEG", "image/jpeg"),
        ],
    )
    def testKnownSuffixes(self, fileName, expected):
        assert content_type_for(fileName) == expected

    def testUnknownSuffix(self):
        assert content_type_for("x.tiff") == "application/octet-stream"

    def testNoneFileName(self):
        assert content_type_for(None) == DEFAULT_CONTENT_TYPE

    def testEmptyAndSuffixlessNames(self):
        assert content_type_for("") == DEFAULT_CONTENT_TYPE
        assert content_type_for("png") == DEFAULT_CONTENT_TYPE

    def testOnlyLastSuffixCounts(self):
        """Suffix must be at the end of the name"""
        assert content_type_for("image.png.txt") == DEFAULT_CONTENT_TYPE
        assert content_type_for("archive.tar.jpg") == "image/jpeg"
