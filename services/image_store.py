"""Blob store service for uploaded images.

`ImageStoreService` owns the lifecycle of stored image records. Every
operation forwards to the persistence handle supplied at construction
(normally `dal.image_dal.ImageDAL`); absence of a record is reported as
`None`, storage failures propagate unchanged.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Protocol

from models.image_record import ImageRecord
from utils.content_types import content_type_for

LOGGER = logging.getLogger(__name__)


class ImageRepository(Protocol):
    """Persistence capabilities required by `ImageStoreService`."""

    async def insert(self, file_name: Optional[str], data: bytes) -> ImageRecord: ...

    async def find_by_id(self, image_id: int) -> Optional[ImageRecord]: ...

    async def find_all(self) -> List[ImageRecord]: ...

    async def replace(self, image_id: int, file_name: Optional[str], data: bytes) -> Optional[ImageRecord]: ...

    async def delete_by_id(self, image_id: int) -> None: ...


@dataclass
class ImageDownload:
    """Payload for a file-attachment response."""

    data: bytes
    content_type: str
    file_name: Optional[str]

    @property
    def content_length(self) -> int:
        return len(self.data)


class ImageStoreService:
    """Create, list, fetch, replace and delete stored images."""

    def __init__(self, repository: ImageRepository) -> None:
        """
        Args:
            repository: Persistence handle providing insert/find/replace/delete.
        """
        self._repository = repository

    async def create(self, file_name: Optional[str], data: bytes) -> ImageRecord:
        """Persist a new image and return it with its allocated id."""
        record = await self._repository.insert(file_name, data)
        LOGGER.info("Stored image id=%s file_name=%r (%d bytes)", record.id, file_name, len(data))
        return record

    async def list_all(self) -> List[ImageRecord]:
        return list(await self._repository.find_all())

    async def get_by_id(self, image_id: int) -> Optional[ImageRecord]:
        record = await self._repository.find_by_id(image_id)
        if record is None:
            LOGGER.debug("Image id=%s not found", image_id)
        return record

    async def update(self, image_id: int, file_name: Optional[str], data: bytes) -> Optional[ImageRecord]:
        """Replace filename and bytes of an existing image.

        Returns None (and creates nothing) when `image_id` is unknown.
        """
        record = await self._repository.replace(image_id, file_name, data)
        if record is None:
            LOGGER.debug("Update skipped, image id=%s not found", image_id)
        else:
            LOGGER.info("Replaced image id=%s file_name=%r (%d bytes)", image_id, file_name, len(data))
        return record

    async def delete_by_id(self, image_id: int) -> None:
        """Delete an image; unknown ids are a no-op."""
        await self._repository.delete_by_id(image_id)
        LOGGER.info("Delete requested for image id=%s", image_id)

    async def download(self, image_id: int) -> Optional[ImageDownload]:
        """Return bytes, derived content type and stored filename, or None."""
        record = await self.get_by_id(image_id)
        if record is None:
            return None
        return ImageDownload(
            data=record.data,
            content_type=content_type_for(record.file_name),
            file_name=record.file_name,
        )
