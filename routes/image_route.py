"""FastAPI routes for the image blob store."""

import logging

from fastapi import APIRouter, File, HTTPException, Path, Request, UploadFile

from controllers.image_controller import (
	delete_image,
	download_image,
	get_image,
	list_images,
	update_image,
	upload_image,
)

LOGGER = logging.getLogger(__name__)

# SQLite INTEGER is a signed 64-bit value.
MIN_IMAGE_ID = -(2**63)
MAX_IMAGE_ID = 2**63 - 1

router = APIRouter(prefix="/api/images", tags=["images"])


@router.post("")
async def upload_image_route(request: Request, file: UploadFile = File(...)):
	"""Upload a new image from the multipart field `file`."""
	try:
		return await upload_image(request, file)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Failed to store uploaded image")
		raise HTTPException(status_code=500, detail="Failed to store image.") from exc


@router.get("")
async def list_images_route(request: Request):
	"""Return all stored images."""
	try:
		return await list_images(request)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Failed to list images")
		raise HTTPException(status_code=500, detail="Failed to list images.") from exc


@router.get("/download/{image_id}")
async def download_image_route(request: Request, image_id: int = Path(..., ge=MIN_IMAGE_ID, le=MAX_IMAGE_ID)):
	"""Return the raw image bytes as a file attachment."""
	try:
		return await download_image(request, image_id)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Failed to download image %s", image_id)
		raise HTTPException(status_code=500, detail="Failed to download image.") from exc


@router.get("/{image_id}")
async def get_image_route(request: Request, image_id: int = Path(..., ge=MIN_IMAGE_ID, le=MAX_IMAGE_ID)):
	try:
		return await get_image(request, image_id)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Failed to read image %s", image_id)
		raise HTTPException(status_code=500, detail="Failed to read image.") from exc


@router.put("/{image_id}")
async def update_image_route(
	request: Request,
	image_id: int = Path(..., ge=MIN_IMAGE_ID, le=MAX_IMAGE_ID),
	file: UploadFile = File(...),
):
	"""Replace the filename and bytes of an existing image."""
	try:
		return await update_image(request, image_id, file)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Failed to update image %s", image_id)
		raise HTTPException(status_code=500, detail="Failed to update image.") from exc


@router.delete("/{image_id}")
async def delete_image_route(request: Request, image_id: int = Path(..., ge=MIN_IMAGE_ID, le=MAX_IMAGE_ID)):
	try:
		return await delete_image(request, image_id)
	except HTTPException:
		raise
	except Exception as exc:  # pylint: disable=broad-exception-caught
		LOGGER.exception("Failed to delete image %s", image_id)
		raise HTTPException(status_code=500, detail="Failed to delete image.") from exc
