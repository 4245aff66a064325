import asyncio
import logging
import shutil
import tempfile
from pathlib import Path
from typing import BinaryIO

from fastapi import APIRouter, Depends, File, UploadFile

from ..dependencies import get_app_settings, get_ocr_client
from ..exceptions import ValidationError
from ..integrations.veryfi.ocr_client import OcrClient, discard_upload
from ..settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(tags=["upload"])


def spool_to_disk(source: BinaryIO, upload_dir: Path) -> Path:
    """Copy an upload stream into a new temporary file under ``upload_dir``."""
    upload_dir.mkdir(parents=True, exist_ok=True)
    with tempfile.NamedTemporaryFile(dir=upload_dir, delete=False) as tmp:
        try:
            shutil.copyfileobj(source, tmp)
        except BaseException:
            tmp.close()
            discard_upload(Path(tmp.name))
            raise
    return Path(tmp.name)


@router.post("/upload")
async def upload_receipt(
    file: UploadFile | None = File(None),
    ocr_client: OcrClient = Depends(get_ocr_client),
    settings: Settings = Depends(get_app_settings),
):
    """Relay an uploaded receipt to the OCR provider and return its JSON."""
    if file is None:
        raise ValidationError("No file uploaded")

    path = await asyncio.to_thread(spool_to_disk, file.file, settings.upload_dir)
    logger.info(f"Relaying {file.filename or 'upload'} to OCR provider")
    return await ocr_client.relay(
        path,
        filename=file.filename or path.name,
        content_type=file.content_type or "application/octet-stream",
    )
