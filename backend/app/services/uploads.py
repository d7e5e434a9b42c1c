from __future__ import annotations

import asyncio
import logging
import secrets
import time
from pathlib import Path

from fastapi import HTTPException, UploadFile, status

from ..core.config import settings

logger = logging.getLogger(__name__)

UPLOAD_URL_PREFIX = "/uploads"
UPLOAD_CHUNK_BYTES = 1024 * 1024


def build_filename(original: str | None) -> str:
    """photo-{타임스탬프}-{난수}{확장자} 형태의 저장 파일명"""
    suffix = Path(original or "").suffix.lower() or ".jpg"
    return f"photo-{int(time.time() * 1000)}-{secrets.randbelow(10**9)}{suffix}"


async def save_image(file: UploadFile, upload_dir: Path | None = None) -> tuple[str, Path]:
    """이미지 파일을 업로드 디렉터리에 저장하고 (공개 URL, 저장 경로)를 반환"""
    if not (file.content_type or "").startswith("image/"):
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="이미지 파일만 업로드 가능합니다.")

    # 한도를 넘는 순간 읽기를 멈춘다
    buffer = bytearray()
    while True:
        chunk = await file.read(UPLOAD_CHUNK_BYTES)
        if not chunk:
            break
        buffer.extend(chunk)
        if len(buffer) > settings.max_upload_bytes:
            raise HTTPException(
                status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE, detail="파일 크기는 10MB 이하여야 합니다."
            )
    if not buffer:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="파일이 업로드되지 않았습니다.")

    target_dir = upload_dir or settings.upload_dir
    target_dir.mkdir(parents=True, exist_ok=True)
    filename = build_filename(file.filename)
    path = target_dir / filename
    await asyncio.to_thread(path.write_bytes, bytes(buffer))
    logger.info("업로드 저장: %s (%d bytes)", path, len(buffer))
    return f"{UPLOAD_URL_PREFIX}/{filename}", path
