"""Kakao 이미지 검색 프록시"""
from __future__ import annotations

import logging
from typing import Any

import httpx
from fastapi import HTTPException, status

from ..core.config import settings

logger = logging.getLogger(__name__)

KAKAO_IMAGE_SEARCH_URL = "https://dapi.kakao.com/v2/search/image"


def _to_image(document: dict[str, Any]) -> dict[str, Any]:
    return {
        "imageUrl": document.get("image_url"),
        "thumbnailUrl": document.get("thumbnail_url"),
        "displaySitename": document.get("display_sitename"),
        "docUrl": document.get("doc_url"),
        "width": document.get("width"),
        "height": document.get("height"),
        "datetime": document.get("datetime"),
    }


async def search_images(query: str, size: int = 5) -> dict[str, Any]:
    """
    Kakao 이미지 검색 API로 건물 사진을 찾는다

    Args:
        query: 검색어 (예: "경복궁 근정전")
        size: 결과 개수
    """
    if not settings.kakao_rest_api_key:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail="Kakao REST API 키가 설정되지 않았습니다.")

    try:
        async with httpx.AsyncClient(timeout=5.0) as client:
            response = await client.get(
                KAKAO_IMAGE_SEARCH_URL,
                params={"query": query, "size": size, "sort": "accuracy"},
                headers={"Authorization": f"KakaoAK {settings.kakao_rest_api_key}"},
            )
    except httpx.HTTPError as e:
        logger.error(f"Kakao 이미지 검색 호출 실패: {e}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="이미지 검색 중 오류가 발생했습니다.") from e

    if response.status_code == 401:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Kakao API 인증에 실패했습니다.")
    if response.status_code == 429:
        raise HTTPException(status_code=status.HTTP_429_TOO_MANY_REQUESTS, detail="이미지 검색 요청 한도를 초과했습니다.")
    if response.status_code != 200:
        logger.warning(f"Kakao 이미지 검색 오류: {response.status_code}")
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="이미지 검색 중 오류가 발생했습니다.")

    data = response.json()
    documents = data.get("documents", [])
    meta = data.get("meta") or {}
    logger.info("이미지 검색 '%s': %d건", query, len(documents))
    return {
        "images": [_to_image(document) for document in documents],
        "total": meta.get("total_count") or len(documents),
        "is_end": bool(meta.get("is_end", False)),
    }
