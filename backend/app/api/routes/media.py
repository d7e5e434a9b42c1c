from fastapi import APIRouter, File, UploadFile

from ...schemas.media import ImageSearchResponse, UploadResponse
from ...services import images as image_service
from ...services import uploads as upload_service

router = APIRouter()


@router.get("/search-image/{query}", response_model=ImageSearchResponse, summary="건물 이미지 검색")
async def search_image(query: str) -> ImageSearchResponse:
    result = await image_service.search_images(query)
    if not result["images"]:
        return ImageSearchResponse(success=False, query=query, message="이미지를 찾을 수 없습니다.")
    return ImageSearchResponse(query=query, **result)


@router.post("/upload", response_model=UploadResponse, summary="이미지 업로드")
async def upload_image(file: UploadFile = File(...)) -> UploadResponse:
    url, path = await upload_service.save_image(file)
    return UploadResponse(url=url, filename=path.name)
