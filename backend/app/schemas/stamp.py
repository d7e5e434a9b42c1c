from pydantic import BaseModel, ConfigDict, Field


class StampCard(BaseModel):
    """찍고갈래 페이지의 장소 카드"""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    content_id: str
    name: str
    name_en: str = Field(alias="nameEn")
    lat: float
    lng: float
    description: str
    popular: bool = True
    image: str
    rating: float
    reviews: int
    address: str = ""
    tel: str = ""
    homepage: str = ""
    distance: float = Field(default=0, description="요청 좌표로부터의 거리 (미터)")
    area_name: str = "서울"
    spot_category: str
    unesco: bool = False


class StampCardList(BaseModel):
    success: bool = True
    message: str
    data: list[StampCard]
    count: int
    category: str | None = None
