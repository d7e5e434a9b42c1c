"""
찍고갈래(스탬프 투어) 카드 변환

평점과 리뷰 수는 실제 데이터가 없어 관광지 정보의 충실도로 추정한다.
흔들림 값은 content_id를 시드로 사용하므로 같은 관광지는 항상 같은 값을 받는다.
"""

import random

from ..schemas.stamp import StampCard
from ..schemas.tourism import TouristSpot

DEFAULT_IMAGE = "/image/default-tourist-spot.jpg"
DESCRIPTION_LENGTH = 100


def estimate_rating(spot: TouristSpot, unesco: bool = False) -> float:
    rating = 4.5 if unesco or spot.unesco else 4.0
    if len(spot.title) > 10:
        rating += 0.1
    if spot.overview and len(spot.overview) > DESCRIPTION_LENGTH:
        rating += 0.2
    if spot.image_url:
        rating += 0.1
    if spot.tel:
        rating += 0.1
    rating += random.Random(f"rating:{spot.content_id}").random() * 0.3
    return round(min(5.0, rating), 1)


def estimate_reviews(spot: TouristSpot, unesco: bool = False) -> int:
    reviews = 5000 if unesco or spot.unesco else 1000
    if len(spot.title) > 10:
        reviews += 2000
    if spot.overview and len(spot.overview) > DESCRIPTION_LENGTH:
        reviews += 3000
    return reviews + random.Random(f"reviews:{spot.content_id}").randrange(5000)


def to_stamp_card(
    spot: TouristSpot,
    *,
    unesco: bool = False,
    default_description: str = "관광지 정보",
    default_category: str = "관광지",
) -> StampCard | None:
    """좌표가 없는 관광지는 지도에 올릴 수 없으므로 None"""
    if spot.latitude is None or spot.longitude is None:
        return None
    if spot.overview:
        description = spot.overview[:DESCRIPTION_LENGTH] + "..."
    else:
        description = default_description
    return StampCard(
        id=spot.content_id,
        content_id=spot.content_id,
        name=spot.title,
        name_en=spot.title,
        lat=spot.latitude,
        lng=spot.longitude,
        description=description,
        image=spot.image_url or DEFAULT_IMAGE,
        rating=estimate_rating(spot, unesco),
        reviews=estimate_reviews(spot, unesco),
        address=spot.address or "",
        tel=spot.tel or "",
        homepage=spot.homepage or "",
        distance=spot.distance or 0,
        area_name=spot.area_name or "서울",
        spot_category=spot.spot_category or default_category,
        unesco=unesco or spot.unesco,
    )


def to_stamp_cards(spots: list[TouristSpot], **kwargs) -> list[StampCard]:
    cards = (to_stamp_card(spot, **kwargs) for spot in spots)
    return [card for card in cards if card is not None]
