from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from functools import lru_cache
from zoneinfo import ZoneInfo

from fastapi import HTTPException, status
from google import genai
from google.genai import types

from ..core.config import settings
from ..schemas.landmarks import LandmarkInfo
from ..schemas.philosophy import LocationInfo, PhilosophyResponse, PhilosophySections, UserContext

logger = logging.getLogger(__name__)

SEOUL_TZ = ZoneInfo("Asia/Seoul")

SECTION_HEADINGS = (
    ("philosophy", "🏛️ 건축 철학"),
    ("history", "📚 역사적 맥락"),
    ("culture", "🎨 문화적 가치"),
    ("modern", "💭 현대적 해석"),
)

DEFAULT_SECTIONS = {
    "philosophy": "이 건물은 조선시대의 건축 철학을 담고 있습니다.",
    "history": "역사적으로 중요한 의미를 가진 건물입니다.",
    "culture": "조선시대 문화의 정수를 보여주는 건축물입니다.",
    "modern": "현재에도 우리에게 많은 교훈을 주는 소중한 문화유산입니다.",
}


def _format_philosophy_prompt(building: LandmarkInfo, location: LocationInfo, user_context: UserContext) -> str:
    current_time = datetime.now(SEOUL_TZ).strftime("%Y. %m. %d. %H:%M:%S")
    latitude = f"{location.latitude:.6f}" if location.latitude is not None else "미상"
    longitude = f"{location.longitude:.6f}" if location.longitude is not None else "미상"
    heading = f"{round(location.heading)}°" if location.heading is not None else "미상"
    features = ", ".join(building.features) or "경복궁 건물"

    return f"""당신은 한국의 전통 건축과 역사에 대한 전문가입니다. 경복궁의 건축물에 대해 깊이 있는 철학적 해석과 역사적 맥락을 제공해주세요.

## 📍 현재 상황
- **건물명**: {building.name} ({building.name_en or 'Unknown'})
- **현재 위치**: {location.address or '경복궁 내부'}
- **GPS 좌표**: {latitude}, {longitude}
- **건물과의 거리**: {location.distance_to_building or 0}m
- **방위각**: {heading}
- **촬영 시간**: {current_time}
- **기기 타입**: {user_context.device_type or 'Unknown'}

## 🏛️ 건물 기본 정보
- **건립 연도**: {building.build_year or '미상'}
- **문화재 지정**: {building.cultural_property or '문화재'}
- **주요 특징**: {features}
- **기본 설명**: {building.detailed_description or '경복궁의 대표적인 건물입니다.'}

## 📝 요청사항
다음 형식으로 **한국어**로 응답해주세요:

### 🏛️ 건축 철학
- 이 건물이 담고 있는 조선시대의 건축 철학과 사상
- 공간 배치와 구조에 담긴 의미

### 📚 역사적 맥락
- 건립 당시의 역사적 배경과 목적
- 주요 역사적 사건과 인물들

### 🎨 문화적 가치
- 조선시대 문화와 예술적 특징
- 보존의 의미와 가치

### 💭 현대적 해석
- 현재 우리에게 주는 교훈과 의미
- 방문자에게 전하고 싶은 메시지

**응답 길이**: 각 섹션당 2-3문단, 총 400-600자
**톤**: 교육적이면서도 흥미롭게, 전문적이지만 이해하기 쉽게
**특별 요청**: 현재 GPS 위치와 시간을 고려한 개인화된 해석 포함"""


def extract_section(text: str, start_marker: str, end_marker: str | None) -> str | None:
    start = text.find(start_marker)
    if start == -1:
        return None
    content_start = start + len(start_marker)
    end = text.find(end_marker, content_start) if end_marker else -1
    section = text[content_start:] if end == -1 else text[content_start:end]
    # 다음 섹션 헤딩 앞의 마크다운 기호 정리
    return section.strip().rstrip("#").strip() or None


def parse_sections(text: str) -> PhilosophySections:
    parsed: dict[str, str] = {}
    for index, (key, heading) in enumerate(SECTION_HEADINGS):
        next_heading = SECTION_HEADINGS[index + 1][1] if index + 1 < len(SECTION_HEADINGS) else None
        parsed[key] = extract_section(text, heading, next_heading) or DEFAULT_SECTIONS[key]
    return PhilosophySections(**parsed)


def fallback_response(building: LandmarkInfo, error: str | None = None) -> PhilosophyResponse:
    return PhilosophyResponse(
        success=False,
        building_id=building.id,
        building_name=building.name,
        building_name_en=building.name_en,
        content=PhilosophySections(
            philosophy=(
                f"{building.name}은 조선시대의 건축 철학과 왕실의 권위를 상징하는 건물입니다. "
                "정교한 공간 배치와 아름다운 구조를 통해 조선 왕조의 이상과 가치관을 표현하고 있습니다."
            ),
            history=(
                f"{building.build_year or '조선시대'}에 건립된 이 건물은 경복궁의 중요한 구성 요소로서 "
                "왕실의 일상과 국정 운영에 핵심적인 역할을 담당했습니다."
            ),
            culture=(
                f"{building.cultural_property or '문화재'}로 지정된 이 건축물은 조선시대의 뛰어난 "
                "건축 기술과 예술적 감각을 보여주는 소중한 문화유산입니다."
            ),
            modern=(
                f"현재 우리에게 {building.name}은 전통과 현대를 잇는 다리 역할을 하며, "
                "우리 조상들의 지혜와 미적 감각을 배울 수 있는 살아있는 교육장입니다."
            ),
        ),
        fallback=True,
        error=error or "생성형 AI 서비스 일시적 오류",
    )


@lru_cache
def get_gemini_client() -> genai.Client:
    if not settings.gemini_api_key:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="GEMINI_API_KEY 환경 변수가 설정되지 않았습니다. .env 파일에 GEMINI_API_KEY를 추가하세요.",
        )
    try:
        return genai.Client(api_key=settings.gemini_api_key)
    except Exception as exc:  # pragma: no cover
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=f"Gemini 클라이언트 초기화 실패: {str(exc)}") from exc


async def _invoke_gemini(prompt: str) -> str:
    """Google Gemini API를 사용하여 프롬프트를 처리합니다."""
    client = get_gemini_client()
    try:
        response = await asyncio.to_thread(
            client.models.generate_content,
            model=settings.gemini_model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=settings.gemini_temperature,
                max_output_tokens=settings.gemini_max_output_tokens,
            ),
        )
    except Exception as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=f"Gemini API 호출 실패: {str(exc)}",
        ) from exc
    text = getattr(response, "text", None)
    if not text:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail="Gemini 응답이 비어 있습니다.")
    return text


async def generate_building_philosophy(
    building: LandmarkInfo,
    location: LocationInfo,
    user_context: UserContext,
) -> PhilosophyResponse:
    """건물의 철학·역사 해설을 생성합니다. 생성에 실패하면 정적 폴백 응답을 돌려줍니다."""
    prompt = _format_philosophy_prompt(building, location, user_context)
    logger.info("철학 생성 요청: %s", building.name)
    try:
        raw = await _invoke_gemini(prompt)
    except HTTPException as exc:
        logger.warning("철학 생성 실패, 폴백 응답 사용 (%s): %s", building.id, exc.detail)
        return fallback_response(building)

    return PhilosophyResponse(
        success=True,
        building_id=building.id,
        building_name=building.name,
        building_name_en=building.name_en,
        generated_at=datetime.now(timezone.utc).isoformat(),
        content=parse_sections(raw),
        full_content=raw,
        model=settings.gemini_model,
    )
