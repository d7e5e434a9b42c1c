from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class LocationInfo(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    distance_to_building: float | None = None
    heading: float | None = None


class UserContext(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    device_type: str | None = None


class PhilosophyRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    building_name: str | None = None
    location_info: LocationInfo = Field(default_factory=LocationInfo)
    user_context: UserContext = Field(default_factory=UserContext)


class PhilosophySections(BaseModel):
    philosophy: str
    history: str
    culture: str
    modern: str


class PhilosophyResponse(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    success: bool
    building_id: str
    building_name: str
    building_name_en: str | None = None
    generated_at: str | None = None
    content: PhilosophySections
    full_content: str | None = None
    model: str | None = None
    fallback: bool = False
    error: str | None = None
