from pydantic import BaseModel, Field, model_validator
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from services.session_types import (
    ActivityLevel,
    ActivityType,
    ComfortLevel,
    ThermalPreference,
    WeatherSample,
)


class WeatherInput(BaseModel):
    """Weather supplied by the caller (imperial units)"""
    temperature: float  # °F
    feels_like: Optional[float] = None  # defaults to temperature
    humidity: float = Field(default=0.0, ge=0, le=100)
    pressure: float = 0.0
    precipitation: float = Field(default=0.0, ge=0)  # inches
    uv_index: float = Field(default=0.0, ge=0)
    wind_speed: float = Field(default=0.0, ge=0)  # mph
    cloud_cover: float = Field(default=0.0, ge=0, le=100)
    description: str = ""
    observed_at: Optional[datetime] = None
    sunrise: Optional[datetime] = None
    sunset: Optional[datetime] = None
    location: str = ""

    def to_sample(self) -> WeatherSample:
        return WeatherSample(
            temperature=self.temperature,
            feels_like=self.feels_like if self.feels_like is not None else self.temperature,
            humidity=self.humidity,
            pressure=self.pressure,
            precipitation=self.precipitation,
            uv_index=self.uv_index,
            wind_speed=self.wind_speed,
            cloud_cover=self.cloud_cover,
            description=self.description,
            observed_at=self.observed_at,
            sunrise=self.sunrise,
            sunset=self.sunset,
            location=self.location,
        )


class RecommendationRequest(BaseModel):
    activity: ActivityType
    thermal_preference: Optional[ThermalPreference] = None  # settings default when omitted
    activity_level: Optional[ActivityLevel] = None
    # Either inline weather or a coordinate to fetch it for
    weather: Optional[WeatherInput] = None
    lat: Optional[float] = Field(default=None, ge=-90, le=90)
    lon: Optional[float] = Field(default=None, ge=-180, le=180)
    temperature_unit: Literal["fahrenheit", "celsius"] = "fahrenheit"
    include_diagnostics: bool = False
    reference_time: Optional[datetime] = None

    @model_validator(mode="after")
    def _weather_or_location(self):
        if self.weather is None and (self.lat is None or self.lon is None):
            raise ValueError("Provide either weather or both lat and lon")
        return self


class RecommendationResponse(BaseModel):
    activity: str
    weather: Dict[str, Any]
    recommendation: Dict[str, Any]
    suggestions: Optional[Dict[str, Any]] = None
    diagnostics: Optional[Dict[str, Any]] = None


class FeedbackCreate(BaseModel):
    """A completed session rated by the user"""
    activity: ActivityType
    comfort: ComfortLevel
    weather: WeatherInput
    clothing: Dict[str, str] = Field(default_factory=dict)
    recorded_at: Optional[datetime] = None  # defaults to weather.observed_at, then now
    comments: str = ""
    activity_level: Optional[ActivityLevel] = None


class FeedbackResponse(BaseModel):
    id: str
    activity: str
    comfort: str
    recorded_at: datetime
    clothing: Dict[str, str]


class SessionListResponse(BaseModel):
    activity: str
    count: int
    sessions: List[Dict[str, Any]]


class ImportResponse(BaseModel):
    success: bool
    imported: int
    feedback: int
    total: int
    by_activity: Dict[str, int]
    has_activity_column: bool
    errors: List[str]
    warnings: List[str]


class ClothingCategoryResponse(BaseModel):
    key: str
    label: str
    default: str
    options: List[str]


class ActivityResponse(BaseModel):
    activity: str
    name: str
    categories: List[ClothingCategoryResponse]
    thermal: Dict[str, float]
    similarity_threshold_c: float
    band_defaults: Dict[str, Dict[str, str]]


class ActivityListResponse(BaseModel):
    activities: List[ActivityResponse]
