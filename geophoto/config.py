from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Library settings, overridable with GEOPHOTO_* environment variables."""

    # Street View lookup
    STREET_VIEW_URL: str = "https://maps.googleapis.com/maps/api/streetview"
    STREET_VIEW_SIZE: str = "640x640"
    STREET_VIEW_FOV: int = 120
    STREET_VIEW_HEADING: int = 0

    # ~0.11 m at the equator
    DECIMAL_PLACES: int = Field(default=6, ge=0, description="Digits after the point in coordinate strings")

    class Config:
        env_prefix = "GEOPHOTO_"
        case_sensitive = False


settings = Settings()
