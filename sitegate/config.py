"""Application configuration via Pydantic Settings.

NOTE: every field is mapped to an explicit env variable name so a typo in
.env fails loudly instead of silently falling back to a default.
"""

from pydantic import Field
from pydantic_settings import BaseSettings

from sitegate.domain.value_objects.enums import CoordinateOrder


class Settings(BaseSettings):
    # Backend (owns sites, violations, shipments)
    backend_url: str = Field(
        default="https://genshinlohs.ru:8002",
        validation_alias="BACKEND_URL",
    )
    backend_timeout: float = Field(default=10.0, validation_alias="BACKEND_TIMEOUT")

    # Geofence tolerances (metres)
    default_accuracy_m: float = Field(default=15.0, validation_alias="DEFAULT_ACCURACY_M")
    proximity_buffer_m: float = Field(default=50.0, validation_alias="PROXIMITY_BUFFER_M")
    center_extra_buffer_m: float = Field(default=50.0, validation_alias="CENTER_EXTRA_BUFFER_M")

    # Backend polygons carry swapped field names, geo_data does not
    polygon_coordinate_order: CoordinateOrder = Field(
        default=CoordinateOrder.LON_LAT,
        validation_alias="POLYGON_COORDINATE_ORDER",
    )
    center_coordinate_order: CoordinateOrder = Field(
        default=CoordinateOrder.LAT_LON,
        validation_alias="CENTER_COORDINATE_ORDER",
    )

    # Dev relay
    relay_target_url: str = Field(
        default="https://genshinlohs.ru:8002",
        validation_alias="RELAY_TARGET_URL",
    )
    relay_public_url: str = Field(
        default="http://localhost:8083",
        validation_alias="RELAY_PUBLIC_URL",
    )
    relay_port: int = Field(default=8083, validation_alias="RELAY_PORT")

    # App
    cors_origins: list[str] = Field(
        default=["http://localhost:8081", "http://127.0.0.1:8081"],
        validation_alias="CORS_ORIGINS",
    )
    debug: bool = Field(default=False, validation_alias="DEBUG")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
