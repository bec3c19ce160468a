from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    APP_NAME: str = "Rebar Takeoff Engine"

    # Stirrups
    DEFAULT_STIRRUP_SPACING_CM: float = 20.0
    MAX_STIRRUPS: int = 500  # per element, regardless of spacing
    HOOK_ALLOWANCE_CM: float = 10.0  # closing hooks on every stirrup
    DEFAULT_STIRRUP_WIDTH_CM: float = 15.0
    DEFAULT_STIRRUP_HEIGHT_CM: float = 25.0
    DEFAULT_STIRRUP_GAUGE: str = "5.0"

    # Footing cage
    CAGE_COVER_CM: float = 5.0
    DEFAULT_FOOTING_WIDTH_M: float = 0.80
    DEFAULT_FOOTING_HEIGHT_M: float = 0.20

    # Longitudinal bars
    DEFAULT_BAR_COUNT: int = 2
    DEFAULT_BAR_GAUGE: str = "10.0"
    MAX_RENDERED_BARS: int = 50

    # Element defaults for incomplete imports
    DEFAULT_ELEMENT_LENGTH_M: float = 3.0
    DEFAULT_ELEMENT_WIDTH_M: float = 0.15
    DEFAULT_ELEMENT_HEIGHT_M: float = 0.30
    DEFAULT_SUPPORT_WIDTH_CM: float = 20.0
    LENGTH_MARGIN_CM: float = 5.0

    # Unit heuristics: magnitudes that betray a value typed in the wrong unit
    UNIT_HEURISTICS_ENABLED: bool = True
    METERS_FIELD_MAX: float = 4.0
    CM_FIELD_MIN: float = 1.0

    # Quote summary
    STOCK_BAR_LENGTH_M: float = 12.0
    KG_PRICE_DEFAULT: float = 12.50

    class Config:
        env_file = ".env"


settings = Settings()
