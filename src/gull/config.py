from dataclasses import dataclass, field, fields
from datetime import date, datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import yaml

from .utils.validation import validate_number, validate_range, validate_type

@dataclass
class ModelConfig:
    path: str = "share/data/IGRF13.COF"  # geomag70 .COF data file
    date: date = date(2020, 3, 23)  # Snapshot date

@dataclass
class LocationConfig:
    # Auberge des Gros Manaux, Puy de Dome, France
    latitude: float = 45.76415653  # deg
    longitude: float = 2.95536402  # deg
    altitude: float = 1090.0  # m, above the WGS84 ellipsoid

@dataclass
class LoggingConfig:
    level: str = "INFO"
    log_file: Optional[str] = None

@dataclass
class GullConfig:
    """Main configuration class."""
    model: ModelConfig = field(default_factory=ModelConfig)
    location: LocationConfig = field(default_factory=LocationConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

# Create default configuration instance
DEFAULT_CONFIG = GullConfig()

LOGGING_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

def get_config() -> GullConfig:
    """Get configuration instance."""
    return DEFAULT_CONFIG

def set_model_path(path: Union[str, Path]):
    """Set the default model data file."""
    DEFAULT_CONFIG.model.path = str(path)

def validate_config(config: GullConfig) -> List[str]:
    """
    Validate configuration values.
    Returns list of validation errors, empty if valid.
    """
    errors = []

    # Validate model configuration
    if not config.model.path:
        errors.append("Model path cannot be empty")

    if not validate_type(config.model.date, date):
        errors.append("Model date must be a date")

    # Validate location configuration
    location = config.location
    numeric = True
    for name in ("latitude", "longitude", "altitude"):
        value = getattr(location, name)
        if not validate_number(value):
            errors.append(f"Location {name} must be a number")
            numeric = False

    if numeric and not validate_range(location.latitude, -90.0, 90.0):
        errors.append("Latitude must be between -90 and 90 degrees")

    if numeric and not validate_range(location.longitude, -360.0, 360.0):
        errors.append("Longitude must be between -360 and 360 degrees")

    if numeric and not validate_range(location.altitude):
        errors.append("Altitude must be finite")

    # Validate logging configuration
    if str(config.logging.level).upper() not in LOGGING_LEVELS:
        errors.append(f"Unknown logging level: {config.logging.level}")

    return errors

def _parse_date(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str):
        return date.fromisoformat(value)
    return value

def _build_section(cls, data: Optional[Dict[str, Any]], name: str, errors: List[str]):
    if data is None:
        return cls()
    if not isinstance(data, dict):
        errors.append(f"Section `{name}` must be a mapping")
        return cls()
    known = {f.name for f in fields(cls)}
    for key in data:
        if key not in known:
            errors.append(f"Unknown key `{name}.{key}`")
    return cls(**{key: value for key, value in data.items() if key in known})

def load_config(config_file: Union[str, Path]) -> GullConfig:
    """Load and validate configuration from a YAML file."""
    with open(config_file, "r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}

    errors = []
    if not isinstance(data, dict):
        raise ValueError("Configuration validation failed:\n- Top level must be a mapping")
    for key in data:
        if key not in ("model", "location", "logging"):
            errors.append(f"Unknown section `{key}`")

    config = GullConfig(
        model=_build_section(ModelConfig, data.get("model"), "model", errors),
        location=_build_section(LocationConfig, data.get("location"), "location", errors),
        logging=_build_section(LoggingConfig, data.get("logging"), "logging", errors)
    )
    try:
        config.model.date = _parse_date(config.model.date)
    except ValueError:
        errors.append(f"Invalid model date: {config.model.date}")

    # Validate configuration
    errors.extend(validate_config(config))
    if errors:
        raise ValueError(f"Configuration validation failed:\n" +
                        "\n".join(f"- {error}" for error in errors))

    return config
