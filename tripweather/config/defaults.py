"""Default OpenWeatherMap endpoints and service constants."""

OPENWEATHER_BASE_URL = "https://api.openweathermap.org"
OPENWEATHER_ICON_BASE_URL = "https://openweathermap.org/img/wn"
DEFAULT_USER_AGENT = "tripweather/0.1.0"

API_KEY_ENV_VAR = "OPENWEATHER_API_KEY"
MIN_API_KEY_LENGTH = 10  # keys must be strictly longer than this

STORAGE_KEY_PREFIX = "weatherCache_"
