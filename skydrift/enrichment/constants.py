"""
Enrichment Constants
"""

from ..config import Settings

# Open-Meteo forecast API
OPEN_METEO_URL = Settings.OPEN_METEO_URL
TEMPERATURE_VARIABLE = "temperature_2m"
DEFAULT_API_TIMEOUT = Settings.API_TIMEOUT_SECONDS

# Rate limiting
BATCH_SIZE = Settings.ENRICHMENT_BATCH_SIZE
DELAY_SECONDS = Settings.ENRICHMENT_DELAY_SECONDS

# Cache
CACHE_TTL_SECONDS = Settings.TEMPERATURE_CACHE_TTL_SECONDS
