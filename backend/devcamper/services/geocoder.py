"""
DevCamper Backend — Geocoder Service
======================================

What:  Address-to-coordinates lookup through a third-party geocoding provider.
Why:   Bootcamp addresses are stored with coordinates for radius searches.
How:   geopy resolves the provider by name (GEOCODER_PROVIDER) and the class
       is built with GEOCODER_API_KEY. Lookups run in the threadpool because
       geopy's default adapter is blocking, and are retried with tenacity.
When:  Built once at server startup. Missing credentials are fatal.

Resilience Strategy:
    - Timeouts and "service unavailable" answers are retried with
      exponential backoff + jitter (RETRY_* settings)
    - Anything else (bad key, quota, malformed answer) fails immediately
    - Failures surface as GeocodingError (503)
"""

import logging
from typing import Optional

from geopy.exc import (
    GeocoderNotFound,
    GeocoderTimedOut,
    GeocoderUnavailable,
    GeopyError,
)
from geopy.geocoders import get_geocoder_for_service
from geopy.location import Location
from starlette.concurrency import run_in_threadpool
from tenacity import (
    before_sleep_log,
    retry,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential_jitter,
)

from devcamper import __version__
from devcamper.config import Settings, settings
from devcamper.exceptions import GeocoderConfigurationError, GeocodingError
from devcamper.schemas.bootcamp import GeoLocation

logger = logging.getLogger(__name__)


class GeocoderService:
    """
    Thin adapter over a geopy geocoder.

    Usage:
        geocoder = GeocoderService.from_settings(settings)   # fail fast
        location = await geocoder.geocode("233 Bay State Rd Boston MA 02215")
        if location:
            location.latitude, location.longitude
    """

    def __init__(self, provider: str, geocoder):
        self.provider = provider
        self._geocoder = geocoder

    @classmethod
    def from_settings(cls, config: Settings) -> "GeocoderService":
        """
        Build the adapter from configuration.

        Raises:
            GeocoderConfigurationError: provider or key missing, unknown
                provider, or a provider that does not take an API key.
        """
        try:
            config.validate_geocoder()
        except ValueError as e:
            raise GeocoderConfigurationError(message=str(e))

        provider = config.geocoder_provider.lower()
        try:
            geocoder_cls = get_geocoder_for_service(provider)
        except GeocoderNotFound as e:
            raise GeocoderConfigurationError(
                message=f"Unknown geocoder provider '{config.geocoder_provider}'",
                context={"error": str(e)},
            )

        try:
            geocoder = geocoder_cls(
                api_key=config.geocoder_api_key,
                timeout=config.geocoder_timeout,
                user_agent=f"devcamper-api/{__version__}",
            )
        except TypeError as e:
            raise GeocoderConfigurationError(
                message=f"Geocoder provider '{provider}' does not accept an API key",
                context={"error": str(e)},
            )

        logger.info("GeocoderService initialized with provider=%s", provider)
        return cls(provider=provider, geocoder=geocoder)

    async def geocode(self, address: str) -> Optional[GeoLocation]:
        """
        Look up the coordinates of a free-form address.

        Returns:
            The best match, or None when the provider found nothing.

        Raises:
            GeocodingError: retries exhausted or a non-retryable provider error.
        """
        try:
            location = await run_in_threadpool(self._geocode_with_retry, address)
        except (GeocoderTimedOut, GeocoderUnavailable) as e:
            logger.error("Geocoder retries exhausted for %r: %s", address, str(e))
            raise GeocodingError(
                message="Geocoding failed after multiple attempts. Please try again later.",
                context={"provider": self.provider, "attempts": settings.retry_max_attempts},
            )
        except GeopyError as e:
            logger.error("Geocoder error for %r: %s", address, str(e))
            raise GeocodingError(
                message="Geocoding request was rejected by the provider.",
                context={"provider": self.provider, "error_type": type(e).__name__},
            )

        if location is None:
            logger.info("No geocoding match for %r", address)
            return None
        return self._to_geolocation(location)

    @retry(
        retry=retry_if_exception_type((GeocoderTimedOut, GeocoderUnavailable)),
        stop=stop_after_attempt(settings.retry_max_attempts),
        wait=wait_exponential_jitter(
            multiplier=settings.retry_min_wait,
            max=settings.retry_max_wait,
            jitter=settings.retry_jitter,
        ),
        before_sleep=before_sleep_log(logger, logging.WARNING),
        reraise=True,
    )
    def _geocode_with_retry(self, address: str) -> Optional[Location]:
        # Only the provider call is retried; result mapping is not
        return self._geocoder.geocode(address, exactly_one=True)

    def _to_geolocation(self, location: Location) -> GeoLocation:
        raw = location.raw if isinstance(location.raw, dict) else None
        return GeoLocation(
            latitude=location.latitude,
            longitude=location.longitude,
            formatted_address=location.address or "",
            provider=self.provider,
            raw=raw,
        )
