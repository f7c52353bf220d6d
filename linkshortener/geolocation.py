"""Best-effort IP geolocation lookup

The registry records a coarse location ('City, Country') with every click.
The lookup is an external call to a public IP-geolocation service; it is never
allowed to fail a resolve. Callers catch GeolocationError and fall back to
'Unknown Location'.

Classes:
    GeoLocation:
        City and country returned by a lookup.

    BaseGeolocator:
        Interface for geolocation lookups.

    IpApiGeolocator:
        Lookup against an ipapi.co-compatible JSON endpoint.

Example:
    >>> geolocator = IpApiGeolocator(timeout=2.0)
    >>> geolocator.locate().label()
    'Sofia, Bulgaria'
"""

import json
import logging
import http.client
import urllib.request
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from beartype import beartype

from linkshortener.exceptions import GeolocationError
from linkshortener.utils.constants import DEFAULT_GEOLOCATION_URL, DEFAULT_GEOLOCATION_TIMEOUT


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeoLocation:
    """Geographic location returned by a lookup."""

    city: Optional[str] = None
    country: Optional[str] = None

    def label(self) -> str:
        return f'{self.city or "Unknown"}, {self.country or "Unknown"}'


class BaseGeolocator(ABC):
    """Interface for geolocation lookups.

    Methods:
        locate() -> GeoLocation:
            Look up the location of the current client.
            Raises GeolocationError on any failure.
    """

    @abstractmethod
    def locate(self) -> GeoLocation:
        pass


class IpApiGeolocator(BaseGeolocator):
    """Geolocation lookup against an ipapi.co-compatible JSON endpoint.

    The endpoint is expected to answer a GET with a JSON object carrying
    'city' and 'country_name' fields.

    Attributes:
        url (str):
            Endpoint URL. Defaults to 'https://ipapi.co/json/'.
        timeout (float):
            Socket timeout in seconds. A timeout counts as a failed lookup.
    """

    @beartype
    def __init__(self, url: str = DEFAULT_GEOLOCATION_URL, timeout: int | float = DEFAULT_GEOLOCATION_TIMEOUT):
        if timeout <= 0:
            raise ValueError(f'Timeout must be a positive number of seconds (given value: {timeout}).')

        self.url = url
        self.timeout = timeout

    def locate(self) -> GeoLocation:
        """Look up the location of the current client

        Returns:
            GeoLocation: city and country (either may be None if the service omits it).

        Raises:
            GeolocationError:
                On network errors, timeouts, or malformed responses.
        """
        request = urllib.request.Request(self.url, headers={'Accept': 'application/json'})
        try:
            with urllib.request.urlopen(request, timeout=self.timeout) as r:  # noqa: S310
                data = json.load(r)
        except (OSError, http.client.HTTPException) as e:  # URLError and socket timeouts included
            raise GeolocationError(f'Geolocation lookup against {self.url} failed.') from e
        except ValueError as e:
            raise GeolocationError(f'Geolocation service at {self.url} returned malformed JSON.') from e

        if not isinstance(data, dict):
            raise GeolocationError(f'Geolocation service at {self.url} returned an unexpected payload.')

        logger.debug('Geolocation lookup succeeded.', extra={'geolocationUrl': self.url})
        return GeoLocation(city=data.get('city'), country=data.get('country_name'))
