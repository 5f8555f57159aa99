"""Environment configuration for the Aha! MCP server."""
import os

from pydantic import BaseModel, Field

from .errors import ConfigurationError

DEFAULT_TIMEOUT = 30.0


class AhaSettings(BaseModel):
    """Credentials and connection options for one Aha! account."""

    api_token: str = Field(..., min_length=1)
    # Account subdomain: "acme" for https://acme.aha.io
    domain: str = Field(..., min_length=1)
    timeout: float = DEFAULT_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"https://{self.domain}.aha.io"


def load_settings() -> AhaSettings:
    """Read AHA_API_TOKEN, AHA_DOMAIN and optional AHA_TIMEOUT from the environment.

    Raises:
        ConfigurationError: If a required variable is missing or empty
    """
    api_token = os.getenv("AHA_API_TOKEN")
    domain = os.getenv("AHA_DOMAIN")

    if not api_token:
        raise ConfigurationError("AHA_API_TOKEN environment variable is required")
    if not domain:
        raise ConfigurationError("AHA_DOMAIN environment variable is required")

    timeout = os.getenv("AHA_TIMEOUT")
    try:
        timeout_value = float(timeout) if timeout else DEFAULT_TIMEOUT
    except ValueError:
        raise ConfigurationError(f"AHA_TIMEOUT must be a number of seconds, got {timeout!r}") from None

    return AhaSettings(api_token=api_token, domain=domain, timeout=timeout_value)
