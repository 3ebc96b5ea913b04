"""Client configuration with environment variable loading.

A single frozen ClientConfig is built at startup and injected into the
transport gateway. Values come from the environment (and a .env file).
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_BASE = "http://localhost:8000"


class ClientConfig(BaseModel):
    """Configuration for the knowledge-base client.

    Attributes:
        api_base: Backend base address, without trailing slash.
        timeout_s: Overall per-request timeout in seconds.
        connect_timeout_s: Connection establishment timeout in seconds.
        ui_host: Interface the NiceGUI server binds to.
        ui_port: Port the NiceGUI server listens on.
        ui_title: Browser window title.
    """

    model_config = ConfigDict(frozen=True)

    api_base: str = Field(
        default_factory=lambda: os.getenv("KB_API_BASE", DEFAULT_API_BASE),
        description="Knowledge-base backend base URL",
    )
    timeout_s: float = Field(
        default_factory=lambda: float(os.getenv("KB_API_TIMEOUT", "120")),
        gt=0.0,
        le=600.0,
        description="Per-request timeout; agent answers can take a while",
    )
    connect_timeout_s: float = Field(
        default=5.0,
        gt=0.0,
        le=60.0,
        description="Timeout for establishing a connection",
    )
    ui_host: str = Field(
        default_factory=lambda: os.getenv("KB_UI_HOST", "0.0.0.0"),
        description="Host for the NiceGUI server",
    )
    ui_port: int = Field(
        default_factory=lambda: int(os.getenv("KB_UI_PORT", "8080")),
        ge=1,
        le=65535,
        description="Port for the NiceGUI server",
    )
    ui_title: str = Field(default="Knowledge Assistant", description="Window title")

    @field_validator("api_base")
    @classmethod
    def validate_api_base(cls, v: str) -> str:
        """Require an http(s) address and drop the trailing slash."""
        v = v.strip().rstrip("/")
        if not v.startswith(("http://", "https://")):
            raise ValueError(
                "API base must start with http:// or https://. Set KB_API_BASE in .env"
            )
        return v


def get_client_config() -> ClientConfig:
    """Create client configuration from environment.

    Returns:
        Configured ClientConfig instance.

    Raises:
        ValueError: If an environment value is out of range or malformed.
    """
    return ClientConfig()
