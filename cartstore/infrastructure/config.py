"""Application configuration.

Loads settings from environment variables (prefix ``CARTSTORE_``)
with sensible defaults.
"""

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Cartstore settings loaded from environment variables."""

    # Remote cart source
    cart_api_url: str = Field(
        default="https://course-api.com/react-useReducer-cart-project",
        description="URL returning the initial cart items as JSON",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout in seconds for the cart items request",
    )

    # Consumer bindings
    auto_totals: bool = Field(
        default=True,
        description="Recalculate totals whenever the items change",
    )
    reset_quantities_after_load: bool = Field(
        default=False,
        description="Zero every quantity once the initial load completes",
    )

    # Logging
    log_level: str = Field(default="INFO", description="Logging level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    model_config = {
        "env_prefix": "CARTSTORE_",
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


def get_settings() -> Settings:
    """Load settings from the environment.

    Returns:
        Fresh Settings instance.
    """
    return Settings()
