# emissions_aggregator/config.py

import os
from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True, slots=True)
class Settings:
    """
    Runtime settings of the emissions batch, read from the environment.

    Attributes:
        webhook_url (str | None): Discord webhook for failure notifications.
        store_dir (Path): Root of the local blob store, used without R2 settings.
        r2_endpoint (str | None): R2 (S3-compatible) endpoint URL.
        r2_bucket (str | None): R2 bucket name.
        r2_access_key_id (str | None): R2 access key id.
        r2_secret_access_key (str | None): R2 secret access key.
        reference_tables_path (Path): JSON file with the protocol registries.
        adapter_concurrency (int): Adapters processed at once.
        item_timeout_seconds (float): Time limit per protocol definition.
        batch_timeout_seconds (float): Time limit for the whole batch.
    """

    webhook_url: str | None = None
    store_dir: Path = Path("data/store")
    r2_endpoint: str | None = None
    r2_bucket: str | None = None
    r2_access_key_id: str | None = None
    r2_secret_access_key: str | None = None
    reference_tables_path: Path = Path("data/reference_tables.json")
    adapter_concurrency: int = 2
    item_timeout_seconds: float = 180.0
    batch_timeout_seconds: float = 840.0

    @property
    def uses_r2(self) -> bool:
        return bool(self.r2_endpoint and self.r2_bucket)


def load_settings() -> Settings:
    """
    Build Settings from environment variables, falling back to defaults.

    Environment variables:
        UNLOCKS_WEBHOOK, STORE_DIR, R2_ENDPOINT, R2_BUCKET_NAME, R2_ACCESS_KEY_ID,
        R2_SECRET_ACCESS_KEY, REFERENCE_TABLES_PATH, ADAPTER_CONCURRENCY,
        ITEM_TIMEOUT_SECONDS, BATCH_TIMEOUT_SECONDS.

    Args:
        None

    Returns:
        Settings: The resolved settings.

    Raises:
        ValueError: If a numeric setting is not positive, or a count is not an
            integer.
    """
    defaults = Settings()

    return Settings(
        webhook_url=os.getenv("UNLOCKS_WEBHOOK") or None,
        store_dir=Path(os.getenv("STORE_DIR", str(defaults.store_dir))),
        r2_endpoint=os.getenv("R2_ENDPOINT") or None,
        r2_bucket=os.getenv("R2_BUCKET_NAME") or None,
        r2_access_key_id=os.getenv("R2_ACCESS_KEY_ID") or None,
        r2_secret_access_key=os.getenv("R2_SECRET_ACCESS_KEY") or None,
        reference_tables_path=Path(
            os.getenv("REFERENCE_TABLES_PATH", str(defaults.reference_tables_path)),
        ),
        adapter_concurrency=_positive_int(
            "ADAPTER_CONCURRENCY",
            defaults.adapter_concurrency,
        ),
        item_timeout_seconds=_positive_number(
            "ITEM_TIMEOUT_SECONDS",
            defaults.item_timeout_seconds,
        ),
        batch_timeout_seconds=_positive_number(
            "BATCH_TIMEOUT_SECONDS",
            defaults.batch_timeout_seconds,
        ),
    )


def _positive_number(name: str, default: float) -> float:
    """
    Read a positive number from an environment variable.

    Args:
        name (str): Environment variable name.
        default (float): Value used when the variable is unset or empty.

    Returns:
        float: The parsed value.

    Raises:
        ValueError: If the value is not a number or not greater than zero.
    """
    raw = os.getenv(name)
    if not raw:
        return default

    try:
        value = float(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be a number") from err

    if value <= 0:
        raise ValueError(f"{name} must be > 0")
    return value


def _positive_int(name: str, default: int) -> int:
    """
    Read a whole number of at least one from an environment variable.

    Args:
        name (str): Environment variable name.
        default (int): Value used when the variable is unset or empty.

    Returns:
        int: The parsed value.

    Raises:
        ValueError: If the value is not an integer or is below one.
    """
    raw = os.getenv(name)
    if not raw:
        return default

    try:
        value = int(raw)
    except ValueError as err:
        raise ValueError(f"{name} must be an integer") from err

    if value < 1:
        raise ValueError(f"{name} must be >= 1")
    return value
