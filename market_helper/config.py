"""
Configuration and settings management.
"""
import os


class Config:
    """Application configuration."""

    # Stabilization
    POLL_INTERVAL_MS: int = int(os.getenv("MH_POLL_INTERVAL_MS", "700"))
    REQUIRED_STABLE_TICKS: int = int(os.getenv("MH_STABLE_TICKS", "3"))
    # 0 disables the bound and waits as long as the page keeps changing
    MAX_TICKS: int = int(os.getenv("MH_MAX_TICKS", "900"))

    # Page structure
    CONTAINER_SELECTOR: str = ".items"
    ITEM_SELECTOR: str = ".items .item"
    LOADER_SELECTOR: str = '[class*="loader"], [class*="loading"], [class*="spinner"]'

    # Browser
    HEADLESS: bool = os.getenv("HEADLESS", "").strip().lower() in ("1", "true")
    STORAGE_STATE_PATH: str = os.getenv("MH_STORAGE_STATE", "storage_state.json")

    # Output
    OUTPUT_PATH: str = os.getenv("MH_OUTPUT", "market_data.json")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    @property
    def max_ticks_or_none(self):
        return self.MAX_TICKS or None

    def validate(self) -> None:
        """Validate configuration before a run."""
        if self.POLL_INTERVAL_MS < 0:
            raise ValueError(f"Poll interval must not be negative: {self.POLL_INTERVAL_MS}")
        if self.REQUIRED_STABLE_TICKS < 1:
            raise ValueError(f"Required stable ticks must be at least 1: {self.REQUIRED_STABLE_TICKS}")
        if self.MAX_TICKS < 0:
            raise ValueError(f"Max ticks must not be negative: {self.MAX_TICKS}")


# Global config instance
config = Config()
