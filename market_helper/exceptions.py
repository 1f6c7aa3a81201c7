"""
Exceptions raised by Market Helper.
"""


class MarketHelperError(Exception):
    """Base class for all Market Helper errors."""


class ExtractionError(MarketHelperError):
    """The listing page could not be traversed at all."""


class StabilityTimeout(MarketHelperError):
    """The listing never settled within the configured number of ticks."""

    def __init__(self, ticks: int, last_count: int, loader_visible: bool):
        self.ticks = ticks
        self.last_count = last_count
        self.loader_visible = loader_visible
        super().__init__(
            f"Page did not stabilize after {ticks} ticks "
            f"(items={last_count}, loader_visible={loader_visible})"
        )
