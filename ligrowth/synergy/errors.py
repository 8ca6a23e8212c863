"""Partner relationship errors."""

from __future__ import annotations


class PartnerIdRequiredError(ValueError):
    """Raised when a partner operation is missing the partner id."""

    def __init__(self) -> None:
        """Initialise with the fixed validation message."""
        super().__init__("Partner ID is required")
