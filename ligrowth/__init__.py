"""ligrowth: a LinkedIn REST proxy for the LinkedIn Growth web client."""

from __future__ import annotations

__version__ = "0.1.0"

__all__ = ["__version__"]
