"""Application DTOs."""

from marketguard.application.dtos.screening_dtos import (
    OrderScreeningResult,
    ScreeningRejection,
)

__all__ = ["OrderScreeningResult", "ScreeningRejection"]
