"""Data Transfer Objects."""
from trafficlens.application.dto.report_dto import (
    CountryDTO,
    DeviceDTO,
    PopularPageDTO,
    format_avg_time,
)
from trafficlens.application.dto.tracking_dto import (
    TrackPageViewRequestDTO,
    TrackPageViewResult,
)

__all__ = [
    "CountryDTO",
    "DeviceDTO",
    "PopularPageDTO",
    "format_avg_time",
    "TrackPageViewRequestDTO",
    "TrackPageViewResult",
]
