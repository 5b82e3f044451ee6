from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class QuakeGeoConfig:
    """Configuration for the quakegeo CLI."""

    log_level: str = "WARNING"
    depth_range: Optional[Tuple[float, float]] = None
    precision: int = 5
