import argparse
from dataclasses import dataclass


@dataclass
class TrackframeConfig:
    """Configuration for path synthesis, viewport fitting and the CLI."""

    padding_factor: float = 0.15
    degenerate_span: float = 0.01
    min_span: float = 0.005
    max_span: float = 0.1
    fallback_span: float = 0.01
    midpoint_offset: float = 0.002
    loop_radius: float = 0.001
    log_level: str = "WARNING"
    metrics: bool = False

    def __post_init__(self):
        if self.padding_factor < 0:
            raise ValueError(
                f"Padding factor must not be negative, got {self.padding_factor}"
            )
        for name in ("degenerate_span", "min_span", "max_span", "fallback_span"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.min_span > self.max_span:
            raise ValueError(
                f"min_span ({self.min_span}) exceeds max_span ({self.max_span})"
            )

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "TrackframeConfig":
        """Build a configuration from parsed command-line arguments."""
        return cls(
            padding_factor=args.padding,
            min_span=args.min_span,
            max_span=args.max_span,
            log_level=args.log_level,
            metrics=args.metrics,
        )
