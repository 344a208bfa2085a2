import math
from dataclasses import dataclass
from typing import Optional, Tuple

DEFAULT_WIDTH = 400
DEFAULT_HEIGHT = 400
DEFAULT_BACKGROUND = (0, 0, 0)

# Heading runs over a full turn, pitch over a half turn (degrees).
HEADING_RANGE = (0.0, 360.0)
PITCH_RANGE = (-90.0, 90.0)

MAX_SUBDIVISIONS = 6


@dataclass
class ViewerConfig:
    """Settings for the interactive viewer and the headless snapshot mode."""
    width: int = DEFAULT_WIDTH
    height: int = DEFAULT_HEIGHT
    background: Tuple[int, int, int] = DEFAULT_BACKGROUND
    heading: float = 180.0       # degrees
    pitch: float = 0.0           # degrees
    subdivisions: int = 0
    drag_sensitivity: float = 0.5  # degrees per pixel of mouse motion
    fps: int = 60
    snapshot: Optional[str] = None

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"canvas size must be positive, got {self.width}x{self.height}")
        if not 0 <= self.subdivisions <= MAX_SUBDIVISIONS:
            raise ValueError(f"subdivisions must be in 0..{MAX_SUBDIVISIONS}, got {self.subdivisions}")
        if not PITCH_RANGE[0] <= self.pitch <= PITCH_RANGE[1]:
            raise ValueError(f"pitch must be in {PITCH_RANGE}, got {self.pitch}")
        if self.fps <= 0:
            raise ValueError(f"fps must be positive, got {self.fps}")
        if not math.isfinite(self.heading):
            raise ValueError(f"heading must be finite, got {self.heading}")
        self.heading = wrap_heading(self.heading)

    @classmethod
    def from_args(cls, args) -> 'ViewerConfig':
        """Build a config from an argparse namespace (see viewer.parse_args)."""
        return cls(
            width=args.width,
            height=args.height,
            heading=args.heading,
            pitch=args.pitch,
            subdivisions=args.subdivisions,
            fps=args.fps,
            snapshot=args.snapshot,
        )


def wrap_heading(deg: float) -> float:
    return deg % HEADING_RANGE[1]


def clamp_pitch(deg: float) -> float:
    return max(PITCH_RANGE[0], min(PITCH_RANGE[1], deg))
