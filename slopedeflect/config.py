# slopedeflect/config.py
"""
Engine configuration and defaults.
"""

from dataclasses import dataclass


@dataclass
class EngineConfig:
    """Global engine configuration."""

    # Sampling
    beam_sample_points: int = 100      # equally spaced points per beam span
    frame_udl_sample_points: int = 21  # frame beam under UDL (20 intervals)

    # Solver
    singular_tolerance: float = 1e-10  # |det| or |pivot| below this -> no unique solution

    # Display
    display_precision: int = 2         # decimals for constants and theta coefficients
    settlement_precision: int = 4      # decimals for the bare EI settlement term

    # Checks
    equilibrium_tolerance: float = 1e-3
    distance_tolerance: float = 1e-6   # a + b == L within this

    # Spans supported by the continuous beam model
    min_spans: int = 2
    max_spans: int = 3


# Global config instance
CONFIG = EngineConfig()
