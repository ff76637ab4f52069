"""trackplan - requirement-driven stream selection for media transcoding."""

__version__ = "0.1.0"
