"""citadelctl - addon manager for the citadel game client."""

__version__ = "0.1.0"
