"""Image, slideshow and proof-of-play catalog service."""

__version__ = "0.1.0"
