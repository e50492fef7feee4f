"""Database models for the image service."""

from imageservice.models.base import Base
from imageservice.models.image import Image
from imageservice.models.proof_of_play import ProofOfPlay
from imageservice.models.slideshow import Slideshow

__all__ = ["Base", "Image", "ProofOfPlay", "Slideshow"]
