"""Image access for image cells."""

from .image_probe import ImageInfo, probe_image, scaled_image_size

__all__ = ["ImageInfo", "probe_image", "scaled_image_size"]
