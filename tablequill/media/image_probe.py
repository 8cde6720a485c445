"""
Image probing for image cells.

Reads the pixel size and the stored resolution of an image with Pillow and
converts it to document units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from PIL import Image, UnidentifiedImageError

from ..exceptions import ImageNotFoundError, UnsupportedImageError

logger = logging.getLogger(__name__)

SUPPORTED_FORMATS = frozenset({"JPEG", "PNG"})

# Resolution unit codes (JFIF): 1 = dots per inch, 2 = dots per centimetre
UNIT_INCH = 1
UNIT_CM = 2


@dataclass(frozen=True, slots=True)
class ImageInfo:
    width: int
    height: int
    unit: int = 0
    density: float = 0.0
    format: str = ""


def probe_image(path: Union[str, Path]) -> ImageInfo:
    """

    Return size and resolution of the image at ``path``.

    Raises:
        ImageNotFoundError: the file is missing or cannot be read
        UnsupportedImageError: the type cannot be determined or is not JPEG/PNG

    """
    image_path = Path(path)
    if not image_path.is_file():
        raise ImageNotFoundError("Image does not exist", str(path))

    try:
        with Image.open(image_path) as img:
            image_format = img.format or ""
            width, height = img.size
            info = dict(img.info)
    except UnidentifiedImageError as exc:
        raise UnsupportedImageError("Cannot resolve image type", str(path)) from exc
    except OSError as exc:
        raise ImageNotFoundError("Cannot read image", f"{path}: {exc}") from exc

    if image_format not in SUPPORTED_FORMATS:
        raise UnsupportedImageError("Unsupported image type", f"{path} ({image_format or 'unknown'})")

    unit, density = _resolution(image_format, info)
    logger.debug("Image %s: %sx%s px, unit=%s density=%s", path, width, height, unit, density)
    return ImageInfo(width=width, height=height, unit=unit, density=density, format=image_format)


def _resolution(image_format: str, info: dict) -> Tuple[int, float]:
    if image_format == "JPEG":
        unit = int(info.get("jfif_unit", 0) or 0)
        density = info.get("jfif_density") or (0, 0)
        return unit, float(density[0])
    dpi = info.get("dpi")
    if dpi:
        return UNIT_INCH, float(dpi[0])
    return 0, 0.0


def scaled_image_size(
    info: ImageInfo,
    width: Optional[float] = None,
    height: Optional[float] = None,
) -> Tuple[int, int]:
    """

    Image size in output units.

    Explicit ``width``/``height`` replace the pixel size before the resolution
    scale is applied; results are truncated to whole units.

    """
    w = info.width if width is None else width
    h = info.height if height is None else height
    if info.density > 0 and info.unit in (UNIT_INCH, UNIT_CM):
        per_unit = 25.4 if info.unit == UNIT_INCH else 10.0
        return int(w * per_unit / info.density), int(h * per_unit / info.density)
    return int(w), int(h)
