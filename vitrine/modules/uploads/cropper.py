"""
Crop transform.

Rotation has no "rotate around a point, then crop" primitive, so the image is
rendered centred on an oversized square (big enough for any rotation), rotated
about the square's centre, and the whole buffer is then pasted into a canvas
of the crop size at an offset that puts the requested rectangle at the origin.
"""

import io
import math

from PIL import Image, ImageOps, UnidentifiedImageError


def get_safe_area(width, height):
    """Side of a square that bounds the image at any rotation."""
    max_size = max(width, height)
    return int(2 * ((max_size / 2) * math.sqrt(2)))


def render_crop(image, x, y, width, height, rotation=0,
                flip_horizontal=False, flip_vertical=False):
    """
    Crop a PIL image.

    x, y, width, height describe the rectangle in the coordinates of the
    rotated image, as reported by the cropper widget. rotation is clockwise
    degrees. Returns a new RGBA image of size (width, height).
    """
    if not all(math.isfinite(v) for v in (x, y, width, height, rotation)):
        raise ValueError('Crop values must be finite numbers')
    x, y = int(round(x)), int(round(y))
    width, height = int(round(width)), int(round(height))
    if width <= 0 or height <= 0:
        raise ValueError('Crop width and height must be positive')

    # Nothing of the image lies beyond the safe area at any rotation
    safe_area = get_safe_area(image.width, image.height)
    if width > safe_area or height > safe_area:
        raise ValueError('Crop rectangle is larger than the image')
    if abs(x) > safe_area or abs(y) > safe_area:
        raise ValueError('Crop rectangle lies outside the image')

    image = image.convert('RGBA')
    if flip_horizontal:
        image = ImageOps.mirror(image)
    if flip_vertical:
        image = ImageOps.flip(image)

    left = (safe_area - image.width) // 2
    top = (safe_area - image.height) // 2

    canvas = Image.new('RGBA', (safe_area, safe_area), (0, 0, 0, 0))
    canvas.paste(image, (left, top))

    if rotation % 360:
        # PIL rotates counter-clockwise, about the canvas centre by default
        canvas = canvas.rotate(-rotation, resample=Image.Resampling.BICUBIC)

    output = Image.new('RGBA', (width, height), (0, 0, 0, 0))
    output.paste(canvas, (-left - x, -top - y))
    return output


def crop_image(source, x, y, width, height, rotation=0,
               flip_horizontal=False, flip_vertical=False):
    """Crop encoded image bytes and return PNG bytes."""
    try:
        image = Image.open(io.BytesIO(source))
        image.load()
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as e:
        raise ValueError('Source is not a readable image') from e

    cropped = render_crop(
        image, x, y, width, height, rotation=rotation,
        flip_horizontal=flip_horizontal, flip_vertical=flip_vertical,
    )

    buf = io.BytesIO()
    cropped.save(buf, format='PNG')
    return buf.getvalue()
