"""Icon imaging for the star rating view.

Provides the off-screen image operations the control is built from:

- ``tint``: multiply a flat color over an icon's alpha mask
- ``split_image``: composite two icons side by side at a fractional boundary
- ``load_icon`` / ``default_star_icon``: obtain the base star icon

All functions work on ``QImage`` so they run without a window system. Every
``QPainter`` opened here is ended before the function returns.
"""

from __future__ import annotations

import math
from pathlib import Path

import numpy as np
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QColor, QImage, QPainter, QPolygonF
from PySide6.QtSvg import QSvgRenderer

from .logging_config import get_logger


logger = get_logger(__name__)

DEFAULT_ICON_SIZE = 16


def to_qcolor(color) -> QColor:
    """Coerce a color spec into a ``QColor``.

    Accepts a ``QColor``, anything ``QColor`` parses (``"#ff0000"``,
    ``"red"``) or an ``(r, g, b[, a])`` tuple.

    Raises:
        ValueError: If the spec does not name a valid color.
    """
    if isinstance(color, QColor):
        qcolor = QColor(color)
    elif isinstance(color, (tuple, list)):
        qcolor = QColor(*color)
    else:
        qcolor = QColor(color)
    if not qcolor.isValid():
        raise ValueError(f"invalid color: {color!r}")
    return qcolor


def _canvas_like(image: QImage) -> QImage:
    """Transparent canvas with the pixel size and scale of ``image``."""
    canvas = QImage(image.size(), QImage.Format_ARGB32_Premultiplied)
    canvas.setDevicePixelRatio(image.devicePixelRatio())
    canvas.fill(Qt.transparent)
    return canvas


def tint(image: QImage, color) -> QImage:
    """Return a copy of ``image`` with ``color`` multiplied over its opaque pixels.

    Transparent regions stay transparent. The result has the same pixel size
    and device pixel ratio as the source.

    Args:
        image: Source icon. Must not be null.
        color: Tint color, see ``to_qcolor``.

    Returns:
        New premultiplied ARGB ``QImage``.

    Raises:
        ValueError: If ``image`` is missing or null.
    """
    if image is None or image.isNull():
        raise ValueError("cannot tint a null image")

    tinted = _canvas_like(image)
    bounds = QRectF(QPointF(0, 0), image.deviceIndependentSize())

    painter = QPainter(tinted)
    try:
        painter.setCompositionMode(QPainter.CompositionMode_Source)
        painter.drawImage(bounds, image)
        painter.setCompositionMode(QPainter.CompositionMode_Multiply)
        painter.fillRect(bounds, to_qcolor(color))
        # Multiply paints the transparent area too; restore the source alpha mask.
        painter.setCompositionMode(QPainter.CompositionMode_DestinationIn)
        painter.drawImage(bounds, image)
    finally:
        painter.end()
    return tinted


def split_image(left: QImage | None, right: QImage | None, fill: float = 0.5) -> QImage | None:
    """Composite ``left`` and ``right`` at a vertical boundary.

    The left ``fill`` fraction of the width shows ``left``; the remaining
    ``1 - fill`` shows ``right``. ``left`` is drawn over the whole canvas and
    ``right`` is then drawn clipped to the rectangle starting at
    ``width * fill``.

    Returns ``None`` when ``fill`` is outside ``[0, 1]``, either image is
    missing, or the two differ in pixel size. The result uses ``left``'s
    device pixel ratio.
    """
    if not 0.0 <= fill <= 1.0:
        logger.debug("split_image: fill %r outside [0, 1]", fill)
        return None
    if left is None or right is None or left.isNull() or right.isNull():
        logger.debug("split_image: missing image")
        return None
    if left.size() != right.size():
        logger.debug("split_image: size mismatch %s != %s", left.size(), right.size())
        return None

    canvas = _canvas_like(left)
    logical = left.deviceIndependentSize()
    bounds = QRectF(QPointF(0, 0), logical)
    boundary = logical.width() * fill

    painter = QPainter(canvas)
    try:
        painter.drawImage(bounds, left)
        painter.setClipRect(QRectF(boundary, 0, logical.width() - boundary, logical.height()))
        painter.drawImage(bounds, right)
    finally:
        painter.end()
    return canvas


def default_star_icon(size: int = DEFAULT_ICON_SIZE, scale: float = 1.0) -> QImage:
    """Draw the built-in five-pointed star icon.

    The star is solid white on a transparent background so that ``tint``
    yields the tint color exactly.

    Args:
        size: Logical edge length in pixels.
        scale: Device pixel ratio of the returned image.
    """
    pixels = max(1, int(round(size * scale)))
    image = QImage(pixels, pixels, QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)

    cx = cy = pixels / 2
    outer_r = pixels / 2
    inner_r = outer_r * 0.4
    points = []
    for j in range(10):
        angle = math.pi / 2 + j * math.pi / 5
        r = outer_r if j % 2 == 0 else inner_r
        points.append(QPointF(cx + r * math.cos(angle), cy - r * math.sin(angle)))

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.Antialiasing)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QColor(255, 255, 255))
        painter.drawPolygon(QPolygonF(points))
    finally:
        painter.end()

    image.setDevicePixelRatio(scale)
    return image


def load_icon(path, size: int | None = None, scale: float = 1.0) -> QImage | None:
    """Load a base icon from an SVG or raster file.

    Args:
        path: File to read.
        size: Logical edge length to render/scale to. SVGs default to their
            declared size, raster images keep their own size.
        scale: Device pixel ratio of the returned image.

    Returns:
        The icon, or ``None`` if the file is missing or unreadable.
    """
    path = Path(path)
    if not path.exists():
        logger.warning("Icon not found: %s", path)
        return None

    if path.suffix.lower() == ".svg":
        renderer = QSvgRenderer(str(path))
        if not renderer.isValid():
            logger.warning("Invalid SVG icon: %s", path)
            return None
        if size is None:
            default = renderer.defaultSize()
            width, height = default.width(), default.height()
        else:
            width = height = size
        image = QImage(
            max(1, int(round(width * scale))),
            max(1, int(round(height * scale))),
            QImage.Format_ARGB32_Premultiplied,
        )
        image.fill(Qt.transparent)
        painter = QPainter(image)
        try:
            renderer.render(painter)
        finally:
            painter.end()
    else:
        image = QImage(str(path))
        if image.isNull():
            logger.warning("Unreadable icon: %s", path)
            return None
        if size is not None:
            pixels = max(1, int(round(size * scale)))
            image = image.scaled(pixels, pixels, Qt.KeepAspectRatio, Qt.SmoothTransformation)

    image.setDevicePixelRatio(scale)
    return image


def image_to_array(image: QImage) -> np.ndarray:
    """Return the pixels of ``image`` as a ``(height, width, 4)`` RGBA array.

    Values are straight (non-premultiplied) 8-bit channels.
    """
    if image is None or image.isNull():
        return np.zeros((0, 0, 4), dtype=np.uint8)
    converted = image.convertToFormat(QImage.Format_RGBA8888)
    width, height = converted.width(), converted.height()
    buffer = np.frombuffer(converted.constBits(), dtype=np.uint8, count=converted.sizeInBytes())
    rows = buffer.reshape(height, converted.bytesPerLine())
    return rows[:, : width * 4].reshape(height, width, 4).copy()
