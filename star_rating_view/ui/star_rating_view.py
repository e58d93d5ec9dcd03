"""Star rating display widget.

``StarRatingView`` is a thin Qt adapter around ``RatingModel``: it keeps one
``QLabel`` per slot, shows the image the model selected for it, and places
the labels at the frames the model's constraints resolve to.
"""

from __future__ import annotations

import math

from PySide6.QtCore import QCoreApplication, QEvent, QRect, QSize, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPixmap
from PySide6.QtWidgets import QLabel, QWidget

from ..layout import ConstraintState, Size
from ..logging_config import get_logger
from ..rating_model import RatingModel, RatingOptions


logger = get_logger(__name__)


class StarRatingView(QWidget):
    """Row of tinted star icons showing a (possibly fractional) rating.

    Stars left of the rating are drawn in the highlight color, the star the
    rating falls inside is split between highlight and normal color, and the
    rest are drawn in the normal color.

    Signals:
        ratingChanged(float): Emitted when the rating value changes.

    Args:
        parent: Parent widget (optional).
        options: Starting ``RatingOptions`` (optional).
        stars: Star count, 3 to 5 (optional).
        highlight_color: Color of filled stars (optional).
        normal_color: Color of unfilled stars (optional).
        **overrides: Any other ``RatingOptions`` field.
    """

    ratingChanged = Signal(float)

    def __init__(
        self,
        parent=None,
        *,
        options: RatingOptions | None = None,
        stars: int | None = None,
        highlight_color=None,
        normal_color=None,
        **overrides,
    ):
        super().__init__(parent)
        self._labels: list[QLabel] = []
        self._layout_pending = False

        if stars is not None:
            overrides["star_count"] = stars
        if highlight_color is not None:
            overrides["highlight_color"] = highlight_color
        if normal_color is not None:
            overrides["normal_color"] = normal_color

        self._model = RatingModel(options, **overrides)
        self._model.on_layout_request = self._slots_regenerated
        self._slots_regenerated()

    # ------------------------------------------------------------------
    # Configuration surface

    def configure(self, **options) -> bool:
        """Apply several option changes at once.

        Returns:
            True if the slots were regenerated and a layout pass was requested.
        """
        old_rating = self._model.rating
        needs_relayout = self._model.configure(**options)
        if not needs_relayout:
            self._refresh_images()
        if self._model.rating != old_rating:
            self.ratingChanged.emit(self._model.rating)
        return needs_relayout

    def rating(self) -> float:
        return self._model.rating

    def setRating(self, rating: float):
        self.configure(rating=rating)

    def starCount(self) -> int:
        return int(self._model.star_count)

    def setStarCount(self, count: int):
        """Set the number of stars. Values other than 3, 4 or 5 are ignored."""
        self.configure(star_count=count)

    def highlightColor(self) -> QColor:
        return QColor(self._model.options.highlight_color)

    def setHighlightColor(self, color):
        self.configure(highlight_color=color)

    def normalColor(self) -> QColor:
        return QColor(self._model.options.normal_color)

    def setNormalColor(self, color):
        self.configure(normal_color=color)

    def horizontalPadding(self) -> float:
        return self._model.options.horizontal_padding

    def setHorizontalPadding(self, padding: float):
        self.configure(horizontal_padding=padding)

    def starImage(self) -> QImage | None:
        return self._model.options.star_image

    def setStarImage(self, image):
        self.configure(star_image=image)

    # ------------------------------------------------------------------
    # Introspection

    def model(self) -> RatingModel:
        return self._model

    def starImageViews(self) -> tuple:
        return tuple(self._labels)

    def starConstraints(self) -> tuple:
        return tuple(c for c in self._model.constraints if c.active)

    # ------------------------------------------------------------------
    # Host callbacks

    def prepareForPreview(self):
        """Regenerate and lay out immediately, e.g. before rendering a preview."""
        self._model.prepare_for_preview()
        self.updateConstraints()

    def updateConstraints(self):
        """Build the constraint set if it is dirty and apply it to the labels."""
        if self._model.build_constraints():
            logger.debug("Layout pass: %d constraints", len(self._model.constraints))
        self._apply_frames()

    def sizeHint(self) -> QSize:
        natural = self._model.natural_size()
        return QSize(math.ceil(natural.width), math.ceil(natural.height))

    def minimumSizeHint(self) -> QSize:
        return self.sizeHint()

    def event(self, event):
        if event.type() == QEvent.LayoutRequest and self._layout_pending:
            self._layout_pending = False
            self.updateConstraints()
        return super().event(event)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self._apply_frames()

    def showEvent(self, event):
        super().showEvent(event)
        self.updateConstraints()

    # ------------------------------------------------------------------
    # Internals

    def _slots_regenerated(self):
        """Replace the slot labels after the model rebuilt its slots."""
        for label in self._labels:
            label.hide()
            label.setParent(None)
            label.deleteLater()

        self._labels = []
        for _ in self._model.slots:
            label = QLabel(self)
            label.setAlignment(Qt.AlignCenter)
            label.show()
            self._labels.append(label)

        self._refresh_images()
        self.updateGeometry()
        self._request_layout_pass()

    def _request_layout_pass(self):
        if self._layout_pending:
            return
        self._layout_pending = True
        QCoreApplication.postEvent(self, QEvent(QEvent.LayoutRequest))

    def _refresh_images(self):
        for label, slot in zip(self._labels, self._model.slots):
            if slot.image is None:
                label.clear()
            else:
                label.setPixmap(QPixmap.fromImage(slot.image))

    def _apply_frames(self):
        if self._model.constraint_state is ConstraintState.DIRTY:
            return
        frames = self._model.frames(Size(self.width(), self.height()))
        for label, frame in zip(self._labels, frames):
            label.setGeometry(
                QRect(round(frame.x), round(frame.y), round(frame.width), round(frame.height))
            )
        self._model.mark_applied()
