"""Rating computation for a row of star slots.

``RatingModel`` holds everything about the control that does not need a live
widget: the options, the slot sequence with the image each slot shows, and
the cached layout constraints. Widgets wrap a model and apply what it
computes (see ``star_rating_view.ui.StarRatingView``).

Changing options goes through ``configure``, which returns whether the host
has layout work to do instead of triggering it implicitly.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from enum import Enum, IntEnum
from typing import Callable, Optional

from PySide6.QtGui import QColor, QImage, QPixmap

from . import imaging, layout
from .layout import Constraint, ConstraintState, Rect, Size
from .logging_config import get_logger


logger = get_logger(__name__)

DEFAULT_HIGHLIGHT_COLOR = "#ff0000"
DEFAULT_NORMAL_COLOR = "#aaaaaa"
DEFAULT_HORIZONTAL_PADDING = 8.0


class StarCount(IntEnum):
    THREE = 3
    FOUR = 4
    FIVE = 5


class Phase(Enum):
    UNINITIALIZED = "uninitialized"
    SLOTS_BUILT = "slots_built"
    LAID_OUT = "laid_out"


@dataclass
class RatingOptions:
    """Configuration of a star rating row.

    Attributes:
        star_image: Base icon, tinted per slot. ``None`` means no icon; the
            slots then show nothing.
        star_count: Number of slots, one of ``StarCount``.
        rating: Current rating, conventionally ``0..star_count``.
        highlight_color: Tint of the filled part of a star.
        normal_color: Tint of the unfilled part of a star.
        horizontal_padding: Gap between adjacent slots.
    """

    star_image: Optional[QImage] = field(default_factory=imaging.default_star_icon)
    star_count: StarCount = StarCount.FIVE
    rating: float = 0.0
    highlight_color: QColor = field(default_factory=lambda: QColor(DEFAULT_HIGHLIGHT_COLOR))
    normal_color: QColor = field(default_factory=lambda: QColor(DEFAULT_NORMAL_COLOR))
    horizontal_padding: float = DEFAULT_HORIZONTAL_PADDING


OPTION_NAMES = tuple(f.name for f in fields(RatingOptions))

# Options whose change invalidates the slot images and the layout
_REGENERATING = frozenset(OPTION_NAMES) - {"rating"}


@dataclass
class Slot:
    """One star position. ``fill`` is the highlighted fraction shown."""

    index: int
    image: Optional[QImage] = None
    fill: float = 0.0


def _same(old, new) -> bool:
    if old is None or new is None:
        return old is new
    if isinstance(old, QImage):
        # QImage equality ignores the device pixel ratio
        return old.devicePixelRatio() == new.devicePixelRatio() and old == new
    return old == new


def _image_size(image: Optional[QImage]) -> Size:
    if image is None or image.isNull():
        return layout.ZERO_SIZE
    logical = image.deviceIndependentSize()
    return Size(logical.width(), logical.height())


class RatingModel:
    """Slots, images and layout constraints for a star rating row.

    Args:
        options: Starting options; invalid values fall back to the defaults.
        on_layout_request: Called whenever the slot sequence is regenerated
            and the host should run a layout pass.
        **overrides: Option values applied on top of ``options``.
    """

    def __init__(
        self,
        options: Optional[RatingOptions] = None,
        *,
        on_layout_request: Optional[Callable[[], None]] = None,
        **overrides,
    ):
        self._options = RatingOptions()
        self.on_layout_request = on_layout_request
        self._slots: list[Slot] = []
        self._constraints: list[Constraint] = []
        self._constraint_state = ConstraintState.DIRTY
        self._tinted: Optional[tuple] = None
        self._generated = False

        initial = {} if options is None else {name: getattr(options, name) for name in OPTION_NAMES}
        initial.update(overrides)
        for name, value in self._validated(initial).items():
            setattr(self._options, name, value)
        self.regenerate()

    # ------------------------------------------------------------------
    # Introspection

    @property
    def options(self) -> RatingOptions:
        return replace(self._options)

    @property
    def rating(self) -> float:
        return self._options.rating

    @property
    def star_count(self) -> StarCount:
        return self._options.star_count

    @property
    def slots(self) -> tuple:
        return tuple(self._slots)

    @property
    def constraints(self) -> tuple:
        return tuple(self._constraints)

    @property
    def constraint_state(self) -> ConstraintState:
        return self._constraint_state

    @property
    def phase(self) -> Phase:
        if not self._generated:
            return Phase.UNINITIALIZED
        if self._constraint_state is ConstraintState.APPLIED:
            return Phase.LAID_OUT
        return Phase.SLOTS_BUILT

    # ------------------------------------------------------------------
    # Configuration

    def _validated(self, changes: dict) -> dict:
        """Normalize ``changes``, dropping values the control ignores.

        Raises:
            TypeError: For an unknown option name or an icon that is not an image.
            ValueError: For an unparseable color.
        """
        accepted = {}
        for name, value in changes.items():
            if name not in OPTION_NAMES:
                raise TypeError(f"unknown rating option: {name!r}")
            if name == "star_count":
                try:
                    value = StarCount(value)
                except ValueError:
                    logger.debug("Ignoring star count %r; keeping %d", value, self._options.star_count)
                    continue
            elif name == "rating":
                value = float(value)
            elif name in ("highlight_color", "normal_color"):
                value = imaging.to_qcolor(value)
            elif name == "horizontal_padding":
                value = float(value)
                if value < 0:
                    logger.warning("Ignoring negative horizontal padding %r", value)
                    continue
            elif name == "star_image" and value is not None:
                if isinstance(value, QPixmap):
                    value = value.toImage()
                elif not isinstance(value, QImage):
                    raise TypeError(
                        f"star_image must be a QImage or QPixmap, not {type(value).__name__}"
                    )
                if value.isNull():
                    value = None
            accepted[name] = value
        return accepted

    def configure(self, **changes) -> bool:
        """Apply option changes.

        Changing the icon, star count, either color or the padding
        regenerates every slot and invalidates the layout. Changing only the
        rating re-selects the slot images. Values equal to the current ones
        and ignored values (invalid star count, negative padding) change
        nothing.

        Returns:
            True when the host must run a layout pass.
        """
        regenerate = False
        rating_changed = False
        for name, value in self._validated(changes).items():
            if _same(getattr(self._options, name), value):
                continue
            setattr(self._options, name, value)
            if name in _REGENERATING:
                regenerate = True
            else:
                rating_changed = True

        if regenerate:
            self.regenerate()
            return True
        if rating_changed:
            self.apply_rating()
        return False

    def set_rating(self, rating: float) -> None:
        self.configure(rating=rating)

    def prepare_for_preview(self) -> None:
        """Regenerate and re-lay out without a rating change (design-time preview)."""
        self.regenerate()

    def request_layout(self) -> None:
        if self.on_layout_request is not None:
            self.on_layout_request()

    # ------------------------------------------------------------------
    # Slots and images

    def tinted_icons(self) -> tuple:
        """Return ``(highlight, normal)`` tinted icons, ``(None, None)`` without an icon."""
        if self._tinted is None:
            base = self._options.star_image
            if base is None:
                self._tinted = (None, None)
            else:
                self._tinted = (
                    imaging.tint(base, self._options.highlight_color),
                    imaging.tint(base, self._options.normal_color),
                )
        return self._tinted

    def regenerate(self) -> None:
        """Discard all slots and build ``star_count`` fresh ones."""
        self.invalidate_constraints()
        self._tinted = None
        _, normal = self.tinted_icons()
        self._slots = [Slot(index, normal, 0.0) for index in range(int(self._options.star_count))]
        self._generated = True
        self.apply_rating()
        logger.debug(
            "Regenerated %d slots (padding=%g)",
            len(self._slots),
            self._options.horizontal_padding,
        )
        self.request_layout()

    def apply_rating(self) -> None:
        """Select the image each slot shows for the current rating.

        Slot ``i`` (1-based) is fully highlighted when ``i <= |rating|``,
        split when ``0 < i - rating < 1`` and normal otherwise.
        """
        highlight, normal = self.tinted_icons()
        rating = self._options.rating
        for slot in self._slots:
            position = slot.index + 1
            if position <= abs(rating):
                slot.image, slot.fill = highlight, 1.0
            elif 0 < position - rating < 1:
                fill = 1 - (position - rating)
                slot.image, slot.fill = imaging.split_image(highlight, normal, fill), fill
            else:
                slot.image, slot.fill = normal, 0.0

    # ------------------------------------------------------------------
    # Layout

    def invalidate_constraints(self) -> None:
        """Deactivate the cached constraints as a batch and mark the cache dirty."""
        if self._constraints:
            layout.deactivate(self._constraints)
        self._constraints = []
        self._constraint_state = ConstraintState.DIRTY

    def build_constraints(self) -> bool:
        """Build the row constraints if the cache is dirty.

        Returns:
            True if a new set was built, False if the cache was already built.
        """
        if self._constraint_state is not ConstraintState.DIRTY:
            return False
        self._constraints = layout.build_row_constraints(
            len(self._slots), self._options.horizontal_padding
        )
        self._constraint_state = ConstraintState.BUILT
        logger.debug("Built %d constraints for %d slots", len(self._constraints), len(self._slots))
        return True

    def mark_applied(self) -> None:
        if self._constraint_state is ConstraintState.BUILT:
            self._constraint_state = ConstraintState.APPLIED

    def slot_size(self) -> Size:
        if not self._slots:
            return layout.ZERO_SIZE
        return _image_size(self._slots[0].image)

    def natural_size(self) -> Size:
        return layout.natural_size(
            self.slot_size(), len(self._slots), self._options.horizontal_padding
        )

    def frames(self, container: Size) -> list[Rect]:
        """Frames of every slot inside a container of the given size."""
        return layout.resolve_frames(
            self._constraints,
            [_image_size(slot.image) for slot in self._slots],
            container,
        )
