"""Unit tests for the StarRatingView widget."""

import pytest
from PySide6.QtCore import QCoreApplication, QSize
from PySide6.QtGui import QColor

from star_rating_view import imaging
from star_rating_view.layout import ConstraintState
from star_rating_view.rating_model import RatingOptions
from star_rating_view.ui import StarRatingView


class TestStarRatingView:
    """Tests for StarRatingView configuration."""

    def test_initialization(self, qapp):
        """Test that StarRatingView initializes with five stars."""
        view = StarRatingView()
        assert view.starCount() == 5
        assert view.rating() == 0.0
        assert len(view.starImageViews()) == 5
        assert view.horizontalPadding() == 8.0
        assert view.highlightColor() == QColor("#ff0000")
        assert view.normalColor() == QColor("#aaaaaa")

    def test_convenience_arguments(self, qapp):
        """Test the stars and color keyword arguments."""
        view = StarRatingView(stars=4, highlight_color="blue", normal_color="black")
        assert view.starCount() == 4
        assert view.highlightColor() == QColor("blue")
        assert view.normalColor() == QColor("black")

    def test_options_argument(self, qapp):
        """Test that a RatingOptions object configures the view."""
        view = StarRatingView(options=RatingOptions(star_count=3, rating=1.5))
        assert view.starCount() == 3
        assert view.rating() == 1.5

    @pytest.mark.parametrize("count", [3, 4, 5])
    def test_set_star_count(self, qapp, count):
        """Test that setStarCount replaces the star labels."""
        view = StarRatingView(stars=3 if count != 3 else 5)
        view.setStarCount(count)
        assert view.starCount() == count
        assert len(view.starImageViews()) == count

    def test_invalid_star_count_is_ignored(self, qapp):
        """Test that setStarCount ignores counts outside 3 to 5."""
        view = StarRatingView(stars=4)
        labels = view.starImageViews()
        view.setStarCount(7)
        assert view.starCount() == 4
        assert view.starImageViews() == labels

    def test_old_labels_are_detached(self, qapp):
        """Test that replaced labels are removed from the view."""
        view = StarRatingView()
        old = view.starImageViews()
        view.setStarCount(3)
        assert all(label.parent() is None for label in old)
        assert all(label.parent() is view for label in view.starImageViews())

    def test_rating_changed_signal(self, qapp):
        """Test that ratingChanged fires once per actual change."""
        view = StarRatingView()
        received = []
        view.ratingChanged.connect(received.append)
        view.setRating(2.5)
        view.setRating(2.5)
        assert received == [2.5]

    def test_labels_show_images(self, qapp):
        """Test that every label shows a star pixmap."""
        view = StarRatingView(rating=3.5)
        for label in view.starImageViews():
            assert not label.pixmap().isNull()
            assert label.pixmap().size() == QSize(16, 16)

    def test_missing_icon_leaves_labels_empty(self, qapp):
        """Test that labels are cleared when the icon is removed."""
        view = StarRatingView()
        view.setStarImage(None)
        assert view.starImage() is None
        assert all(label.pixmap().isNull() for label in view.starImageViews())

    def test_configure_returns_needs_relayout(self, qapp):
        """Test configure's relayout result."""
        view = StarRatingView()
        assert view.configure(rating=1) is False
        assert view.configure(horizontal_padding=2, highlight_color="gold") is True
        assert view.horizontalPadding() == 2.0


class TestStarRatingViewLayout:
    """Tests for the widget's layout pass."""

    def test_size_hint(self, qapp):
        """Test the default sizeHint."""
        view = StarRatingView()
        assert view.sizeHint() == QSize(5 * 16 + 4 * 8, 16)
        assert view.minimumSizeHint() == view.sizeHint()

    def test_size_hint_follows_padding(self, qapp):
        """Test that sizeHint follows the padding."""
        view = StarRatingView(stars=3)
        view.setHorizontalPadding(2)
        assert view.sizeHint() == QSize(3 * 16 + 2 * 2, 16)

    def test_size_hint_with_larger_icon(self, qapp):
        """Test that sizeHint follows the icon size."""
        view = StarRatingView(stars=4, star_image=imaging.default_star_icon(24))
        assert view.sizeHint() == QSize(4 * 24 + 3 * 8, 24)

    def test_layout_request_builds_constraints(self, qapp):
        """Test that the posted layout request builds and applies constraints."""
        view = StarRatingView()
        assert view.starConstraints() == ()
        QCoreApplication.processEvents()
        assert len(view.starConstraints()) == 16
        assert view.model().constraint_state is ConstraintState.APPLIED

    def test_update_constraints_is_idempotent(self, qapp):
        """Test that updateConstraints keeps a built constraint set."""
        view = StarRatingView()
        view.updateConstraints()
        constraints = view.starConstraints()
        view.updateConstraints()
        assert view.starConstraints() == constraints
        assert all(a is b for a, b in zip(view.starConstraints(), constraints))

    def test_rating_change_keeps_constraints(self, qapp):
        """Test that setRating does not rebuild constraints."""
        view = StarRatingView()
        view.updateConstraints()
        constraints = view.starConstraints()
        view.setRating(4.25)
        assert all(a is b for a, b in zip(view.starConstraints(), constraints))
        assert view.model().constraint_state is ConstraintState.APPLIED

    def test_star_count_change_rebuilds_constraints(self, qapp):
        """Test that setStarCount drops and rebuilds the constraints."""
        view = StarRatingView()
        view.updateConstraints()
        old = view.starConstraints()
        view.setStarCount(3)
        assert view.starConstraints() == ()
        assert not any(c.active for c in old)
        QCoreApplication.processEvents()
        assert len(view.starConstraints()) == 3 * 3 + 1

    def test_labels_are_placed_left_to_right(self, qapp):
        """Test label geometry at the natural size."""
        view = StarRatingView()
        view.resize(view.sizeHint())
        view.updateConstraints()
        xs = [label.geometry().x() for label in view.starImageViews()]
        assert xs == [0, 24, 48, 72, 96]
        assert all(label.geometry().height() == 16 for label in view.starImageViews())

    def test_wider_container_centers_row(self, qapp):
        """Test that a wider view centers the stars."""
        view = StarRatingView(stars=3, horizontal_padding=4)
        view.resize(76, 30)
        view.updateConstraints()
        xs = [label.geometry().x() for label in view.starImageViews()]
        assert xs == [10, 30, 50]
        assert all(label.geometry().height() == 30 for label in view.starImageViews())

    def test_prepare_for_preview_lays_out_immediately(self, qapp):
        """Test that prepareForPreview lays out without an event loop."""
        view = StarRatingView(rating=2)
        view.prepareForPreview()
        assert len(view.starConstraints()) == 16
        assert view.model().constraint_state is ConstraintState.APPLIED
        assert view.rating() == 2.0
