"""UI widgets for the star rating view."""

from .star_rating_view import StarRatingView

__all__ = ["StarRatingView"]
