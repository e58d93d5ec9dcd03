"""Star rating demo window and off-screen renderer.

Shows a ``StarRatingView`` next to a spin box that drives its rating, or,
with ``--render``, lays the view out off-screen and saves it as a PNG (the
same path a design tool takes to preview the control).

Examples::

    python -m star_rating_view.app --stars 5 --rating 3.5
    python -m star_rating_view.app --rating 2.25 --highlight gold --render stars.png
    python -m star_rating_view.app --padding 4 --save-style compact
    python -m star_rating_view.app --style compact --rating 4
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv
from PySide6.QtWidgets import QApplication, QDoubleSpinBox, QHBoxLayout, QLabel, QWidget

from . import imaging, store
from .logging_config import configure_logging, get_logger
from .rating_model import StarCount
from .ui import StarRatingView


logger = get_logger(__name__)


def _color(value: str) -> str:
    try:
        return imaging.to_qcolor(value).name()
    except ValueError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _non_negative(value: str) -> float:
    number = float(value)
    if number < 0:
        raise argparse.ArgumentTypeError("must be >= 0")
    return number


def _checked_style(saved: dict) -> dict:
    """Run saved style values through the same checks as the command line."""
    style = dict(saved)
    if "star_count" in style:
        count = int(style["star_count"])
        if count not in [int(c) for c in StarCount]:
            raise ValueError(f"star_count must be 3, 4 or 5, not {count}")
        style["star_count"] = count
    for key in ("highlight_color", "normal_color"):
        if key in style:
            style[key] = _color(style[key])
    if "horizontal_padding" in style:
        style["horizontal_padding"] = _non_negative(style["horizontal_padding"])
    if "icon_path" in style and not isinstance(style["icon_path"], str):
        raise TypeError("icon_path must be a string")
    return style


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="star-rating",
        description="Show or render a star rating row.",
    )
    parser.add_argument("--stars", type=int, choices=[int(c) for c in StarCount], help="number of stars")
    parser.add_argument("--rating", type=float, default=0.0, help="rating to display (default: 0)")
    parser.add_argument("--highlight", type=_color, help="color of filled stars")
    parser.add_argument("--normal", type=_color, help="color of unfilled stars")
    parser.add_argument("--padding", type=_non_negative, help="gap between stars")
    parser.add_argument("--icon", type=Path, help="star icon (SVG or raster image)")
    parser.add_argument("--icon-size", type=int, help="icon edge length in pixels")
    parser.add_argument("--scale", type=float, default=1.0, help="device pixel ratio of the icons")
    parser.add_argument("--style", help="load a saved style")
    parser.add_argument("--save-style", metavar="NAME", help="save the resulting style under NAME")
    parser.add_argument("--render", type=Path, metavar="PATH", help="render to a PNG and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def resolve_style(args: argparse.Namespace, parser: argparse.ArgumentParser) -> dict:
    """Merge a saved style (if any) with the command line values."""
    style = {}
    if args.style:
        saved = store.get_style(args.style)
        if saved is None:
            parser.error(f"unknown style: {args.style}")
        try:
            style.update(_checked_style(saved))
        except (argparse.ArgumentTypeError, TypeError, ValueError) as exc:
            logger.warning("Style %r is invalid: %s", args.style, exc)
            parser.error(f"invalid style {args.style}: {exc}")

    explicit = {
        "star_count": args.stars,
        "highlight_color": args.highlight,
        "normal_color": args.normal,
        "horizontal_padding": args.padding,
        "icon_path": str(args.icon) if args.icon else None,
    }
    style.update({key: value for key, value in explicit.items() if value is not None})
    return style


def view_options(style: dict, args: argparse.Namespace, parser: argparse.ArgumentParser) -> dict:
    """Translate a style record into ``StarRatingView`` options."""
    options = {key: style[key] for key in ("star_count", "highlight_color", "normal_color", "horizontal_padding") if key in style}

    icon_path = style.get("icon_path")
    if icon_path:
        image = imaging.load_icon(icon_path, size=args.icon_size, scale=args.scale)
        if image is None:
            parser.error(f"cannot load icon: {icon_path}")
        options["star_image"] = image
    elif args.icon_size or args.scale != 1.0:
        options["star_image"] = imaging.default_star_icon(
            args.icon_size or imaging.DEFAULT_ICON_SIZE, args.scale
        )

    options["rating"] = args.rating
    return options


def render(view: StarRatingView, path: Path) -> bool:
    view.prepareForPreview()
    view.resize(view.sizeHint())
    view.updateConstraints()
    pixmap = view.grab()
    if not pixmap.save(str(path), "PNG"):
        logger.error("Could not write %s", path)
        return False
    logger.info("Rendered %d stars at rating %g to %s", view.starCount(), view.rating(), path)
    return True


def build_window(view: StarRatingView) -> QWidget:
    window = QWidget()
    window.setWindowTitle("Star Rating")
    layout = QHBoxLayout(window)
    layout.addWidget(view)

    spin = QDoubleSpinBox()
    spin.setRange(0.0, float(view.starCount()))
    spin.setSingleStep(0.25)
    spin.setValue(view.rating())
    spin.valueChanged.connect(view.setRating)
    layout.addWidget(spin)

    value_label = QLabel(f"{view.rating():g}")
    view.ratingChanged.connect(lambda rating: value_label.setText(f"{rating:g}"))
    layout.addWidget(value_label)
    return window


def main(argv=None) -> int:
    """Entry point: parse arguments, then render or show the demo window."""
    load_dotenv()
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(logging.DEBUG if args.verbose else None)

    app = QApplication.instance() or QApplication(sys.argv[:1])

    style = resolve_style(args, parser)
    view = StarRatingView(**view_options(style, args, parser))

    if args.save_style:
        store.set_style(args.save_style, style)
        logger.info("Saved style %r", args.save_style)

    if args.render:
        return 0 if render(view, args.render) else 1

    window = build_window(view)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
