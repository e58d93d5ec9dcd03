"""Unit tests for the style preset store."""

import json

from star_rating_view import store


class TestConfigDir:
    """Tests for config directory resolution."""

    def test_env_override(self, config_dir):
        """Test that STAR_RATING_CONFIG_DIR sets the config directory."""
        assert store.config_dir() == config_dir
        assert config_dir.is_dir()

    def test_styles_path(self, config_dir):
        """Test the styles file location."""
        assert store.styles_path() == config_dir / "styles.json"


class TestStyles:
    """Tests for saving and loading named styles."""

    def test_empty_store(self):
        """Test that a fresh store has no styles."""
        assert store.load_styles() == {}
        assert store.get_style("missing") is None

    def test_set_and_get(self):
        """Test saving and reading a style."""
        style = {"star_count": 4, "highlight_color": "#ffd700", "horizontal_padding": 2.0}
        store.set_style("gold", style)
        assert store.get_style("gold") == style

    def test_unknown_keys_are_dropped(self):
        """Test that only style keys are saved."""
        store.set_style("plain", {"star_count": 3, "rating": 2.5, "theme": "dark"})
        assert store.get_style("plain") == {"star_count": 3}

    def test_multiple_styles(self):
        """Test that styles are stored side by side."""
        store.set_style("a", {"star_count": 3})
        store.set_style("b", {"star_count": 5})
        assert set(store.load_styles()) == {"a", "b"}

    def test_file_is_json(self, config_dir):
        """Test the on-disk JSON layout."""
        store.set_style("a", {"normal_color": "#aaaaaa"})
        data = json.loads((config_dir / "styles.json").read_text())
        assert data == {"a": {"normal_color": "#aaaaaa"}}

    def test_delete_style(self):
        """Test deleting a style."""
        store.set_style("a", {"star_count": 3})
        assert store.delete_style("a") is True
        assert store.delete_style("a") is False
        assert store.get_style("a") is None

    def test_corrupt_file_is_treated_as_empty(self, config_dir):
        """Test that an unparseable styles file reads as empty."""
        config_dir.mkdir(parents=True, exist_ok=True)
        (config_dir / "styles.json").write_text("{not json")
        assert store.load_styles() == {}

    def test_non_object_file_is_treated_as_empty(self, config_dir):
        """Test that a styles file without an object reads as empty."""
        config_dir.mkdir(parents=True, exist_ok=True)
        (config_dir / "styles.json").write_text("[1, 2, 3]")
        assert store.load_styles() == {}
