"""Unit tests for the config readers.

Tests cover:
- Accepted values and their conversion to float tuples
- ValueError for wrongly typed or shaped entries
"""

import pytest


class TestReaders:
    """Tests for read_mapping, read_string, read_number and read_numbers."""

    def test_read_numbers_converts_to_floats(self):
        """Test that ints and floats become a float tuple."""
        from src.lumen.core.config import read_numbers

        assert read_numbers([1, 2.5, -3], 3, "centre") == (1.0, 2.5, -3.0)
        assert read_numbers((0, 1), 2, "albedo") == (0.0, 1.0)

    @pytest.mark.parametrize(
        "value", [5, "123", [1.0, 2.0], [1.0, 2.0, 3.0, 4.0], [1.0, None, 2.0]]
    )
    def test_read_numbers_rejects_bad_shapes(self, value):
        """Test that scalars, strings and wrong lengths are rejected."""
        from src.lumen.core.config import read_numbers

        with pytest.raises(ValueError, match="centre"):
            read_numbers(value, 3, "centre")

    @pytest.mark.parametrize("value", [True, "1.0", None, [1.0]])
    def test_read_number_rejects_non_numbers(self, value):
        """Test that booleans, strings and lists are not numbers."""
        from src.lumen.core.config import read_number

        with pytest.raises(ValueError):
            read_number(value, "radius")

    def test_read_mapping_and_string(self):
        """Test the mapping and string checks."""
        from src.lumen.core.config import read_mapping, read_string

        assert read_mapping({"type": "sphere"}, "object") == {"type": "sphere"}
        assert read_string("sphere", "object type") == "sphere"
        with pytest.raises(ValueError):
            read_mapping("sphere", "object")
        with pytest.raises(ValueError):
            read_string(3, "object type")
