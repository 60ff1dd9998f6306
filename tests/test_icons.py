"""Tests for icon loading."""

import base64

import pytest

from tomato.core.icons import DEFAULT_BREAK_ICON, DEFAULT_WORK_ICON, IconError, load_icon


class TestLoadIcon:
    def test_bundled_icons_are_png(self) -> None:
        for name in (DEFAULT_WORK_ICON, DEFAULT_BREAK_ICON):
            data = base64.b64decode(load_icon(None, name))
            assert data.startswith(b"\x89PNG")

    def test_custom_icon_file(self, tmp_path) -> None:
        path = tmp_path / "icon.png"
        path.write_bytes(b"not really a png")
        assert load_icon(str(path), DEFAULT_WORK_ICON) == base64.b64encode(b"not really a png").decode()

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(IconError, match="Unable to load icon"):
            load_icon(str(tmp_path / "missing.png"), DEFAULT_WORK_ICON)
