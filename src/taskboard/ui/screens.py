"""Screen rendering.

Draws the mounted task views into a PIL image, one row per task, with
toast messages along the bottom edge.
"""

from __future__ import annotations

import logging
from typing import Iterable

from PIL import Image, ImageDraw, ImageFont

from taskboard.ui.widgets import Element, RenderTarget

log = logging.getLogger("taskboard.ui.screens")

WIDTH = 960
MIN_HEIGHT = 160
HEADER_H = 28
ROW_H = 24
TOAST_H = 20

# Colors
BG = (0, 0, 0)
TEXT = (220, 220, 220)
TEXT_DIM = (120, 120, 120)
ACCENT = (255, 120, 0)
EDIT_BG = (40, 40, 40)
EDIT_BORDER = (80, 80, 80)
TOAST_COLOR = (255, 60, 60)
SEPARATOR = (50, 50, 50)


class TaskListScreen:
    """Renders the task list view."""

    def __init__(self):
        self._font: ImageFont.FreeTypeFont | None = None
        self._font_small: ImageFont.FreeTypeFont | None = None
        self._load_fonts()

    def _load_fonts(self) -> None:
        try:
            self._font = ImageFont.truetype(
                "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf", 14
            )
            self._font_small = ImageFont.truetype(
                "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf", 12
            )
        except OSError:
            log.debug("DejaVu fonts not found, using default bitmap font")
            self._font = ImageFont.load_default()
            self._font_small = self._font

    def render(self, root: RenderTarget, toasts: Iterable[str] = ()) -> Image.Image:
        """Render every mounted task row."""
        rows = [el for el in root.find_all("task") if el.attached]
        toasts = list(toasts)
        height = max(MIN_HEIGHT, HEADER_H + ROW_H * len(rows) + TOAST_H * len(toasts) + 8)

        img = Image.new("RGB", (WIDTH, height), BG)
        draw = ImageDraw.Draw(img)

        draw.text((8, 6), f"Tasks ({len(rows)})", fill=ACCENT, font=self._font)
        draw.line([0, HEADER_H - 2, WIDTH, HEADER_H - 2], fill=SEPARATOR)

        for i, row in enumerate(rows):
            self._draw_row(draw, HEADER_H + i * ROW_H, row)

        y = height - TOAST_H * len(toasts)
        for message in toasts:
            draw.text((8, y + 3), message[:120], fill=TOAST_COLOR, font=self._font_small)
            y += TOAST_H

        return img

    def _draw_row(self, draw: ImageDraw.ImageDraw, y: int, row: Element) -> None:
        label = row.query("description")
        field = row.query("description-input")
        task_id = row.name.rsplit("-", 1)[-1] if row.name else "?"

        draw.text((8, y + 5), f"{task_id:>4}", fill=TEXT_DIM, font=self._font_small)

        if field is not None and field.visible:
            draw.rectangle([60, y + 2, WIDTH - 8, y + ROW_H - 3],
                           fill=EDIT_BG, outline=EDIT_BORDER)
            draw.text((66, y + 5), field.value[:110] + "_", fill=TEXT, font=self._font_small)
        elif label is not None:
            draw.text((66, y + 5), label.text[:110], fill=TEXT, font=self._font_small)

        draw.line([0, y + ROW_H - 1, WIDTH, y + ROW_H - 1], fill=SEPARATOR)

    def save(self, root: RenderTarget, path: str, toasts: Iterable[str] = ()) -> None:
        self.render(root, toasts).save(path)
        log.debug("Screen snapshot written to %s", path)
