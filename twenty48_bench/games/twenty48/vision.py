from __future__ import annotations

import io

from .board import PlacementBoard, PlayableBoard
from .grid import SIZE, Grid
from ..vision_types import StateImage

EMPTY_COLOR = "#cdc1b4"
BACKGROUND_COLOR = "#bbada0"
TILE_COLORS: dict[int, str] = {
    2: "#eee4da",
    4: "#ede0c8",
    8: "#f2b179",
    16: "#f59563",
    32: "#f67c5f",
    64: "#f65e3b",
    128: "#edcf72",
    256: "#edcc61",
    512: "#edc850",
    1024: "#edc53f",
    2048: "#edc22e",
}
# 4096 and above share the 2048 color.
BIG_TILE_COLOR = "#edc22e"


def tile_color(value: int) -> str:
    if value == 0:
        return EMPTY_COLOR
    return TILE_COLORS.get(value, BIG_TILE_COLOR)


def render_grid_image(
    grid: Grid,
    *,
    size: tuple[int, int] = (400, 400),
    background: str = BACKGROUND_COLOR,
) -> StateImage:
    try:
        from PIL import Image, ImageDraw, ImageFont
    except ImportError as exc:  # pragma: no cover
        raise RuntimeError(
            "Missing pillow. Install with: pip install 'twenty48-bench[viz]'"
        ) from exc

    width, height = size
    img = Image.new("RGB", (width, height), background)
    draw = ImageDraw.Draw(img)
    font = ImageFont.load_default()

    gap = max(4, min(width, height) // 40)
    cell_w = (width - gap * (SIZE + 1)) / SIZE
    cell_h = (height - gap * (SIZE + 1)) / SIZE

    for i, row in enumerate(grid.to_values()):
        for j, value in enumerate(row):
            x0 = gap + j * (cell_w + gap)
            y0 = gap + i * (cell_h + gap)
            x1 = x0 + cell_w
            y1 = y0 + cell_h
            draw.rectangle([x0, y0, x1, y1], fill=tile_color(value))
            if value == 0:
                continue
            label = str(value)
            try:
                bbox = draw.textbbox((0, 0), label, font=font)
                label_w = bbox[2] - bbox[0]
                label_h = bbox[3] - bbox[1]
            except AttributeError:
                label_w, label_h = 0, 0
            fill = "#776e65" if value <= 4 else "#f9f6f2"
            draw.text(
                ((x0 + x1 - label_w) / 2, (y0 + y1 - label_h) / 2),
                label,
                fill=fill,
                font=font,
            )

    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return StateImage.from_png_bytes(buffer.getvalue(), width=width, height=height)


def render_board_image(
    board: PlayableBoard | PlacementBoard | Grid,
    *,
    size: tuple[int, int] = (400, 400),
    background: str = BACKGROUND_COLOR,
) -> StateImage:
    grid = board if isinstance(board, Grid) else board.grid
    return render_grid_image(grid, size=size, background=background)
