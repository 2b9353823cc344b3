"""Slide compositor: paints a visual tree with Pillow.

Each primitive is drawn on its own RGBA tile, faded by its opacity, rotated
clockwise about its top-left corner and alpha-composited onto the page in
paint order.
"""

from __future__ import annotations

import logging
import math
from io import BytesIO
from pathlib import Path
from typing import Mapping

from PIL import Image, ImageColor, ImageDraw, ImageFont

from ..constants import TRANSPARENT
from ..elements import TextAlignment, TextDecoration
from ..errors import AssetLoadError
from .primitives import (
    EllipsePrimitive,
    ImagePrimitive,
    LinePrimitive,
    Primitive,
    RectPrimitive,
    TextPrimitive,
    VisualTree,
)

_logger = logging.getLogger("export")

RGBA = tuple[int, int, int, int]


class SlideCompositor:
    """Paint visual trees into Pillow images.

    Images referenced by the tree must be decoded beforehand and passed in;
    the compositor never loads anything and fails loudly on a missing image
    instead of painting a blank.

    Usage:
        compositor = SlideCompositor(fonts_dir=Path("fonts"))
        tree = render(slide, scale=2)
        page = compositor.paint(tree, images={src: decoded_image})
        png = compositor.to_png_bytes(page)
    """

    # Default font paths - will try these in order
    FONT_PATHS = [
        # Windows
        "C:/Windows/Fonts/arial.ttf",
        # Linux
        "/usr/share/fonts/truetype/dejavu/DejaVuSans.ttf",
        # macOS
        "/System/Library/Fonts/Helvetica.ttc",
        "/Library/Fonts/Arial.ttf",
    ]

    BOLD_FONT_PATHS = [
        "C:/Windows/Fonts/arialbd.ttf",
        "/usr/share/fonts/truetype/dejavu/DejaVuSans-Bold.ttf",
        "/Library/Fonts/Arial Bold.ttf",
    ]

    def __init__(self, fonts_dir: Path | None = None):
        """Initialize the compositor.

        Args:
            fonts_dir: Directory containing custom fonts, named
                ``<Family>.ttf`` / ``<Family>-Bold.ttf``.
        """
        self.fonts_dir = fonts_dir
        self._font_cache: dict[tuple[str, int, bool, bool], ImageFont.ImageFont] = {}

    # =========================================================================
    # Helpers
    # =========================================================================

    @staticmethod
    def _rgba(color: str | None) -> RGBA | None:
        """Convert a color string to RGBA; None for transparent."""
        if color is None or color == TRANSPARENT:
            return None
        return ImageColor.getcolor(color, "RGBA")

    def _font_candidates(self, family: str, bold: bool, italic: bool) -> list[str]:
        suffixes = []
        if bold and italic:
            suffixes.append("-BoldItalic")
        if bold:
            suffixes.append("-Bold")
        if italic:
            suffixes.append("-Italic")
        suffixes.append("-Regular")
        suffixes.append("")

        candidates = []
        if self.fonts_dir:
            candidates.extend(
                str(self.fonts_dir / f"{family}{suffix}.ttf") for suffix in suffixes
            )
        candidates.extend(f"{family}{suffix}" for suffix in suffixes)
        if bold:
            candidates.extend(self.BOLD_FONT_PATHS)
        candidates.extend(self.FONT_PATHS)
        return candidates

    def _get_font(
        self,
        font_name: str,
        size: float,
        bold: bool = False,
        italic: bool = False,
    ) -> ImageFont.ImageFont:
        """Get a font, with caching."""
        size_px = max(1, int(round(size)))
        cache_key = (font_name, size_px, bold, italic)
        if cache_key in self._font_cache:
            return self._font_cache[cache_key]

        font = None
        for path in self._font_candidates(font_name, bold, italic):
            try:
                font = ImageFont.truetype(path, size_px)
                break
            except (OSError, IOError):
                continue

        # Fall back to default
        if font is None:
            _logger.debug(f"FONT_FALLBACK | family:{font_name} | size:{size_px}")
            font = ImageFont.load_default(size=size_px)

        self._font_cache[cache_key] = font
        return font

    @staticmethod
    def _line_width(line: str, font: ImageFont.ImageFont, letter_spacing: float) -> float:
        return font.getlength(line) + letter_spacing * len(line)

    def _wrap_text(
        self,
        text: str,
        font: ImageFont.ImageFont,
        max_width: float,
        letter_spacing: float = 0.0,
    ) -> list[str]:
        """Wrap text to fit within max_width, keeping explicit line breaks."""
        lines = []
        for paragraph in text.split("\n"):
            words = paragraph.split()
            current_line: list[str] = []

            for word in words:
                test_line = " ".join(current_line + [word])
                if self._line_width(test_line, font, letter_spacing) <= max_width:
                    current_line.append(word)
                else:
                    if current_line:
                        lines.append(" ".join(current_line))
                    current_line = [word]

            lines.append(" ".join(current_line))

        return lines

    def _add_image_background(self, base: Image.Image, image: Image.Image) -> None:
        """Paint an image over the whole page, cover-cropped."""
        img = image.convert("RGBA")

        # Resize to cover
        img_ratio = img.width / img.height
        base_ratio = base.width / base.height

        if img_ratio > base_ratio:
            # Image is wider - fit height
            new_height = base.height
            new_width = max(base.width, int(round(new_height * img_ratio)))
        else:
            # Image is taller - fit width
            new_width = base.width
            new_height = max(base.height, int(round(new_width / img_ratio)))

        img = img.resize((new_width, new_height), Image.Resampling.LANCZOS)

        # Center crop
        left = (new_width - base.width) // 2
        top = (new_height - base.height) // 2
        img = img.crop((left, top, left + base.width, top + base.height))
        base.alpha_composite(img)

    @staticmethod
    def _composite(base: Image.Image, layer: Image.Image, ox: int, oy: int) -> None:
        """Alpha-composite ``layer`` at (ox, oy), clipping to the page."""
        left, top = max(ox, 0), max(oy, 0)
        right = min(ox + layer.width, base.width)
        bottom = min(oy + layer.height, base.height)
        if right <= left or bottom <= top:
            return
        part = layer.crop((left - ox, top - oy, right - ox, bottom - oy))
        region = base.crop((left, top, right, bottom))
        base.paste(Image.alpha_composite(region, part), (left, top))

    # =========================================================================
    # Primitive tiles
    # =========================================================================

    @staticmethod
    def _new_tile(width: float, height: float, pad: int) -> Image.Image:
        size = (
            max(1, math.ceil(width) + pad * 2),
            max(1, math.ceil(height) + pad * 2),
        )
        return Image.new("RGBA", size, (0, 0, 0, 0))

    def _draw_rect(self, p: RectPrimitive) -> tuple[Image.Image, int]:
        stroke_px = int(round(p.stroke_width)) if p.stroke else 0
        pad = math.ceil(stroke_px / 2)
        tile = self._new_tile(p.width, p.height, pad)
        box = (pad, pad, pad + p.width, pad + p.height)
        ImageDraw.Draw(tile).rounded_rectangle(
            box,
            radius=int(max(0.0, min(p.corner_radius, p.width / 2, p.height / 2))),
            fill=self._rgba(p.fill),
            outline=self._rgba(p.stroke) if stroke_px else None,
            width=stroke_px,
        )
        return tile, pad

    def _draw_ellipse(self, p: EllipsePrimitive) -> tuple[Image.Image, int]:
        stroke_px = int(round(p.stroke_width)) if p.stroke else 0
        pad = math.ceil(stroke_px / 2)
        tile = self._new_tile(p.width, p.height, pad)
        diameter = min(p.width, p.height)
        cx, cy = pad + p.width / 2, pad + p.height / 2
        box = (cx - diameter / 2, cy - diameter / 2, cx + diameter / 2, cy + diameter / 2)
        ImageDraw.Draw(tile).ellipse(
            box,
            fill=self._rgba(p.fill),
            outline=self._rgba(p.stroke) if stroke_px else None,
            width=stroke_px,
        )
        return tile, pad

    def _draw_line(self, p: LinePrimitive) -> tuple[Image.Image, int]:
        stroke_px = max(1, int(round(p.stroke_width)))
        pad = math.ceil(stroke_px / 2) + 1
        tile = self._new_tile(p.width, p.height, pad)
        color = self._rgba(p.stroke)
        if color is not None:
            ImageDraw.Draw(tile).line(
                [(pad, pad), (pad + p.width, pad + p.height)],
                fill=color,
                width=stroke_px,
                joint="curve",
            )
        return tile, pad

    def _draw_text(self, p: TextPrimitive) -> tuple[Image.Image, int]:
        """Draw wrapped text; the tile grows downward if the text overflows."""
        layout = p.layout
        font = self._get_font(layout.font_family, layout.font_size, layout.bold, layout.italic)
        lines = self._wrap_text(layout.text, font, layout.wrap_width, layout.letter_spacing)
        text_height = layout.line_height_px * len(lines)
        tile = self._new_tile(p.width, max(p.height, text_height), 0)
        color = self._rgba(p.fill)
        if color is None:
            return tile, 0

        draw = ImageDraw.Draw(tile)
        # Glyphs sit vertically centered within each line box
        half_leading = (layout.line_height_px - layout.font_size) / 2
        thickness = max(1, int(round(layout.font_size / 15)))

        for index, line in enumerate(lines):
            line_width = self._line_width(line, font, layout.letter_spacing)
            if layout.align == TextAlignment.CENTER:
                line_x = (p.width - line_width) / 2
            elif layout.align == TextAlignment.RIGHT:
                line_x = p.width - line_width
            else:
                line_x = 0.0
            line_y = index * layout.line_height_px + half_leading

            if layout.letter_spacing:
                cursor = line_x
                for char in line:
                    draw.text((cursor, line_y), char, font=font, fill=color)
                    cursor += font.getlength(char) + layout.letter_spacing
            else:
                draw.text((line_x, line_y), line, font=font, fill=color)

            if layout.decoration == TextDecoration.UNDERLINE:
                underline_y = line_y + layout.font_size * 0.95
                draw.line([(line_x, underline_y), (line_x + line_width, underline_y)], fill=color, width=thickness)
            elif layout.decoration == TextDecoration.LINE_THROUGH:
                strike_y = line_y + layout.font_size * 0.55
                draw.line([(line_x, strike_y), (line_x + line_width, strike_y)], fill=color, width=thickness)

        return tile, 0

    def _draw_image(self, p: ImagePrimitive, images: Mapping[str, Image.Image]) -> tuple[Image.Image, int]:
        image = images.get(p.src)
        if image is None:
            raise AssetLoadError(p.src, "image was not loaded before compositing", element_id=p.element_id)
        size = (max(1, math.ceil(p.width)), max(1, math.ceil(p.height)))
        return image.convert("RGBA").resize(size, Image.Resampling.LANCZOS), 0

    def _draw(self, primitive: Primitive, images: Mapping[str, Image.Image]) -> tuple[Image.Image, int]:
        match primitive:
            case TextPrimitive():
                return self._draw_text(primitive)
            case RectPrimitive():
                return self._draw_rect(primitive)
            case EllipsePrimitive():
                return self._draw_ellipse(primitive)
            case LinePrimitive():
                return self._draw_line(primitive)
            case ImagePrimitive():
                return self._draw_image(primitive, images)
        raise TypeError(f"Unsupported primitive: {type(primitive).__name__}")

    def _place(self, base: Image.Image, primitive: Primitive, tile: Image.Image, pad: int) -> None:
        """Fade, rotate about the element's top-left corner and composite."""
        if primitive.opacity < 1.0:
            alpha = tile.getchannel("A").point(lambda v: int(v * primitive.opacity))
            tile.putalpha(alpha)

        # Tile point (pad, pad) is the element's top-left corner
        pivot_x, pivot_y = float(pad), float(pad)
        if primitive.rotation:
            center_x, center_y = tile.width / 2, tile.height / 2
            rotated = tile.rotate(-primitive.rotation, resample=Image.Resampling.BICUBIC, expand=True)
            theta = math.radians(primitive.rotation)
            dx, dy = pivot_x - center_x, pivot_y - center_y
            pivot_x = rotated.width / 2 + dx * math.cos(theta) - dy * math.sin(theta)
            pivot_y = rotated.height / 2 + dx * math.sin(theta) + dy * math.cos(theta)
            tile = rotated

        ox = int(round(primitive.x - pivot_x))
        oy = int(round(primitive.y - pivot_y))
        self._composite(base, tile, ox, oy)

    # =========================================================================
    # Public API
    # =========================================================================

    def paint(self, tree: VisualTree, images: Mapping[str, Image.Image] | None = None) -> Image.Image:
        """Paint a visual tree.

        Args:
            tree: Output of the renderer.
            images: Decoded images keyed by source string.

        Returns:
            RGBA page sized to the tree.

        Raises:
            AssetLoadError: The tree references an image missing from ``images``.
        """
        images = images or {}
        size = (max(1, int(round(tree.width))), max(1, int(round(tree.height))))
        page = Image.new("RGBA", size, self._rgba(tree.background) or (255, 255, 255, 0))

        if tree.background_image:
            background = images.get(tree.background_image)
            if background is None:
                raise AssetLoadError(tree.background_image, "background image was not loaded before compositing")
            self._add_image_background(page, background)

        for primitive in tree.primitives:
            if not primitive.visible or primitive.opacity <= 0:
                continue
            tile, pad = self._draw(primitive, images)
            self._place(page, primitive, tile, pad)

        return page

    @staticmethod
    def flatten(page: Image.Image, matte: str = "#ffffff") -> Image.Image:
        """Drop the alpha channel over a solid matte."""
        base = Image.new("RGBA", page.size, ImageColor.getcolor(matte, "RGBA"))
        base.alpha_composite(page)
        return base.convert("RGB")

    @staticmethod
    def to_png_bytes(page: Image.Image) -> bytes:
        output = BytesIO()
        page.save(output, format="PNG", optimize=True)
        return output.getvalue()
