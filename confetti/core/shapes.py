"""
Confetto Shapes - Drawing collaborators for a single confetto

The kinematics engine never draws anything itself. Once per frame an active
confetto hands its position, rotation and a paint carrying the current
opacity to a ConfettoShape, which composites onto an RGBA canvas.

Canvases are numpy arrays of shape (H, W, 4), dtype uint8, straight alpha.
(x, y) is the top-left corner of the shape's unrotated bounding box, and
rotation (degrees, clockwise on screen) is applied about its center.
"""

import numpy as np
from PIL import Image
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Tuple, Union

MAX_ALPHA = 255


@dataclass
class Paint:
    """Style state shared by every draw call of one confetto"""
    color: Tuple[int, int, int] = (255, 255, 255)
    alpha: int = MAX_ALPHA


# =============================================================================
# Affine helpers
# =============================================================================

def translation(tx: float, ty: float) -> np.ndarray:
    return np.array([
        [1.0, 0.0, tx],
        [0.0, 1.0, ty],
        [0.0, 0.0, 1.0],
    ])


def rotation_matrix(degrees: float) -> np.ndarray:
    """Clockwise rotation on a y-down canvas"""
    rad = np.radians(degrees)
    c, s = np.cos(rad), np.sin(rad)
    return np.array([
        [c, -s, 0.0],
        [s, c, 0.0],
        [0.0, 0.0, 1.0],
    ])


def transform_points(matrix: np.ndarray, points: np.ndarray) -> np.ndarray:
    """Apply a 3x3 affine matrix to an (N, 2) array of points"""
    homogeneous = np.hstack([points, np.ones((len(points), 1))])
    return (homogeneous @ matrix.T)[:, :2]


def composite(
    canvas: np.ndarray,
    color: np.ndarray,
    alpha: np.ndarray,
    x0: int,
    y0: int
) -> np.ndarray:
    """
    Alpha-blend a patch onto the canvas in place ("over" operator).

    Args:
        canvas: (H, W, 4) uint8 RGBA canvas
        color: (h, w, 3) float RGB values 0-255
        alpha: (h, w) float coverage 0-1
        x0, y0: Canvas position of the patch's top-left pixel

    Returns:
        The same canvas, for chaining
    """
    h, w = alpha.shape
    ch, cw = canvas.shape[:2]

    # Clip patch to the canvas
    left, top = max(0, x0), max(0, y0)
    right, bottom = min(cw, x0 + w), min(ch, y0 + h)
    if left >= right or top >= bottom:
        return canvas

    src_a = alpha[top - y0:bottom - y0, left - x0:right - x0][..., None]
    src_rgb = color[top - y0:bottom - y0, left - x0:right - x0]

    region = canvas[top:bottom, left:right].astype(np.float32)
    dst_rgb = region[..., :3]
    dst_a = region[..., 3:4] / 255.0

    out_a = src_a + dst_a * (1 - src_a)
    safe_a = np.where(out_a > 0, out_a, 1.0)
    out_rgb = (src_rgb * src_a + dst_rgb * dst_a * (1 - src_a)) / safe_a

    canvas[top:bottom, left:right, :3] = np.clip(np.rint(out_rgb), 0, 255).astype(np.uint8)
    canvas[top:bottom, left:right, 3] = np.clip(np.rint(out_a[..., 0] * 255), 0, 255).astype(np.uint8)
    return canvas


def _solid_color(paint: Paint, shape: Tuple[int, int]) -> np.ndarray:
    color = np.empty(shape + (3,), dtype=np.float32)
    color[...] = paint.color
    return color


# =============================================================================
# Shape Interface
# =============================================================================

class ConfettoShape(ABC):
    """
    Abstract drawing capability for a confetto.

    Subclasses decide how one piece of confetti looks. The engine only calls
    configure_paint() once during prepare and draw() once per active frame.
    """

    def configure_paint(self, paint: Paint) -> None:
        """Hook to set up paint state before any animation happens"""
        pass

    @abstractmethod
    def draw(
        self,
        canvas: np.ndarray,
        matrix: np.ndarray,
        paint: Paint,
        x: float,
        y: float,
        rotation: float
    ) -> None:
        """
        Draw this shape onto the canvas.

        Args:
            canvas: RGBA canvas to draw on
            matrix: Identity 3x3 transform to compose draw manipulations into
            paint: Paint already configured via configure_paint(), with the
                confetto's current alpha
            x: Left edge of the shape relative to the canvas
            y: Top edge of the shape relative to the canvas
            rotation: Rotation in degrees
        """
        pass


# =============================================================================
# Concrete Shapes
# =============================================================================

class CircleShape(ConfettoShape):
    """Filled disc. Rotation has no visible effect."""

    def __init__(self, radius: float, color: Tuple[int, int, int] = (255, 255, 255)):
        self.radius = radius
        self.color = color

    def configure_paint(self, paint: Paint) -> None:
        paint.color = self.color

    def draw(self, canvas, matrix, paint, x, y, rotation):
        r = self.radius
        center = transform_points(matrix @ translation(x + r, y + r), np.zeros((1, 2)))[0]
        cx, cy = center

        x0, y0 = int(np.floor(cx - r)), int(np.floor(cy - r))
        x1, y1 = int(np.ceil(cx + r)), int(np.ceil(cy + r))
        yy, xx = np.mgrid[y0:y1 + 1, x0:x1 + 1]

        inside = (xx - cx) ** 2 + (yy - cy) ** 2 <= r * r
        alpha = inside.astype(np.float32) * (paint.alpha / MAX_ALPHA)
        composite(canvas, _solid_color(paint, alpha.shape), alpha, x0, y0)


class SquareShape(ConfettoShape):
    """Filled square, rotated about its center"""

    def __init__(self, size: float, color: Tuple[int, int, int] = (255, 255, 255)):
        self.size = size
        self.color = color

    def configure_paint(self, paint: Paint) -> None:
        paint.color = self.color

    def corners(self, matrix: np.ndarray, x: float, y: float, rotation: float) -> np.ndarray:
        """Canvas-space corners, clockwise"""
        half = self.size / 2
        local = np.array([[-half, -half], [half, -half], [half, half], [-half, half]])
        m = matrix @ translation(x + half, y + half) @ rotation_matrix(rotation)
        return transform_points(m, local)

    def draw(self, canvas, matrix, paint, x, y, rotation):
        pts = self.corners(matrix, x, y, rotation)

        x0, y0 = np.floor(pts.min(axis=0)).astype(int)
        x1, y1 = np.ceil(pts.max(axis=0)).astype(int)
        yy, xx = np.mgrid[y0:y1 + 1, x0:x1 + 1]

        # Convex polygon: a pixel is inside when it sits on the same side of every edge
        inside = np.ones(xx.shape, dtype=bool)
        for (ax, ay), (bx, by) in zip(pts, np.roll(pts, -1, axis=0)):
            inside &= (bx - ax) * (yy - ay) - (by - ay) * (xx - ax) >= 0

        alpha = inside.astype(np.float32) * (paint.alpha / MAX_ALPHA)
        composite(canvas, _solid_color(paint, alpha.shape), alpha, int(x0), int(y0))


class BitmapShape(ConfettoShape):
    """Arbitrary RGBA image, rotated with Pillow and faded by paint alpha"""

    def __init__(self, image: Image.Image):
        self.image = image.convert('RGBA')

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'BitmapShape':
        return cls(Image.open(path))

    def draw(self, canvas, matrix, paint, x, y, rotation):
        w, h = self.image.size
        center = transform_points(matrix @ translation(x + w / 2, y + h / 2), np.zeros((1, 2)))[0]

        # Pillow rotates counter-clockwise for positive angles
        rotated = self.image.rotate(-rotation, resample=Image.Resampling.BICUBIC, expand=True)
        pixels = np.asarray(rotated, dtype=np.float32)

        rh, rw = pixels.shape[:2]
        x0 = int(round(center[0] - rw / 2))
        y0 = int(round(center[1] - rh / 2))
        alpha = pixels[..., 3] / 255.0 * (paint.alpha / MAX_ALPHA)
        composite(canvas, pixels[..., :3], alpha, x0, y0)


def blank_canvas(width: int, height: int) -> np.ndarray:
    """Transparent RGBA canvas"""
    return np.zeros((height, width, 4), dtype=np.uint8)
