"""World-to-screen helpers shared by the viewer's drawing code."""

import math


def project(x, y, z, view_angle_deg):
    """Rotate (x, y, z) about the y axis for the tilted curvature view."""
    a = math.radians(view_angle_deg)
    return (x * math.cos(a) - z * math.sin(a),
            y,
            x * math.sin(a) + z * math.cos(a))


def depth_factor(z, z_min, z_max):
    if z_max == z_min:
        return 0.0
    return (z - z_min) / (z_max - z_min)


class Viewport:
    """Origin-centred mapping with a fixed world span across the short side."""

    def __init__(self, width, height, world_span=120.0):
        self.width = width
        self.height = height
        self.scale = min(width, height) / world_span

    def to_screen(self, x, y):
        return (self.width / 2.0 + x * self.scale,
                self.height / 2.0 - y * self.scale)

    def length(self, d):
        return d * self.scale


class ExtentViewport:
    """Stretch the bounding box of some points onto the screen minus a margin."""

    def __init__(self, xs, ys, width, height, margin=50):
        self.x_min, self.x_max = min(xs), max(xs)
        self.y_min, self.y_max = min(ys), max(ys)
        self.width = width
        self.height = height
        self.margin = margin

    def to_screen(self, x, y):
        span_x = (self.x_max - self.x_min) or 1.0
        span_y = (self.y_max - self.y_min) or 1.0
        sx = self.margin + (x - self.x_min) / span_x * (self.width - 2 * self.margin)
        # screen y grows downward
        sy = self.height - self.margin - (y - self.y_min) / span_y * (self.height - 2 * self.margin)
        return sx, sy
