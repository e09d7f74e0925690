"""A horizontal slider choosing a value between 0 and 1."""

from __future__ import annotations

from collections.abc import Callable

from arenalegends.geometry import Point

KNOB_IMAGE = "setting/slider.png"
KNOB_HOVER_IMAGE = "setting/slider-blue.png"
BAR_IMAGE = "setting/bar.png"
END_IMAGE = "setting/end.png"
DEFAULT_KNOB_SIZE = (24.0, 24.0)


class Slider:
    """A draggable knob on a bar; reports value changes through a callback."""

    MIN = 0.0
    MAX = 1.0

    def __init__(
        self,
        x: float,
        y: float,
        w: float,
        h: float,
        knob_size: tuple[float, float] = DEFAULT_KNOB_SIZE,
        on_value_changed: Callable[[float], None] | None = None,
    ) -> None:
        self.bar_position = Point(x, y)
        self.bar_size = Point(w, h)
        self.end_positions = (Point(x, y + h / 2), Point(x + w, y + h / 2))
        self.position = Point(x + w, y + h / 2)
        self.anchor = Point(0.5, 0.5)
        self.knob_size = Point(*knob_size)
        self.on_value_changed = on_value_changed
        self.enabled = True
        self.mouse_in = False
        self.down = False
        self.value = 0.0

    @property
    def image(self) -> str:
        """Knob image for the current hover state."""
        return KNOB_HOVER_IMAGE if self.mouse_in and self.enabled else KNOB_IMAGE

    def _hit(self, mx: float, my: float) -> bool:
        left = self.position.x - self.anchor.x * self.knob_size.x
        top = self.position.y - self.anchor.y * self.knob_size.y
        return left <= mx < left + self.knob_size.x and top <= my < top + self.knob_size.y

    def set_value(self, value: float) -> None:
        """Move the knob to a value and report it, if it differs from the current one."""
        if value == self.value:
            return
        self.value = value
        bar_x = self.bar_position.x
        self.position.x = (1 - value) * bar_x + value * (bar_x + self.bar_size.x)
        if self.on_value_changed is not None:
            self.on_value_changed(value)

    def on_mouse_down(self, button: int, mx: float, my: float) -> None:
        """Start dragging when the primary button is pressed over the knob."""
        if button & 1 and self.mouse_in:
            self.down = True

    def on_mouse_up(self, button: int, mx: float, my: float) -> None:
        """Stop dragging."""
        self.down = False

    def on_mouse_move(self, mx: float, my: float) -> None:
        """Track hovering and, while dragging, follow the pointer along the bar."""
        self.mouse_in = self._hit(mx, my)
        if self.down:
            bar_x = self.bar_position.x
            clamped = min(max(float(mx), bar_x), bar_x + self.bar_size.x)
            self.set_value((clamped - bar_x) / self.bar_size.x)