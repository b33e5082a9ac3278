"""Screen geometry models.

Coordinates follow a bottom-up convention: ``y`` is the lower edge of the
rectangle and grows upward, matching the screen APIs the runner targets.
"""

from pydantic import BaseModel, Field


class ScreenRect(BaseModel):
    """Axis-aligned rectangle in screen units."""

    model_config = {"frozen": True}

    x: float = Field(..., description="Left edge")
    y: float = Field(..., description="Bottom edge")
    width: float = Field(..., ge=0, description="Width")
    height: float = Field(..., ge=0, description="Height")

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    def inset(self, amount: float) -> "ScreenRect":
        """Shrink by ``amount`` on every side (never below zero size)."""
        return ScreenRect(
            x=self.x + amount,
            y=self.y + amount,
            width=max(0.0, self.width - 2 * amount),
            height=max(0.0, self.height - 2 * amount),
        )

    def intersects(self, other: "ScreenRect") -> bool:
        """True if the interiors overlap (shared edges do not count)."""
        return (
            self.min_x < other.max_x
            and other.min_x < self.max_x
            and self.min_y < other.max_y
            and other.min_y < self.max_y
        )

    def contains(self, other: "ScreenRect") -> bool:
        """True if ``other`` lies entirely within this rectangle."""
        return (
            self.min_x <= other.min_x
            and self.min_y <= other.min_y
            and other.max_x <= self.max_x
            and other.max_y <= self.max_y
        )
