"""Layout and presentation logic for the weather card - pure functions for testability."""
import math
from dataclasses import dataclass
from datetime import date
from typing import List, Optional, Tuple
from weather_data import TimeOfDay, WeatherSnapshot
from openweather_provider import icon_url

CARD_WIDTH = 350
CARD_HEIGHT = 500

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)

# Flat colors used when a background image is not available locally
BACKGROUND_FALLBACK_COLORS = {
    TimeOfDay.MORNING: (250, 190, 120),
    TimeOfDay.AFTERNOON: (135, 200, 250),
    TimeOfDay.EVENING: (200, 90, 60),
    TimeOfDay.NIGHT: (20, 24, 60),
}


class DrawOp:
    """Represents a drawing operation (for testing/layout calculation)."""
    def __init__(self, op_type: str, **kwargs):
        self.op_type = op_type
        self.kwargs = kwargs


@dataclass(frozen=True)
class CardView:
    """Display-ready strings and assets for one rendered card."""
    city: str
    date: str
    icon_url: str
    icon_alt: str
    temp: str
    description: str
    temp_max: str
    temp_min: str
    wind: str
    pressure: str
    bucket: TimeOfDay
    background_path: str
    text_color: Tuple[int, int, int]


def background_path(bucket: TimeOfDay) -> str:
    return f"/backgrounds/{bucket.value}.jpeg"


def text_color(bucket: TimeOfDay) -> Tuple[int, int, int]:
    """Dark text on the bright afternoon background, light text otherwise."""
    return BLACK if bucket is TimeOfDay.AFTERNOON else WHITE


def round_half_up(value: float) -> int:
    """Round .5 towards positive infinity (round() would use banker's rounding)."""
    return math.floor(value + 0.5)


def format_temp(value: float) -> str:
    return f"{round_half_up(value)}°C"


def capitalize_words(text: str) -> str:
    """Upper-case the first letter of each word, leaving the rest untouched."""
    return " ".join(word[:1].upper() + word[1:] for word in text.split(" "))


def format_date(day: date) -> str:
    """Format a date like "Saturday, October 18"."""
    return f"{day:%A}, {day:%B} {day.day}"


def build_card_view(snapshot: WeatherSnapshot, bucket: TimeOfDay, today: Optional[date] = None) -> CardView:
    """
    Turn a snapshot and its time-of-day bucket into display values.

    Args:
        snapshot: Latest weather snapshot
        bucket: Time-of-day bucket computed for that snapshot
        today: Date to show in the header (defaults to the local date)

    Returns:
        CardView: Everything the renderer needs
    """
    today = today or date.today()
    return CardView(
        city=snapshot.city,
        date=format_date(today),
        icon_url=icon_url(snapshot.icon),
        icon_alt=snapshot.condition_main,
        temp=format_temp(snapshot.temp),
        description=snapshot.condition_description,
        temp_max=format_temp(snapshot.temp_max),
        temp_min=format_temp(snapshot.temp_min),
        wind=f"{snapshot.wind_speed:g} m/s",
        pressure=f"{snapshot.pressure} hPa",
        bucket=bucket,
        background_path=background_path(bucket),
        text_color=text_color(bucket),
    )


def _centered_x(text: str, width: int, char_width: int) -> int:
    # Rough estimate, no font metrics available here
    return max(0, (width - len(text) * char_width) // 2)


def calculate_layout(view: CardView, width: int = CARD_WIDTH, height: int = CARD_HEIGHT) -> List[DrawOp]:
    """
    Calculate layout operations for the weather card.

    This is a pure function that returns drawing operations,
    making it easy to test without actual rendering.

    Args:
        view: Card values to display
        width: Canvas width
        height: Canvas height

    Returns:
        List of DrawOp objects representing what to draw
    """
    r, g, b = view.text_color
    ops = [DrawOp(
        "background",
        path=view.background_path,
        fallback=BACKGROUND_FALLBACK_COLORS[view.bucket],
    )]

    def text(value: str, x: int, y: int, size: int) -> DrawOp:
        return DrawOp("text", text=value, x=x, y=y, r=r, g=g, b=b, font_size=size)

    # Header: city and date
    ops.append(text(view.city, _centered_x(view.city, width, 13), 20, 24))
    ops.append(text(view.date, _centered_x(view.date, width, 7), 54, 14))

    # Content: icon, temperature, description
    icon_size = 80
    ops.append(DrawOp(
        "icon",
        url=view.icon_url,
        alt=view.icon_alt,
        x=(width - icon_size) // 2,
        y=110,
        size=icon_size,
        r=r, g=g, b=b,
    ))
    ops.append(text(view.temp, _centered_x(view.temp, width, 26), 200, 48))
    description = capitalize_words(view.description)
    ops.append(text(description, _centered_x(description, width, 8), 265, 16))

    # Details: max/wind on the left, min/pressure on the right
    details_top = height - 150
    margin = 20
    right_x = width - margin
    for row, (left_value, left_label, right_value, right_label) in enumerate([
        (view.temp_max, "Max", view.temp_min, "Min"),
        (view.wind, "Wind Speed", view.pressure, "Pressure"),
    ]):
        y = details_top + row * 60
        ops.append(text(left_value, margin, y, 20))
        ops.append(text(left_label, margin, y + 26, 12))
        ops.append(text(right_value, right_x - len(right_value) * 11, y, 20))
        ops.append(text(right_label, right_x - len(right_label) * 7, y + 26, 12))

    return ops


def render_card(canvas, view: CardView) -> None:
    """
    Render a card view onto a canvas.

    Args:
        canvas: CardCanvas instance (PIL or fake)
        view: Card values to display
    """
    canvas.clear()
    for op in calculate_layout(view, canvas.width, canvas.height):
        if op.op_type == "background":
            canvas.draw_background(op.kwargs["path"], op.kwargs["fallback"])
        elif op.op_type == "icon":
            # Remote icons are not downloaded; show the alt text in their place
            canvas.draw_text(
                op.kwargs["x"],
                op.kwargs["y"] + op.kwargs["size"] // 3,
                op.kwargs["alt"],
                op.kwargs["r"],
                op.kwargs["g"],
                op.kwargs["b"],
                font_size=18,
            )
        elif op.op_type == "text":
            canvas.draw_text(
                op.kwargs["x"],
                op.kwargs["y"],
                op.kwargs["text"],
                op.kwargs["r"],
                op.kwargs["g"],
                op.kwargs["b"],
                font_size=op.kwargs["font_size"],
            )


def render_loading(canvas) -> None:
    """Draw the placeholder shown until the first snapshot arrives."""
    canvas.clear()
    message = "Loading..."
    canvas.draw_text(
        _centered_x(message, canvas.width, 9),
        canvas.height // 2,
        message,
        *WHITE,
        font_size=16,
    )


def render_text(view: CardView) -> str:
    """Plain-text rendition of the card for terminal output."""
    lines = [
        f"{view.city} - {view.date}",
        f"{view.temp}  {view.icon_alt} ({view.description})",
        f"Max {view.temp_max}  Min {view.temp_min}",
        f"Wind {view.wind}  Pressure {view.pressure}",
        f"[{view.bucket.value}] background {view.background_path}",
    ]
    return "\n".join(lines)
