from datetime import datetime, tzinfo
from typing import Any, Iterable, List, Optional

from schemas import HeatmapResult

DAY_LABELS = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
DAYS = 7
HOURS = 24

# Escala dourada: 0 quase invisível -> máximo
HEAT_COLORS = [
    "rgba(201,169,110,0.04)",
    "rgba(201,169,110,0.12)",
    "rgba(201,169,110,0.25)",
    "rgba(201,169,110,0.42)",
    "rgba(201,169,110,0.60)",
    "rgba(201,169,110,0.80)",
    "rgba(201,169,110,1.00)",
]


def format_hour(hour: int) -> str:
    """0 -> '12a', 9 -> '9a', 12 -> '12p', 13 -> '1p'."""
    if hour == 0:
        return "12a"
    if hour < 12:
        return f"{hour}a"
    if hour == 12:
        return "12p"
    return f"{hour - 12}p"


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Aceita datetime ou texto ISO-8601 (com 'Z'). Retorna None se inválido."""
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str):
        return None
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        return None


def to_local(moment: datetime, tz: Optional[tzinfo] = None) -> datetime:
    # Sem tzinfo o horário já é considerado local
    if moment.tzinfo is None:
        return moment
    if tz is None:
        return moment.astimezone()
    return moment.astimezone(tz)


def heat_level(count: int, max_count: int, levels: int = len(HEAT_COLORS)) -> int:
    if max_count <= 0 or count <= 0:
        return 0
    ratio = count / max_count
    return min(int(ratio * (levels - 2)) + 1, levels - 1)


def heat_color(count: int, max_count: int) -> str:
    return HEAT_COLORS[heat_level(count, max_count)]


def bucketize(timestamps: Iterable[Any], tz: Optional[tzinfo] = None) -> HeatmapResult:
    """
    Distribui as submissões numa grade dia da semana x hora (horário local).

    O pico é a primeira célula com o valor máximo percorrendo dia a dia e
    hora a hora. Sem dados válidos, `has_data` é False e não há pico.
    """
    grid: List[List[int]] = [[0] * HOURS for _ in range(DAYS)]
    max_count = 0
    total = 0
    skipped = 0

    for value in timestamps:
        moment = parse_timestamp(value)
        try:
            local = to_local(moment, tz) if moment is not None else None
        except (OverflowError, ValueError):
            local = None
        if local is None:
            skipped += 1
            continue
        day = (local.weekday() + 1) % 7  # weekday(): segunda = 0
        hour = local.hour
        grid[day][hour] += 1
        total += 1
        if grid[day][hour] > max_count:
            max_count = grid[day][hour]

    levels = [[heat_level(count, max_count) for count in row] for row in grid]

    if max_count == 0:
        return HeatmapResult(
            grid=grid, levels=levels, max_count=0,
            total=total, skipped=skipped, has_data=False,
        )

    peak_day, peak_hour = next(
        (d, h) for d in range(DAYS) for h in range(HOURS) if grid[d][h] == max_count
    )
    return HeatmapResult(
        grid=grid,
        levels=levels,
        max_count=max_count,
        total=total,
        skipped=skipped,
        has_data=True,
        peak_day_index=peak_day,
        peak_hour_index=peak_hour,
        peak_day=DAY_LABELS[peak_day],
        peak_hour=format_hour(peak_hour),
    )
