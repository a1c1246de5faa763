"""
Material-requirements engine.

Turns the balloon-cluster elements placed on a design canvas into balloon
counts per color and size, and compares those counts with inventory. All
functions here are pure: no I/O, no database access.

Each cluster template has a fixed number of color slots. The first
``large_count`` slots are 16" balloons, the remaining ``small_count`` slots are
11" balloons. Slot ``i`` takes ``element.colors[i]`` when present and
non-empty, otherwise the element's primary color (``colors[0]``).
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Mapping, Optional

from src.db.models.enums import BalloonColor, BalloonSize
from src.schemas.materials import (
    AvailabilityLine,
    AvailabilityReport,
    ColorAnalysis,
    ColorCount,
    ColorShare,
    MaterialSummary,
    ShortageLine,
)

BALLOON_CLUSTER = "balloon-cluster"
BALLOONS_PER_HOUR = 80
BALLOONS_PER_CLUSTER_ESTIMATE = 20

# Requirement keys -> stocked sizes
SIZE_FOR_KEY = {"small": BalloonSize.SMALL.value, "large": BalloonSize.LARGE.value}

# Swatch hex codes used by the design canvas palette.
PALETTE_HEX = {
    "#ff5252": "red",
    "#2196f3": "blue",
    "#4caf50": "green",
    "#ffeb3b": "yellow",
    "#9c27b0": "purple",
    "#e91e63": "pink",
    "#ff9800": "orange",
    "#ffffff": "white",
    "#000000": "black",
    "#bdbdbd": "silver",
    "#ffc107": "gold",
}

LINE_AVAILABLE = "available"
LINE_LOW = "low"
LINE_UNAVAILABLE = "unavailable"


@dataclass(frozen=True)
class ClusterTemplate:
    name: str
    large_count: int
    small_count: int

    @property
    def slot_count(self) -> int:
        return self.large_count + self.small_count


CLUSTER_TEMPLATES: Dict[str, ClusterTemplate] = {
    "classic": ClusterTemplate("classic", large_count=2, small_count=11),
    "arch": ClusterTemplate("arch", large_count=2, small_count=11),
    "column": ClusterTemplate("column", large_count=2, small_count=11),
}
DEFAULT_TEMPLATE = "classic"


def _value(obj: Any) -> Any:
    return obj.value if isinstance(obj, Enum) else obj


def _field(element: Any, name: str, default: Any = None) -> Any:
    if isinstance(element, Mapping):
        return element.get(name, default)
    return getattr(element, name, default)


# PUBLIC_INTERFACE
def normalize_color(value: Any) -> Optional[str]:
    """Return a canonical color key (palette hex codes become names); None for empty values."""
    if value is None:
        return None
    color = str(_value(value)).strip().lower()
    if not color:
        return None
    return PALETTE_HEX.get(color, color)


# PUBLIC_INTERFACE
def get_template(name: Optional[str]) -> ClusterTemplate:
    """Look up a cluster template; unknown names fall back to the classic template."""
    return CLUSTER_TEMPLATES.get((name or DEFAULT_TEMPLATE).lower(), CLUSTER_TEMPLATES[DEFAULT_TEMPLATE])


# PUBLIC_INTERFACE
def element_balloons(element: Any) -> Dict[str, Dict[str, int]]:
    """
    Count the balloons one canvas element needs.

    Returns:
        Mapping color -> {"small": n, "large": n}. Empty when the element is not a
        balloon cluster or has no usable primary color.
    """
    if _field(element, "type", BALLOON_CLUSTER) != BALLOON_CLUSTER:
        return {}

    colors = list(_field(element, "colors") or [])
    primary = normalize_color(colors[0]) if colors else None
    if not primary:
        return {}

    template = get_template(_field(element, "template"))
    counts: Dict[str, Dict[str, int]] = {}
    for slot in range(template.slot_count):
        color = normalize_color(colors[slot]) if slot < len(colors) else None
        color = color or primary
        size_key = "large" if slot < template.large_count else "small"
        bucket = counts.setdefault(color, {"small": 0, "large": 0})
        bucket[size_key] += 1
    return counts


# PUBLIC_INTERFACE
def calculate_material_requirements(elements: Iterable[Any] | None) -> MaterialSummary:
    """Aggregate balloon counts over all elements of a design."""
    totals: Dict[str, Dict[str, int]] = {}
    cluster_count = 0
    for element in elements or []:
        counts = element_balloons(element)
        if not counts:
            continue
        cluster_count += 1
        for color, sizes in counts.items():
            bucket = totals.setdefault(color, {"small": 0, "large": 0})
            bucket["small"] += sizes["small"]
            bucket["large"] += sizes["large"]

    requirements = {
        color: ColorCount(small=c["small"], large=c["large"], total=c["small"] + c["large"])
        for color, c in totals.items()
    }
    total_small = sum(c.small for c in requirements.values())
    total_large = sum(c.large for c in requirements.values())
    total = total_small + total_large
    return MaterialSummary(
        requirements=requirements,
        total_small=total_small,
        total_large=total_large,
        total_balloons=total,
        cluster_count=cluster_count,
        estimated_clusters=math.ceil(total / BALLOONS_PER_CLUSTER_ESTIMATE),
        production_time=f"{total / BALLOONS_PER_HOUR:.1f} hrs",
    )


def _requirement_counts(requirements: Mapping[str, Any]) -> Dict[str, Dict[str, int]]:
    """Accept ColorCount models or plain dicts and merge colors that normalize to the same key."""
    merged: Dict[str, Dict[str, int]] = {}
    for raw_color, counts in (requirements or {}).items():
        color = normalize_color(raw_color)
        if not color:
            continue
        bucket = merged.setdefault(color, {"small": 0, "large": 0})
        for key in ("small", "large"):
            bucket[key] += int(_field(counts, key, 0) or 0)
    return merged


# PUBLIC_INTERFACE
def color_analysis(requirements: Mapping[str, Any]) -> ColorAnalysis:
    """Share of total balloons per color (percent, one decimal), largest share first."""
    counts = _requirement_counts(requirements)
    grand_total = sum(c["small"] + c["large"] for c in counts.values())
    if grand_total == 0:
        return ColorAnalysis(colors=[])
    shares = [
        ColorShare(name=color, percentage=round((c["small"] + c["large"]) * 100.0 / grand_total, 1))
        for color, c in counts.items()
        if c["small"] + c["large"] > 0
    ]
    shares.sort(key=lambda s: (-s.percentage, s.name))
    return ColorAnalysis(colors=shares)


# PUBLIC_INTERFACE
def compare_with_inventory(requirements: Mapping[str, Any], inventory: Iterable[Any]) -> AvailabilityReport:
    """
    Compare required balloons with stock.

    A line is ``unavailable`` when no item exists for its (color, size) or the
    quantity is below what is required, ``low`` when stock is sufficient but the
    remaining quantity would be at or below the item's threshold, and
    ``available`` otherwise.
    """
    stock = {
        (normalize_color(_field(item, "color")), str(_value(_field(item, "size")))): item
        for item in inventory
    }

    lines: list[AvailabilityLine] = []
    shortages: list[ShortageLine] = []
    for color, counts in _requirement_counts(requirements).items():
        for key in ("large", "small"):
            required = counts[key]
            if required <= 0:
                continue
            size = SIZE_FOR_KEY[key]
            item = stock.get((color, size))
            available = int(_field(item, "quantity", 0) or 0) if item is not None else 0
            threshold = int(_field(item, "threshold", 0) or 0) if item is not None else None
            remaining = available - required

            if item is None or available < required:
                status = LINE_UNAVAILABLE
                shortages.append(
                    ShortageLine(
                        color=color, size=size, required=required, available=available, shortage=required - available
                    )
                )
            elif remaining <= (threshold or 0):
                status = LINE_LOW
            else:
                status = LINE_AVAILABLE

            lines.append(
                AvailabilityLine(
                    color=color,
                    size=size,
                    required=required,
                    available=available,
                    remaining=remaining,
                    threshold=threshold,
                    status=status,
                )
            )

    low = sum(1 for line in lines if line.status == LINE_LOW)
    if shortages:
        message = f"Insufficient inventory for {len(shortages)} item(s)"
    elif low:
        message = f"Inventory is sufficient, but {low} item(s) will fall to low stock"
    elif lines:
        message = "All required balloons are in stock"
    else:
        message = "No balloons required"
    return AvailabilityReport(available=not shortages, lines=lines, shortages=shortages, message=message)


def is_stocked_color(color: str) -> bool:
    return color in BalloonColor._value2member_map_
