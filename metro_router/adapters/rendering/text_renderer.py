"""Plain-text path renderer adapter.

Turns a Path into a riding guide for terminals and logs: one line per leg
ridden on a single line, followed by the totals.
"""

from __future__ import annotations

from dataclasses import dataclass

from ...domain.models import Path


@dataclass
class TextPathRenderer:
    """Text renderer implementing PathRendererPort.

    Attributes:
        separator: String placed between stations in summaries
        distance_precision: Decimals used when printing kilometers
    """

    separator: str = " -> "
    distance_precision: int = 2

    def render(self, path: Path) -> str:
        """Render a riding guide.

        Example:
            Take Line1 from A to C (2 stops, 8.00 km)
            Transfer to Line2 at C, ride to D (1 stop, 2.00 km)
            Total distance: 10.00 km
            Transfers: 1
        """
        if path.is_empty:
            return f"Already at {path.origin}: no movement needed."

        lines = []
        for number, leg in enumerate(path.legs()):
            stops = len(leg.stations) - 1
            detail = (
                f"({stops} stop{'s' if stops != 1 else ''}, "
                f"{self._km(leg.distance_km)})"
            )
            if number == 0:
                lines.append(
                    f"Take {leg.line} from {leg.boarding} to {leg.alighting} {detail}"
                )
            else:
                lines.append(
                    f"Transfer to {leg.line} at {leg.boarding}, "
                    f"ride to {leg.alighting} {detail}"
                )

        lines.append(f"Total distance: {self._km(path.total_distance)}")
        lines.append(f"Transfers: {path.transfer_count}")
        return "\n".join(lines)

    def render_summary(self, path: Path) -> str:
        transfers = path.transfer_count
        return (
            f"{self.separator.join(path.stations)} "
            f"({self._km(path.total_distance)}, "
            f"{transfers} transfer{'s' if transfers != 1 else ''})"
        )

    def _km(self, distance: float) -> str:
        return f"{distance:.{self.distance_precision}f} km"
