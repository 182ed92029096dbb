from __future__ import annotations

"""Peak reference data and peak-request resolution.

`PeakCatalog` is the name -> Peak lookup over the NH 4000-footer list.
`PeakResolver` turns a free-text request ("the Bonds", "Mt. Washington and Adams",
"Lafayette") into a PeakGroup with a combined duration:

    combined = max(default duration of each peak) + extra_peak_hours * (count - 1)

Linked peaks cost extra time even though the base duration is the hardest single
peak of the group.
"""

import csv
import io
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple, Union

from ..core.errors import NotFoundError
from ..core.schemas import Peak, PeakGroup
from ..core.settings import PeakSettings
from ..utils.names import normalize_peak_name, split_peak_list
from .durations import DurationTable


logger = logging.getLogger(__name__)

_PACKAGE_ROOT = __package__.rsplit(".", 1)[0]
PEAKS_CSV = "nh48.csv"


@dataclass(frozen=True)
class PeakCatalog:
    """Immutable peak list indexed by normalized name."""
    peaks: Tuple[Peak, ...]
    _index: Mapping[str, Peak] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        index: Dict[str, Peak] = {}
        for peak in self.peaks:
            key = normalize_peak_name(peak.name)
            if key in index:
                raise ValueError(
                    f"Peak names collide after normalization: {index[key].name!r} and {peak.name!r}"
                )
            index[key] = peak
        object.__setattr__(self, "_index", MappingProxyType(index))

    @classmethod
    def from_rows(cls, rows: Iterable[Mapping[str, str]]) -> "PeakCatalog":
        peaks = []
        for row in rows:
            elevation = row.get("elevation_ft") or row.get("elevation")
            peaks.append(
                Peak(
                    name=(row.get("peak") or "").strip(),
                    elevation_ft=float(elevation),
                    lat=float(row["lat"]),
                    lon=float(row["lon"]),
                )
            )
        return cls(peaks=tuple(peaks))

    @classmethod
    def from_csv(cls, path: Optional[Union[str, Path]] = None) -> "PeakCatalog":
        """Load a `peak,elevation_ft,lat,lon` CSV (default: the packaged NH48 list)."""
        if path is None:
            text = resources.files(_PACKAGE_ROOT).joinpath("data").joinpath(PEAKS_CSV).read_text(encoding="utf-8")
        else:
            text = Path(path).read_text(encoding="utf-8")
        reader = csv.DictReader(io.StringIO(text), skipinitialspace=True)
        return cls.from_rows(row for row in reader if any((v or "").strip() for v in row.values()))

    def find(self, name: str) -> Optional[Peak]:
        return self._index.get(normalize_peak_name(name))

    def get(self, name: str) -> Peak:
        peak = self.find(name)
        if peak is None:
            raise NotFoundError(name)
        return peak

    def all(self) -> List[Peak]:
        return list(self.peaks)

    def __len__(self) -> int:
        return len(self.peaks)


@dataclass(frozen=True)
class PeakResolver:
    catalog: PeakCatalog
    durations: DurationTable
    group_aliases: Mapping[str, Sequence[str]] = field(default_factory=dict)
    extra_peak_hours: float = 1.0

    def __post_init__(self) -> None:
        aliases = {normalize_peak_name(k): tuple(v) for k, v in self.group_aliases.items()}
        object.__setattr__(self, "group_aliases", MappingProxyType(aliases))

    @classmethod
    def from_settings(cls, peaks: PeakSettings, catalog: Optional[PeakCatalog] = None) -> "PeakResolver":
        return cls(
            catalog=catalog or PeakCatalog.from_csv(peaks.data_path),
            durations=DurationTable.from_settings(peaks),
            group_aliases=peaks.group_aliases,
            extra_peak_hours=peaks.extra_peak_hours,
        )

    def peak_names(self, request: str) -> List[str]:
        """Expand a request into individual peak names (not yet looked up).

        Group aliases win over list splitting, so "franconia ridge" is never split
        even if an alias name happened to contain "and".
        """
        target = normalize_peak_name(request)

        if target in self.group_aliases:
            names = list(self.group_aliases[target])
            logger.debug("alias %r -> %s", target, names)
            return names

        # split the original text so a NotFoundError names what the user typed
        parts = split_peak_list(request or "")
        if len(parts) > 1:
            return parts
        return [parts[0] if parts else (request or "").strip()]

    def resolve(self, request: str) -> PeakGroup:
        """Resolve a request; any unknown name fails the whole request."""
        peaks = [self.catalog.get(name) for name in self.peak_names(request)]
        return self.combine(peaks)

    def combine(self, peaks: Sequence[Peak]) -> PeakGroup:
        if not peaks:
            raise ValueError("at least one peak is required")
        base = max(self.durations.default_duration_hours(p.name) for p in peaks)
        combined = base + self.extra_peak_hours * (len(peaks) - 1)
        return PeakGroup(peaks=tuple(peaks), combined_duration_hours=combined)
