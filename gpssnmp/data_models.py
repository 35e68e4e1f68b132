"""
Data models for gpsd satellite reports and the metrics derived from them.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True)
class SatelliteRecord:
    """
    One tracked satellite inside a SKY report.
    """
    prn: int              # Satellite ID
    used: bool            # Contributed to the current fix
    ss: float = 0.0       # Signal to noise, dB-Hz (0.0 = not measured)

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "SatelliteRecord":
        return cls(
            prn=int(obj.get("PRN", 0)),
            used=bool(obj.get("used", False)),
            ss=float(obj.get("ss") or 0.0),
        )


@dataclass(frozen=True)
class SatelliteReport:
    """
    Snapshot of the sky for one poll.

    `satellites_used` and `satellites_visible` are the counts reported by the
    daemon; they are kept as received even when they disagree with the
    record list.
    """
    satellites_used: int
    satellites_visible: int
    satellites: Tuple[SatelliteRecord, ...] = ()
    device: Optional[str] = None

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "SatelliteReport":
        """
        Build a report from a decoded gpsd SKY object.

        Older daemons omit nSat/uSat, in which case the counts are derived
        from the satellite list the same way libgps does.
        """
        records = tuple(SatelliteRecord.from_json(s) for s in obj.get("satellites") or [])
        visible = obj.get("nSat")
        used = obj.get("uSat")
        if visible is None:
            visible = len(records)
        if used is None:
            used = sum(1 for r in records if r.used)
        return cls(
            satellites_used=int(used),
            satellites_visible=int(visible),
            satellites=records,
            device=obj.get("device"),
        )


@dataclass
class GpsdReport:
    """
    A single decoded object from the gpsd JSON stream.
    """
    klass: Optional[str]                 # gpsd "class" field, None if undecodable
    raw: Dict[str, Any] = field(default_factory=dict)
    sky: Optional[SatelliteReport] = None

    @property
    def has_satellites(self) -> bool:
        return self.sky is not None

    @classmethod
    def from_json(cls, obj: Dict[str, Any]) -> "GpsdReport":
        klass = obj.get("class")
        sky = None
        # SKY objects without a satellite list only carry DOP updates
        if klass == "SKY" and "satellites" in obj:
            sky = SatelliteReport.from_json(obj)
        return cls(klass=klass, raw=obj, sky=sky)


@dataclass(frozen=True)
class MetricSet:
    """
    Aggregate values computed from one SatelliteReport.
    """
    visible: int = 0
    used: int = 0
    average_snr: float = 0.0
