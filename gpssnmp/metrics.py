"""
Aggregate metrics computed from a SKY report.
"""
from typing import Optional

import numpy as np

from gpssnmp.data_models import MetricSet, SatelliteReport
from gpssnmp.global_config import get_poll_settings


def total_used_snr(report: SatelliteReport, snr_floor: float) -> float:
    """Sum of ss over satellites that are used and above the floor."""
    if not report.satellites:
        return 0.0
    ss = np.array([sat.ss for sat in report.satellites], dtype=float)
    used = np.array([sat.used for sat in report.satellites], dtype=bool)
    mask = used & (ss > snr_floor)
    return float(ss[mask].sum())


def aggregate(report: SatelliteReport, snr_floor: Optional[float] = None) -> MetricSet:
    """
    Compute visible/used counts and the average SNR of used satellites.

    The average divides by the report's own used count, not by the number
    of records that passed the floor, so a used satellite without a reading
    pulls the average down.
    """
    if snr_floor is None:
        snr_floor = get_poll_settings().snr_floor

    used = report.satellites_used
    average_snr = 0.0
    if used > 0:
        average_snr = total_used_snr(report, snr_floor) / used

    return MetricSet(
        visible=report.satellites_visible,
        used=used,
        average_snr=average_snr,
    )
