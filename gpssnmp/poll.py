"""
Poll loop: drive a gpsd session until a satellite report shows up.
"""
import logging
import time
from typing import Callable, Optional

from gpssnmp.data_models import SatelliteReport
from gpssnmp.errors import PollTimeout
from gpssnmp.global_config import get_poll_settings

logger = logging.getLogger(__name__)

# Shortest wait handed to the transport once the deadline is nearly spent
MIN_WAIT_SLICE = 0.1


def wait_for_sky(
    client,
    timeout: Optional[float] = None,
    wait_slice: Optional[float] = None,
    clock: Callable[[], float] = time.time,
) -> SatelliteReport:
    """
    Block until `client` delivers a SKY report or `timeout` seconds pass.

    Args:
        client: open session exposing waiting(seconds) and read()
        timeout: overall deadline, defaults to the configured poll timeout
        wait_slice: longest single wait, defaults to the configured slice
        clock: wall clock in seconds

    Returns:
        SatelliteReport from the first report that carries satellites

    Raises:
        PollTimeout: the deadline passed first
        TransportFailure: propagated from client.read(), never retried
    """
    settings = get_poll_settings()
    if timeout is None:
        timeout = settings.timeout
    if wait_slice is None:
        wait_slice = settings.wait_slice

    start = clock()
    elapsed = 0.0
    while True:
        slice_ = min(wait_slice, max(timeout - elapsed, MIN_WAIT_SLICE))
        if client.waiting(slice_):
            report = client.read()
            if report.has_satellites:
                logger.info(
                    "SKY received after %.1fs: %d visible, %d used",
                    elapsed, report.sky.satellites_visible, report.sky.satellites_used,
                )
                return report.sky
            if report.klass:
                logger.debug("Skipping %s report", report.klass)

        # abs() so a clock stepped backwards still counts as time passing
        elapsed = abs(clock() - start)
        if elapsed > timeout:
            logger.warning("No SKY report within %.1fs", timeout)
            raise PollTimeout(timeout)
