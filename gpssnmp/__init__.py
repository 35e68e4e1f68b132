"""
gpssnmp - poll a local gpsd once and report satellite gauges for SNMP.
"""

__version__ = "0.1"

from gpssnmp.data_models import SatelliteRecord, SatelliteReport, GpsdReport, MetricSet
from gpssnmp.gpsd_client import GpsdClient
from gpssnmp.metrics import aggregate
from gpssnmp.oid_table import lookup_oid, resolve
from gpssnmp.poll import wait_for_sky

__all__ = [
    "SatelliteRecord",
    "SatelliteReport",
    "GpsdReport",
    "MetricSet",
    "GpsdClient",
    "aggregate",
    "lookup_oid",
    "resolve",
    "wait_for_sky",
]
