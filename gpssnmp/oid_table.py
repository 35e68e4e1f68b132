"""
OID table: maps the SNMP object identifiers we answer for to MetricSet values.

The three OIDs are what existing snmpd `pass` configurations call us with and
must not change.
"""
from dataclasses import dataclass
from typing import Dict, Tuple, Type, Union

from gpssnmp.data_models import MetricSet
from gpssnmp.errors import UnknownIdentifier

OID_VISIBLE = ".1.3.6.1.2.1.25.1.31"
OID_USED = ".1.3.6.1.2.1.25.1.32"
OID_SNR_AVG = ".1.3.6.1.2.1.25.1.33"


@dataclass(frozen=True)
class IntegerMetric:
    oid: str
    value: int

    def render(self) -> str:
        return "%d" % self.value


@dataclass(frozen=True)
class FloatMetric:
    oid: str
    value: float

    def render(self) -> str:
        return "%f" % self.value


Metric = Union[IntegerMetric, FloatMetric]

# oid -> (MetricSet attribute, variant)
OID_TABLE: Dict[str, Tuple[str, Type]] = {
    OID_VISIBLE: ("visible", IntegerMetric),
    OID_USED: ("used", IntegerMetric),
    OID_SNR_AVG: ("average_snr", FloatMetric),
}


def is_known_oid(oid: str) -> bool:
    return oid in OID_TABLE


def resolve(oid: str, metrics: MetricSet) -> Metric:
    """
    Pick the metric named by `oid`.

    Raises:
        UnknownIdentifier: oid is not in OID_TABLE
    """
    try:
        attr, kind = OID_TABLE[oid]
    except KeyError:
        raise UnknownIdentifier(oid) from None
    return kind(oid, getattr(metrics, attr))


def format_metric(metric: Metric) -> str:
    return f"{metric.oid} = gauge: {metric.render()}"


def lookup_oid(oid: str, metrics: MetricSet) -> str:
    """Return the `<oid> = gauge: <value>` line for `oid`."""
    return format_metric(resolve(oid, metrics))
