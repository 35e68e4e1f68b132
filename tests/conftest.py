import json
import logging
import socket
import threading
import time

import pytest

from gpssnmp.data_models import GpsdReport
from gpssnmp.global_config import get_global_config


def sky_object(satellites, n_sat=None, u_sat=None, device="/dev/ttyUSB0"):
    """Build a gpsd SKY object; satellites is a list of (prn, ss, used)."""
    obj = {
        "class": "SKY",
        "device": device,
        "satellites": [{"PRN": prn, "ss": ss, "used": used} for prn, ss, used in satellites],
    }
    if n_sat is not None:
        obj["nSat"] = n_sat
    if u_sat is not None:
        obj["uSat"] = u_sat
    return obj


def sky_report(satellites, n_sat=None, u_sat=None):
    return GpsdReport.from_json(sky_object(satellites, n_sat, u_sat))


def tpv_report():
    return GpsdReport.from_json({"class": "TPV", "mode": 1})


class FakeClock:
    """Manually advanced clock, or a scripted sequence of readings."""

    def __init__(self, start=1000.0, script=None):
        self.now = start
        self.script = list(script) if script else None

    def __call__(self):
        if self.script:
            self.now = self.script.pop(0)
        return self.now

    def advance(self, seconds):
        self.now += seconds


class FakeClient:
    """
    Stand-in for GpsdClient driven by a list of reports.

    Reports that are exceptions are raised from read(). Once the list runs
    out, read() keeps returning TPV reports.
    """

    def __init__(self, reports=(), ready=True, clock=None, step=1.0):
        self.reports = list(reports)
        self.ready = ready
        self.clock = clock
        self.step = step
        self.waits = []
        self.reads = 0

    def waiting(self, timeout):
        self.waits.append(timeout)
        if self.clock is not None:
            # a silent daemon makes the caller sit out the whole slice
            self.clock.advance(self.step if self.ready else timeout)
        return self.ready

    def read(self):
        self.reads += 1
        item = self.reports.pop(0) if self.reports else tpv_report()
        if isinstance(item, Exception):
            raise item
        return item


@pytest.fixture(autouse=True)
def reset_config():
    get_global_config().reset()
    yield
    get_global_config().reset()
    package_logger = logging.getLogger("gpssnmp")
    package_logger.handlers.clear()
    package_logger.setLevel(logging.NOTSET)


@pytest.fixture
def gpsd_server():
    """
    One-shot TCP server that records the first request and replays lines.

    Usage: port, received = gpsd_server([b'{"class":"VERSION"}\\n', ...])
    """
    threads = []

    def start(lines, linger=0.0):
        srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        srv.bind(("127.0.0.1", 0))
        srv.listen(1)
        received = []

        def run():
            conn, _ = srv.accept()
            with conn:
                received.append(conn.recv(1024))
                for line in lines:
                    conn.sendall(line)
                if linger:
                    time.sleep(linger)
            srv.close()

        thread = threading.Thread(target=run, daemon=True)
        thread.start()
        threads.append(thread)
        return srv.getsockname()[1], received

    yield start
    for thread in threads:
        thread.join(timeout=5)


def encode(obj):
    return (json.dumps(obj) + "\n").encode()
