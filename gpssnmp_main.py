#!/usr/bin/env python3
"""
gpssnmp - poll gpsd for SNMP gauges
Command Line Entry Point
"""

import sys
from gpssnmp.cli import main as cli_main


def main():
    sys.exit(cli_main(sys.argv[1:]))


if __name__ == "__main__":
    main()
