#!/usr/bin/env python3
"""
Wrapper script to run the exporter without installing it.

Usage:
    python run_exporter.py [options]

Examples:
    python run_exporter.py --kube.context=my-cluster --scrape.interval=60
    python run_exporter.py --debug
"""

from kuberes.cli import main

if __name__ == '__main__':
    main(prog_name="kuberes-exporter")
