#!/usr/bin/env python3
"""Main entry point for the Course Registration System."""

import sys

from registrar.cli import main


if __name__ == '__main__':
    sys.exit(main())
