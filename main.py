#!/usr/bin/env python
"""
Lab Label Service - Standalone Entry Point

Run directly:
    python main.py

Or with environment variables:
    LAB_LABEL_PORT=5200 LAB_LABEL_LANGUAGE=zpl python main.py
"""

import os
import sys

# Ensure package is importable when running directly
if __name__ == '__main__':
    parent_dir = os.path.dirname(os.path.abspath(__file__))
    if parent_dir not in sys.path:
        sys.path.insert(0, parent_dir)

from lab_label_service.app import main


if __name__ == '__main__':
    main()
