#!/usr/bin/env python3
"""
TrayNotifier - Application Entry Point

Runs the notifier from a source checkout without installing it.

Usage:
  python app.py                      # port 8811, icon "sun"
  python app.py 8899 ok              # custom port and default icon
  python app.py --console-log        # mirror the log file on the console
"""

import os
import sys

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), 'src'))

from traynotifier.cli import main  # noqa: E402


if __name__ == "__main__":
    main()
