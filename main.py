#!/usr/bin/env python3
"""TirTimer entry point.

Run with:
    python main.py [--debug]
    python -m tirtimer [--debug]
"""

from tirtimer.__main__ import main


if __name__ == "__main__":
    main()
