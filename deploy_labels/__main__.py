#!/usr/bin/env python3
"""Entry point: python3 -m deploy_labels"""

from .cli import main

if __name__ == "__main__":
    main()
