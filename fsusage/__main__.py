# Copyright (c) fsusage-analyzer Contributors.

"""
Allow running fsusage as a module: python -m fsusage
"""

from fsusage.cli import main

if __name__ == "__main__":
    main()
