"""
Order administration from the command line.
Run this as: python manage_orders.py --help
"""
import logging
import sys

from app.modules.orders.client.cli import main

logging.basicConfig(level=logging.WARNING, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

if __name__ == "__main__":
    sys.exit(main())
