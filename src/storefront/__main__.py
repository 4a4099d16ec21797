#!/usr/bin/env python3
"""Storefront - Module entry point."""
from storefront.gui.store_window import main

if __name__ == "__main__":
    main()
