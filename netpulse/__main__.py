#!/usr/bin/env python3
"""
Netpulse CLI - Main entry point for module execution
"""

from netpulse.cli import main

if __name__ == "__main__":
    main()
