#!/usr/bin/env python3
"""
Main entry point for the Leaf video service.

This script starts the HTTP API serving the video resource.
"""

from leaf_video.main import main

if __name__ == "__main__":
    main()
