"""
Core Package

This package contains the track ingestion and rendering logic for trackheat.

Structure:
- gpx/ - GPX track parsing
- fit/ - Compressed FIT activity parsing
- validation - Coordinate filtering
- classify - Activity label to stroke colour mapping
- projection - Geographic to pixel transforms
- render - Canvas creation and polyline drawing
- pipeline - End-to-end orchestration

Usage:
Core modules are imported by the CLI layer. Do not import main.py from core.
"""
