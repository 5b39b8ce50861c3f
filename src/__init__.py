"""
Battery Pack Designer - Main Package
====================================

Layout engine behind the battery pack CAD tool.

This package provides:
- Pack Designer (pack_designer): series/parallel enumeration, 3D grid
  layouts, ranking and manufacturing export for battery packs

Author: Battery Pack Designer Team
License: See LICENSE file in project root
"""

__version__ = "0.1.0"
__author__ = "Battery Pack Designer Team"
