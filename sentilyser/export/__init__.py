"""
Export adapters for Sentilyser.

- CSV: one row per trend point, UTF-8 with BOM
- PDF: rasterized report tiled over A4 pages
"""
