"""
LayerZoom debug app - PyQt6 inspector for the scale bar.
"""
