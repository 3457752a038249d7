"""Standalone NiceGUI app serving the sales dashboard."""
