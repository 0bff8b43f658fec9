"""Matplotlib figures for heralding calculations."""
