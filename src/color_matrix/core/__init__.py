"""
Core modules for color-matrix
"""
