"""
Configuration package for Sentilyser.
"""
