"""
A colourful, column-aware directory listing tool.
"""
