"""
glyphspec.commands - CLI command implementations
"""
