"""
Client configuration module.

Default parameters, YAML-backed loading with override precedence, and
validation of channel and display settings.
"""
