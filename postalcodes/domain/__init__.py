"""Domain Layer: value objects, region tree helpers, errors and ports.

Contains no I/O; everything here is shared by the core and infrastructure layers.
"""
