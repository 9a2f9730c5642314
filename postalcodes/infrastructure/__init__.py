"""Infrastructure Layer: Contains concrete implementations and adapters.

Connects the application to the outside world (local disk, configuration
files, environment, logging) by implementing the interfaces defined in the
domain layer.
"""
