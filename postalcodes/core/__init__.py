"""Core Application Layer: region queries over cached country data.

Connects the domain layer with the infrastructure layer through interfaces.
"""
