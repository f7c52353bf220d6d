"""Data Access Objects (DAOs) for the registry's durable key-value slot.

Subpackages:
    base:   StorageBaseDAO interface
    memory: in-process storage (tests, ephemeral sessions)
    file:   single JSON file on local disk
"""
