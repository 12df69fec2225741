"""Torn API category bindings.

Each module binds one API category and defines a ``Selection`` enum and
a ``Response`` class. Modules are imported on demand by
:class:`torn_api.registry.CategoryRegistry` so disabled categories are
never loaded.
"""
