"""Class Management package.

This package is organized by feature modules (users, classes, sessions,
assignments, reports) with a thin Flask controller layer over service and
repository layers backed by MongoDB.
"""

__version__ = "1.0.0"
