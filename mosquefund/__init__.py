"""Mini README: Core package initializer for the mosque fund service.

The package is split into ``accounts`` (profiles, PIN sign-in, role
checks), ``finance`` (ledger records and balance folds), ``committee``
(directory entries), ``storage`` (the remote table collaborator) and
``interface`` (HTTP views). Only the logging helper is re-exported here so
importing the package stays free of web or database dependencies.
"""

from .logging_utils import get_logger

__all__ = ["get_logger"]
