class CatalogError(Exception):
    """Base class for failures reported to the browser as plain text."""

    status_code = 500


class ValidationError(CatalogError):
    status_code = 400


class NotFound(CatalogError):
    status_code = 404


class MethodNotAllowed(CatalogError):
    status_code = 405


class StoreError(CatalogError):
    status_code = 500
