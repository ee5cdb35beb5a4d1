from fastapi import HTTPException, status


class MarketplaceError(HTTPException):
    """Base for domain errors; FastAPI renders them as ``{"detail": ...}``."""
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request failed"

    def __init__(self, detail: str = None, headers: dict = None):
        super().__init__(
            status_code=self.status_code,
            detail=detail or self.default_detail,
            headers=headers,
        )


class AuthError(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Invalid login credentials"


class AuthRequired(MarketplaceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Please sign in to continue"


class PermissionDenied(MarketplaceError):
    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Not enough permissions"


class NotFoundError(MarketplaceError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found"


class InvalidAvailability(MarketplaceError):
    default_detail = "availability_start must be on or before availability_end"


class ConfirmationRequired(MarketplaceError):
    default_detail = "Deletion must be confirmed"


class CatalogUnavailable(MarketplaceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Error loading products"


class FavoriteUpdateFailed(MarketplaceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Error updating favorites"


class AlreadyRegistered(AuthError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "User already registered"


class DataUnavailable(MarketplaceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Error loading data"


class SaveFailed(MarketplaceError):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Error saving changes"
