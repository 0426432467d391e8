"""Services package - exports backend collaborators."""

from .errors import ServiceError
from .catalog_client import CatalogClient, CatalogAIClient
from .basket_client import BasketClient
from .image_classifier import ImageClassifierClient
from .identity_service import IdentityService
from .attachment_client import AttachmentClient

__all__ = [
    "ServiceError",
    "CatalogClient",
    "CatalogAIClient",
    "BasketClient",
    "ImageClassifierClient",
    "IdentityService",
    "AttachmentClient",
]
