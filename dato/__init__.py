__version__ = '0.1.0'

from .exceptions import (DatoException, ClientConfigurationError, ApiError, NotFound, ValidationError,
                         TransportError, FieldError)
from .schema import ResourceDescriptor
from .resource import ResourceClient
from .transport import Transport
from .client import SiteClient, AccountClient

__all__ = (
    'SiteClient',
    'AccountClient',
    'ResourceClient',
    'ResourceDescriptor',
    'Transport',
    'DatoException',
    'ClientConfigurationError',
    'ApiError',
    'NotFound',
    'ValidationError',
    'TransportError',
    'FieldError',
    'fields',
    'field_types',
    'resources',
    'signals',
    'uploads',
)
