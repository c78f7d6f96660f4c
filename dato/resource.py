import logging
from functools import wraps

from dato import signals
from dato.exceptions import ClientConfigurationError, NotFound, ValidationError, TransportError, error_for_status

logger = logging.getLogger(__name__)


def _operation(name):
    """
    Marks a method as one of the operations a :class:`ResourceDescriptor` may or may not offer.
    """
    def decorator(method):
        @wraps(method)
        def wrapper(self, *args, **kwargs):
            if not self.descriptor.supports(name):
                raise ClientConfigurationError('{} does not support "{}"'.format(self.descriptor.type, name))
            return method(self, *args, **kwargs)

        wrapper.operation = name
        return wrapper
    return decorator


class ResourceClient(object):
    """
    Generic CRUD client for one resource kind, configured by a :class:`dato.schema.ResourceDescriptor`.

    Every method performs exactly one request and returns entity records as flat dictionaries. Unsuccessful
    responses are raised as :class:`NotFound` (404), :class:`ValidationError` (422) or :class:`TransportError`
    (anything else). Problems that can be detected locally raise :class:`ClientConfigurationError` before any
    request is made.

    .. method:: all

        Lists the resources of the collection.

        :param dict filters: query string parameters passed verbatim, e.g. ``{"filter[type]": "12"}``
        :param parent_id: id of the parent resource, required for nested resources
        :return: list of records

    .. method:: find

        :param id: resource id; omitted for singleton resources
        :return: record

    .. method:: create

        :param dict properties: attributes and relationships
        :param parent_id: id of the parent resource, required for nested resources
        :return: created record, including any server-assigned defaults

    .. method:: update

        Partial updates are allowed: names missing from ``properties`` are left untouched.

        :param id: resource id; omitted for singleton resources
        :param dict properties: changes
        :return: updated record

    .. method:: destroy

        :param id: resource id
        :return: the deleted record, or ``None``

    """

    def __init__(self, descriptor, transport):
        self.descriptor = descriptor
        self.transport = transport

    def _request(self, method, path, body=None, params=None):
        try:
            return self.transport.request(method, path, body=body, params=params)
        except TransportError as e:
            if e.status in (NotFound.status_code, ValidationError.status_code):
                raise error_for_status(e.status, e.body) from e
            raise

    def _records(self, response):
        if response is None:
            return None
        return self.descriptor.deserialize(response.get('data'))

    @_operation('all')
    def all(self, filters=None, parent_id=None):
        path = self.descriptor.collection_path(parent_id)
        return self._records(self._request('GET', path, params=dict(filters or {}))) or []

    @_operation('find')
    def find(self, id=None):
        return self._records(self._request('GET', self.descriptor.member_path(id)))

    @_operation('create')
    def create(self, properties, parent_id=None):
        path = self.descriptor.collection_path(parent_id)
        body = self.descriptor.serialize(properties)

        signals.before_create.send(self, properties=properties)
        item = self._records(self._request('POST', path, body=body))
        signals.after_create.send(self, item=item)

        logger.info('Created %s %s', self.descriptor.type, item and item['id'])
        return item

    @_operation('update')
    def update(self, id, properties=None):
        if self.descriptor.singleton and properties is None:
            id, properties = None, id

        path = self.descriptor.member_path(id)
        body = self.descriptor.serialize(properties, id=id, update=True)

        signals.before_update.send(self, id=id, properties=properties)
        item = self._records(self._request('PUT', path, body=body))
        signals.after_update.send(self, item=item)
        return item

    @_operation('destroy')
    def destroy(self, id):
        path = self.descriptor.member_path(id)

        signals.before_destroy.send(self, id=id)
        item = self._records(self._request('DELETE', path))
        signals.after_destroy.send(self, id=id, item=item)

        logger.info('Destroyed %s %s', self.descriptor.type, id)
        return item

    @_operation('duplicate')
    def duplicate(self, id):
        """
        Asks the service to copy a resource. Any identifying names of the copy are chosen by the service.

        :param id: id of the resource to copy
        :return: the copy
        """
        return self._records(self._request('POST', self.descriptor.action_path(id, 'duplicate')))

    @_operation('trigger')
    def trigger(self, id):
        """
        Fires the server-side action of a resource, e.g. a deploy of a deployment environment.
        """
        self._request('POST', self.descriptor.action_path(id, 'trigger'))

    def __repr__(self):
        return '<ResourceClient {}>'.format(self.descriptor.type)
