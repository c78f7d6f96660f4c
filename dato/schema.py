from collections import OrderedDict
from functools import cached_property

from jsonschema import Draft4Validator, FormatChecker

from dato.exceptions import ClientConfigurationError
from dato.fields import ToOne, ToMany
from dato.utils import type_to_path

OPERATIONS = ('all', 'find', 'create', 'update', 'destroy')

ACTIONS = ('duplicate', 'trigger')


class ResourceDescriptor(object):
    """
    Static description of a resource kind of the remote API. Descriptors are immutable and shared by every
    :class:`dato.resource.ResourceClient` bound to them.

    ======================  ==============================  =========================================================
    Attribute name          Default                         Description
    ======================  ==============================  =========================================================
    type                    ---                             JSON:API type identifier, e.g. ``"item_type"``
    attributes              ``{}``                          Dictionary of attribute name to :class:`fields.Raw`
    relationships           ``{}``                          Dictionary of relationship name to :class:`fields.ToOne`
                                                            or :class:`fields.ToMany`
    path                    pluralized, dashed ``type``     Collection path segment, e.g. ``"item-types"``
    nested_under            ``None``                        Type of the parent resource; listing and creation then
                                                            happen under ``/<parent path>/<parent id>/<path>``
    read_only_fields        ``()``                          Names returned by the service that are silently dropped
                                                            from create and update payloads
    free_form               ``False``                       Whether undeclared names are sent as plain attributes
    singleton               ``False``                       Whether the resource is addressed without an id
    actions                 ``()``                          Extra member operations: ``"duplicate"``, ``"trigger"``
    exclude_operations      ``()``                          Standard operations the remote API does not offer
    ======================  ==============================  =========================================================

    Usage example:

    .. code-block:: python

        menu_item = ResourceDescriptor(
            'menu_item',
            attributes={
                'label': fields.String(),
                'position': fields.Integer(nullable=True)
            },
            relationships={
                'parent': fields.ToOne('menu_item'),
                'item_type': fields.ToOne('item_type')
            })

    """

    def __init__(self,
                 type,
                 attributes=None,
                 relationships=None,
                 path=None,
                 nested_under=None,
                 read_only_fields=(),
                 free_form=False,
                 singleton=False,
                 actions=(),
                 exclude_operations=()):
        self.type = type
        self.attributes = OrderedDict(attributes or ())
        self.relationships = OrderedDict(relationships or ())
        self.path = path or type_to_path(type)
        self.nested_under = nested_under
        self.read_only_fields = frozenset(read_only_fields)
        self.free_form = free_form
        self.singleton = singleton
        self.actions = tuple(actions)
        self.exclude_operations = frozenset(exclude_operations)

        if singleton:
            self.exclude_operations |= {'all', 'create', 'destroy'}

        overlap = set(self.attributes) & set(self.relationships)
        if overlap:
            raise ClientConfigurationError('{} declared both as attribute and relationship of {}'
                                           .format(', '.join(sorted(overlap)), type))

        for name, field in self.relationships.items():
            if not isinstance(field, (ToOne, ToMany)):
                raise ClientConfigurationError('Relationship "{}" of {} must be a ToOne or ToMany field'
                                               .format(name, type))

        for action in self.actions:
            if action not in ACTIONS:
                raise ClientConfigurationError('Unknown action "{}" for {}'.format(action, type))

    @property
    def fields(self):
        fields = OrderedDict(self.attributes)
        fields.update(self.relationships)
        return fields

    def supports(self, operation):
        if operation in ACTIONS:
            return operation in self.actions
        return operation in OPERATIONS and operation not in self.exclude_operations

    # paths

    def _parent_path(self, parent_id):
        if parent_id is None:
            raise ClientConfigurationError('{} is nested under {}; a parent id is required'
                                           .format(self.type, self.nested_under))
        return '/{}/{}'.format(type_to_path(self.nested_under), parent_id)

    def collection_path(self, parent_id=None):
        if self.nested_under:
            return '{}/{}'.format(self._parent_path(parent_id), self.path)
        return '/{}'.format(self.path)

    def member_path(self, id=None):
        if self.singleton:
            return '/{}'.format(self.path)
        if id is None or id == '':
            raise ClientConfigurationError('An id is required to address a single {}'.format(self.type))
        return '/{}/{}'.format(self.path, id)

    def action_path(self, id, action):
        return '{}/{}'.format(self.member_path(id), action)

    # request shaping

    def _schema(self, io):
        return {
            "type": "object",
            "additionalProperties": self.free_form,
            "properties": OrderedDict((
                (key, field.schema()) for key, field in self.fields.items() if io in field.io))
        }

    @cached_property
    def _create_validator(self):
        schema = self._schema('c')
        Draft4Validator.check_schema(schema)
        return Draft4Validator(schema, format_checker=FormatChecker())

    @cached_property
    def _update_validator(self):
        schema = self._schema('u')
        Draft4Validator.check_schema(schema)
        return Draft4Validator(schema, format_checker=FormatChecker())

    def _is_writable(self, key, update):
        if key in ('id', 'meta') or key in self.read_only_fields:
            return False
        field = self.fields.get(key)
        if field is None:
            return True
        return ('u' if update else 'c') in field.io

    def validate(self, properties, update=False):
        """
        Drops read-only names from ``properties`` and validates the remainder.

        :param dict properties: attributes and relationships of an entity record
        :param bool update: whether the properties are meant for an update
        :raises ClientConfigurationError: if names are not declared or values do not match their fields
        :return: a new dictionary with the writable properties
        """
        if not isinstance(properties, dict):
            raise ClientConfigurationError('Properties for {} must be a dictionary, got {}'
                                           .format(self.type, properties.__class__.__name__))

        data = OrderedDict((key, value) for key, value in properties.items() if self._is_writable(key, update))

        validator = self._update_validator if update else self._create_validator
        problems = []
        for error in validator.iter_errors(data):
            path = '.'.join(str(p) for p in error.absolute_path)
            problems.append('{}: {}'.format(path, error.message) if path else error.message)

        if problems:
            raise ClientConfigurationError('Invalid properties for {}: {}'.format(self.type, '; '.join(problems)),
                                           problems)
        return data

    def serialize(self, properties, id=None, update=False):
        """
        Builds the JSON:API request envelope for a create or update request.

        Relationship names become relationship references; every other name becomes a plain attribute.

        :raises ClientConfigurationError: as :meth:`validate`
        """
        data = self.validate(properties, update=update)

        attributes = OrderedDict()
        relationships = OrderedDict()

        for key, value in data.items():
            if key in self.relationships:
                relationships[key] = self.relationships[key].relationship(value)
            elif key in self.attributes:
                attributes[key] = self.attributes[key].format(value)
            else:
                attributes[key] = value

        resource = OrderedDict([("type", self.type)])
        if id is not None:
            resource["id"] = str(id)
        resource["attributes"] = attributes
        if relationships:
            resource["relationships"] = relationships
        return {"data": resource}

    def deserialize(self, data):
        """
        Flattens a JSON:API resource object (or a list of them) into entity records: the ``id``, every attribute,
        and every relationship as the related id (or list of ids).
        """
        if data is None:
            return None
        if isinstance(data, list):
            return [self.deserialize(item) for item in data]

        record = {"id": data.get("id")}
        record.update(data.get("attributes") or {})

        for key, relationship in (data.get("relationships") or {}).items():
            linkage = relationship.get("data") if isinstance(relationship, dict) else None
            if key in self.relationships:
                record[key] = self.relationships[key].convert(linkage)
            elif isinstance(linkage, list):
                record[key] = [reference["id"] for reference in linkage]
            elif linkage:
                record[key] = linkage["id"]
            else:
                record[key] = None

        if "meta" in data:
            record["meta"] = data["meta"]
        return record

    def __repr__(self):
        return '<ResourceDescriptor {}>'.format(self.type)
