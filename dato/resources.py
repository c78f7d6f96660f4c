"""
Descriptors of the resources exposed by the site and account APIs.
"""
from collections import OrderedDict

from dato import fields
from dato.schema import ResourceDescriptor

ITEM_TYPE = ResourceDescriptor(
    'item_type',
    attributes={
        'name': fields.String(),
        'api_key': fields.String(),
        'singleton': fields.Boolean(),
        'sortable': fields.Boolean(),
        'modular_block': fields.Boolean(),
        'tree': fields.Boolean(),
        'draft_mode_active': fields.Boolean(),
        'all_locales_required': fields.Boolean(),
        'ordering_direction': fields.String(enum=['asc', 'desc'], nullable=True),
        'collection_appeareance': fields.String(nullable=True)
    },
    relationships={
        'ordering_field': fields.ToOne('field'),
        'title_field': fields.ToOne('field'),
        'fields': fields.ToMany('field', io='r'),
        'singleton_item': fields.ToOne('item', io='r')
    },
    actions=('duplicate',))

FIELD = ResourceDescriptor(
    'field',
    attributes={
        'label': fields.String(),
        'field_type': fields.String(),
        'api_key': fields.String(),
        'hint': fields.String(nullable=True),
        'localized': fields.Boolean(),
        'validators': fields.Object(),
        'appeareance': fields.Object(),
        'position': fields.Integer(nullable=True),
        'default_value': fields.Any()
    },
    relationships={
        'item_type': fields.ToOne('item_type', io='r')
    },
    nested_under='item_type')

ITEM = ResourceDescriptor(
    'item',
    relationships={
        'item_type': fields.ToOne('item_type', nullable=False, io='cr'),
        'creator': fields.ToOne('user', io='r')
    },
    read_only_fields=('created_at', 'updated_at', 'is_valid', 'published_version', 'current_version'),
    free_form=True)

USER = ResourceDescriptor(
    'user',
    attributes={
        'email': fields.Email(),
        'first_name': fields.String(),
        'last_name': fields.String()
    },
    relationships={
        'role': fields.ToOne('role', nullable=False)
    },
    read_only_fields=('is_active', 'state'))

ROLE = ResourceDescriptor(
    'role',
    attributes={
        'name': fields.String(),
        'can_edit_site': fields.Boolean(),
        'can_edit_schema': fields.Boolean(),
        'can_manage_users': fields.Boolean(),
        'can_edit_favicon': fields.Boolean(),
        'can_publish_to_production': fields.Boolean(),
        'can_perform_site_search': fields.Boolean(),
        'positive_item_type_permissions': fields.Array(fields.Object()),
        'negative_item_type_permissions': fields.Array(fields.Object())
    },
    relationships={
        'inherits_permissions_from': fields.ToOne('role')
    })

MENU_ITEM = ResourceDescriptor(
    'menu_item',
    attributes={
        'label': fields.String(),
        'position': fields.Integer(nullable=True)
    },
    relationships={
        'parent': fields.ToOne('menu_item'),
        'item_type': fields.ToOne('item_type'),
        'children': fields.ToMany('menu_item', io='r')
    })

DEPLOYMENT_ENVIRONMENT = ResourceDescriptor(
    'deployment_environment',
    attributes={
        'name': fields.String(),
        'deploy_adapter': fields.String(),
        'deploy_settings': fields.Object(),
        'access_policy': fields.Any(),
        'frontend_url': fields.Uri(nullable=True),
        'spider_enabled': fields.Boolean(),
        'build_on_scheduled_publications': fields.Boolean()
    },
    read_only_fields=('deploy_status', 'last_deploy_completed_at'),
    actions=('trigger',))

SITE = ResourceDescriptor(
    'site',
    path='site',
    attributes={
        'name': fields.String(),
        'domain': fields.String(nullable=True),
        'internal_domain': fields.String(nullable=True),
        'locales': fields.Array(fields.String()),
        'timezone': fields.String(),
        'theme': fields.Object(),
        'global_seo': fields.Any(),
        'favicon': fields.Any(),
        'no_index': fields.Boolean(),
        'frontend_url': fields.Uri(nullable=True),
        'ssg': fields.String(nullable=True)
    },
    relationships={
        'account': fields.ToOne('account', io='r'),
        'item_types': fields.ToMany('item_type', io='r'),
        'menu_items': fields.ToMany('menu_item', io='r')
    },
    read_only_fields=('readonly_token', 'readwrite_token', 'deploy_status', 'last_deploy_completed_at'),
    singleton=True)

UPLOAD_REQUEST = ResourceDescriptor(
    'upload_request',
    attributes={
        'filename': fields.String(min_length=1)
    },
    read_only_fields=('url',),
    exclude_operations=('all', 'find', 'update', 'destroy'))

ACCOUNT = ResourceDescriptor(
    'account',
    path='account',
    attributes={
        'email': fields.Email(),
        'first_name': fields.String(),
        'last_name': fields.String(),
        'company': fields.String(nullable=True)
    },
    singleton=True)

ACCOUNT_SITE = ResourceDescriptor(
    'site',
    attributes={
        'name': fields.String(),
        'domain': fields.String(nullable=True),
        'internal_domain': fields.String(nullable=True),
        'notes': fields.String(nullable=True),
        'template': fields.String(nullable=True)
    },
    read_only_fields=('readonly_token', 'readwrite_token'),
    actions=('duplicate',))

SITE_RESOURCES = OrderedDict([
    ('item_types', ITEM_TYPE),
    ('fields', FIELD),
    ('items', ITEM),
    ('users', USER),
    ('roles', ROLE),
    ('menu_items', MENU_ITEM),
    ('deployment_environments', DEPLOYMENT_ENVIRONMENT),
    ('site', SITE),
    ('upload_requests', UPLOAD_REQUEST),
])

ACCOUNT_RESOURCES = OrderedDict([
    ('account', ACCOUNT),
    ('sites', ACCOUNT_SITE),
])
