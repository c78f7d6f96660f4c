import os
from unittest import mock

from dato import SiteClient
from dato.client import BaseClient
from dato.exceptions import ClientConfigurationError, NotFound, ValidationError, TransportError
from tests import BaseTestCase, ARTICLE


class SiteClientTestCase(BaseTestCase):

    def setUp(self):
        super(SiteClientTestCase, self).setUp()
        self.client = self.site_client()

    def test_not_found(self):
        with self.assertRaises(NotFound) as cx:
            self.client.item_types.find(44)

        self.assertEqual(404, cx.exception.status)
        self.assertEqual('NOT_FOUND', cx.exception.body['data'][0]['attributes']['code'])

    def test_item_types(self):
        new_item_type = self.client.item_types.create(ARTICLE)

        self.assertEqual(1, len(self.client.item_types.all()))

        changes = dict(new_item_type)
        changes.update(name='Post', api_key='post')
        self.client.item_types.update(new_item_type['id'], changes)

        self.assertEqual('post', self.client.item_types.find(new_item_type['id'])['api_key'])

        duplicate = self.client.item_types.duplicate(new_item_type['id'])

        self.assertEqual('post_copy_1', self.client.item_types.find(duplicate['id'])['api_key'])

        self.client.item_types.destroy(new_item_type['id'])

        self.assertEqual(1, len(self.client.item_types.all()))

    def test_create_then_find_returns_same_attributes(self):
        created = self.client.item_types.create(ARTICLE)
        found = self.client.item_types.find(created['id'])

        for key, value in ARTICLE.items():
            self.assertEqual(value, found[key], key)
        self.assertEqual(created, found)

    def test_create_and_destroy_restore_listing_size(self):
        before = len(self.client.menu_items.all())
        menu_item = self.client.menu_items.create({'label': 'Parent', 'position': 99, 'item_type': None})

        self.assertEqual(before + 1, len(self.client.menu_items.all()))

        self.client.menu_items.destroy(menu_item['id'])

        self.assertEqual(before, len(self.client.menu_items.all()))

        with self.assertRaises(NotFound):
            self.client.menu_items.find(menu_item['id'])

        with self.assertRaises(NotFound):
            self.client.menu_items.destroy(menu_item['id'])

    def test_partial_update_leaves_other_attributes_untouched(self):
        item_type = self.client.item_types.create(ARTICLE)
        self.client.item_types.update(item_type['id'], {'name': 'Post'})

        updated = self.client.item_types.find(item_type['id'])
        self.assertEqual('Post', updated['name'])
        self.assertEqualWithout(item_type, updated, ['name'])

    def test_validation_error(self):
        self.client.item_types.create(ARTICLE)

        with self.assertRaises(ValidationError) as cx:
            self.client.item_types.create(ARTICLE)

        self.assertEqual(422, cx.exception.status)
        self.assertEqual('api_key', cx.exception.errors[0].field)
        self.assertEqual('VALIDATION_UNIQUE', cx.exception.errors[0].code)

    def test_update_missing_resource(self):
        with self.assertRaises(NotFound) as cx:
            self.client.item_types.update('44', {'name': 'Post'})

        self.assertEqual(404, cx.exception.status)

    def test_update_validation_error(self):
        self.client.item_types.create(ARTICLE)
        post = self.client.item_types.create(dict(ARTICLE, name='Post', api_key='post'))

        with self.assertRaises(ValidationError) as cx:
            self.client.item_types.update(post['id'], {'api_key': 'article'})

        self.assertEqual(422, cx.exception.status)
        self.assertEqual(('api_key', 'VALIDATION_UNIQUE'), cx.exception.errors[0][:2])
        self.assertEqual('post', self.client.item_types.find(post['id'])['api_key'])

    def test_unknown_attribute(self):
        properties = dict(ARTICLE, colour='red')
        requests_before = len(self.app.received)

        with self.assertRaises(ClientConfigurationError):
            self.client.item_types.create(properties)

        self.assertEqual(requests_before, len(self.app.received))

    def test_menu_items(self):
        item_type = self.client.item_types.create(ARTICLE)
        parent_menu_item = self.client.menu_items.create({'label': 'Parent', 'position': 99, 'item_type': None})

        new_menu_item = self.client.menu_items.create({
            'label': 'Articles',
            'position': 99,
            'parent': parent_menu_item['id'],
            'item_type': item_type['id']
        })

        self.client.menu_items.update(new_menu_item['id'], dict(new_menu_item, label='Manage articles'))

        self.assertEqual(2, len(self.client.menu_items.all()))
        found = self.client.menu_items.find(new_menu_item['id'])
        self.assertEqual('Manage articles', found['label'])
        self.assertEqual(parent_menu_item['id'], found['parent'])
        self.assertEqual(item_type['id'], found['item_type'])

        self.client.menu_items.destroy(new_menu_item['id'])
        self.assertEqual(1, len(self.client.menu_items.all()))

    def test_fields(self):
        item_type = self.client.item_types.create(ARTICLE)

        new_field = self.client.fields.create({
            'api_key': 'title',
            'field_type': 'string',
            'label': 'Title',
            'validators': {'required': {}}
        }, parent_id=item_type['id'])

        self.assertEqual(1, len(self.client.fields.all(parent_id=item_type['id'])))
        self.assertEqual(item_type['id'], new_field['item_type'])
        self.assertEqual([new_field['id']], self.client.item_types.find(item_type['id'])['fields'])

        appeareance = {k: v for k, v in new_field['appeareance'].items() if k != 'type'}
        self.client.fields.update(new_field['id'], dict(new_field, label='Article title', appeareance=appeareance))

        self.assertEqual('Article title', self.client.fields.find(new_field['id'])['label'])

        self.client.fields.destroy(new_field['id'])
        self.assertEqual(0, len(self.client.fields.all(parent_id=item_type['id'])))

    def test_fields_of_missing_item_type(self):
        with self.assertRaises(NotFound):
            self.client.fields.all(parent_id='44')

    def test_items(self):
        item_type = self.client.item_types.create(ARTICLE)
        self.client.fields.create({'api_key': 'title', 'field_type': 'string', 'label': 'Title'},
                                  parent_id=item_type['id'])

        new_item = self.client.items.create({
            'item_type': item_type['id'],
            'title': 'First post'
        })

        self.assertEqual(1, len(self.client.items.all({'filter[type]': item_type['id']})))
        self.assertEqual({'filter[type]': item_type['id']}, self.last_request['args'])

        self.client.items.update(new_item['id'], dict(new_item, title='Welcome!'))

        found = self.client.items.find(new_item['id'])
        self.assertEqual('Welcome!', found['title'])
        self.assertEqual(item_type['id'], found['item_type'])

        self.client.items.destroy(new_item['id'])
        self.assertEqual(0, len(self.client.items.all({'filter[type]': item_type['id']})))

    def test_items_require_item_type(self):
        with self.assertRaises(ValidationError) as cx:
            self.client.items.create({'title': 'Orphan'})

        self.assertEqual('item_type', cx.exception.errors[0].field)

    def test_deployment_environments(self):
        env = self.client.deployment_environments.create({
            'access_policy': None,
            'deploy_adapter': 'custom',
            'spider_enabled': False,
            'build_on_scheduled_publications': False,
            'deploy_settings': {'trigger_url': 'https://www.google.com'},
            'frontend_url': None,
            'name': 'Foo'
        })

        self.assertEqual(1, len(self.client.deployment_environments.all()))

        self.assertIsNone(self.client.deployment_environments.trigger(env['id']))
        self.assertEqual([env['id']], self.app.triggered)

    def test_deployment_environment_with_invalid_url(self):
        with self.assertRaises(ClientConfigurationError):
            self.client.deployment_environments.create({
                'name': 'Foo',
                'deploy_adapter': 'custom',
                'frontend_url': 'not a url'
            })

    def test_users(self):
        role = self.client.roles.all()[0]

        user = self.client.users.create({
            'email': 'foo@bar.it',
            'first_name': 'Foo',
            'last_name': 'Bar',
            'role': role['id']
        })

        self.assertEqual(1, len(self.client.users.all()))

        fetched_user = self.client.users.find(user['id'])
        self.assertEqual('Foo', fetched_user['first_name'])
        self.assertEqual(role['id'], fetched_user['role'])

        self.client.users.destroy(user['id'])
        self.assertEqual(0, len(self.client.users.all()))

    def test_site(self):
        site = self.client.site.find()
        self.client.site.update(dict(site, name='My Blog'))

        self.assertEqual('My Blog', self.client.site.find()['name'])
        self.assertEqual(['en'], self.client.site.find()['locales'])

    def test_server_error_passes_through(self):
        with self.assertRaises(TransportError) as cx:
            self.client.transport.request('GET', '/explode')

        self.assertEqual(500, cx.exception.status)

    def test_wrong_token(self):
        client = self.site_client(api_token='wrong')

        with self.assertRaises(TransportError) as cx:
            client.item_types.all()

        self.assertEqual(401, cx.exception.status)

    def test_extra_headers_are_sent_with_every_request(self):
        client = self.site_client(extra_headers={'X-Foo': 'Bar'})
        client.item_types.all()
        client.site.find()

        for received in self.app.received:
            self.assertEqual('Bar', received['headers']['X-Foo'])
            self.assertEqual('Bearer secret-token', received['headers']['Authorization'])

    def test_resource_clients_share_one_transport(self):
        self.assertIs(self.client.transport, self.client.item_types.transport)
        self.assertIs(self.client.transport, self.client.fields.transport)
        self.assertIs(self.client.transport, self.client.site.transport)

    def test_context_manager_closes_session(self):
        with mock.patch.object(self.session, 'close') as close:
            with self.site_client() as client:
                client.item_types.all()

        close.assert_called_once_with()

    def test_token_from_environment(self):
        with mock.patch.dict(os.environ, {'DATO_API_TOKEN': 'secret-token', 'DATO_BASE_URL': 'http://site-api.test'}):
            client = SiteClient(session=self.session)

        self.assertEqual('http://site-api.test/', client.base_url)
        self.assertEqual([], client.item_types.all())

    def test_missing_token(self):
        with mock.patch.dict(os.environ, clear=True):
            with self.assertRaises(ClientConfigurationError):
                SiteClient()

    def test_missing_base_url(self):
        with mock.patch.dict(os.environ, clear=True):
            with self.assertRaises(ClientConfigurationError):
                BaseClient('token')

    def test_default_base_url(self):
        with mock.patch.dict(os.environ, clear=True):
            client = SiteClient('token')

        self.assertEqual('https://site-api.datocms.com/', client.base_url)


class AccountClientTestCase(BaseTestCase):

    def setUp(self):
        super(AccountClientTestCase, self).setUp()
        self.client = self.account_client()

    def test_account(self):
        account = self.client.account.find()
        self.assertEqual('owner@example.com', account['email'])

        self.client.account.update({'company': 'ACME'})
        self.assertEqual('ACME', self.client.account.find()['company'])

    def test_sites(self):
        site = self.client.sites.create({'name': 'Test site'})
        self.assertEqual(1, len(self.client.sites.all()))

        copy = self.client.sites.duplicate(site['id'])
        self.assertNotEqual(site['id'], copy['id'])
        self.assertEqual(2, len(self.client.sites.all()))

        self.client.sites.destroy(site['id'])
        self.assertEqual([copy['id']], [s['id'] for s in self.client.sites.all()])
