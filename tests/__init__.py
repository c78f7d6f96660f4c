import json
from unittest import TestCase
from urllib.parse import urlsplit

import requests
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from dato import SiteClient, AccountClient
from tests.server import create_app, API_TOKEN

SITE_API_URL = 'http://site-api.test'
ACCOUNT_API_URL = 'http://account-api.test'


class WSGIAdapter(BaseAdapter):
    """
    Sends requests made through a :class:`requests.Session` to a WSGI application instead of the network.
    """

    def __init__(self, app):
        super(WSGIAdapter, self).__init__()
        self.client = app.test_client()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        url = urlsplit(request.url)
        headers = {k: v for k, v in request.headers.items() if k.lower() != 'content-length'}

        body = request.body
        if isinstance(body, str):
            body = body.encode('utf-8')

        resp = self.client.open(url.path,
                                base_url='{}://{}'.format(url.scheme, url.netloc),
                                method=request.method,
                                query_string=url.query,
                                headers=headers,
                                data=body)

        response = requests.Response()
        response.status_code = resp.status_code
        response.headers = CaseInsensitiveDict(resp.headers.items())
        response._content = resp.get_data()
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


class TransportSpy(object):
    """
    Stands in for :class:`dato.Transport` and records every request instead of sending it.
    """

    def __init__(self, responses=None):
        self.calls = []
        self.responses = list(responses or ())

    def request(self, method, path, body=None, params=None):
        self.calls.append((method, path, body, params))
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return None


class BaseTestCase(TestCase):

    def setUp(self):
        super(BaseTestCase, self).setUp()
        self.app = self.create_app()
        self.session = requests.Session()
        adapter = WSGIAdapter(self.app)
        self.session.mount(SITE_API_URL, adapter)
        self.session.mount(ACCOUNT_API_URL, adapter)

    def tearDown(self):
        self.session.close()
        super(BaseTestCase, self).tearDown()

    def create_app(self):
        app = create_app()
        app.testing = True
        return app

    def site_client(self, **kwargs):
        kwargs.setdefault('base_url', SITE_API_URL)
        kwargs.setdefault('session', self.session)
        return SiteClient(kwargs.pop('api_token', API_TOKEN), **kwargs)

    def account_client(self, **kwargs):
        kwargs.setdefault('base_url', ACCOUNT_API_URL)
        kwargs.setdefault('session', self.session)
        return AccountClient(kwargs.pop('api_token', API_TOKEN), **kwargs)

    def assertJSONEqual(self, first, second, msg=None):
        self.assertEqual(json.loads(json.dumps(first)), json.loads(json.dumps(second)), msg)

    def _without(self, dct, without):
        return {k: v for k, v in dct.items() if k not in without}

    def assertEqualWithout(self, first, second, without, msg=None):
        if isinstance(first, list) and isinstance(second, list):
            self.assertEqual(
                [self._without(v, without) for v in first],
                [self._without(v, without) for v in second],
                msg=msg
            )
        elif isinstance(first, dict) and isinstance(second, dict):
            self.assertEqual(self._without(first, without),
                             self._without(second, without),
                             msg=msg)
        else:
            self.maxDiff = None
            self.assertEqual(first, second)

    @property
    def last_request(self):
        return self.app.received[-1]


ARTICLE = {
    'name': 'Article',
    'singleton': False,
    'modular_block': False,
    'sortable': False,
    'tree': False,
    'draft_mode_active': False,
    'api_key': 'article',
    'ordering_direction': None,
    'ordering_field': None,
    'all_locales_required': True,
    'title_field': None
}
