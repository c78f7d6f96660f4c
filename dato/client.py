import os

from dato.exceptions import ClientConfigurationError
from dato.resource import ResourceClient
from dato.resources import SITE_RESOURCES, ACCOUNT_RESOURCES
from dato.transport import Transport
from dato import uploads


class BaseClient(object):
    """
    Holds one :class:`Transport` and a :class:`ResourceClient` for every resource of :attr:`resources`, each
    available as an attribute of the same name.

    :param str api_token: API token; defaults to the ``DATO_API_TOKEN`` environment variable
    :param str base_url: optional base URL override; defaults to ``DATO_BASE_URL`` or :attr:`default_base_url`
    :param dict extra_headers: optional headers sent with every request
    :param session: optional :class:`requests.Session`
    :param timeout: optional timeout passed to :mod:`requests`
    """
    default_base_url = None
    resources = {}

    def __init__(self, api_token=None, base_url=None, extra_headers=None, session=None, timeout=None):
        api_token = api_token or os.environ.get('DATO_API_TOKEN')
        if not api_token:
            raise ClientConfigurationError('An API token is required; pass api_token or set DATO_API_TOKEN')

        base_url = base_url or os.environ.get('DATO_BASE_URL') or self.default_base_url
        if not base_url:
            raise ClientConfigurationError('A base URL is required; pass base_url or set DATO_BASE_URL')

        self.transport = Transport(base_url,
                                   api_token,
                                   extra_headers=extra_headers,
                                   session=session,
                                   timeout=timeout)

        for name, descriptor in self.resources.items():
            setattr(self, name, ResourceClient(descriptor, self.transport))

    @property
    def base_url(self):
        return self.transport.base_url

    def close(self):
        self.transport.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()

    def __repr__(self):
        return '<{} {}>'.format(self.__class__.__name__, self.base_url)


class SiteClient(BaseClient):
    """
    Client for the site API.

    .. code-block:: python

        with SiteClient('YOUR_API_TOKEN') as client:
            article = client.item_types.create({'name': 'Article', 'api_key': 'article'})
            client.fields.create({'label': 'Title', 'api_key': 'title', 'field_type': 'string'},
                                 parent_id=article['id'])
            client.items.create({'item_type': article['id'], 'title': 'First post'})

    """
    default_base_url = 'https://site-api.datocms.com'
    resources = SITE_RESOURCES

    def upload_file(self, source):
        """
        Uploads a local file or a URL and returns the path to use as the value of a file field.
        """
        return uploads.upload_file(self.upload_requests, source)

    def upload_image(self, source):
        """
        Uploads a local image or an image URL and returns the path to use as the value of an image field.
        """
        return uploads.upload_image(self.upload_requests, source)


class AccountClient(BaseClient):
    """
    Client for the account API, used to manage the sites of an account.
    """
    default_base_url = 'https://account-api.datocms.com'
    resources = ACCOUNT_RESOURCES
