import logging
from urllib.parse import urljoin

import requests

from dato import __version__
from dato.exceptions import TransportError

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    'Accept': 'application/json',
    'Content-Type': 'application/json',
    'X-Api-Version': '3',
    'User-Agent': 'dato-client/{}'.format(__version__)
}


def _parse_body(response):
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


class Transport(object):
    """
    Performs authenticated requests against the remote API and returns parsed JSON bodies.

    A single transport is shared by every resource client of a top-level client. It keeps no state besides its
    configuration and the underlying :class:`requests.Session`.

    :param str base_url: base URL of the API, e.g. ``https://site-api.datocms.com``
    :param str api_token: bearer token sent with every request
    :param dict extra_headers: optional headers sent with every request, overriding the defaults
    :param session: optional :class:`requests.Session` to use
    :param timeout: optional timeout passed to :mod:`requests` as-is
    """

    def __init__(self, base_url, api_token, extra_headers=None, session=None, timeout=None):
        self.base_url = base_url.rstrip('/') + '/'
        self.timeout = timeout
        self.session = session or requests.Session()
        self.headers = dict(DEFAULT_HEADERS)
        self.headers['Authorization'] = 'Bearer {}'.format(api_token)
        self.headers.update(extra_headers or {})

    def url(self, path):
        return urljoin(self.base_url, path.lstrip('/'))

    def request(self, method, path, body=None, params=None):
        """
        :param str method: HTTP method
        :param str path: path relative to the base URL
        :param body: optional JSON-serializable request body
        :param dict params: optional query string parameters, sent verbatim
        :raises TransportError: on any non-2xx response, a body that is not a JSON object, or a network failure
        :return: the parsed JSON body, or ``None`` if the body is empty
        """
        url = self.url(path)

        try:
            response = self.session.request(method,
                                            url,
                                            params=params,
                                            json=body,
                                            headers=self.headers,
                                            timeout=self.timeout)
        except requests.RequestException as e:
            logger.warning('%s %s failed: %s', method, url, e)
            raise TransportError(None, None, message='{} {} failed: {}'.format(method, url, e)) from e

        logger.debug('%s %s -> %s', method, url, response.status_code)

        if not response.ok:
            body = _parse_body(response)
            logger.warning('Request failed %s %s status=%s body=%s', method, url, response.status_code, body)
            raise TransportError(response.status_code, body)

        body = _parse_body(response)
        if body is not None and not isinstance(body, dict):
            logger.warning('Unexpected response body %s %s status=%s', method, url, response.status_code)
            raise TransportError(response.status_code, body,
                                 message='Expected a JSON object from {} {}'.format(method, url))
        return body

    def upload(self, url, data, content_type=None):
        """
        Sends raw bytes to a storage URL negotiated with the API. Authorization headers are not sent.
        """
        headers = {'Content-Type': content_type} if content_type else {}
        try:
            response = self.session.put(url, data=data, headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(None, None, message='PUT {} failed: {}'.format(url, e)) from e

        logger.debug('PUT %s -> %s', url, response.status_code)
        if not response.ok:
            raise TransportError(response.status_code, _parse_body(response))

    def download(self, url):
        try:
            response = self.session.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            raise TransportError(None, None, message='GET {} failed: {}'.format(url, e)) from e

        logger.debug('GET %s -> %s', url, response.status_code)
        if not response.ok:
            raise TransportError(response.status_code, _parse_body(response))
        return response.content

    def close(self):
        self.session.close()

    def __repr__(self):
        return '<Transport {}>'.format(self.base_url)
