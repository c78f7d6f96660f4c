import logging
import mimetypes
import os
from urllib.parse import urlparse

from dato.exceptions import ClientConfigurationError

logger = logging.getLogger(__name__)


def _is_url(source):
    return urlparse(source).scheme in ('http', 'https')


def _read_source(transport, source):
    if _is_url(source):
        filename = os.path.basename(urlparse(source).path) or 'file'
        return filename, transport.download(source)

    try:
        with open(source, 'rb') as f:
            return os.path.basename(source), f.read()
    except OSError as e:
        raise ClientConfigurationError('Cannot read "{}": {}'.format(source, e)) from e


def upload_file(upload_requests, source):
    """
    Uploads a local file or the file at a URL and returns the upload path to use as a file field value.

    The upload takes two requests: an upload request negotiated with the API, which returns the storage URL
    and the path, and the transfer of the bytes to that URL.

    :param upload_requests: :class:`ResourceClient` for upload requests
    :param str source: local path or ``http(s)`` URL
    :return: upload path
    """
    transport = upload_requests.transport
    filename, data = _read_source(transport, source)

    upload_request = upload_requests.create({'filename': filename})
    transport.upload(upload_request['url'], data, content_type=mimetypes.guess_type(filename)[0])

    logger.info('Uploaded %s to %s', source, upload_request['id'])
    return upload_request['id']


def upload_image(upload_requests, source):
    """
    Like :func:`upload_file`, but only accepts sources with an image file extension.
    """
    content_type = mimetypes.guess_type(urlparse(source).path if _is_url(source) else source)[0]
    if not content_type or not content_type.startswith('image/'):
        raise ClientConfigurationError('"{}" does not look like an image'.format(source))
    return upload_file(upload_requests, source)
