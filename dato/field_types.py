"""
Conversion of raw item values into Python values, keyed by the ``field_type`` of the item type's fields.

    >>> field_types.parse('date', '2018-03-12')
    datetime.date(2018, 3, 12)
    >>> field_types.parse('date', None) is None
    True

"""
import json

from dato import fields
from dato.exceptions import ClientConfigurationError


def _lat_lon(value):
    return value['latitude'], value['longitude']


def _json(value):
    if isinstance(value, str):
        return json.loads(value)
    return value


FIELD_TYPES = {
    'boolean': fields.Boolean(),
    'color': fields.Object(),
    'date': fields.DateString(),
    'date_time': fields.DateTimeString(),
    'file': fields.Any(),
    'float': fields.Number(),
    'gallery': fields.Array(fields.Any()),
    'image': fields.Any(),
    'integer': fields.Integer(),
    'json': fields.Custom({"type": "string"}, converter=_json),
    'lat_lon': fields.Custom({"type": "object"}, converter=_lat_lon),
    'link': fields.String(),
    'links': fields.Array(fields.String()),
    'rich_text': fields.Array(fields.String()),
    'seo': fields.Object(),
    'slug': fields.String(),
    'string': fields.String(),
    'text': fields.String(),
    'video': fields.Object(),
}


def parse(field_type, value):
    """
    :param str field_type: a field type such as ``"date"``
    :param value: raw value as found in an item record
    :raises ClientConfigurationError: for unknown field types
    :raises ValueError: if the value cannot be parsed
    :return: the converted value; ``None`` stays ``None``
    """
    try:
        field = FIELD_TYPES[field_type]
    except KeyError:
        raise ClientConfigurationError('Unknown field type "{}"'.format(field_type))
    return field.convert(value)


def parse_item(item, item_type_fields):
    """
    Converts every value of an item record that belongs to one of ``item_type_fields``.

    Localized fields hold one value per locale and are converted per locale.

    :param dict item: item record as returned by ``items.find``
    :param list item_type_fields: field records as returned by ``fields.all``
    :return: a new record
    """
    result = dict(item)
    for field in item_type_fields:
        key = field['api_key']
        if key not in item:
            continue
        if field.get('localized') and isinstance(item[key], dict):
            result[key] = {locale: parse(field['field_type'], value) for locale, value in item[key].items()}
        else:
            result[key] = parse(field['field_type'], item[key])
    return result
