import re


def attribute_to_route_uri(s):
    return s.replace('_', '-')


def pluralize(s):
    if re.search(r'[^aeiou]y$', s):
        return s[:-1] + 'ies'
    if re.search(r'(s|x|z|ch|sh)$', s):
        return s + 'es'
    return s + 's'


def type_to_path(type_):
    """
    Converts a resource type identifier to its collection path segment, e.g. ``item_type`` to ``item-types``.
    """
    return attribute_to_route_uri(pluralize(type_))
