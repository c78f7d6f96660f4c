from datetime import date, datetime

import aniso8601


class Raw(object):
    """
    This is the base class for all field types, can be given any JSON-schema.

    >>> f = fields.Raw({"type": "string"}, io="r")
    >>> f.schema()
    {'readOnly': True, 'type': 'string'}

    :param schema: JSON-schema for field, or :class:`callable` resolving to a JSON-schema when called
    :param io: one or more of "r" (read), "c" (create), "u" (update) and "w" (write), default: "rw";
     fields that are not writable are dropped from create and update payloads
    :param bool nullable: whether ``None`` is an acceptable value
    :param str title: optional title for JSON schema
    :param str description: optional description for JSON schema
    """

    def __init__(self, schema, io="rw", nullable=False, title=None, description=None):
        self._schema = schema
        self.nullable = nullable
        self.title = title
        self.description = description
        self.io = io

    def _finalize_schema(self, schema):
        schema = dict(schema)

        if self.io == "r":
            schema["readOnly"] = True

        if "null" in schema.get("type", []):
            self.nullable = True
        elif self.nullable:
            if "enum" in schema and None not in schema["enum"]:
                schema["enum"] = list(schema["enum"]) + [None]

            if "type" in schema:
                type_ = schema["type"]
                if isinstance(type_, str):
                    schema["type"] = [type_, "null"]
                else:
                    schema["type"] = list(type_) + ["null"]
            elif "anyOf" in schema:
                if not any("null" in choice.get("type", []) for choice in schema["anyOf"]):
                    schema["anyOf"] = list(schema["anyOf"]) + [{"type": "null"}]

        for attr in ("title", "description"):
            value = getattr(self, attr)
            if value is not None:
                schema[attr] = value
        return schema

    @property
    def io(self):
        return self._io

    @io.setter
    def io(self, value):
        io = ''
        if 'w' in value or 'c' in value:
            io += 'c'
        if 'r' in value:
            io += 'r'
        if 'w' in value or 'u' in value:
            io += 'u'
        self._io = io

    def schema(self):
        """
        JSON schema representation
        """
        schema = self._schema
        if callable(schema):
            schema = schema()
        return self._finalize_schema(schema)

    def format(self, value):
        """
        Format a Python value for the request payload. Noop by default.
        """
        if value is not None:
            return self.formatter(value)
        return value

    def convert(self, value):
        """
        Convert a value from a response payload to a Python value. Noop by default.
        """
        if value is not None:
            return self.converter(value)
        return value

    def formatter(self, value):
        return value

    def converter(self, value):
        return value

    def __repr__(self):
        return '{}(io={})'.format(self.__class__.__name__, repr(self.io))


class Any(Raw):
    """
    A field type that allows any value.
    """
    def __init__(self, **kwargs):
        super(Any, self).__init__({"type": ["null", "string", "number", "boolean", "object", "array"]}, **kwargs)


class String(Raw):
    """
    :param int min_length: minimum length of string
    :param int max_length: maximum length of string
    :param list enum: list of strings with enumeration
    """

    def __init__(self, min_length=None, max_length=None, enum=None, format=None, **kwargs):
        schema = {"type": "string"}

        if enum is not None:
            enum = list(enum)

        for v, k in ((min_length, 'minLength'),
                     (max_length, 'maxLength'),
                     (enum, 'enum'),
                     (format, 'format')):
            if v is not None:
                schema[k] = v

        super(String, self).__init__(schema, **kwargs)


class Uri(String):
    def __init__(self, **kwargs):
        super(Uri, self).__init__(format="uri", **kwargs)


class Email(String):
    def __init__(self, **kwargs):
        super(Email, self).__init__(format="email", **kwargs)


class Boolean(Raw):
    def __init__(self, **kwargs):
        super(Boolean, self).__init__({"type": "boolean"}, **kwargs)


class Integer(Raw):
    def __init__(self, minimum=None, maximum=None, **kwargs):
        schema = {"type": "integer"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Integer, self).__init__(schema, **kwargs)

    def formatter(self, value):
        return int(value)

    def converter(self, value):
        return int(value)


class Object(Raw):
    """
    A JSON object with arbitrary properties, e.g. validators or deploy settings.
    """
    def __init__(self, **kwargs):
        super(Object, self).__init__({"type": "object"}, **kwargs)


class Array(Raw):
    """
    A field for an array of a given field type.

    :param Raw container: field instance for the array items
    """

    def __init__(self, container, **kwargs):
        self.container = container
        super(Array, self).__init__(lambda: {"type": "array", "items": self.container.schema()}, **kwargs)

    def formatter(self, value):
        return [self.container.format(v) for v in value]

    def converter(self, value):
        return [self.container.convert(v) for v in value]


class DateString(Raw):
    """
    A field for ISO8601-formatted date strings. Accepts :class:`datetime.date` values.
    """

    def __init__(self, **kwargs):
        super(DateString, self).__init__({"type": "string", "format": "date"}, **kwargs)

    def formatter(self, value):
        if isinstance(value, date):
            return value.strftime('%Y-%m-%d')
        return value

    def converter(self, value):
        return aniso8601.parse_date(value)


class DateTimeString(Raw):
    """
    A field for ISO8601-formatted date-time strings. Accepts :class:`datetime.datetime` values.
    """

    def __init__(self, **kwargs):
        super(DateTimeString, self).__init__({"type": "string", "format": "date-time"}, **kwargs)

    def formatter(self, value):
        if isinstance(value, datetime):
            return value.isoformat()
        return value

    def converter(self, value):
        return aniso8601.parse_datetime(value)


class ToOne(Raw):
    """
    Represents a reference to a single resource of type ``target``.

    The reference can be given as an id (string or integer) or as a ``{"type": ..., "id": ...}`` object and is
    sent as a JSON:API relationship. References are nullable unless specified otherwise.

    :param str target: type identifier of the referenced resource
    """

    def __init__(self, target, nullable=True, **kwargs):
        self.target = target
        super(ToOne, self).__init__({
            "anyOf": [
                {"type": "string"},
                {"type": "integer"},
                {
                    "type": "object",
                    "properties": {
                        "type": {"type": "string", "enum": [target]},
                        "id": {"type": ["string", "integer"]}
                    },
                    "required": ["id"]
                }
            ]
        }, nullable=nullable, **kwargs)

    def formatter(self, value):
        if isinstance(value, dict):
            value = value['id']
        return {"type": self.target, "id": str(value)}

    def converter(self, value):
        return value['id']

    def relationship(self, value):
        return {"data": self.format(value)}


class ToMany(Array):
    """
    Like :class:`ToOne`, but for arrays of references.
    """

    def __init__(self, target, **kwargs):
        self.target = target
        kwargs.setdefault('nullable', True)
        super(ToMany, self).__init__(ToOne(target, nullable=False), **kwargs)

    def format(self, value):
        if value is None:
            return []
        return self.formatter(value)

    def relationship(self, value):
        return {"data": self.format(value)}


class Number(Raw):
    def __init__(self, minimum=None, maximum=None, **kwargs):
        schema = {"type": "number"}

        if minimum is not None:
            schema['minimum'] = minimum
        if maximum is not None:
            schema['maximum'] = maximum

        super(Number, self).__init__(schema, **kwargs)

    def formatter(self, value):
        return float(value)

    def converter(self, value):
        return float(value)


class Custom(Raw):
    """
    A field type that can be passed any schema and optional formatter/converter transformers. It is a very thin
    wrapper over :class:`Raw`.

    :param dict schema: JSON-schema
    :param callable converter: convert function
    :param callable formatter: format function
    """

    def __init__(self, schema, converter=None, formatter=None, **kwargs):
        super(Custom, self).__init__(schema, **kwargs)
        self._converter = converter
        self._formatter = formatter

    def formatter(self, value):
        if self._formatter is None:
            return value
        return self._formatter(value)

    def converter(self, value):
        if self._converter is None:
            return value
        return self._converter(value)
