import typing

JSONScalar = typing.Union[bool, int, float, str, None]
JSONArray = typing.Sequence[typing.Any]
JSONObject = typing.Mapping[str, typing.Any]
MutableJSONObject = typing.MutableMapping[str, typing.Any]
JSONValue = typing.Union[JSONScalar, JSONArray, JSONObject]

#: a rendered top-level JSON:API document
JSONDocument = typing.Dict[str, typing.Any]
