import pytest


@pytest.mark.parametrize(
    ("mode", "input", "expected"),
    [
        ("dash", "fancy_body", "fancy-body"),
        ("dash", "FancyBody", "fancy-body"),
        ("dash", "long_comments", "long-comments"),
        ("camel", "fancy_body", "FancyBody"),
        ("camel", "long_comments", "LongComments"),
        ("camel", "id", "Id"),
        ("camel_lower", "fancy_body", "fancyBody"),
        ("camel_lower", "FancyBody", "fancyBody"),
        ("camel_lower", "id", "id"),
        ("underscore", "fancy-body", "fancy_body"),
        ("underscore", "fancyBody", "fancy_body"),
        ("underscore", "HTMLBody", "html_body"),
        ("unaltered", "fancy_body", "fancy_body"),
        ("unaltered", "FancyBody", "FancyBody"),
    ],
)
def test_transform_key_casing(mode, input, expected):
    from ..casing import transform_key_casing

    assert transform_key_casing(input, mode) == expected


@pytest.mark.parametrize("mode", ["dash", "camel", "camel_lower", "underscore"])
def test_round_trip(mode):
    from ..casing import transform_key_casing, underscore

    for name in ["fancy_body", "id", "long_comments"]:
        assert underscore(transform_key_casing(name, mode)) == name


def test_uses_active_config():
    from ..casing import transform_key_casing
    from ..config import override_config

    with override_config(key_transform="camel_lower"):
        assert transform_key_casing("fancy_body") == "fancyBody"
    with override_config(key_transform="underscore"):
        assert transform_key_casing("fancy-body") == "fancy_body"


@pytest.mark.parametrize(
    ("input", "expected"),
    [
        ("LongComment", "long_comments"),
        ("Post", "posts"),
        ("User", "users"),
        ("Category", "categories"),
        ("PersonAddress", "person_addresses"),
    ],
)
def test_tableize(input, expected):
    from ..casing import tableize

    assert tableize(input) == expected


def test_parse():
    from ..casing import KeyTransform
    from ..exceptions import UnknownKeyTransformError

    assert KeyTransform.parse("Dash") is KeyTransform.DASH
    assert KeyTransform.parse(KeyTransform.CAMEL) is KeyTransform.CAMEL
    with pytest.raises(UnknownKeyTransformError) as excinfo:
        KeyTransform.parse("kebab")
    assert excinfo.value.value == "kebab"
    assert "'camel'" in str(excinfo.value)


def test_underscore_cache_is_bounded():
    from ..casing import underscore

    for i in range(1100):
        underscore(f"unknownName{i}")
    info = underscore.cache_info()
    assert info.maxsize == 1024
    assert info.currsize <= 1024
