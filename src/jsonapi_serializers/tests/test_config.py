import pytest


@pytest.fixture
def reset_default(monkeypatch):
    from .. import config

    monkeypatch.setattr(config, "_default_config", None)


def test_defaults(reset_default, monkeypatch):
    from ..casing import KeyTransform
    from ..config import KEY_TRANSFORM_ENV_VAR, get_config

    monkeypatch.delenv(KEY_TRANSFORM_ENV_VAR, raising=False)
    config = get_config()
    assert config.key_transform is KeyTransform.DASH
    assert config.include_intermediate_resources is False


def test_env_var(reset_default, monkeypatch):
    from ..casing import KeyTransform
    from ..config import KEY_TRANSFORM_ENV_VAR, get_config

    monkeypatch.setenv(KEY_TRANSFORM_ENV_VAR, "camel_lower")
    assert get_config().key_transform is KeyTransform.CAMEL_LOWER


def test_configure(reset_default):
    from ..casing import KeyTransform
    from ..config import configure, get_config, get_default_config

    configure(key_transform="underscore")
    assert get_default_config().key_transform is KeyTransform.UNDERSCORE
    assert get_config() is get_default_config()


def test_configure_unknown(reset_default):
    from ..config import configure
    from ..exceptions import UnknownKeyTransformError

    with pytest.raises(UnknownKeyTransformError):
        configure(key_transform="snake")


def test_override_restores():
    from ..casing import KeyTransform
    from ..config import get_config, override_config

    before = get_config()
    with override_config(key_transform="camel") as config:
        assert config.key_transform is KeyTransform.CAMEL
        assert get_config() is config
        with override_config(include_intermediate_resources=True):
            assert get_config().key_transform is KeyTransform.CAMEL
            assert get_config().include_intermediate_resources
        assert get_config() is config
    assert get_config() is before


def test_override_restores_on_error():
    from ..config import get_config, override_config

    before = get_config()
    with pytest.raises(RuntimeError):
        with override_config(key_transform="camel"):
            raise RuntimeError()
    assert get_config() is before
