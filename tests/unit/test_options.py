import pytest

from pagescope.core.errors import InvalidOptionsError
from pagescope.core.options import FindOptions


def test_defaults():
    options = FindOptions.coerce()

    assert options.scope is None
    assert options.reset_scope is False
    assert options.at is None
    assert options.last is False
    assert options.multiple is False


def test_camel_case_aliases():
    options = FindOptions.coerce({"resetScope": True, "testContainer": "#ember-testing", "pageObjectKey": "title"})

    assert options.reset_scope is True
    assert options.test_container == "#ember-testing"
    assert options.page_object_key == "title"


def test_keyword_overrides_take_precedence():
    base = FindOptions(at=1, multiple=True)
    options = FindOptions.coerce(base, at=3)

    assert options.at == 3
    assert options.multiple is True
    assert base.at == 1


def test_existing_options_pass_through_unchanged():
    base = FindOptions(contains="x")
    assert FindOptions.coerce(base) is base


@pytest.mark.parametrize("value", [-1, True, 1.5, "2"])
def test_invalid_index_is_rejected(value):
    with pytest.raises(InvalidOptionsError):
        FindOptions(at=value)


def test_invalid_options_are_value_errors():
    with pytest.raises(ValueError):
        FindOptions.coerce(at=-2)


def test_unknown_option_is_rejected():
    with pytest.raises(InvalidOptionsError, match="Unknown option 'firts'"):
        FindOptions.coerce({"firts": True})


def test_non_string_scope_is_rejected():
    with pytest.raises(InvalidOptionsError):
        FindOptions(scope=[".a"])


def test_unsupported_options_type_is_rejected():
    with pytest.raises(InvalidOptionsError):
        FindOptions.coerce([("at", 1)])


@pytest.mark.parametrize("name", ["reset_scope", "last", "multiple"])
@pytest.mark.parametrize("value", [1, "yes", None])
def test_flags_must_be_booleans(name, value):
    with pytest.raises(InvalidOptionsError, match=name):
        FindOptions.coerce({name: value})


class Container:
    def find_elements(self, by, value):
        return []


@pytest.mark.parametrize("value", [None, "#ember-testing", Container()])
def test_test_container_accepts_selectors_and_elements(value):
    assert FindOptions(test_container=value).test_container is value


@pytest.mark.parametrize("value", [1, ["#a"], object()])
def test_test_container_rejects_other_values(value):
    with pytest.raises(InvalidOptionsError, match="test_container"):
        FindOptions.coerce(testContainer=value)
