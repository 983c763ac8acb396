import pytest

from clientauth.shared.utils.selectors import Selector


@pytest.mark.parametrize("text", [None, "", "   "])
def test_blank_selector_matches_everything(text):
    selector = Selector.parse(text)

    assert selector.empty()
    assert selector.matches({})
    assert selector.matches({"env": "prod"})


def test_equality_requirements():
    selector = Selector.parse("env=prod, tier==web")

    assert selector.matches({"env": "prod", "tier": "web", "extra": "x"})
    assert not selector.matches({"env": "prod"})
    assert not selector.matches({"env": "dev", "tier": "web"})


def test_inequality_matches_missing_key():
    selector = Selector.parse("env!=prod")

    assert selector.matches({})
    assert selector.matches({"env": "dev"})
    assert not selector.matches({"env": "prod"})


def test_existence_requirements():
    assert Selector.parse("env").matches({"env": ""})
    assert not Selector.parse("env").matches({})
    assert Selector.parse("!env").matches({"tier": "web"})
    assert not Selector.parse("!env").matches({"env": "prod"})


def test_selector_renders_back_to_text():
    assert str(Selector.parse("env==prod,!legacy,tier!=db")) == "env=prod,!legacy,tier!=db"


@pytest.mark.parametrize("text", ["=prod", "env=prod,", "a b=c", "env=a=b", "!"])
def test_malformed_selectors_raise(text):
    with pytest.raises(ValueError):
        Selector.parse(text)
