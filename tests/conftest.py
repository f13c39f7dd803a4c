import pytest


@pytest.fixture
def corpus():
    return "the cat sat.\nthe dog sat."
