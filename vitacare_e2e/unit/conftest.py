import pytest

from vitacare_e2e.ui_testing.framework.element_actions import ElementInteractor
from vitacare_e2e.ui_testing.framework.smart_locator import SmartLocator
from vitacare_e2e.unit.fakes import DummyConfig, FakeClock, FakePage, make_settler


@pytest.fixture
def fake_page() -> FakePage:
    return FakePage()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def settler(clock):
    return make_settler(clock)


@pytest.fixture
def smart(fake_page, settler) -> SmartLocator:
    return SmartLocator(fake_page, settler)


@pytest.fixture
def actions(fake_page, smart) -> ElementInteractor:
    return ElementInteractor(fake_page, smart)


@pytest.fixture
def config() -> DummyConfig:
    return DummyConfig()


@pytest.fixture
def make_page(fake_page, config, settler):
    """Build a page object over the shared fake page."""

    def _make(page_cls, **kwargs):
        return page_cls(fake_page, config=config, settler=settler, **kwargs)

    return _make
