import logging
import textwrap

import pytest

from common.factories import make_catalogue, make_manager
from widget_pricing.config import CONFIG_ENV_VAR
from widget_pricing.delivery import acme_delivery_rule
from widget_pricing.offers import BuyOneGetOneHalfPrice

pytest_plugins = [
    "common.plugins.pricing_plugin",
]


def pytest_addoption(parser):
    parser.addoption("--env", action="store", default="dev", help="environment the suite runs against")


@pytest.fixture(scope="session")
def env(pytestconfig):
    return pytestconfig.getoption("--env")


@pytest.fixture
def catalogue():
    return make_catalogue()


@pytest.fixture
def delivery_rule():
    return acme_delivery_rule()


@pytest.fixture
def offers():
    return [BuyOneGetOneHalfPrice("R01")]


@pytest.fixture
def bundle_manager():
    return make_manager()


@pytest.fixture(scope="function")
def log_capture(caplog):
    caplog.set_level(logging.DEBUG, logger="widget_pricing")
    return caplog


CONFIG_YAML = textwrap.dedent(
    """
    products:
      R01: {name: Red Widget, price: 32.95}
      G01: {name: Green Widget, price: 24.95}
      B01: {name: Blue Widget, price: 7.95}
    delivery:
      tiers:
        - {threshold: 0, cost: 4.95}
        - {threshold: 90, cost: 0}
        - {threshold: 50, cost: 2.95}
    offers:
      - {type: bogo_half_price, product: R01}
    bundles:
      - {code: BUNDLE01, name: Widget Starter Pack, products: [R01, G01, B01], price: 55.00}
    """
)


@pytest.fixture(scope="function")
def config_file(tmp_path):
    p = tmp_path / "pricing.yaml"
    p.write_text(CONFIG_YAML, encoding="utf-8")
    yield p
    p.unlink(missing_ok=True)


@pytest.fixture(scope="function")
def config_env(monkeypatch, config_file):
    monkeypatch.setenv(CONFIG_ENV_VAR, str(config_file))
    yield config_file
    monkeypatch.delenv(CONFIG_ENV_VAR, raising=False)
