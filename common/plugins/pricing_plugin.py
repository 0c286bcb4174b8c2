import pytest

MARKERS = {
    "unit": "fast, isolated tests of a single component",
    "contract": "serialised shapes other systems depend on",
    "integration": "several components wired together",
    "e2e": "full checkout flows",
    "slow": "skipped when running with --env=prod",
}


def pytest_configure(config):
    for name, help_text in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {help_text}")


def pytest_collection_modifyitems(config, items):
    """Skip slow tests in prod and run the layers bottom-up."""
    if config.getoption("--env") == "prod":
        for item in items:
            if "slow" in [m.name for m in item.iter_markers()]:
                item.add_marker(pytest.mark.skip(reason="slow tests are skipped in prod"))

    order = ["unit", "contract", "integration", "e2e"]

    def item_priority(item):
        markers = [m.name for m in item.iter_markers()]
        for i, name in enumerate(order):
            if name in markers:
                return i
        return len(order)

    items.sort(key=item_priority)
