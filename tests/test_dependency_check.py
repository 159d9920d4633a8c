import pytest

from app import config
from app.utils.dependency_check import (
    DependencyError,
    check_all_dependencies,
    check_dependency,
    check_external_tools,
)


def test_check_dependency_present():
    ok, message = check_dependency("json")
    assert ok is True
    assert message == ""


def test_check_dependency_missing():
    ok, message = check_dependency("surely_not_installed_module_xyz", "xyz-package")
    assert ok is False
    assert "pip install xyz-package" in message


def test_check_all_dependencies_reports_missing_packages():
    deps = [
        ("json", "json", "stdlib"),
        ("surely_not_installed_module_xyz", "xyz-package", "missing"),
    ]
    with pytest.raises(DependencyError) as exc_info:
        check_all_dependencies(deps)
    assert "pip install xyz-package" in str(exc_info.value)


def test_external_tools_warns_without_usda_key(monkeypatch):
    monkeypatch.setattr(config, "USDA_API_KEY", None)
    warnings = check_external_tools()
    assert any("USDA_API_KEY" in w for w in warnings)

    monkeypatch.setattr(config, "USDA_API_KEY", "set")
    assert check_external_tools() == []
