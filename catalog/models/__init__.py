import importlib

from catalog.models.department import Department
from catalog.models.product import DepartmentRef, LegacyName, NormalizedId, Product


def import_all_models() -> None:
    for module_name in (
        "catalog.models.department",
        "catalog.models.product",
    ):
        importlib.import_module(module_name)


__all__ = [
    "Department",
    "DepartmentRef",
    "LegacyName",
    "NormalizedId",
    "Product",
    "import_all_models",
]
