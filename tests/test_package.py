"""Tests that the dbent package and its submodules import cleanly."""

from __future__ import annotations

import importlib

import pytest

import dbent
from dbent.errors import DeriveError, ErrorContext


class TestImports:
    """Test the public surface resolves."""

    @pytest.mark.parametrize(
        "module",
        [
            "dbent.adapters",
            "dbent.aliases",
            "dbent.derive",
            "dbent.entity",
            "dbent.entity_label",
            "dbent.errors",
            "dbent.key",
            "dbent.logging",
            "dbent.many",
            "dbent.markers",
            "dbent.protocols",
            "dbent.result",
            "dbent.serialization",
            "dbent.settings",
            "dbent.tag",
        ],
    )
    def test_submodule_imports(self, module):
        assert importlib.import_module(module).__name__ == module

    @pytest.mark.parametrize("name", dbent.__all__)
    def test_exported_name_resolves(self, name):
        assert getattr(dbent, name) is not None


class TestErrorContextDefaults:
    """Test ErrorContext field defaults."""

    def test_metadata_not_shared(self):
        first = ErrorContext()
        second = ErrorContext()
        first.metadata["seen"] = True
        assert second.metadata == {}

    def test_field_defaults_to_none(self):
        assert ErrorContext().field is None
        assert DeriveError("bad", context=ErrorContext(field="id")).context.field == "id"
