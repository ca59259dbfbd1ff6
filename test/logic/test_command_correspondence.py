"""Tests for procedure catalogue / client method correspondence."""

import inspect

from fmpcm.client import BaseClient, ExtendedClient
from fmpcm.types import (
    BASE_COMMANDS,
    EXTENDED_COMMANDS,
    assert_valid_command_client_correspondence,
    collect_command_registry,
)


def _client_methods(cls):
    return {
        func._command: name
        for name, func in inspect.getmembers(cls, inspect.isfunction)
        if getattr(func, "_is_client_method", False)
    }


def test_command_client_correspondence():
    """Test that every procedure has exactly one client method on the right class"""
    assert_valid_command_client_correspondence()


def test_catalogue_sizes():
    assert len(BASE_COMMANDS) == 77
    assert len(EXTENDED_COMMANDS) == 26
    assert not BASE_COMMANDS & EXTENDED_COMMANDS


def test_base_client_surface():
    assert set(_client_methods(BaseClient)) == BASE_COMMANDS


def test_extended_client_surface():
    assert set(_client_methods(ExtendedClient)) == BASE_COMMANDS | EXTENDED_COMMANDS


def test_registry():
    registry = collect_command_registry()
    assert registry["GetAppVersion"].client_methods == ["BaseClient.get_app_version"]
    assert registry["EnableEvents"].client_methods == ["ExtendedClient.enable_events"]
