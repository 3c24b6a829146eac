"""Tests for application assembly."""

import main


def test_importing_main_builds_no_app():
    assert not hasattr(main, "app")


def test_create_app_uses_given_settings(settings, session_factory):
    app = main.create_app(settings, session_factory)

    assert app.state.settings is settings
    assert app.state.session_factory is session_factory
    assert app.title == settings.app_name
