# -*- coding: utf-8 -*-
"""Location: ./tests/unit/asynccss/routers/test_admin.py
Copyright 2025
SPDX-License-Identifier: Apache-2.0

Tests for the async CSS options page.
"""

# Third-Party
from fastapi.testclient import TestClient
import pytest

# First-Party
from asynccss.main import create_app
from asynccss.render import PageRender
from asynccss.services.style_service import StyleRegistry

ADMIN_PATH = "/admin/async-css"


@pytest.fixture
def client():
    return TestClient(create_app())


def test_options_page_lists_observed_handles(client, option_service):
    option_service.save_observed_handles(["a", "b"])
    option_service.save_whitelist(["a"])
    response = client.get(ADMIN_PATH)
    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert 'name="whitelisted_handles" value="a" checked="checked" />' in response.text
    assert 'name="whitelisted_handles" value="b" />' in response.text
    assert "please visit your frontpage" in response.text
    assert "Settings saved." not in response.text


def test_options_page_without_observed_handles(client):
    response = client.get(ADMIN_PATH)
    assert response.status_code == 200
    assert 'type="checkbox"' not in response.text


def test_options_page_escapes_handles(client, option_service):
    option_service.save_observed_handles(['"><script>x</script>'])
    response = client.get(ADMIN_PATH)
    assert "<script>x</script>" not in response.text
    assert "&lt;script&gt;x&lt;/script&gt;" in response.text


def test_save_replaces_whitelist_and_redirects(client, option_service):
    option_service.save_whitelist(["old"])
    response = client.post(ADMIN_PATH, data={"whitelisted_handles": ["a", "c"]}, follow_redirects=False)
    assert response.status_code == 303
    assert response.headers["location"].endswith(f"{ADMIN_PATH}?updated=true")
    assert option_service.get_whitelist() == frozenset({"a", "c"})


def test_save_empty_submission_clears_whitelist(client, option_service):
    option_service.save_whitelist(["a"])
    response = client.post(ADMIN_PATH, data={"submit": "Save Changes"})
    assert response.status_code == 200
    assert "Settings saved." in response.text
    assert option_service.get_whitelist() == frozenset()


def test_whitelist_round_trip(client, option_service, async_css_manager):
    registry = StyleRegistry()
    registry.enqueue("a", "http://x/a.css")
    registry.enqueue("b", "http://x/b.css")
    with PageRender(registry, manager=async_css_manager) as page:
        page.print_styles()
    assert option_service.get_observed_handles() == ("a", "b")

    assert 'value="a" />' in client.get(ADMIN_PATH).text
    client.post(ADMIN_PATH, data={"whitelisted_handles": ["a"]})
    assert 'value="a" checked="checked" />' in client.get(ADMIN_PATH).text

    with PageRender(registry, manager=async_css_manager) as page:
        output = page.print_styles()
    assert output == (
        '<script>loadCSS("http://x/a.css",0,"all");</script>\n'
        "<link rel='stylesheet' id='b-css' href='http://x/b.css' type='text/css' media='all' />\n"
    )
