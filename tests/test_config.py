"""Tests for run parameter loading."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from vulnfixer.core.config import load_params
from vulnfixer.exceptions import ConfigError

_ENV = {
    "VULNFIXER_GIT_TOKEN": "tok",
    "VULNFIXER_GIT_REPO_OWNER": "acme",
    "VULNFIXER_GIT_REPO": "shop",
}


def _clean_env() -> dict[str, str]:
    return {k: v for k, v in os.environ.items() if not k.startswith("VULNFIXER_") and k != "GITHUB_TOKEN"}


class TestLoadParams:
    def test_defaults(self):
        with patch.dict(os.environ, {**_clean_env(), **_ENV}, clear=True):
            params = load_params()
        assert params.base_branch == "main"
        assert params.remote == "origin"
        assert params.branch_prefix == "vulnfixer"
        assert params.usage_url is None
        assert params.workdir == Path(".")
        assert params.push_url == "https://tok@github.com/acme/shop.git"

    def test_github_token_fallback(self):
        env = {**_clean_env(), **_ENV, "GITHUB_TOKEN": "gh"}
        del env["VULNFIXER_GIT_TOKEN"]
        with patch.dict(os.environ, env, clear=True):
            assert load_params().token == "gh"

    def test_overrides_win(self):
        with patch.dict(os.environ, {**_clean_env(), **_ENV}, clear=True):
            params = load_params(base_branch="develop", repo=None)
        assert params.base_branch == "develop"
        assert params.repo == "shop"

    def test_api_url_trailing_slash_stripped(self):
        env = {**_clean_env(), **_ENV, "VULNFIXER_GIT_API_URL": "https://ghe.local/api/v3/"}
        with patch.dict(os.environ, env, clear=True):
            assert load_params().api_url == "https://ghe.local/api/v3"

    def test_missing_required(self):
        with patch.dict(os.environ, _clean_env(), clear=True):
            with pytest.raises(ConfigError, match="token, repo_owner, repo"):
                load_params()

    def test_blank_values_count_as_missing(self):
        env = {**_clean_env(), **_ENV, "VULNFIXER_GIT_REPO": "  "}
        with patch.dict(os.environ, env, clear=True):
            with pytest.raises(ConfigError, match="repo"):
                load_params()
