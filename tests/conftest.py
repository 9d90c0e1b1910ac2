"""Shared pytest fixtures for vulnfixer tests."""

from pathlib import Path

import pytest

from vulnfixer.core.config import FixParams


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def params(tmp_path: Path) -> FixParams:
    return FixParams(
        token="s3cr3t",
        repo_owner="acme",
        repo="shop",
        base_branch="main",
        workdir=tmp_path,
    )
