"""
앱 진입점 테스트

secrets 조회는 Mock으로 대체합니다.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

import gantt_app
from gantt_timeline.core.config import CONFIG


def test_api_base_url_prefers_secrets():
    with patch("gantt_app.st") as mock_st:
        mock_st.secrets = {"api": {"base_url": "http://secrets.test/api"}}

        assert gantt_app._api_base_url() == "http://secrets.test/api"


@pytest.mark.parametrize(
    "secrets",
    [
        {},
        {"api": {}},
    ],
)
def test_api_base_url_falls_back_when_key_missing(secrets):
    with patch("gantt_app.st") as mock_st:
        mock_st.secrets = secrets

        assert gantt_app._api_base_url() == CONFIG.api.base_url


def test_api_base_url_falls_back_without_secrets_file():
    secrets = MagicMock()
    secrets.__getitem__.side_effect = FileNotFoundError("secrets.toml")

    with patch("gantt_app.st") as mock_st:
        mock_st.secrets = secrets

        assert gantt_app._api_base_url() == CONFIG.api.base_url


def test_api_base_url_does_not_hide_other_errors():
    secrets = MagicMock()
    secrets.__getitem__.side_effect = RuntimeError("broken secrets")

    with patch("gantt_app.st") as mock_st:
        mock_st.secrets = secrets

        with pytest.raises(RuntimeError):
            gantt_app._api_base_url()
