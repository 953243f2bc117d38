"""Tests for loading OpenAPI documents from files and URLs."""

import json
from unittest.mock import MagicMock, patch

import pytest
import requests
import yaml

from openapi_wit.utils import DocumentLoaderError, load_document, parse_document_text

DOCUMENT = {"openapi": "3.0.3", "info": {"title": "T", "version": "1"}, "paths": {}}


def mock_response(text, content_type="application/json", status_code=200):
    response = MagicMock()
    response.text = text
    response.headers = {"content-type": content_type}
    response.status_code = status_code
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.exceptions.HTTPError(
            response=response
        )
    return response


class TestLoadFromFile:
    def test_json(self, tmp_path):
        path = tmp_path / "api.json"
        path.write_text(json.dumps(DOCUMENT), encoding="utf-8")

        source, data = load_document(file_path=path)
        assert data == DOCUMENT
        assert str(path) in source

    @pytest.mark.parametrize("suffix", [".yaml", ".yml"])
    def test_yaml(self, tmp_path, suffix):
        path = tmp_path / f"api{suffix}"
        path.write_text(yaml.safe_dump(DOCUMENT), encoding="utf-8")

        _, data = load_document(file_path=str(path))
        assert data == DOCUMENT

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_document(file_path=tmp_path / "nope.json")

    def test_invalid_json(self, tmp_path):
        path = tmp_path / "api.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(DocumentLoaderError, match="Invalid document"):
            load_document(file_path=path)

    def test_root_must_be_mapping(self, tmp_path):
        path = tmp_path / "api.yaml"
        path.write_text("- just\n- a list\n", encoding="utf-8")
        with pytest.raises(DocumentLoaderError, match="mapping"):
            load_document(file_path=path)


class TestLoadFromUrl:
    def test_json(self):
        with patch(
            "openapi_wit.utils.requests.get", return_value=mock_response(json.dumps(DOCUMENT))
        ) as get:
            source, data = load_document(url="https://example.com/openapi.json", timeout=5)

        get.assert_called_once_with("https://example.com/openapi.json", timeout=5)
        assert data == DOCUMENT
        assert "https://example.com/openapi.json" in source

    def test_yaml_by_content_type(self):
        response = mock_response(yaml.safe_dump(DOCUMENT), content_type="application/yaml")
        with patch("openapi_wit.utils.requests.get", return_value=response):
            _, data = load_document(url="https://example.com/api-docs")
        assert data == DOCUMENT

    def test_yaml_by_extension(self):
        response = mock_response(yaml.safe_dump(DOCUMENT), content_type="text/plain")
        with patch("openapi_wit.utils.requests.get", return_value=response):
            _, data = load_document(url="https://example.com/openapi.yml")
        assert data == DOCUMENT

    def test_invalid_url(self):
        with pytest.raises(DocumentLoaderError, match="Invalid URL"):
            load_document(url="not-a-url")

    def test_http_error(self):
        with patch(
            "openapi_wit.utils.requests.get", return_value=mock_response("", status_code=404)
        ):
            with pytest.raises(DocumentLoaderError, match="HTTP error 404"):
                load_document(url="https://example.com/missing.json")

    @pytest.mark.parametrize(
        ("error", "message"),
        [
            (requests.exceptions.Timeout(), "timeout"),
            (requests.exceptions.ConnectionError(), "Connection error"),
            (requests.exceptions.RequestException("boom"), "Request error"),
        ],
    )
    def test_request_failures(self, error, message):
        with patch("openapi_wit.utils.requests.get", side_effect=error):
            with pytest.raises(DocumentLoaderError, match=message) as excinfo:
                load_document(url="https://example.com/openapi.json")
        assert excinfo.value.__cause__ is error


class TestArguments:
    def test_requires_a_source(self):
        with pytest.raises(DocumentLoaderError, match="must be provided"):
            load_document()

    def test_rejects_both_sources(self, tmp_path):
        with pytest.raises(DocumentLoaderError, match="both"):
            load_document(file_path=tmp_path / "a.json", url="https://example.com/a.json")


def test_parse_document_text():
    assert parse_document_text("openapi: 3.1.0\n", yaml_format=True) == {"openapi": "3.1.0"}
    with pytest.raises(DocumentLoaderError):
        parse_document_text("[]")
