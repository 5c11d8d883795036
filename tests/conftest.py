"""Shared fixtures for the JSON node editor tests."""

import pytest

from json_node_editor.config.models import EditorConfig
from json_node_editor.services.patch_committer import PatchCommitter
from json_node_editor.services.stores import InMemoryDocumentStore, InMemorySourceStore


SAMPLE_DOCUMENT = """{
  "customer": [
    {
      "name": "Alice",
      "age": 5,
      "tags": ["a", "b"]
    }
  ],
  "active": true,
  "note": null
}
"""


@pytest.fixture
def sample_text() -> str:
    return SAMPLE_DOCUMENT


@pytest.fixture
def document_store(sample_text) -> InMemoryDocumentStore:
    return InMemoryDocumentStore(sample_text)


@pytest.fixture
def source_store(sample_text) -> InMemorySourceStore:
    return InMemorySourceStore(sample_text)


@pytest.fixture
def committer(document_store, source_store) -> PatchCommitter:
    return PatchCommitter(document_store, source_store, EditorConfig())
