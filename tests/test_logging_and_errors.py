"""Tests for logging setup and error categorisation."""

import json
import logging

import pytest
from pydantic import ValidationError as PydanticValidationError

from json_node_editor.config.models import LoggingConfig
from json_node_editor.models.errors import (
    NodeEditorException, PatchError, PatchFailure, SessionError, SessionException,
    ValidationError, ValidationException,
)
from json_node_editor.models.path import Index
from json_node_editor.utils.error_handler import ErrorHandler
from json_node_editor.utils.logging_config import (
    ErrorTrackingHandler, JSONFormatter, setup_logging, setup_logging_from_config,
)


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


def make_record(level, message, **extra):
    record = logging.LogRecord("json_node_editor.test", level, __file__, 10, message, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJSONFormatter:

    def test_structured_output(self):
        record = make_record(logging.WARNING, "commit failed", path_label='$["a"]')
        entry = json.loads(JSONFormatter().format(record))

        assert entry["level"] == "WARNING"
        assert entry["message"] == "commit failed"
        assert entry["path_label"] == '$["a"]'


class TestErrorTrackingHandler:

    def test_ignores_info(self):
        handler = ErrorTrackingHandler()
        handler.emit(make_record(logging.INFO, "fine"))
        assert handler.error_counts == {}

    def test_groups_by_pattern(self):
        handler = ErrorTrackingHandler()
        handler.emit(make_record(logging.ERROR, 'Cannot set property of number at $["a"]["b"]'))
        handler.emit(make_record(logging.ERROR, 'Cannot set property of number at $["x"][3]'))

        summary = handler.get_error_summary()
        assert summary["total_errors_by_logger"] == {"json_node_editor.test": 2}
        assert summary["error_patterns"] == {"Cannot set property of number at <PATH>": 2}

    def test_recent_errors_bounded(self):
        handler = ErrorTrackingHandler(max_recent_errors=3)
        for i in range(5):
            handler.emit(make_record(logging.ERROR, f"failure {i}"))
        assert len(handler.recent_errors) == 3


class TestSetupLogging:

    def test_installs_console_and_tracker(self, restore_root_logger):
        info = setup_logging("debug")
        assert isinstance(info["error_tracker"], ErrorTrackingHandler)
        assert info["handlers_count"] == 2
        assert restore_root_logger.level == logging.DEBUG

    def test_file_handler_from_config(self, restore_root_logger, tmp_path):
        log_file = tmp_path / "logs" / "editor.log"
        config = LoggingConfig(log_file=str(log_file), enable_json_logging=True, enable_error_tracking=False)

        info = setup_logging_from_config(config)
        logging.getLogger("json_node_editor.test").warning("written to file")
        for handler in restore_root_logger.handlers:
            handler.flush()

        assert info["error_tracker"] is None
        assert json.loads(log_file.read_text(encoding="utf-8").splitlines()[0])["message"] == "written to file"


class TestErrorHandler:

    def test_patch_failure(self):
        handler = ErrorHandler()
        response = handler.categorize_error(
            PatchFailure("INCOMPATIBLE_PATH", "Cannot set item of object", {"path_label": "$[0]"})
        )
        assert isinstance(response, PatchError)
        assert response.error_type == "patch"
        assert response.path_label == "$[0]"
        assert response.suggestions
        assert handler.get_error_counts() == {"INCOMPATIBLE_PATH": 1}

    def test_session_exception(self):
        response = ErrorHandler().categorize_error(
            SessionException("INVALID_SESSION_STATE", "Cannot save while viewing", {"state": "viewing"})
        )
        assert isinstance(response, SessionError)
        assert response.state == "viewing"

    def test_validation_exception(self):
        response = ErrorHandler().categorize_error(ValidationException("invalid_path_segment", "bad"))
        assert isinstance(response, ValidationError)
        assert response.error_code == "INVALID_PATH_SEGMENT"

    def test_base_exception(self):
        response = ErrorHandler().categorize_error(NodeEditorException("OTHER", "something"))
        assert response.error_type == "processing"

    def test_pydantic_error(self):
        with pytest.raises(PydanticValidationError) as exc_info:
            Index(index=-1)
        response = ErrorHandler().categorize_error(exc_info.value)
        assert response.error_code == "VALIDATION_FAILED"
        assert "index" in response.field_errors

    def test_json_decode_error(self):
        with pytest.raises(json.JSONDecodeError) as exc_info:
            json.loads("{")
        response = ErrorHandler().categorize_error(exc_info.value)
        assert response.error_code == "INVALID_JSON"
        assert response.details["offset"] == 1

    def test_recursion_error(self):
        assert ErrorHandler().categorize_error(RecursionError()).error_code == "RESOURCE_EXHAUSTED"

    def test_generic_error(self):
        response = ErrorHandler().categorize_error(RuntimeError("boom"))
        assert response.error_code == "UNEXPECTED_ERROR"
        assert response.details["error_type"] == "RuntimeError"
