import logging

from fastapi import HTTPException

from careercoach.api.dependencies import build_knowledge_base, to_http_error
from careercoach.config.settings import Settings
from careercoach.core.errors import QueueOverflowError, ResponseFormatError
from careercoach.core.knowledge_base import StaticKnowledgeBase


def test_mock_models_use_sample_documents():
    assert isinstance(build_knowledge_base(Settings(use_mock_models=True)), StaticKnowledgeBase)


def test_live_models_can_opt_into_sample_documents():
    settings = Settings(use_mock_models=False, use_sample_knowledge_base=True)
    assert isinstance(build_knowledge_base(settings), StaticKnowledgeBase)


def test_live_models_without_backend_log_it(caplog):
    with caplog.at_level(logging.INFO):
        knowledge_base = build_knowledge_base(Settings(use_mock_models=False))

    assert knowledge_base is None
    assert any("No similarity-search backend" in r.message for r in caplog.records)


def test_core_errors_map_to_http_status():
    assert to_http_error(ResponseFormatError("bad json")).status_code == 502
    assert to_http_error(QueueOverflowError("full")).status_code == 503
    assert isinstance(to_http_error(QueueOverflowError("full")), HTTPException)
