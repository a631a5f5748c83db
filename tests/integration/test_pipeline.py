"""
Integration tests running sample messages through the full routing pipeline
and on into calendar event payloads.
"""

import pytest

from diary_analyzer import parse_log_message, route_request
from diary_analyzer.calendar_events import EventBuilder, build_category_prompt
from diary_analyzer.intelligence.category_classifier import CategoryConfidence

from ..fixtures.sample_data import SAMPLE_FALLBACK_MESSAGES, SAMPLE_LOG_MESSAGES


class TestPipeline:
    """End-to-end routing of realistic messages"""

    @pytest.mark.integration
    @pytest.mark.parametrize("sample", SAMPLE_LOG_MESSAGES, ids=lambda s: s["text"])
    def test_log_messages(self, sample, now, last_event_end):
        result = route_request(sample["text"], {
            "currentTime": now,
            "lastEventEndTime": last_event_end,
        })
        output = result.to_dict()

        assert output["tier"] == 1
        assert output["method"] == "pattern"
        assert output["action"] == "log"
        assert output["data"]["title"] == sample["expected_title"]
        assert output["data"]["category"] == sample["expected_category"]
        assert output["data"]["timeSource"] == sample["expected_source"]

    @pytest.mark.integration
    @pytest.mark.parametrize("sample", SAMPLE_FALLBACK_MESSAGES, ids=lambda s: s["text"])
    def test_fallback_messages(self, sample, now):
        result = route_request(sample["text"], {"currentTime": now})

        assert result.tier == 2
        assert result.to_dict()["reason"] == sample["expected_reason"]
        assert result.original_message == sample["text"]

    @pytest.mark.integration
    @pytest.mark.parametrize("sample", SAMPLE_LOG_MESSAGES, ids=lambda s: s["text"])
    def test_resolved_entries_become_events(self, sample, now, last_event_end):
        outcome = parse_log_message(sample["text"], {
            "currentTime": now,
            "lastEventEndTime": last_event_end,
        })

        payload = EventBuilder().build_event_payload(outcome.data)

        assert payload["summary"] == sample["expected_title"]
        assert payload["calendar"].startswith("Actual Diary - ")

    @pytest.mark.integration
    def test_low_confidence_entry_gets_prompt(self, now):
        outcome = parse_log_message("log stuff", {"currentTime": now})

        assert outcome.suggest_llm_verification is True
        assert outcome.data.category_confidence == CategoryConfidence.LOW

        prompt = build_category_prompt(outcome.data.title, inferred=outcome.data.category)
        assert len(prompt["options"]) == 3
