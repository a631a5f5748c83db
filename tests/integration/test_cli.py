"""
Integration tests for the diary-analyzer command line entry point.
"""

import json

import pytest

from diary_analyzer.cli import EXIT_CONFIG_ERROR, EXIT_LLM_HANDOFF, EXIT_PATTERN_MATCH, main


@pytest.fixture
def run_cli(temp_config_dir, clean_env, reset_logging, capsys):
    """Run the CLI against the quiet test config and return (exit code, parsed stdout)"""
    def _run(*args):
        exit_code = main([*args, "--config", str(temp_config_dir)])
        output = capsys.readouterr().out
        return exit_code, json.loads(output)
    return _run


class TestCommandLine:
    """Test suite for the command line interface"""

    @pytest.mark.integration
    def test_pattern_match(self, run_cli):
        exit_code, output = run_cli(
            "log coding from 9am to 11am",
            "--now", "2026-02-02T12:00:00Z",
            "--utc-offset", "-420",
        )

        assert exit_code == EXIT_PATTERN_MATCH
        assert output["tier"] == 1
        assert output["data"]["title"] == "Coding"
        assert output["data"]["startTime"] == "2026-02-02T16:00:00.000Z"
        assert output["data"]["endTime"] == "2026-02-02T18:00:00.000Z"

    @pytest.mark.integration
    def test_last_event_end(self, run_cli):
        exit_code, output = run_cli(
            "track meeting for 2 hours",
            "--now", "2026-02-02T12:00:00Z",
            "--last-event-end", "2026-02-02T10:00:00Z",
        )

        assert exit_code == EXIT_PATTERN_MATCH
        assert output["data"]["timeSource"] == "last_event_plus_duration"
        assert output["data"]["endTime"] == "2026-02-02T12:00:00.000Z"

    @pytest.mark.integration
    def test_llm_handoff(self, run_cli):
        exit_code, output = run_cli("how was my day yesterday?")

        assert exit_code == EXIT_LLM_HANDOFF
        assert output == {
            "tier": 2,
            "method": "llm",
            "reason": "not_log_request",
            "originalMessage": "how was my day yesterday?",
            "partialData": None,
        }

    @pytest.mark.integration
    def test_default_offset_from_config(self, run_cli, temp_config_dir, clean_env):
        clean_env.setenv("DIARY_PARSER_DEFAULT_UTC_OFFSET_MINUTES", "-420")

        _, output = run_cli("log coding from 9am to 11am", "--now", "2026-02-02T12:00:00Z")

        assert output["data"]["startTime"] == "2026-02-02T16:00:00.000Z"

    @pytest.mark.integration
    def test_log_level_option(self, run_cli):
        exit_code, _ = run_cli("log lunch", "--log-level", "ERROR")

        assert exit_code == EXIT_PATTERN_MATCH

    @pytest.mark.integration
    def test_config_error(self, tmp_path, clean_env, reset_logging, capsys):
        (tmp_path / "default_config.yaml").write_text("parser: [broken\n")

        exit_code = main(["log lunch", "--config", str(tmp_path)])

        assert exit_code == EXIT_CONFIG_ERROR
        assert "Configuration error" in capsys.readouterr().err
